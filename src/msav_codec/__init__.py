"""MSAV Codec - Save file ciphers, codecs and format detection."""
from .cipher import CipherState, decrypt, encrypt
from .profile import ProfileSaveData, parse_profile, build_profile
from .variants import (
    MrProfileSaveData,
    MrTimesRecord,
    MrTimesSaveData,
    MrSeg0Point,
    MrSeg0SaveData,
    parse_mr_profile,
    build_mr_profile,
    parse_mr_times,
    build_mr_times,
    parse_mr_seg0,
    build_mr_seg0,
)
from .cascade import DetectedSave, detect_format, build_detected

__all__ = [
    "CipherState",
    "decrypt",
    "encrypt",
    "ProfileSaveData",
    "parse_profile",
    "build_profile",
    "MrProfileSaveData",
    "MrTimesRecord",
    "MrTimesSaveData",
    "MrSeg0Point",
    "MrSeg0SaveData",
    "parse_mr_profile",
    "build_mr_profile",
    "parse_mr_times",
    "build_mr_times",
    "parse_mr_seg0",
    "build_mr_seg0",
    "DetectedSave",
    "detect_format",
    "build_detected",
]
