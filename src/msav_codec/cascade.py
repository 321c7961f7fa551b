"""Format detection cascade.

Parsers are tried in a fixed order and the first success wins. A buffer can
satisfy more than one size rule (204 bytes is both 4+40*5 and 12+12*16),
so the order decides, not the size.
"""
from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Callable

from msav_core.errors import SaveFormatError, FormatDetectionError

from .profile import parse_profile, build_profile
from .variants import (
    parse_mr_profile,
    build_mr_profile,
    parse_mr_times,
    build_mr_times,
    parse_mr_seg0,
    build_mr_seg0,
)

log = logging.getLogger(__name__)

FMT_MISSION = "mission"
FMT_PROFILE = "profile"
FMT_MR_PROFILE = "mr_profile"
FMT_MR_TIMES = "mr_times"
FMT_MR_SEG0 = "mr_seg0"

CASCADE_ORDER = (FMT_MISSION, FMT_PROFILE, FMT_MR_PROFILE, FMT_MR_TIMES, FMT_MR_SEG0)

_PARSERS: dict[str, Callable[[bytes], Any]] = {
    FMT_PROFILE: parse_profile,
    FMT_MR_PROFILE: parse_mr_profile,
    FMT_MR_TIMES: parse_mr_times,
    FMT_MR_SEG0: parse_mr_seg0,
}

_BUILDERS: dict[str, Callable[[Any], bytes]] = {
    FMT_PROFILE: build_profile,
    FMT_MR_PROFILE: build_mr_profile,
    FMT_MR_TIMES: build_mr_times,
    FMT_MR_SEG0: build_mr_seg0,
}


@dataclass
class DetectedSave:
    format: str
    data: Any


def _mission_unavailable(raw: bytes):
    raise SaveFormatError("E_NO_CANDIDATE", "mission-save parser not available")


def detect_format(raw: bytes, mission_parser: Callable[[bytes], Any] | None = None) -> DetectedSave:
    """Parse `raw` with the first format that accepts it.

    `mission_parser` is the external segment-container parser. It must raise
    SaveFormatError (or ValueError) on rejection.
    """
    attempts: list[tuple[str, SaveFormatError]] = []
    for fmt in CASCADE_ORDER:
        parser = _PARSERS.get(fmt) or mission_parser or _mission_unavailable
        try:
            data = parser(raw)
        except SaveFormatError as e:
            attempts.append((fmt, e))
            log.debug("cascade: %s rejected %d bytes: %s", fmt, len(raw), e.detail)
            continue
        except ValueError as e:
            attempts.append((fmt, SaveFormatError("E_NO_CANDIDATE", str(e))))
            log.debug("cascade: %s rejected %d bytes: %s", fmt, len(raw), e)
            continue
        log.debug("cascade: accepted as %s", fmt)
        return DetectedSave(fmt, data)
    raise FormatDetectionError(attempts)


def build_detected(detected: DetectedSave, mission_builder: Callable[[Any], bytes] | None = None) -> bytes:
    """Serialize `detected` with the codec that parsed it."""
    if detected.format == FMT_MISSION:
        if mission_builder is None:
            raise SaveFormatError("E_NO_CANDIDATE", "mission-save builder not available")
        return mission_builder(detected.data)
    return _BUILDERS[detected.format](detected.data)


def probe_formats(raw: bytes, mission_parser: Callable[[bytes], Any] | None = None) -> dict:
    """Cascade result as a report dict."""
    content_hash = hashlib.sha256(raw).hexdigest()
    try:
        detected = detect_format(raw, mission_parser)
    except FormatDetectionError as e:
        errors = [dict(err.as_dict(), format=fmt) for fmt, err in e.attempts]
        return {"status": "FAIL", "size": len(raw), "content_hash": content_hash, "error_count": len(errors), "errors": errors}
    return {"status": "PASS", "format": detected.format, "size": len(raw), "content_hash": content_hash, "error_count": 0, "errors": []}
