"""MSAV Core - Shared layout constants, byte helpers and error types."""
from .binio import read_u32_le, write_u32_le, read_u16_le, read_cstr
from .container import Segment, SaveData, NO_INDEX
from .errors import ERRORS, SaveFormatError, FormatDetectionError, CatalogError

__all__ = [
    "read_u32_le",
    "write_u32_le",
    "read_u16_le",
    "read_cstr",
    "Segment",
    "SaveData",
    "NO_INDEX",
    "ERRORS",
    "SaveFormatError",
    "FormatDetectionError",
    "CatalogError",
]
