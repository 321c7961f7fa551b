"""Profile save codec.

File Structure:
--------------
| Block    | Offset | Size | Encrypted |
|----------|--------|------|-----------|
| Header   | 0x0000 | 24   | no        |
| Core     | 0x0018 | 84   | yes       |
| Block720 | 0x006C | 720  | yes       |
| Block92  | 0x033C | 92   | yes       |
| Block156 | 0x0398 | 156  | yes       |

The four encrypted blocks share one cipher state that keeps evolving from
block to block. Header and core both start with magic "forP" and version 1.
"""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field

from msav_core.errors import SaveFormatError
from msav_core.protocol import (
    PROFILE_MAGIC,
    PROFILE_VERSION,
    PROFILE_HEADER_LEN,
    PROFILE_HEADER_VERSION_OFF,
    PROFILE_CORE_LEN,
    PROFILE_BLOCK720_LEN,
    PROFILE_BLOCK92_LEN,
    PROFILE_BLOCK156_LEN,
    PROFILE_FILE_LEN,
)
from msav_core.binio import read_u32_le, write_u32_le

from .cipher import CipherState, decrypt, encrypt

log = logging.getLogger(__name__)

BLOCKS = (
    ("core", PROFILE_CORE_LEN),
    ("block720", PROFILE_BLOCK720_LEN),
    ("block92", PROFILE_BLOCK92_LEN),
    ("block156", PROFILE_BLOCK156_LEN),
)


@dataclass
class ProfileSaveData:
    file_header: bytes = bytes(PROFILE_HEADER_LEN)
    core: bytes = bytes(PROFILE_CORE_LEN)
    block720: bytes = bytes(PROFILE_BLOCK720_LEN)
    block92: bytes = bytes(PROFILE_BLOCK92_LEN)
    block156: bytes = bytes(PROFILE_BLOCK156_LEN)
    raw_size: int = field(default=PROFILE_FILE_LEN, compare=False)


def _check_magic(buf: bytes, version_off: int) -> bool:
    return read_u32_le(buf, 0) == PROFILE_MAGIC and read_u32_le(buf, version_off) == PROFILE_VERSION


def parse_profile(raw: bytes) -> ProfileSaveData:
    """Split and decrypt a profile save. Raises SaveFormatError."""
    if len(raw) != PROFILE_FILE_LEN:
        raise SaveFormatError("E_SIZE", f"unexpected profile size {len(raw)}, expected {PROFILE_FILE_LEN}")

    header = bytes(raw[:PROFILE_HEADER_LEN])
    state = CipherState.fresh()
    cur = PROFILE_HEADER_LEN
    plain: dict[str, bytes] = {}
    for name, size in BLOCKS:
        buf = bytearray(raw[cur:cur + size])
        decrypt(buf, state)
        plain[name] = bytes(buf)
        cur += size

    if not _check_magic(header, PROFILE_HEADER_VERSION_OFF):
        raise SaveFormatError("E_MAGIC", "invalid profile file header (expected forP/version 1)")
    if not _check_magic(plain["core"], 4):
        raise SaveFormatError("E_MAGIC", "invalid decrypted core block (forP/version 1 mismatch)")

    log.debug("profile parsed: cipher state after blocks key1=%08x key2=%08x", state.key1, state.key2)
    return ProfileSaveData(file_header=header, raw_size=len(raw), **plain)


def build_profile(save: ProfileSaveData) -> bytes:
    """Re-encrypt a profile save. Output is always PROFILE_FILE_LEN bytes."""
    if len(save.file_header) != PROFILE_HEADER_LEN:
        raise SaveFormatError("E_BLOCK_SIZE", f"profile header is {len(save.file_header)} bytes, expected {PROFILE_HEADER_LEN}")
    for name, size in BLOCKS:
        got = len(getattr(save, name))
        if got != size:
            raise SaveFormatError("E_BLOCK_SIZE", f"profile {name} is {got} bytes, expected {size}")

    out = bytearray(save.file_header)
    state = CipherState.fresh()
    for name, _size in BLOCKS:
        buf = bytearray(getattr(save, name))
        encrypt(buf, state)
        out += buf
    return bytes(out)


def new_profile() -> ProfileSaveData:
    """Blank profile that passes the header and core checks."""
    header = bytearray(PROFILE_HEADER_LEN)
    write_u32_le(header, 0, PROFILE_MAGIC)
    write_u32_le(header, PROFILE_HEADER_VERSION_OFF, PROFILE_VERSION)
    core = bytearray(PROFILE_CORE_LEN)
    write_u32_le(core, 0, PROFILE_MAGIC)
    write_u32_le(core, 4, PROFILE_VERSION)
    return ProfileSaveData(file_header=bytes(header), core=bytes(core))


def profile_words(block: bytes) -> tuple[int, ...]:
    """View a decrypted block as u32 words."""
    return struct.unpack(f"<{len(block) // 4}I", block[: len(block) - len(block) % 4])
