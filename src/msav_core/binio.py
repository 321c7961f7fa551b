"""MSAV Core - Little-endian field access."""
from __future__ import annotations

import struct

_U32 = struct.Struct("<I")
_U16 = struct.Struct("<H")


def read_u32_le(buf: bytes, off: int) -> int:
    """Read an unsigned 32-bit value at `off`."""
    return _U32.unpack_from(buf, off)[0]


def write_u32_le(buf: bytearray, off: int, value: int) -> None:
    """Write `value` modulo 2^32 at `off`."""
    _U32.pack_into(buf, off, value & 0xFFFFFFFF)


def read_u16_le(buf: bytes, off: int) -> int:
    return _U16.unpack_from(buf, off)[0]


def read_cstr(buf: bytes, off: int, size: int) -> bytes:
    """Return the bytes of a NUL-terminated field of at most `size` bytes."""
    raw = bytes(buf[off:off + size])
    end = raw.find(b"\x00")
    return raw if end == -1 else raw[:end]
