"""Word cipher for profile saves.

Symmetric stream transform over little-endian u32 words. Only the largest
prefix whose length is a multiple of 4 is touched; a 1-3 byte tail is left
as-is. Decrypt and encrypt update `key2` at different points; both orders
are needed for encrypt(decrypt(x)) == x.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass

from msav_core.protocol import CIPHER_SEED_KEY1, CIPHER_SEED_KEY2, U32_MASK

_WORD = struct.Struct("<I")


@dataclass
class CipherState:
    key1: int = CIPHER_SEED_KEY1
    key2: int = CIPHER_SEED_KEY2

    @classmethod
    def fresh(cls) -> "CipherState":
        return cls()


def decrypt(buf: bytearray, state: CipherState) -> None:
    """Decrypt `buf` in place, advancing `state`."""
    key1, key2 = state.key1, state.key2
    for off in range(0, len(buf) - len(buf) % 4, 4):
        plain = key1 ^ _WORD.unpack_from(buf, off)[0]
        _WORD.pack_into(buf, off, plain)
        key2 = (key2 + plain) & U32_MASK
        key1 = (key1 + key2) & U32_MASK
    state.key1, state.key2 = key1, key2


def encrypt(buf: bytearray, state: CipherState) -> None:
    """Encrypt `buf` in place, advancing `state`."""
    key1, key2 = state.key1, state.key2
    for off in range(0, len(buf) - len(buf) % 4, 4):
        plain = _WORD.unpack_from(buf, off)[0]
        key2 = (key2 + plain) & U32_MASK
        _WORD.pack_into(buf, off, plain ^ key1)
        key1 = (key1 + key2) & U32_MASK
    state.key1, state.key2 = key1, key2


def decrypt_bytes(data: bytes, state: CipherState | None = None) -> bytes:
    buf = bytearray(data)
    decrypt(buf, state if state is not None else CipherState.fresh())
    return bytes(buf)


def encrypt_bytes(data: bytes, state: CipherState | None = None) -> bytes:
    buf = bytearray(data)
    encrypt(buf, state if state is not None else CipherState.fresh())
    return bytes(buf)
