"""Locate the inventory block inside a human actor payload.

After the fixed human block come two name chunks, each an 8-byte header
(u32 name length first) followed by the name. The inventory follows them.
"""
from __future__ import annotations

import logging

from msav_core.binio import read_u32_le
from msav_core.protocol import (
    HUMAN_CORE_END,
    HUMAN_NAME_CHUNKS,
    HUMAN_CHUNK_HEADER_LEN,
    HUMAN_CHUNK_MAX_NAME,
    HUMAN_INVENTORY_LEN,
)

log = logging.getLogger(__name__)


def find_human_inventory_offset(payload: bytes) -> int | None:
    """Offset of the 196-byte inventory block, or None."""
    size = len(payload)
    cur = HUMAN_CORE_END
    for _ in range(HUMAN_NAME_CHUNKS):
        if cur + HUMAN_CHUNK_HEADER_LEN > size:
            log.debug("inventory: chunk header at %d overruns %d bytes", cur, size)
            return None
        name_len = read_u32_le(payload, cur)
        if name_len > HUMAN_CHUNK_MAX_NAME:
            log.debug("inventory: name length %d at %d over limit", name_len, cur)
            return None
        nxt = cur + HUMAN_CHUNK_HEADER_LEN + name_len
        if nxt > size:
            log.debug("inventory: chunk at %d overruns %d bytes", cur, size)
            return None
        cur = nxt

    if size - cur < HUMAN_INVENTORY_LEN:
        return None
    return cur
