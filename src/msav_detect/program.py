"""Script program block locator.

Program block layout (relative to the marker byte):
--------------------------------------------------
| Offset | Size          | Field                               |
|--------|---------------|-------------------------------------|
| 0      | 1             | marker (2)                          |
| 17     | 2             | register count (u16, <= 4096)       |
| 19     | 4             | variable count (u32, <= 8192)       |
| 23     | 4             | frame count (u32, <= 2048)          |
| 27     | 4             | actor count (u32, <= 2048)          |
| 39     | regs * 2      | register table                      |
| ...    | vars * 4      | float variables                     |
| ...    | actors * var  | [name_len u32 | u32 | name]         |
| ...    | frames * var  | [name_len u16 | name]               |

The marker byte is not unique, so every occurrence in every candidate
segment is probed and the structurally valid hits are ranked.
"""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Iterator, Sequence

from msav_core.binio import read_u16_le, read_u32_le
from msav_core.container import NO_INDEX, SaveData, Segment
from msav_core.errors import SaveFormatError
from msav_core.protocol import (
    PROGRAM_MARKER,
    PROGRAM_HEADER_LEN,
    PROGRAM_REG_COUNT_OFF,
    PROGRAM_VAR_COUNT_OFF,
    PROGRAM_FRAME_COUNT_OFF,
    PROGRAM_ACTOR_COUNT_OFF,
    PROGRAM_MAX_REGS,
    PROGRAM_MAX_VARS,
    PROGRAM_MAX_FRAMES,
    PROGRAM_MAX_ACTORS,
    PROGRAM_ACTOR_HEADER_LEN,
    PROGRAM_MAX_ACTOR_NAME,
    PROGRAM_FRAME_HEADER_LEN,
)

log = logging.getLogger(__name__)

_MARKER = bytes([PROGRAM_MARKER])


@dataclass(frozen=True)
class ProgramLayout:
    base_off: int
    vars_off: int
    reg_count: int
    var_count: int
    frame_count: int
    actor_count: int
    actors_off: int
    frames_off: int
    end_off: int


@dataclass(frozen=True)
class ProgramLocation:
    segment_index: int
    segment_name: str
    is_game_payload: bool
    layout: ProgramLayout

    def to_dict(self) -> dict:
        lay = self.layout
        return {
            "segment_index": self.segment_index,
            "segment_name": self.segment_name,
            "is_game_payload": self.is_game_payload,
            "base_off": lay.base_off,
            "vars_off": lay.vars_off,
            "reg_count": lay.reg_count,
            "var_count": lay.var_count,
            "frame_count": lay.frame_count,
            "actor_count": lay.actor_count,
        }


def parse_program_at(buf: bytes, off: int) -> ProgramLayout | None:
    """Validate a program block whose marker sits at `off`."""
    size = len(buf)
    if off + PROGRAM_HEADER_LEN > size or buf[off] != PROGRAM_MARKER:
        return None

    reg_count = read_u16_le(buf, off + PROGRAM_REG_COUNT_OFF)
    var_count = read_u32_le(buf, off + PROGRAM_VAR_COUNT_OFF)
    frame_count = read_u32_le(buf, off + PROGRAM_FRAME_COUNT_OFF)
    actor_count = read_u32_le(buf, off + PROGRAM_ACTOR_COUNT_OFF)
    if (
        reg_count > PROGRAM_MAX_REGS
        or var_count > PROGRAM_MAX_VARS
        or frame_count > PROGRAM_MAX_FRAMES
        or actor_count > PROGRAM_MAX_ACTORS
    ):
        return None

    cur = off + PROGRAM_HEADER_LEN + reg_count * 2
    vars_off = cur
    cur += var_count * 4
    if cur > size:
        return None

    actors_off = cur
    for _ in range(actor_count):
        if cur + PROGRAM_ACTOR_HEADER_LEN > size:
            return None
        name_len = read_u32_le(buf, cur)
        if name_len > PROGRAM_MAX_ACTOR_NAME:
            return None
        cur += PROGRAM_ACTOR_HEADER_LEN + name_len
        if cur > size:
            return None

    frames_off = cur
    for _ in range(frame_count):
        if cur + PROGRAM_FRAME_HEADER_LEN > size:
            return None
        cur += PROGRAM_FRAME_HEADER_LEN + read_u16_le(buf, cur)
        if cur > size:
            return None

    return ProgramLayout(off, vars_off, reg_count, var_count, frame_count, actor_count, actors_off, frames_off, cur)


def scan_program(buf: bytes) -> Iterator[ProgramLayout]:
    """Every structurally valid program block in `buf`, by offset."""
    pos = buf.find(_MARKER)
    while pos != -1:
        layout = parse_program_at(buf, pos)
        if layout is not None:
            yield layout
        pos = buf.find(_MARKER, pos + 1)


def compare_candidates(a: ProgramLocation, b: ProgramLocation) -> int:
    """Positive when `a` ranks above `b`.

    1. any variables beat none
    2. more variables
    3. more actors
    4. more frames
    5. the game payload segment
    """
    la, lb = a.layout, b.layout
    for ka, kb in (
        (la.var_count > 0, lb.var_count > 0),
        (la.var_count, lb.var_count),
        (la.actor_count, lb.actor_count),
        (la.frame_count, lb.frame_count),
        (a.is_game_payload, b.is_game_payload),
    ):
        if ka != kb:
            return 1 if ka > kb else -1
    return 0


def program_candidates(save: SaveData) -> list[tuple[int, Segment]]:
    """Game payload, AI segments, then any other "...payload" segment."""
    picked: list[int] = []
    for idx in (save.idx_game_payload, save.idx_ai_groups, save.idx_ai_follow):
        if save.segment(idx) is not None and idx not in picked:
            picked.append(idx)
    for idx, seg in enumerate(save.segments):
        if idx not in picked and seg.name.lower().endswith("payload"):
            picked.append(idx)
    return [(idx, save.segments[idx]) for idx in picked]


def detect_program(
    candidates: Iterable[tuple[int, Segment]],
    game_payload_index: int = NO_INDEX,
) -> ProgramLocation | None:
    """Best program block across all candidate segments, or None."""
    best: ProgramLocation | None = None
    for idx, seg in candidates:
        for layout in scan_program(seg.plain):
            cand = ProgramLocation(idx, seg.name, idx == game_payload_index, layout)
            if best is None or compare_candidates(cand, best) > 0:
                best = cand
    if best is not None:
        log.debug("program: %s@%d vars=%d actors=%d frames=%d", best.segment_name, best.layout.base_off,
                  best.layout.var_count, best.layout.actor_count, best.layout.frame_count)
    return best


def detect_program_in_save(save: SaveData) -> ProgramLocation | None:
    return detect_program(program_candidates(save), save.idx_game_payload)


def rank_candidates(locations: Sequence[ProgramLocation]) -> list[ProgramLocation]:
    """Best first."""
    return sorted(locations, key=cmp_to_key(compare_candidates), reverse=True)


def read_program_vars(buf: bytes, layout: ProgramLayout) -> list[float]:
    return list(struct.unpack_from(f"<{layout.var_count}f", buf, layout.vars_off))


def write_program_var(buf: bytes, layout: ProgramLayout, index: int, value: float) -> bytes:
    if not 0 <= index < layout.var_count:
        raise SaveFormatError("E_OVERRUN", f"variable {index} outside 0..{layout.var_count - 1}")
    out = bytearray(buf)
    struct.pack_into("<f", out, layout.vars_off + index * 4, value)
    return bytes(out)


def read_program_names(buf: bytes, layout: ProgramLayout) -> tuple[list[str], list[str]]:
    """Actor names and frame names, in table order."""
    actors: list[str] = []
    cur = layout.actors_off
    for _ in range(layout.actor_count):
        n = read_u32_le(buf, cur)
        start = cur + PROGRAM_ACTOR_HEADER_LEN
        actors.append(bytes(buf[start:start + n]).split(b"\x00", 1)[0].decode("latin-1"))
        cur = start + n
    frames: list[str] = []
    for _ in range(layout.frame_count):
        n = read_u16_le(buf, cur)
        start = cur + PROGRAM_FRAME_HEADER_LEN
        frames.append(bytes(buf[start:start + n]).split(b"\x00", 1)[0].decode("latin-1"))
        cur = start + n
    return actors, frames
