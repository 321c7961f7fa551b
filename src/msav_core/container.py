"""Interface consumed from the mission-save segment container.

The container format itself lives outside this package. Anything that
exposes named segments and the well-known indices below can be handed to
the detectors.
"""
from __future__ import annotations

from dataclasses import dataclass, field

NO_INDEX = -1


@dataclass
class Segment:
    name: str
    plain: bytes


@dataclass
class SaveData:
    segments: list[Segment] = field(default_factory=list)
    idx_meta: int = NO_INDEX
    idx_info: int = NO_INDEX
    idx_game_payload: int = NO_INDEX
    idx_ai_groups: int = NO_INDEX
    idx_ai_follow: int = NO_INDEX

    def segment(self, idx: int) -> Segment | None:
        if idx == NO_INDEX or not 0 <= idx < len(self.segments):
            return None
        return self.segments[idx]
