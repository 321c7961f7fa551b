"""Editor session: the one place that holds mutable editing state.

Codecs stay pure; the session owns the loaded file, the parsed structure and
the current selection, and only touches disk after a build succeeds.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from .cascade import DetectedSave, detect_format, build_detected

log = logging.getLogger(__name__)


class EditorSession:
    def __init__(
        self,
        mission_parser: Callable[[bytes], Any] | None = None,
        mission_builder: Callable[[Any], bytes] | None = None,
    ):
        self.mission_parser = mission_parser
        self.mission_builder = mission_builder
        self.path: Path | None = None
        self.original: bytes = b""
        self.detected: DetectedSave | None = None
        self.selected_segment: int = -1
        self.selected_record: int = -1
        self.dirty = False

    @property
    def format(self) -> str | None:
        return self.detected.format if self.detected else None

    @property
    def data(self) -> Any:
        return self.detected.data if self.detected else None

    def load(self, path: Path) -> DetectedSave:
        """Read and detect `path`. On failure the session is left unchanged."""
        path = Path(path)
        raw = path.read_bytes()
        detected = detect_format(raw, self.mission_parser)

        self.path = path
        self.original = raw
        self.detected = detected
        self.selected_segment = -1
        self.selected_record = -1
        self.dirty = False
        log.info("loaded %s as %s (%d bytes)", path, detected.format, len(raw))
        return detected

    def select(self, segment: int | None = None, record: int | None = None) -> tuple[int, int]:
        """Set the current segment and/or record. -1 clears; out of range raises IndexError."""
        if self.detected is None:
            raise RuntimeError("no save loaded")
        if segment is not None:
            self.selected_segment = _checked_index(segment, len(getattr(self.data, "segments", ())), "segment")
        if record is not None:
            self.selected_record = _checked_index(record, _record_count(self.data), "record")
        return self.selected_segment, self.selected_record

    def mark_dirty(self) -> None:
        self.dirty = True

    def build(self) -> bytes:
        if self.detected is None:
            raise RuntimeError("no save loaded")
        return build_detected(self.detected, self.mission_builder)

    def save(self, path: Path | None = None) -> Path:
        """Build and write. Nothing is written if the build fails."""
        out = self.build()
        target = Path(path) if path is not None else self.path
        if target is None:
            raise RuntimeError("no target path")
        target.write_bytes(out)
        self.path = target
        self.original = out
        self.dirty = False
        log.info("saved %s (%d bytes)", target, len(out))
        return target


def _record_count(data: Any) -> int:
    for attr in ("records", "points", "words"):
        items = getattr(data, attr, None)
        if items is not None:
            return len(items)
    return 0


def _checked_index(idx: int, count: int, what: str) -> int:
    if idx != -1 and not 0 <= idx < count:
        raise IndexError(f"{what} {idx} out of range (have {count})")
    return idx
