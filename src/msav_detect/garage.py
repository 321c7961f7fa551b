"""Garage car catalog parser.

Record layout (168 bytes):
-------------------------
| Offset | Size | Field                     |
|--------|------|---------------------------|
| 0      | 32   | code (NUL terminated)     |
| 32     | 32   | model file (*.i3d)        |
| 64     | 32   | shadow model (*.i3d)      |
| 96     | 32   | display name              |
| 132    | 4    | race mask                 |
| 136    | 4    | championship mask         |
| 160    | 4    | freeride mask             |

Strategy A reads the file as fixed records. Strategy B ignores the record
grid and pairs up runs of printable ASCII four at a time. If neither yields
at least 20 cars the embedded table is used.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Iterable, Sequence
from warnings import warn

from msav_core.binio import read_u32_le, read_cstr
from msav_core.errors import CatalogError, SaveFormatError
from msav_core.protocol import (
    GARAGE_REC_LEN,
    GARAGE_FIELD_LEN,
    GARAGE_CODE_OFF,
    GARAGE_MODEL_OFF,
    GARAGE_SHADOW_OFF,
    GARAGE_NAME_OFF,
    GARAGE_RACE_MASK_OFF,
    GARAGE_CHAMP_MASK_OFF,
    GARAGE_FREERIDE_MASK_OFF,
    GARAGE_MIN_ENTRIES,
    GARAGE_MIN_RUN,
    GARAGE_WINDOW,
    DEFAULT_CATALOG_PATHS,
)

from .garage_table import EMBEDDED_CARS

log = logging.getLogger(__name__)

CODE_RE = re.compile(r"[A-Za-z0-9_]{3,24}")
MODEL_RE = re.compile(r"[\x21-\x7e][\x20-\x7e]{0,58}\.i3d", re.IGNORECASE)
NAME_RE = re.compile(r"[A-Za-z0-9 \-.'\x80-\xff]{3,64}")
PRINTABLE_RUN_RE = re.compile(rb"[\x20-\x7e]{%d,}" % GARAGE_MIN_RUN)


@dataclass(frozen=True)
class GarageCarCatalogEntry:
    index: int
    code: str
    model: str
    shadow: str
    display_name: str
    race_mask: int = 0
    champ_mask: int = 0
    freeride_mask: int = 0
    masks_known: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def is_code(s: str) -> bool:
    return CODE_RE.fullmatch(s) is not None


def is_model(s: str) -> bool:
    return MODEL_RE.fullmatch(s) is not None


def is_display_name(s: str) -> bool:
    return NAME_RE.fullmatch(s) is not None


def _accept(code: str, model: str, shadow: str, name: str) -> bool:
    return is_code(code) and is_model(model) and is_model(shadow) and is_display_name(name)


def _field(rec: bytes, off: int) -> str:
    return read_cstr(rec, off, GARAGE_FIELD_LEN).decode("latin-1")


def parse_fixed_records(data: bytes) -> list[GarageCarCatalogEntry]:
    """Strategy A: 168-byte records. Raises CatalogError."""
    if not data or len(data) % GARAGE_REC_LEN:
        raise CatalogError("E_SIZE", f"catalog size {len(data)} is not a multiple of {GARAGE_REC_LEN}")
    count = len(data) // GARAGE_REC_LEN
    if count < GARAGE_MIN_ENTRIES:
        raise CatalogError("E_SIZE", f"catalog holds {count} records, need at least {GARAGE_MIN_ENTRIES}")

    entries: list[GarageCarCatalogEntry] = []
    skipped = 0
    for i in range(count):
        rec = data[i * GARAGE_REC_LEN:(i + 1) * GARAGE_REC_LEN]
        code, model, shadow, name = (
            _field(rec, GARAGE_CODE_OFF),
            _field(rec, GARAGE_MODEL_OFF),
            _field(rec, GARAGE_SHADOW_OFF),
            _field(rec, GARAGE_NAME_OFF),
        )
        if not _accept(code, model, shadow, name):
            skipped += 1
            log.debug("catalog: record %d rejected (%r, %r, %r, %r)", i, code, model, shadow, name)
            continue
        entries.append(GarageCarCatalogEntry(
            index=i,
            code=code,
            model=model,
            shadow=shadow,
            display_name=name,
            race_mask=read_u32_le(rec, GARAGE_RACE_MASK_OFF),
            champ_mask=read_u32_le(rec, GARAGE_CHAMP_MASK_OFF),
            freeride_mask=read_u32_le(rec, GARAGE_FREERIDE_MASK_OFF),
            masks_known=True,
        ))

    if len(entries) < GARAGE_MIN_ENTRIES:
        raise CatalogError("E_NO_CANDIDATE", f"only {len(entries)} of {count} records valid ({skipped} skipped)")
    return entries


def printable_runs(data: bytes) -> list[str]:
    return [m.group().decode("ascii") for m in PRINTABLE_RUN_RE.finditer(data)]


def parse_string_runs(data: bytes) -> list[GarageCarCatalogEntry]:
    """Strategy B: sliding window over printable ASCII runs. Raises CatalogError."""
    runs = printable_runs(data)
    entries: list[GarageCarCatalogEntry] = []
    i = 0
    while i + GARAGE_WINDOW <= len(runs):
        code, model, shadow, name = runs[i:i + GARAGE_WINDOW]
        if _accept(code, model, shadow, name):
            entries.append(GarageCarCatalogEntry(len(entries), code, model, shadow, name))
            i += GARAGE_WINDOW
        else:
            i += 1
    if len(entries) < GARAGE_MIN_ENTRIES:
        raise CatalogError("E_NO_CANDIDATE", f"string scan found {len(entries)} cars in {len(runs)} runs, need {GARAGE_MIN_ENTRIES}")
    return entries


def parse_garage_catalog(data: bytes) -> list[GarageCarCatalogEntry]:
    """Fixed records first, string runs second. Raises CatalogError."""
    reasons = []
    for strategy in (parse_fixed_records, parse_string_runs):
        try:
            entries = strategy(data)
        except CatalogError as e:
            reasons.append(f"{strategy.__name__}: {e.detail}")
            continue
        log.debug("catalog: %s gave %d cars", strategy.__name__, len(entries))
        return entries
    raise CatalogError("E_NO_CANDIDATE", "; ".join(reasons))


def catalog_search_paths(game_dir: Path | None = None, extra: Sequence[Path] = ()) -> list[Path]:
    """Explicit files first, then the default names under the game directory."""
    paths = [Path(p) for p in extra]
    root = game_dir if game_dir is not None else os.environ.get("MSAV_GAME_DIR")
    if root:
        paths += [Path(root) / rel for rel in DEFAULT_CATALOG_PATHS]
    return paths


def load_garage_catalog(candidates: Iterable[Path]) -> tuple[list[GarageCarCatalogEntry], str]:
    """Parse the first catalog file that yields cars.

    Returns (entries, source) where source is the file path or "embedded".
    """
    for p in candidates:
        p = Path(p)
        if not p.is_file():
            continue
        try:
            return parse_garage_catalog(p.read_bytes()), str(p)
        except SaveFormatError as e:
            log.warning("catalog %s unusable: %s", p, e.detail)
    warn("No usable garage catalog found. Using embedded table.")
    return embedded_garage_catalog(), "embedded"


def embedded_garage_catalog() -> list[GarageCarCatalogEntry]:
    """Built-in table used when no catalog file parses."""
    return [
        GarageCarCatalogEntry(i, code, model, shadow, name, race, 0, freeride, True)
        for i, (code, model, shadow, name, race, freeride) in enumerate(EMBEDDED_CARS)
    ]
