"""Actor payload layout detection.

Layout of an actor payload:
--------------------------
| Offset | Field                                  |
|--------|----------------------------------------|
| 0      | marker (3 = actor payload)             |
| 1..12  | base fields                            |
| 13     | subtype (6 = human, 9 = car)           |
| 14..   | subtype body, fields gated by length   |

Field groups are declared as (min_len, group, fields) gates and evaluated in
order. A wider payload only ever adds groups. Groups that do not fit are
reported as unsupported, never zero-filled.
"""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from msav_core.errors import SaveFormatError
from msav_core.protocol import (
    ACTOR_MARKER,
    ACTOR_BASE_MIN_LEN,
    ACTOR_SUBTYPE_OFF,
    SUBTYPE_HUMAN,
    SUBTYPE_CAR,
    HUMAN_MIN_LEN,
    CAR_MIN_LEN,
    HUMAN_HEALTH_OFF,
    HUMAN_MAX_HEALTH_OFF,
    HUMAN_PROPS_CUR_OFF,
    HUMAN_PROPS_INIT_OFF,
    HUMAN_PROPS_COUNT,
    HUMAN_PROPS_LEN,
    HUMAN_INVENTORY_LEN,
    CAR_ENGINE_NORM_OFF,
    CAR_ENGINE_CALC_OFF,
    CAR_FLOW_OFF,
    CAR_SPEED_LIMIT_OFF,
    CAR_LAST_GEAR_OFF,
    CAR_GEAR_OFF,
    CAR_GEARBOX_FLAG_OFF,
    CAR_DISABLE_ENGINE_OFF,
    CAR_ENGINE_ON_OFF,
    CAR_IS_ENGINE_ON_OFF,
    CAR_FUEL_OFF,
    CAR_ODOMETER_OFF,
)

from .inventory import find_human_inventory_offset

log = logging.getLogger(__name__)

KIND_HUMAN = "human"
KIND_CAR = "car"
KIND_BASE = "base"
KIND_UNKNOWN = "unknown"

HUMAN_PROPERTY_NAMES = (
    "strength",
    "health",
    "health_hand_l",
    "health_hand_r",
    "health_leg_l",
    "health_leg_r",
    "reaction_offset",
    "speed",
    "aggressivity",
    "intelligence",
    "shooting",
    "sight",
    "hearing",
    "driving",
    "mass",
    "morale",
)


@dataclass(frozen=True)
class FieldSpec:
    offset: int
    fmt: str

    @property
    def size(self) -> int:
        return struct.calcsize(self.fmt)


@dataclass(frozen=True)
class Gate:
    min_len: int
    group: str
    fields: Mapping[str, FieldSpec]


BASE_GATE = Gate(ACTOR_BASE_MIN_LEN, "base", {
    "state": FieldSpec(1, "<I"),
    "id": FieldSpec(5, "<I"),
    "active": FieldSpec(9, "<B"),
    "remove": FieldSpec(10, "<B"),
    "frame_flag": FieldSpec(11, "<H"),
})

HUMAN_GATES = (
    Gate(HUMAN_MIN_LEN, "human_transform", {
        "position": FieldSpec(14, "<3f"),
        "direction": FieldSpec(26, "<3f"),
        "animation_id": FieldSpec(38, "<I"),
    }),
    Gate(66, "human_stance", {
        "seat_id": FieldSpec(42, "<I"),
        "crouching": FieldSpec(46, "<B"),
        "aiming": FieldSpec(47, "<B"),
        "shoot_target": FieldSpec(54, "<3f"),
    }),
    Gate(HUMAN_MAX_HEALTH_OFF + 4, "human_health", {
        "health": FieldSpec(HUMAN_HEALTH_OFF, "<f"),
        "max_health": FieldSpec(HUMAN_MAX_HEALTH_OFF, "<f"),
    }),
    Gate(HUMAN_PROPS_INIT_OFF + HUMAN_PROPS_LEN, "human_props", {
        "props_current": FieldSpec(HUMAN_PROPS_CUR_OFF, f"<{HUMAN_PROPS_COUNT}f"),
        "props_initial": FieldSpec(HUMAN_PROPS_INIT_OFF, f"<{HUMAN_PROPS_COUNT}f"),
    }),
)

# Inventory has no fixed gate: its offset depends on two variable-length chunks.
HUMAN_INVENTORY_GROUP = "human_inventory"

CAR_GATES = (
    Gate(49, "car_transform", {
        "position": FieldSpec(21, "<3f"),
        "rotation": FieldSpec(33, "<4f"),
    }),
    Gate(309, "car_engine", {
        "engine_norm": FieldSpec(CAR_ENGINE_NORM_OFF, "<f"),
        "engine_calc": FieldSpec(CAR_ENGINE_CALC_OFF, "<f"),
        "flow": FieldSpec(CAR_FLOW_OFF, "<f"),
        "fuel": FieldSpec(CAR_FUEL_OFF, "<f"),
    }),
    Gate(253, "car_drive", {
        "speed_limit": FieldSpec(CAR_SPEED_LIMIT_OFF, "<f"),
        "last_gear": FieldSpec(CAR_LAST_GEAR_OFF, "<I"),
        "gear": FieldSpec(CAR_GEAR_OFF, "<I"),
    }),
    Gate(304, "car_engine_flags", {
        "gearbox_flag": FieldSpec(CAR_GEARBOX_FLAG_OFF, "<I"),
        "disable_engine": FieldSpec(CAR_DISABLE_ENGINE_OFF, "<I"),
        "engine_on": FieldSpec(CAR_ENGINE_ON_OFF, "<B"),
        "is_engine_on": FieldSpec(CAR_IS_ENGINE_ON_OFF, "<B"),
    }),
    Gate(349, "car_odometer", {
        "odometer": FieldSpec(CAR_ODOMETER_OFF, "<f"),
    }),
)

ALL_GROUPS = {
    KIND_HUMAN: ("base",) + tuple(g.group for g in HUMAN_GATES) + (HUMAN_INVENTORY_GROUP,),
    KIND_CAR: ("base",) + tuple(g.group for g in CAR_GATES),
    KIND_BASE: ("base",),
    KIND_UNKNOWN: (),
}


@dataclass(frozen=True)
class CoordLayout:
    kind: str
    size: int
    groups: tuple[str, ...] = ()
    fields: Mapping[str, FieldSpec] = field(default_factory=dict)
    inventory_offset: int | None = None

    def supports(self, group: str) -> bool:
        return group in self.groups

    def offset(self, name: str) -> int | None:
        spec = self.fields.get(name)
        return spec.offset if spec else None

    @property
    def unsupported(self) -> tuple[str, ...]:
        return tuple(g for g in ALL_GROUPS[self.kind] if g not in self.groups)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "size": self.size,
            "groups": list(self.groups),
            "unsupported": list(self.unsupported),
            "fields": {k: {"offset": v.offset, "fmt": v.fmt} for k, v in self.fields.items()},
            "inventory_offset": self.inventory_offset,
        }


def _apply(gates: Sequence[Gate], size: int, groups: list[str], fields: dict[str, FieldSpec]) -> None:
    for gate in gates:
        if size >= gate.min_len:
            groups.append(gate.group)
            fields.update(gate.fields)


def detect_coord_layout(payload: bytes) -> CoordLayout:
    """Classify an actor payload and list the field groups it can carry."""
    size = len(payload)
    if size < ACTOR_BASE_MIN_LEN or payload[0] != ACTOR_MARKER:
        return CoordLayout(KIND_UNKNOWN, size)

    groups = [BASE_GATE.group]
    fields = dict(BASE_GATE.fields)
    subtype = payload[ACTOR_SUBTYPE_OFF] if size > ACTOR_SUBTYPE_OFF else None

    if size >= HUMAN_MIN_LEN and subtype == SUBTYPE_HUMAN:
        _apply(HUMAN_GATES, size, groups, fields)
        inv = find_human_inventory_offset(payload)
        if inv is not None:
            groups.append(HUMAN_INVENTORY_GROUP)
            fields["inventory"] = FieldSpec(inv, f"{HUMAN_INVENTORY_LEN}s")
        log.debug("layout: human, %d bytes, groups=%s", size, groups)
        return CoordLayout(KIND_HUMAN, size, tuple(groups), fields, inv)

    if size >= CAR_MIN_LEN and subtype == SUBTYPE_CAR:
        _apply(CAR_GATES, size, groups, fields)
        log.debug("layout: car, %d bytes, groups=%s", size, groups)
        return CoordLayout(KIND_CAR, size, tuple(groups), fields)

    return CoordLayout(KIND_BASE, size, tuple(groups), fields)


def _spec(layout: CoordLayout, name: str) -> FieldSpec:
    spec = layout.fields.get(name)
    if spec is None:
        raise SaveFormatError("E_UNSUPPORTED", f"field {name!r} not supported by {layout.kind} payload of {layout.size} bytes")
    return spec


def read_field(payload: bytes, layout: CoordLayout, name: str):
    """Scalar for single-value fields, tuple for vectors, bytes for blobs."""
    spec = _spec(layout, name)
    values = struct.unpack_from(spec.fmt, payload, spec.offset)
    return values[0] if len(values) == 1 else values


def write_field(payload: bytes, layout: CoordLayout, name: str, value) -> bytes:
    """Return a copy of `payload` with `name` set to `value`."""
    spec = _spec(layout, name)
    if isinstance(value, (bytes, bytearray)) or not isinstance(value, (tuple, list)):
        values = (value,)
    else:
        values = tuple(value)
    out = bytearray(payload)
    try:
        struct.pack_into(spec.fmt, out, spec.offset, *values)
    except struct.error as e:
        raise SaveFormatError("E_PREDICATE", f"cannot store {value!r} in {name!r}: {e}") from e
    return bytes(out)


def read_human_properties(payload: bytes, layout: CoordLayout) -> dict[str, tuple[float, float]]:
    """Named (current, initial) property pairs."""
    cur = read_field(payload, layout, "props_current")
    init = read_field(payload, layout, "props_initial")
    return {name: (cur[i], init[i]) for i, name in enumerate(HUMAN_PROPERTY_NAMES)}
