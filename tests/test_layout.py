import struct

import pytest

from msav_core.errors import SaveFormatError
from msav_detect.inventory import find_human_inventory_offset
from msav_detect.layout import (
    HUMAN_PROPERTY_NAMES,
    detect_coord_layout,
    read_field,
    write_field,
    read_human_properties,
)


def actor(subtype: int, size: int) -> bytes:
    buf = bytearray(size)
    buf[0] = 3
    if size > 13:
        buf[13] = subtype
    return bytes(buf)


def test_too_short_or_wrong_marker():
    assert detect_coord_layout(bytes(12)).kind == "unknown"
    assert detect_coord_layout(b"\x04" + bytes(40)).kind == "unknown"
    assert detect_coord_layout(b"").groups == ()


def test_base_only():
    layout = detect_coord_layout(actor(1, 20))
    assert layout.kind == "base"
    assert layout.groups == ("base",)
    assert layout.offset("state") is not None
    assert layout.offset("position") is None


def test_thirteen_bytes_is_base():
    layout = detect_coord_layout(actor(0, 13))
    assert layout.kind == "base"


def test_human_needs_42_bytes():
    assert detect_coord_layout(actor(6, 41)).kind == "base"
    layout = detect_coord_layout(actor(6, 42))
    assert layout.kind == "human"
    assert layout.supports("human_transform")
    assert not layout.supports("human_stance")
    assert "human_health" in layout.unsupported


@pytest.mark.parametrize("size,group", [(66, "human_stance"), (229, "human_health"), (357, "human_props")])
def test_human_gates(size, group):
    assert not detect_coord_layout(actor(6, size - 1)).supports(group)
    assert detect_coord_layout(actor(6, size)).supports(group)


def test_car_needs_18_bytes():
    assert detect_coord_layout(actor(9, 17)).kind == "base"
    layout = detect_coord_layout(actor(9, 18))
    assert layout.kind == "car"
    assert layout.groups == ("base",)
    assert "car_transform" in layout.unsupported


@pytest.mark.parametrize(
    "size,group",
    [(49, "car_transform"), (253, "car_drive"), (304, "car_engine_flags"), (309, "car_engine"), (349, "car_odometer")],
)
def test_car_gates(size, group):
    assert not detect_coord_layout(actor(9, size - 1)).supports(group)
    assert detect_coord_layout(actor(9, size)).supports(group)


def test_fuel_not_at_308():
    layout = detect_coord_layout(actor(9, 308))
    assert layout.offset("fuel") is None
    assert layout.offset("gear") == 249


@pytest.mark.parametrize("subtype", [6, 9])
def test_groups_only_grow(subtype):
    full = actor(subtype, 700)
    prev: set = set()
    for n in range(0, 701):
        groups = set(detect_coord_layout(full[:n]).groups)
        assert prev <= groups
        prev = groups


def test_car_field_offsets():
    layout = detect_coord_layout(actor(9, 400))
    expected = {
        "fuel": 304, "flow": 211, "engine_norm": 137, "engine_calc": 141,
        "speed_limit": 215, "last_gear": 245, "gear": 249, "gearbox_flag": 273,
        "disable_engine": 277, "engine_on": 298, "is_engine_on": 303, "odometer": 345,
    }
    for name, off in expected.items():
        assert layout.offset(name) == off


def test_read_write_position():
    payload = actor(6, 100)
    layout = detect_coord_layout(payload)
    edited = write_field(payload, layout, "position", (1.0, 2.0, 3.5))
    assert read_field(edited, layout, "position") == (1.0, 2.0, 3.5)
    assert payload == actor(6, 100)
    assert struct.unpack_from("<3f", edited, 14) == (1.0, 2.0, 3.5)


def test_unsupported_field_is_refused():
    payload = actor(9, 60)
    layout = detect_coord_layout(payload)
    with pytest.raises(SaveFormatError) as e:
        read_field(payload, layout, "odometer")
    assert e.value.code == "E_UNSUPPORTED"
    with pytest.raises(SaveFormatError):
        write_field(payload, layout, "fuel", 10.0)


def test_human_properties():
    buf = bytearray(actor(6, 400))
    cur = [float(i) for i in range(16)]
    init = [float(100 + i) for i in range(16)]
    struct.pack_into("<16f", buf, 229, *cur)
    struct.pack_into("<16f", buf, 293, *init)
    layout = detect_coord_layout(bytes(buf))
    props = read_human_properties(bytes(buf), layout)
    assert list(props) == list(HUMAN_PROPERTY_NAMES)
    assert len(props) == 16
    assert props["strength"] == (0.0, 100.0)
    assert props["morale"] == (15.0, 115.0)


def test_health():
    buf = bytearray(actor(6, 300))
    struct.pack_into("<ff", buf, 221, 50.0, 200.0)
    layout = detect_coord_layout(bytes(buf))
    assert read_field(bytes(buf), layout, "health") == 50.0
    assert read_field(bytes(buf), layout, "max_health") == 200.0


def human_with_chunks(names, tail):
    body = bytearray(395)
    body[0] = 3
    body[13] = 6
    for n in names:
        body += struct.pack("<II", len(n), 0) + n
    return bytes(body) + bytes(tail)


def test_inventory_zero_length_chunks():
    payload = human_with_chunks([b"", b""], 196)
    assert find_human_inventory_offset(payload) == 411
    layout = detect_coord_layout(payload)
    assert layout.supports("human_inventory")
    assert layout.inventory_offset == 411
    assert read_field(payload, layout, "inventory") == bytes(196)


def test_inventory_named_chunks():
    payload = human_with_chunks([b"tommy", b"car"], 200)
    assert find_human_inventory_offset(payload) == 395 + 13 + 11


def test_inventory_needs_196_bytes():
    assert find_human_inventory_offset(human_with_chunks([b"", b""], 195)) is None
    layout = detect_coord_layout(human_with_chunks([b"", b""], 195))
    assert layout.kind == "human"
    assert "human_inventory" in layout.unsupported


def test_inventory_name_too_long():
    body = bytearray(human_with_chunks([], 0))
    body += struct.pack("<II", 2000, 0) + bytes(2000) + struct.pack("<II", 0, 0) + bytes(196)
    assert find_human_inventory_offset(bytes(body)) is None


def test_inventory_chunk_overrun():
    body = bytearray(human_with_chunks([], 0))
    body += struct.pack("<II", 900, 0) + bytes(20)
    assert find_human_inventory_offset(bytes(body)) is None
    assert find_human_inventory_offset(bytes(396)) is None
