import struct

import pytest

from msav_core.errors import SaveFormatError
from msav_codec.variants import (
    MrProfileSaveData,
    MrTimesRecord,
    MrTimesSaveData,
    MrSeg0Point,
    MrSeg0SaveData,
    parse_mr_profile,
    build_mr_profile,
    parse_mr_times,
    build_mr_times,
    parse_mr_seg0,
    build_mr_seg0,
)


def test_mr_profile_words():
    raw = struct.pack("<34I", *range(100, 134))
    save = parse_mr_profile(raw)
    assert save.words == list(range(100, 134))
    assert build_mr_profile(save) == raw


@pytest.mark.parametrize("size", [0, 132, 135, 137, 140])
def test_mr_profile_size(size):
    with pytest.raises(SaveFormatError) as e:
        parse_mr_profile(bytes(size))
    assert e.value.code == "E_SIZE"


def test_mr_profile_build_word_count():
    with pytest.raises(SaveFormatError):
        build_mr_profile(MrProfileSaveData(words=[0] * 33))


def test_mr_times_parse():
    raw = struct.pack("<I", 2)
    raw += struct.pack("<32sII", b"downtown", 61000, 3)
    raw += struct.pack("<32sII", b"hoboken", 72000, 1)
    save = parse_mr_times(raw)
    assert save.count == 2
    assert [r.name for r in save.records] == ["downtown", "hoboken"]
    assert save.records[1].value_a == 72000
    assert save.raw_size == 84
    assert build_mr_times(save) == raw


@pytest.mark.parametrize("size", [0, 4, 40, 43, 45, 83, 85])
def test_mr_times_size(size):
    with pytest.raises(SaveFormatError) as e:
        parse_mr_times(bytes(size))
    assert e.value.code == "E_SIZE"


def test_mr_times_build_empty():
    with pytest.raises(SaveFormatError) as e:
        build_mr_times(MrTimesSaveData(count=0, records=[]))
    assert e.value.code == "E_EMPTY"


def test_mr_times_record_name():
    rec = MrTimesRecord(value_a=5).with_name("lost heaven")
    assert len(rec.name_raw) == 32
    assert rec.name == "lost heaven"
    assert rec.value_a == 5
    with pytest.raises(SaveFormatError):
        rec.with_name("x" * 33)


def test_mr_seg0_parse():
    raw = struct.pack("<III", 7, 8, 2) + struct.pack("<3f", 1.5, -2.25, 0.0) + struct.pack("<3f", 4.0, 5.0, 6.5)
    save = parse_mr_seg0(raw)
    assert (save.header_a, save.header_b, save.header_c) == (7, 8, 2)
    assert save.points == [MrSeg0Point(1.5, -2.25, 0.0), MrSeg0Point(4.0, 5.0, 6.5)]
    assert build_mr_seg0(save) == raw


@pytest.mark.parametrize("size", [0, 12, 23, 25, 30])
def test_mr_seg0_size(size):
    with pytest.raises(SaveFormatError) as e:
        parse_mr_seg0(bytes(size))
    assert e.value.code == "E_SIZE"


def test_mr_seg0_build_empty():
    with pytest.raises(SaveFormatError) as e:
        build_mr_seg0(MrSeg0SaveData(1, 2, 3, []))
    assert e.value.code == "E_EMPTY"


def test_mr_seg0_nan_payload_bits_kept():
    bits = (0x7F800001, 0x7FA00000, 0xFF800123)
    raw = struct.pack("<III", 0, 0, 1) + struct.pack("<3I", *bits)
    save = parse_mr_seg0(raw)
    assert all(v != v for v in (save.points[0].x, save.points[0].y, save.points[0].z))
    assert build_mr_seg0(save) == raw


def test_mr_seg0_edited_coordinate_repacked():
    raw = struct.pack("<III", 0, 0, 1) + struct.pack("<3I", 0x7F800001, 0x7FA00000, 0xFF800123)
    save = parse_mr_seg0(raw)
    save.points[0].y = 2.5
    out = build_mr_seg0(save)
    assert out[12:16] == raw[12:16]
    assert out[16:20] == struct.pack("<f", 2.5)
    assert out[20:24] == raw[20:24]
