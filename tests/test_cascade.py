import struct

import pytest

from msav_core.errors import SaveFormatError, FormatDetectionError
from msav_codec.cascade import (
    CASCADE_ORDER,
    detect_format,
    build_detected,
    probe_formats,
)
from msav_codec.profile import new_profile, build_profile
from msav_codec.variants import parse_mr_seg0


def test_profile_detected():
    raw = build_profile(new_profile())
    detected = detect_format(raw)
    assert detected.format == "profile"
    assert build_detected(detected) == raw


def test_mr_profile_detected():
    raw = struct.pack("<34I", *range(34))
    assert detect_format(raw).format == "mr_profile"


def test_order_decides_between_times_and_seg0():
    # 204 = 4 + 40*5 = 12 + 12*16
    raw = bytes(204)
    assert parse_mr_seg0(raw).points
    detected = detect_format(raw)
    assert detected.format == "mr_times"
    assert len(detected.data.records) == 5


def test_earlier_parser_wins_on_same_buffer():
    raw = struct.pack("<34I", *range(34))

    def mission(buf):
        if len(buf) != 136:
            raise SaveFormatError("E_SIZE", "not a mission save")
        return {"segments": []}

    assert detect_format(raw, mission).format == "mission"
    assert detect_format(raw).format == "mr_profile"


def test_mission_value_error_is_recorded():
    def mission(buf):
        raise ValueError("bad container header")

    with pytest.raises(FormatDetectionError) as e:
        detect_format(b"\x00" * 7, mission)
    assert e.value.attempts[0][1].detail == "bad container header"


def test_all_reasons_reported():
    with pytest.raises(FormatDetectionError) as e:
        detect_format(bytes(7))
    err = e.value
    assert [fmt for fmt, _ in err.attempts] == list(CASCADE_ORDER)
    assert len({reason.detail for _, reason in err.attempts}) == 5
    assert err.code == "E_NO_FORMAT"
    for fmt in CASCADE_ORDER:
        assert fmt in str(err)


def test_mission_build_needs_builder():
    detected = detect_format(bytes(10), lambda buf: "opaque")
    assert detected.format == "mission"
    with pytest.raises(SaveFormatError):
        build_detected(detected)
    assert build_detected(detected, lambda data: b"rebuilt") == b"rebuilt"


def test_probe_report():
    ok = probe_formats(struct.pack("<34I", *range(34)))
    assert ok["status"] == "PASS" and ok["format"] == "mr_profile" and ok["error_count"] == 0

    bad = probe_formats(bytes(3))
    assert bad["status"] == "FAIL"
    assert bad["error_count"] == 5
    assert [e["format"] for e in bad["errors"]] == list(CASCADE_ORDER)
