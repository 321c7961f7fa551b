import struct

import pytest

from msav_core.container import NO_INDEX, SaveData, Segment
from msav_core.errors import SaveFormatError
from msav_detect.program import (
    compare_candidates,
    detect_program,
    detect_program_in_save,
    parse_program_at,
    program_candidates,
    rank_candidates,
    read_program_names,
    read_program_vars,
    write_program_var,
)

PAD = bytes(16)


def program_block(regs=0, variables=(), actors=(), frames=()) -> bytes:
    head = bytearray(39)
    head[0] = 2
    struct.pack_into("<HIII", head, 17, regs, len(variables), len(frames), len(actors))
    block = bytes(head) + bytes(regs * 2) + struct.pack(f"<{len(variables)}f", *variables)
    for name in actors:
        block += struct.pack("<II", len(name), 0) + name
    for name in frames:
        block += struct.pack("<H", len(name)) + name
    return block


def names(n):
    return [f"actor{i:03d}".encode() for i in range(n)]


def test_parse_layout():
    buf = PAD + program_block(regs=3, variables=(1.0, 2.0), actors=[b"tommy"], frames=[b"door01", b"car1"])
    layout = parse_program_at(buf, 16)
    assert layout is not None
    assert layout.base_off == 16
    assert layout.vars_off == 16 + 39 + 6
    assert (layout.reg_count, layout.var_count, layout.actor_count, layout.frame_count) == (3, 2, 1, 2)
    assert layout.end_off == len(buf)
    assert read_program_vars(buf, layout) == [1.0, 2.0]
    assert read_program_names(buf, layout) == (["tommy"], ["door01", "car1"])


def test_rejects_bounds():
    head = bytearray(PAD + program_block())
    struct.pack_into("<H", head, 16 + 17, 4097)
    assert parse_program_at(bytes(head) + bytes(10000), 16) is None

    head = bytearray(PAD + program_block())
    struct.pack_into("<I", head, 16 + 27, 2049)
    assert parse_program_at(bytes(head), 16) is None


def test_rejects_overrun():
    buf = PAD + program_block(variables=(1.0,) * 4)
    assert parse_program_at(buf[:-1], 16) is None
    assert parse_program_at(bytes(20) + b"\x02" + bytes(10), 20) is None


def test_rejects_long_actor_name():
    buf = bytearray(PAD + program_block(variables=(1.0,), actors=[b"x" * 1025]))
    assert parse_program_at(bytes(buf), 16) is None


def test_actor_count_breaks_var_tie():
    a = Segment("ai groups", PAD + program_block(variables=(0.5,) * 5, actors=names(2)))
    b = Segment("ai follow", PAD + program_block(variables=(0.5,) * 5, actors=names(7)))
    best = detect_program([(0, a), (1, b)])
    assert best.segment_index == 1
    assert best.layout.actor_count == 7


def test_any_vars_beat_none():
    a = Segment("a", PAD + program_block(variables=(), actors=names(20), frames=[b"frame1"] * 30))
    b = Segment("b", PAD + program_block(variables=(1.0,)))
    best = detect_program([(0, a), (1, b)])
    assert best.segment_index == 1


def test_more_vars_win():
    a = Segment("a", PAD + program_block(variables=(1.0,) * 3, actors=names(50)))
    b = Segment("b", PAD + program_block(variables=(1.0,) * 4))
    assert detect_program([(0, a), (1, b)]).segment_index == 1


def test_frame_count_breaks_actor_tie():
    a = Segment("a", PAD + program_block(variables=(1.0,), actors=names(3), frames=[b"frame1"] * 4))
    b = Segment("b", PAD + program_block(variables=(1.0,), actors=names(3), frames=[b"frame1"] * 2))
    assert detect_program([(0, a), (1, b)]).segment_index == 0


@pytest.mark.parametrize("game_payload", [0, 1])
def test_game_payload_breaks_full_tie(game_payload):
    block = PAD + program_block(variables=(1.0,) * 2, actors=names(2))
    segs = [(0, Segment("x", block)), (1, Segment("y", block))]
    best = detect_program(segs, game_payload)
    assert best.segment_index == game_payload
    assert best.is_game_payload


def test_nothing_found():
    assert detect_program([(0, Segment("empty", bytes(100)))]) is None
    assert detect_program([]) is None


def test_compare_and_rank():
    a = Segment("a", PAD + program_block(variables=(1.0,) * 5, actors=names(2)))
    b = Segment("b", PAD + program_block(variables=(1.0,) * 5, actors=names(7)))
    la = detect_program([(0, a)])
    lb = detect_program([(1, b)])
    assert compare_candidates(lb, la) > 0
    assert compare_candidates(la, lb) < 0
    assert compare_candidates(la, la) == 0
    assert rank_candidates([la, lb]) == [lb, la]


def test_write_var():
    buf = PAD + program_block(variables=(1.0, 2.0, 3.0))
    layout = parse_program_at(buf, 16)
    edited = write_program_var(buf, layout, 1, 42.0)
    assert read_program_vars(edited, layout) == [1.0, 42.0, 3.0]
    with pytest.raises(SaveFormatError):
        write_program_var(buf, layout, 3, 0.0)


def test_candidates_from_save():
    block = PAD + program_block(variables=(1.0,) * 2)
    save = SaveData(
        segments=[
            Segment("meta", bytes(32)),
            Segment("game payload", block),
            Segment("ai groups", bytes(8)),
            Segment("Actor 12 payload", block),
            Segment("info", block),
        ],
        idx_meta=0,
        idx_game_payload=1,
        idx_ai_groups=2,
        idx_ai_follow=NO_INDEX,
    )
    picked = [idx for idx, _ in program_candidates(save)]
    assert picked == [1, 2, 3]
    best = detect_program_in_save(save)
    assert best.segment_index == 1
    assert best.is_game_payload
