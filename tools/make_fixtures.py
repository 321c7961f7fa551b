import random
import struct
from pathlib import Path

from msav_core.protocol import (
    ACTOR_MARKER,
    SUBTYPE_HUMAN,
    SUBTYPE_CAR,
    GARAGE_REC_LEN,
    HUMAN_CORE_END,
    HUMAN_INVENTORY_LEN,
    PROGRAM_MARKER,
)
from msav_codec.profile import new_profile, build_profile
from msav_codec.variants import (
    MrProfileSaveData,
    MrTimesRecord,
    MrTimesSaveData,
    MrSeg0Point,
    MrSeg0SaveData,
    build_mr_profile,
    build_mr_times,
    build_mr_seg0,
)
from msav_detect.garage_table import EMBEDDED_CARS

# --- CONFIGURATION ---
SEED = 1976
TIMES_RECORDS = 6
SEG0_POINTS = 9


def make_profile(rng: random.Random) -> bytes:
    save = new_profile()
    save.block720 = bytes(rng.randrange(256) for _ in range(720))
    save.block92 = bytes(rng.randrange(256) for _ in range(92))
    return build_profile(save)


def make_times(rng: random.Random) -> bytes:
    records = [
        MrTimesRecord(value_a=rng.randrange(1 << 20), value_b=rng.randrange(1 << 20)).with_name(f"track{i:02d}")
        for i in range(TIMES_RECORDS)
    ]
    return build_mr_times(MrTimesSaveData(count=len(records), records=records))


def make_seg0(rng: random.Random) -> bytes:
    points = [MrSeg0Point(rng.uniform(-500, 500), rng.uniform(0, 50), rng.uniform(-500, 500)) for _ in range(SEG0_POINTS)]
    return build_mr_seg0(MrSeg0SaveData(1, 2, SEG0_POINTS, points))


def make_catalog() -> bytes:
    out = bytearray()
    for code, model, shadow, name, race, freeride in EMBEDDED_CARS:
        rec = bytearray(GARAGE_REC_LEN)
        for off, text in ((0, code), (32, model), (64, shadow), (96, name)):
            raw = text.encode("latin-1")[:31]
            rec[off:off + len(raw)] = raw
        struct.pack_into("<I", rec, 132, race)
        struct.pack_into("<I", rec, 160, freeride)
        out += rec
    return bytes(out)


def make_human_payload() -> bytes:
    body = bytearray(HUMAN_CORE_END)
    body[0] = ACTOR_MARKER
    body[13] = SUBTYPE_HUMAN
    struct.pack_into("<3f", body, 14, 10.0, 2.5, -40.0)
    struct.pack_into("<ff", body, 221, 80.0, 100.0)
    chunk = lambda name: struct.pack("<II", len(name), 0) + name
    return bytes(body) + chunk(b"tommy") + chunk(b"") + bytes(HUMAN_INVENTORY_LEN)


def make_car_payload() -> bytes:
    body = bytearray(360)
    body[0] = ACTOR_MARKER
    body[13] = SUBTYPE_CAR
    struct.pack_into("<f", body, 304, 55.0)
    struct.pack_into("<f", body, 345, 12345.5)
    return bytes(body)


def make_program_segment(rng: random.Random) -> bytes:
    names = [b"tommy", b"paulie"]
    frames = [b"door01"]
    head = bytearray(39)
    head[0] = PROGRAM_MARKER
    struct.pack_into("<HIII", head, 17, 3, 4, len(frames), len(names))
    block = bytes(head) + bytes(6) + struct.pack("<4f", 1.0, 2.0, 3.0, 4.0)
    for n in names:
        block += struct.pack("<II", len(n), 0) + n
    for n in frames:
        block += struct.pack("<H", len(n)) + n
    # Padding avoids the marker byte so only one block is found.
    pad = bytes(rng.choice([0, 1, 3, 4, 5]) for _ in range(64))
    return pad + block + pad


def generate(out_dir) -> Path:
    rng = random.Random(SEED)
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    (out / "profile.sav").write_bytes(make_profile(rng))
    (out / "mrprofile.sav").write_bytes(build_mr_profile(MrProfileSaveData(words=list(range(34)))))
    (out / "mrtimes.sav").write_bytes(make_times(rng))
    (out / "mrseg0.sav").write_bytes(make_seg0(rng))
    (out / "carindex.def").write_bytes(make_catalog())
    (out / "human.bin").write_bytes(make_human_payload())
    (out / "car.bin").write_bytes(make_car_payload())
    (out / "program.bin").write_bytes(make_program_segment(rng))

    print(f"GENERATED: {out}")
    return out


if __name__ == "__main__":
    import sys

    generate(sys.argv[1] if len(sys.argv) > 1 else "fixtures")
