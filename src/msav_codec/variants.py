"""Unencrypted racing-mode save codecs: mr-profile, mr-times, mr-seg0."""
from __future__ import annotations

import struct
from dataclasses import dataclass, field

from msav_core.errors import SaveFormatError
from msav_core.protocol import (
    MR_PROFILE_WORDS,
    MR_PROFILE_LEN,
    MR_TIMES_HEADER_LEN,
    MR_TIMES_NAME_LEN,
    MR_TIMES_REC_FMT,
    MR_TIMES_REC_LEN,
    MR_SEG0_HEADER_FMT,
    MR_SEG0_HEADER_LEN,
    MR_SEG0_POINT_FMT,
    MR_SEG0_POINT_LEN,
)


# --- mr-profile: 34 x u32 ---

@dataclass
class MrProfileSaveData:
    words: list[int] = field(default_factory=lambda: [0] * MR_PROFILE_WORDS)
    raw_size: int = field(default=MR_PROFILE_LEN, compare=False)


def parse_mr_profile(raw: bytes) -> MrProfileSaveData:
    if len(raw) != MR_PROFILE_LEN or len(raw) % 4:
        raise SaveFormatError("E_SIZE", f"mr profile save must be exactly {MR_PROFILE_LEN} bytes, got {len(raw)}")
    words = list(struct.unpack(f"<{MR_PROFILE_WORDS}I", raw))
    return MrProfileSaveData(words=words, raw_size=len(raw))


def build_mr_profile(save: MrProfileSaveData) -> bytes:
    if len(save.words) != MR_PROFILE_WORDS:
        raise SaveFormatError("E_BLOCK_SIZE", f"mr profile save expects exactly {MR_PROFILE_WORDS} u32 values, got {len(save.words)}")
    return struct.pack(f"<{MR_PROFILE_WORDS}I", *(w & 0xFFFFFFFF for w in save.words))


# --- mr-times: [count | (name[32], a, b) * n] ---

@dataclass
class MrTimesRecord:
    name_raw: bytes = bytes(MR_TIMES_NAME_LEN)
    value_a: int = 0
    value_b: int = 0

    @property
    def name(self) -> str:
        return self.name_raw.split(b"\x00", 1)[0].decode("latin-1")

    def with_name(self, name: str) -> "MrTimesRecord":
        encoded = name.encode("latin-1")
        if len(encoded) > MR_TIMES_NAME_LEN:
            raise SaveFormatError("E_SIZE", f"record name {name!r} longer than {MR_TIMES_NAME_LEN} bytes")
        return MrTimesRecord(encoded.ljust(MR_TIMES_NAME_LEN, b"\x00"), self.value_a, self.value_b)


@dataclass
class MrTimesSaveData:
    count: int = 0
    records: list[MrTimesRecord] = field(default_factory=list)
    raw_size: int = field(default=0, compare=False)


def parse_mr_times(raw: bytes) -> MrTimesSaveData:
    min_len = MR_TIMES_HEADER_LEN + MR_TIMES_REC_LEN
    if len(raw) < min_len or (len(raw) - MR_TIMES_HEADER_LEN) % MR_TIMES_REC_LEN:
        raise SaveFormatError("E_SIZE", f"mrtimes save has unexpected size {len(raw)}")
    (count,) = struct.unpack_from("<I", raw, 0)
    records = [
        MrTimesRecord(*rec)
        for rec in struct.iter_unpack(MR_TIMES_REC_FMT, raw[MR_TIMES_HEADER_LEN:])
    ]
    return MrTimesSaveData(count=count, records=records, raw_size=len(raw))


def build_mr_times(save: MrTimesSaveData) -> bytes:
    if not save.records:
        raise SaveFormatError("E_EMPTY", "mrtimes save must contain at least one record")
    out = bytearray(struct.pack("<I", save.count & 0xFFFFFFFF))
    for i, rec in enumerate(save.records):
        if len(rec.name_raw) != MR_TIMES_NAME_LEN:
            raise SaveFormatError("E_BLOCK_SIZE", f"mrtimes record {i} name is {len(rec.name_raw)} bytes")
        out += struct.pack(MR_TIMES_REC_FMT, rec.name_raw, rec.value_a & 0xFFFFFFFF, rec.value_b & 0xFFFFFFFF)
    return bytes(out)


# --- mr-seg0: [a, b, c | (x, y, z) * n] ---

@dataclass
class MrSeg0Point:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    # Bytes as read. f32 -> float quiets signalling NaNs, so build writes these
    # back for any coordinate the caller left alone.
    raw: bytes = field(default=b"", compare=False, repr=False)

    def coord_bytes(self) -> bytes:
        out = bytearray()
        for i, value in enumerate((self.x, self.y, self.z)):
            packed = struct.pack("<f", value)
            stored = self.raw[i * 4:i * 4 + 4]
            if len(stored) == 4 and struct.pack("<f", struct.unpack("<f", stored)[0]) == packed:
                packed = stored
            out += packed
        return bytes(out)


@dataclass
class MrSeg0SaveData:
    header_a: int = 0
    header_b: int = 0
    header_c: int = 0
    points: list[MrSeg0Point] = field(default_factory=list)
    raw_size: int = field(default=0, compare=False)


def parse_mr_seg0(raw: bytes) -> MrSeg0SaveData:
    min_len = MR_SEG0_HEADER_LEN + MR_SEG0_POINT_LEN
    if len(raw) < min_len or (len(raw) - MR_SEG0_HEADER_LEN) % MR_SEG0_POINT_LEN:
        raise SaveFormatError("E_SIZE", f"mrseg0 save has unexpected size {len(raw)}")
    a, b, c = struct.unpack_from(MR_SEG0_HEADER_FMT, raw, 0)
    points = []
    for off in range(MR_SEG0_HEADER_LEN, len(raw), MR_SEG0_POINT_LEN):
        chunk = bytes(raw[off:off + MR_SEG0_POINT_LEN])
        points.append(MrSeg0Point(*struct.unpack(MR_SEG0_POINT_FMT, chunk), raw=chunk))
    return MrSeg0SaveData(header_a=a, header_b=b, header_c=c, points=points, raw_size=len(raw))


def build_mr_seg0(save: MrSeg0SaveData) -> bytes:
    if not save.points:
        raise SaveFormatError("E_EMPTY", "mrseg0 save must contain at least one point")
    out = bytearray(struct.pack(MR_SEG0_HEADER_FMT, save.header_a & 0xFFFFFFFF, save.header_b & 0xFFFFFFFF, save.header_c & 0xFFFFFFFF))
    for p in save.points:
        out += p.coord_bytes()
    return bytes(out)
