"""Flip one bit of an encrypted profile save so its core block fails the magic check."""
import sys
from pathlib import Path

from msav_core.binio import read_u32_le
from msav_core.protocol import PROFILE_FILE_LEN, PROFILE_HEADER_LEN, PROFILE_MAGIC

# Second byte of the core block's encrypted magic word.
CORE_MAGIC_BYTE = PROFILE_HEADER_LEN + 1


def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_one_byte.py <profile.sav>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) != PROFILE_FILE_LEN or read_u32_le(b, 0) != PROFILE_MAGIC:
        print(f"{p} is not a {PROFILE_FILE_LEN}-byte forP profile save.")
        raise SystemExit(2)

    b[CORE_MAGIC_BYTE] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {CORE_MAGIC_BYTE} in {p}")


if __name__ == "__main__":
    main()
