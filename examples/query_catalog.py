"""Query an exported garage catalog - list cars offered in a freeride mode."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb

MODES = {"city": 0x01, "country": 0x02, "extreme": 0x04}


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python query_catalog.py <catalog.parquet> <city|country|extreme>")
        print("Example: msav-detect garage --parquet cars.parquet && python query_catalog.py cars.parquet extreme")
        sys.exit(1)

    catalog = Path(sys.argv[1])
    mode = sys.argv[2]
    if mode not in MODES:
        print(f"Unknown mode {mode!r}, expected one of {', '.join(MODES)}")
        sys.exit(1)

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW cars AS SELECT * FROM '{catalog}'")

    sql = f"""
    SELECT
        code,
        display_name,
        race_mask
    FROM cars
    WHERE masks_known
      AND (freeride_mask & {MODES[mode]}) <> 0
    ORDER BY index
    """

    print(f"--- Freeride: {mode} ---\n")

    df = con.execute(sql).fetchdf()
    if df.empty:
        print("No cars offered in this mode.")
    else:
        for _, row in df.iterrows():
            print(f"{row['code']:<24} {row['display_name']}  (race mask 0x{int(row['race_mask']):02X})")


if __name__ == "__main__":
    main()
