from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from msav_codec.variants import MrTimesSaveData

from .garage import GarageCarCatalogEntry

CATALOG_SCHEMA = pa.schema(
    [
        ("index", pa.int32()),
        ("code", pa.string()),
        ("model", pa.string()),
        ("shadow", pa.string()),
        ("display_name", pa.string()),
        ("race_mask", pa.uint32()),
        ("champ_mask", pa.uint32()),
        ("freeride_mask", pa.uint32()),
        ("masks_known", pa.bool_()),
    ]
)

TIMES_SCHEMA = pa.schema(
    [
        ("slot", pa.int32()),
        ("name", pa.string()),
        ("value_a", pa.uint32()),
        ("value_b", pa.uint32()),
    ]
)


def catalog_frame(entries: Sequence[GarageCarCatalogEntry]) -> pd.DataFrame:
    df = pd.DataFrame([e.to_dict() for e in entries], columns=CATALOG_SCHEMA.names)
    return df.sort_values("index")


def write_catalog_parquet(entries: Sequence[GarageCarCatalogEntry], out_path: Path) -> None:
    table = pa.Table.from_pandas(catalog_frame(entries), schema=CATALOG_SCHEMA, preserve_index=False)
    pq.write_table(table, Path(out_path))


def times_frame(save: MrTimesSaveData) -> pd.DataFrame:
    rows = [
        {"slot": i, "name": rec.name, "value_a": rec.value_a, "value_b": rec.value_b}
        for i, rec in enumerate(save.records)
    ]
    return pd.DataFrame(rows, columns=TIMES_SCHEMA.names)


def write_times_parquet(save: MrTimesSaveData, out_path: Path) -> None:
    table = pa.Table.from_pandas(times_frame(save), schema=TIMES_SCHEMA, preserve_index=False)
    pq.write_table(table, Path(out_path))
