"""MSAV codec command line: probe, decode and round-trip save files."""
from __future__ import annotations

import dataclasses
import hashlib
import json
import logging
from pathlib import Path

import click

from msav_core.errors import SaveFormatError

from .cascade import FMT_MR_TIMES, probe_formats, detect_format, build_detected

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _jsonable(obj):
    if isinstance(obj, (bytes, bytearray)):
        return obj.hex()
    raise TypeError(f"not JSON serializable: {type(obj).__name__}")


def _echo(obj) -> None:
    click.echo(json.dumps(obj, default=_jsonable, **CANONICAL_JSON_KW))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")


@main.command("probe")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def probe_cmd(path: Path) -> None:
    """Report which save format PATH parses as."""
    result = probe_formats(path.read_bytes())
    _echo(result)
    if result["status"] != "PASS":
        raise SystemExit(1)


@main.command("decode")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--parquet", type=click.Path(path_type=Path), help="Write mr-times records to this parquet file")
def decode_cmd(path: Path, parquet: Path | None) -> None:
    """Decode PATH and print its structure."""
    raw = path.read_bytes()
    try:
        detected = detect_format(raw)
    except SaveFormatError as e:
        # Fail closed with a single-line reason.
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)

    _echo({
        "format": detected.format,
        "size": len(raw),
        "content_hash": hashlib.sha256(raw).hexdigest(),
        "data": dataclasses.asdict(detected.data),
    })

    if parquet is not None:
        if detected.format != FMT_MR_TIMES:
            click.echo(f"FATAL: --parquet needs an mr-times save, got {detected.format}")
            raise SystemExit(1)
        from msav_detect.export import write_times_parquet

        write_times_parquet(detected.data, parquet)


@main.command("roundtrip")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def roundtrip_cmd(path: Path) -> None:
    """Decode and rebuild PATH, checking the bytes come back identical."""
    raw = path.read_bytes()
    try:
        detected = detect_format(raw)
        rebuilt = build_detected(detected)
    except SaveFormatError as e:
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)

    same = rebuilt == raw
    _echo({
        "format": detected.format,
        "status": "PASS" if same else "FAIL",
        "input_hash": hashlib.sha256(raw).hexdigest(),
        "output_hash": hashlib.sha256(rebuilt).hexdigest(),
    })
    if not same:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
