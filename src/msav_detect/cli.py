import json
import logging
from pathlib import Path

import click

from msav_core.container import Segment

from .garage import catalog_search_paths, load_garage_catalog
from .layout import KIND_HUMAN, detect_coord_layout, read_human_properties
from .program import detect_program, read_program_names

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _echo(obj) -> None:
    click.echo(json.dumps(obj, **CANONICAL_JSON_KW))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")


@main.command("layout")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def layout_cmd(path: Path):
    payload = path.read_bytes()
    layout = detect_coord_layout(payload)
    result = layout.to_dict()
    if layout.kind == KIND_HUMAN and layout.supports("human_props"):
        result["properties"] = read_human_properties(payload, layout)
    _echo(result)


@main.command("program")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--game-payload", default=0, show_default=True, help="Index of the game payload among PATHS")
def program_cmd(paths: tuple, game_payload: int):
    segments = [(i, Segment(p.name, p.read_bytes())) for i, p in enumerate(paths)]
    best = detect_program(segments, game_payload)
    if best is None:
        _echo({"status": "FAIL", "errors": [{"code": "E_NO_CANDIDATE", "message": "no program block found"}]})
        raise SystemExit(1)
    actors, frames = read_program_names(segments[best.segment_index][1].plain, best.layout)
    _echo({"status": "PASS", "program": best.to_dict(), "actors": actors, "frames": frames})


@main.command("garage")
@click.option("--catalog", "catalogs", multiple=True, type=click.Path(path_type=Path), help="Catalog file to try first")
@click.option("--game-dir", type=click.Path(file_okay=False, path_type=Path), envvar="MSAV_GAME_DIR")
@click.option("--parquet", type=click.Path(path_type=Path), help="Write the catalog to this parquet file")
def garage_cmd(catalogs: tuple, game_dir: Path | None, parquet: Path | None):
    entries, source = load_garage_catalog(catalog_search_paths(game_dir, catalogs))
    _echo({"source": source, "count": len(entries), "cars": [e.to_dict() for e in entries]})
    if parquet is not None:
        from .export import write_catalog_parquet

        write_catalog_parquet(entries, parquet)


if __name__ == "__main__":
    main()
