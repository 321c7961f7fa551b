"""MSAV Detect - Heuristic structure recovery for untyped save blobs."""
from .layout import CoordLayout, detect_coord_layout
from .program import ProgramLayout, ProgramLocation, detect_program
from .inventory import find_human_inventory_offset
from .garage import GarageCarCatalogEntry, parse_garage_catalog, embedded_garage_catalog

__all__ = [
    "CoordLayout",
    "detect_coord_layout",
    "ProgramLayout",
    "ProgramLocation",
    "detect_program",
    "find_human_inventory_offset",
    "GarageCarCatalogEntry",
    "parse_garage_catalog",
    "embedded_garage_catalog",
]
