"""Terrain grid builders."""

import random
from pathlib import Path

from civclone.models import TerrainType
from civclone.models.terrain import TerrainGrid

TERRAIN_CODES: dict[str, TerrainType] = {
    "G": TerrainType.GRASSLAND,
    "P": TerrainType.PLAINS,
    "F": TerrainType.FOREST,
    "H": TerrainType.HILLS,
    "M": TerrainType.MOUNTAIN,
    "D": TerrainType.DESERT,
    "T": TerrainType.TUNDRA,
    "A": TerrainType.ARCTIC,
    "O": TerrainType.OCEAN,
}

OCEAN_BORDER = 5


def parse_terrain_rows(rows: list[str]) -> TerrainGrid:
    """
    Parse a terrain grid from text rows, one character per tile.

    Example:
        ["OOO",
         "OGO",
         "OOO"]  -> 3x3 grid with grassland in the centre
    """
    rows = [row.strip() for row in rows if row.strip()]
    if not rows:
        raise ValueError("Terrain map is empty")

    width = len(rows[0])
    cells = []
    for y, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"Row {y} has length {len(row)}, expected {width}")
        try:
            cells.append(tuple(TERRAIN_CODES[code.upper()] for code in row))
        except KeyError as e:
            raise ValueError(f"Unknown terrain code {e.args[0]!r} in row {y}") from e

    return TerrainGrid(width=width, height=len(rows), cells=tuple(cells))


def load_terrain_file(path: Path) -> TerrainGrid:
    """Load a terrain grid from a text file."""
    return parse_terrain_rows(path.read_text().splitlines())


def generate_terrain(
    width: int, height: int, rng: random.Random | None = None
) -> TerrainGrid:
    """
    Generate a simple random map.

    Tiles within OCEAN_BORDER of the edge are ocean; interior tiles are drawn
    from mountain, hills, forest, plains and grassland in rising likelihood.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid map size {width}x{height}")
    rng = rng or random.Random()

    cells = []
    for y in range(height):
        row = []
        for x in range(width):
            if (
                x < OCEAN_BORDER
                or y < OCEAN_BORDER
                or x > width - OCEAN_BORDER - 1
                or y > height - OCEAN_BORDER - 1
            ):
                row.append(TerrainType.OCEAN)
                continue

            val = rng.random()
            if val < 0.05:
                row.append(TerrainType.MOUNTAIN)
            elif val < 0.15:
                row.append(TerrainType.HILLS)
            elif val < 0.35:
                row.append(TerrainType.FOREST)
            elif val < 0.55:
                row.append(TerrainType.PLAINS)
            else:
                row.append(TerrainType.GRASSLAND)
        cells.append(tuple(row))

    return TerrainGrid(width=width, height=height, cells=tuple(cells))
