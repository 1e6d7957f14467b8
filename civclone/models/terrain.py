"""World map terrain grid."""

from dataclasses import dataclass

from civclone.models import TerrainType


@dataclass(frozen=True)
class TerrainGrid:
    """
    Read-only 2-D grid of terrain, indexed as (x, y).

    ``cells`` holds one row per y coordinate.
    """

    width: int
    height: int
    cells: tuple[tuple[TerrainType, ...], ...]

    def __post_init__(self) -> None:
        if len(self.cells) != self.height or any(
            len(row) != self.width for row in self.cells
        ):
            raise ValueError(
                f"Terrain cells do not match declared size {self.width}x{self.height}"
            )

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if a coordinate lies on the map."""
        return 0 <= x < self.width and 0 <= y < self.height

    def terrain_at(self, x: int, y: int) -> TerrainType:
        """Get the terrain at an in-bounds coordinate."""
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside the {self.width}x{self.height} map")
        return self.cells[y][x]
