"""Mobile units and movement-point accounting."""

from civclone.models import UNIT_STATS, Point, UnitKind, UnitStats


class MobileUnit:
    """A unit on the map with a per-turn movement budget."""

    def __init__(self, kind: UnitKind, position: Point):
        self.kind = kind
        self.position = Point(*position)
        self.movement_points = self.stats.movement

    @property
    def stats(self) -> UnitStats:
        """Fixed ratings for this unit's kind."""
        return UNIT_STATS[self.kind]

    @property
    def is_settler(self) -> bool:
        return self.kind == UnitKind.SETTLER

    def move(self, destination: Point) -> bool:
        """
        Move to a destination, paying its Manhattan distance in movement points.

        Moves costing more than the remaining points are ignored.

        Returns: True if the unit moved
        """
        destination = Point(*destination)
        distance = self.position.distance(destination)
        if distance > self.movement_points:
            return False

        self.position = destination
        self.movement_points -= distance
        return True

    def reset_movement(self) -> None:
        """Restore the full movement allowance for a new turn."""
        self.movement_points = self.stats.movement

    def __repr__(self) -> str:
        return (
            f"MobileUnit({self.kind.value} at ({self.position.x}, {self.position.y}), "
            f"{self.movement_points} mp)"
        )
