"""Computer-controlled civilization decision loop."""

import logging
import random

from civclone.engine.civilization import Civilization
from civclone.models import Point
from civclone.models.terrain import TerrainGrid

logger = logging.getLogger(__name__)

WALK_OFFSETS = (-1, 0, 1)


class ComputerPlayer:
    """
    Simple AI for one computer civilization.

    Each turn it:
    1. Picks the first available technology if nothing is being researched
    2. Founds a settlement with every settler not near an own settlement
    3. Walks every other unit one random step, within movement points
    """

    def __init__(self, civilization: Civilization, rng: random.Random | None = None):
        self.civilization = civilization
        self.rng = rng or random.Random()

    @property
    def name(self) -> str:
        return self.civilization.name

    def take_turn(self, terrain: TerrainGrid) -> None:
        """Run the decision loop once."""
        civ = self.civilization

        if civ.research.current_research() is None:
            civ.research.begin_first_available()

        # Snapshot handles: founding removes settlers mid-pass
        for handle in civ.units.handles():
            unit = civ.units.get(handle)
            if unit is None:
                continue

            if unit.is_settler:
                # Settlers near an own settlement wait
                civ.found_settlement(handle)
                continue

            dx = self.rng.choice(WALK_OFFSETS)
            dy = self.rng.choice(WALK_OFFSETS)
            destination = Point(unit.position.x + dx, unit.position.y + dy)
            if terrain.in_bounds(*destination):
                unit.move(destination)

    def __repr__(self) -> str:
        return f"ComputerPlayer({self.name!r})"
