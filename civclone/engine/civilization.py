"""Civilizations: the research, settlements and units one player controls."""

import logging
from dataclasses import replace

from civclone.engine.arena import Arena
from civclone.engine.research import ResearchGraph
from civclone.engine.settlement import ProductionOutcome, Settlement
from civclone.engine.units import MobileUnit
from civclone.engine.wonders import WonderRegistry
from civclone.models import BuildTemplate, Government, Point, UnitKind
from civclone.models.terrain import TerrainGrid

logger = logging.getLogger(__name__)

# Founding is refused within this Manhattan distance of an own settlement
MIN_SETTLEMENT_DISTANCE = 2


class Civilization:
    """A human or computer civilization. Both are structurally identical."""

    def __init__(
        self,
        name: str,
        research: ResearchGraph,
        is_human: bool = False,
        government: Government | None = None,
    ):
        self.name = name
        self.research = research
        self.is_human = is_human
        self.government = government or Government()
        self.settlements: Arena[Settlement] = Arena()
        self.units: Arena[MobileUnit] = Arena()
        self._founded = 0

    def spawn_unit(self, kind: UnitKind, position: Point) -> int:
        """Create a unit and return its handle."""
        return self.units.add(MobileUnit(kind, Point(*position)))

    def can_found_settlement(self, position: Point) -> bool:
        """Check the minimum-distance rule against this civilization's settlements."""
        position = Point(*position)
        return all(
            settlement.location.distance(position) > MIN_SETTLEMENT_DISTANCE
            for settlement in self.settlements
        )

    def found_settlement(self, unit_handle: int, name: str | None = None) -> int | None:
        """
        Consume a settler to found a settlement at its position.

        Returns: the new settlement handle, or None if the unit is not an own
        settler or the site is too close to an existing settlement
        """
        unit = self.units.get(unit_handle)
        if unit is None or not unit.is_settler:
            return None
        if not self.can_found_settlement(unit.position):
            return None

        self.units.remove(unit_handle)
        self._founded += 1
        settlement = Settlement(
            name=name or f"{self.name} {self._founded}", location=unit.position
        )
        handle = self.settlements.add(settlement)
        logger.info(
            "%s founded %s at (%d, %d)",
            self.name,
            settlement.name,
            settlement.location.x,
            settlement.location.y,
        )
        return handle

    def can_build(self, template: BuildTemplate) -> bool:
        """Check the template's technology requirement."""
        return template.requires is None or self.research.is_researched(template.requires)

    def buildable(self, templates: dict[str, BuildTemplate]) -> list[BuildTemplate]:
        """Templates this civilization may currently queue, in catalog order."""
        return [t for t in templates.values() if self.can_build(t)]

    def process_settlements(
        self, terrain: TerrainGrid, wonders: WonderRegistry | None = None
    ) -> tuple[int, list[ProductionOutcome]]:
        """
        Run yields, production and growth for every settlement in order.

        Returns: (total trade, production outcomes tagged with settlement handles)
        """
        total_trade = 0
        outcomes: list[ProductionOutcome] = []

        for handle, settlement in self.settlements.items():
            settlement.update_yields(terrain, self.government)
            total_trade += settlement.trade_yield
            outcome = settlement.process_production(wonders, self.name)
            if outcome is not None:
                outcomes.append(replace(outcome, settlement=handle))
            settlement.process_growth()

        return total_trade, outcomes

    def credit_research(self, trade: int) -> str | None:
        """
        Credit trade to research, then pick the next technology if idle.

        Returns: name of the technology completed, if any
        """
        completed = self.research.add_research_points(trade)
        if self.research.current_research() is None:
            self.research.begin_first_available()
        return completed

    def reset_movement(self) -> None:
        for unit in self.units:
            unit.reset_movement()

    @property
    def population(self) -> int:
        return sum(settlement.population for settlement in self.settlements)

    def __repr__(self) -> str:
        kind = "human" if self.is_human else "computer"
        return f"Civilization({self.name!r}, {kind})"
