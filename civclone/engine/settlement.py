"""Settlement yields, production queue and population growth."""

import logging
from collections import deque
from dataclasses import dataclass, field

from civclone.engine.wonders import WonderRegistry
from civclone.models import (
    TERRAIN_YIELDS,
    BuildItem,
    BuildItemKind,
    Government,
    Point,
    UnitKind,
)
from civclone.models.terrain import TerrainGrid

logger = logging.getLogger(__name__)

# City-centre tile yields
BASE_FOOD = 2
BASE_TRADE = 1
BASE_PRODUCTION = 1

FOOD_UPKEEP_PER_CITIZEN = 2
GROWTH_COST_PER_CITIZEN = 20
GRANARY = "Granary"
GRANARY_FOOD_MULTIPLIER = 1.5


@dataclass(frozen=True)
class UnitProduced:
    """Signal that a settlement finished a unit the game loop must create."""

    kind: UnitKind
    location: Point
    settlement: int | None = None  # handle within the owning civilization


@dataclass(frozen=True)
class ImprovementBuilt:
    """An improvement or wonder now present in a settlement."""

    name: str
    kind: BuildItemKind
    settlement: int | None = None


@dataclass(frozen=True)
class WonderLost:
    """A wonder finished after another civilization had already built it."""

    name: str
    owner: str
    settlement: int | None = None


ProductionOutcome = UnitProduced | ImprovementBuilt | WonderLost


@dataclass
class Settlement:
    """
    A city working the 3x3 block of tiles around its location.

    Yields are recomputed from terrain every turn; food stock carries over.
    """

    name: str
    location: Point
    population: int = 1
    improvements: dict[str, bool] = field(default_factory=dict)
    build_queue: deque[BuildItem] = field(default_factory=deque)
    food_yield: int = 0
    trade_yield: int = 0
    production_yield: int = 0
    food_stock: int = 0

    def __post_init__(self) -> None:
        self.location = Point(*self.location)
        if self.population < 1:
            raise ValueError(f"Population must be at least 1, got {self.population}")

    @property
    def growth_cost(self) -> int:
        """Food stock needed to grow to the next population level."""
        return (self.population + 1) * GROWTH_COST_PER_CITIZEN

    @property
    def food_upkeep(self) -> int:
        return self.population * FOOD_UPKEEP_PER_CITIZEN

    @property
    def current_build_item(self) -> BuildItem | None:
        return self.build_queue[0] if self.build_queue else None

    def has_improvement(self, name: str) -> bool:
        return self.improvements.get(name, False)

    def update_yields(
        self, terrain: TerrainGrid, government: Government | None = None
    ) -> None:
        """
        Recompute food, trade and production from surrounding terrain.

        The city centre gives a fixed base; each in-bounds neighbour adds its
        terrain delta. Government modifiers follow, then the Granary bonus.
        """
        food = BASE_FOOD
        trade = BASE_TRADE
        production = BASE_PRODUCTION

        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                tx, ty = self.location.x + dx, self.location.y + dy
                if not terrain.in_bounds(tx, ty):
                    continue
                tile = TERRAIN_YIELDS.get(terrain.terrain_at(tx, ty))
                if tile:
                    food += tile.food
                    trade += tile.trade
                    production += tile.production

        if government is not None:
            production += government.production_modifier
            trade += government.trade_modifier

        if self.has_improvement(GRANARY):
            food = int(food * GRANARY_FOOD_MULTIPLIER)

        self.food_yield = food
        self.trade_yield = trade
        self.production_yield = production

    def enqueue_build_item(self, item: BuildItem) -> None:
        """Append an item to the back of the production queue."""
        self.build_queue.append(item)

    def process_production(
        self, wonders: WonderRegistry | None = None, owner: str | None = None
    ) -> ProductionOutcome | None:
        """
        Apply this turn's production to the front of the queue.

        A completed item is removed and its effect applied. Wonders are
        claimed in the shared registry when one is given; if the wonder
        already has an owner the item is discarded.

        Returns: the completion outcome, or None if nothing completed
        """
        current = self.current_build_item
        if current is None:
            return None

        current.progress += self.production_yield
        if current.progress < current.cost:
            return None

        unit_kind = current.unit_kind
        self.build_queue.popleft()

        if unit_kind is not None:
            logger.info("%s finished %s", self.name, current.name)
            return UnitProduced(kind=unit_kind, location=self.location)

        if current.kind == BuildItemKind.WONDER and wonders is not None:
            if not wonders.claim(current.name, owner or self.name):
                holder = wonders.owner_of(current.name)
                logger.warning(
                    "%s finished %s but it was already built by %s",
                    self.name,
                    current.name,
                    holder,
                )
                return WonderLost(name=current.name, owner=holder)

        self.improvements[current.name] = True
        logger.info("%s finished %s", self.name, current.name)
        return ImprovementBuilt(name=current.name, kind=current.kind)

    def process_growth(self) -> None:
        """
        Apply food surplus or deficit to population.

        At most one growth step happens per call; a deficit costs one
        citizen (never below 1) and empties the food stock.
        """
        upkeep = self.food_upkeep
        if self.food_yield > upkeep:
            self.food_stock += self.food_yield - upkeep
            if self.food_stock >= self.growth_cost:
                self.food_stock -= self.growth_cost
                self.population += 1
                # One growth per turn; any surplus beyond the next step is lost
                self.food_stock = min(self.food_stock, self.growth_cost - 1)
                logger.debug("%s grew to size %d", self.name, self.population)
        elif self.food_yield < upkeep:
            self.population = max(1, self.population - 1)
            self.food_stock = 0
            logger.debug("%s is starving, size %d", self.name, self.population)
