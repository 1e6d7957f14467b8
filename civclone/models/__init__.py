"""Data models for civilization game entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from civclone.models.technology import Technology


class Point(NamedTuple):
    """A grid coordinate."""

    x: int
    y: int

    def distance(self, other: "Point") -> int:
        """Manhattan distance to another point."""
        return abs(self.x - other.x) + abs(self.y - other.y)


class TerrainType(Enum):
    """Types of terrain on the world map."""

    GRASSLAND = "grassland"
    PLAINS = "plains"
    FOREST = "forest"
    HILLS = "hills"
    MOUNTAIN = "mountain"
    DESERT = "desert"
    TUNDRA = "tundra"
    ARCTIC = "arctic"
    OCEAN = "ocean"


@dataclass(frozen=True)
class TileYield:
    """Yield delta a worked tile adds to its settlement."""

    food: int = 0
    trade: int = 0
    production: int = 0


# Terrain not listed here (tundra, arctic) contributes nothing
TERRAIN_YIELDS: dict[TerrainType, TileYield] = {
    TerrainType.GRASSLAND: TileYield(food=2),
    TerrainType.PLAINS: TileYield(food=1, production=1),
    TerrainType.FOREST: TileYield(production=2),
    TerrainType.HILLS: TileYield(trade=1, production=2),
    TerrainType.MOUNTAIN: TileYield(production=3),
    TerrainType.DESERT: TileYield(trade=2),
    TerrainType.OCEAN: TileYield(food=1, trade=1),
}


class UnitKind(Enum):
    """Types of mobile units."""

    SETTLER = "Settler"
    WARRIOR = "Warrior"
    PHALANX = "Phalanx"
    ARCHER = "Archer"
    CHARIOT = "Chariot"
    HORSEMAN = "Horseman"
    LEGION = "Legion"
    CATAPULT = "Catapult"
    KNIGHT = "Knight"
    CRUSADER = "Crusader"
    PIKEMAN = "Pikeman"
    MUSKETEER = "Musketeer"
    RIFLEMAN = "Rifleman"
    CAVALRY = "Cavalry"
    CANNON = "Cannon"
    ARTILLERY = "Artillery"
    TANK = "Tank"
    BATTLESHIP = "Battleship"
    CRUISER = "Cruiser"
    CARRIER = "Carrier"
    TRIREME = "Trireme"
    CARAVEL = "Caravel"
    GALLEON = "Galleon"
    TRANSPORT = "Transport"
    SUBMARINE = "Submarine"
    FIGHTER = "Fighter"
    BOMBER = "Bomber"


@dataclass(frozen=True)
class UnitStats:
    """Fixed per-kind unit ratings."""

    movement: int
    attack: int
    defense: int


UNIT_STATS: dict[UnitKind, UnitStats] = {
    UnitKind.SETTLER: UnitStats(movement=1, attack=0, defense=1),
    UnitKind.WARRIOR: UnitStats(movement=1, attack=1, defense=1),
    UnitKind.PHALANX: UnitStats(movement=1, attack=1, defense=2),
    UnitKind.ARCHER: UnitStats(movement=1, attack=2, defense=1),
    UnitKind.CHARIOT: UnitStats(movement=2, attack=3, defense=1),
    UnitKind.HORSEMAN: UnitStats(movement=2, attack=2, defense=1),
    UnitKind.LEGION: UnitStats(movement=1, attack=3, defense=1),
    UnitKind.CATAPULT: UnitStats(movement=1, attack=4, defense=1),
    UnitKind.KNIGHT: UnitStats(movement=2, attack=4, defense=2),
    UnitKind.CRUSADER: UnitStats(movement=2, attack=5, defense=1),
    UnitKind.PIKEMAN: UnitStats(movement=1, attack=1, defense=2),
    UnitKind.MUSKETEER: UnitStats(movement=1, attack=3, defense=2),
    UnitKind.RIFLEMAN: UnitStats(movement=1, attack=4, defense=2),
    UnitKind.CAVALRY: UnitStats(movement=2, attack=6, defense=3),
    UnitKind.CANNON: UnitStats(movement=1, attack=6, defense=2),
    UnitKind.ARTILLERY: UnitStats(movement=1, attack=8, defense=2),
    UnitKind.TANK: UnitStats(movement=2, attack=10, defense=5),
    UnitKind.BATTLESHIP: UnitStats(movement=4, attack=18, defense=12),
    UnitKind.CRUISER: UnitStats(movement=5, attack=12, defense=6),
    UnitKind.CARRIER: UnitStats(movement=4, attack=1, defense=9),
    UnitKind.TRIREME: UnitStats(movement=3, attack=1, defense=1),
    UnitKind.CARAVEL: UnitStats(movement=3, attack=1, defense=1),
    UnitKind.GALLEON: UnitStats(movement=3, attack=1, defense=1),
    UnitKind.TRANSPORT: UnitStats(movement=3, attack=0, defense=3),
    UnitKind.SUBMARINE: UnitStats(movement=4, attack=10, defense=5),
    UnitKind.FIGHTER: UnitStats(movement=8, attack=4, defense=1),
    UnitKind.BOMBER: UnitStats(movement=8, attack=12, defense=1),
}


class BuildItemKind(Enum):
    """What a completed build item turns into."""

    UNIT = "unit"
    IMPROVEMENT = "improvement"
    WONDER = "wonder"


@dataclass
class BuildItem:
    """An item under construction in a settlement's production queue."""

    name: str
    kind: BuildItemKind
    cost: int
    progress: int = 0

    def __post_init__(self) -> None:
        # Unit items must name a known unit kind; raises ValueError otherwise
        if self.kind == BuildItemKind.UNIT:
            UnitKind(self.name)

    @property
    def unit_kind(self) -> UnitKind | None:
        """Unit produced on completion, for unit items."""
        if self.kind != BuildItemKind.UNIT:
            return None
        return UnitKind(self.name)

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.name} {self.progress}/{self.cost}"


@dataclass(frozen=True)
class BuildTemplate:
    """Static catalog entry from which build items are created."""

    name: str
    kind: BuildItemKind
    cost: int
    requires: str | None = None  # technology name

    def create(self) -> BuildItem:
        """Create a fresh build item with no progress."""
        return BuildItem(name=self.name, kind=self.kind, cost=self.cost)


class GovernmentType(Enum):
    """Types of government."""

    DESPOTISM = "despotism"
    MONARCHY = "monarchy"
    REPUBLIC = "republic"
    DEMOCRACY = "democracy"
    COMMUNISM = "communism"
    FUNDAMENTALISM = "fundamentalism"


# (production, trade, corruption)
GOVERNMENT_MODIFIERS: dict[GovernmentType, tuple[int, int, int]] = {
    GovernmentType.DESPOTISM: (0, 0, 3),
    GovernmentType.MONARCHY: (1, 1, 2),
    GovernmentType.REPUBLIC: (1, 2, 1),
    GovernmentType.DEMOCRACY: (1, 3, 0),
    GovernmentType.COMMUNISM: (2, 0, 1),
    GovernmentType.FUNDAMENTALISM: (2, 1, 2),
}


@dataclass
class Government:
    """Empire-wide government and the yield modifiers it grants."""

    government_type: GovernmentType | None = None
    production_modifier: int = field(default=0, init=False)
    trade_modifier: int = field(default=0, init=False)
    corruption_modifier: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        # Starts as Despotism with no modifiers until a government is chosen
        if self.government_type is None:
            self.government_type = GovernmentType.DESPOTISM
        else:
            self.change(self.government_type)

    def change(self, government_type: GovernmentType) -> None:
        """Switch government and adopt its modifiers."""
        self.government_type = government_type
        (
            self.production_modifier,
            self.trade_modifier,
            self.corruption_modifier,
        ) = GOVERNMENT_MODIFIERS[government_type]

    def __str__(self) -> str:
        return self.government_type.value.title()


__all__ = [
    "BuildItem",
    "BuildItemKind",
    "BuildTemplate",
    "GOVERNMENT_MODIFIERS",
    "Government",
    "GovernmentType",
    "Point",
    "TERRAIN_YIELDS",
    "Technology",
    "TerrainType",
    "TileYield",
    "UNIT_STATS",
    "UnitKind",
    "UnitStats",
]
