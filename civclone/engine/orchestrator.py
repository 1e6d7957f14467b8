"""End-of-turn sequencing across the human and computer civilizations."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from civclone.engine.civilization import Civilization
from civclone.engine.computer_player import ComputerPlayer
from civclone.engine.settlement import ProductionOutcome, UnitProduced
from civclone.engine.wonders import WonderRegistry
from civclone.models.terrain import TerrainGrid

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Whose pipeline is running. The orchestrator idles in HUMAN."""

    HUMAN = "human"
    COMPUTER = "computer"


@dataclass
class CivilizationTurn:
    """What happened to one civilization during a turn."""

    civilization: str
    trade: int = 0
    completed_research: str | None = None
    outcomes: list[ProductionOutcome] = field(default_factory=list)


@dataclass
class TurnReport:
    """Aggregated outcome of a single end-turn."""

    turn: int
    civilizations: list[CivilizationTurn] = field(default_factory=list)

    def for_civilization(self, name: str) -> CivilizationTurn | None:
        return next((c for c in self.civilizations if c.civilization == name), None)

    @property
    def units_produced(self) -> list[tuple[str, UnitProduced]]:
        return [
            (civ.civilization, outcome)
            for civ in self.civilizations
            for outcome in civ.outcomes
            if isinstance(outcome, UnitProduced)
        ]


UnitProducedCallback = Callable[[Civilization, UnitProduced], None]


class TurnOrchestrator:
    """
    Sequences end-of-turn processing.

    The human civilization's pipeline always completes before any computer
    civilization's, and computer civilizations run one after another in the
    order given.
    """

    def __init__(
        self,
        terrain: TerrainGrid,
        human: Civilization,
        computers: list[ComputerPlayer] | None = None,
        wonders: WonderRegistry | None = None,
        on_unit_produced: UnitProducedCallback | None = None,
    ):
        """Initialize orchestrator."""
        self.terrain = terrain
        self.human = human
        self.computers = list(computers or [])
        self.wonders = wonders or WonderRegistry()
        self.on_unit_produced = on_unit_produced
        self.turn = 0
        self.phase = TurnPhase.HUMAN

        names = [civ.name for civ in self.civilizations()]
        if len(set(names)) != len(names):
            raise ValueError(f"Civilization names must be unique: {names}")

    def civilizations(self) -> list[Civilization]:
        """All civilizations in processing order, human first."""
        return [self.human] + [player.civilization for player in self.computers]

    def get_civilization(self, name: str) -> Civilization:
        for civ in self.civilizations():
            if civ.name == name:
                return civ
        raise KeyError(name)

    def current_research(self, name: str) -> str | None:
        """Name of the technology the named civilization is researching."""
        return self.get_civilization(name).research.current_research()

    def _run_economy(self, civ: Civilization) -> CivilizationTurn:
        """Settlement processing followed by research credit."""
        trade, outcomes = civ.process_settlements(self.terrain, self.wonders)
        completed = civ.credit_research(trade)

        if self.on_unit_produced is not None:
            for outcome in outcomes:
                if isinstance(outcome, UnitProduced):
                    self.on_unit_produced(civ, outcome)

        return CivilizationTurn(
            civilization=civ.name,
            trade=trade,
            completed_research=completed,
            outcomes=outcomes,
        )

    def end_turn(self) -> TurnReport:
        """
        Process the end of the current turn for every civilization.

        Steps:
        1. Human settlements, research credit, then human unit movement reset
        2. Each computer civilization: settlements, research, decision loop
        3. Movement reset for every computer unit
        4. Advance the turn counter
        """
        report = TurnReport(turn=self.turn)

        report.civilizations.append(self._run_economy(self.human))
        self.human.reset_movement()

        self.phase = TurnPhase.COMPUTER
        for player in self.computers:
            report.civilizations.append(self._run_economy(player.civilization))
            player.take_turn(self.terrain)

        for player in self.computers:
            player.civilization.reset_movement()

        self.turn += 1
        self.phase = TurnPhase.HUMAN
        logger.info("Turn %d ended", report.turn)
        return report
