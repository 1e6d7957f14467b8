import random

import pytest

from civclone.engine.computer_player import ComputerPlayer
from civclone.engine.orchestrator import TurnOrchestrator, TurnPhase
from civclone.engine.settlement import ImprovementBuilt, UnitProduced, WonderLost
from civclone.models import BuildItem, BuildItemKind, Point, UnitKind


@pytest.fixture
def game(make_civ, grassland):
    human = make_civ("Player", is_human=True)
    human.found_settlement(human.spawn_unit(UnitKind.SETTLER, Point(3, 3)))
    computers = [
        ComputerPlayer(make_civ(name), random.Random(i))
        for i, name in enumerate(("AI 1", "AI 2"))
    ]
    return TurnOrchestrator(grassland, human, computers)


def test_turn_counter_and_phase(game):
    assert game.turn == 0
    assert game.phase == TurnPhase.HUMAN

    report = game.end_turn()

    assert report.turn == 0
    assert game.turn == 1
    assert game.phase == TurnPhase.HUMAN


def test_human_research_starts_automatically(game):
    game.end_turn()
    assert game.current_research("Player") == "Pottery"
    assert game.human.research.accumulated == 0

    game.end_turn()
    assert game.human.research.accumulated == 1


def test_trade_completes_research(game):
    game.human.research.begin_research("Pottery")
    game.human.research.add_research_points(19)

    report = game.end_turn()

    assert report.for_civilization("Player").completed_research == "Pottery"
    assert game.human.research.is_researched("Pottery")
    assert game.current_research("Player") == "Wheel"


def test_settlement_grows_over_turns(game):
    settlement = next(iter(game.human.settlements))
    for _ in range(3):
        game.end_turn()

    # 16 surplus per turn against a growth cost of 40
    assert settlement.population == 2
    assert settlement.food_stock == 8


def test_computer_players_pick_research(game):
    game.end_turn()
    assert game.current_research("AI 1") == "Pottery"
    assert game.current_research("AI 2") == "Pottery"


def test_unknown_civilization_query_raises(game):
    with pytest.raises(KeyError):
        game.current_research("Nobody")


def test_duplicate_civilization_names_rejected(make_civ, grassland):
    with pytest.raises(ValueError):
        TurnOrchestrator(
            grassland, make_civ("Rome"), [ComputerPlayer(make_civ("Rome"))]
        )


def test_movement_reset_for_all_units(game):
    human_unit = game.human.units.get(game.human.spawn_unit(UnitKind.WARRIOR, Point(0, 0)))
    human_unit.move(Point(1, 0))
    ai_civ = game.computers[0].civilization
    ai_unit = ai_civ.units.get(ai_civ.spawn_unit(UnitKind.CHARIOT, Point(6, 6)))

    game.end_turn()

    assert human_unit.movement_points == 1
    assert ai_unit.movement_points == 2


def test_civilizations_processed_in_order(game):
    order = []
    for civ in game.civilizations():
        settlement = next(iter(civ.settlements), None)
        if settlement is None:
            handle = civ.found_settlement(
                civ.spawn_unit(UnitKind.SETTLER, Point(len(order) * 2, 0))
            )
            settlement = civ.settlements.get(handle)
        settlement.enqueue_build_item(BuildItem("Warrior", BuildItemKind.UNIT, 1))
        order.append(civ.name)

    game.on_unit_produced = lambda civ, produced: seen.append(civ.name)
    seen = []

    report = game.end_turn()

    assert seen == ["Player", "AI 1", "AI 2"]
    assert [c.civilization for c in report.civilizations] == seen
    assert [name for name, _ in report.units_produced] == seen


def test_unit_produced_callback_spawns_units(make_civ, grassland):
    human = make_civ("Player", is_human=True)
    handle = human.found_settlement(human.spawn_unit(UnitKind.SETTLER, Point(3, 3)))
    human.settlements.get(handle).enqueue_build_item(
        BuildItem("Warrior", BuildItemKind.UNIT, 2)
    )

    def spawn(civ, produced: UnitProduced) -> None:
        civ.spawn_unit(produced.kind, produced.location)

    game = TurnOrchestrator(grassland, human, on_unit_produced=spawn)
    game.end_turn()
    assert len(human.units) == 0

    report = game.end_turn()

    assert report.units_produced == [
        (
            "Player",
            UnitProduced(kind=UnitKind.WARRIOR, location=Point(3, 3), settlement=handle),
        )
    ]
    assert [u.position for u in human.units] == [Point(3, 3)]


def test_wonder_only_built_once_per_game(game):
    ai_civ = game.computers[0].civilization
    ai_handle = ai_civ.found_settlement(ai_civ.spawn_unit(UnitKind.SETTLER, Point(0, 0)))
    human_city = next(iter(game.human.settlements))
    ai_city = ai_civ.settlements.get(ai_handle)
    for city in (human_city, ai_city):
        city.enqueue_build_item(BuildItem("Colossus", BuildItemKind.WONDER, 1))

    report = game.end_turn()

    assert report.for_civilization("Player").outcomes == [
        ImprovementBuilt(name="Colossus", kind=BuildItemKind.WONDER, settlement=0)
    ]
    assert report.for_civilization("AI 1").outcomes == [
        WonderLost(name="Colossus", owner="Player", settlement=ai_handle)
    ]
    assert game.wonders.built_by("Player") == ["Colossus"]
    assert not ai_city.has_improvement("Colossus")


def test_ai_settler_founds_during_turn(game):
    ai_civ = game.computers[1].civilization
    ai_civ.spawn_unit(UnitKind.SETTLER, Point(5, 1))

    game.end_turn()

    assert [s.location for s in ai_civ.settlements] == [Point(5, 1)]
    assert len(ai_civ.units) == 0
