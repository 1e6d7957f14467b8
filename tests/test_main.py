import json

from civclone.config import GameConfig
from civclone.engine.wonders import WonderRegistry
from civclone.models import Point, UnitKind
from main import (
    create_game,
    create_status_table,
    export_summary,
    queue_default_builds,
    run_game,
)


def small_config(**overrides) -> GameConfig:
    settings = {"width": 24, "height": 20, "seed": 42, "computer_players": 2}
    settings.update(overrides)
    return GameConfig(**settings)


def snapshot(game):
    return [
        (
            civ.name,
            [s.location for s in civ.settlements],
            [u.position for u in civ.units],
            civ.research.researched_technologies(),
        )
        for civ in game.orchestrator.civilizations()
    ]


def test_create_game_places_starting_settlers():
    game = create_game(small_config())
    orchestrator = game.orchestrator

    assert [civ.name for civ in orchestrator.civilizations()] == ["Player", "AI 1", "AI 2"]
    assert orchestrator.human.is_human
    for civ in orchestrator.civilizations():
        assert [u.kind.value for u in civ.units] == ["Settler"]


def test_run_game_advances_turns_and_founds_cities():
    game = create_game(small_config())

    reports = run_game(game, 30)

    assert [r.turn for r in reports] == list(range(30))
    assert game.orchestrator.turn == 30
    for civ in game.orchestrator.civilizations():
        assert len(civ.settlements) == 1
        assert civ.research.researched_technologies()


def test_seeded_games_are_identical():
    first = create_game(small_config())
    second = create_game(small_config())

    run_game(first, 25)
    run_game(second, 25)

    assert snapshot(first) == snapshot(second)


def test_status_table_has_row_per_civilization():
    game = create_game(small_config())
    run_game(game, 2)

    table = create_status_table(game)

    assert table.row_count == 3


def test_export_summary(tmp_path):
    game = create_game(small_config(computer_players=1))
    run_game(game, 5)
    path = tmp_path / "summary.json"

    export_summary(game, path)

    data = json.loads(path.read_text())
    assert data["turn"] == 5
    assert [c["name"] for c in data["civilizations"]] == ["Player", "AI 1"]
    assert data["civilizations"][0]["settlements"][0]["population"] >= 1


def queued_names(civ):
    return [item.name for s in civ.settlements for item in s.build_queue]


def test_default_builds_skip_wonders_built_elsewhere(make_civ, templates):
    civ = make_civ("Romans")
    civ.found_settlement(civ.spawn_unit(UnitKind.SETTLER, Point(3, 3)))
    civ.research.begin_research("Bronze Working")
    civ.research.add_research_points(40)
    wonders = WonderRegistry()

    queue_default_builds(civ, templates, wonders)
    assert queued_names(civ) == ["Warrior", "Barracks", "Pyramids"]

    for settlement in civ.settlements:
        settlement.build_queue.clear()
    wonders.claim("Pyramids", "Egyptians")

    queue_default_builds(civ, templates, wonders)
    assert queued_names(civ) == ["Warrior", "Barracks"]
