from civclone.engine.arena import Arena
from civclone.engine.settlement import UnitProduced
from civclone.engine.wonders import WonderRegistry
from civclone.models import BuildItem, BuildItemKind, Point, UnitKind


def test_arena_handles_are_stable_and_never_reused():
    arena: Arena[str] = Arena()
    a = arena.add("a")
    b = arena.add("b")

    assert arena.remove(a) == "a"
    c = arena.add("c")

    assert c not in (a, b)
    assert arena.get(a) is None
    assert arena.get(b) == "b"
    assert list(arena) == ["b", "c"]
    assert len(arena) == 2
    assert arena.remove(a) is None


def test_found_settlement_consumes_settler(make_civ):
    civ = make_civ("Romans")
    settler = civ.spawn_unit(UnitKind.SETTLER, Point(10, 10))

    handle = civ.found_settlement(settler)

    assert handle is not None
    assert settler not in civ.units
    settlement = civ.settlements.get(handle)
    assert settlement.location == Point(10, 10)
    assert settlement.name == "Romans 1"
    assert settlement.population == 1


def test_found_settlement_rejects_non_settlers(make_civ):
    civ = make_civ()
    warrior = civ.spawn_unit(UnitKind.WARRIOR, Point(3, 3))

    assert civ.found_settlement(warrior) is None
    assert civ.found_settlement(999) is None
    assert warrior in civ.units
    assert len(civ.settlements) == 0


def test_minimum_distance_rule(make_civ):
    civ = make_civ()
    civ.found_settlement(civ.spawn_unit(UnitKind.SETTLER, Point(10, 10)))

    same_tile = civ.spawn_unit(UnitKind.SETTLER, Point(10, 10))
    close = civ.spawn_unit(UnitKind.SETTLER, Point(11, 11))
    far = civ.spawn_unit(UnitKind.SETTLER, Point(12, 11))

    assert civ.found_settlement(same_tile) is None
    assert civ.found_settlement(close) is None
    assert civ.found_settlement(far) is not None
    assert same_tile in civ.units and close in civ.units


def test_other_civilizations_do_not_block_founding(make_civ):
    romans = make_civ("Romans")
    greeks = make_civ("Greeks")
    romans.found_settlement(romans.spawn_unit(UnitKind.SETTLER, Point(4, 4)))

    settler = greeks.spawn_unit(UnitKind.SETTLER, Point(5, 4))

    assert greeks.found_settlement(settler) is not None


def test_can_build_checks_required_technology(make_civ, templates):
    civ = make_civ()
    granary = templates["Granary"]

    assert civ.can_build(templates["Warrior"])
    assert not civ.can_build(granary)
    assert granary not in civ.buildable(templates)

    civ.research.begin_research("Pottery")
    civ.research.add_research_points(20)

    assert civ.can_build(granary)


def test_process_settlements_sums_trade_and_tags_outcomes(make_civ, grassland):
    civ = make_civ()
    first = civ.found_settlement(civ.spawn_unit(UnitKind.SETTLER, Point(1, 1)))
    second = civ.found_settlement(civ.spawn_unit(UnitKind.SETTLER, Point(5, 5)))
    civ.settlements.get(second).enqueue_build_item(
        BuildItem("Warrior", BuildItemKind.UNIT, cost=1)
    )

    trade, outcomes = civ.process_settlements(grassland, WonderRegistry())

    assert trade == 2
    assert outcomes == [
        UnitProduced(kind=UnitKind.WARRIOR, location=Point(5, 5), settlement=second)
    ]
    assert civ.settlements.get(first).food_stock == 16


def test_credit_research_starts_next_technology(make_civ):
    civ = make_civ()
    assert civ.credit_research(0) is None
    assert civ.research.current_research() == "Pottery"

    assert civ.credit_research(20) == "Pottery"
    assert civ.research.current_research() == "Wheel"
    assert civ.research.accumulated == 0


def test_reset_movement_covers_all_units(make_civ):
    civ = make_civ()
    handles = [civ.spawn_unit(UnitKind.HORSEMAN, Point(0, i)) for i in range(3)]
    for handle in handles:
        civ.units.get(handle).move(Point(2, 0))

    civ.reset_movement()

    assert all(unit.movement_points == 2 for unit in civ.units)
