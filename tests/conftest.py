import pytest

from civclone.engine.civilization import Civilization
from civclone.engine.research import ResearchGraph
from civclone.models.technology import Technology
from civclone.utils.catalog_loader import load_build_templates, load_technologies
from civclone.utils.map_loader import parse_terrain_rows


class ScriptedRandom:
    """Stand-in random source returning scripted choices in order."""

    def __init__(self, picks):
        self.picks = list(picks)

    def choice(self, seq):
        value = self.picks.pop(0)
        assert value in seq
        return value


@pytest.fixture
def technologies() -> list[Technology]:
    return load_technologies()


@pytest.fixture
def templates(technologies):
    return load_build_templates(technologies=technologies)


@pytest.fixture
def research(technologies) -> ResearchGraph:
    return ResearchGraph(technologies)


@pytest.fixture
def grassland():
    """7x7 grid of grassland."""
    return parse_terrain_rows(["GGGGGGG"] * 7)


@pytest.fixture
def tundra():
    """7x7 grid of tundra, which yields nothing."""
    return parse_terrain_rows(["TTTTTTT"] * 7)


@pytest.fixture
def make_civ(technologies):
    def _make(name: str = "Player", is_human: bool = False) -> Civilization:
        return Civilization(name, ResearchGraph(technologies), is_human=is_human)

    return _make


@pytest.fixture
def scripted_rng():
    return ScriptedRandom
