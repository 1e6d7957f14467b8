"""Game setup configuration."""

import json
from dataclasses import dataclass, field
from pathlib import Path

from civclone.models import Point

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 50


@dataclass
class GameConfig:
    """Settings for building a new game."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    computer_players: int = 1
    seed: int | None = None
    map_file: Path | None = None
    technologies_file: Path | None = None
    build_items_file: Path | None = None
    human_start: Point | None = None  # defaults to the map centre
    computer_starts: list[Point] = field(default_factory=lambda: [Point(5, 5)])

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid map size {self.width}x{self.height}")
        if self.computer_players < 0:
            raise ValueError(
                f"computer_players must be non-negative, got {self.computer_players}"
            )

    def start_for_human(self, width: int, height: int) -> Point:
        return self.human_start or Point(width // 2, height // 2)

    def start_for_computer(self, index: int, width: int, height: int) -> Point:
        """
        Starting settler position for the index-th computer player.

        Players beyond the configured starts are spread along the diagonal.
        """
        if index < len(self.computer_starts):
            return self.computer_starts[index]
        return Point((5 + index * 7) % width, (5 + index * 5) % height)

    @classmethod
    def from_dict(cls, data: dict) -> "GameConfig":
        """Build a config from decoded JSON, ignoring unknown keys."""

        def _path(key: str) -> Path | None:
            value = data.get(key)
            return Path(value) if value else None

        def _point(value: list[int] | None) -> Point | None:
            return Point(*value) if value is not None else None

        defaults = cls()
        return cls(
            width=int(data.get("width", defaults.width)),
            height=int(data.get("height", defaults.height)),
            computer_players=int(data.get("computer_players", defaults.computer_players)),
            seed=data.get("seed"),
            map_file=_path("map_file"),
            technologies_file=_path("technologies_file"),
            build_items_file=_path("build_items_file"),
            human_start=_point(data.get("human_start")),
            computer_starts=[
                Point(*p) for p in data.get("computer_starts", defaults.computer_starts)
            ],
        )

    @classmethod
    def from_json(cls, path: Path) -> "GameConfig":
        with open(path) as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def load(cls, path: Path | None = None) -> "GameConfig":
        """Load from a JSON file, or use defaults when no path is given."""
        if path is None:
            return cls()
        return cls.from_json(path)
