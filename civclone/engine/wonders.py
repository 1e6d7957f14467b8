"""Global wonder ownership shared across civilizations."""

import logging

logger = logging.getLogger(__name__)


class WonderRegistry:
    """Tracks which civilization built each wonder; a wonder is built at most once."""

    def __init__(self) -> None:
        self._owners: dict[str, str] = {}

    def is_built(self, name: str) -> bool:
        return name in self._owners

    def owner_of(self, name: str) -> str | None:
        return self._owners.get(name)

    def claim(self, name: str, civilization: str) -> bool:
        """
        Record a completed wonder for a civilization.

        Returns False if the wonder already has an owner, including the
        claiming civilization itself.
        """
        if name in self._owners:
            return False

        self._owners[name] = civilization
        logger.info("%s completed the %s", civilization, name)
        return True

    def built_by(self, civilization: str) -> list[str]:
        """Wonders owned by a civilization, in completion order."""
        return [name for name, owner in self._owners.items() if owner == civilization]
