"""Research graph with single-slot research progress."""

import logging
from collections.abc import Iterator
from dataclasses import replace

from civclone.models.technology import Technology
from civclone.utils.catalog_loader import validate_technologies

logger = logging.getLogger(__name__)


class ResearchGraph:
    """
    Per-civilization technology tree and research progress.

    Only one technology may be researched at a time. Failed requests are
    reported through return values rather than exceptions because callers
    routinely probe speculatively.
    """

    def __init__(self, technologies: list[Technology]):
        """Initialize from a catalog; each graph gets its own copies."""
        validate_technologies(technologies)
        self._technologies: dict[str, Technology] = {
            tech.name: replace(tech, researched=False) for tech in technologies
        }
        self._current: Technology | None = None
        self._accumulated = 0

    @property
    def accumulated(self) -> int:
        """Research points accumulated toward the current technology."""
        return self._accumulated

    def get(self, name: str) -> Technology | None:
        """Look up a technology by name."""
        return self._technologies.get(name)

    def current_research(self) -> str | None:
        """Name of the technology being researched, or None."""
        return self._current.name if self._current else None

    def is_researched(self, name: str) -> bool:
        """Check if the named technology has been researched."""
        tech = self._technologies.get(name)
        return tech is not None and tech.researched

    def researched_technologies(self) -> list[str]:
        """Names of researched technologies in catalog order."""
        return [tech.name for tech in self._technologies.values() if tech.researched]

    def _prerequisites_met(self, tech: Technology) -> bool:
        return all(self.is_researched(prereq) for prereq in tech.prerequisites)

    def begin_research(self, name: str) -> bool:
        """
        Start researching a technology.

        Returns False without changing anything if the technology is unknown,
        already researched, or has an unresearched prerequisite.
        """
        tech = self._technologies.get(name)
        if tech is None or tech.researched or not self._prerequisites_met(tech):
            return False

        self._current = tech
        self._accumulated = 0
        logger.info("Began researching %s", name)
        return True

    def add_research_points(self, points: int) -> str | None:
        """
        Add research points toward the current technology.

        Excess points beyond the cost are discarded on completion.

        Returns: name of the technology completed by this call, else None
        """
        if self._current is None or points < 0:
            return None

        self._accumulated += points
        if self._accumulated < self._current.cost:
            return None

        completed = self._current
        completed.researched = True
        self._current = None
        self._accumulated = 0
        logger.info("Completed research of %s", completed.name)
        return completed.name

    def available_technologies(self) -> Iterator[str]:
        """Yield researchable technologies in catalog order, from current state."""
        for tech in self._technologies.values():
            if not tech.researched and self._prerequisites_met(tech):
                yield tech.name

    def begin_first_available(self) -> str | None:
        """Begin research on the first available technology, if any."""
        for name in self.available_technologies():
            if self.begin_research(name):
                return name
        return None
