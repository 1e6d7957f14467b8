"""Technology data models."""

from dataclasses import dataclass, field


@dataclass
class Technology:
    """Represents a technology that can be researched.

    Everything except ``researched`` is fixed once the catalog is loaded.
    """

    name: str
    cost: int
    prerequisites: tuple[str, ...] = field(default_factory=tuple)
    researched: bool = False
