"""Static catalog loaders for technologies and build items."""

import json
from graphlib import CycleError, TopologicalSorter
from pathlib import Path

from civclone.models import BuildItemKind, BuildTemplate
from civclone.models.technology import Technology

DATA_DIR = Path(__file__).parent.parent / "data"


class CatalogError(ValueError):
    """Raised when a static catalog is malformed."""


def validate_technologies(technologies: list[Technology]) -> None:
    """
    Check a technology catalog for startup consistency.

    Rules:
        - names are unique
        - every cost is a positive integer
        - every prerequisite names a technology in the catalog
        - the prerequisite graph has no cycles
    """
    names: set[str] = set()
    for tech in technologies:
        if tech.name in names:
            raise CatalogError(f"Duplicate technology: {tech.name}")
        if tech.cost <= 0:
            raise CatalogError(f"Technology {tech.name} has non-positive cost {tech.cost}")
        names.add(tech.name)

    for tech in technologies:
        for prereq in tech.prerequisites:
            if prereq not in names:
                raise CatalogError(
                    f"Technology {tech.name} requires unknown technology {prereq}"
                )

    graph = {tech.name: set(tech.prerequisites) for tech in technologies}
    try:
        tuple(TopologicalSorter(graph).static_order())
    except CycleError as e:
        cycle = " -> ".join(e.args[1])
        raise CatalogError(f"Technology prerequisites form a cycle: {cycle}") from e


def parse_technologies(data: list[dict]) -> list[Technology]:
    """Build technologies from decoded JSON, preserving catalog order."""
    technologies = []
    for entry in data:
        try:
            technologies.append(
                Technology(
                    name=entry["name"],
                    cost=int(entry["cost"]),
                    prerequisites=tuple(entry.get("prerequisites", ())),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Invalid technology entry {entry!r}: {e}") from e

    validate_technologies(technologies)
    return technologies


def load_technologies(json_path: Path | None = None) -> list[Technology]:
    """Load the technology catalog from data/technologies.json."""
    if json_path is None:
        json_path = DATA_DIR / "technologies.json"

    with open(json_path) as f:
        data = json.load(f)

    return parse_technologies(data)


def parse_build_templates(
    data: list[dict], technologies: list[Technology] | None = None
) -> list[BuildTemplate]:
    """
    Build templates from decoded JSON.

    If ``technologies`` is given, every ``requires`` entry must name one of them.
    """
    known = {tech.name for tech in technologies} if technologies is not None else None
    templates: list[BuildTemplate] = []
    seen: set[str] = set()

    for entry in data:
        try:
            template = BuildTemplate(
                name=entry["name"],
                kind=BuildItemKind(entry["kind"]),
                cost=int(entry["cost"]),
                requires=entry.get("requires"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Invalid build item entry {entry!r}: {e}") from e

        if template.name in seen:
            raise CatalogError(f"Duplicate build item: {template.name}")
        if template.cost <= 0:
            raise CatalogError(f"Build item {template.name} has non-positive cost")
        if template.kind == BuildItemKind.UNIT:
            # Unit items must map onto a known unit kind
            try:
                template.create()
            except ValueError as e:
                raise CatalogError(f"Unknown unit kind: {template.name}") from e
        if known is not None and template.requires and template.requires not in known:
            raise CatalogError(
                f"Build item {template.name} requires unknown technology "
                f"{template.requires}"
            )

        seen.add(template.name)
        templates.append(template)

    return templates


def load_build_templates(
    json_path: Path | None = None, technologies: list[Technology] | None = None
) -> dict[str, BuildTemplate]:
    """Load build templates from data/build_items.json, keyed by name."""
    if json_path is None:
        json_path = DATA_DIR / "build_items.json"

    with open(json_path) as f:
        data = json.load(f)

    return {t.name: t for t in parse_build_templates(data, technologies)}
