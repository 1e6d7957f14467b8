"""Civilization turn simulation CLI."""

import argparse
import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from civclone.config import GameConfig
from civclone.engine.civilization import Civilization
from civclone.engine.computer_player import ComputerPlayer
from civclone.engine.orchestrator import TurnOrchestrator, TurnReport
from civclone.engine.research import ResearchGraph
from civclone.engine.settlement import UnitProduced
from civclone.engine.wonders import WonderRegistry
from civclone.models import BuildItemKind, BuildTemplate, UnitKind
from civclone.utils.catalog_loader import load_build_templates, load_technologies
from civclone.utils.map_loader import generate_terrain, load_terrain_file

console = Console()

# Queued in order whenever a settlement has nothing to build
DEFAULT_BUILDS = ("Warrior", "Barracks", "Granary", "Temple", "Pyramids")


@dataclass
class Game:
    """Everything the game loop needs between turns."""

    orchestrator: TurnOrchestrator
    templates: dict[str, BuildTemplate]


def create_game(config: GameConfig) -> Game:
    """Build terrain, catalogs and civilizations from a config."""
    rng = random.Random(config.seed)

    if config.map_file:
        terrain = load_terrain_file(config.map_file)
    else:
        terrain = generate_terrain(config.width, config.height, rng)

    technologies = load_technologies(config.technologies_file)
    templates = load_build_templates(config.build_items_file, technologies)

    human = Civilization("Player", ResearchGraph(technologies), is_human=True)
    human.spawn_unit(
        UnitKind.SETTLER, config.start_for_human(terrain.width, terrain.height)
    )

    computers = []
    for i in range(config.computer_players):
        civ = Civilization(f"AI {i + 1}", ResearchGraph(technologies))
        civ.spawn_unit(
            UnitKind.SETTLER,
            config.start_for_computer(i, terrain.width, terrain.height),
        )
        # Each computer player draws from its own seeded stream
        computers.append(ComputerPlayer(civ, random.Random(rng.getrandbits(32))))

    def spawn(civ: Civilization, produced: UnitProduced) -> None:
        civ.spawn_unit(produced.kind, produced.location)

    orchestrator = TurnOrchestrator(
        terrain=terrain, human=human, computers=computers, on_unit_produced=spawn
    )
    return Game(orchestrator=orchestrator, templates=templates)


def play_human_turn(game: Game) -> None:
    """Stand-in for human input: found with settlers, keep queues busy."""
    human = game.orchestrator.human
    for handle in human.units.handles():
        human.found_settlement(handle)

    for civ in game.orchestrator.civilizations():
        queue_default_builds(civ, game.templates, game.orchestrator.wonders)


def queue_default_builds(
    civ: Civilization, templates: dict[str, BuildTemplate], wonders: WonderRegistry
) -> None:
    """Give every idle settlement the default build order, minus built wonders."""
    defaults = [templates[name] for name in DEFAULT_BUILDS if name in templates]
    for settlement in civ.settlements:
        if settlement.current_build_item is not None:
            continue
        for template in defaults:
            if template.kind == BuildItemKind.WONDER and wonders.is_built(
                template.name
            ):
                continue
            if civ.can_build(template) and not settlement.has_improvement(template.name):
                settlement.enqueue_build_item(template.create())


def run_game(game: Game, turns: int) -> list[TurnReport]:
    """Play a number of turns and return their reports."""
    reports = []
    for _ in range(turns):
        play_human_turn(game)
        reports.append(game.orchestrator.end_turn())
    return reports


def create_status_table(game: Game) -> Table:
    """Create a rich table summarizing every civilization."""
    orchestrator = game.orchestrator
    table = Table(
        title=f"Turn {orchestrator.turn}", show_header=True, header_style="bold magenta"
    )

    table.add_column("Civilization", style="cyan", width=14)
    table.add_column("Cities", style="green", width=7, justify="right")
    table.add_column("Pop", style="green", width=5, justify="right")
    table.add_column("Units", style="yellow", width=6, justify="right")
    table.add_column("Researching", style="blue", width=20)
    table.add_column("Known", style="white", width=6, justify="right")
    table.add_column("Wonders", style="magenta", width=24)

    for civ in orchestrator.civilizations():
        research = orchestrator.current_research(civ.name)
        progress = f" ({civ.research.accumulated})" if research else ""
        table.add_row(
            civ.name,
            str(len(civ.settlements)),
            str(civ.population),
            str(len(civ.units)),
            f"{research or '-'}{progress}",
            str(len(civ.research.researched_technologies())),
            ", ".join(orchestrator.wonders.built_by(civ.name)) or "-",
        )

    return table


def export_summary(game: Game, path: Path) -> None:
    """Write the final state of every civilization to JSON."""
    orchestrator = game.orchestrator
    export_data = {
        "turn": orchestrator.turn,
        "civilizations": [
            {
                "name": civ.name,
                "human": civ.is_human,
                "government": civ.government.government_type.value,
                "researching": civ.research.current_research(),
                "researched": civ.research.researched_technologies(),
                "settlements": [
                    {
                        "name": s.name,
                        "location": list(s.location),
                        "population": s.population,
                        "improvements": sorted(
                            name for name, present in s.improvements.items() if present
                        ),
                        "queue": [str(item) for item in s.build_queue],
                    }
                    for s in civ.settlements
                ],
                "units": [
                    {"kind": u.kind.value, "position": list(u.position)}
                    for u in civ.units
                ],
            }
            for civ in orchestrator.civilizations()
        ],
    }
    path.write_text(json.dumps(export_data, indent=2))


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Civilization turn simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                            # Simulate 50 turns on a random map
  %(prog)s --turns 200 --seed 7       # Reproducible longer game
  %(prog)s --config my_game.json      # Load custom configuration
  %(prog)s --quiet                    # Minimal output
  %(prog)s --export summary.json      # Export final state to JSON
        """,
    )

    parser.add_argument(
        "--turns", type=int, default=50, help="Turns to simulate (default: 50)"
    )
    parser.add_argument("--seed", type=int, help="Random seed (overrides config)")
    parser.add_argument(
        "--computer-players",
        type=int,
        help="Number of computer civilizations (overrides config)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to game configuration JSON file",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Minimal output (only final turn and research counts)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show per-settlement events"
    )
    parser.add_argument("--export", type=Path, help="Export final state to JSON file")

    return parser.parse_args()


def configure_logging(verbose: bool, quiet: bool) -> None:
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main() -> None:
    """Run the turn simulation with CLI."""
    args = parse_args()
    configure_logging(args.verbose, args.quiet)

    config = GameConfig.load(args.config)
    if args.seed is not None:
        config.seed = args.seed
    if args.computer_players is not None:
        config.computer_players = args.computer_players

    game = create_game(config)

    if not args.quiet:
        terrain = game.orchestrator.terrain
        console.print(
            Panel.fit(
                "[bold cyan]CivClone[/bold cyan]\n[yellow]Turn Simulation[/yellow]",
                border_style="blue",
            )
        )
        console.print(
            f"\n[bold]Map:[/bold] [magenta]{terrain.width}x{terrain.height}[/magenta]  "
            f"[bold]Computer players:[/bold] [magenta]{len(game.orchestrator.computers)}"
            f"[/magenta]  [bold]Seed:[/bold] [magenta]{config.seed}[/magenta]"
        )
        console.print("\n[bold magenta]Simulating...[/bold magenta]\n")

    run_game(game, args.turns)

    if not args.quiet:
        console.print()
        console.print(create_status_table(game))
    else:
        print(game.orchestrator.turn)
        for civ in game.orchestrator.civilizations():
            print(f"{civ.name}: {len(civ.research.researched_technologies())}")

    if args.export:
        export_summary(game, args.export)
        if not args.quiet:
            console.print(f"\n[green]✓ Exported to {args.export}[/green]")


if __name__ == "__main__":
    main()
