#!/usr/bin/env python3
"""
Command Palette Search
======================

Ranks the command catalogue against a free-text query, the way the
palette does on every keystroke.

Usage:
    python main.py run tests                 # rank the catalogue
    python main.py --dynamic infra:start=redis,postgres redis
    python main.py --param backend:start-group me
    python main.py --group docker            # group results by category
    python main.py --interactive             # one query per line
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from commands import CommandRegistry, CommandSearchEngine, PaletteSession, SynonymResolver
from commands.registry import DEFAULT_CATALOGUE
from commands.search import SearchResult
from core.errors import ConfigError, PaletteError, describe_error, log_error
from infra.config import ConfigManager
from infra.logging import configure_logging, get_logger


console = Console()


def parse_dynamic(values: Optional[Sequence[str]]) -> Dict[str, List[str]]:
    """Parse repeated 'ID=word,word' options into a mapping."""
    dynamic: Dict[str, List[str]] = {}
    for value in values or ():
        command_id, sep, words = value.partition("=")
        if not sep or not command_id.strip():
            raise argparse.ArgumentTypeError(f"expected ID=word[,word...], got {value!r}")
        dynamic.setdefault(command_id.strip(), []).extend(
            w.strip() for w in words.split(",") if w.strip()
        )
    return dynamic


def load_vocabulary(config: ConfigManager, key: str) -> Dict[str, List[str]]:
    """Read a {canonical: [synonym, ...]} mapping from config."""
    value = config.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(
            f"{key} must map canonical terms to lists of synonyms, got {type(value).__name__}",
            details={"key": key},
        )
    vocabulary: Dict[str, List[str]] = {}
    for canonical, synonyms in value.items():
        if synonyms is None:
            synonyms = []
        if not isinstance(synonyms, list) or not all(isinstance(s, str) for s in synonyms):
            raise ConfigError(
                f"{key}.{canonical} must be a list of strings",
                details={"key": f"{key}.{canonical}"},
            )
        vocabulary[str(canonical)] = synonyms
    return vocabulary


def build_engine(registry: CommandRegistry, config: ConfigManager) -> CommandSearchEngine:
    """Engine over the registry, with configured vocabulary extensions."""
    verbs = load_vocabulary(config, "vocabulary.verbs")
    targets = load_vocabulary(config, "vocabulary.targets")
    resolver = None
    if verbs or targets:
        resolver = SynonymResolver().extended(verbs=verbs, targets=targets)
    return CommandSearchEngine(registry.list_commands(), resolver=resolver)


def print_results(
    results: List[SearchResult],
    registry: CommandRegistry,
    limit: int = 0,
    group: bool = False,
) -> None:
    """Print ranked commands as a table, optionally grouped by category."""
    if limit > 0:
        results = results[:limit]
    if not results:
        console.print("[yellow]No matching commands[/yellow]")
        return

    scores = {r.command_id: r.score for r in results}
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Command")
    table.add_column("Label")
    if not group:
        table.add_column("Category", style="dim")
    table.add_column("Score", justify="right")

    if group:
        rank = 0
        for category, commands in registry.group_by_category([r.command for r in results]):
            table.add_row("", f"[bold]{category}[/bold]", "", "")
            for cmd in commands:
                rank += 1
                table.add_row(str(rank), cmd.id, cmd.label, f"{scores[cmd.id]:.1f}")
    else:
        for rank, result in enumerate(results, start=1):
            cmd = result.command
            table.add_row(str(rank), cmd.id, cmd.label, cmd.category, f"{result.score:.1f}")

    console.print(table)


def print_params(engine: CommandSearchEngine, command_id: str, query: str) -> bool:
    """Rank the parameter list of one command. Returns False if unknown."""
    searcher = engine.param_searcher(command_id)
    if searcher is None:
        console.print(f"[red]Unknown command:[/red] {command_id}")
        return False

    params = searcher(query)
    if not params:
        console.print("[yellow]No matching parameters[/yellow]")
        return True

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Param")
    table.add_column("Label")
    table.add_column("Description", style="dim")
    for rank, param in enumerate(params, start=1):
        table.add_row(str(rank), param.id, param.label, param.description or "")
    console.print(table)
    return True


def run_interactive(
    engine: CommandSearchEngine,
    registry: CommandRegistry,
    limit: int = 0,
    group: bool = False,
) -> None:
    """Read one query per line until EOF or ':q'."""
    console.print(Panel(
        "Type a query to rank commands.\n"
        ":param ID QUERY  rank a command's parameters\n"
        ":clear           drop live keywords\n"
        ":q               quit",
        title="Command Palette",
        border_style="cyan",
    ))

    while True:
        try:
            text = console.input("\n[bold cyan]>[/bold cyan] ").strip()
        except (KeyboardInterrupt, EOFError):
            break

        if text in (":q", ":quit"):
            break
        if text == ":clear":
            engine.clear_dynamic_keywords()
            console.print("[dim]Live keywords cleared[/dim]")
            continue
        if text.startswith(":param"):
            _, _, rest = text.partition(" ")
            command_id, _, query = rest.strip().partition(" ")
            if not command_id:
                console.print("[yellow]Usage: :param ID QUERY[/yellow]")
                continue
            print_params(engine, command_id, query)
            continue

        print_results(engine.search_scored(text), registry, limit=limit, group=group)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command Palette Search - intent-aware command ranking"
    )
    parser.add_argument(
        "query",
        nargs="*",
        help="Search query (empty lists every command)"
    )
    parser.add_argument(
        "--catalogue", "-f",
        default=None,
        help=f"Command catalogue YAML (default: {DEFAULT_CATALOGUE.name})"
    )
    parser.add_argument(
        "--config", "-c",
        default="config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--log-level", "-l",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    parser.add_argument(
        "--dynamic", "-d",
        action="append",
        metavar="ID=WORDS",
        help="Live keywords for a command, e.g. infra:start=redis,postgres (repeatable)"
    )
    parser.add_argument(
        "--param", "-p",
        metavar="ID",
        help="Rank this command's parameter list instead of the catalogue"
    )
    parser.add_argument(
        "--group", "-g",
        action="store_true",
        help="Group results by category"
    )
    parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Show at most N results (0 = all)"
    )
    parser.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Read queries from the terminal"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        dynamic = parse_dynamic(args.dynamic)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    logger = get_logger("main")

    try:
        config = ConfigManager(args.config)
        level = args.log_level or str(config.get("logging.level", "WARNING")).upper()
        configure_logging(
            level=getattr(logging, level, logging.WARNING),
            log_dir=config.get("logging.dir"),
            file=config.get_bool("logging.file"),
        )

        catalogue = args.catalogue or config.get("catalogue.path") or DEFAULT_CATALOGUE
        registry = CommandRegistry(Path(catalogue))
        engine = build_engine(registry, config)
        limit = args.limit if args.limit is not None else config.get_int("search.limit")
        query = " ".join(args.query)

        with PaletteSession(engine, dynamic):
            if args.interactive:
                run_interactive(engine, registry, limit=limit, group=args.group)
            elif args.param:
                if not print_params(engine, args.param, query):
                    return 1
            else:
                print_results(engine.search_scored(query), registry, limit=limit, group=args.group)

        return 0

    except PaletteError as e:
        log_error(e, logger)
        console.print(f"[bold red]Error:[/bold red] {describe_error(e)}")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
