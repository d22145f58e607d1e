"""
Command Search Engine
---------------------
Intent-aware ranking of the command catalogue for the palette.

Goes beyond substring matching: synonyms ("run" finds both start and
test commands), targets ("docker" finds infrastructure commands),
prefixes, acronyms, subsequences and live vocabulary injected at
runtime via set_dynamic_keywords().

Pipeline per query: tokenize -> score every entry -> coverage penalty
-> drop zero scores -> sort. An empty query (or only stop words) returns
the whole catalogue in its original order.

No I/O, no blocking, nothing raises on the search path.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from core.errors import CatalogueError, ErrorCategory
from infra.logging import get_logger

from .indexer import IndexEntry, build_index
from .models import Command, ParamOption
from .params import create_param_searcher
from .scorer import score_command
from .synonyms import DEFAULT_RESOLVER, SynonymResolver
from .text import tokenize


CommandLike = Union[Command, Mapping[str, Any]]


@dataclass(frozen=True)
class SearchResult:
    """A ranked command with its coverage-adjusted score."""
    command: Command
    score: float

    @property
    def command_id(self) -> str:
        return self.command.id


def coerce_commands(records: Iterable[CommandLike]) -> List[Command]:
    """Validate raw records into Commands, naming the first bad one."""
    commands: List[Command] = []
    for position, record in enumerate(records or ()):
        if isinstance(record, Command):
            commands.append(record)
            continue
        try:
            commands.append(Command.model_validate(record))
        except ValidationError as e:
            raise CatalogueError(
                f"Invalid command at position {position}: {e.errors()[0]['msg']}",
                category=ErrorCategory.CATALOGUE_INVALID,
                details={"position": position, "errors": e.errors()},
            ) from e
    return commands


class CommandSearchEngine:
    """
    Ranks a fixed command catalogue against free-text queries.

    The catalogue and its index are built together at construction and
    live as long as the engine. The only later mutation is the dynamic
    keyword cell of each entry.
    """

    def __init__(
        self,
        commands: Iterable[CommandLike],
        resolver: Optional[SynonymResolver] = None,
    ):
        self._logger = get_logger("commands.search")
        self._resolver = resolver or DEFAULT_RESOLVER
        self._commands: List[Command] = coerce_commands(commands)
        self._index: List[IndexEntry] = build_index(self._commands, self._resolver)
        self._by_id: Dict[str, IndexEntry] = {}
        for entry in self._index:
            self._by_id.setdefault(entry.command_id, entry)

        self._logger.info(f"Indexed {len(self._index)} commands")

    @property
    def commands(self) -> List[Command]:
        """The catalogue, in original order."""
        return list(self._commands)

    @property
    def index(self) -> Sequence[IndexEntry]:
        return tuple(self._index)

    def get_entry(self, command_id: str) -> Optional[IndexEntry]:
        return self._by_id.get(command_id)

    # ------------------------------------------------------------------
    # Dynamic keywords
    # ------------------------------------------------------------------

    def set_dynamic_keywords(self, command_id: str, keywords: Iterable[str]) -> bool:
        """
        Replace the runtime keywords of one command.

        Unknown ids are ignored (the caller may race the catalogue load).
        Returns True when a command was updated.
        """
        entry = self._by_id.get(command_id)
        if entry is None:
            self._logger.debug(
                f"Dynamic keywords for unknown command ignored: {command_id}",
                extra={"command_id": command_id},
            )
            return False
        snapshot = entry.dynamic.replace(keywords or ())
        self._logger.debug(
            f"Dynamic keywords for {command_id}: {list(snapshot.words)}",
            extra={"command_id": command_id},
        )
        return True

    def clear_dynamic_keywords(self) -> None:
        """Drop the runtime keywords of every command."""
        for entry in self._index:
            entry.dynamic.clear()
        self._logger.debug("Dynamic keywords cleared")

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_scored(self, query: Any) -> List[SearchResult]:
        """
        Rank the catalogue against a query, keeping scores.

        Equal scores keep catalogue order.
        """
        tokens = tokenize(query)
        if not tokens:
            return [SearchResult(command=cmd, score=0.0) for cmd in self._commands]

        scored = []
        for position, entry in enumerate(self._index):
            score, _ = score_command(tokens, entry, self._resolver)
            if score > 0:
                scored.append((-score, position, entry.command))

        scored.sort(key=lambda item: (item[0], item[1]))
        self._logger.debug(
            f"Query tokens={tokens} hits={len(scored)}",
            extra={"tokens": tokens, "hits": len(scored)},
        )
        return [SearchResult(command=cmd, score=-neg) for neg, _, cmd in scored]

    def search(self, query: Any) -> List[Command]:
        """Commands ordered by relevance; all commands for an empty query."""
        return [result.command for result in self.search_scored(query)]

    def param_searcher(self, command_id: str) -> Optional[Callable[[Any], List[ParamOption]]]:
        """Searcher over a command's static parameter list, or None if unknown."""
        entry = self._by_id.get(command_id)
        if entry is None:
            return None
        return create_param_searcher(entry.command.params)

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, command_id: str) -> bool:
        return command_id in self._by_id
