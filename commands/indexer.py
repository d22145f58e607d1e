"""
Command Indexer
---------------
Pre-computes, once per command, every derived field the token scorer
needs, so nothing is re-derived on each keystroke.

Every field of an IndexEntry is write-once except the dynamic keyword
cell, which collaborators replace at runtime with live vocabulary
(service names, project names, ...).
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Sequence, Tuple
import threading

from .models import Command, ID_DELIMITER
from .synonyms import DEFAULT_RESOLVER, SynonymResolver
from .text import acronym, extract_all, extract_words, normalize


@dataclass(frozen=True)
class DynamicKeywordSnapshot:
    """Immutable view of one command's runtime keywords."""
    words: Tuple[str, ...] = ()
    joined: str = ""


_EMPTY_SNAPSHOT = DynamicKeywordSnapshot()


class DynamicKeywords:
    """
    The single mutable cell of an index entry.

    Writers swap in a whole new snapshot; readers take the current one
    and never see a half-written list.
    """

    def __init__(self):
        self._snapshot = _EMPTY_SNAPSHOT
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> DynamicKeywordSnapshot:
        return self._snapshot

    def replace(self, raw: Iterable[str]) -> DynamicKeywordSnapshot:
        if isinstance(raw, str):
            raw = [raw]
        words = tuple(extract_all(raw))
        snapshot = DynamicKeywordSnapshot(words=words, joined=" ".join(words))
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def clear(self) -> None:
        with self._lock:
            self._snapshot = _EMPTY_SNAPSHOT

    def __repr__(self) -> str:
        return f"DynamicKeywords({list(self._snapshot.words)})"


@dataclass(frozen=True)
class IndexEntry:
    """Searchable metadata for one command."""
    command: Command
    label_words: Tuple[str, ...]
    keywords: Tuple[str, ...]
    alias_words: Tuple[str, ...]
    category_words: Tuple[str, ...]
    id_segments: Tuple[str, ...]
    acronym: str
    verbs: FrozenSet[str]
    targets: FrozenSet[str]
    label_str: str
    keyword_str: str
    dynamic: DynamicKeywords = field(default_factory=DynamicKeywords, compare=False)

    @property
    def command_id(self) -> str:
        return self.command.id


def index_command(command: Command, resolver: SynonymResolver = DEFAULT_RESOLVER) -> IndexEntry:
    """Build the index entry for a single command."""
    label_words = tuple(extract_words(command.label))
    keywords = tuple(extract_all(command.keywords))
    alias_words = tuple(extract_all(command.aliases))
    category_words = tuple(extract_words(command.category))
    id_segments = tuple(normalize(s) for s in command.id.split(ID_DELIMITER))

    verbs = set()
    targets = set()
    for word in {*label_words, *keywords, *alias_words, *category_words, *id_segments}:
        verbs.update(resolver.resolve_verb(word))
        targets.update(resolver.resolve_target(word))

    return IndexEntry(
        command=command,
        label_words=label_words,
        keywords=keywords,
        alias_words=alias_words,
        category_words=category_words,
        id_segments=id_segments,
        acronym=acronym(label_words),
        verbs=frozenset(verbs),
        targets=frozenset(targets),
        label_str=" ".join(label_words),
        keyword_str=" ".join(keywords),
    )


def build_index(
    commands: Sequence[Command],
    resolver: SynonymResolver = DEFAULT_RESOLVER,
) -> List[IndexEntry]:
    """One entry per command, in catalogue order."""
    return [index_command(cmd, resolver) for cmd in commands]
