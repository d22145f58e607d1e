"""
Synonym Resolver
----------------
Reverse lookup tables from surface words to canonical concepts.

Two vocabularies exist: action verbs (start/stop/build/...) and target
nouns (infrastructure/backend/project/...). A surface word may resolve to
more than one canonical term ("run" is both "start" and "test"); scoring
decides which one the user meant, not the dictionary.

To teach the palette new vocabulary, append to VERB_SYNONYMS or
TARGET_SYNONYMS, or build an extended resolver at runtime:

    resolver = DEFAULT_RESOLVER.extended(verbs={"deploy": ["ship"]})
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional


VERB_SYNONYMS: Dict[str, List[str]] = {
    "start":    ["run", "launch", "boot", "begin", "execute", "spin", "fire", "up", "enable", "activate"],
    "stop":     ["kill", "halt", "terminate", "shutdown", "end", "quit", "down", "disable", "deactivate"],
    "build":    ["compile", "make", "assemble", "package"],
    "test":     ["run", "spec", "unittest", "tests"],
    "clone":    ["download", "checkout", "grab"],
    "update":   ["refresh", "pull", "upgrade", "fetch"],
    "open":     ["edit", "launch", "view", "show"],
    "navigate": ["go", "goto", "switch", "jump", "visit", "nav"],
    "generate": ["gen", "create", "produce", "codegen"],
    "format":   ["fmt", "prettify", "beautify", "pretty", "autoformat"],
    "lint":     ["analyze", "scan", "linter", "check"],
    "validate": ["verify", "check"],
    "sync":     ["synchronize", "reconcile"],
    "copy":     ["cp", "duplicate"],
    "toggle":   ["switch", "flip"],
    "migrate":  ["migration", "migrate"],
    "rollback": ["revert", "undo", "downgrade"],
}

TARGET_SYNONYMS: Dict[str, List[str]] = {
    "infrastructure": ["docker", "container", "infra", "compose", "containers", "services"],
    "backend":        ["api", "server", "go", "golang", "microservice", "microservices"],
    "project":        ["repo", "repository", "submodule", "code", "module", "projects"],
    "migration":      ["db", "database", "schema", "sql", "migrations"],
    "protobuf":       ["proto", "grpc", "buf", "rpc", "protobuf"],
    "environment":    ["env", "config", "dotenv", "vars", "variables", "envvars"],
    "home":           ["dashboard", "main", "landing"],
    "settings":       ["preferences", "prefs", "options", "configuration"],
    "sidebar":        ["panel", "drawer", "menu", "sidenav"],
    "mesh":           ["network", "coordinator", "p2p", "wabisaby"],
    "plugins":        ["extensions", "addons", "capabilities", "workers", "plugin"],
    "activity":       ["logs", "events", "history", "audit"],
    "submodule":      ["submodules", "refs", "gitmodules"],
}

ReverseMap = Mapping[str, FrozenSet[str]]

_EMPTY: FrozenSet[str] = frozenset()


def build_reverse_map(vocabulary: Mapping[str, Iterable[str]]) -> ReverseMap:
    """
    Invert canonical -> synonyms into synonym -> {canonical, ...}.

    Every canonical term also maps to itself. The result is read-only.
    """
    reverse: Dict[str, set] = {}
    for canonical, synonyms in vocabulary.items():
        reverse.setdefault(canonical, set()).add(canonical)
        for synonym in synonyms:
            reverse.setdefault(synonym, set()).add(canonical)
    return MappingProxyType({word: frozenset(c) for word, c in reverse.items()})


class SynonymResolver:
    """
    Immutable pair of reverse maps for the verb and target vocabularies.

    One instance is shared read-only by every index entry built from it.
    """

    def __init__(
        self,
        verbs: Optional[Mapping[str, Iterable[str]]] = None,
        targets: Optional[Mapping[str, Iterable[str]]] = None,
    ):
        self._verb_vocabulary = {k: list(v) for k, v in (verbs if verbs is not None else VERB_SYNONYMS).items()}
        self._target_vocabulary = {k: list(v) for k, v in (targets if targets is not None else TARGET_SYNONYMS).items()}
        self._verbs = build_reverse_map(self._verb_vocabulary)
        self._targets = build_reverse_map(self._target_vocabulary)

    @property
    def verbs(self) -> ReverseMap:
        return self._verbs

    @property
    def targets(self) -> ReverseMap:
        return self._targets

    def resolve_verb(self, word: str) -> FrozenSet[str]:
        """Canonical verbs a surface word stands for (empty if none)."""
        return self._verbs.get(word, _EMPTY)

    def resolve_target(self, word: str) -> FrozenSet[str]:
        """Canonical targets a surface word stands for (empty if none)."""
        return self._targets.get(word, _EMPTY)

    def extended(
        self,
        verbs: Optional[Mapping[str, Iterable[str]]] = None,
        targets: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> "SynonymResolver":
        """Return a new resolver with extra synonyms merged into this one's."""
        return SynonymResolver(
            verbs=_merge(self._verb_vocabulary, verbs),
            targets=_merge(self._target_vocabulary, targets),
        )

    def __repr__(self) -> str:
        return (
            f"SynonymResolver(verbs={len(self._verb_vocabulary)}, "
            f"targets={len(self._target_vocabulary)})"
        )


def _merge(
    base: Mapping[str, List[str]],
    extra: Optional[Mapping[str, Iterable[str]]],
) -> Dict[str, List[str]]:
    merged = {k: list(v) for k, v in base.items()}
    for canonical, synonyms in (extra or {}).items():
        bucket = merged.setdefault(str(canonical).lower(), [])
        for synonym in synonyms or ():
            synonym = str(synonym).lower()
            if synonym not in bucket:
                bucket.append(synonym)
    return merged


# Process-wide resolver, built once at import.
DEFAULT_RESOLVER = SynonymResolver()
