"""
Parameter Search
----------------
Lighter ranking for the second step of a parameterized command, where
the user picks one value (a service, a project, a group) from a flat list.

Only three tiers apply: exact word (100), prefix (60) and substring (35).
"""

from typing import Any, Callable, Iterable, List, Mapping, Union

from .models import ParamOption
from .scorer import coverage_multiplier
from .text import extract_words, is_prefix, tokenize


EXACT = 100
PREFIX = 60
CONTAINS = 35

ParamLike = Union[ParamOption, Mapping[str, Any]]


def _score_param(tokens: List[str], words: List[str], joined: str) -> float:
    total = 0
    matched = 0
    for token in tokens:
        best = 0
        if token in words:
            best = EXACT
        elif any(is_prefix(token, w) for w in words):
            best = PREFIX
        elif len(token) >= 2 and token in joined:
            best = CONTAINS
        total += best
        if best > 0:
            matched += 1
    return total * coverage_multiplier(matched, len(tokens))


def create_param_searcher(params: Iterable[ParamLike]) -> Callable[[Any], List[ParamOption]]:
    """
    Build a search function closed over a parameter list.

    The returned function maps a query to the matching params, best first;
    an empty query returns every param in list order.
    """
    options = [p if isinstance(p, ParamOption) else ParamOption.model_validate(p) for p in params or ()]
    prepared = []
    for option in options:
        words = extract_words(option.label) + extract_words(option.description or "")
        prepared.append((option, words, " ".join(words)))

    def search(query: Any) -> List[ParamOption]:
        tokens = tokenize(query)
        if not tokens:
            return list(options)

        scored = []
        for position, (option, words, joined) in enumerate(prepared):
            score = _score_param(tokens, words, joined)
            if score > 0:
                scored.append((-score, position, option))
        scored.sort(key=lambda item: (item[0], item[1]))
        return [option for _, _, option in scored]

    return search
