"""
Token Scorer
------------
Scores query tokens against indexed commands.

A token receives the highest score of any matcher that fires:

    | Matcher             | Score | Rule                                   |
    |---------------------|-------|----------------------------------------|
    | Exact label word    |  100  | token == a label word                  |
    | Exact keyword       |   90  | token == a static or dynamic keyword   |
    | Exact alias word    |   85  | token == a word of an alias            |
    | Verb synonym        |   80  | token resolves to one of cmd's verbs   |
    | Target synonym      |   80  | token resolves to one of cmd's targets |
    | Exact category word |   70  | token == a category word               |
    | ID segment          |   65  | token == a segment of the command id   |
    | Prefix on label     |   60  | token prefixes a label word            |
    | Prefix on keyword   |   55  | token prefixes a keyword               |
    | Acronym             |   50  | label initials start with token        |
    | Contains            |   35  | label/keyword text contains token      |
    | Subsequence         |   30  | token chars appear in order in a word  |

Command score = sum(token scores) * (0.3 + 0.7 * matched / total)
"""

from typing import List, Sequence, Tuple

from .indexer import IndexEntry
from .synonyms import DEFAULT_RESOLVER, SynonymResolver
from .text import is_prefix, is_subsequence


class Scores:
    """Score awarded by each matcher."""
    EXACT_LABEL = 100
    EXACT_KEYWORD = 90
    EXACT_ALIAS = 85
    VERB_SYNONYM = 80
    TARGET_SYNONYM = 80
    EXACT_CATEGORY = 70
    ID_SEGMENT = 65
    PREFIX_LABEL = 60
    PREFIX_KEYWORD = 55
    ACRONYM = 50
    CONTAINS = 35
    SUBSEQUENCE = 30


COVERAGE_FLOOR = 0.3
COVERAGE_WEIGHT = 0.7


def coverage_multiplier(matched: int, total: int) -> float:
    """0.3 + 0.7 * matched/total; 0.0 when there are no tokens."""
    if total <= 0:
        return 0.0
    return COVERAGE_FLOOR + COVERAGE_WEIGHT * (matched / total)


def score_token(
    token: str,
    entry: IndexEntry,
    resolver: SynonymResolver = DEFAULT_RESOLVER,
) -> int:
    """
    Best score of one normalized token against one index entry.

    Lower tiers are skipped once a stronger match is in hand; the result
    is still the maximum over all matchers.
    """
    if not token:
        return 0

    dynamic = entry.dynamic.snapshot
    best = 0

    if token in entry.label_words:
        return Scores.EXACT_LABEL

    if token in entry.keywords or token in dynamic.words:
        best = Scores.EXACT_KEYWORD

    if best < Scores.EXACT_ALIAS and token in entry.alias_words:
        best = Scores.EXACT_ALIAS

    if best >= Scores.VERB_SYNONYM:
        return best

    if not resolver.resolve_verb(token).isdisjoint(entry.verbs):
        return Scores.VERB_SYNONYM
    if not resolver.resolve_target(token).isdisjoint(entry.targets):
        return Scores.TARGET_SYNONYM

    if token in entry.category_words:
        return Scores.EXACT_CATEGORY
    if token in entry.id_segments:
        return Scores.ID_SEGMENT

    if any(is_prefix(token, w) for w in entry.label_words):
        return Scores.PREFIX_LABEL
    if any(is_prefix(token, w) for w in entry.keywords) or any(
        is_prefix(token, w) for w in dynamic.words
    ):
        return Scores.PREFIX_KEYWORD

    # Single characters only qualify for the exact and prefix tiers
    if len(token) < 2:
        return 0

    if entry.acronym.startswith(token):
        return Scores.ACRONYM

    if token in entry.label_str or token in entry.keyword_str or token in dynamic.joined:
        return Scores.CONTAINS

    for word in (*entry.label_words, *entry.keywords, *dynamic.words):
        if is_subsequence(token, word):
            return Scores.SUBSEQUENCE

    return 0


def score_command(
    tokens: Sequence[str],
    entry: IndexEntry,
    resolver: SynonymResolver = DEFAULT_RESOLVER,
) -> Tuple[float, int]:
    """
    Coverage-adjusted score of a whole query against one entry.

    Returns (score, matched_token_count).
    """
    total = 0
    matched = 0
    for token in tokens:
        token_score = score_token(token, entry, resolver)
        total += token_score
        if token_score > 0:
            matched += 1
    if matched == 0:
        return 0.0, 0
    return total * coverage_multiplier(matched, len(tokens)), matched


def token_breakdown(
    tokens: Sequence[str],
    entry: IndexEntry,
    resolver: SynonymResolver = DEFAULT_RESOLVER,
) -> List[Tuple[str, int]]:
    """Per-token scores, for explaining a ranking."""
    return [(token, score_token(token, entry, resolver)) for token in tokens]
