"""
Text Utilities
--------------
Normalization and word matching shared by the command index, the token
scorer and the parameter searcher.

A query and a command are always normalized the same way, so a token can
be compared to an indexed word with plain string equality.
"""

from typing import Any, FrozenSet, Iterable, List
import re


# Filler words stripped from queries so "I want to start the backend"
# becomes ["start", "backend"].
STOP_WORDS: FrozenSet[str] = frozenset({
    "to", "the", "a", "an", "in", "on", "for", "my", "i",
    "want", "need", "please", "can", "you", "do", "this", "that",
    "it", "is", "of", "with", "just", "let", "me", "us",
})

_STRIP_RE = re.compile(r"[^a-z0-9\s-]")
_SPLIT_RE = re.compile(r"[\s-]+")


def normalize(text: Any) -> str:
    """Lowercase and drop everything but letters, digits, whitespace and '-'."""
    if not isinstance(text, str):
        return ""
    return _STRIP_RE.sub("", text.lower()).strip()


def extract_words(text: Any) -> List[str]:
    """Normalize and split on whitespace/hyphen runs."""
    return [w for w in _SPLIT_RE.split(normalize(text)) if w]


def extract_all(texts: Iterable[Any]) -> List[str]:
    """Word-split every string of a collection, keeping order."""
    words: List[str] = []
    for text in texts or ():
        words.extend(extract_words(text))
    return words


def tokenize(query: Any) -> List[str]:
    """Split a query into scoring tokens, dropping stop words."""
    return [t for t in extract_words(query) if t not in STOP_WORDS]


def is_prefix(token: str, word: str) -> bool:
    return len(token) >= 1 and word.startswith(token)


def is_subsequence(token: str, word: str) -> bool:
    """
    True when every character of token appears in word, in order.

    Only tokens of two or more characters that are strictly shorter
    than the word qualify.
    """
    if len(token) < 2 or len(token) >= len(word):
        return False
    ti = 0
    for ch in word:
        if ch == token[ti]:
            ti += 1
            if ti == len(token):
                return True
    return False


def acronym(words: Iterable[str]) -> str:
    """First letter of each word, in order."""
    return "".join(w[0] for w in words if w)
