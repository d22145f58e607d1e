# Commands module - catalogue, index and intent-aware ranking for the palette
# This module does NOT execute commands, only finds them

from .models import Command, ParamOption
from .synonyms import DEFAULT_RESOLVER, SynonymResolver
from .indexer import IndexEntry, build_index, index_command
from .scorer import Scores, score_command, score_token
from .params import create_param_searcher
from .search import CommandSearchEngine, SearchResult
from .session import PaletteSession
from .registry import CommandRegistry

__all__ = [
    "Command", "ParamOption",
    "DEFAULT_RESOLVER", "SynonymResolver",
    "IndexEntry", "build_index", "index_command",
    "Scores", "score_command", "score_token",
    "create_param_searcher",
    "CommandSearchEngine", "SearchResult",
    "PaletteSession",
    "CommandRegistry",
]
