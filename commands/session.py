"""
Palette Session
---------------
Scopes live vocabulary to one opening of the palette.

On enter the session pushes dynamic keywords (service names, project
names, ...) into the engine; on exit it clears them again. The engine
never clears them on its own.
"""

from typing import Dict, Iterable, Mapping, Optional

from infra.logging import SessionContext, get_logger

from .search import CommandSearchEngine


class PaletteSession:
    """
    Usage:
        with PaletteSession(engine, {"infra:start": ["redis", "postgres"]}):
            engine.search("redis")
    """

    def __init__(
        self,
        engine: CommandSearchEngine,
        dynamic_keywords: Optional[Mapping[str, Iterable[str]]] = None,
        session_id: Optional[str] = None,
    ):
        self._engine = engine
        self._dynamic_keywords: Dict[str, list] = {
            cid: list(words) for cid, words in (dynamic_keywords or {}).items()
        }
        self._context = SessionContext(session_id)
        self._logger = get_logger("commands.session")

    @property
    def session_id(self) -> str:
        return self._context.session_id

    def update(self, command_id: str, keywords: Iterable[str]) -> bool:
        """Push keywords fetched after the session opened."""
        words = list(keywords)
        self._dynamic_keywords[command_id] = words
        return self._engine.set_dynamic_keywords(command_id, words)

    def __enter__(self) -> "PaletteSession":
        self._context.__enter__()
        applied = sum(
            self._engine.set_dynamic_keywords(cid, words)
            for cid, words in self._dynamic_keywords.items()
        )
        self._logger.info(f"Palette session opened ({applied} commands with live keywords)")
        return self

    def __exit__(self, *args) -> None:
        try:
            self._engine.clear_dynamic_keywords()
            self._logger.info("Palette session closed")
        finally:
            self._context.__exit__(*args)
