"""
Contract Tests
---------------
API surface tests for the palette search packages.

These tests verify:
- Public symbols exist
- Score tiers keep their values
- Breaking changes cause test failure
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))


class TestCommandsAPI:
    """Verify commands exports."""

    def test_exports_exist(self):
        from commands import (
            Command,
            ParamOption,
            SynonymResolver,
            IndexEntry,
            CommandSearchEngine,
            SearchResult,
            PaletteSession,
            CommandRegistry,
            create_param_searcher,
            score_token,
            score_command,
        )

        assert CommandSearchEngine is not None
        assert create_param_searcher is not None

    def test_engine_methods(self):
        from commands import CommandSearchEngine

        for name in ("search", "search_scored", "set_dynamic_keywords",
                     "clear_dynamic_keywords", "param_searcher"):
            assert callable(getattr(CommandSearchEngine, name))

    def test_score_values(self):
        from commands import Scores

        # These values must remain stable
        assert Scores.EXACT_LABEL == 100
        assert Scores.EXACT_KEYWORD == 90
        assert Scores.EXACT_ALIAS == 85
        assert Scores.VERB_SYNONYM == 80
        assert Scores.TARGET_SYNONYM == 80
        assert Scores.EXACT_CATEGORY == 70
        assert Scores.ID_SEGMENT == 65
        assert Scores.PREFIX_LABEL == 60
        assert Scores.PREFIX_KEYWORD == 55
        assert Scores.ACRONYM == 50
        assert Scores.CONTAINS == 35
        assert Scores.SUBSEQUENCE == 30


class TestCoreErrorsAPI:
    """Verify core.errors exports."""

    def test_exports_exist(self):
        from core.errors import (
            PaletteError,
            CatalogueError,
            ConfigError,
            ErrorCategory,
            describe_error,
        )

        assert issubclass(CatalogueError, PaletteError)
        assert issubclass(ConfigError, PaletteError)

    def test_error_category_values(self):
        from core.errors import ErrorCategory

        assert hasattr(ErrorCategory, 'CATALOGUE_MISSING')
        assert hasattr(ErrorCategory, 'CATALOGUE_INVALID')
        assert hasattr(ErrorCategory, 'CONFIG_INVALID')

    def test_describe_error(self):
        from core.errors import CatalogueError, ErrorCategory, describe_error

        error = CatalogueError("x.yaml", category=ErrorCategory.CATALOGUE_MISSING)
        assert describe_error(error) == "Command catalogue not found. x.yaml"


class TestInfraAPI:
    """Verify infra exports."""

    def test_exports_exist(self):
        from infra import (
            ConfigManager,
            get_logger,
            configure_logging,
            SessionContext,
        )

        assert ConfigManager is not None
        assert SessionContext is not None
