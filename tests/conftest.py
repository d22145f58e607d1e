"""
Palette Test Configuration
--------------------------
Shared fixtures and configuration for all tests.
"""

import sys
from pathlib import Path
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from commands import Command, CommandRegistry, CommandSearchEngine, index_command
from infra.logging import reset_logging


# =============================================================================
# Test Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def isolate_logging():
    """Detach any handlers a test installed on the palette logger."""
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def clear_palette_env(monkeypatch):
    """Keep PALETTE_* overrides from the shell out of config tests."""
    import os
    for key in list(os.environ):
        if key.startswith("PALETTE_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Catalogues
# =============================================================================

@pytest.fixture(scope="session")
def project_root():
    """Return the project root path."""
    return PROJECT_ROOT


@pytest.fixture
def scenario_commands():
    """The two-command catalogue used by the ranking scenarios."""
    return [
        {
            "id": "infra:start",
            "label": "Start Infrastructure Service",
            "category": "Infrastructure",
            "keywords": ["docker", "compose"],
        },
        {
            "id": "project:test",
            "label": "Run Tests",
            "category": "Project",
        },
    ]


@pytest.fixture
def engine(scenario_commands):
    return CommandSearchEngine(scenario_commands)


@pytest.fixture
def infra_entry():
    """Index entry exercising every scorer tier."""
    return index_command(Command(
        id="infra:start",
        label="Start Infrastructure Service",
        category="Infrastructure",
        keywords=["docker", "compose"],
        aliases=["spin up containers"],
    ))


@pytest.fixture(scope="session")
def default_registry():
    return CommandRegistry.default()


@pytest.fixture
def default_engine(default_registry):
    return CommandSearchEngine(default_registry.list_commands())
