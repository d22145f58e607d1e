"""
Logging and Session Tests
-------------------------
session_id propagation, JSON file output and the palette session that
scopes live keywords.
"""

import json
import logging
import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from commands import CommandSearchEngine, PaletteSession
from infra.logging import (
    JSONFormatter, SessionContext, SessionIdFilter,
    configure_logging, get_log_file_path, get_logger, get_session_id,
)


class TestGetLogger:
    """Tests for get_logger()."""

    def test_prefixes_namespace(self):
        assert get_logger("commands.search").name == "palette.commands.search"

    def test_keeps_existing_prefix(self):
        assert get_logger("palette.main").name == "palette.main"
        assert get_logger("palette").name == "palette"


class TestSessionContext:
    """Tests for session_id propagation."""

    def test_sets_and_resets(self):
        assert get_session_id() is None
        with SessionContext("session_abc") as session_id:
            assert session_id == "session_abc"
            assert get_session_id() == "session_abc"
        assert get_session_id() is None

    def test_generates_id(self):
        with SessionContext() as session_id:
            assert session_id.startswith("session_")

    def test_filter_attaches_session_id(self):
        record = logging.LogRecord("palette.test", logging.INFO, __file__, 1, "msg", None, None)
        with SessionContext("session_xyz"):
            SessionIdFilter().filter(record)
        assert record.session_id == "session_xyz"

    def test_json_formatter(self):
        record = logging.LogRecord("palette.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        record.session_id = "session_1"
        record.hits = 3
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "hello world"
        assert entry["session_id"] == "session_1"
        assert entry["hits"] == 3


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_file_output(self, tmp_path):
        configure_logging(level=logging.DEBUG, log_dir=str(tmp_path), console=False, file=True)
        with SessionContext("session_file"):
            get_logger("test").info("written")
        for handler in logging.getLogger("palette").handlers:
            handler.flush()

        log_file = get_log_file_path()
        assert log_file == tmp_path / "palette.log"
        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert lines[-1]["message"] == "written"
        assert lines[-1]["session_id"] == "session_file"

    def test_idempotent(self, tmp_path):
        configure_logging(console=True, file=False)
        configure_logging(console=True, file=False)
        assert len(logging.getLogger("palette").handlers) == 1


class TestPaletteSession:
    """Live keywords are scoped to one palette session."""

    def test_applies_and_clears(self, scenario_commands):
        engine = CommandSearchEngine(scenario_commands)
        with PaletteSession(engine, {"infra:start": ["redis"], "nope:missing": ["x"]}) as session:
            assert session.session_id.startswith("session_")
            assert [c.id for c in engine.search("redis")] == ["infra:start"]
        assert engine.search("redis") == []

    def test_update_during_session(self, scenario_commands):
        engine = CommandSearchEngine(scenario_commands)
        with PaletteSession(engine) as session:
            assert session.update("project:test", ["wabisaby-core"])
            assert [c.id for c in engine.search("wabisaby")] == ["project:test"]
        assert engine.search("wabisaby") == []

    def test_logs_open_and_close(self, scenario_commands, caplog):
        engine = CommandSearchEngine(scenario_commands)
        caplog.set_level(logging.INFO, logger="palette")
        with PaletteSession(engine, session_id="session_log"):
            pass
        messages = [r.getMessage() for r in caplog.records if r.name == "palette.commands.session"]
        assert any("opened" in m for m in messages)
        assert any("closed" in m for m in messages)
        assert get_session_id() is None


class TestStructuredFields:
    """Engine log records carry the fields JSONFormatter writes out."""

    def test_search_record(self, scenario_commands, caplog):
        engine = CommandSearchEngine(scenario_commands)
        caplog.set_level(logging.DEBUG, logger="palette")
        engine.search("docker")
        record = [r for r in caplog.records if r.getMessage().startswith("Query tokens=")][-1]
        assert record.tokens == ["docker"]
        assert record.hits == 1
        entry = json.loads(JSONFormatter().format(record))
        assert entry["hits"] == 1

    def test_dynamic_keyword_record(self, scenario_commands, caplog):
        engine = CommandSearchEngine(scenario_commands)
        caplog.set_level(logging.DEBUG, logger="palette")
        engine.set_dynamic_keywords("infra:start", ["redis"])
        engine.set_dynamic_keywords("nope:missing", ["redis"])
        command_ids = [r.command_id for r in caplog.records if hasattr(r, "command_id")]
        assert command_ids == ["infra:start", "nope:missing"]
