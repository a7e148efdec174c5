"""Tests for settings defaults and derived paths."""

from __future__ import annotations

import logging
from pathlib import Path

from typeahead.config.logging_config import setup_logging
from typeahead.config.settings import CompletionSettings, Settings, StoreSettings


class TestSettings:
    def test_default_key(self):
        assert StoreSettings().key == "completer"

    def test_key_prefix(self):
        assert StoreSettings(key_prefix="tenant42:").key == "tenant42:completer"

    def test_completion_defaults(self):
        cfg = CompletionSettings()
        assert cfg.window_size == 50
        assert cfg.sentinel == "*"
        assert cfg.serialize_mutations is True

    def test_ensure_dirs(self, tmp_path: Path):
        s = Settings(project_root=tmp_path)
        s.ensure_dirs()
        assert s.logs_dir.is_dir()
        assert s.exports_dir.is_dir()
        assert s.data_dir == tmp_path / "data"


class TestLogging:
    def test_setup_logging_adds_handlers_once(self, tmp_path: Path):
        logger = logging.getLogger("typeahead")
        saved = list(logger.handlers)
        logger.handlers.clear()
        try:
            setup_logging(log_dir=tmp_path / "logs")
            count = len(logger.handlers)
            setup_logging(log_dir=tmp_path / "logs")
            assert count == 2
            assert len(logger.handlers) == count
            assert (tmp_path / "logs" / "typeahead.log").exists()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers[:] = saved
