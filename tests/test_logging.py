"""Tests for visualine.core.logging — structlog routing of library logs."""

import json
import logging

import pytest
import structlog
from visualine.core.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger('visualine').level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_quiet_by_default(self) -> None:
        configure_logging()
        assert logging.getLogger('visualine').level == logging.WARNING

    def test_console_mode_smoke(self) -> None:
        configure_logging(verbose=True, log_json=False)
        structlog.get_logger('visualine.test').warning('hello', key='val')

    def test_library_logger_rendered_as_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger('visualine.core.matcher').warning('Error processing token %s', 'accent/blue')
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed['event'] == 'Error processing token accent/blue'
        assert parsed['level'] == 'warning'
        assert parsed['logger'] == 'visualine.core.matcher'
        assert 'timestamp' in parsed

    def test_debug_hidden_unless_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger('visualine.core.scanner').debug('Scanning 3 top-level nodes')
        assert capfd.readouterr().err == ''

    def test_third_party_debug_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger('PIL.PngImagePlugin').debug('STREAM b"IHDR"')
        assert capfd.readouterr().err == ''

    def test_repeated_calls_do_not_stack_handlers(self) -> None:
        configure_logging(log_json=False)
        configure_logging(log_json=True)
        assert len(logging.getLogger().handlers) == 1
