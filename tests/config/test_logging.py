"""Tests for ifsctl log output."""

from __future__ import annotations

import io
import json
import logging
import re

import structlog

from ifsctl.config.logging import LOGGER_NAME, bind_command, configure_logging


def _lines(stream: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, stream=io.StringIO())
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_default_is_warning(self) -> None:
        configure_logging(stream=io.StringIO())
        assert logging.getLogger(LOGGER_NAME).level == logging.WARNING

    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        before = (root.level, list(root.handlers))
        configure_logging(verbose=True, log_json=True, stream=io.StringIO())
        assert (root.level, list(root.handlers)) == before
        assert logging.getLogger(LOGGER_NAME).propagate is False

    def test_idempotent(self) -> None:
        configure_logging(stream=io.StringIO())
        handler = configure_logging(verbose=True, stream=io.StringIO())
        assert logging.getLogger(LOGGER_NAME).handlers == [handler]

    def test_json_structlog_event(self) -> None:
        out = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=out)
        structlog.get_logger("ifsctl.telemetry").debug("span.complete", span="x", ok=True)
        (line,) = _lines(out)
        assert line["event"] == "span.complete"
        assert line["span"] == "x"
        assert line["level"] == "debug"
        assert line["logger"] == "ifsctl.telemetry"
        assert "timestamp" in line

    def test_json_stdlib_record(self) -> None:
        out = io.StringIO()
        configure_logging(log_json=True, stream=out)
        logging.getLogger("ifsctl.domain.generator").warning("Max instances reached (%d)", 10)
        (line,) = _lines(out)
        assert line["event"] == "Max instances reached (10)"
        assert line["level"] == "warning"

    def test_debug_dropped_when_not_verbose(self) -> None:
        out = io.StringIO()
        configure_logging(log_json=True, stream=out)
        logging.getLogger("ifsctl.services.base").debug("Wrote x")
        assert out.getvalue() == ""

    def test_library_loggers_not_rendered(self) -> None:
        out = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=out)
        logging.getLogger("numpy").warning("noise")
        assert out.getvalue() == ""

    def test_console_mode_has_no_timestamp(self) -> None:
        out = io.StringIO()
        configure_logging(stream=out)
        logging.getLogger("ifsctl.domain.generator").warning("capped")
        text = out.getvalue()
        assert "capped" in text
        assert not text.startswith("{")
        assert re.search(r"\d{4}-\d{2}-\d{2}", text) is None

    def test_exception_rendered_in_json(self) -> None:
        out = io.StringIO()
        configure_logging(log_json=True, stream=out)
        try:
            msg = "disk full"
            raise OSError(msg)
        except OSError:
            logging.getLogger("ifsctl.services.base").exception("write failed")
        (line,) = _lines(out)
        assert "disk full" in str(line["exception"])


class TestBindCommand:
    def test_command_on_every_line(self) -> None:
        out = io.StringIO()
        configure_logging(log_json=True, stream=out)
        bind_command("generate")
        logging.getLogger("ifsctl.domain.generator").warning("one")
        structlog.get_logger("ifsctl.telemetry").warning("two")
        assert [line["command"] for line in _lines(out)] == ["generate", "generate"]

    def test_rebinding_replaces(self) -> None:
        out = io.StringIO()
        configure_logging(log_json=True, stream=out)
        bind_command("generate")
        bind_command("frontier")
        logging.getLogger("ifsctl").warning("x")
        assert _lines(out)[0]["command"] == "frontier"
