"""Tests for CLI logging setup."""

import logging
from io import StringIO

import pytest

from chaincfg.log import (
    ExtraFormatter,
    InvalidLogLevelError,
    resolve_level,
    setup_logging,
)


@pytest.mark.unit
class TestResolveLevel:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("30", 30),
            (10, 10),
            ("false", False),
            (False, False),
        ],
    )
    def test_levels(self, name, expected):
        assert resolve_level(name) == expected

    def test_invalid_level(self):
        with pytest.raises(InvalidLogLevelError, match="Invalid log level: loud"):
            resolve_level("loud")


@pytest.mark.unit
class TestExtraFormatter:
    def _record(self, **extra):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "loaded", None, None)
        record.__dict__.update(extra)
        return record

    def test_no_extra(self):
        assert ExtraFormatter("%(message)s").format(self._record()) == "loaded"

    def test_extra_fields(self):
        text = ExtraFormatter("%(message)s").format(
            self._record(path="etc/chain.yaml", solc="0.8.19")
        )
        assert text == "loaded [path:etc/chain.yaml] [solc:0.8.19]"

    def test_exception_field(self):
        text = ExtraFormatter("%(message)s").format(
            self._record(exception=ValueError("boom"))
        )
        assert text == "loaded [exception:ValueError] boom"

    def test_default_format(self):
        text = ExtraFormatter().format(self._record())
        assert text.endswith("] [I] loaded")


@pytest.mark.unit
class TestSetupLogging:
    def test_writes_to_stream(self):
        stream = StringIO()
        setup_logging("info", stream)
        logging.getLogger("chaincfg.test").info("hello", extra={"k": 1})
        assert "[I] hello [k:1]" in stream.getvalue()

    def test_level_filters(self):
        stream = StringIO()
        setup_logging("error", stream)
        logging.getLogger("chaincfg.test").warning("hidden")
        assert stream.getvalue() == ""

    def test_false_disables(self):
        stream = StringIO()
        setup_logging(False, stream)
        logging.getLogger("chaincfg.test").critical("hidden")
        assert stream.getvalue() == ""

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging("info", StringIO())
        setup_logging("info", StringIO())
        ours = [
            h
            for h in logging.getLogger().handlers
            if isinstance(h.formatter, ExtraFormatter)
        ]
        assert len(ours) == 1

    def test_replaced_handler_is_closed(self, monkeypatch):
        setup_logging("info", StringIO())
        (first,) = [
            h
            for h in logging.getLogger().handlers
            if isinstance(h.formatter, ExtraFormatter)
        ]
        closed = []
        monkeypatch.setattr(first, "close", lambda: closed.append(first))
        setup_logging("info", StringIO())
        assert closed == [first]
