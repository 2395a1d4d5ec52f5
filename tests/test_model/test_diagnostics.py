"""Tests for the diagnostics collector."""

import logging

from mailcss import Diagnostic, Diagnostics, Severity


class TestDiagnostics:
    def test_warn_and_info(self):
        diagnostics = Diagnostics()
        diagnostics.warn("unknown-class", "Unknown class foo.", subject="foo")
        diagnostics.info("note", "Something happened.")
        assert len(diagnostics) == 2
        assert diagnostics.warnings == ["Unknown class foo."]
        assert [d.severity for d in diagnostics] == [Severity.WARNING, Severity.INFO]

    def test_by_code(self):
        diagnostics = Diagnostics()
        diagnostics.warn("a", "one")
        diagnostics.warn("b", "two")
        diagnostics.warn("a", "three")
        assert [d.message for d in diagnostics.by_code("a")] == ["one", "three"]

    def test_items_is_a_copy(self):
        diagnostics = Diagnostics()
        diagnostics.warn("a", "one")
        diagnostics.items.clear()
        assert len(diagnostics) == 1

    def test_records_are_logged_at_matching_level(self, caplog):
        diagnostics = Diagnostics()
        with caplog.at_level(logging.INFO, logger="mailcss"):
            diagnostics.warn("a", "careful")
            diagnostics.info("b", "fyi")
        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert (logging.WARNING, "careful") in levels
        assert (logging.INFO, "fyi") in levels

    def test_str(self):
        diagnostic = Diagnostic("unknown-class", Severity.WARNING, "Unknown.", subject="foo")
        assert str(diagnostic) == "WARNING [foo]: Unknown."
        assert diagnostic.is_warning is True
