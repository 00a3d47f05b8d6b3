"""Tests for the command line entry point."""

import json

import main
from bagster.config import settings
from bagster.logging_config import configure_logging


class TestSelectCommand:
    """The select command prints a single JSON document on stdout."""

    def setup_method(self):
        """Set up test fixtures."""
        self.argv = ["--origin", "Lagos", "--destination", "Lagos", "--weight", "3"]

    def run(self, capsys, argv):
        configure_logging(log_level="DEBUG", log_format="json")
        code = main.run_select(argv)
        captured = capsys.readouterr()
        return code, json.loads(captured.out), captured.err

    def test_stdout_is_json_with_logging_on(self, capsys):
        code, body, err = self.run(capsys, self.argv)

        assert code == 0
        assert body["status"] == "success"
        assert body["selected_carrier"]["rank"] == 1
        assert "selection_complete" in err

    def test_console_logging_keeps_stdout_clean(self, capsys):
        configure_logging(log_level="DEBUG", log_format="console")
        code = main.run_select(self.argv + ["--strategy", "cheapest"])

        body = json.loads(capsys.readouterr().out)
        assert code == 0
        assert body["scoring_breakdown"]["strategy"] == "cheapest"

    def test_invalid_weight(self, capsys):
        code, body, _ = self.run(capsys, ["--origin", "Lagos", "--destination", "Lagos", "--weight", "-1"])

        assert code == 1
        assert body["status"] == "error"
        assert body["error_code"] == "INVALID_INPUT"

    def test_unknown_strategy(self, capsys):
        code, body, _ = self.run(capsys, self.argv + ["--strategy", "fastest"])

        assert code == 1
        assert body["error_code"] == "UNKNOWN_STRATEGY"

    def test_configured_default_strategy(self, capsys, monkeypatch):
        monkeypatch.setattr(settings, "default_strategy", "cheapest")

        code, body, _ = self.run(capsys, self.argv)

        assert code == 0
        assert body["scoring_breakdown"]["strategy"] == "cheapest"
        assert body["scoring_breakdown"]["weights_used"]["price"] == 1.0
