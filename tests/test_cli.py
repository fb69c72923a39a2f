"""Tests for the CLI commands."""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from src.cli.main import app
from src.core.pipeline import ReconcileMode, ReconcileReport

runner = CliRunner()


class TestInspectionCommands:
    """Commands that need no database."""

    def test_classify_aggregator(self):
        result = runner.invoke(app, ["classify", "https://www.visitbergen.com/event/1"])
        assert result.exit_code == 0
        assert "aggregator" in result.output

    def test_classify_ticket_platform(self):
        result = runner.invoke(app, ["classify", "https://www.ticketmaster.no/event/1"])
        assert result.exit_code == 0
        assert "ticket_platform" in result.output

    def test_lookup_venue(self):
        result = runner.invoke(app, ["lookup-venue", "usf verftet"])
        assert result.exit_code == 0
        assert "https://usf.no" in result.output

    def test_lookup_unknown_venue(self):
        result = runner.invoke(app, ["lookup-venue", "Unknown pub"])
        assert result.exit_code == 1

    def test_lookup_with_venue_file(self, tmp_path):
        path = tmp_path / "venues.json"
        path.write_text(json.dumps({"Hulen": "https://hulen.no"}), encoding="utf-8")

        result = runner.invoke(app, ["lookup-venue", "hulen", "--venues", str(path)])

        assert result.exit_code == 0
        assert "https://hulen.no" in result.output

    def test_invalid_venue_file(self, tmp_path):
        path = tmp_path / "venues.json"
        path.write_text("[]", encoding="utf-8")

        result = runner.invoke(app, ["lookup-venue", "hulen", "--venues", str(path)])

        assert result.exit_code == 1


class TestReconcileCommands:
    """Commands that run the pipeline, with the run itself mocked."""

    def test_reset_free_requires_source(self):
        result = runner.invoke(app, ["reset-free"])
        assert result.exit_code == 1

    def test_fix_urls_dry_run(self):
        report = ReconcileReport(mode=ReconcileMode.URLS, total=3, already_ok=1, fixed=2, dry_run=True)

        with patch("src.cli.main._execute", return_value=report) as execute:
            result = runner.invoke(app, ["fix-urls", "--dry-run", "-s", "visitbergen", "-s", "kulturikveld"])

        assert result.exit_code == 0
        config = execute.call_args.args[0]
        assert config.mode is ReconcileMode.URLS
        assert config.sources == ("visitbergen", "kulturikveld")
        assert config.dry_run is True
        assert "Would fix: 2" in result.output

    def test_aborted_run_exits_nonzero(self):
        report = ReconcileReport(mode=ReconcileMode.PRICES, success=False, error="store down")

        with patch("src.cli.main._execute", return_value=report):
            result = runner.invoke(app, ["fix-prices", "--no-fetch"])

        assert result.exit_code == 1
        assert "store down" in result.output
