"""Tests for the dustfree CLI."""

from __future__ import annotations

from click.testing import CliRunner

from dustfree_api.cli import main
from tests.conftest import HOST_ID


def test_pending(db, sample_property, sample_cleaner, sample_cleaning):
    db.load(properties=[sample_property], cleaners=[sample_cleaner], cleanings=[sample_cleaning])
    result = CliRunner().invoke(main, ["pending", "--host-id", HOST_ID])
    assert result.exit_code == 0, result.output
    assert "Nok" in result.output
    assert "Total owed: ฿950" in result.output


def test_pending_when_nothing_owed(db):
    result = CliRunner().invoke(main, ["pending", "--host-id", HOST_ID])
    assert result.exit_code == 0
    assert "Nothing owed." in result.output


def test_export(db, tmp_path, sample_property, sample_cleaning):
    db.load(properties=[sample_property], cleanings=[sample_cleaning])
    out = tmp_path / "cleanings.csv"
    result = CliRunner().invoke(main, ["export", "--host-id", HOST_ID, "--out", str(out)])
    assert result.exit_code == 0, result.output
    lines = out.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    assert "Riverside Condo" in lines[1]


def test_serve_runs_uvicorn_with_configured_address(monkeypatch):
    from unittest.mock import MagicMock

    import uvicorn

    from dustfree_shared.config import settings

    run = MagicMock()
    monkeypatch.setattr(uvicorn, "run", run)
    result = CliRunner().invoke(main, ["serve", "--port", "9001"])
    assert result.exit_code == 0, result.output
    run.assert_called_once()
    args, kwargs = run.call_args
    assert args == ("dustfree_api.app:app",)
    assert kwargs["host"] == settings.api_host
    assert kwargs["port"] == 9001
    assert kwargs["reload"] is False
