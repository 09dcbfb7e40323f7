import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from main import app
from utils.ui_helpers import OUTPUT_MODE_ENV

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_db(tmp_path, request, monkeypatch):
    db_file = str(tmp_path / f"cli_{request.node.name}.db")
    monkeypatch.setenv("LIBRARY_DB_FILE", db_file)
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)
    return db_file


def test_init_db(cli_db):
    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 0
    assert f"Database initialised at {cli_db}" in result.stdout


def test_authors_empty():
    result = runner.invoke(app, ["authors"])
    assert result.exit_code == 0
    assert "No authors in catalog." in result.stdout


def test_seed_then_list_authors():
    result = runner.invoke(app, ["seed"])
    assert result.exit_code == 0
    assert "Seeded" in result.stdout

    result = runner.invoke(app, ["authors"])
    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert len(lines) == 5
    assert "Asimov, Isaac (January 2, 1920 - April 6, 1992)" in lines[0]


def test_seed_is_noop_when_catalog_has_authors():
    runner.invoke(app, ["seed"])
    result = runner.invoke(app, ["seed"])
    assert result.exit_code == 0
    assert "nothing seeded" in result.stdout


def test_copies_json_output():
    runner.invoke(app, ["seed"])
    result = runner.invoke(app, ["--output", "json", "copies"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload) == 11
    assert {item["status"] for item in payload} <= {"Available", "Maintenance", "Loaned", "Reserved"}
    assert all(item["title"] for item in payload)


@patch("subprocess.run")
@patch("webbrowser.open")
def test_serve_command(mock_webbrowser_open, mock_subprocess_run):
    result = runner.invoke(app, ["serve"])
    assert result.exit_code == 0
    assert "Starting web UI on" in result.stdout
    mock_webbrowser_open.assert_called_once()
    mock_subprocess_run.assert_called_once()
    args = mock_subprocess_run.call_args[0][0]
    assert "uvicorn" in args
    assert "api:app" in args
    assert "--host" in args
    assert "--port" in args
