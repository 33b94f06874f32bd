"""Smoke tests for the Typer CLI."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from later import cli
from later.service import build_service

runner = CliRunner()


def _invoke(db_url, *args):
    return runner.invoke(
        cli.app,
        ["--database-url", db_url, "--log-level", "ERROR", "--no-log-file", *args],
    )


def test_add_list_edit_delete_roundtrip(tmp_path, web, monkeypatch):
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"
    web.add("https://a.example/article", body="<title>Article</title>")
    monkeypatch.setattr(cli, "build_service", lambda cfg: build_service(cfg, transport=web.transport()))

    result = _invoke(db_url, "add-owner", "Ada", "ada@example.com")
    assert result.exit_code == 0, result.output
    owner_id = json.loads(result.output)["id"]

    result = _invoke(db_url, "add", str(owner_id), "https://a.example/article", "--tag", "x")
    assert result.exit_code == 0, result.output
    item = json.loads(result.output)
    assert item["title"] == "Article"
    assert item["tags"] == ["x"]

    result = _invoke(db_url, "list", str(owner_id), "--content-type", "article")
    assert result.exit_code == 0, result.output
    assert [entry["id"] for entry in json.loads(result.output)] == [item["id"]]

    result = _invoke(db_url, "edit", str(owner_id), str(item["id"]), "--read", "--tag", "y")
    assert result.exit_code == 0, result.output

    result = _invoke(db_url, "list", str(owner_id))
    assert json.loads(result.output) == []

    result = _invoke(db_url, "by-tags", str(owner_id), "--tag", "y")
    listed = json.loads(result.output)
    assert listed[0]["tags"] == ["x", "y"]
    assert listed[0]["unread"] is False

    result = _invoke(db_url, "delete", str(owner_id), str(item["id"]))
    assert result.exit_code == 0, result.output

    result = _invoke(db_url, "list", str(owner_id), "--state", "all")
    assert json.loads(result.output) == []


def test_domain_error_exits_non_zero(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"

    result = _invoke(db_url, "add", "42", "https://a.example/article")

    assert result.exit_code == 1
    assert "Error 404" in result.output


def test_invalid_filter_value_exits_non_zero(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"

    result = _invoke(db_url, "list", "1", "--state", "archived")

    assert result.exit_code == 1
    assert "Error 400" in result.output


def test_init_db(tmp_path):
    db_path = tmp_path / "fresh.db"

    result = _invoke(f"sqlite:///{db_path}", "init-db")

    assert result.exit_code == 0, result.output
    assert db_path.exists()
