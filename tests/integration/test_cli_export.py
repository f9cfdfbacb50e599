from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from locator_export import cli
from locator_export.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS
from locator_export.common.errors import TransportError

ENV = {"NOTION_API_TOKEN": "secret-token"}


def _page(page_id, name, status, lat, lon, last_order=None):
    return {
        "id": page_id,
        "properties": {
            "Dispensary Name": {"type": "title", "title": [{"plain_text": name}] if name else []},
            "Account Status": {"type": "status", "status": {"name": status}},
            "Address": {"type": "rich_text", "rich_text": [{"plain_text": "1 Main St"}]},
            "City": {"type": "rich_text", "rich_text": [{"plain_text": "Oakland"}]},
            "Map Location": {"type": "place", "place": {"lat": lat, "lon": lon}},
            "Last Order Date": {"type": "rollup", "rollup": {"type": "date", "date": {"start": last_order}}},
            "SMACK .5G": {"type": "rollup", "rollup": {"type": "date", "date": {"start": "2024-01-01"}}},
        },
    }


PAGES = [
    _page("a", "Acme", "Customer", 37.0, -122.0, "2024-01-01"),
    _page("b", "Beta", "Lead", 37.5, -122.5),
    _page("c", "Null Island", "Customer Overdue", 0, 0),
    _page("d", "No Coords", "Customer", None, -122.0),
    _page("e", None, "Customer", 37.0, -122.0),
    _page("f", "Gone", "Churned", 37.0, -122.0),
]


def _args(tmp_path: Path, *extra: str):
    return cli.parse_args(["export", "--output", str(tmp_path / "stores.json"), "--run-id", "run-test", *extra])


@pytest.mark.integration
def test_export_writes_file_and_echoes_markers(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "fetch_all_pages", lambda *_args, **_kwargs: PAGES)
    stdout = io.StringIO()

    exit_code = cli.run_command(_args(tmp_path), environ=ENV, stdout=stdout)

    assert exit_code == EXIT_SUCCESS
    written = (tmp_path / "stores.json").read_text(encoding="utf-8")
    document = json.loads(written)
    assert document["count"] == len(document["stores"]) == 2
    assert [store["id"] for store in document["stores"]] == ["a", "c"]
    assert document["stores"][0] == {
        "id": "a",
        "name": "Acme",
        "address": "1 Main St, Oakland",
        "lat": 37.0,
        "lng": -122.0,
        "products": ["SMACK"],
        "lastDelivery": "2024-01-01",
    }
    assert document["stores"][1]["lat"] == 0.0

    echoed = stdout.getvalue()
    start = echoed.index("--- OUTPUT START ---\n") + len("--- OUTPUT START ---\n")
    end = echoed.index("--- OUTPUT END ---")
    assert echoed[start:end] == written


@pytest.mark.integration
def test_export_no_echo_keeps_stdout_clean(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "fetch_all_pages", lambda *_args, **_kwargs: PAGES)
    stdout = io.StringIO()

    assert cli.run_command(_args(tmp_path, "--no-echo"), environ=ENV, stdout=stdout) == EXIT_SUCCESS
    assert stdout.getvalue() == ""
    assert (tmp_path / "stores.json").exists()


@pytest.mark.integration
def test_missing_token_fails_before_fetch(monkeypatch, tmp_path: Path):
    def unexpected_fetch(*_args, **_kwargs):
        raise AssertionError("fetch must not run without a token")

    monkeypatch.setattr(cli, "fetch_all_pages", unexpected_fetch)

    assert cli.run_command(_args(tmp_path), environ={}, stdout=io.StringIO()) == EXIT_HARD_FAIL
    assert not (tmp_path / "stores.json").exists()


@pytest.mark.integration
def test_transport_failure_leaves_previous_file_untouched(monkeypatch, tmp_path: Path, capsys):
    def failing_fetch(*_args, **_kwargs):
        raise TransportError("HTTP status 502", status_code=502, body="bad gateway")

    monkeypatch.setattr(cli, "fetch_all_pages", failing_fetch)
    (tmp_path / "stores.json").write_text("previous", encoding="utf-8")
    stdout = io.StringIO()

    assert cli.run_command(_args(tmp_path), environ=ENV, stdout=stdout) == EXIT_HARD_FAIL
    assert (tmp_path / "stores.json").read_text(encoding="utf-8") == "previous"
    assert stdout.getvalue() == ""
    assert "TRANSPORT_ERROR" in capsys.readouterr().err


@pytest.mark.integration
def test_write_failure_exits_non_zero(monkeypatch, tmp_path: Path, capsys):
    monkeypatch.setattr(cli, "fetch_all_pages", lambda *_args, **_kwargs: PAGES)
    (tmp_path / "stores.json").mkdir()

    assert cli.run_command(_args(tmp_path, "--no-echo"), environ=ENV) == EXIT_HARD_FAIL
    assert "WRITE_ERROR" in capsys.readouterr().err


@pytest.mark.integration
def test_analyze_prints_report_without_writing(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "fetch_all_pages", lambda *_args, **_kwargs: PAGES)
    monkeypatch.chdir(tmp_path)
    stdout = io.StringIO()

    args = cli.parse_args(["analyze", "--run-id", "run-analyze"])
    assert cli.run_command(args, environ=ENV, stdout=stdout) == EXIT_SUCCESS

    output = stdout.getvalue()
    assert "Total records: 6" in output
    assert "  Customer: 3" in output
    assert "  Records with coordinates: 5" in output
    assert list(tmp_path.iterdir()) == []
