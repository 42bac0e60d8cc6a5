from __future__ import annotations

import csv
import json
import sys
from typing import List

import pytest

from models import SearchResult


RESULTS = [
    SearchResult(id="chris", url="https://www.linkedin.com/in/chris",
                 title="Chris Beaumont - Data Science @ OpenAI | LinkedIn"),
    SearchResult(id="bob", url="https://www.linkedin.com/in/bob",
                 title="Bob Smith - Data Science at Google | LinkedIn"),
]


def _run_cli_with_args(args_list: List[str]) -> None:
    argv_backup = sys.argv[:]
    try:
        sys.argv = ["cli.py"] + args_list
        if "cli" in sys.modules:
            del sys.modules["cli"]
        import cli  # type: ignore
        cli.main()  # type: ignore[attr-defined]
    finally:
        sys.argv = argv_backup


@pytest.fixture
def offline(monkeypatch, fake_searcher):
    """Swap every external client for an in-memory fake."""
    import profile_searcher
    from services import hubspot_client, llm_client

    searcher = fake_searcher(RESULTS)
    monkeypatch.setenv("RUN_ID", "cli-test")
    monkeypatch.setattr(profile_searcher, "ProfileSearcher", lambda settings=None: searcher)
    monkeypatch.setattr(llm_client, "build_llm_client", lambda settings=None: None)
    monkeypatch.setattr(hubspot_client, "build_crm_client", lambda settings=None: None)
    return searcher


def test_search_prints_json_to_stdout(offline, capsys):
    _run_cli_with_args(["search", "--query", "data science at OpenAI"])
    payload = json.loads(capsys.readouterr().out)
    assert [p["name"] for p in payload["profiles"]] == ["Chris Beaumont"]
    assert payload["profiles"][0]["linkedinUrl"] == "https://www.linkedin.com/in/chris"
    assert "inHubSpot" not in payload["profiles"][0]


def test_search_then_export_round_trip(offline, tmp_path, capsys):
    out_json = tmp_path / "profiles.json"
    _run_cli_with_args(["search", "-q", "data science at OpenAI", "-o", str(out_json)])
    assert "LINKEDIN PROFILE SEARCH - SUMMARY" in capsys.readouterr().out

    _run_cli_with_args([
        "export", "--input", str(out_json), "--output-dir", str(tmp_path / "exports"),
        "--filename", "picked.csv",
    ])
    printed = capsys.readouterr().out
    assert "HubSpot: skipped" in printed

    with (tmp_path / "exports" / "picked.csv").open(encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert len(rows) == 2
    assert rows[1][:3] == ["Chris Beaumont", "Data Science", "OpenAI"]


def test_blank_query_exits_with_usage_error(offline, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli_with_args(["search", "--query", "   "])
    assert excinfo.value.code == 2
    assert "Query is required" in capsys.readouterr().err
    assert offline.queries == []


def test_search_failure_exits_nonzero(offline, capsys):
    from profile_searcher import SearchFailed, TIMEOUT_MESSAGE

    offline.error = SearchFailed(TIMEOUT_MESSAGE)
    with pytest.raises(SystemExit) as excinfo:
        _run_cli_with_args(["search", "--query", "data science at OpenAI"])
    assert excinfo.value.code == 1
    assert TIMEOUT_MESSAGE in capsys.readouterr().err


def test_export_rejects_empty_selection(offline, tmp_path, capsys):
    empty = tmp_path / "empty.json"
    empty.write_text(json.dumps({"profiles": []}), encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli_with_args(["export", "--input", str(empty), "--output-dir", str(tmp_path)])
    assert excinfo.value.code == 2
    assert "No profiles provided" in capsys.readouterr().err
