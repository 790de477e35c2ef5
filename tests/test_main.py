"""Tests for the command-line entrypoint."""

import argparse
import json
import runpy
import sys

import pytest

from movie_browser import main

from conftest import DummyApi, movie


def _args(*argv: str) -> argparse.Namespace:
    return main.build_parser().parse_args(list(argv))


def test_parse_filters() -> None:
    assert main._parse_filters(["genre=drama", " year = 1999 "]) == {
        "genre": "drama",
        "year": "1999",
    }
    with pytest.raises(argparse.ArgumentTypeError):
        main._parse_filters(["genre"])


@pytest.mark.asyncio
async def test_movies_command_prints_list(capsys) -> None:
    dummy = DummyApi()
    dummy.add("GET", "/movies", {"movies": [movie(1)], "total": 1, "page": 1, "pages": 1})
    async with dummy.client() as client:
        rc = await main.run_command(_args("movies", "-f", "genre=drama", "--limit", "5"), client)

    out = capsys.readouterr().out
    assert rc == 0
    assert "Movie 1 (2001) [m1]" in out
    assert "Page 1/1 · 1 total" in out
    assert dummy.urls() == ["http://test/movies?genre=drama&limit=5"]


@pytest.mark.asyncio
async def test_categories_command_error_exit_code(capsys) -> None:
    dummy = DummyApi()
    dummy.add("GET", "/categories", {"message": "server error"}, status=500)
    async with dummy.client() as client:
        rc = await main.run_command(_args("categories"), client)

    assert rc == 1
    assert "Error: server error" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_create_command_reads_json_file(tmp_path, capsys) -> None:
    path = tmp_path / "movie.json"
    path.write_text(json.dumps({"title": "Heat"}), encoding="utf-8")
    dummy = DummyApi()
    dummy.add("POST", "/movies", {"_id": "m1", "title": "Heat"}, status=201)
    async with dummy.client() as client:
        rc = await main.run_command(_args("--admin-key", "k", "create", str(path)), client)

    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {"_id": "m1", "title": "Heat"}
    assert dummy.requests[0].headers["x-admin-key"] == "k"


@pytest.mark.asyncio
async def test_download_command_never_fails(capsys) -> None:
    dummy = DummyApi()
    dummy.add("POST", "/movies/m1/download", {}, status=500)
    async with dummy.client() as client:
        rc = await main.run_command(_args("download", "m1"), client)

    assert rc == 0
    assert "Download not counted." in capsys.readouterr().out


@pytest.mark.asyncio
async def test_suggest_command(capsys) -> None:
    dummy = DummyApi()
    dummy.add("GET", "/movies/search-suggestions", [{"title": "Heat", "year": 1995}])
    async with dummy.client() as client:
        rc = await main.run_command(_args("suggest", "hea"), client)

    assert rc == 0
    assert "Heat (1995)" in capsys.readouterr().out


def test_log_options_are_parsed() -> None:
    args = _args("-vv", "--log-level", "ERROR", "stats")
    assert args.verbose == 2
    assert args.log_level == "ERROR"


def test_module_entrypoint_runs_cli(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["movie-browser", "--help"])
    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("movie_browser", run_name="__main__")

    assert excinfo.value.code == 0
    assert "movie-browser" in capsys.readouterr().out
