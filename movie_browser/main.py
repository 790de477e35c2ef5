"""Command-line entrypoint for browsing the movie API.

Each subcommand drives one hook (or admin call) and prints a text view.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from . import admin, config, view
from .api import ApiClient, ApiError
from .hooks import (
    Categories,
    MovieDetail,
    RelatedMovies,
    SearchSuggestions,
    SeriesDetail,
    SeriesList,
    Stats,
    use_movies,
)
from .logger import setup_logging

logger = logging.getLogger(__name__)


def _parse_filters(pairs: Sequence[str] | None) -> dict[str, str]:
    """Parse ``key=value`` arguments into a filter mapping."""
    filters: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"Invalid filter {pair!r}; expected key=value")
        filters[key.strip()] = value.strip()
    return filters


def _load_json(path: str) -> dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="movie-browser", description="Browse the movie API")
    p.add_argument("--api-url", default=None, help=f"API base URL (default {config.API_URL})")
    p.add_argument("--admin-key", default=None, help="Admin key for mutations")
    p.add_argument("--log-level", default=None, help="Log level (default LOG_LEVEL or INFO)")
    p.add_argument(
        "-v", "--verbose", action="count", default=0, help="-v for debug, -vv adds HTTP logs"
    )
    sub = p.add_subparsers(dest="command", required=True)

    movies = sub.add_parser("movies", help="List movies")
    movies.add_argument("-f", "--filter", action="append", dest="filters", help="key=value")
    movies.add_argument("--limit", type=int, default=None)
    movies.add_argument("--page", type=int, default=None)

    series = sub.add_parser("series", help="List series")
    series.add_argument("-f", "--filter", action="append", dest="filters", help="key=value")

    for name in ("movie", "series-detail", "related", "delete", "download"):
        cmd = sub.add_parser(name)
        cmd.add_argument("id")

    suggest = sub.add_parser("suggest", help="Search suggestions")
    suggest.add_argument("query")

    sub.add_parser("categories")
    sub.add_parser("stats")

    create = sub.add_parser("create", help="Create a movie from a JSON file")
    create.add_argument("file")

    update = sub.add_parser("update", help="Update a movie from a JSON file")
    update.add_argument("id")
    update.add_argument("file")

    toggle = sub.add_parser("toggle", help="Apply a status action, e.g. publish")
    toggle.add_argument("id")
    toggle.add_argument("action")
    return p


async def _run_list(client: ApiClient, args: argparse.Namespace) -> tuple[str, bool]:
    filters: dict[str, Any] = _parse_filters(args.filters)
    if args.command == "movies":
        filters.update({"limit": args.limit, "page": args.page})
        hook = use_movies(client, filters)
        empty = "No movies found."
    else:
        hook = SeriesList(client)
        hook.set_filters(filters)
        empty = "No series found."
    async with hook:
        state = await hook.settle()
    return view.render_list(state, empty=empty), state.error is None


async def _run_resource(client: ApiClient, args: argparse.Namespace) -> tuple[str, bool]:
    if args.command == "movie":
        state = await MovieDetail(client, args.id).load()
        return view.render_detail(state), state.error is None
    if args.command == "series-detail":
        state = await SeriesDetail(client, args.id).load()
        return view.render_detail(state), state.error is None
    if args.command == "related":
        state = await RelatedMovies(client, args.id).load()
        related = view.render_suggestions(state.data or [])
        return (f"Error: {state.error}" if state.error else related), state.error is None
    if args.command == "categories":
        state = await Categories(client).load()
        return view.render_categories(state), state.error is None
    state = await Stats(client).load()
    return view.render_stats(state), state.error is None


async def _run_admin(client: ApiClient, args: argparse.Namespace) -> tuple[str, bool]:
    key = args.admin_key
    if args.command == "download":
        outcome = await admin.increment_download_count(client, args.id)
        return ("Download counted." if outcome.ok else "Download not counted."), True
    try:
        if args.command == "create":
            result = await admin.create_movie(client, _load_json(args.file), key)
        elif args.command == "update":
            result = await admin.update_movie(client, args.id, _load_json(args.file), key)
        elif args.command == "delete":
            result = await admin.delete_movie(client, args.id, key)
        else:
            result = await admin.toggle_movie_status(client, args.id, args.action, key)
    except ApiError as e:
        return f"Error: {e.message}", False
    return json.dumps(result, indent=2, ensure_ascii=False), True


async def run_command(args: argparse.Namespace, client: ApiClient | None = None) -> int:
    owned = client is None
    client = client or ApiClient(base_url=args.api_url)
    try:
        if args.command in ("movies", "series"):
            text, ok = await _run_list(client, args)
        elif args.command == "suggest":
            async with SearchSuggestions(client, debounce_s=0) as hook:
                hook.set_query(args.query)
                state = await hook.settle()
            text, ok = view.render_suggestions(state.suggestions), True
        elif args.command in ("movie", "series-detail", "related", "categories", "stats"):
            text, ok = await _run_resource(client, args)
        else:
            text, ok = await _run_admin(client, args)
    finally:
        if owned:
            await client.aclose()
    print(text)
    return 0 if ok else 1


def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.verbose)
    config.validate_settings()
    try:
        return asyncio.run(run_command(args))
    except (argparse.ArgumentTypeError, ValueError, OSError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(run())
