"""View layer for rendering hook state as terminal text."""

from __future__ import annotations

from typing import Any

from .models.pagination import Pagination
from .models.state import ListState, ResourceState

SKELETON_COUNT = 8
_SHIMMER = "░"
_CARD_WIDTH = 24

# Bar widths as fractions of the card: title, rating/year, genres, footer.
_SKELETON_ROWS: tuple[tuple[float, ...], ...] = (
    (0.75,),
    (0.3, 0.2),
    (0.15, 0.15),
    (0.3, 0.2),
)


def _bar(fraction: float, width: int = _CARD_WIDTH) -> str:
    return _SHIMMER * max(1, int(width * fraction))


def render_skeleton_card(width: int = _CARD_WIDTH) -> list[str]:
    poster_height = 3
    lines = [_SHIMMER * width for _ in range(poster_height)]
    for row in _SKELETON_ROWS:
        lines.append(" ".join(_bar(f, width) for f in row))
    return lines


def render_skeleton(count: int = SKELETON_COUNT) -> str:
    """Placeholder grid shown while a list is loading."""
    cards = ["\n".join(render_skeleton_card()) for _ in range(max(0, count))]
    return "\n\n".join(cards)


def _year(movie: dict[str, Any]) -> str:
    for key in ("year", "releaseYear"):
        if movie.get(key):
            return str(movie[key])
    date = movie.get("releaseDate") or movie.get("release_date") or ""
    return date.split("-")[0] if isinstance(date, str) and date else ""


def render_movie_line(movie: dict[str, Any]) -> str:
    title = movie.get("title") or movie.get("name") or "<untitled>"
    parts = [str(title)]
    year = _year(movie)
    if year:
        parts.append(f"({year})")
    rating = movie.get("rating")
    if rating is not None:
        parts.append(f"★ {rating}")
    genres = movie.get("genres") or movie.get("genre")
    if isinstance(genres, list) and genres:
        parts.append("· " + ", ".join(str(g) for g in genres[:3]))
    elif isinstance(genres, str) and genres:
        parts.append(f"· {genres}")
    ident = movie.get("_id") or movie.get("id")
    if ident is not None:
        parts.append(f"[{ident}]")
    return " ".join(parts)


def render_pagination(pagination: Pagination | None) -> str:
    if pagination is None:
        return ""
    return f"Page {pagination.page}/{pagination.pages} · {pagination.total} total"


def render_list(state: ListState, empty: str = "No movies found.") -> str:
    if state.loading and not state.is_data_loaded:
        return render_skeleton()
    lines: list[str] = []
    if state.error:
        lines.append(f"Error: {state.error}")
    if state.items:
        lines.extend(render_movie_line(m) for m in state.items)
    elif not state.error:
        lines.append(empty)
    footer = render_pagination(state.pagination)
    if footer:
        lines.append(footer)
    return "\n".join(lines)


def render_detail(state: ResourceState) -> str:
    if state.error:
        return f"Error: {state.error}"
    movie = state.data
    if not isinstance(movie, dict):
        return "Not found."
    lines = [render_movie_line(movie)]
    description = movie.get("description") or movie.get("overview")
    if description:
        lines.append(str(description))
    return "\n".join(lines)


def render_categories(state: ResourceState) -> str:
    if state.error:
        return f"Error: {state.error}"
    data = state.data
    if not data:
        return "No categories."
    if isinstance(data, dict):
        lines = []
        for name in sorted(data.keys()):
            values = data[name]
            if isinstance(values, list):
                values = ", ".join(str(v) for v in values)
            lines.append(f"{name}: {values}")
        return "\n".join(lines)
    return "\n".join(str(c.get("name", c)) if isinstance(c, dict) else str(c) for c in data)


def render_stats(state: ResourceState) -> str:
    if state.error:
        return f"Error: {state.error}"
    stats = state.data
    if not isinstance(stats, dict) or not stats:
        return "No stats."
    width = max(len(str(k)) for k in stats)
    return "\n".join(f"{str(k).ljust(width)}  {v}" for k, v in stats.items())


def render_suggestions(suggestions: list[Any]) -> str:
    if not suggestions:
        return "No suggestions."
    return "\n".join(
        render_movie_line(s) if isinstance(s, dict) else str(s) for s in suggestions
    )
