from movie_browser import view
from movie_browser.models.pagination import Pagination
from movie_browser.models.state import ListState, ResourceState


def test_skeleton_default_count() -> None:
    out = view.render_skeleton()
    cards = out.split("\n\n")
    assert len(cards) == view.SKELETON_COUNT == 8
    assert all(set(line) <= {"░", " "} for line in out.splitlines())


def test_skeleton_custom_count() -> None:
    assert len(view.render_skeleton(3).split("\n\n")) == 3
    assert view.render_skeleton(0) == ""


def test_render_list_loading_shows_skeleton() -> None:
    state = ListState(loading=True)
    assert view.render_list(state) == view.render_skeleton()


def test_render_list_with_items_and_pagination() -> None:
    state = ListState(
        items=[
            {"_id": "m1", "title": "Heat", "year": 1995, "rating": 8.3, "genres": ["crime"]},
            {"title": "Alien", "releaseDate": "1979-05-25"},
        ],
        pagination=Pagination(total=2, page=1, pages=1),
        is_data_loaded=True,
    )
    out = view.render_list(state)
    lines = out.splitlines()
    assert lines[0] == "Heat (1995) ★ 8.3 · crime [m1]"
    assert lines[1] == "Alien (1979)"
    assert lines[-1] == "Page 1/1 · 2 total"


def test_render_list_error_keeps_items() -> None:
    state = ListState(items=[{"title": "Heat"}], error="boom", is_data_loaded=True)
    out = view.render_list(state)
    assert out.splitlines() == ["Error: boom", "Heat"]


def test_render_list_empty() -> None:
    state = ListState(is_data_loaded=True)
    assert view.render_list(state, empty="No series found.") == "No series found."


def test_render_stats_and_categories() -> None:
    stats = ResourceState(data={"movies": 10, "series": 4}, loading=False)
    assert view.render_stats(stats) == "movies  10\nseries  4"
    cats = ResourceState(data={"genres": ["drama", "comedy"]}, loading=False)
    assert view.render_categories(cats) == "genres: drama, comedy"
    failed = ResourceState(error="server error", loading=False)
    assert view.render_categories(failed) == "Error: server error"
