import pytest

from app.core.errors import ValidationFailed
from app.posts.pagination import MAX_LIMIT, PageWindow, has_more, page_window


def test_page_window_defaults():
    assert page_window() == PageWindow(limit=10, offset=0)
    window = page_window(5, 15)
    assert (window.start, window.stop) == (15, 20)


@pytest.mark.parametrize("limit, offset", [(0, 0), (MAX_LIMIT + 1, 0), (10, -1)])
def test_page_window_rejects_out_of_range(limit, offset):
    with pytest.raises(ValidationFailed):
        page_window(limit, offset)


def test_has_more_is_full_page():
    assert has_more(10, 10) is True
    assert has_more(9, 10) is False
    assert has_more(0, 10) is False


def test_feed_pages_until_exhausted(client, make_user, make_post):
    kim = make_user("user_kim")
    created = [make_post(kim, caption=f"p{i}")["id"] for i in range(5)]

    first = client.get("/api/posts", params={"limit": 2, "offset": 0}).json()
    second = client.get("/api/posts", params={"limit": 2, "offset": 2}).json()
    third = client.get("/api/posts", params={"limit": 2, "offset": 4}).json()

    assert first["pagination"] == {"limit": 2, "offset": 0, "hasMore": True}
    assert second["pagination"]["hasMore"] is True
    assert third["pagination"]["hasMore"] is False

    ids = [p["id"] for page in (first, second, third) for p in page["posts"]]
    assert ids == list(reversed(created))


def test_exact_multiple_needs_one_empty_page(client, make_user, make_post):
    kim = make_user("user_kim")
    for _ in range(4):
        make_post(kim)

    last_full = client.get("/api/posts", params={"limit": 2, "offset": 2}).json()
    assert len(last_full["posts"]) == 2
    assert last_full["pagination"]["hasMore"] is True

    empty = client.get("/api/posts", params={"limit": 2, "offset": 4}).json()
    assert empty["posts"] == []
    assert empty["pagination"]["hasMore"] is False


def test_feed_rejects_bad_window(client):
    assert client.get("/api/posts", params={"limit": 0}).status_code == 400
    assert client.get("/api/posts", params={"limit": 51}).status_code == 400
    assert client.get("/api/posts", params={"offset": -1}).status_code == 400
    assert client.get("/api/posts", params={"limit": "abc"}).status_code == 400
