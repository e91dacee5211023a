import httpx
import pytest

from app.client.detail import PostDetail
from app.client.errors import AuthorizationError, ValidationError
from conftest import post_json


def _comment(comment_id, user_id, content):
    return {
        "id": comment_id,
        "post_id": 7,
        "content": content,
        "created_at": "2026-10-01T12:00:00+00:00",
        "user": {"id": user_id, "name": f"u{user_id}", "external_auth_id": f"user_{user_id}"},
    }


class FakeDetailServer:
    def __init__(self):
        self.comments = [_comment(1, 2, "hola")]
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        if request.url.path == "/api/posts/404":
            return httpx.Response(404, json={"error": "post not found"})
        if request.method == "POST":
            new = _comment(len(self.comments) + 1, 1, "nuevo")
            self.comments.insert(0, new)
            return httpx.Response(201, json={"comment": new})
        if request.method == "DELETE":
            if request.url.path.endswith("/1"):
                return httpx.Response(403, json={"error": "not your comment"})
            comment_id = int(request.url.path.rsplit("/", 1)[1])
            self.comments = [c for c in self.comments if c["id"] != comment_id]
            return httpx.Response(200, json={"success": True})
        post = post_json(7, comments=self.comments, comments_count=len(self.comments))
        return httpx.Response(200, json={"post": post, "currentUserId": 1})


@pytest.mark.asyncio
async def test_load_and_permissions(make_api):
    server = FakeDetailServer()
    detail = PostDetail(make_api(server), 7)

    post = await detail.load()
    assert post.comments_count == 1
    assert detail.current_user_id == 1
    assert detail.like.likes_count == 0
    assert detail.can_delete_comment(1) is False


@pytest.mark.asyncio
async def test_add_comment_reloads_post(make_api):
    server = FakeDetailServer()
    detail = PostDetail(make_api(server), 7)
    await detail.load()

    post = await detail.add_comment("nuevo")
    assert post.comments_count == 2
    assert post.comments[0].content == "nuevo"
    assert detail.can_delete_comment(post.comments[0].id)
    assert server.requests[-2:] == [("POST", "/api/comments"), ("GET", "/api/posts/7")]

    post = await detail.delete_comment(post.comments[0].id)
    assert post.comments_count == 1


@pytest.mark.asyncio
async def test_comment_validated_locally(make_api):
    server = FakeDetailServer()
    detail = PostDetail(make_api(server), 7)

    with pytest.raises(ValidationError):
        await detail.add_comment("   ")
    with pytest.raises(ValidationError):
        await detail.add_comment("a" * 1001)
    assert server.requests == []


@pytest.mark.asyncio
async def test_delete_foreign_comment_is_forbidden(make_api):
    detail = PostDetail(make_api(FakeDetailServer()), 7)
    await detail.load()
    with pytest.raises(AuthorizationError):
        await detail.delete_comment(1)


@pytest.mark.asyncio
async def test_missing_post(make_api):
    detail = PostDetail(make_api(FakeDetailServer()), 404)
    assert await detail.load() is None
    assert detail.not_found
    assert detail.error.message == "post not found"
