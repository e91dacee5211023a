import os

from sqlalchemy.exc import OperationalError

from conftest import PNG_BYTES, auth_headers


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_create_and_get_post(client, make_user, make_post, media_dir):
    kim = make_user("user_kim", "kim")
    post = make_post(kim, caption="첫 게시물 🌸")

    assert post["caption"] == "첫 게시물 🌸"
    assert post["user"]["id"] == kim["id"]
    assert post["likes_count"] == 0
    assert post["comments_count"] == 0
    assert post["is_liked"] is False
    assert post["comments"] == []

    # {external_id}/posts/{ts}-{rand}.png
    rel = post["image_url"].split("/media/", 1)[1]
    owner, kind, name = rel.split("/")
    assert (owner, kind) == ("user_kim", "posts")
    assert name.endswith(".png")
    assert (media_dir / rel).read_bytes() == PNG_BYTES

    detail = client.get(f"/api/posts/{post['id']}", headers=kim["headers"])
    assert detail.status_code == 200
    body = detail.json()
    assert body["post"]["id"] == post["id"]
    assert body["currentUserId"] == kim["id"]

    media = client.get(post["image_url"])
    assert media.status_code == 200
    assert media.content == PNG_BYTES


def test_get_missing_post_is_404(client):
    resp = client.get("/api/posts/999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "post not found"}


def test_create_post_requires_auth(client):
    resp = client.post("/api/posts", files={"image": ("photo.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 401


def test_create_post_unknown_user_is_404(client):
    resp = client.post(
        "/api/posts",
        files={"image": ("photo.png", PNG_BYTES, "image/png")},
        headers=auth_headers("never_synced"),
    )
    assert resp.status_code == 404


def test_create_post_validation(client, make_user, media_dir, monkeypatch):
    kim = make_user("user_kim")

    no_image = client.post("/api/posts", data={"caption": "hi"}, headers=kim["headers"])
    assert no_image.status_code == 400

    not_image = client.post(
        "/api/posts",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=kim["headers"],
    )
    assert not_image.status_code == 400

    long_caption = client.post(
        "/api/posts",
        data={"caption": "a" * 2201},
        files={"image": ("photo.png", PNG_BYTES, "image/png")},
        headers=kim["headers"],
    )
    assert long_caption.status_code == 400

    monkeypatch.setattr("app.core.config.settings.MAX_IMAGE_BYTES", 10)
    too_big = client.post(
        "/api/posts",
        files={"image": ("photo.png", b"x" * 11, "image/png")},
        headers=kim["headers"],
    )
    assert too_big.status_code == 400

    # nada llegó a storage ni a la DB
    assert list(media_dir.rglob("*.*")) == []
    assert client.get("/api/posts").json()["posts"] == []


def test_caption_at_limit_is_accepted(make_user, make_post):
    kim = make_user("user_kim")
    post = make_post(kim, caption="a" * 2200)
    assert len(post["caption"]) == 2200


def test_feed_is_newest_first_with_two_comment_preview(client, make_user, make_post):
    kim = make_user("user_kim")
    lee = make_user("user_lee")
    first = make_post(kim, caption="one")
    second = make_post(lee, caption="two")

    for text in ("c1", "c2", "c3"):
        resp = client.post(
            "/api/comments",
            json={"postId": first["id"], "content": text},
            headers=lee["headers"],
        )
        assert resp.status_code == 201

    body = client.get("/api/posts", headers=kim["headers"]).json()
    assert [p["id"] for p in body["posts"]] == [second["id"], first["id"]]
    assert body["currentUserId"] == kim["id"]

    target = body["posts"][1]
    assert target["comments_count"] == 3
    assert [c["content"] for c in target["comments"]] == ["c3", "c2"]

    detail = client.get(f"/api/posts/{first['id']}").json()["post"]
    assert [c["content"] for c in detail["comments"]] == ["c3", "c2", "c1"]


def test_feed_anonymous_viewer(client, make_user, make_post):
    kim = make_user("user_kim")
    post = make_post(kim)
    client.post("/api/likes", json={"postId": post["id"]}, headers=kim["headers"])

    body = client.get("/api/posts").json()
    assert body["currentUserId"] is None
    assert body["posts"][0]["likes_count"] == 1
    assert body["posts"][0]["is_liked"] is False


def test_feed_filtered_by_author(client, make_user, make_post):
    kim = make_user("user_kim")
    lee = make_user("user_lee")
    mine = make_post(kim)
    make_post(lee)

    body = client.get("/api/posts", params={"userId": kim["id"]}).json()
    assert [p["id"] for p in body["posts"]] == [mine["id"]]


def test_delete_post_cascades_and_removes_image(client, make_user, make_post, media_dir):
    kim = make_user("user_kim")
    lee = make_user("user_lee")
    post = make_post(kim)
    client.post("/api/likes", json={"postId": post["id"]}, headers=lee["headers"])
    client.post("/api/comments", json={"postId": post["id"], "content": "hey"}, headers=lee["headers"])

    forbidden = client.delete(f"/api/posts/{post['id']}", headers=lee["headers"])
    assert forbidden.status_code == 403

    resp = client.delete(f"/api/posts/{post['id']}", headers=kim["headers"])
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    assert client.get(f"/api/posts/{post['id']}").status_code == 404
    assert list(media_dir.rglob("*.png")) == []
    assert client.delete(f"/api/posts/{post['id']}", headers=kim["headers"]).status_code == 404


def test_delete_post_requires_auth(client, make_user, make_post):
    kim = make_user("user_kim")
    post = make_post(kim)
    assert client.delete(f"/api/posts/{post['id']}").status_code == 401


def test_invalid_token_is_401(client):
    resp = client.get("/api/posts", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_token_in_query_string(client, make_user, make_post):
    kim = make_user("user_kim")
    make_post(kim)
    token = kim["headers"]["Authorization"].split(" ", 1)[1]
    body = client.get("/api/posts", params={"token": token}).json()
    assert body["currentUserId"] == kim["id"]


def test_media_path_traversal_is_404(client, media_dir):
    secret = media_dir.parent / "secret.txt"
    secret.write_text("nope")
    assert client.get("/media/..%2Fsecret.txt").status_code == 404
    assert os.path.exists(secret)


def test_media_etag_and_head(client, make_user, make_post):
    kim = make_user("user_kim")
    post = make_post(kim)

    first = client.get(post["image_url"])
    assert first.headers["content-type"] == "image/png"
    assert "immutable" in first.headers["cache-control"]

    cached = client.get(post["image_url"], headers={"If-None-Match": first.headers["etag"]})
    assert cached.status_code == 304

    head = client.head(post["image_url"])
    assert head.status_code == 200
    assert head.headers["content-length"] == str(len(PNG_BYTES))


def test_aggregation_failure_is_503_not_zero_counts(client, make_user, make_post, monkeypatch):
    kim = make_user("user_kim")
    post = make_post(kim)

    async def _broken_count(db, post_id):
        raise OperationalError("SELECT count(*) FROM likes", {}, Exception("db down"))

    monkeypatch.setattr("app.likes.repository.count_likes", _broken_count)

    feed = client.get("/api/posts")
    assert feed.status_code == 503
    assert feed.json() == {"error": "aggregation unavailable"}

    detail = client.get(f"/api/posts/{post['id']}")
    assert detail.status_code == 503
    assert detail.json() == {"error": "aggregation unavailable"}
