import re

import pytest

from app.media import storage


def test_build_object_path_pattern():
    path = storage.build_object_path("user_kim", "posts", "Photo.JPEG")
    assert re.fullmatch(r"user_kim/posts/\d{13}-[0-9a-f]{8}\.jpeg", path)

    # extensión desconocida o ausente cae a jpg
    assert storage.build_object_path("user_kim", "profile", "blob").endswith(".jpg")
    assert storage.build_object_path("user_kim", "profile", "x.exe").endswith(".jpg")


def test_build_object_path_rejects_unknown_kind():
    with pytest.raises(ValueError):
        storage.build_object_path("user_kim", "videos", "a.png")


def test_public_url_round_trip(media_dir, monkeypatch):
    monkeypatch.setattr(storage.settings, "MEDIA_BASE_URL", "https://cdn.example.com/")
    url = storage.get_public_url("user_kim/posts/1-abc.png")
    assert url == "https://cdn.example.com/media/user_kim/posts/1-abc.png"
    assert storage.path_from_url(url) == "user_kim/posts/1-abc.png"
    assert storage.path_from_url("https://elsewhere.example.com/a.png") is None
    assert storage.path_from_url(None) is None


def test_upload_and_remove(media_dir):
    path = "user_kim/posts/1-abc.png"
    url = storage.upload(path, b"data")
    assert url.endswith("/media/user_kim/posts/1-abc.png")
    assert (media_dir / path).read_bytes() == b"data"

    # sin upsert: el mismo path no se pisa
    with pytest.raises(FileExistsError):
        storage.upload(path, b"other")

    storage.remove(path, "user_kim/posts/missing.png")
    assert not (media_dir / path).exists()


def test_traversal_is_rejected(media_dir):
    with pytest.raises(ValueError):
        storage.upload("../escape.png", b"x")
    assert not (media_dir.parent / "escape.png").exists()

    # remove_quietly no propaga: solo deja un warning
    storage.remove_quietly("/media/../../etc/passwd")
