# tests/test_storage.py
import io
import re

import pytest
from werkzeug.datastructures import FileStorage

from shedsite.storage import (
    BucketNotFoundError,
    LocalStorage,
    UploadError,
    make_object_name,
    upload_error_message,
)


def upload(name="photo.png", data=b"fake image"):
    return FileStorage(stream=io.BytesIO(data), filename=name)


@pytest.fixture
def storage(tmp_path):
    storage = LocalStorage(tmp_path)
    storage.ensure_bucket("images")
    return storage


def test_upload_writes_file(storage, tmp_path):
    path = storage.upload("images", "sheds/photo.png", upload())
    assert path == "sheds/photo.png"
    assert (tmp_path / "images" / "sheds" / "photo.png").read_bytes() == b"fake image"


def test_missing_bucket(storage):
    with pytest.raises(BucketNotFoundError) as exc:
        storage.upload("media", "x.png", upload())
    assert exc.value.available == ["images"]
    assert "Available buckets: images" in str(exc.value)


def test_path_traversal_rejected(storage):
    with pytest.raises(UploadError):
        storage.upload("images", "../escape.png", upload())


def test_upload_many_keeps_successes(storage):
    files = [upload("a.png"), upload(""), upload("b.png")]
    stored, failures = storage.upload_many("images", "projects", files)
    assert len(stored) == 2
    assert all(p.startswith("projects/") for p in stored)
    assert failures == []


def test_upload_many_reports_failures(storage):
    stored, failures = storage.upload_many("media", "projects", [upload("a.png")])
    assert stored == []
    assert failures[0][0] == "a.png"
    assert isinstance(failures[0][1], BucketNotFoundError)


def test_make_object_name():
    assert re.match(r"^sheds/\d+-[0-9a-f]{8}-My_Photo\.JPG$", make_object_name("sheds", "My Photo.JPG"))
    assert make_object_name("blog", "../../").startswith("blog/")


def test_upload_error_messages():
    missing = BucketNotFoundError("images", [])
    assert upload_error_message("a.png", missing).startswith("Storage Setup Required:")
    assert "one-time setup step" in upload_error_message("a.png", missing)

    failed = UploadError("Upload failed: disk full")
    assert upload_error_message("a.png", failed) == "Failed to upload a.png: Upload failed: disk full"


def test_same_name_same_millisecond_kept_apart(storage, tmp_path, monkeypatch):
    monkeypatch.setattr("shedsite.storage.time.time", lambda: 1700000000.0)
    files = [upload("photo.jpg", b"first"), upload("photo.jpg", b"second")]
    stored, failures = storage.upload_many("images", "projects", files)

    assert failures == []
    assert len(set(stored)) == 2
    contents = {(tmp_path / "images" / p).read_bytes() for p in stored}
    assert contents == {b"first", b"second"}
