# tests/test_blog.py
import datetime as dt

from shedsite.models import BlogPost
from shedsite.services.blog import apply_publish_state, slug_taken, slugify, toggle_publish

NOW = dt.datetime(2025, 3, 1, 12, 0)


def test_slugify():
    assert slugify("Hello, World!") == "hello-world"
    assert slugify("  10 Tips for   Shed Care!! ") == "10-tips-for-shed-care"
    assert slugify("Déjà vu") == "d-j-vu"
    assert slugify("") == ""


def test_publish_stamps_now_when_no_date():
    post = BlogPost(title="t", slug="t", content="c" * 10, author="a")
    apply_publish_state(post, True, now=NOW)
    assert post.is_published is True
    assert post.published_at == NOW


def test_publish_keeps_given_or_existing_date():
    given = dt.datetime(2024, 12, 24, 9, 0)
    post = BlogPost(title="t", slug="t", content="c" * 10, author="a")
    apply_publish_state(post, True, given, now=NOW)
    assert post.published_at == given

    apply_publish_state(post, True, None, now=NOW)
    assert post.published_at == given


def test_unpublish_clears_date():
    post = BlogPost(title="t", slug="t", content="c" * 10, author="a", published_at=NOW)
    apply_publish_state(post, False, now=NOW)
    assert post.is_published is False
    assert post.published_at is None


def test_toggle_publish():
    post = BlogPost(title="t", slug="t", content="c" * 10, author="a", is_published=False)
    toggle_publish(post, now=NOW)
    assert post.is_published is True
    assert post.published_at == NOW

    toggle_publish(post, now=NOW)
    assert post.is_published is False
    assert post.published_at is None


def test_slug_taken(db):
    post = BlogPost(title="First", slug="first", content="c" * 10, author="a")
    db.add(post)
    db.commit()

    assert slug_taken(db, "first")
    assert not slug_taken(db, "first", exclude_id=post.id)
    assert not slug_taken(db, "second")


def test_publish_default_clock_is_naive_utc():
    post = BlogPost(title="t", slug="t", content="c" * 10, author="a", is_published=False)
    before = dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)
    toggle_publish(post)

    assert post.published_at.tzinfo is None
    assert post.published_at >= before
