"""Post Rules: image URL pattern and activity descriptions."""

import pytest

from bookpost.core.post_rules import (
    describe_comment_created, describe_comment_deleted,
    describe_post_created, describe_post_deleted, is_valid_image_url,
)


@pytest.mark.parametrize("url", [
    "http://example.com/cat.png",
    "https://cdn.example.com/a/b/c.jpg?size=large",
    "https://img.example.org",
])
def test_accepts_http_urls(url):
    assert is_valid_image_url(url)


@pytest.mark.parametrize("url", [
    "",
    "example.com/cat.png",
    "ftp://example.com/cat.png",
    "https://",
    "https://exa mple.com/cat.png",
    "https:///cat.png",
])
def test_rejects_malformed_urls(url):
    assert not is_valid_image_url(url)


def test_activity_descriptions():
    assert describe_post_created(3) == "user create new POST with ID 3"
    assert describe_post_deleted(3) == "user delete POST with ID 3"
    assert describe_comment_created(3) == "user create new comment in Post ID 3"
    assert describe_comment_deleted(3) == "user delete comment in POST ID 3"
