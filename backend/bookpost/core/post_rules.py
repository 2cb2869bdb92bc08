"""Post Rules: image URL validation and activity-log descriptions."""

import re

_IMAGE_URL_PATTERN = re.compile(r"^(http|https)://[^\s/$.?#].[^\s]*$")


def is_valid_image_url(url: str) -> bool:
    return bool(_IMAGE_URL_PATTERN.match(url))


def describe_post_created(post_id: int) -> str:
    return f"user create new POST with ID {post_id}"


def describe_post_deleted(post_id: int) -> str:
    return f"user delete POST with ID {post_id}"


def describe_comment_created(post_id: int) -> str:
    return f"user create new comment in Post ID {post_id}"


def describe_comment_deleted(post_id: int) -> str:
    return f"user delete comment in POST ID {post_id}"
