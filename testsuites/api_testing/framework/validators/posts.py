"""
Posts Validator
===============

Assertions over ``/posts`` payloads.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..http_client import ApiResponse
from ..models import POST_FIELDS
from .common import (
    ResponseAssertionError,
    assert_all_items_field_equals,
    assert_echoed,
    assert_field_equals,
    assert_required_fields,
    get_field,
)


class PostsValidator:
    """Stateless checks for post resources."""

    @staticmethod
    def validate_post_structure(post: Any) -> None:
        assert_required_fields(post, POST_FIELDS, context="post")
        for name, expected_type in (("title", str), ("body", str), ("userId", int)):
            value = get_field(post, name)
            if not isinstance(value, expected_type) or isinstance(value, bool):
                raise ResponseAssertionError(
                    f"post.{name} must be {expected_type.__name__}, got {type(value).__name__}",
                    field=name, expected=expected_type.__name__, actual=value,
                )

    @staticmethod
    def validate_posts_structure(posts: Any) -> None:
        for post in posts:
            PostsValidator.validate_post_structure(post)

    @staticmethod
    def validate_specific_post(response: ApiResponse[Any], post_id: int) -> None:
        PostsValidator.validate_post_structure(response.data)
        assert_field_equals(response.data, "id", post_id)

    @staticmethod
    def validate_posts_by_user(response: ApiResponse[Any], user_id: int) -> None:
        """Every post of a ``?userId=`` query belongs to that user."""
        PostsValidator.validate_posts_structure(response.data)
        assert_all_items_field_equals(response.data, "userId", user_id)

    @staticmethod
    def validate_created_post(response: ApiResponse[Any], payload: Mapping[str, Any]) -> None:
        assert_echoed(payload, response.data)
        assert_required_fields(response.data, ("id",), context="created post")

    @staticmethod
    def validate_updated_post(response: ApiResponse[Any], post_id: int, payload: Mapping[str, Any]) -> None:
        """PUT/PATCH result keeps the id and reflects every submitted field."""
        assert_field_equals(response.data, "id", post_id)
        assert_echoed(payload, response.data)


__all__ = ["PostsValidator"]
