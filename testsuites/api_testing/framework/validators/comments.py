"""
Comments Validator
==================

Assertions over ``/comments`` payloads.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..http_client import ApiResponse
from ..models import COMMENT_FIELDS
from .common import (
    assert_all_items_field_equals,
    assert_echoed,
    assert_field_equals,
    assert_matches,
    assert_required_fields,
    get_field,
)
from .patterns import EMAIL_REGEX


class CommentsValidator:
    """Stateless checks for comment resources."""

    @staticmethod
    def validate_comment_structure(comment: Any) -> None:
        assert_required_fields(comment, COMMENT_FIELDS, context="comment")
        assert_matches(get_field(comment, "email"), EMAIL_REGEX, "email")

    @staticmethod
    def validate_comments_structure(comments: Any) -> None:
        for comment in comments:
            CommentsValidator.validate_comment_structure(comment)

    @staticmethod
    def validate_specific_comment(response: ApiResponse[Any], comment_id: int) -> None:
        CommentsValidator.validate_comment_structure(response.data)
        assert_field_equals(response.data, "id", comment_id)

    @staticmethod
    def validate_comments_by_post(response: ApiResponse[Any], post_id: int) -> None:
        """Every comment of a ``?postId=`` query belongs to that post."""
        CommentsValidator.validate_comments_structure(response.data)
        assert_all_items_field_equals(response.data, "postId", post_id)

    @staticmethod
    def validate_created_comment(response: ApiResponse[Any], payload: Mapping[str, Any]) -> None:
        assert_echoed(payload, response.data)
        assert_required_fields(response.data, ("id",), context="created comment")


__all__ = ["CommentsValidator"]
