"""Response validators for the fixture API resources."""

from .comments import CommentsValidator
from .common import (
    ResponseAssertionError,
    assert_all_items_field_equals,
    assert_count_between,
    assert_created,
    assert_echoed,
    assert_field_equals,
    assert_in_range,
    assert_list_response,
    assert_matches,
    assert_not_found,
    assert_required_fields,
    assert_status,
    assert_success,
)
from .posts import PostsValidator
from .users import UsersValidator

__all__ = [
    "CommentsValidator",
    "PostsValidator",
    "ResponseAssertionError",
    "UsersValidator",
    "assert_all_items_field_equals",
    "assert_count_between",
    "assert_created",
    "assert_echoed",
    "assert_field_equals",
    "assert_in_range",
    "assert_list_response",
    "assert_matches",
    "assert_not_found",
    "assert_required_fields",
    "assert_status",
    "assert_success",
]
