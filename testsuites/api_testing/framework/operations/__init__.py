"""Operations: validated service calls used by the test suites."""

from .base import BaseOperations, ListResult
from .comments_operations import CommentsOperations
from .posts_operations import PostsOperations
from .users_operations import UsersOperations

__all__ = [
    "BaseOperations",
    "CommentsOperations",
    "ListResult",
    "PostsOperations",
    "UsersOperations",
]
