"""Domain API services, one per fixture API resource."""

from .base import BaseApiService, ValidationError, ensure_positive_id
from .comments_api import CommentsApiService
from .posts_api import PostsApiService
from .users_api import UsersApiService

__all__ = [
    "BaseApiService",
    "CommentsApiService",
    "PostsApiService",
    "UsersApiService",
    "ValidationError",
    "ensure_positive_id",
]
