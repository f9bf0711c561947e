"""Comments API service (``/comments``)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..http_client import ApiResponse
from ..test_data_factory import CommentFactory
from .base import BaseApiService


class CommentsApiService(BaseApiService):
    """Encapsulates all comments-related API operations."""

    resource = "/comments"
    relation_field = "postId"

    def __init__(self, client, log, factory: Optional[CommentFactory] = None) -> None:
        super().__init__(client, log)
        self._factory = factory or CommentFactory()

    def default_payload(self) -> Dict[str, Any]:
        return self._factory.create_valid(post_id=1)

    async def get_comments_by_post_id(self, post_id: int) -> ApiResponse[List[Dict[str, Any]]]:
        """Retrieve comments by post id (``/comments?postId=``)."""
        return await self.get_by_relation(post_id)

