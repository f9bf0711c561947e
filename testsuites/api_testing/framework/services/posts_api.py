"""Posts API service (``/posts``)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..batch_executor import BatchExecutor
from ..http_client import ApiResponse
from ..test_data_factory import PostFactory
from .base import BaseApiService


class PostsApiService(BaseApiService):
    """Encapsulates all posts-related API operations."""

    resource = "/posts"
    relation_field = "userId"

    def __init__(self, client, log, factory: Optional[PostFactory] = None) -> None:
        super().__init__(client, log)
        self._factory = factory or PostFactory()

    def default_payload(self) -> Dict[str, Any]:
        return self._factory.create_valid()

    async def get_posts_by_user_id(self, user_id: int) -> ApiResponse[List[Dict[str, Any]]]:
        """Retrieve posts by user id (``/posts?userId=``)."""
        return await self.get_by_relation(user_id)

    async def create_many(
        self,
        count: int,
        user_id: int = 1,
        batch_size: Optional[int] = None,
        delay_ms: Optional[int] = None,
    ) -> List[ApiResponse[Dict[str, Any]]]:
        """
        Create ``count`` posts through the BatchExecutor.

        Batch size and cooldown default to the configured values. Failed
        creations are dropped (see BatchExecutor).
        """
        executor = BatchExecutor(
            self.create,
            batch_size=batch_size or self.settings.batch_size,
            delay_ms=self.settings.rate_limit_delay_ms if delay_ms is None else delay_ms,
            log=self.log,
        )
        return await executor.run(self._factory.create_many(count, user_id=user_id))
