"""Validated operations on ``/comments``."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..http_client import ApiResponse
from ..logger import HarnessLogger
from ..services import CommentsApiService
from ..test_data_factory import CommentFactory
from ..validators import (
    CommentsValidator,
    assert_created,
    assert_list_response,
    assert_success,
)
from .base import BaseOperations, ListResult


class CommentsOperations(BaseOperations):
    """Comments service calls paired with their validators."""

    def __init__(
        self,
        comments_service: CommentsApiService,
        log: HarnessLogger,
        factory: Optional[CommentFactory] = None,
    ) -> None:
        super().__init__(log)
        self.service = comments_service
        self._factory = factory or CommentFactory()

    async def get_all_comments_with_validation(self) -> ListResult:
        async def call() -> ListResult:
            response = await self.service.get_all()
            assert_list_response(response)
            CommentsValidator.validate_comment_structure(response.data[0])
            return ListResult(response, len(response.data))

        return await self._logged("Retrieve all comments", call)

    async def get_comment_by_id_with_validation(self, comment_id: int) -> ApiResponse[Dict[str, Any]]:
        async def call() -> ApiResponse[Dict[str, Any]]:
            response = await self.service.get_by_id(comment_id)
            assert_success(response)
            CommentsValidator.validate_specific_comment(response, comment_id)
            return response

        return await self._logged("Retrieve comment by id", call, comment_id=comment_id)

    async def get_comments_by_post_id_with_validation(self, post_id: int) -> ListResult:
        async def call() -> ListResult:
            response = await self.service.get_comments_by_post_id(post_id)
            assert_list_response(response)
            CommentsValidator.validate_comments_by_post(response, post_id)
            return ListResult(response, len(response.data))

        return await self._logged("Retrieve comments by post", call, post_id=post_id)

    async def create_comment_with_validation(
        self, comment_data: Optional[Mapping[str, Any]] = None
    ) -> ApiResponse[Dict[str, Any]]:
        payload = dict(comment_data) if comment_data is not None else self.generate_test_comment_data()
        payload.pop("id", None)

        async def call() -> ApiResponse[Dict[str, Any]]:
            response = await self.service.create(payload)
            assert_created(response)
            CommentsValidator.validate_created_comment(response, payload)
            return response

        return await self._logged("Create comment", call, post_id=payload.get("postId"))

    def generate_test_comment_data(self, post_id: int = 1, **overrides: Any) -> Dict[str, Any]:
        return self._factory.create_valid(post_id=post_id, **overrides)


__all__ = ["CommentsOperations"]
