"""Validated operations on ``/posts``."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..http_client import ApiResponse
from ..logger import HarnessLogger
from ..services import PostsApiService
from ..test_data_factory import PostFactory
from ..validators import (
    PostsValidator,
    assert_count_between,
    assert_created,
    assert_list_response,
    assert_not_found,
    assert_success,
)
from .base import BaseOperations, ListResult


MAX_EXPECTED_POSTS = 500


class PostsOperations(BaseOperations):
    """Posts service calls paired with their validators."""

    def __init__(
        self,
        posts_service: PostsApiService,
        log: HarnessLogger,
        factory: Optional[PostFactory] = None,
    ) -> None:
        super().__init__(log)
        self.service = posts_service
        self._factory = factory or PostFactory()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_all_posts_with_validation(self) -> ListResult:
        async def call() -> ListResult:
            response = await self.service.get_all()
            assert_list_response(response)
            PostsValidator.validate_post_structure(response.data[0])
            return ListResult(response, len(response.data))

        return await self._logged("Retrieve all posts", call)

    async def get_all_posts_with_count_validation(self) -> ListResult:
        result = await self.get_all_posts_with_validation()
        assert_count_between(result.count, 0, MAX_EXPECTED_POSTS)
        return result

    async def get_post_by_id_with_validation(self, post_id: int) -> ApiResponse[Dict[str, Any]]:
        async def call() -> ApiResponse[Dict[str, Any]]:
            response = await self.service.get_by_id(post_id)
            assert_success(response)
            PostsValidator.validate_specific_post(response, post_id)
            return response

        return await self._logged("Retrieve post by id", call, post_id=post_id)

    async def get_posts_by_user_id_with_validation(self, user_id: int) -> ListResult:
        async def call() -> ListResult:
            response = await self.service.get_posts_by_user_id(user_id)
            assert_list_response(response)
            PostsValidator.validate_posts_by_user(response, user_id)
            return ListResult(response, len(response.data))

        return await self._logged("Retrieve posts by user", call, user_id=user_id)

    async def validate_post_not_found(self, post_id: int) -> ApiResponse[Any]:
        async def call() -> ApiResponse[Any]:
            response = await self.service.get_by_id(post_id)
            assert_not_found(response)
            return response

        return await self._logged("Verify post is absent", call, post_id=post_id)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create_post_with_validation(
        self, post_data: Optional[Mapping[str, Any]] = None
    ) -> ApiResponse[Dict[str, Any]]:
        payload = dict(post_data) if post_data is not None else self.generate_test_post_data()
        payload.pop("id", None)

        async def call() -> ApiResponse[Dict[str, Any]]:
            response = await self.service.create(payload)
            assert_created(response)
            PostsValidator.validate_created_post(response, payload)
            return response

        return await self._logged("Create post", call, user_id=payload.get("userId"))

    async def update_post_with_validation(
        self, post_id: int, post_data: Mapping[str, Any]
    ) -> ApiResponse[Dict[str, Any]]:
        async def call() -> ApiResponse[Dict[str, Any]]:
            response = await self.service.update(post_id, post_data)
            assert_success(response)
            PostsValidator.validate_updated_post(response, post_id, post_data)
            return response

        return await self._logged("Update post", call, post_id=post_id)

    async def patch_post_with_validation(
        self, post_id: int, fields: Mapping[str, Any]
    ) -> ApiResponse[Dict[str, Any]]:
        async def call() -> ApiResponse[Dict[str, Any]]:
            response = await self.service.partial_update(post_id, fields)
            assert_success(response)
            PostsValidator.validate_updated_post(response, post_id, fields)
            return response

        return await self._logged("Patch post", call, post_id=post_id, fields=sorted(fields))

    async def delete_post_with_validation(self, post_id: int) -> ApiResponse[Any]:
        async def call() -> ApiResponse[Any]:
            response = await self.service.delete(post_id)
            assert_success(response)
            return response

        return await self._logged("Delete post", call, post_id=post_id)

    async def create_posts_in_batches(
        self,
        count: int,
        user_id: int = 1,
        batch_size: Optional[int] = None,
    ) -> List[ApiResponse[Dict[str, Any]]]:
        """
        Create ``count`` posts through the batch executor.

        Items that fail are dropped by the executor, so the result may hold
        fewer than ``count`` responses; every returned response is validated.
        """
        async def call() -> List[ApiResponse[Dict[str, Any]]]:
            responses = await self.service.create_many(count, user_id=user_id, batch_size=batch_size)
            for response in responses:
                assert_created(response)
                PostsValidator.validate_post_structure(response.data)
            return responses

        return await self._logged("Create posts in batches", call, count=count, user_id=user_id)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def generate_test_post_data(self, user_id: int = 1, **overrides: Any) -> Dict[str, Any]:
        return self._factory.create_valid(user_id=user_id, **overrides)

    def generate_updated_test_post_data(self, user_id: int = 1) -> Dict[str, Any]:
        return self._factory.create_updated(user_id=user_id)


__all__ = ["PostsOperations"]
