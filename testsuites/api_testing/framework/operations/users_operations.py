"""Validated operations on ``/users``."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..http_client import ApiResponse
from ..logger import HarnessLogger
from ..services import UsersApiService
from ..test_data_factory import UserFactory
from ..validators import (
    UsersValidator,
    assert_count_between,
    assert_created,
    assert_list_response,
    assert_not_found,
    assert_success,
)
from .base import BaseOperations, ListResult


MAX_EXPECTED_USERS = 100


class UsersOperations(BaseOperations):
    """Users service calls paired with their validators."""

    def __init__(
        self,
        users_service: UsersApiService,
        log: HarnessLogger,
        factory: Optional[UserFactory] = None,
    ) -> None:
        super().__init__(log)
        self.service = users_service
        self._factory = factory or UserFactory()

    async def get_all_users_with_validation(self) -> ListResult:
        async def call() -> ListResult:
            response = await self.service.get_all()
            assert_list_response(response)
            UsersValidator.validate_users_structure(response.data)
            return ListResult(response, len(response.data))

        return await self._logged("Retrieve all users", call)

    async def get_all_users_with_count_validation(self) -> ListResult:
        result = await self.get_all_users_with_validation()
        assert_count_between(result.count, 0, MAX_EXPECTED_USERS)
        return result

    async def get_user_by_id_with_validation(self, user_id: int) -> ApiResponse[Dict[str, Any]]:
        async def call() -> ApiResponse[Dict[str, Any]]:
            response = await self.service.get_by_id(user_id)
            assert_success(response)
            UsersValidator.validate_specific_user(response, user_id)
            return response

        return await self._logged("Retrieve user by id", call, user_id=user_id)

    def validate_user_data_comprehensively(self, user: Any) -> None:
        """Structure, data formats, address, company and coordinates of one user."""
        UsersValidator.validate_user_structure(user)
        UsersValidator.validate_user_data_formats(user)

    async def create_user_with_validation(
        self, user_data: Optional[Mapping[str, Any]] = None
    ) -> ApiResponse[Dict[str, Any]]:
        payload = dict(user_data) if user_data is not None else self.generate_test_user_data()
        payload.pop("id", None)

        async def call() -> ApiResponse[Dict[str, Any]]:
            response = await self.service.create(payload)
            assert_created(response)
            UsersValidator.validate_created_user(response, payload)
            return response

        return await self._logged("Create user", call, username=payload.get("username"))

    async def validate_user_not_found(self, user_id: int) -> ApiResponse[Any]:
        async def call() -> ApiResponse[Any]:
            response = await self.service.get_by_id(user_id)
            assert_not_found(response)
            return response

        return await self._logged("Verify user is absent", call, user_id=user_id)

    def generate_test_user_data(self, **overrides: Any) -> Dict[str, Any]:
        return self._factory.create_valid(**overrides)


__all__ = ["UsersOperations"]
