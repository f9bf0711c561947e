"""Users API service (``/users``)."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..test_data_factory import UserFactory
from .base import BaseApiService


class UsersApiService(BaseApiService):
    """Encapsulates all users-related API operations."""

    resource = "/users"
    relation_field = None

    def __init__(self, client, log, factory: Optional[UserFactory] = None) -> None:
        super().__init__(client, log)
        self._factory = factory or UserFactory()

    def default_payload(self) -> Dict[str, Any]:
        return self._factory.create_valid()
