"""
Users Validator
===============

Assertions over ``/users`` payloads: structure, data formats, nested address
and company, geographic coordinates and echo of created users.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..http_client import ApiResponse
from ..models import ADDRESS_FIELDS, COMPANY_FIELDS, GEO_FIELDS, USER_FIELDS
from .common import (
    ResponseAssertionError,
    assert_echoed,
    assert_field_equals,
    assert_in_range,
    assert_matches,
    assert_required_fields,
    get_field,
)
from .patterns import (
    EMAIL_REGEX,
    LATITUDE_RANGE,
    LONGITUDE_RANGE,
    PHONE_REGEX,
    USERNAME_REGEX,
    WEBSITE_REGEX,
)


class UsersValidator:
    """Stateless checks for user resources. Every method raises on the first failure."""

    @staticmethod
    def validate_user_structure(user: Any) -> None:
        """Top-level user fields plus the nested address, geo and company objects."""
        assert_required_fields(user, USER_FIELDS, context="user")
        UsersValidator.validate_address(get_field(user, "address"))
        UsersValidator.validate_company(get_field(user, "company"))

    @staticmethod
    def validate_users_structure(users: Any) -> None:
        for user in users:
            UsersValidator.validate_user_structure(user)

    @staticmethod
    def validate_specific_user(response: ApiResponse[Any], user_id: int) -> None:
        UsersValidator.validate_user_structure(response.data)
        assert_field_equals(response.data, "id", user_id)

    @staticmethod
    def validate_address(address: Any) -> None:
        assert_required_fields(address, ADDRESS_FIELDS, context="address")
        UsersValidator.validate_geo_coordinates(get_field(address, "geo"))

    @staticmethod
    def validate_company(company: Any) -> None:
        assert_required_fields(company, COMPANY_FIELDS, context="company")

    @staticmethod
    def validate_geo_coordinates(geo: Any) -> None:
        """
        Latitude within [-90, 90] and longitude within [-180, 180].

        Coordinates arrive as strings (``"40.7128"``); unparsable values fail.
        """
        assert_required_fields(geo, GEO_FIELDS, context="geo")
        assert_in_range(get_field(geo, "lat"), *LATITUDE_RANGE, name="address.geo.lat")
        assert_in_range(get_field(geo, "lng"), *LONGITUDE_RANGE, name="address.geo.lng")

    @staticmethod
    def validate_user_data_formats(user: Any) -> None:
        assert_matches(get_field(user, "email"), EMAIL_REGEX, "email")
        assert_matches(get_field(user, "username"), USERNAME_REGEX, "username")
        assert_matches(get_field(user, "phone"), PHONE_REGEX, "phone")
        assert_matches(get_field(user, "website"), WEBSITE_REGEX, "website")

    @staticmethod
    def validate_created_user(response: ApiResponse[Any], payload: Mapping[str, Any]) -> None:
        """Every submitted field is echoed and a new id was assigned."""
        assert_echoed(payload, response.data)
        new_id = get_field(response.data, "id")
        if not isinstance(new_id, int) or isinstance(new_id, bool):
            raise ResponseAssertionError(
                f"Created user has no assigned id: {new_id!r}",
                field="id", expected="int", actual=new_id,
            )


__all__ = ["UsersValidator"]
