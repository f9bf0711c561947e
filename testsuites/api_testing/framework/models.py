"""
================================================================================
Fixture API Resource Models
================================================================================

Typed views of the fixture API resources (users, posts, comments).

Response bodies travel through the harness as plain JSON mappings so that the
structure validators can report missing fields; these dataclasses are the
typed form used by the test data factory and by ApiResponse.as_model().

================================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union


M = TypeVar("M", bound="ResourceModel")


class ResourceModel:
    """Mixin with mapping conversion for the resource dataclasses."""

    @classmethod
    def from_dict(cls: Type[M], data: Mapping[str, Any]) -> M:
        kwargs = {}
        for f in fields(cls):  # type: ignore[arg-type]
            if f.name not in data:
                if f.name == "id":
                    kwargs["id"] = None
                    continue
                raise ValueError(f"{cls.__name__} payload is missing field '{f.name}'")
            value = data[f.name]
            nested = NESTED_MODELS.get((cls.__name__, f.name))
            if nested is not None and isinstance(value, Mapping):
                value = nested.from_dict(value)
            kwargs[f.name] = value
        return cls(**kwargs)  # type: ignore[call-arg]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]

    def to_payload(self) -> Dict[str, Any]:
        """Request body for create/update: every field except the server-assigned id."""
        payload = self.to_dict()
        payload.pop("id", None)
        return payload


@dataclass(frozen=True)
class Geo(ResourceModel):
    lat: str
    lng: str


@dataclass(frozen=True)
class Address(ResourceModel):
    street: str
    suite: str
    city: str
    zipcode: str
    geo: Geo


@dataclass(frozen=True)
class Company(ResourceModel):
    name: str
    catchPhrase: str
    bs: str


@dataclass(frozen=True)
class User(ResourceModel):
    name: str
    username: str
    email: str
    address: Address
    phone: str
    website: str
    company: Company
    id: Optional[int] = None


@dataclass(frozen=True)
class Post(ResourceModel):
    title: str
    body: str
    userId: int
    id: Optional[int] = None


@dataclass(frozen=True)
class Comment(ResourceModel):
    postId: int
    name: str
    email: str
    body: str
    id: Optional[int] = None


Resource = Union[User, Post, Comment]

NESTED_MODELS: Dict[tuple, Type[ResourceModel]] = {
    ("User", "address"): Address,
    ("User", "company"): Company,
    ("Address", "geo"): Geo,
}

# Required top-level fields per resource, in the order they are checked
USER_FIELDS = ("id", "name", "username", "email", "address", "phone", "website", "company")
ADDRESS_FIELDS = ("street", "suite", "city", "zipcode", "geo")
GEO_FIELDS = ("lat", "lng")
COMPANY_FIELDS = ("name", "catchPhrase", "bs")
POST_FIELDS = ("id", "title", "body", "userId")
COMMENT_FIELDS = ("id", "name", "email", "body", "postId")


__all__ = [
    "Address",
    "Comment",
    "Company",
    "Geo",
    "Post",
    "Resource",
    "ResourceModel",
    "User",
    "USER_FIELDS",
    "ADDRESS_FIELDS",
    "GEO_FIELDS",
    "COMPANY_FIELDS",
    "POST_FIELDS",
    "COMMENT_FIELDS",
]
