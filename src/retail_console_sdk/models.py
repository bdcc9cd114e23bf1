from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class RequestDescriptor:
    path: str
    method: HttpMethod = HttpMethod.GET
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    params: Mapping[str, Any] | None = None
    timeout_seconds: float = 10.0
    max_attempts: int = 3
    # Login must be able to receive a 401 without tearing down the session.
    handle_auth_expiry: bool = True


class UserIdentity(BaseModel):
    id: str
    email: str
    name: str
    role: str = "admin"


class RemoteUser(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    id: str | None = None
    legacy_id: str | None = Field(default=None, alias="_id")
    email: str | None = None
    name: str | None = None
    role: str | None = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = False
    token: str | None = None
    user: RemoteUser | None = None
    message: str | None = None


class MeResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = False
    user: RemoteUser | None = None


class ListResult(BaseModel):
    items: list[Any] = Field(default_factory=list)
    total: int = 0


@dataclass(frozen=True)
class Pagination:
    current: int = 1
    page_size: int = 10
    mode: Literal["client", "off"] = "client"


@dataclass(frozen=True)
class ListFilter:
    field: str
    value: Any
    operator: str = "eq"


@dataclass(frozen=True)
class ListRequest:
    resource: str
    pagination: Pagination | None = None
    filters: tuple[ListFilter, ...] = ()
