"""Role tags: the per-field micro-DSL declaring where a value goes in a request.

Tag syntax is ``"<role>"`` or ``"<role>:<name>"`` where role is one of
path, query, header, cookie, body. Without a name the field's own
identifier is used as the key.

    class GetUserParams(BaseModel):
        user_id: int = param("path:id")
        limit: int = param("query", default=10)
        token: str = param("header:Authorization")
        payload: dict | None = param("body", default=None)
"""

import dataclasses
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

TAG_KEY = "role"
TAG_SEPARATOR = ":"


class Role(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"
    BODY = "body"


class RoleTag(BaseModel, frozen=True):
    """A parsed role tag. ``role`` is None when the role is not recognised."""

    role: Role | None
    name: str = ""

    def key_for(self, field_name: str) -> str:
        return self.name or field_name


def parse_tag(tag: str) -> RoleTag:
    """Parse ``role[:name]``. Unknown roles yield a tag with ``role=None``."""
    role_part, _, name = tag.partition(TAG_SEPARATOR)
    role_part = role_part.strip().lower()
    try:
        role = Role(role_part)
    except ValueError:
        role = None
    return RoleTag(role=role, name=name.strip())


def param(tag: str, default: Any = ..., **kwargs: Any) -> Any:
    """Declare a pydantic field with a role tag."""
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[TAG_KEY] = tag
    return Field(default, json_schema_extra=extra, **kwargs)


def dataclass_param(tag: str, default: Any = dataclasses.MISSING, **kwargs: Any) -> Any:
    """Declare a dataclass field with a role tag."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = tag
    return dataclasses.field(default=default, metadata=metadata, **kwargs)
