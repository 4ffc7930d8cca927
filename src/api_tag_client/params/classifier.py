"""Parameter classifier — partitions a parameter record by role tag.

Records are pydantic models or dataclass instances whose fields carry a
role tag (see ``api_tag_client.params.roles``). Untagged fields and fields
with an unknown role are ignored.
"""

import dataclasses
import logging
from datetime import date, datetime, time
from enum import Enum
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict

from api_tag_client.errors import ClassificationError
from api_tag_client.params.roles import TAG_KEY, Role, RoleTag, parse_tag

logger = logging.getLogger(__name__)


class FrozenDict(dict):
    """A dict that rejects in-place changes once built."""

    def _readonly(self, *args, **kwargs):
        raise TypeError(f"{type(self).__name__} is read-only")

    __setitem__ = __delitem__ = __ior__ = _readonly
    clear = pop = popitem = setdefault = update = _readonly

    def __reduce__(self):
        return type(self), (dict(self),)


StrMap = Annotated[dict[str, str], AfterValidator(FrozenDict)]


class ClassifiedParameters(BaseModel):
    """Role-bucketed values of one parameter record."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    paths: StrMap = {}
    queries: StrMap = {}
    headers: StrMap = {}
    cookies: StrMap = {}
    body: Any = None

    @property
    def has_body(self) -> bool:
        return self.body is not None


def stringify(value: Any) -> str:
    """Render a scalar as locale-independent text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def classify(record: Any, strict_body: bool = False, log: logging.Logger | None = None) -> ClassifiedParameters:
    """Classify the tagged fields of ``record`` into path/query/header/cookie/body.

    Raises ClassificationError if ``record`` is not a pydantic model or
    dataclass instance. When more than one field is tagged ``body`` the
    last one wins, unless ``strict_body`` is set, in which case it is an error.
    """
    log = log or logger
    buckets: dict[Role, dict[str, str]] = {
        Role.PATH: {},
        Role.QUERY: {},
        Role.HEADER: {},
        Role.COOKIE: {},
    }
    body = None
    body_field = None

    for field_name, tag, value in _tagged_fields(record):
        if tag.role is None:
            log.debug("Ignoring field '%s' with unknown role tag", field_name)
            continue
        if tag.role is Role.BODY:
            if body_field is not None:
                if strict_body:
                    raise ClassificationError(
                        f"Fields '{body_field}' and '{field_name}' are both tagged as body",
                        context={"record": type(record).__name__},
                    )
                log.warning(
                    "Record %s has several body fields, '%s' replaces '%s'",
                    type(record).__name__, field_name, body_field,
                )
            body_field = field_name
            body = value
            continue
        if value is None:
            continue
        try:
            buckets[tag.role][tag.key_for(field_name)] = stringify(value)
        except UnicodeDecodeError as e:
            raise ClassificationError(
                f"Field '{field_name}' of {type(record).__name__} is not valid UTF-8 text",
                cause=e,
                context={"field": field_name},
            ) from e

    return ClassifiedParameters(
        paths=buckets[Role.PATH],
        queries=buckets[Role.QUERY],
        headers=buckets[Role.HEADER],
        cookies=buckets[Role.COOKIE],
        body=body,
    )


def _tagged_fields(record: Any) -> list[tuple[str, RoleTag, Any]]:
    if isinstance(record, BaseModel):
        result = []
        for name, info in type(record).model_fields.items():
            extra = info.json_schema_extra
            if not isinstance(extra, dict) or TAG_KEY not in extra:
                continue
            result.append((name, parse_tag(str(extra[TAG_KEY])), getattr(record, name)))
        return result

    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return [
            (f.name, parse_tag(str(f.metadata[TAG_KEY])), getattr(record, f.name))
            for f in dataclasses.fields(record)
            if TAG_KEY in f.metadata
        ]

    raise ClassificationError(
        f"Cannot classify parameters of type {type(record).__name__}; "
        "expected a pydantic model or dataclass instance",
        context={"record": record},
    )


class ParamsBuilder:
    """Explicit alternative to a tagged record.

        ParamsBuilder().path("id", 7).query("limit", 10).body({"a": 1}).build()
    """

    def __init__(self):
        self._paths: dict[str, str] = {}
        self._queries: dict[str, str] = {}
        self._headers: dict[str, str] = {}
        self._cookies: dict[str, str] = {}
        self._body: Any = None

    def path(self, name: str, value: Any) -> "ParamsBuilder":
        return self._put(self._paths, name, value)

    def query(self, name: str, value: Any) -> "ParamsBuilder":
        return self._put(self._queries, name, value)

    def header(self, name: str, value: Any) -> "ParamsBuilder":
        return self._put(self._headers, name, value)

    def cookie(self, name: str, value: Any) -> "ParamsBuilder":
        return self._put(self._cookies, name, value)

    def body(self, value: Any) -> "ParamsBuilder":
        self._body = value
        return self

    def build(self) -> ClassifiedParameters:
        return ClassifiedParameters(
            paths=dict(self._paths),
            queries=dict(self._queries),
            headers=dict(self._headers),
            cookies=dict(self._cookies),
            body=self._body,
        )

    def _put(self, bucket: dict[str, str], name: str, value: Any) -> "ParamsBuilder":
        if value is None:
            return self
        try:
            bucket[name] = stringify(value)
        except UnicodeDecodeError as e:
            raise ClassificationError(f"Parameter '{name}' is not valid UTF-8 text", cause=e, context={"field": name}) from e
        return self
