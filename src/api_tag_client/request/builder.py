"""Request builder — turns classified parameters into a resolved request descriptor."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from api_tag_client.codec.registry import DEFAULT_REGISTRY, MIME_JSON, CodecRegistry
from api_tag_client.errors import BuildError
from api_tag_client.params.classifier import ClassifiedParameters, StrMap, classify
from api_tag_client.request.url import build_url, join_url, unresolved_placeholders

METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_PATCH = "PATCH"
METHOD_DELETE = "DELETE"

HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCEPT = "Accept"


class AcceptSource(str, Enum):
    """Which negotiated content type fills a missing ``Accept`` header."""

    PRODUCE = "produce"
    CONSUME = "consume"


class RequestDescriptor(BaseModel):
    """A fully resolved HTTP request, ready for a transport."""

    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    headers: StrMap
    cookies: StrMap
    body: bytes = b""
    consume_content_type: str
    produce_content_type: str


def has_header(headers: dict[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(key.lower() == lowered and value for key, value in headers.items())


def set_default_header(headers: dict[str, str], name: str, value: str) -> None:
    """Set ``name`` unless the caller already gave it a non-empty value."""
    if has_header(headers, name):
        return
    lowered = name.lower()
    for key in [key for key in headers if key.lower() == lowered]:
        del headers[key]
    headers[name] = value


def build_request(
    method: str,
    base_url: str,
    path_template: str,
    classified: ClassifiedParameters | Any,
    consume_content_type: str = "",
    produce_content_type: str = "",
    accept_from: AcceptSource = AcceptSource.PRODUCE,
    strict_placeholders: bool = False,
    registry: CodecRegistry | None = None,
) -> RequestDescriptor:
    """Build a RequestDescriptor.

    Empty ``method`` defaults to GET and empty content types default to JSON.
    ``classified`` may also be a raw tagged record, which is classified first.
    Caller-supplied ``Content-Type`` and ``Accept`` headers are never replaced.

    Raises:
        BuildError: An unresolved placeholder remains and ``strict_placeholders`` is set.
        EncodeError: The body could not be serialized.
        UnsupportedContentTypeError: No codec for ``consume_content_type``.
    """
    registry = registry or DEFAULT_REGISTRY
    method = (method or METHOD_GET).upper()
    consume_content_type = consume_content_type or MIME_JSON
    produce_content_type = produce_content_type or MIME_JSON
    accept_from = AcceptSource(accept_from)

    if not isinstance(classified, ClassifiedParameters):
        classified = classify(classified)

    url = join_url(base_url, path_template)
    if strict_placeholders:
        missing = [name for name in unresolved_placeholders(url) if name not in classified.paths]
        if missing:
            raise BuildError(
                f"Unresolved path placeholders in '{path_template}': {', '.join(missing)}",
                context={"path": path_template, "missing": missing},
            )
    url = build_url(url, classified.paths, classified.queries)

    headers = dict(classified.headers)
    body = b""
    if classified.has_body:
        body = registry.encode(classified.body, consume_content_type)
        set_default_header(headers, HEADER_CONTENT_TYPE, consume_content_type)

    if accept_from is AcceptSource.CONSUME:
        set_default_header(headers, HEADER_ACCEPT, consume_content_type)
    else:
        set_default_header(headers, HEADER_ACCEPT, produce_content_type)

    return RequestDescriptor(
        method=method,
        url=url,
        headers=headers,
        cookies=dict(classified.cookies),
        body=body,
        consume_content_type=consume_content_type,
        produce_content_type=produce_content_type,
    )
