"""Error hierarchy for api-tag-client.

Every failure raised by the library is an ApiClientError carrying a
human-readable message, the original cause (if any) and a context dict
with diagnostic data such as the offending payload.
"""


class ApiClientError(Exception):
    """Base class for all errors raised by api-tag-client."""

    def __init__(self, message: str, cause: BaseException | None = None, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class ClassificationError(ApiClientError):
    """The parameter record cannot be introspected or is declared wrongly."""


class BuildError(ApiClientError):
    """The request descriptor could not be built."""


class UnsupportedContentTypeError(ApiClientError):
    """No codec is registered for the requested content type."""

    def __init__(self, content_type: str):
        super().__init__(f"Unknown content-type '{content_type}'", context={"content_type": content_type})
        self.content_type = content_type


class EncodeError(ApiClientError):
    """A body value could not be serialized."""


class DecodeError(ApiClientError):
    """A response payload could not be deserialized."""


class EmptyResponseError(DecodeError):
    """The response carried no body to decode."""


class TransportError(ApiClientError):
    """The network call failed (connection error, timeout...)."""


class StatusError(ApiClientError):
    """The server answered with a non-2xx status code."""

    def __init__(self, message: str, status_code: int, body: bytes = b""):
        super().__init__(message, context={"status_code": status_code, "body": body})
        self.status_code = status_code
        self.body = body


class ConfigError(ApiClientError):
    """Client configuration is invalid or unreadable."""
