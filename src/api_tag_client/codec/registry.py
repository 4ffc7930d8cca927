"""Body codec registry keyed by content type."""

from typing import Any, Protocol

from api_tag_client.codec.json_codec import JsonCodec
from api_tag_client.errors import UnsupportedContentTypeError

MIME_TEXT = "text/plain"
MIME_JSON = "application/json"
MIME_XML = "application/xml"
MIME_HTML = "text/html"
MIME_FORM = "application/x-www-form-urlencoded"
MIME_MULTIPART = "multipart/form-data"


class Codec(Protocol):
    def encode(self, value: Any) -> bytes: ...

    def decode(self, data: bytes, target: Any) -> Any: ...


def normalize_content_type(content_type: str) -> str:
    """Drop parameters (``; charset=...``) and lower-case the media type."""
    return content_type.split(";", 1)[0].strip().lower()


class CodecRegistry:
    """Maps content types to codecs."""

    def __init__(self, codecs: dict[str, Codec] | None = None):
        self._codecs: dict[str, Codec] = {}
        for content_type, codec in (codecs or {}).items():
            self.register(content_type, codec)

    def register(self, content_type: str, codec: Codec) -> None:
        self._codecs[normalize_content_type(content_type)] = codec

    def get(self, content_type: str) -> Codec:
        codec = self._codecs.get(normalize_content_type(content_type))
        if codec is None:
            raise UnsupportedContentTypeError(content_type)
        return codec

    def supports(self, content_type: str) -> bool:
        return normalize_content_type(content_type) in self._codecs

    def encode(self, value: Any, content_type: str) -> bytes:
        return self.get(content_type).encode(value)

    def decode(self, data: bytes, content_type: str, target: Any = Any) -> Any:
        return self.get(content_type).decode(data, target)


def default_registry() -> CodecRegistry:
    return CodecRegistry({MIME_JSON: JsonCodec()})


DEFAULT_REGISTRY = default_registry()


def encode(value: Any, content_type: str) -> bytes:
    """Serialize ``value`` with the default registry."""
    return DEFAULT_REGISTRY.encode(value, content_type)


def decode(data: bytes, content_type: str, target: Any = Any) -> Any:
    """Deserialize ``data`` into ``target`` with the default registry."""
    return DEFAULT_REGISTRY.decode(data, content_type, target)
