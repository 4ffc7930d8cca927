"""JSON body codec backed by pydantic type adapters."""

from typing import Any

from pydantic import PydanticUserError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from api_tag_client.errors import DecodeError, EmptyResponseError, EncodeError


class JsonCodec:
    """Encodes any pydantic-serializable value; decodes into a target type.

    The target can be a BaseModel subclass, a dataclass, a typing construct
    such as ``list[int]``, or ``Any`` for plain JSON values.
    """

    def encode(self, value: Any) -> bytes:
        try:
            return TypeAdapter(type(value)).dump_json(value)
        except (PydanticSerializationError, PydanticUserError, TypeError, ValueError) as e:
            raise EncodeError(
                "Failed to convert object to content-type 'application/json'",
                cause=e,
                context={"object": value},
            ) from e

    def decode(self, data: bytes, target: Any = Any) -> Any:
        if not data or not data.strip():
            raise EmptyResponseError("Cannot decode empty payload as 'application/json'", context={"data": data})
        try:
            return TypeAdapter(target).validate_json(data)
        except (ValidationError, PydanticUserError) as e:
            raise DecodeError(
                "Failed to parse data as content-type 'application/json'",
                cause=e,
                context={"data": data},
            ) from e
