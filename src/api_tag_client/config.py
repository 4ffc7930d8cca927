"""Client configuration: timeout and content-type negotiation defaults."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from api_tag_client.codec.registry import MIME_JSON
from api_tag_client.errors import ConfigError
from api_tag_client.request.builder import AcceptSource

DEFAULT_TIMEOUT = 30.0


class ClientConfig(BaseModel):
    """Read-only settings shared by every call of one client."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout: float = DEFAULT_TIMEOUT  # seconds
    consume_content_type: str = MIME_JSON
    produce_content_type: str = MIME_JSON
    accept_from: AcceptSource = AcceptSource.PRODUCE
    strict_placeholders: bool = False

    @field_validator("timeout")
    @classmethod
    def _default_timeout(cls, value: float) -> float:
        # Zero or negative means "use the default", not "no timeout".
        return value if value > 0 else DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "ClientConfig":
        values = {}
        if os.getenv("API_TAG_CLIENT_TIMEOUT"):
            values["timeout"] = os.environ["API_TAG_CLIENT_TIMEOUT"]
        if os.getenv("API_TAG_CLIENT_CONSUME"):
            values["consume_content_type"] = os.environ["API_TAG_CLIENT_CONSUME"]
        if os.getenv("API_TAG_CLIENT_PRODUCE"):
            values["produce_content_type"] = os.environ["API_TAG_CLIENT_PRODUCE"]
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError("Invalid client configuration in environment", cause=e) from e


def load_config(file_path: Path) -> ClientConfig:
    """Load a ClientConfig from a YAML file.

    The settings may sit at the top level or under a ``client:`` key.
    """
    try:
        doc = yaml.safe_load(Path(file_path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read client configuration from {file_path}", cause=e) from e

    doc = doc or {}
    if not isinstance(doc, dict):
        raise ConfigError(f"Client configuration in {file_path} must be a mapping")
    if isinstance(doc.get("client"), dict):
        doc = doc["client"]

    try:
        return ClientConfig(**doc)
    except ValidationError as e:
        raise ConfigError(f"Invalid client configuration in {file_path}", cause=e) from e
