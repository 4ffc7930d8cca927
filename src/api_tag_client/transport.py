"""Transport — the collaborator that puts a request on the wire."""

from typing import Protocol

import requests
from pydantic import BaseModel

from api_tag_client.config import DEFAULT_TIMEOUT
from api_tag_client.errors import TransportError


class TransportResponse(BaseModel):
    status_code: int
    content: bytes = b""
    headers: dict[str, str] = {}


class Transport(Protocol):
    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        cookies: dict[str, str],
        body: bytes,
    ) -> TransportResponse: ...


class RequestsTransport:
    """Transport built on a requests.Session with a fixed timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        cookies: dict[str, str],
        body: bytes,
    ) -> TransportResponse:
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                cookies=cookies,
                data=body or None,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Failed to call API: {method} {url}", cause=e) from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content or b"",
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
