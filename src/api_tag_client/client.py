"""API client — classify, build, send, check status, decode.

    class GetUserParams(BaseModel):
        user_id: int = param("path:id")

    client = ApiClient("users", "http://localhost:8080/api")
    user = client.get(User, "/user/<id>", GetUserParams(user_id=7))
"""

import logging
from typing import Any

from api_tag_client.codec.registry import DEFAULT_REGISTRY, CodecRegistry
from api_tag_client.config import ClientConfig
from api_tag_client.errors import ApiClientError, StatusError
from api_tag_client.params.classifier import ClassifiedParameters, classify
from api_tag_client.request.builder import (
    METHOD_DELETE,
    METHOD_GET,
    METHOD_PATCH,
    METHOD_POST,
    METHOD_PUT,
    RequestDescriptor,
    build_request,
)
from api_tag_client.transport import RequestsTransport, Transport, TransportResponse


class ApiClient:
    """Declarative HTTP client bound to one base URL.

    The config is fixed at construction; every ``invoke`` is independent,
    so one client may be shared between threads.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        logger: logging.Logger | None = None,
        registry: CodecRegistry | None = None,
    ):
        self.name = name
        self.base_url = base_url
        self.config = config or ClientConfig()
        self.transport = transport or RequestsTransport(timeout=self.config.timeout)
        self.logger = logger or logging.getLogger(__name__)
        self.registry = registry or DEFAULT_REGISTRY

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def build(
        self,
        method: str,
        path: str,
        params: Any = None,
        consume_content_type: str = "",
        produce_content_type: str = "",
    ) -> RequestDescriptor:
        """Classify ``params`` and build the request without sending it."""
        if params is None:
            classified = ClassifiedParameters()
        elif isinstance(params, ClassifiedParameters):
            classified = params
        else:
            classified = classify(params, log=self.logger)

        return build_request(
            method,
            self.base_url,
            path,
            classified,
            consume_content_type=consume_content_type or self.config.consume_content_type,
            produce_content_type=produce_content_type or self.config.produce_content_type,
            accept_from=self.config.accept_from,
            strict_placeholders=self.config.strict_placeholders,
            registry=self.registry,
        )

    def invoke(
        self,
        result_type: Any,
        method: str,
        path: str,
        params: Any = None,
        consume_content_type: str = "",
        produce_content_type: str = "",
    ) -> Any:
        """Call the API and decode the response body into ``result_type``.

        With ``result_type=None`` the body is not decoded and None is returned.

        Raises:
            ClassificationError, BuildError, EncodeError: Before any network I/O.
            TransportError: The call failed or timed out.
            StatusError: The server answered with a non-2xx status.
            DecodeError, EmptyResponseError: The body could not be decoded.
        """
        self.logger.debug("Start to call API '%s': %s %s with parameters %r", self.name, method, path, params)
        try:
            req = self.build(method, path, params, consume_content_type, produce_content_type)
        except ApiClientError as e:
            self.logger.error("Failed to build request for API '%s' %s %s: %s", self.name, method, path, e)
            raise

        self.logger.debug("Sending %s %s", req.method, req.url)
        try:
            res = self.transport.send(req.method, req.url, dict(req.headers), dict(req.cookies), req.body)
        except ApiClientError as e:
            self.logger.error("Failed to call API '%s' %s %s: %s", self.name, req.method, req.url, e)
            raise

        self.logger.debug("API '%s' %s %s responded %d", self.name, req.method, req.url, res.status_code)
        self._check_status(req, res)

        if result_type is None:
            return None
        try:
            return self.registry.decode(res.content, req.produce_content_type, result_type)
        except ApiClientError as e:
            self.logger.error("Failed to parse response from API '%s' %s %s: %s", self.name, req.method, req.url, e)
            raise

    def get(self, result_type: Any, path: str, params: Any = None) -> Any:
        return self.invoke(result_type, METHOD_GET, path, params)

    def post(self, result_type: Any, path: str, params: Any = None) -> Any:
        return self.invoke(result_type, METHOD_POST, path, params)

    def put(self, result_type: Any, path: str, params: Any = None) -> Any:
        return self.invoke(result_type, METHOD_PUT, path, params)

    def patch(self, result_type: Any, path: str, params: Any = None) -> Any:
        return self.invoke(result_type, METHOD_PATCH, path, params)

    def delete(self, result_type: Any, path: str, params: Any = None) -> Any:
        return self.invoke(result_type, METHOD_DELETE, path, params)

    def _check_status(self, req: RequestDescriptor, res: TransportResponse) -> None:
        if 200 <= res.status_code < 300:
            return
        self.logger.error(
            "API '%s' %s %s failed with status %d: %r",
            self.name, req.method, req.url, res.status_code, res.content[:500],
        )
        raise StatusError(
            f"API '{self.name}' {req.method} {req.url} responded with status {res.status_code}",
            status_code=res.status_code,
            body=res.content,
        )
