from unittest.mock import MagicMock

import pytest
import requests

from api_tag_client.errors import TransportError
from api_tag_client.transport import RequestsTransport, TransportResponse


def _session(status_code=200, content=b'{"ok": true}'):
    session = MagicMock()
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.headers = {"Content-Type": "application/json"}
    session.request.return_value = response
    return session


class TestRequestsTransport:
    def test_send_passes_everything_through(self):
        session = _session()
        transport = RequestsTransport(timeout=5, session=session)

        res = transport.send(
            "POST", "http://h/x", {"Accept": "application/json"}, {"session": "s1"}, b'{"a":1}'
        )

        assert isinstance(res, TransportResponse)
        assert res.status_code == 200
        assert res.content == b'{"ok": true}'
        assert res.headers == {"Content-Type": "application/json"}
        args, kwargs = session.request.call_args
        assert args == ("POST", "http://h/x")
        assert kwargs["headers"] == {"Accept": "application/json"}
        assert kwargs["cookies"] == {"session": "s1"}
        assert kwargs["data"] == b'{"a":1}'
        assert kwargs["timeout"] == 5

    def test_empty_body_sent_as_none(self):
        session = _session()
        RequestsTransport(session=session).send("GET", "http://h/x", {}, {}, b"")
        assert session.request.call_args[1]["data"] is None

    def test_empty_response_content(self):
        session = _session(status_code=204, content=None)
        res = RequestsTransport(session=session).send("DELETE", "http://h/x", {}, {}, b"")
        assert res.status_code == 204
        assert res.content == b""

    @pytest.mark.parametrize("error", [
        requests.exceptions.Timeout("too slow"),
        requests.exceptions.ConnectionError("refused"),
    ])
    def test_network_errors_wrapped(self, error):
        session = _session()
        session.request.side_effect = error
        with pytest.raises(TransportError) as exc_info:
            RequestsTransport(session=session).send("GET", "http://h/x", {}, {}, b"")
        assert exc_info.value.cause is error
        assert exc_info.value.__cause__ is error

    def test_context_manager_closes_session(self):
        session = _session()
        with RequestsTransport(session=session) as transport:
            assert transport.session is session
        session.close.assert_called_once()
