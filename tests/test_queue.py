import pytest
import requests

from azqueue.exceptions import AuthRejectedError, ServerError, TransportError
from azqueue.message import encode_message
from azqueue.queue import DispatchResult, QueueManager


class FakeResponse:
    def __init__(self, status_code, content=b"", headers=None):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, headers=None, data=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "data": data, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


class TestQueueManager:
    def test_put_message_success(self, auth):
        session = FakeSession(FakeResponse(201, b"", {"x-ms-request-id": "abc"}))
        result = QueueManager(auth, session=session).put_message("hi")

        assert result.ok
        assert result.error is None
        assert result.status_code == 201
        assert result.headers == {"x-ms-request-id": "abc"}

        call = session.calls[0]
        body = encode_message("hi").encode("utf-8")
        assert call["url"] == "https://acct.queue.core.windows.net/q1/messages"
        assert call["data"] == body
        assert call["headers"]["Content-Length"] == str(len(body))
        assert call["timeout"] == 5.0

    def test_signature_covers_body_length(self, auth):
        session = FakeSession(FakeResponse(201))
        QueueManager(auth, session=session).put_message("héllo")

        headers = session.calls[0]["headers"]
        expected, _ = auth.sign(len(session.calls[0]["data"]), timestamp=headers["x-ms-date"])
        assert headers["Authorization"] == expected["Authorization"]
        # UTF-8 byte length, not character count
        assert headers["Content-Length"] == str(len(encode_message("héllo").encode("utf-8")))

    def test_defaults_to_requests_post(self, auth, monkeypatch):
        session = FakeSession(FakeResponse(201))
        monkeypatch.setattr(requests, "post", session.post)
        result = QueueManager(auth).put_message("hi")

        assert result.ok
        assert session.calls[0]["url"] == "https://acct.queue.core.windows.net/q1/messages"

    def test_explicit_timeout(self, auth):
        session = FakeSession(FakeResponse(201))
        QueueManager(auth, session=session, timeout=1.5).put_message("hi")
        assert session.calls[0]["timeout"] == 1.5

    def test_raw_message(self, auth):
        session = FakeSession(FakeResponse(201))
        QueueManager(auth, session=session).put_message("<b/>", escape=False)
        assert b"<MessageText><b/></MessageText>" in session.calls[0]["data"]

    def test_auth_rejected(self, auth):
        body = b"<Error><Code>AuthenticationFailed</Code></Error>"
        session = FakeSession(FakeResponse(403, body, {"Content-Type": "application/xml"}))
        result = QueueManager(auth, session=session).put_message("hi")

        assert not result.ok
        assert isinstance(result.error, AuthRejectedError)
        assert result.error.retryable is False
        assert result.error.status_code == 403
        assert result.error.body == body
        assert result.body == body

    @pytest.mark.parametrize("status, retryable", [(500, True), (503, True), (400, False), (200, False)])
    def test_server_error(self, auth, status, retryable):
        session = FakeSession(FakeResponse(status, b"oops"))
        result = QueueManager(auth, session=session).put_message("hi")

        assert not result.ok
        assert isinstance(result.error, ServerError)
        assert result.error.retryable is retryable
        assert result.status_code == status

    @pytest.mark.parametrize("exc, retryable", [
        (requests.ConnectionError("refused"), True),
        (requests.Timeout("slow"), True),
        (requests.exceptions.InvalidURL("bad url"), False),
    ])
    def test_transport_error(self, auth, exc, retryable):
        result = QueueManager(auth, session=FakeSession(exc=exc)).put_message("hi")

        assert not result.ok
        assert result.status_code is None
        assert isinstance(result.error, TransportError)
        assert result.error.retryable is retryable


class TestDispatchResult:
    def test_to_dict_success(self):
        result = DispatchResult(status_code=201, headers={"Date": "x"}, body=b"")
        assert result.to_dict() == {
            "success": True,
            "status_code": 201,
            "headers": {"Date": "x"},
            "body": "",
        }

    def test_to_dict_failure(self):
        error = AuthRejectedError("rejected", status_code=403)
        result = DispatchResult(status_code=403, body=b"denied", error=error)
        data = result.to_dict()
        assert data["success"] is False
        assert data["error"] == "AuthRejectedError"
        assert data["message"] == "rejected"
        assert data["retryable"] is False
        assert data["body"] == "denied"
