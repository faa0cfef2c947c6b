import logging
from dataclasses import dataclass, field

import requests

from .exceptions import AuthRejectedError, DispatchError, ServerError, TransportError
from .message import encode_message

logger = logging.getLogger(__name__)

# Put Message answers 201 Created, not 200.
SUCCESS_STATUS = 201
AUTH_REJECTED_STATUSES = (401, 403)


@dataclass
class DispatchResult:
    status_code: int = None
    headers: dict = field(default_factory=dict)
    body: bytes = b''
    error: DispatchError = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code == SUCCESS_STATUS

    def to_dict(self) -> dict:
        data = {
            'success': self.ok,
            'status_code': self.status_code,
            'headers': dict(self.headers),
            'body': self.body.decode('utf-8', errors='replace'),
        }
        if self.error is not None:
            data['error'] = type(self.error).__name__
            data['message'] = str(self.error)
            data['retryable'] = self.error.retryable
        return data


def classify_response(status_code: int, headers: dict, body: bytes) -> "DispatchError | None":
    if status_code == SUCCESS_STATUS:
        return None
    if status_code in AUTH_REJECTED_STATUSES:
        return AuthRejectedError(
            f"Request rejected with status {status_code}, check the signature and clock",
            status_code=status_code, headers=headers, body=body,
        )
    return ServerError(
        f"Unexpected status {status_code}",
        status_code=status_code, headers=headers, body=body,
        retryable=status_code >= 500,
    )


class QueueManager:
    def __init__(self, auth, session: requests.Session = None, timeout: float = None):
        self.auth = auth
        self.session = session
        self.timeout = timeout if timeout is not None else auth.config.timeout

    def put_message(self, text: str, escape: bool = True) -> DispatchResult:
        """
        Sign and send one message. Transport and service failures come back
        in DispatchResult.error, signing failures are raised.
        """
        body = encode_message(text, escape=escape).encode('utf-8')
        headers, url = self.auth.sign(len(body))
        headers['Content-Length'] = str(len(body))

        try:
            # The body must always be attached or the service waits for it.
            post = self.session.post if self.session is not None else requests.post
            resp = post(url, headers=headers, data=body, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning("Sending to %s failed: %s", url, e)
            return DispatchResult(error=TransportError(str(e), retryable=True))
        except requests.RequestException as e:
            logger.error("Request to %s is invalid: %s", url, e)
            return DispatchResult(error=TransportError(str(e), retryable=False))

        result = DispatchResult(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            body=resp.content,
        )
        result.error = classify_response(result.status_code, result.headers, result.body)
        if result.ok:
            logger.info("Message queued, status=%s", resp.status_code)
        else:
            logger.warning("Message rejected, status=%s", resp.status_code)
        return result
