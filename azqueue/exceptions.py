class QueueSenderError(Exception):
    """Top-level exception for queue sender errors."""

    ...


class ConfigError(QueueSenderError, ValueError):
    """Missing or invalid profile configuration."""

    ...


class SigningError(QueueSenderError):
    """The request could not be signed. Fatal until reconfigured."""

    ...


class KeyDecodeError(SigningError, ValueError):
    """The account key is not valid base64."""

    ...


class HmacInitError(SigningError):
    """The HMAC primitive rejected the decoded key."""

    ...


class KeyLengthError(HmacInitError): ...


class DispatchError(QueueSenderError):
    """
    Sending the message failed. Carries whatever the service returned so
    the outcome can be reported.
    """

    retryable = False

    def __init__(self, message: str, status_code: int = None, headers: dict = None,
                 body: bytes = b'', retryable: bool = None):
        super().__init__(message)
        self.status_code = status_code
        self.headers = headers or {}
        self.body = body
        if retryable is not None:
            self.retryable = retryable


class TransportError(DispatchError):
    """Connection-level failure, nothing usable came back."""

    ...


class AuthRejectedError(DispatchError):
    """
    The service recomputed a different signature. Points at a
    canonicalization or clock bug, retrying won't help.
    """

    ...


class ServerError(DispatchError): ...
