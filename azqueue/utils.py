import base64
import binascii
import datetime
import hashlib
import hmac
import logging

from dateutil import tz

from .exceptions import KeyDecodeError, KeyLengthError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = '%a, %d %b %Y %H:%M:%S'
DEFAULT_ZONE = 'GMT'
HEADER_PREFIX = 'x-ms-'
MESSAGES_SUFFIX = '/messages'

# Standard header slots between the verb and the canonicalized headers.
STANDARD_FIELDS = (
    'Content-Encoding',
    'Content-Language',
    'Content-Length',
    'Content-MD5',
    'Content-Type',
    'Date',
    'If-Modified-Since',
    'If-Match',
    'If-None-Match',
    'If-Unmodified-Since',
    'Range',
)


def format_timestamp(now: datetime.datetime = None, zone: str = DEFAULT_ZONE) -> str:
    """
    Format the request date as the service expects it.

    The zone is a literal label appended to the local wall-clock time, not
    the real offset: the queue service rejects "UTC" and numeric offsets, so
    the machine clock has to actually be on the labelled zone.
    """
    if now is None:
        now = datetime.datetime.now(tz.tzlocal())
    return f"{now.strftime(TIMESTAMP_FORMAT)} {zone}"


def canonical_headers(timestamp: str, version: str, extra: dict = None) -> str:
    headers = {'x-ms-date': timestamp, 'x-ms-version': version}
    for name, value in (extra or {}).items():
        if not name.lower().startswith(HEADER_PREFIX):
            raise ValueError(f"Header '{name}' is not in the {HEADER_PREFIX} namespace")
        if name.lower() in headers:
            raise ValueError(f"Header '{name}' is already set")
        headers[name.lower()] = value
    return "\n".join(f"{k}:{headers[k]}" for k in sorted(headers))


def canonical_resource(account: str, queue: str, suffix: str = MESSAGES_SUFFIX) -> str:
    # Put Message signs the /messages path even though the generic
    # account/container rule stops at the queue name.
    return f"/{account}/{queue}{suffix}"


def build_string_to_sign(verb: str, content_length: int, canonical_headers: str,
                         canonical_resource: str) -> str:
    slots = dict.fromkeys(STANDARD_FIELDS, '')
    # Zero must be an empty slot, "0" gives a signature mismatch.
    if content_length:
        slots['Content-Length'] = str(content_length)
    return "\n".join([
        verb,
        *(slots[name] for name in STANDARD_FIELDS),
        canonical_headers,
        canonical_resource,
    ])


class SharedKeySigner:
    @staticmethod
    def decode_key(key: str) -> bytes:
        try:
            return base64.b64decode(key, validate=True)
        except (binascii.Error, TypeError, ValueError) as e:
            raise KeyDecodeError(f"Couldn't decode account key from base64: {e}") from e

    @staticmethod
    def signature(string_to_sign: str, key: str) -> str:
        """HMAC-SHA256 the string to sign with the decoded key, base64 encoded."""
        decoded = SharedKeySigner.decode_key(key)
        try:
            mac = hmac.new(decoded, digestmod=hashlib.sha256)
        except (TypeError, ValueError) as e:
            raise KeyLengthError(f"Couldn't create HMAC-SHA256 instance: {e}") from e
        mac.update(string_to_sign.encode('utf-8'))
        return base64.b64encode(mac.digest()).decode('utf-8')

    @staticmethod
    def sign(string_to_sign: str, account: str, key: str) -> str:
        """
        Build the Authorization header value for Shared Key authentication.
        - string_to_sign: output of build_string_to_sign
        - account: storage account name
        - key: base64 account key
        """
        logger.debug("String to sign: %r", string_to_sign)
        return f"SharedKey {account}:{SharedKeySigner.signature(string_to_sign, key)}"
