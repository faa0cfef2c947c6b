import logging

from .config import QueueConfig
from .utils import (
    SharedKeySigner,
    build_string_to_sign,
    canonical_headers,
    canonical_resource,
    format_timestamp,
)

logger = logging.getLogger(__name__)

VERB = 'POST'


class Authenticator:
    def __init__(self, config: QueueConfig):
        self.config = config

    def string_to_sign(self, content_length: int, timestamp: str) -> str:
        return build_string_to_sign(
            VERB,
            content_length,
            canonical_headers(timestamp, self.config.version),
            canonical_resource(self.config.account_name, self.config.queue_name),
        )

    def sign(self, content_length: int, timestamp: str = None) -> (dict, str):
        """
        Sign a Put Message request whose body is content_length bytes long.
        Returns the headers to send and the URL to post to. The same
        timestamp goes into the signature and the x-ms-date header.
        """
        if timestamp is None:
            timestamp = format_timestamp(zone=self.config.zone)
        string_to_sign = self.string_to_sign(content_length, timestamp)
        authorization = SharedKeySigner.sign(
            string_to_sign, self.config.account_name, self.config.account_key
        )
        logger.debug("Signed %s %s dated %s", VERB, self.config.url, timestamp)
        headers = {
            'x-ms-date': timestamp,
            'x-ms-version': self.config.version,
            'Authorization': authorization,
        }
        return headers, self.config.url
