import pytest

from azqueue.auth import Authenticator
from azqueue.config import QueueConfig

# base64 of b"testkey"
ACCOUNT_KEY = "dGVzdGtleQ=="
TIMESTAMP = "Mon, 02 Jan 2023 03:04:05 GMT"


@pytest.fixture
def queue_config() -> QueueConfig:
    return QueueConfig(
        account_name="acct",
        account_key=ACCOUNT_KEY,
        queue_name="q1",
        version="2011-08-18",
        timeout=5.0,
    )


@pytest.fixture
def auth(queue_config) -> Authenticator:
    return Authenticator(queue_config)
