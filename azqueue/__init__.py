"""
Send messages to an Azure Storage queue using Shared Key authentication.
"""

from .auth import Authenticator
from .config import QueueConfig, load_config
from .message import encode_message
from .queue import DispatchResult, QueueManager
from .utils import SharedKeySigner

__version__ = "0.1.0"

__all__ = (
    "Authenticator",
    "DispatchResult",
    "QueueConfig",
    "QueueManager",
    "SharedKeySigner",
    "encode_message",
    "load_config",
)
