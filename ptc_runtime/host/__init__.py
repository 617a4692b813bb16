from .base import HostClientProtocol, HostResponse
from .http import HttpHostClient

__all__ = [
    "HostClientProtocol",
    "HostResponse",
    "HttpHostClient",
]
