"""
Metaphor API client and its request pipeline.

builder -> transport -> decoder, driven by MetaphorClient.
"""

from metaphor_client.clients.builder import Operation, RequestDescriptor
from metaphor_client.clients.metaphor import (
    FakeMetaphorClient,
    MetaphorClient,
    MetaphorClientProtocol,
)
from metaphor_client.clients.transport import HttpTransport, RawResponse

__all__ = [
    "FakeMetaphorClient",
    "HttpTransport",
    "MetaphorClient",
    "MetaphorClientProtocol",
    "Operation",
    "RawResponse",
    "RequestDescriptor",
]
