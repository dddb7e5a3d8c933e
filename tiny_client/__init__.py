"""
Tiny HTTP client: fetch "/" from an IPv4 address on port 80 and dump the raw response
"""

from tiny_client.client import TinyClient
from tiny_client.errors import (ClientError, UsageError, AddressParseError, ConnectError,
                                RequestTooLargeError, WriteError, ReadError)

__version__ = '1.0.0'
