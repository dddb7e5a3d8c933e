"""
Terminal errors raised by the tiny client. Every one of them ends the run with a single
diagnostic line on stderr
"""

from typing import Optional


class ClientError(Exception):
    """Base error. Carries a message and, when one was pending, the underlying OS error"""

    def __init__(self, message: str, err: Optional[OSError] = None):
        super().__init__(message)
        self.message = message
        """Diagnostic text, without errno details"""
        self.err = err
        """OS error that caused this failure, if any"""


class UsageError(ClientError):
    """Wrong number of arguments, or an unknown switch"""


class AddressParseError(ClientError):
    """Argument is not an IPv4 dotted-quad"""


class ConnectError(ClientError):
    """Socket creation or connection establishment failed"""


class RequestTooLargeError(ClientError):
    """Built request does not fit the request buffer"""


class WriteError(ClientError):
    """Request transmission failed or was short"""


class ReadError(ClientError):
    """Response reception failed. Chunks already read have been forwarded"""
