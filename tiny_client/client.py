"""
Tiny HTTP client. Connects to an IPv4 address on port 80, sends a fixed GET request for "/",
and dumps the raw response to stdout until the server closes the connection

Usage: tiny-client <server IPv4 address>
"""

import os
import sys
import socket
from typing import List, Optional, TextIO, BinaryIO

import netaddr

from tiny_client.errors import (ClientError, UsageError, AddressParseError, ConnectError,
                                RequestTooLargeError)
from tiny_client.helpers import Helpers, SERVER_PORT, MAX_LINE


class TinyClient:
    """
    Fetch "/" from an HTTP server and dump the response
    """

    def __init__(self, *,
                 target: str = None, port: int = SERVER_PORT, verbose: bool = False,
                 stdout: BinaryIO = None, stderr: TextIO = None,
                 prog: str = 'tiny-client'):
        """
        Can be imported and init, or run from command line through main()
        """

        self.target = target
        """Target IPv4 address, literal dotted-quad"""
        self.port = port
        """Target port. Fixed for command line runs"""
        self.verbose = verbose
        """Enable progress messages on stderr. Not reachable from the command line"""

        self.stdout = stdout
        """Binary stream for response bytes"""
        self.stderr = stderr
        """Text stream for diagnostics"""
        self.prog = prog
        """Program name shown in usage message"""

    @property
    def out(self) -> BinaryIO:
        return self.stdout or sys.stdout.buffer

    @property
    def err(self) -> TextIO:
        return self.stderr or sys.stderr

    def arg_parser(self, argv: List[str]):
        """
        Take the target address from the command line. Exactly one argument, no switches

        Args:
            argv: arguments, without program name
        """
        if len(argv) != 1:
            raise UsageError(f"usage: {self.prog} <server IPv4 address>")
        self.target = argv[0]

    @staticmethod
    def parse_address(address: str) -> str:
        """
        Check address is a literal IPv4 dotted-quad

        Returns:
            The address, unchanged
        """
        try:
            valid = netaddr.valid_ipv4(address)
        except (netaddr.AddrFormatError, ValueError):
            # Empty string, or undecodable argv bytes
            valid = False
        if not valid:
            raise AddressParseError(f"inet_pton: {address}")
        return address

    @staticmethod
    def build_request(address: str) -> bytes:
        """
        Compose the GET request, using the address exactly as given for the Host header

        Returns:
            Request bytes, always shorter than MAX_LINE
        """
        request = (f"GET / HTTP/1.1\r\n"
                   f"Host: {address}\r\n"
                   f"Connection: close\r\n\r\n").encode()
        if len(request) >= MAX_LINE:
            raise RequestTooLargeError("request too large")
        return request

    @staticmethod
    def open_socket() -> socket.socket:
        """Create client socket, using IPv4 and TCP socket type. Caller owns and closes it"""
        try:
            return socket.socket(family=socket.AF_INET, type=socket.SOCK_STREAM)
        except OSError as err:
            raise ConnectError("socket", err) from err

    def connect(self, client: socket.socket, address: str):
        """Connect client socket to address:port"""
        try:
            client.connect((address, self.port))
        except OSError as err:
            raise ConnectError(f"connect: {address}:{self.port}", err) from err

    def fetch(self) -> int:
        """
        Primary logic. Connects, sends request, streams response until the peer closes

        Returns:
            Total response bytes forwarded
        """
        address = self.parse_address(self.target)

        client = self.open_socket()
        try:
            self.verprint(f"[*] Connecting to {address}:{self.port}")
            self.connect(client, address)

            request = self.build_request(address)
            sent = Helpers.send_data(client, request)
            self.verprint(f"[-->] Sent {sent} bytes")

            received = Helpers.stream_data(client, self.out)
            self.verprint(f"[<--] Received {received} bytes, connection closed by peer")
        finally:
            client.close()
        return received

    def verprint(self, *to_print) -> None:
        """
        Default check against verbosity attribute, to see if allowed to print. Prints to stderr,
        stdout carries response bytes only

        Args:
            *to_print: emulation of print *args. pass as normal
        """
        if self.verbose:
            Helpers.bin_print(*to_print, file=self.err)

    def main(self, argv: Optional[List[str]] = None) -> int:
        """
        Parse args and run a single fetch. Any failure is reported on stderr and exits 1

        Args:
            argv: arguments, without program name. Defaults to sys.argv[1:]
        Returns:
            0 once the response has been fully streamed
        """
        if argv is None:
            argv = sys.argv[1:]

        try:
            self.arg_parser(argv)
            self.fetch()
        except ClientError as err:
            self.verprint(f"[x] {type(err).__name__}")
            Helpers.die(err.message, err.err, file=self.err)
        return 0


def prog_name(argv0: str) -> str:
    """Program name for usage text, from sys.argv[0]"""
    name = os.path.basename(argv0)
    if not name or name == '__main__.py':
        return 'tiny-client'
    return name
