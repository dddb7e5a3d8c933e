"""
Socket and byte helpers shared by the tiny client. Kept as static functions so they can be
driven with any socket-like or stream-like object
"""

import os
import sys
import socket
from typing import Optional, TextIO, BinaryIO

from tiny_client.errors import WriteError, ReadError

SERVER_PORT = 80
"""Default HTTP port"""
MAX_LINE = 4096
"""Request and response buffer size. One byte of it is never filled"""
EXIT_FAILURE = 1


class Helpers:
    """Static functions, to use as helpers"""

    @staticmethod
    def send_data(to_socket: socket.socket, data_stream: bytes) -> int:
        """
        Send data stream to socket in a single call. Anything less than the full stream
        accepted is treated as a failed write

        Args:
            to_socket:
                Connected socket to send stream to
            data_stream:
                Data stream to send
        Returns:
                Number of bytes sent
        """
        try:
            sent = to_socket.send(data_stream)
        except OSError as err:
            raise WriteError("write", err) from err
        if sent != len(data_stream):
            raise WriteError(f"write: short write, {sent} of {len(data_stream)} bytes sent")
        return sent

    @staticmethod
    def stream_data(from_socket: socket.socket, to_stream: BinaryIO,
                    chunk_size: int = MAX_LINE - 1) -> int:
        """
        Forward everything a socket sends to a binary stream, one chunk at a time, until the
        peer closes. Each chunk is flushed as soon as it is read

        Args:
            from_socket:
                Socket sending stream to this instance
            to_stream:
                Binary stream to write chunks to
            chunk_size:
                Most bytes read per recv call
        Returns:
                Total bytes forwarded
        """
        total = 0
        while True:
            try:
                chunk = from_socket.recv(chunk_size)
            except OSError as err:
                raise ReadError("read", err) from err
            if not chunk:
                # Peer closed
                break
            try:
                to_stream.write(chunk)
                to_stream.flush()
            except OSError as err:
                raise WriteError("write: stdout", err) from err
            total += len(chunk)
        return total

    @staticmethod
    def bin_print(*to_display, file: Optional[TextIO] = None):
        """
        Funnel function to reliably print binary or regular strings, space separated on one line

        Args:
            to_display:
                Item/s to print. Either bytes or regular strings
            file:
                Text stream to print to (default stderr)
        """
        items = []
        for item in to_display:
            try:
                items.append(item.decode())
            except AttributeError:
                items.append(str(item))
        print(' '.join(items), file=file or sys.stderr)

    @staticmethod
    def die(message: str, err: Optional[OSError] = None, file: Optional[TextIO] = None):
        """
        Report a terminal failure and exit. Appends errno details when an OS error is given

        Args:
            message:
                What failed
            err:
                OS error behind the failure, if any
            file:
                Text stream to report to (default stderr)
        """
        if err is not None and err.errno:
            description = err.strerror or os.strerror(err.errno)
            message = f"{message} (errno {err.errno}: {description})"
        print(message, file=file or sys.stderr, flush=True)
        sys.exit(EXIT_FAILURE)
