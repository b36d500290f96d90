"""Byte sources consumed by the streaming driver.

A byte source is anything with ``read(size) -> bytes``: binary files,
io.BytesIO, and sockets through SocketSource. Returning fewer bytes than
requested (including b"") means "no more data for now".

Python 3.13+.
"""

from __future__ import annotations

import socket
from dataclasses import dataclass
from typing import Protocol

__all__ = ["ByteSource", "SocketSource"]


class ByteSource(Protocol):
    """Protocol for chunked byte sources.

    This is a Protocol (structural typing) rather than ABC so that files and
    io.BytesIO satisfy it without wrapping.

    Example:
        >>> import io
        >>> driver = StreamDriver(io.BytesIO(b"GET / HTTP/1.1\\r\\n"))
    """

    def read(self, size: int, /) -> bytes:
        """Read up to size bytes.

        Args:
            size: Maximum number of bytes to return

        Returns:
            Bytes read; fewer than size (or b"") when no more data is available

        Raises:
            OSError: If the underlying transport fails (including timeouts)
        """
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class SocketSource:
    """Adapt a connected socket to the ByteSource protocol.

    Timeouts are configured on the socket itself; socket.timeout is an
    OSError and surfaces from the driver as SourceReadError.

    Attributes:
        sock: Connected stream socket, owned by the caller
    """

    sock: socket.socket

    def read(self, size: int, /) -> bytes:
        """Receive up to size bytes from the socket."""
        return self.sock.recv(size)
