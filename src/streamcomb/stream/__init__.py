"""Streaming driver and byte sources.

Python 3.13+.
"""

from .driver import PhaseResult, StreamDriver
from .sources import ByteSource, SocketSource

__all__ = ["ByteSource", "PhaseResult", "SocketSource", "StreamDriver"]
