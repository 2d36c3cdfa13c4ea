"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`roslink.protocol` so the protocol remains
transport-agnostic. A transport moves complete JSON text frames; it knows
nothing about their contents.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Union


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class Transport(ABC):
    """Minimal contract for a wire-level transport.

    The owner supplies four callbacks at construction time. They are invoked
    from whatever thread the transport uses internally:

        on_open()           the socket is open and ready to send
        on_message(frame)   one inbound frame arrived, as str or bytes
        on_error(error)     a transport error occurred (non-fatal to the owner)
        on_close()          the socket closed
    """

    name = "abstract"

    def __init__(
        self,
        on_open: Callable[[], None],
        on_message: Callable[[Union[str, bytes]], None],
        on_error: Callable[[Exception], None],
        on_close: Callable[[], None],
    ):
        self.on_open = on_open
        self.on_message = on_message
        self.on_error = on_error
        self.on_close = on_close
        self.url: Optional[str] = None

    @abstractmethod
    def open(self, url: str) -> None:
        """Begin establishing the underlying connection/socket."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @abstractmethod
    def send(self, text: str) -> None:
        """Send one text frame. Raises TransportConnectionError if not open."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
