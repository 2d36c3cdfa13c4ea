"""WebSocket transport, the native transport of the bridge server.

The websocket-client ``WebSocketApp`` runs its receive loop on a dedicated
daemon thread; every callback it raises is relayed to the owner unchanged.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

import websocket

from .base import Transport, TransportConnectionError, TransportError

logger = logging.getLogger(__name__)


class Client(Transport):
    """Connect to a ``ws://`` or ``wss://`` URL."""

    name = "websocket"

    def __init__(self, on_open, on_message, on_error, on_close):
        super().__init__(on_open, on_message, on_error, on_close)
        self.app: Optional[websocket.WebSocketApp] = None
        self.thread: Optional[threading.Thread] = None
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self, url: str) -> None:
        self.url = url
        self.app = websocket.WebSocketApp(
            url,
            on_open=self._ws_open,
            on_message=self._ws_message,
            on_error=self._ws_error,
            on_close=self._ws_close,
        )

        self.thread = threading.Thread(
            target=self.app.run_forever,
            name=f"roslink.websocket:{url}",
            daemon=True,
        )
        self.thread.start()

    def close(self) -> None:
        if self.app is not None:
            self.app.close()

    def send(self, text: str) -> None:
        if not self._open or self.app is None:
            raise TransportConnectionError(f"websocket to {self.url} is not open")

        try:
            self.app.send(text)
        except websocket.WebSocketException as exc:
            raise TransportConnectionError(str(exc)) from exc

    # --- WebSocketApp callbacks ---

    def _ws_open(self, _ws) -> None:
        self._open = True
        self.on_open()

    def _ws_message(self, _ws, message) -> None:
        self.on_message(message)

    def _ws_error(self, _ws, error) -> None:
        if isinstance(error, Exception) and not isinstance(error, TransportError):
            wrapped = TransportError(f"{type(error).__name__}: {error}")
            wrapped.__cause__ = error
            error = wrapped
        self.on_error(error)

    def _ws_close(self, _ws, status_code, reason) -> None:
        logger.debug("websocket %s closed: %s %s", self.url, status_code, reason)
        self._open = False
        self.on_close()
