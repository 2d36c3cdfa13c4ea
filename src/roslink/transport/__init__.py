"""Transport layer implementations."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from .. import config
from .base import (
    Transport,
    TransportError,
    TransportConnectionError,
)
from . import websocket
from . import zmq

backends = {
    websocket.Client.name: websocket.Client,
    zmq.Client.name: zmq.Client,
}

schemes = {
    "ws": websocket.Client.name,
    "wss": websocket.Client.name,
    "tcp": zmq.Client.name,
    "ipc": zmq.Client.name,
    "inproc": zmq.Client.name,
}


def backend_for(url: str, backend: Optional[str] = None) -> str:
    """Return the backend name to use for *url*.

    An explicit *backend* wins, then the ROSLINK_TRANSPORT setting, then the
    URL scheme.
    """

    name = backend or config.TRANSPORT
    if name is None:
        scheme = urlparse(url).scheme.lower()
        try:
            name = schemes[scheme]
        except KeyError:
            raise TransportError(f"no transport for URL scheme {scheme!r}: {url}") from None

    if name not in backends:
        raise TransportError(f"unknown transport backend: {name!r}")
    return name


def create(url: str, on_open, on_message, on_error, on_close, backend: Optional[str] = None) -> Transport:
    """Instantiate (but do not open) the transport appropriate for *url*."""

    cls = backends[backend_for(url, backend)]
    return cls(on_open, on_message, on_error, on_close)
