"""ZeroMQ transport.

A DEALER socket carries one JSON text frame per ZeroMQ message, which lets
the client talk to a bridge fronted by a ROUTER socket. ZeroMQ sockets are
not thread-safe: outbound frames are queued and the socket's own polling
thread is woken via an inproc PAIR to send them.
"""

from __future__ import annotations

import itertools
import logging
import queue
import threading
from typing import Optional

import zmq

from .. import config
from .base import Transport, TransportConnectionError, TransportError

logger = logging.getLogger(__name__)

zmq_context = zmq.Context()
_instance_ids = itertools.count()


class _Shutdown:
    pass


class Client(Transport):
    """Connect a DEALER socket to a ``tcp://``, ``ipc://`` or ``inproc://`` URL."""

    name = "zmq"

    def __init__(self, on_open, on_message, on_error, on_close):
        super().__init__(on_open, on_message, on_error, on_close)
        self.socket: Optional[zmq.Socket] = None
        self.thread: Optional[threading.Thread] = None
        self.shutdown = False
        self.poll_interval = config.ZMQ_POLL

        self._outbox: queue.SimpleQueue = queue.SimpleQueue()
        self._signal_rx: Optional[zmq.Socket] = None
        self._signal_tx: Optional[zmq.Socket] = None
        self._signal_lock = threading.Lock()
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self, url: str) -> None:
        self.url = url
        identity = f"roslink.Client.{next(_instance_ids)}"

        try:
            self.socket = zmq_context.socket(zmq.DEALER)
            self.socket.setsockopt(zmq.LINGER, 0)
            self.socket.identity = identity.encode()
            self.socket.connect(url)
        except zmq.ZMQError as exc:
            raise TransportConnectionError(f"cannot connect to {url}: {exc}") from exc

        internal = f"inproc://{identity}:signal"
        self._signal_rx = zmq_context.socket(zmq.PAIR)
        self._signal_rx.setsockopt(zmq.LINGER, 0)
        self._signal_rx.bind(internal)
        self._signal_tx = zmq_context.socket(zmq.PAIR)
        self._signal_tx.setsockopt(zmq.LINGER, 0)
        self._signal_tx.connect(internal)

        self.shutdown = False
        self.thread = threading.Thread(target=self.run, name=f"roslink.zmq:{url}", daemon=True)
        self.thread.start()

        # ZeroMQ connects in the background and queues outbound messages
        # until the peer is reachable, so the socket is usable right away.

        self._open = True
        self.on_open()

    def close(self) -> None:
        if self.thread is None or self.shutdown:
            return
        self.shutdown = True
        self._signal(_Shutdown())

    def send(self, text: str) -> None:
        if not self._open:
            raise TransportConnectionError(f"zmq socket to {self.url} is not open")
        self._signal(text)

    def _signal(self, item) -> None:
        self._outbox.put(item)
        with self._signal_lock:
            self._signal_tx.send(b"")

    # --- socket thread ---

    def _handle_outgoing(self) -> None:
        # Clear one signal and send one frame.
        self._signal_rx.recv(flags=zmq.NOBLOCK)
        item = self._outbox.get(block=False)

        if isinstance(item, _Shutdown):
            return

        self.socket.send(item.encode("utf-8"))

    def _handle_incoming(self) -> None:
        parts = self.socket.recv_multipart()

        # A ROUTER peer may leave an empty delimiter frame in front of the
        # payload; the payload is always the last part. It is handed over
        # undecoded, a frame that is not valid UTF-8 is rejected by the
        # owner like any other malformed frame.

        try:
            self.on_message(parts[-1])
        except Exception:
            logger.exception("zmq socket to %s: inbound frame handler failed", self.url)

    def run(self) -> None:
        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)
        poller.register(self._signal_rx, zmq.POLLIN)

        timeout = int(self.poll_interval * 1000)

        try:
            while not self.shutdown:
                for active, _flag in poller.poll(timeout):
                    if active == self._signal_rx:
                        self._handle_outgoing()
                    elif active == self.socket:
                        self._handle_incoming()
        except zmq.ZMQError as exc:
            self.on_error(TransportError(f"zmq socket to {self.url} failed: {exc}"))
        finally:
            self._open = False
            self.socket.close()
            self._signal_rx.close()
            with self._signal_lock:
                self._signal_tx.close()
            self.on_close()

