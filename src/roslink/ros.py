""" The :class:`Ros` connection: the single socket to the bridge server, and
    the dispatcher that routes every inbound message to the one logical
    channel it belongs to.
"""

import functools
import logging
import threading

from . import protocol
from . import timer
from . import transport
from .mailbox import Mailbox
from .observer import Observers
from .protocol import fields
from .service import Service

logger = logging.getLogger(__name__)

DISCONNECTED = 'disconnected'
CONNECTING = 'connecting'
CONNECTED = 'connected'


class Ros:
    """ A :class:`Ros` instance owns one connection to a bridge server at
        *url*, along with every registry needed to multiplex topics, service
        calls, and actions over that one connection. If no *url* is provided
        the connection can be established later via :func:`connect`.

        The *backend* argument forces a specific transport backend (see
        :mod:`roslink.transport`); by default it is inferred from the URL.
        The *transport_factory* argument replaces :func:`transport.create`
        entirely, and is principally useful for testing.

        Inbound messages, application callbacks, and timer expirations are
        all processed on a single background thread, one at a time; see
        :class:`roslink.mailbox.Mailbox`. Application threads are free to
        call any method here at any time.

        Notifications are available via explicit observer lists:

        :ivar on_connection: Invoked with no arguments when the socket opens.
        :ivar on_close: Invoked with no arguments when the socket closes.
        :ivar on_error: Invoked with the exception for any transport error.
        :ivar on_warning: Invoked with a description of any non-fatal
            correction applied to a request, such as an unsupported
            compression mode.
        :ivar state: One of DISCONNECTED, CONNECTING, or CONNECTED.
    """

    def __init__(self, url=None, backend=None, transport_factory=None):

        self.url = None
        self.backend = backend
        self.socket = None
        self.state = DISCONNECTED
        self.id_counter = 0

        if transport_factory is None:
            transport_factory = functools.partial(transport.create, backend=backend)

        self.transport_factory = transport_factory
        self.mailbox = Mailbox()

        self.on_connection = Observers('connection')
        self.on_close = Observers('close')
        self.on_error = Observers('error')
        self.on_warning = Observers('warning')

        # The lock serializes access to the counter, the registries, and
        # the socket. It is reentrant so that a transport which opens
        # synchronously can call back into _transport_open() from within
        # connect().

        self._lock = threading.RLock()
        self._generation = 0
        self._deferred = list()
        self._topics = dict()
        self._pending = dict()

        if url:
            self.connect(url)


    def __repr__(self):
        return '<%s %s %s>' % (self.__class__.__name__, self.url, self.state)


    @property
    def is_connected(self):
        return self.state == CONNECTED


    def connect(self, url):
        """ Connect to the bridge server at *url*. Any existing socket is
            closed and replaced; registered topics and pending calls are
            retained, but nothing is re-sent on their behalf.
        """

        self._lock.acquire()
        try:
            previous = self.socket

            self._generation += 1
            generation = self._generation

            socket = self.transport_factory(url,
                        functools.partial(self._transport_open, generation),
                        functools.partial(self._transport_message, generation),
                        functools.partial(self._transport_error, generation),
                        functools.partial(self._transport_close, generation))

            self.url = url
            self.socket = socket
            self.state = CONNECTING
        finally:
            self._lock.release()

        if previous is not None:
            previous.close()

        logger.info("connecting to %s via %s", url, socket.name)
        socket.open(url)


    def close(self):
        """ Disconnect from the bridge server. Anything sent after this
            point is deferred until the next successful :func:`connect`.
        """

        self._lock.acquire()
        socket = self.socket
        self.state = DISCONNECTED
        self._lock.release()

        if socket is not None:
            socket.close()


    def shutdown(self, timeout=1):
        """ Close the connection, let the dispatch thread deliver whatever
            was already queued (waiting at most *timeout* seconds), then stop
            the dispatch thread. The instance cannot be used afterwards.
        """

        self.close()
        self.mailbox.sync(timeout)
        self.mailbox.stop()


    def next_id(self, op, name):
        """ Reserve the next value of the connection counter and return the
            correlation token '{op}:{name}:{counter}'. Tokens are never
            reused over the lifetime of this :class:`Ros` instance.
        """

        self._lock.acquire()
        self.id_counter += 1
        counter = self.id_counter
        self._lock.release()

        return '%s:%s:%d' % (op, name, counter)


    def send(self, message):
        """ Send a protocol message, a dictionary built by
            :func:`roslink.protocol.message.envelope`. If the socket is not
            open yet the message is held, and sent once the socket opens;
            held messages are sent in the order they were submitted.
        """

        text = protocol.message.encode(message)

        self._lock.acquire()
        try:
            if self.state == CONNECTED:
                self._write(text)
            else:
                self._deferred.append(text)
        finally:
            self._lock.release()


    def authenticate(self, mac, client, dest, rand, t, level, end):
        """ Send an authorization request to the server. The *mac* and
            *rand* strings are provided by a trusted source; *client* and
            *dest* are the client and destination addresses; *t* is the time
            of the request, *level* the user level, and *end* the end time of
            the client session.
        """

        auth = dict()
        auth['op'] = fields.AUTH
        auth['mac'] = mac
        auth['client'] = client
        auth['dest'] = dest
        auth['rand'] = rand
        auth['t'] = t
        auth['level'] = level
        auth['end'] = end

        self.send(auth)


    def get_topics(self, callback, errback=None):
        """ Retrieve the list of topic names known to the server; *callback*
            is invoked with that list.
        """

        return self._rosapi(fields.ROSAPI_TOPICS, 'topics', callback, errback)


    def get_services(self, callback, errback=None):
        """ Retrieve the list of active service names; *callback* is invoked
            with that list.
        """

        return self._rosapi(fields.ROSAPI_SERVICES, 'services', callback, errback)


    def get_params(self, callback, errback=None):
        """ Retrieve the list of parameter names; *callback* is invoked with
            that list.
        """

        return self._rosapi(fields.ROSAPI_PARAM_NAMES, 'names', callback, errback)


    def schedule(self, delay, method):
        """ Invoke *method* on the dispatch thread *delay* seconds from now.
            Returns a :class:`roslink.timer.Timer` handle.
        """

        return timer.schedule(delay, method, self.mailbox)


    def sync(self, timeout=None):
        """ Block until every inbound message and timer expiration queued
            before this call has been fully processed. Returns False if that
            did not happen within *timeout* seconds.
        """

        return self.mailbox.sync(timeout)


    # Registries. These are used by Topic, Service, and ActionClient
    # instances, which all share the one connection.

    def add_topic_listener(self, topic, callback):
        """ Route every inbound message published on *topic* to *callback*.
        """

        self._lock.acquire()
        try:
            observers = self._topics[topic]
        except KeyError:
            observers = Observers('topic ' + topic)
            self._topics[topic] = observers
        self._lock.release()

        observers.add(callback)


    def remove_topic_listener(self, topic, callback):

        self._lock.acquire()
        try:
            observers = self._topics[topic]
        except KeyError:
            self._lock.release()
            return False

        removed = observers.remove(callback)
        if len(observers) == 0:
            del self._topics[topic]

        self._lock.release()
        return removed


    def remove_topic_listeners(self, topic):
        """ Stop routing inbound messages for *topic* to anyone.
        """

        self._lock.acquire()
        self._topics.pop(topic, None)
        self._lock.release()


    def add_pending(self, token, resolver):
        """ Register *resolver* as the one and only recipient of the
            response carrying correlation *token*. The resolver is invoked
            with the full response message, and is forgotten afterwards.
        """

        self._lock.acquire()
        self._pending[token] = resolver
        self._lock.release()


    @property
    def pending(self):
        """ The number of calls still waiting for a response.
        """

        return len(self._pending)


    def dispatch(self, message):
        """ Route a decoded inbound *message* to its recipient. Messages for
            topics nobody is subscribed to, and responses nobody is waiting
            for, are dropped; another consumer sharing the server may well
            have been the intended recipient.
        """

        op = message.get('op')

        if op == fields.PUBLISH:
            topic = message.get('topic')

            self._lock.acquire()
            observers = self._topics.get(topic)
            self._lock.release()

            if observers is None:
                logger.debug("no subscribers for topic %s", topic)
                return

            observers.notify(message.get('msg'))

        elif op == fields.SERVICE_RESPONSE:
            token = message.get('id')

            self._lock.acquire()
            resolver = self._pending.pop(token, None)
            self._lock.release()

            if resolver is None:
                logger.debug("no pending call for %s", token)
                return

            resolver(message)

        else:
            logger.debug("ignoring inbound op %r", op)


    def receive(self, frame):
        """ Decode one inbound text *frame*, expanding it first if the server
            compressed it, and queue it for :func:`dispatch`. A frame that
            cannot be decoded is logged and discarded; it has no effect on
            the connection.
        """

        try:
            message = protocol.message.decode(frame)

            if message['op'] == fields.PNG:
                text = protocol.png.decompress(message.get('data', ''))
                message = protocol.message.decode(text)
        except ValueError as e:
            logger.error("discarding malformed frame from %s: %s", self.url, e)
            return

        self.mailbox.put(self.dispatch, message)


    def warn(self, text):
        """ Report a non-fatal correction to anyone listening.
        """

        logger.warning(text)
        self.mailbox.put(self.on_warning.notify, text)


    def _rosapi(self, service, field, callback, errback):

        name, service_type = service
        client = Service(self, name, service_type)

        # A failed call hands over the server's error rather than a
        # response; pass that along untouched.

        def deliver(response):
            if isinstance(response, protocol.ServiceResponse):
                callback(response.get(field))
            else:
                callback(response)

        return client.call_service(protocol.ServiceRequest(), deliver, errback)


    def _write(self, text):
        """ Hand one frame to the socket. The caller must hold the lock.
        """

        try:
            self.socket.send(text)
        except transport.TransportError as e:
            logger.warning("send to %s failed: %s", self.url, e)
            self.mailbox.put(self.on_error.notify, e)


    # Transport callbacks. These are invoked on whatever thread the
    # transport uses; the generation argument identifies which socket the
    # event came from, so that events from a replaced socket are ignored.

    def _transport_open(self, generation):

        self._lock.acquire()
        try:
            if generation != self._generation:
                return

            self.state = CONNECTED
            deferred = self._deferred
            self._deferred = list()

            for text in deferred:
                self._write(text)
        finally:
            self._lock.release()

        logger.info("connected to %s", self.url)
        self.mailbox.put(self.on_connection.notify)


    def _transport_message(self, generation, frame):
        self.receive(frame)


    def _transport_error(self, generation, error):

        if generation != self._generation:
            return

        logger.warning("transport error on %s: %s", self.url, error)
        self.mailbox.put(self.on_error.notify, error)


    def _transport_close(self, generation):

        self._lock.acquire()
        if generation != self._generation:
            self._lock.release()
            return

        self.state = DISCONNECTED
        self._lock.release()

        logger.info("disconnected from %s", self.url)
        self.mailbox.put(self.on_close.notify)


# end of class Ros


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
