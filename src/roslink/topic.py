""" Publish and/or subscribe to a named topic over a :class:`roslink.Ros`
    connection.
"""

import threading

from .observer import Observers
from .protocol import fields
from .protocol.message import Message, envelope


class Topic:
    """ A :class:`Topic` is a named, typed publish/subscribe endpoint. The
        *name* is the topic name, like '/cmd_vel'; *message_type* is the
        message type, like 'geometry_msgs/Twist'.

        The *compression* requested for inbound messages is either 'none'
        or 'png'; the *throttle_rate* is the minimum number of milliseconds
        the server will wait between messages sent to this subscriber. An
        unsupported compression mode or a negative throttle rate is replaced
        with the default (no compression, no throttling), and the correction
        is reported via :attr:`roslink.Ros.on_warning`.

        Any number of local callbacks may subscribe; the server only ever
        sees one subscription per :class:`Topic` instance.

        :ivar advertised: True while this topic is registered as a publisher.
        :ivar subscribed: True while the server-side subscription is active.
        :ivar callbacks: :class:`roslink.observer.Observers` invoked with each
            inbound :class:`roslink.protocol.Message`.
    """

    def __init__(self, ros, name, message_type, compression=None, throttle_rate=0):

        self.ros = ros
        self.name = name
        self.message_type = message_type
        self.advertised = False
        self.subscribed = False
        self.callbacks = Observers('topic ' + name)
        self.lock = threading.Lock()

        if compression is None:
            compression = fields.COMPRESSION_NONE

        if compression not in fields.COMPRESSIONS:
            ros.warn("%s compression is not supported for %s. No compression will be used." % (compression, name))
            compression = fields.COMPRESSION_NONE

        if throttle_rate is None:
            throttle_rate = 0

        if throttle_rate < 0:
            ros.warn("throttle rate %s is not allowed for %s. Set to 0" % (throttle_rate, name))
            throttle_rate = 0

        self.compression = compression
        self.throttle_rate = throttle_rate


    def __repr__(self):
        return '<%s %s [%s]>' % (self.__class__.__name__, self.name, self.message_type)


    def advertise(self):
        """ Register as a publisher for this topic. Advertising an already
            advertised topic is a no-op.
        """

        self.lock.acquire()
        if self.advertised == True:
            self.lock.release()
            return

        self.advertised = True
        self.lock.release()

        token = self.ros.next_id(fields.ADVERTISE, self.name)
        message = envelope(fields.ADVERTISE, id=token, type=self.message_type, topic=self.name)
        self.ros.send(message)


    def publish(self, message):
        """ Publish *message*, a :class:`roslink.protocol.Message` or a plain
            dictionary, to this topic. The topic is advertised first if it
            has not been already.
        """

        self.advertise()

        token = self.ros.next_id(fields.PUBLISH, self.name)
        message = envelope(fields.PUBLISH, id=token, topic=self.name, msg=message)
        self.ros.send(message)


    def subscribe(self, callback):
        """ Invoke *callback* with every message subsequently published on
            this topic. The subscription request is only sent to the server
            the first time; additional callbacks are handled locally.
        """

        self.callbacks.add(callback)

        self.lock.acquire()
        if self.subscribed == True:
            self.lock.release()
            return

        self.subscribed = True
        self.lock.release()

        self.ros.add_topic_listener(self.name, self._receive)

        token = self.ros.next_id(fields.SUBSCRIBE, self.name)
        message = envelope(fields.SUBSCRIBE,
                        id=token,
                        type=self.message_type,
                        topic=self.name,
                        compression=self.compression,
                        throttle_rate=self.throttle_rate)

        self.ros.send(message)


    def unadvertise(self):
        """ Unregister as a publisher for this topic. A subsequent
            :func:`publish` will advertise the topic again.
        """

        self.lock.acquire()
        self.advertised = False
        self.lock.release()

        token = self.ros.next_id(fields.UNADVERTISE, self.name)
        message = envelope(fields.UNADVERTISE, id=token, topic=self.name)
        self.ros.send(message)


    def unsubscribe(self):
        """ Remove every local callback for this topic name, and ask the
            server to stop sending messages for it. Note this affects every
            :class:`Topic` instance with this name on the same connection.
        """

        self.callbacks.clear()
        self.ros.remove_topic_listeners(self.name)

        self.lock.acquire()
        self.subscribed = False
        self.lock.release()

        token = self.ros.next_id(fields.UNSUBSCRIBE, self.name)
        message = envelope(fields.UNSUBSCRIBE, id=token, topic=self.name)
        self.ros.send(message)


    def _receive(self, values):
        """ Invoked on the dispatch thread for each inbound message.
        """

        if values is None:
            values = dict()

        if isinstance(values, dict):
            values = Message(values)

        self.callbacks.notify(values)


# end of class Topic


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
