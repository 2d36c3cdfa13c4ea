import pytest

import roslink
from roslink import transport


class Loopback(transport.Transport):
    """ In-memory transport. Outbound frames are recorded in :attr:`sent`;
        inbound frames are injected with :func:`inject`.
    """

    name = 'loopback'
    auto_open = True

    def __init__(self, on_open, on_message, on_error, on_close):
        super().__init__(on_open, on_message, on_error, on_close)
        self.sent = list()
        self.fail = False
        self._open = False


    @property
    def is_open(self):
        return self._open


    def open(self, url):
        self.url = url
        if self.auto_open == True:
            self.finish_open()


    def finish_open(self):
        self._open = True
        self.on_open()


    def close(self):
        if self._open == True:
            self._open = False
            self.on_close()


    def send(self, text):
        if self._open == False:
            raise transport.TransportConnectionError('loopback is not open')
        if self.fail == True:
            raise transport.TransportConnectionError('loopback send failed')
        self.sent.append(text)


    def inject(self, message):
        if isinstance(message, (str, bytes)):
            text = message
        else:
            text = roslink.json.dumps(message)
        self.on_message(text)


    def messages(self, op=None, **matching):
        """ Return the decoded outbound messages, optionally restricted to
            those with the given *op* and field values.
        """

        decoded = list()

        for text in self.sent:
            message = roslink.json.loads(text)
            if op is not None and message['op'] != op:
                continue

            matched = True
            for key, value in matching.items():
                if message.get(key) != value:
                    matched = False
                    break

            if matched:
                decoded.append(message)

        return decoded


# end of class Loopback



class Deferred(Loopback):
    auto_open = False



def make_ros(socket_class=Loopback, url='loop://unittest'):

    def factory(url, on_open, on_message, on_error, on_close):
        return socket_class(on_open, on_message, on_error, on_close)

    ros = roslink.Ros(transport_factory=factory)
    if url is not None:
        ros.connect(url)
    return ros



@pytest.fixture
def ros():

    connection = make_ros()

    yield connection

    connection.shutdown()


@pytest.fixture
def deferred_ros():

    connection = make_ros(Deferred)

    yield connection

    connection.shutdown()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
