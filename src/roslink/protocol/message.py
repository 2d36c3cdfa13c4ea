""" A class representation of the structured data carried by the protocol,
    plus the helpers that turn outbound envelopes into JSON text and inbound
    JSON text back into dictionaries.
"""

from .. import json


class Message:
    """ The :class:`Message` provides a very thin encapsulation of a
        structured record: an ordered mapping of field name to value. The
        fields are accessible both as attributes and as items. Unknown fields
        are always preserved, nothing here validates a record against its
        declared message type; that is the server's job.

        The order of the fields is significant for some uses, in particular
        :class:`ServiceRequest`, which is sent as a positional argument list.
        The order is the order in which the fields were first assigned.
    """

    def __init__(self, values=None, **kwargs):

        fields = dict()

        if values is not None:
            if isinstance(values, Message):
                values = values.to_dict()
            fields.update(values)

        fields.update(kwargs)

        # Bypass __setattr__, which would otherwise store '_fields' as
        # a field of its own.

        self.__dict__['_fields'] = fields


    def __contains__(self, name):
        return name in self._fields


    def __eq__(self, other):
        if isinstance(other, Message):
            return self._fields == other._fields
        if isinstance(other, dict):
            return self._fields == other
        return NotImplemented


    def __getattr__(self, name):
        try:
            return self.__dict__['_fields'][name]
        except KeyError:
            raise AttributeError(name) from None


    def __getitem__(self, name):
        return self._fields[name]


    def __iter__(self):
        return iter(self._fields)


    def __len__(self):
        return len(self._fields)


    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self._fields)


    def __setattr__(self, name, value):
        self._fields[name] = value


    def __setitem__(self, name, value):
        self._fields[name] = value


    def get(self, name, default=None):
        return self._fields.get(name, default)


    def items(self):
        return self._fields.items()


    def keys(self):
        return self._fields.keys()


    def to_dict(self):
        """ Return a plain dictionary representation of this message, with
            any nested :class:`Message` instances likewise converted.
        """

        return plain(self._fields)


# end of class Message



class ServiceRequest(Message):
    """ A :class:`ServiceRequest` is passed into a service call. The server
        receives the field values as a positional list, so the fields must be
        assigned in the order the service definition declares them.
    """

    def args(self):
        """ Return the field values as a positional argument list.
        """

        return [plain(value) for value in self._fields.values()]


# end of class ServiceRequest



class ServiceResponse(Message):
    """ A :class:`ServiceResponse` is handed to the callback of a completed
        service call.
    """

    pass


# end of class ServiceResponse



def plain(value):
    """ Recursively convert *value* into JSON-compatible built-in types:
        :class:`Message` instances become dictionaries, tuples become lists.
    """

    if isinstance(value, Message):
        value = value._fields

    if isinstance(value, dict):
        converted = dict()
        for key, item in value.items():
            converted[key] = plain(item)
        return converted

    if isinstance(value, (list, tuple)):
        return [plain(item) for item in value]

    return value



def envelope(op, **fields):
    """ Build an outbound protocol message for the operation *op*. Fields
        whose value is None are omitted.
    """

    message = dict()
    message['op'] = op

    for key, value in fields.items():
        if value is None:
            continue
        message[key] = plain(value)

    return message



def encode(message):
    """ Return the JSON text frame for an outbound message.
    """

    return json.dumps(plain(message))



def decode(frame):
    """ Parse an inbound JSON text frame. Raises ValueError if the frame is
        not valid JSON, or does not describe a JSON object with an 'op' field.
    """

    if isinstance(frame, (bytes, bytearray, memoryview)):
        frame = bytes(frame).decode('utf-8')

    try:
        message = json.loads(frame)
    except json.DecodeError as e:
        raise ValueError('frame is not valid JSON: ' + str(e)) from e

    if isinstance(message, dict):
        pass
    else:
        raise ValueError('frame is not a JSON object')

    if 'op' in message:
        pass
    else:
        raise ValueError("frame has no 'op' field")

    return message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
