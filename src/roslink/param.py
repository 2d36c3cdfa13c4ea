""" Access to the server's parameter store, by way of the rosapi services.
"""

from . import json
from .protocol import fields
from .protocol.message import ServiceRequest, ServiceResponse
from .service import Service


class Param:
    """ A :class:`Param` is a single named parameter, like 'max_vel_x'.
        Parameter values are JSON-encoded on the wire; the methods here
        encode and decode them transparently.
    """

    def __init__(self, ros, name):

        self.ros = ros
        self.name = name


    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.name)


    def get(self, callback, errback=None):
        """ Fetch the value of the parameter. The *callback* is invoked with
            the decoded value; if the call fails and no *errback* was
            provided, it receives the server's error instead.
        """

        def deliver(response):
            if isinstance(response, ServiceResponse):
                callback(json.loads(response.value))
            else:
                callback(response)

        request = ServiceRequest()
        request.name = self.name
        request.value = json.dumps('')

        return self._call(fields.ROSAPI_GET_PARAM, request, deliver, errback)


    def set(self, value, callback=None, errback=None):
        """ Set the parameter to *value*, which must be JSON-serializable.
            The optional *callback* is invoked with the (empty) response once
            the server confirms the change.
        """

        request = ServiceRequest()
        request.name = self.name
        request.value = json.dumps(value)

        return self._call(fields.ROSAPI_SET_PARAM, request, callback, errback)


    def delete(self, callback=None, errback=None):
        """ Remove the parameter from the server.
        """

        request = ServiceRequest()
        request.name = self.name

        return self._call(fields.ROSAPI_DELETE_PARAM, request, callback, errback)


    def _call(self, service, request, callback, errback):

        name, service_type = service
        client = Service(self.ros, name, service_type)
        return client.call_service(request, callback, errback)


# end of class Param


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
