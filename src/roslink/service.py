""" Classes and methods implemented here implement the request/response
    aspects of the client API: calling a named service and correlating the
    eventual response with the call that produced it.
"""

import logging
import threading

from .protocol import fields
from .protocol.message import ServiceRequest, ServiceResponse, envelope

logger = logging.getLogger(__name__)


class Service:
    """ A :class:`Service` is a named, typed request/response endpoint. The
        *name* is the service name, like '/add_two_ints'; *service_type* is
        the service type, like 'rospy_tutorials/AddTwoInts'.
    """

    def __init__(self, ros, name, service_type):

        self.ros = ros
        self.name = name
        self.service_type = service_type


    def __repr__(self):
        return '<%s %s [%s]>' % (self.__class__.__name__, self.name, self.service_type)


    def call_service(self, request=None, callback=None, errback=None):
        """ Call the service with *request*, a
            :class:`roslink.protocol.ServiceRequest` (or a plain dictionary)
            whose fields are in the order the service definition declares
            them; the server receives them as a positional list.

            The *callback* is invoked exactly once, on the dispatch thread,
            with a :class:`roslink.protocol.ServiceResponse` when the
            response arrives. If the server reports that the call failed,
            *errback* is invoked with the server's error instead; if no
            *errback* was provided the *callback* receives it, as is. Only a
            successful call ever produces a
            :class:`roslink.protocol.ServiceResponse`.

            There is no timeout: if the server never responds, the call
            remains pending for the lifetime of the connection. The returned
            :class:`ServiceCall` can be used to block for the response.
        """

        if request is None:
            request = ServiceRequest()
        elif isinstance(request, ServiceRequest):
            pass
        else:
            request = ServiceRequest(request)

        token = self.ros.next_id(fields.CALL_SERVICE, self.name)
        call = ServiceCall(token, callback, errback)

        # Register the waiter before sending, otherwise a quick response
        # could arrive before anyone is waiting for it.

        self.ros.add_pending(token, call._complete)

        message = envelope(fields.CALL_SERVICE, id=token, service=self.name, args=request.args())
        self.ros.send(message)

        return call


# end of class Service



class ServiceCall:
    """ A :class:`ServiceCall` tracks one outstanding service call, and
        provides optional synchronization for callers that would rather
        block than receive a callback.

        :ivar id: The correlation token for this call.
        :ivar response: The :class:`roslink.protocol.ServiceResponse`, once
            the call completed successfully.
        :ivar error: The server's error description, if the call failed.
    """

    def __init__(self, id, callback=None, errback=None):

        self.id = id
        self.callback = callback
        self.errback = errback
        self.response = None
        self.error = None
        self.result = None

        self.lock = threading.Lock()
        self.rep_event = threading.Event()


    def __repr__(self):
        return '<%s %s complete=%s>' % (self.__class__.__name__, self.id, self.poll())


    def poll(self):
        """ Return True if the call is complete, otherwise return False.
        """

        return self.rep_event.is_set()


    def wait(self, timeout=None):
        """ Block until the call completes, or *timeout* seconds elapse. The
            response is returned; it will be None if the call is still
            pending, or failed. Giving up on the wait does not cancel the
            call.
        """

        self.rep_event.wait(timeout)
        return self.response


    def _complete(self, message):
        """ Invoked with the full 'service_response' message. Only the first
            invocation has any effect.
        """

        self.lock.acquire()
        if self.rep_event.is_set():
            self.lock.release()
            return

        values = message.get('values')
        result = message.get('result', True)

        if result == False:
            self.error = values
            if self.errback is not None:
                method = self.errback
                argument = values
            else:
                method = self.callback
                argument = values
        else:
            if values is None:
                values = dict()
            self.response = ServiceResponse(values) if isinstance(values, dict) else values
            method = self.callback
            argument = self.response

        self.result = result
        self.rep_event.set()
        self.lock.release()

        if result == False:
            logger.debug("service call %s failed: %s", self.id, values)

        if method is not None:
            method(argument)


# end of class ServiceCall


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
