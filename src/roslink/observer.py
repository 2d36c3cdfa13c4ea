""" Explicit observer lists. Every entity that fans out notifications (a
    connection, a topic, a goal, a tracked frame) owns one :class:`Observers`
    instance per kind of notification, rather than relying on an implicit
    event emitter.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class Observers:
    """ An ordered list of callbacks. Callbacks are invoked in the order they
        were added; the same callback may be added more than once, in which
        case it will be invoked once per registration. An exception raised by
        one callback is logged and does not prevent the remaining callbacks
        from being invoked.
    """

    def __init__(self, name=None):

        self.name = name
        self.callbacks = list()
        self.lock = threading.Lock()


    def __bool__(self):
        return len(self.callbacks) > 0


    def __contains__(self, callback):
        return callback in self.callbacks


    def __len__(self):
        return len(self.callbacks)


    def add(self, callback):
        """ Append *callback* to the end of the list.
        """

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        self.lock.acquire()
        self.callbacks.append(callback)
        self.lock.release()


    def remove(self, callback):
        """ Remove the first registration of *callback*. Returns True if a
            registration was removed, False if the callback was not present.
        """

        self.lock.acquire()
        try:
            self.callbacks.remove(callback)
        except ValueError:
            removed = False
        else:
            removed = True
        self.lock.release()

        return removed


    def clear(self):
        self.lock.acquire()
        self.callbacks = list()
        self.lock.release()


    def notify(self, *args):
        """ Invoke every registered callback with the supplied arguments. The
            list is copied before iterating, so a callback may safely add or
            remove registrations; such changes take effect on the next call.
        """

        self.lock.acquire()
        callbacks = tuple(self.callbacks)
        self.lock.release()

        for callback in callbacks:
            try:
                callback(*args)
            except Exception:
                logger.exception("%s callback %r failed", self.name or 'observer', callback)
                continue


# end of class Observers


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
