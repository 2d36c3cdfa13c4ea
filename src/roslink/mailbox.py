""" The single dispatch thread behind a :class:`roslink.Ros` connection. All
    inbound protocol handling, application callbacks, and timer expirations
    are funneled through one :class:`Mailbox`, so none of them ever run
    concurrently with each other.
"""

import logging
import queue
import threading

logger = logging.getLogger(__name__)


class _MailboxWake(RuntimeError):
    pass


class Mailbox:
    """ Background thread to invoke queued work, one item at a time, in the
        order the work was posted. Work is posted via :func:`put` from any
        thread; an exception raised by one item is logged and processing
        moves on to the next item.
    """

    def __init__(self, name='roslink.mailbox'):

        self.name = name
        self.queue = queue.SimpleQueue()
        self.shutdown = False

        self.thread = threading.Thread(target=self.run, name=name)
        self.thread.daemon = True
        self.thread.start()


    def invoke(self, method, *args):
        """ Invoke *method* on the mailbox thread: immediately, if this is
            the mailbox thread, otherwise by way of :func:`put`.
        """

        if threading.current_thread() is self.thread:
            method(*args)
        else:
            self.put(method, *args)


    def put(self, method, *args):
        """ Queue *method* to be invoked with *args* on the mailbox thread.
        """

        self.queue.put((method, args))


    def run(self):

        while True:
            if self.shutdown == True:
                break

            try:
                dequeued = self.queue.get(timeout=300)
            except queue.Empty:
                continue

            if isinstance(dequeued, _MailboxWake):
                continue

            method, args = dequeued

            try:
                method(*args)
            except Exception:
                logger.exception("%s: unhandled exception in %r", self.name, method)
                continue


    def stop(self):
        self.shutdown = True
        self.wake()


    def sync(self, timeout=None):
        """ Block until every item posted before this call has been processed.
            Returns True if the mailbox caught up within *timeout* seconds,
            False otherwise. Calling this from the mailbox thread itself
            returns True immediately, since waiting would deadlock.
        """

        if threading.current_thread() is self.thread:
            return True

        done = threading.Event()
        self.put(done.set)
        return done.wait(timeout)


    def wake(self):
        self.queue.put(_MailboxWake())


# end of class Mailbox


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
