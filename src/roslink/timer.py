""" One-shot timers. A timer waits on its own background thread; when it
    expires, the action is handed to a :class:`roslink.mailbox.Mailbox` so
    that it runs on the same thread as every other protocol event.

    Timers are never renewed, and firing one has no effect other than
    invoking its action.
"""

import threading
import time


def schedule(delay, method, mailbox=None):
    """ Invoke *method* once, *delay* seconds from now. If a *mailbox* is
        provided the invocation is posted there, otherwise it happens on the
        timer's own thread. Returns the :class:`Timer` handle, which can be
        used to :func:`Timer.cancel` the pending invocation.
    """

    timer = Timer(delay, method, mailbox)
    timer.start()
    return timer



class Timer:
    """ Handle for a single pending invocation.

        :ivar deadline: UNIX epoch timestamp at which the timer expires.
        :ivar fired: True once the action has been invoked.
        :ivar cancelled: True once :func:`cancel` has been called.
    """

    def __init__(self, delay, method, mailbox=None):

        delay = float(delay)
        if delay < 0:
            delay = 0.0

        self.delay = delay
        self.method = method
        self.mailbox = mailbox
        self.deadline = None
        self.fired = False
        self.cancelled = False

        self.alarm = threading.Event()
        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True


    @property
    def active(self):
        """ True while the timer is neither cancelled nor fired.
        """

        return self.fired == False and self.cancelled == False


    def cancel(self):
        """ Prevent the action from running. Cancelling a timer that already
            fired is a no-op.
        """

        self.cancelled = True
        self.alarm.set()


    def run(self):

        self.alarm.wait(self.delay)

        if self.cancelled == True:
            return

        if self.mailbox is None:
            self._fire()
        else:
            self.mailbox.put(self._fire)


    def start(self):
        self.deadline = time.time() + self.delay
        self.thread.start()


    def _fire(self):

        # The cancellation may have arrived while this invocation was sitting
        # in the mailbox queue.

        if self.cancelled == True or self.fired == True:
            return

        self.fired = True
        self.method()


# end of class Timer


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
