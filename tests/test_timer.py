import time

import roslink


def test_fires_once():

    test_fires_once.count = 0

    def callback():
        test_fires_once.count += 1

    timer = roslink.timer.schedule(0.05, callback)
    assert timer.active == True

    time.sleep(0.2)

    assert test_fires_once.count == 1
    assert timer.fired == True
    assert timer.active == False


def test_cancel():

    test_cancel.fired = False

    def callback():
        test_cancel.fired = True

    timer = roslink.timer.schedule(0.1, callback)
    timer.cancel()
    time.sleep(0.2)

    assert test_cancel.fired == False
    assert timer.cancelled == True
    assert timer.active == False

    # Redundant calls should be a no-op.

    timer.cancel()


def test_cancel_while_queued():

    # The timer expires and posts to the mailbox, but the mailbox is busy;
    # a cancellation arriving in the meantime still wins.

    mailbox = roslink.mailbox.Mailbox('unittest')
    test_cancel_while_queued.fired = False

    def callback():
        test_cancel_while_queued.fired = True

    def busy():
        time.sleep(0.2)

    mailbox.put(busy)
    timer = roslink.timer.schedule(0.05, callback, mailbox)
    time.sleep(0.1)
    timer.cancel()

    mailbox.sync(timeout=2)
    assert test_cancel_while_queued.fired == False

    mailbox.stop()


def test_deadline():

    before = time.time()
    timer = roslink.timer.schedule(10, lambda: None)

    assert timer.deadline >= before + 10
    assert timer.deadline <= time.time() + 10

    timer.cancel()


def test_negative_delay():

    test_negative_delay.fired = False

    def callback():
        test_negative_delay.fired = True

    roslink.timer.schedule(-1, callback)
    time.sleep(0.1)

    assert test_negative_delay.fired == True


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
