""" An actionlib client: long-running, cancellable, asynchronously reporting
    goals, built from five topics sharing one server-side action name.
"""

import logging
import random
import threading
import time

from .observer import Observers
from .protocol import fields
from .protocol.message import Message
from .topic import Topic

logger = logging.getLogger(__name__)

# Goal lifecycle states. A goal only moves forward through these; a timeout
# or a cancellation request is recorded alongside the state, never instead
# of it.

CREATED = 'created'
SENT = 'sent'
ACTIVE = 'active'
FINISHED = 'finished'


class ActionClient:
    """ An :class:`ActionClient` talks to the action server *server_name*,
        like '/fibonacci', for the action type *action_name*, like
        'actionlib_tutorials/FibonacciAction'.

        The goal and cancel topics are advertised, and the feedback, status,
        and result topics are subscribed, as soon as the client is created.
        Every inbound status, feedback, or result message is routed to the
        :class:`Goal` it names; messages naming a goal this client did not
        create are ignored.

        If a *timeout* (in seconds) is specified, :attr:`on_timeout` is
        notified once should no status message of any kind arrive within
        that window. This is purely informational; the client continues to
        operate normally.

        :ivar goals: Every :class:`Goal` created against this client, keyed
            by goal id. Goals are never removed.
    """

    def __init__(self, ros, server_name, action_name, timeout=None):

        self.ros = ros
        self.server_name = server_name
        self.action_name = action_name
        self.timeout = timeout
        self.goals = dict()
        self.received_status = False
        self.on_timeout = Observers('action ' + server_name + ' timeout')
        self.lock = threading.Lock()
        self.timer = None

        self.feedback_listener = Topic(ros, self._topic(fields.ACTION_FEEDBACK), action_name + 'Feedback')
        self.status_listener = Topic(ros, self._topic(fields.ACTION_STATUS), fields.GOAL_STATUS_ARRAY_TYPE)
        self.result_listener = Topic(ros, self._topic(fields.ACTION_RESULT), action_name + 'Result')
        self.goal_topic = Topic(ros, self._topic(fields.ACTION_GOAL), action_name + 'Goal')
        self.cancel_topic = Topic(ros, self._topic(fields.ACTION_CANCEL), fields.GOAL_ID_TYPE)

        self.goal_topic.advertise()
        self.cancel_topic.advertise()

        self.status_listener.subscribe(self._receive_status)
        self.feedback_listener.subscribe(self._receive_feedback)
        self.result_listener.subscribe(self._receive_result)

        if timeout:
            self.timer = ros.schedule(timeout, self._check_status)


    def __repr__(self):
        return '<%s %s [%s]>' % (self.__class__.__name__, self.server_name, self.action_name)


    def add_goal(self, goal):
        """ Register *goal* so that inbound messages naming it are routed to
            it. :class:`Goal` instances register themselves upon creation.
        """

        self.lock.acquire()
        self.goals[goal.goal_id] = goal
        self.lock.release()


    def cancel(self):
        """ Ask the server to cancel every goal it is pursuing for this
            action, including goals sent by other clients.
        """

        self.cancel_topic.publish(Message())


    def _check_status(self):

        if self.received_status == True:
            return

        logger.warning("no status received from %s within %s seconds", self.server_name, self.timeout)
        self.on_timeout.notify()


    def _lookup(self, status):
        """ Return the :class:`Goal` named by a GoalStatus *status*, or None.
        """

        try:
            goal_id = status['goal_id']['id']
        except (KeyError, TypeError):
            return None

        self.lock.acquire()
        goal = self.goals.get(goal_id)
        self.lock.release()

        if goal is None:
            logger.debug("%s: ignoring message for unknown goal %s", self.server_name, goal_id)

        return goal


    def _receive_feedback(self, message):

        status = message.get('status')
        goal = self._lookup(status)

        if goal is not None:
            goal._update_status(status)
            goal._update_feedback(message.get('feedback'))


    def _receive_result(self, message):

        status = message.get('status')
        goal = self._lookup(status)

        if goal is not None:
            goal._update_status(status)
            goal._update_result(message.get('result'))


    def _receive_status(self, message):

        self.received_status = True

        status_list = message.get('status_list') or list()

        for status in status_list:
            goal = self._lookup(status)
            if goal is not None:
                goal._update_status(status)


    def _topic(self, suffix):
        return self.server_name + '/' + suffix


# end of class ActionClient



class Goal:
    """ A :class:`Goal` is one request to the action server behind
        *action_client*, with *goal_message* as its payload. The goal is not
        sent until :func:`send` is called.

        Progress is reported via observer lists, each invoked on the
        dispatch thread:

        :ivar on_status: Invoked with each GoalStatus naming this goal.
        :ivar on_feedback: Invoked with each feedback payload.
        :ivar on_result: Invoked once with the result payload.
        :ivar on_timeout: Invoked if no status arrived within the timeout
            supplied to :func:`send`.

        The most recent values are also retained as :attr:`status`,
        :attr:`feedback`, and :attr:`result`.
    """

    def __init__(self, action_client, goal_message=None):

        self.action_client = action_client
        self.goal_id = 'goal_%s_%d' % (random.random(), int(time.time() * 1000))

        if goal_message is None:
            goal_message = dict()

        goal_id = dict()
        goal_id['stamp'] = {'secs': 0, 'nsecs': 0}
        goal_id['id'] = self.goal_id

        self.goal_message = Message(goal_id=goal_id, goal=goal_message)

        self.state = CREATED
        self.status = None
        self.feedback = None
        self.result = None
        self.finished = False
        self.timed_out = False
        self.cancel_requested = False
        self.timer = None
        self.lock = threading.Lock()

        self.on_status = Observers(self.goal_id + ' status')
        self.on_feedback = Observers(self.goal_id + ' feedback')
        self.on_result = Observers(self.goal_id + ' result')
        self.on_timeout = Observers(self.goal_id + ' timeout')

        action_client.add_goal(self)


    def __repr__(self):
        return '<%s %s %s>' % (self.__class__.__name__, self.goal_id, self.state)


    @property
    def is_finished(self):
        return self.finished


    def cancel(self):
        """ Ask the server to cancel this goal. Cancellation is advisory:
            the goal keeps its current state until the server reports a
            result, if it ever does.
        """

        self.cancel_requested = True

        message = Message(id=self.goal_id)
        self.action_client.cancel_topic.publish(message)


    def send(self, timeout=None):
        """ Send the goal to the action server. If a *timeout* (in seconds)
            is specified, :attr:`on_timeout` will be notified once if no
            status for this goal arrives within that window. A timeout does
            not otherwise affect the goal; later updates are still applied.
        """

        self.lock.acquire()
        if self.state == CREATED:
            self.state = SENT
        self.lock.release()

        self.action_client.goal_topic.publish(self.goal_message)

        if timeout:
            self.timer = self.action_client.ros.schedule(timeout, self._check_timeout)


    def _check_timeout(self):

        self.lock.acquire()
        expired = self.state == SENT
        if expired:
            self.timed_out = True
        self.lock.release()

        if expired:
            logger.info("goal %s: no status within the timeout", self.goal_id)
            self.on_timeout.notify()


    def _update_feedback(self, feedback):

        if isinstance(feedback, dict):
            feedback = Message(feedback)

        self.feedback = feedback
        self.on_feedback.notify(feedback)


    def _update_result(self, result):

        if isinstance(result, dict):
            result = Message(result)

        self.lock.acquire()
        self.result = result
        self.finished = True
        self.state = FINISHED
        self.lock.release()

        self.on_result.notify(result)


    def _update_status(self, status):

        if isinstance(status, dict):
            status = Message(status)

        self.lock.acquire()
        self.status = status
        if self.state == SENT or self.state == ACTIVE:
            self.state = ACTIVE
        self.lock.release()

        self.on_status.notify(status)


# end of class Goal


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
