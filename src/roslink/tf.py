""" Track coordinate-frame transforms by way of a tf2_web_republisher action
    server. Every frame of interest is folded into a single long-running
    goal; changes to the set of frames are coalesced, and the goal is
    replaced once the changes settle.
"""

import logging

from . import config
from .action import ActionClient, Goal
from .geometry import Transform
from .observer import Observers

logger = logging.getLogger(__name__)


def normalize(frame_id):
    """ Strip a single leading '/' from *frame_id*; '/base_link' and
        'base_link' name the same frame.
    """

    if frame_id.startswith('/'):
        frame_id = frame_id[1:]

    return frame_id



class Frame:
    """ One tracked frame: the last transform received for it, if any, and
        the callbacks interested in it.
    """

    def __init__(self, frame_id):

        self.frame_id = frame_id
        self.transform = None
        self.callbacks = Observers('frame ' + frame_id)


    def __repr__(self):
        return '<%s %s callbacks=%d>' % (self.__class__.__name__, self.frame_id, len(self.callbacks))


# end of class Frame



class TFClient:
    """ A :class:`TFClient` delivers the transform from each subscribed frame
        to the *fixed_frame*, whenever it changes by more than *angular_thres*
        (radians) or *trans_thres* (meters), at most *rate* times per second.

        Subscriptions are collected for *update_delay* seconds before the
        server is asked for the new set of frames; the previous goal is
        cancelled and replaced with one naming every frame currently
        subscribed.

        All bookkeeping happens on the connection's dispatch thread, the same
        thread that delivers transforms; calls made from other threads are
        queued there. Use :func:`roslink.Ros.sync` to wait for them.

        :ivar frame_infos: :class:`Frame` instances keyed by normalized
            frame id. The keys are the frames requested from the server.
        :ivar current_goal: The :class:`roslink.action.Goal` currently
            delivering transforms, if any.
    """

    def __init__(self, ros, fixed_frame='/base_link', angular_thres=2.0,
                 trans_thres=0.01, rate=10.0, update_delay=None,
                 server_name=None, action_name=None):

        if update_delay is None:
            update_delay = config.TF_UPDATE_DELAY
        if server_name is None:
            server_name = config.TF_SERVER
        if action_name is None:
            action_name = config.TF_ACTION

        self.ros = ros
        self.fixed_frame = fixed_frame
        self.angular_thres = angular_thres
        self.trans_thres = trans_thres
        self.rate = rate
        self.update_delay = update_delay

        self.frame_infos = dict()
        self.current_goal = None
        self.update_timer = None

        self.action_client = ActionClient(ros, server_name, action_name)


    def __repr__(self):
        return '<%s %s frames=%d>' % (self.__class__.__name__, self.fixed_frame, len(self.frame_infos))


    def subscribe(self, frame_id, callback):
        """ Invoke *callback* with a :class:`roslink.geometry.Transform`
            every time the transform for *frame_id* is updated. If a
            transform for the frame is already known, *callback* receives it
            right away.
        """

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        self.ros.mailbox.invoke(self._subscribe, normalize(frame_id), callback)


    def unsubscribe(self, frame_id, callback=None):
        """ Stop invoking *callback* for *frame_id*; if no *callback* is
            specified, every callback for the frame is removed. A frame with
            no remaining callbacks is dropped from the server-side request.
        """

        self.ros.mailbox.invoke(self._unsubscribe, normalize(frame_id), callback)


    def update_goal(self):
        """ Replace the current goal with one requesting every frame in
            :attr:`frame_infos`. If no frames remain, the current goal is
            cancelled and nothing replaces it. A pending debounced update
            is cancelled, since this one supersedes it.
        """

        timer = self.update_timer
        self.update_timer = None

        if timer is not None:
            timer.cancel()

        if self.current_goal is not None:
            self.current_goal.on_feedback.remove(self.process_feedback)
            self.current_goal.cancel()
            self.current_goal = None

        if len(self.frame_infos) == 0:
            logger.debug("no frames left to track")
            return

        goal_message = dict()
        goal_message['source_frames'] = list(self.frame_infos.keys())
        goal_message['target_frame'] = self.fixed_frame
        goal_message['angular_thres'] = self.angular_thres
        goal_message['trans_thres'] = self.trans_thres
        goal_message['rate'] = self.rate

        goal = Goal(self.action_client, goal_message)
        goal.on_feedback.add(self.process_feedback)

        self.current_goal = goal
        goal.send()

        logger.debug("tracking %d frames relative to %s", len(self.frame_infos), self.fixed_frame)


    def process_feedback(self, feedback):
        """ Deliver each transform in a tf2_web_republisher *feedback*
            message to the callbacks subscribed to its frame. Transforms for
            frames nobody is subscribed to are ignored.
        """

        transforms = feedback.get('transforms') or list()

        for stamped in transforms:
            try:
                frame_id = normalize(stamped['child_frame_id'])
            except (KeyError, TypeError, AttributeError):
                continue

            frame = self.frame_infos.get(frame_id)

            if frame is None:
                continue

            transform = Transform(stamped.get('transform'))
            frame.transform = transform
            frame.callbacks.notify(transform)


    def _schedule_update(self):

        timer = self.update_timer

        if timer is not None and timer.active:
            return

        self.update_timer = self.ros.schedule(self.update_delay, self.update_goal)


    def _subscribe(self, frame_id, callback):

        try:
            frame = self.frame_infos[frame_id]
        except KeyError:
            frame = Frame(frame_id)
            self.frame_infos[frame_id] = frame
            self._schedule_update()

        if frame.transform is not None:
            try:
                callback(frame.transform)
            except Exception:
                logger.exception("frame %s callback %r failed", frame_id, callback)

        frame.callbacks.add(callback)


    def _unsubscribe(self, frame_id, callback):

        try:
            frame = self.frame_infos[frame_id]
        except KeyError:
            return

        if callback is None:
            frame.callbacks.clear()
        else:
            frame.callbacks.remove(callback)

        if len(frame.callbacks) == 0:
            del self.frame_infos[frame_id]
            self._schedule_update()


# end of class TFClient


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
