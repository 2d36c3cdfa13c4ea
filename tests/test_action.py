import re
import time

import roslink
from roslink import action


SERVER = '/fibonacci'
ACTION = 'actionlib_tutorials/FibonacciAction'


def status_for(goal, code=1):
    status = dict()
    status['goal_id'] = {'stamp': {'secs': 0, 'nsecs': 0}, 'id': goal.goal_id}
    status['status'] = code
    return status


def publish(ros, topic, msg):
    ros.socket.inject({'op': 'publish', 'topic': SERVER + '/' + topic, 'msg': msg})


def test_client_topics(ros):

    roslink.ActionClient(ros, SERVER, ACTION)

    advertised = dict()
    for message in ros.socket.messages('advertise'):
        advertised[message['topic']] = message['type']

    assert advertised == {
        '/fibonacci/goal': 'actionlib_tutorials/FibonacciActionGoal',
        '/fibonacci/cancel': 'actionlib_msgs/GoalID',
    }

    subscribed = dict()
    for message in ros.socket.messages('subscribe'):
        subscribed[message['topic']] = message['type']

    assert subscribed == {
        '/fibonacci/status': 'actionlib_msgs/GoalStatusArray',
        '/fibonacci/feedback': 'actionlib_tutorials/FibonacciActionFeedback',
        '/fibonacci/result': 'actionlib_tutorials/FibonacciActionResult',
    }


def test_goal_message(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION)
    goal = roslink.Goal(client, {'order': 7})

    assert re.match(r'^goal_[0-9.e-]+_\d+$', goal.goal_id)
    assert goal.state == action.CREATED
    assert client.goals[goal.goal_id] is goal

    assert ros.socket.messages('publish') == []

    goal.send()
    assert goal.state == action.SENT

    published = ros.socket.messages('publish', topic='/fibonacci/goal')
    assert len(published) == 1

    msg = published[0]['msg']
    assert msg['goal_id']['id'] == goal.goal_id
    assert msg['goal_id']['stamp'] == {'secs': 0, 'nsecs': 0}
    assert msg['goal'] == {'order': 7}


def test_goal_ids_unique(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION)
    goals = [roslink.Goal(client, {}) for count in range(20)]

    assert len(set(goal.goal_id for goal in goals)) == 20
    assert len(client.goals) == 20


def test_lifecycle(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION)
    goal = roslink.Goal(client, {'order': 3})

    statuses = list()
    feedbacks = list()
    results = list()

    goal.on_status.add(statuses.append)
    goal.on_feedback.add(feedbacks.append)
    goal.on_result.add(results.append)

    goal.send()

    publish(ros, 'status', {'status_list': [status_for(goal, 1)]})
    ros.sync()

    assert goal.state == action.ACTIVE
    assert goal.status.status == 1
    assert len(statuses) == 1

    publish(ros, 'feedback', {'status': status_for(goal, 1), 'feedback': {'sequence': [0, 1]}})
    ros.sync()

    assert feedbacks[0].sequence == [0, 1]
    assert goal.feedback.sequence == [0, 1]
    assert len(statuses) == 2
    assert goal.finished == False

    publish(ros, 'result', {'status': status_for(goal, 3), 'result': {'sequence': [0, 1, 1]}})
    ros.sync()

    assert goal.state == action.FINISHED
    assert goal.finished == True
    assert goal.is_finished == True
    assert goal.status.status == 3
    assert results[0].sequence == [0, 1, 1]

    # A late status does not move a finished goal backwards.

    publish(ros, 'status', {'status_list': [status_for(goal, 1)]})
    ros.sync()

    assert goal.state == action.FINISHED


def test_unknown_goals_ignored(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION)
    goal = roslink.Goal(client, {})
    goal.send()

    stranger = {'goal_id': {'id': 'goal_0.5_1'}, 'status': 1}

    publish(ros, 'status', {'status_list': [stranger]})
    publish(ros, 'feedback', {'status': stranger, 'feedback': {}})
    publish(ros, 'result', {'status': stranger, 'result': {}})
    publish(ros, 'status', {'status_list': [{'status': 1}]})
    ros.sync()

    assert goal.state == action.SENT
    assert goal.status is None
    assert goal.result is None


def test_status_list_fan_out(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION)
    first = roslink.Goal(client, {})
    second = roslink.Goal(client, {})
    first.send()
    second.send()

    publish(ros, 'status', {'status_list': [status_for(first, 1), status_for(second, 2)]})
    ros.sync()

    assert first.status.status == 1
    assert second.status.status == 2


def test_goal_timeout(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION)
    goal = roslink.Goal(client, {})

    timeouts = list()
    goal.on_timeout.add(lambda: timeouts.append(time.time()))

    goal.send(timeout=0.1)
    time.sleep(0.3)
    ros.sync()

    assert len(timeouts) == 1
    assert goal.timed_out == True
    assert goal.state == action.SENT

    # The timeout does not freeze the goal.

    publish(ros, 'status', {'status_list': [status_for(goal, 1)]})
    publish(ros, 'result', {'status': status_for(goal, 3), 'result': {'done': True}})
    ros.sync()

    assert goal.state == action.FINISHED
    assert goal.result.done == True
    assert len(timeouts) == 1


def test_goal_timeout_not_fired(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION)
    goal = roslink.Goal(client, {})

    timeouts = list()
    goal.on_timeout.add(lambda: timeouts.append(True))

    goal.send(timeout=0.1)
    publish(ros, 'status', {'status_list': [status_for(goal, 1)]})
    ros.sync()

    time.sleep(0.3)
    ros.sync()

    assert timeouts == []
    assert goal.timed_out == False


def test_client_timeout(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION, timeout=0.1)

    timeouts = list()
    client.on_timeout.add(lambda: timeouts.append(True))

    time.sleep(0.3)
    ros.sync()

    assert timeouts == [True]


def test_client_timeout_not_fired(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION, timeout=0.2)

    timeouts = list()
    client.on_timeout.add(lambda: timeouts.append(True))

    # Any status at all counts, even for a goal this client knows nothing
    # about.

    publish(ros, 'status', {'status_list': []})
    ros.sync()

    time.sleep(0.4)
    ros.sync()

    assert client.received_status == True
    assert timeouts == []


def test_cancel(ros):

    client = roslink.ActionClient(ros, SERVER, ACTION)
    goal = roslink.Goal(client, {})
    goal.send()

    goal.cancel()
    assert goal.cancel_requested == True

    client.cancel()

    cancels = ros.socket.messages('publish', topic='/fibonacci/cancel')
    assert len(cancels) == 2
    assert cancels[0]['msg'] == {'id': goal.goal_id}
    assert cancels[1]['msg'] == {}

    # Cancellation is advisory; the state only changes when the server
    # reports it.

    assert goal.state == action.SENT

    publish(ros, 'result', {'status': status_for(goal, 2), 'result': {}})
    ros.sync()

    assert goal.state == action.FINISHED


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
