import roslink


def test_subscribe_once(ros):

    topic = roslink.Topic(ros, '/chatter', 'std_msgs/String')

    first = list()
    second = list()

    topic.subscribe(first.append)
    topic.subscribe(second.append)
    topic.subscribe(first.append)

    subscribes = ros.socket.messages('subscribe')
    assert len(subscribes) == 1

    subscribe = subscribes[0]
    assert subscribe['topic'] == '/chatter'
    assert subscribe['type'] == 'std_msgs/String'
    assert subscribe['compression'] == 'none'
    assert subscribe['throttle_rate'] == 0
    assert subscribe['id'].startswith('subscribe:/chatter:')

    ros.socket.inject({'op': 'publish', 'topic': '/chatter', 'msg': {'data': 'hello'}})
    ros.sync()

    # The same callback registered twice is invoked twice.

    assert len(first) == 2
    assert len(second) == 1

    message = second[0]
    assert isinstance(message, roslink.Message)
    assert message.data == 'hello'
    assert message['data'] == 'hello'


def test_unsubscribe(ros):

    topic = roslink.Topic(ros, '/chatter', 'std_msgs/String')

    received = list()
    topic.subscribe(received.append)
    topic.unsubscribe()

    unsubscribes = ros.socket.messages('unsubscribe')
    assert len(unsubscribes) == 1
    assert unsubscribes[0]['topic'] == '/chatter'

    ros.socket.inject({'op': 'publish', 'topic': '/chatter', 'msg': {'data': 'late'}})
    ros.sync()
    assert received == []

    # Every explicit unsubscribe is sent.

    topic.unsubscribe()
    assert len(ros.socket.messages('unsubscribe')) == 2

    # Subscribing again after an unsubscribe renews the server-side
    # subscription.

    topic.subscribe(received.append)
    assert len(ros.socket.messages('subscribe')) == 2

    ros.socket.inject({'op': 'publish', 'topic': '/chatter', 'msg': {'data': 'again'}})
    ros.sync()
    assert len(received) == 1


def test_publish_advertises_once(ros):

    topic = roslink.Topic(ros, '/cmd_vel', 'geometry_msgs/Twist')

    twist = roslink.Message(linear={'x': 1.0, 'y': 0.0, 'z': 0.0})
    topic.publish(twist)
    topic.publish({'linear': {'x': 2.0}})

    ops = [message['op'] for message in ros.socket.messages()]
    assert ops == ['advertise', 'publish', 'publish']

    advertise = ros.socket.messages('advertise')[0]
    assert advertise['type'] == 'geometry_msgs/Twist'
    assert advertise['topic'] == '/cmd_vel'

    published = ros.socket.messages('publish')
    assert published[0]['msg'] == {'linear': {'x': 1.0, 'y': 0.0, 'z': 0.0}}
    assert published[1]['msg'] == {'linear': {'x': 2.0}}
    assert published[0]['id'] != published[1]['id']
    assert topic.advertised == True


def test_unadvertise(ros):

    topic = roslink.Topic(ros, '/cmd_vel', 'geometry_msgs/Twist')

    topic.publish({})
    topic.unadvertise()
    assert topic.advertised == False

    topic.publish({})

    ops = [message['op'] for message in ros.socket.messages()]
    assert ops == ['advertise', 'publish', 'unadvertise', 'advertise', 'publish']


def test_invalid_compression(ros):

    warnings = list()
    ros.on_warning.add(warnings.append)

    topic = roslink.Topic(ros, '/image', 'sensor_msgs/Image', compression='jpeg')
    assert topic.compression == 'none'

    topic.subscribe(lambda message: None)
    assert ros.socket.messages('subscribe')[0]['compression'] == 'none'

    ros.sync()
    assert len(warnings) == 1
    assert 'jpeg' in warnings[0]


def test_png_compression_accepted(ros):

    topic = roslink.Topic(ros, '/image', 'sensor_msgs/Image', compression='png')
    topic.subscribe(lambda message: None)

    assert ros.socket.messages('subscribe')[0]['compression'] == 'png'


def test_negative_throttle_rate(ros):

    warnings = list()
    ros.on_warning.add(warnings.append)

    topic = roslink.Topic(ros, '/scan', 'sensor_msgs/LaserScan', throttle_rate=-5)
    assert topic.throttle_rate == 0

    topic.subscribe(lambda message: None)
    assert ros.socket.messages('subscribe')[0]['throttle_rate'] == 0

    ros.sync()
    assert len(warnings) == 1


def test_callback_failure_isolated(ros):

    topic = roslink.Topic(ros, '/chatter', 'std_msgs/String')

    def broken(message):
        raise RuntimeError('callback failure')

    received = list()
    topic.subscribe(broken)
    topic.subscribe(received.append)

    ros.socket.inject({'op': 'publish', 'topic': '/chatter', 'msg': {'data': 1}})
    ros.socket.inject({'op': 'publish', 'topic': '/chatter', 'msg': {'data': 2}})
    ros.sync()

    assert [message.data for message in received] == [1, 2]


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
