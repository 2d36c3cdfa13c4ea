import pytest

from roslink import protocol
from roslink.protocol import message


def test_access():

    record = protocol.Message({'a': 1}, b=2)
    record.c = 3
    record['d'] = 4

    assert record.a == 1
    assert record['b'] == 2
    assert list(record.keys()) == ['a', 'b', 'c', 'd']
    assert 'c' in record
    assert len(record) == 4
    assert record.get('missing') is None
    assert record == {'a': 1, 'b': 2, 'c': 3, 'd': 4}

    with pytest.raises(AttributeError):
        record.missing


def test_nested_to_dict():

    inner = protocol.Message(x=1.0)
    outer = protocol.Message(position=inner, points=(inner, inner))

    assert outer.to_dict() == {'position': {'x': 1.0}, 'points': [{'x': 1.0}, {'x': 1.0}]}


def test_request_args():

    request = protocol.ServiceRequest()
    request.name = 'max_vel_x'
    request.value = protocol.Message(data=1)

    assert request.args() == ['max_vel_x', {'data': 1}]


def test_envelope():

    envelope = message.envelope('subscribe', id='subscribe:/a:1', topic='/a', type=None)
    assert envelope == {'op': 'subscribe', 'id': 'subscribe:/a:1', 'topic': '/a'}


def test_decode():

    decoded = message.decode(b'{"op": "publish", "topic": "/a", "msg": {}}')
    assert decoded['op'] == 'publish'
    assert decoded['topic'] == '/a'


@pytest.mark.parametrize('frame', [
    'not json',
    '"just a string"',
    '{"topic": "/a"}',
    b'\xff\xfe',
])
def test_decode_rejects(frame):

    with pytest.raises(ValueError):
        message.decode(frame)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
