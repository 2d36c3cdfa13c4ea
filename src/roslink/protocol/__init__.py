from . import fields
from . import message
from . import png

from .message import Message, ServiceRequest, ServiceResponse


"""
roslink Protocol Layer
======================

This package defines the JSON messaging protocol spoken by the bridge
server. It provides the operation vocabulary, the structured record used
for message payloads, and the decoding of compressed frames.

The protocol layer MUST NOT depend on any transport implementation
(websocket, ZeroMQ, etc).

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Endpoints (topic.py, service.py, action.py, tf.py)
    Semantic API
    - subscribe() / publish()
    - call_service()
    - Goal.send() / Goal.cancel()
    - TFClient.subscribe()

    │
    ▼
Connection (ros.py)
    Correlation and routing
    - Mints correlation tokens
    - Routes 'publish' by topic name
    - Routes 'service_response' by token
    - Defers sends until the socket is open

    │
    ▼
Message Model (message.py)
    Structured records and envelopes
    - Message / ServiceRequest / ServiceResponse
    - envelope(), encode(), decode()

    │
    ▼
Field Vocabulary (fields.py)
    Canonical names for ops and naming conventions
    Prevents string drift across system

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Transport Layer
    Moves text frames
    - websocket (the normal bridge server)
    - ZeroMQ

---------------------------------------------------------------------

Every message is one JSON object with an 'op' discriminator:

    op              direction   fields
    auth            out         mac, client, dest, rand, t, level, end
    advertise       out         id, type, topic
    unadvertise     out         id, topic
    subscribe       out         id, type, topic, compression, throttle_rate
    unsubscribe     out         id, topic
    publish         out         id, topic, msg
    call_service    out         id, service, args
    publish         in          topic, msg
    service_response in         id, values, result
    png             in          data

Correlation ids have the form '{op}:{name}:{counter}'.
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
