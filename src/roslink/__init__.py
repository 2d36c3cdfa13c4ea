""" Python client for rosbridge-style servers. A single :class:`Ros`
    connection multiplexes topics, service calls, actions, and transform
    tracking over one socket.
"""

# Utility components.

from . import json
from . import config
from . import observer
from . import mailbox
from . import timer

# Submodules used by multiple other components.

from . import protocol
from . import transport
from . import geometry

# Primary public-facing interfaces.

from .ros import Ros
from .topic import Topic
from .service import Service, ServiceCall
from .param import Param
from .action import ActionClient, Goal
from .tf import TFClient

from .protocol import Message, ServiceRequest, ServiceResponse
from .geometry import Vector3, Quaternion, Transform, Pose

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
