"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Outbound operations
AUTH = "auth"
ADVERTISE = "advertise"
UNADVERTISE = "unadvertise"
SUBSCRIBE = "subscribe"
UNSUBSCRIBE = "unsubscribe"
PUBLISH = "publish"
CALL_SERVICE = "call_service"

# Inbound operations
SERVICE_RESPONSE = "service_response"
PNG = "png"

# Topic compression modes
COMPRESSION_NONE = "none"
COMPRESSION_PNG = "png"
COMPRESSIONS = frozenset((COMPRESSION_NONE, COMPRESSION_PNG))

# actionlib sub-topics and fixed message types
ACTION_GOAL = "goal"
ACTION_CANCEL = "cancel"
ACTION_FEEDBACK = "feedback"
ACTION_STATUS = "status"
ACTION_RESULT = "result"

GOAL_ID_TYPE = "actionlib_msgs/GoalID"
GOAL_STATUS_ARRAY_TYPE = "actionlib_msgs/GoalStatusArray"

# rosapi services
ROSAPI_TOPICS = ("/rosapi/topics", "rosapi/Topics")
ROSAPI_SERVICES = ("/rosapi/services", "rosapi/Services")
ROSAPI_PARAM_NAMES = ("/rosapi/get_param_names", "rosapi/GetParamNames")
ROSAPI_GET_PARAM = ("/rosapi/get_param", "rosapi/GetParam")
ROSAPI_SET_PARAM = ("/rosapi/set_param", "rosapi/SetParam")
ROSAPI_DELETE_PARAM = ("/rosapi/delete_param", "rosapi/DeleteParam")
