"""Runtime defaults for roslink.

Every value here can be overridden from the environment; constructor
arguments always take precedence over these module-level defaults.
"""

from __future__ import annotations

import logging
import os
from typing import Optional


def _float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, not {raw!r}") from None


# Transport backend override. None means the backend is inferred from the
# URL scheme when a connection is opened.
TRANSPORT: Optional[str] = os.environ.get("ROSLINK_TRANSPORT") or None

# Frame tracker (tf2_web_republisher) defaults.
TF_SERVER = os.environ.get("ROSLINK_TF_SERVER", "/tf2_web_republisher")
TF_ACTION = os.environ.get("ROSLINK_TF_ACTION", "tf2_web_republisher/TFSubscriptionAction")
TF_UPDATE_DELAY = _float("ROSLINK_TF_UPDATE_DELAY", 0.05)

# Poll interval for the zmq backend's socket thread, in seconds.
ZMQ_POLL = _float("ROSLINK_ZMQ_POLL", 1.0)

LOG_LEVEL = (os.environ.get("ROSLINK_LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Opt-in logging setup for scripts; the library never installs handlers."""
    level = (level or LOG_LEVEL).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = [
    "TRANSPORT",
    "TF_SERVER",
    "TF_ACTION",
    "TF_UPDATE_DELAY",
    "ZMQ_POLL",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "configure_logging",
]
