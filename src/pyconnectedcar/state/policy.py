"""Channel value policy.

Type compatibility between a channel's item type and a value, and the
change test used to compute the ``updated`` result of a poll.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pyconnectedcar.models.channels import ChannelType, OnOffType, UnDefType
from pyconnectedcar.models.position import PointType


def is_compatible(item_type: ChannelType, value: Any) -> bool:
    """Whether *value* may be stored in a channel of *item_type*."""
    if isinstance(value, UnDefType):
        return True
    if item_type == ChannelType.LOCATION:
        return isinstance(value, PointType)
    if item_type == ChannelType.DATETIME:
        return isinstance(value, datetime) and value.tzinfo is not None
    if item_type == ChannelType.SWITCH:
        return isinstance(value, OnOffType)
    if item_type == ChannelType.STRING:
        # OnOffType is a str subclass but belongs to switch channels.
        return isinstance(value, str) and not isinstance(value, OnOffType)
    return False


def has_changed(previous: Any, incoming: Any) -> bool:
    """A missing previous value always counts as a change."""
    if previous is None:
        return True
    if type(previous) is not type(incoming):
        return True
    return bool(previous != incoming)
