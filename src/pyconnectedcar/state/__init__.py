"""State/store layer.

This package holds the channel values of every thing and is the sink the
services write to. It decides whether an update is a change and notifies
subscribers.
"""

from pyconnectedcar.state.events import ChannelUpdate
from pyconnectedcar.state.store import ChannelSink, ChannelStore

__all__ = ["ChannelSink", "ChannelStore", "ChannelUpdate"]
