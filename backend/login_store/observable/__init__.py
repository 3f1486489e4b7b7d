"""Observable result delivery."""

from .dispatch import Dispatcher, ImmediateDispatcher, LoopDispatcher, SerialDispatcher
from .live_value import LiveValue, Subscription

__all__ = [
    "Dispatcher",
    "ImmediateDispatcher",
    "LoopDispatcher",
    "SerialDispatcher",
    "LiveValue",
    "Subscription",
]
