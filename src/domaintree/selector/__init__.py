"""
Owner-facing selector controller and its change notifications.
"""

from .controller import DomainSelector, TreeState
from .events import CHANGE, REBUILD, EventDispatcher

__all__ = ["CHANGE", "DomainSelector", "EventDispatcher", "REBUILD", "TreeState"]
