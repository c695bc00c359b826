"""
Utility modules for the tab manager.
"""
from .event_logger import EventLogger, EventType, TabEvent, get_event_logger, set_event_logger

__all__ = ["EventLogger", "EventType", "TabEvent", "get_event_logger", "set_event_logger"]
