"""
Event log for the workspace tab manager.

Every tab operation reports what it did through an EventLogger. Events are
kept in a bounded history, handed to registered callbacks and, in debug
mode, printed with rich. Nothing in here may raise into a tab operation.
"""
from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional
from dataclasses import dataclass, field
from datetime import datetime
import time

from rich import print as rprint
from rich.markup import escape


class EventType(str, Enum):
    """Everything the tab manager reports"""
    # Tab lifecycle events
    TAB_OPENED = "tab_opened"
    TAB_REPLACED = "tab_replaced"
    TAB_ACTIVATED = "tab_activated"
    TAB_PINNED = "tab_pinned"
    TAB_UNPINNED = "tab_unpinned"
    TAB_CLOSED = "tab_closed"
    TAB_CLOSE_REFUSED = "tab_close_refused"
    TAB_EVICTED = "tab_evicted"

    # In-place field changes
    TAB_DIRTY_CHANGED = "tab_dirty_changed"
    TAB_TITLE_CHANGED = "tab_title_changed"
    TAB_REORDERED = "tab_reordered"

    # Workspace events
    REFRESH_TRIGGERED = "refresh_triggered"
    SNAPSHOT_RESTORED = "snapshot_restored"

    # System events
    SYSTEM_INFO = "system_info"
    SYSTEM_WARNING = "system_warning"
    SYSTEM_ERROR = "system_error"
    SYSTEM_DEBUG = "system_debug"


EventCallback = Callable[["TabEvent"], None]


@dataclass
class TabEvent:
    """One reported tab operation"""
    event_type: EventType
    message: str
    timestamp: float = field(default_factory=time.time)
    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def tab_id(self) -> Optional[str]:
        return self.details.get("tab_id")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type.value,
            "message": self.message,
            "timestamp": self.timestamp,
            "timestamp_iso": datetime.fromtimestamp(self.timestamp).isoformat(),
            "level": self.level,
            "details": dict(self.details),
        }


class EventLogger:
    """
    Records tab events and fans them out to callbacks.

    Debug mode echoes each event to the console; otherwise the logger is
    silent and only feeds history and callbacks.
    """

    LEVEL_STYLES = {
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARNING": "yellow",
        "ERROR": "bold red",
    }

    def __init__(self, debug_mode: bool = False, max_history: int = 1000):
        self.debug_mode = debug_mode
        self._callbacks: List[EventCallback] = []
        self._history: Deque[TabEvent] = deque(maxlen=max_history)

    def register_callback(self, callback: EventCallback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unregister_callback(self, callback: EventCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    @property
    def history(self) -> List[TabEvent]:
        """Events emitted so far, oldest first"""
        return list(self._history)

    def events_of(self, event_type: EventType) -> List[TabEvent]:
        return [event for event in self._history if event.event_type == event_type]

    def events_for_tab(self, tab_id: str) -> List[TabEvent]:
        """Everything that happened to one tab, oldest first"""
        return [event for event in self._history if event.tab_id == tab_id]

    def clear_history(self) -> None:
        self._history.clear()

    def _dispatch(self, event: TabEvent) -> None:
        self._history.append(event)

        if self.debug_mode:
            try:
                self._print_event(event)
            except Exception:
                pass  # console output is best effort

        for callback in list(self._callbacks):
            try:
                callback(event)
            except Exception:
                pass  # a broken subscriber must not fail the tab operation

    def _print_event(self, event: TabEvent) -> None:
        style = self.LEVEL_STYLES.get(event.level, "white")
        rprint(f"[{style}]{event.level:7}[/{style}] {escape(event.message)}")

        for key, value in event.details.items():
            if value is not None and isinstance(value, (str, int, float, bool)):
                rprint(f"   [dim]{key}:[/dim] {escape(str(value))}")

    def emit(self, event_type: EventType, message: str, level: str = "INFO", **details) -> None:
        """Record and dispatch one event. Never raises."""
        self._dispatch(TabEvent(event_type=event_type, message=message, level=level, details=details))

    # Convenience methods
    def tab_opened(self, tab_id: str, kind: str, path: str = None, source: str = None, **details):
        msg = f"Opened tab {tab_id} ({kind})"
        if path:
            msg += f" - {path}"
        self.emit(EventType.TAB_OPENED, msg, "INFO", tab_id=tab_id, kind=kind, path=path, source=source, **details)

    def tab_replaced(self, tab_id: str, kind: str, path: str = None, previous_path: str = None, source: str = None, **details):
        msg = f"Navigated tab {tab_id} in place to {kind}"
        if path:
            msg += f" - {path}"
        self.emit(EventType.TAB_REPLACED, msg, "INFO",
                  tab_id=tab_id, kind=kind, path=path, previous_path=previous_path, source=source, **details)

    def tab_activated(self, tab_id: str, previous_tab_id: str = None, **details):
        self.emit(EventType.TAB_ACTIVATED, f"Switched to tab: {tab_id}", "DEBUG",
                  tab_id=tab_id, previous_tab_id=previous_tab_id, **details)

    def tab_pinned(self, tab_id: str, **details):
        self.emit(EventType.TAB_PINNED, f"Pinned tab: {tab_id}", "INFO", tab_id=tab_id, **details)

    def tab_unpinned(self, tab_id: str, **details):
        self.emit(EventType.TAB_UNPINNED, f"Unpinned tab: {tab_id}", "INFO", tab_id=tab_id, **details)

    def tab_closed(self, tab_id: str, kind: str = None, **details):
        msg = f"Closed tab: {tab_id}"
        if kind:
            msg += f" ({kind})"
        self.emit(EventType.TAB_CLOSED, msg, "INFO", tab_id=tab_id, kind=kind, **details)

    def tab_close_refused(self, tab_id: str, reason: str, **details):
        self.emit(EventType.TAB_CLOSE_REFUSED, f"Refused to close tab {tab_id}: {reason}", "WARNING",
                  tab_id=tab_id, reason=reason, **details)

    def tab_evicted(self, tab_id: str, last_accessed_at: float = None, **details):
        self.emit(EventType.TAB_EVICTED, f"Evicted temporary tab: {tab_id}", "INFO",
                  tab_id=tab_id, last_accessed_at=last_accessed_at, **details)

    def tab_dirty_changed(self, tab_id: str, dirty: bool, **details):
        state = "unsaved changes" if dirty else "clean"
        self.emit(EventType.TAB_DIRTY_CHANGED, f"Tab {tab_id} is now {state}", "DEBUG",
                  tab_id=tab_id, dirty=dirty, **details)

    def tab_title_changed(self, tab_id: str, title: str, **details):
        self.emit(EventType.TAB_TITLE_CHANGED, f"Tab {tab_id} renamed to '{title}'", "DEBUG",
                  tab_id=tab_id, title=title, **details)

    def tab_reordered(self, tab_id: str, from_index: int, to_index: int, **details):
        self.emit(EventType.TAB_REORDERED, f"Moved tab {tab_id} from {from_index} to {to_index}", "DEBUG",
                  tab_id=tab_id, from_index=from_index, to_index=to_index, **details)

    def refresh_triggered(self, entity_type: str, count: int, **details):
        self.emit(EventType.REFRESH_TRIGGERED, f"Refresh requested for {entity_type} (#{count})", "DEBUG",
                  entity_type=entity_type, count=count, **details)

    def snapshot_restored(self, tab_count: int, active_tab_id: str, repaired: bool = False, **details):
        msg = f"Restored {tab_count} tab(s), active {active_tab_id}"
        if repaired:
            msg += " (repaired)"
        self.emit(EventType.SNAPSHOT_RESTORED, msg, "INFO",
                  tab_count=tab_count, active_tab_id=active_tab_id, repaired=repaired, **details)

    def system_info(self, message: str, **details):
        self.emit(EventType.SYSTEM_INFO, message, "INFO", **details)

    def system_warning(self, message: str, **details):
        self.emit(EventType.SYSTEM_WARNING, message, "WARNING", **details)

    def system_error(self, message: str, error: Exception = None, **details):
        msg = message
        if error:
            msg += f" - {str(error)}"
        self.emit(EventType.SYSTEM_ERROR, msg, "ERROR", error=str(error) if error else None, **details)

    def system_debug(self, message: str, **details):
        self.emit(EventType.SYSTEM_DEBUG, message, "DEBUG", **details)


# Process-wide logger used by managers created without one
_default_logger: Optional[EventLogger] = None


def get_event_logger() -> EventLogger:
    global _default_logger
    if _default_logger is None:
        _default_logger = EventLogger()
    return _default_logger


def set_event_logger(logger: EventLogger) -> None:
    """Replace the process-wide logger (e.g. one already wired to a UI)"""
    global _default_logger
    _default_logger = logger
