"""
CloseGuard - protect tabs from being closed and pick the next active tab.
"""
from enum import Enum
from typing import Iterable, List, Optional

from utils.event_logger import EventLogger

from .tab_registry import TabRegistry


class CloseRefusal(str, Enum):
    """Why a close request was turned down"""
    UNKNOWN = "unknown"  # No such tab
    HOME = "home"  # The permanent home tab
    PINNED = "pinned"  # Pinned by the user
    DIRTY = "dirty"  # Holds unsaved input


class CloseGuard:
    """
    Closes tabs that are safe to close.

    When the active tab goes away, activation falls back to the remaining tab
    with the greatest last_accessed_at (later strip position wins ties), which
    is the home tab when nothing else is left.
    """

    def __init__(self, registry: TabRegistry, event_logger: EventLogger):
        self.registry = registry
        self.event_logger = event_logger

    def close_refusal(self, tab_id: str) -> Optional[CloseRefusal]:
        """Reason close_tab would refuse this tab, or None if it may close"""
        tab = self.registry.by_id(tab_id)
        if tab is None:
            return CloseRefusal.UNKNOWN
        if tab.pinned:
            return CloseRefusal.HOME
        if not tab.is_temporary:
            return CloseRefusal.PINNED
        if tab.is_dirty:
            return CloseRefusal.DIRTY
        return None

    def fallback_tab_id(self, leaving: Iterable[str]) -> str:
        """Most recently accessed tab that survives the removal of `leaving`"""
        leaving_ids = set(leaving)
        best_id = self.registry.home_id
        best_time = None
        for tab in self.registry.all():
            if tab.id in leaving_ids:
                continue
            if best_time is None or tab.last_accessed_at >= best_time:
                best_id = tab.id
                best_time = tab.last_accessed_at
        return best_id

    def close_tab(self, tab_id: str) -> bool:
        """
        Close one tab unless it is unknown, home, pinned or dirty.

        Returns:
            True if the tab was removed
        """
        refusal = self.close_refusal(tab_id)
        if refusal is not None:
            if refusal != CloseRefusal.UNKNOWN:
                self.event_logger.tab_close_refused(tab_id=tab_id, reason=refusal.value)
            return False

        closing = self.registry.by_id(tab_id)
        self._remove_all([tab_id])
        self.event_logger.tab_closed(tab_id=tab_id, kind=closing.kind.value)
        return True

    def close_all_temporary_tabs(self) -> List[str]:
        """
        Close every temporary, clean tab. Home, pinned and dirty tabs stay.

        Returns:
            Ids of closed tabs
        """
        closing = [tab for tab in self.registry.all()
                   if tab.is_temporary and not tab.is_dirty and not tab.pinned]
        closed = self._remove_all([tab.id for tab in closing])
        for tab in closing:
            self.event_logger.tab_closed(tab_id=tab.id, kind=tab.kind.value, bulk=True)
        return closed

    def _remove_all(self, tab_ids: List[str]) -> List[str]:
        if self.registry.active_tab_id in tab_ids:
            self.registry.set_active(self.fallback_tab_id(tab_ids))
        return [tab_id for tab_id in tab_ids if self.registry.remove(tab_id)]
