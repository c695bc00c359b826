"""
EvictionPolicy - keep the number of ephemeral tabs bounded.
"""
from typing import List

from utils.event_logger import EventLogger

from .tab_info import Tab
from .tab_registry import TabRegistry


def counts_toward_cap(tab: Tab) -> bool:
    """Temporary, clean, non-home tabs are the ones the cap limits"""
    return tab.is_temporary and not tab.is_dirty and not tab.pinned


class EvictionPolicy:
    """
    Removes least-recently-used temporary tabs once the cap is exceeded.

    The active tab, dirty tabs and pinned tabs are never evicted.
    """

    def __init__(self, registry: TabRegistry, event_logger: EventLogger, max_temporary_tabs: int = 5):
        if max_temporary_tabs < 1:
            raise ValueError("max_temporary_tabs must be at least 1")
        self.registry = registry
        self.event_logger = event_logger
        self.max_temporary_tabs = max_temporary_tabs

    def eviction_candidates(self) -> List[Tab]:
        """Evictable tabs, oldest first (strip order breaks ties)"""
        active_id = self.registry.active_tab_id
        eligible = [tab for tab in self.registry.all() if counts_toward_cap(tab) and tab.id != active_id]
        return sorted(eligible, key=lambda tab: tab.last_accessed_at)

    def cleanup_temporary_tabs(self) -> List[str]:
        """
        Evict the oldest candidates until the cap holds.

        Returns:
            Ids of evicted tabs, in eviction order
        """
        count = sum(1 for tab in self.registry.all() if counts_toward_cap(tab))
        evicted: List[str] = []

        for tab in self.eviction_candidates():
            if count <= self.max_temporary_tabs:
                break
            if self.registry.remove(tab.id):
                count -= 1
                evicted.append(tab.id)
                self.event_logger.tab_evicted(tab_id=tab.id, last_accessed_at=tab.last_accessed_at, kind=tab.kind.value)

        return evicted
