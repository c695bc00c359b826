"""
TabManager - public entry point for the workspace tab strip.
"""
import time
from typing import Callable, List, Optional

from tab_config import HomeTabConfig, TabManagerConfig
from utils.event_logger import EventLogger, get_event_logger

from .close_guard import CloseGuard, CloseRefusal
from .eviction_policy import EvictionPolicy
from .open_policy import DescriptorInput, OpenOptionsInput, OpenPolicy
from .refresh_triggers import EntityType, RefreshTriggers
from .routes import descriptor_from_path
from .snapshot import TabRecord, TabsSnapshot, repair_snapshot
from .tab_info import Tab, TabSource
from .tab_kinds import TabKind
from .tab_registry import Listener, TabRegistry


def build_home_tab(home: HomeTabConfig, now: float) -> Tab:
    """The permanent dashboard tab described by the configuration"""
    return Tab(
        id=home.id,
        kind=TabKind.DASHBOARD,
        path=home.path,
        title=home.title,
        is_temporary=False,
        pinned=True,
        last_accessed_at=now,
    )


class TabManager:
    """
    Manages the workspace tabs and their lifecycle.

    Responsibilities:
    - Open tabs according to the navigation source (sidebar, user, llm)
    - Pin, rename and flag tabs as dirty
    - Keep temporary tabs under the eviction cap
    - Refuse to close protected tabs and pick the next active tab

    Every operation is synchronous and total: unknown ids and protected tabs
    turn into no-ops reported through the return value.
    """

    def __init__(
        self,
        config: Optional[TabManagerConfig] = None,
        event_logger: Optional[EventLogger] = None,
        clock: Optional[Callable[[], float]] = None,
        registry: Optional[TabRegistry] = None,
    ):
        """
        Initialize TabManager.

        Args:
            config: Manager configuration (defaults apply when omitted)
            event_logger: Event sink, the global event logger by default
            clock: Time source for last_accessed_at
            registry: Existing registry to manage (a fresh one holding only
                the home tab is created otherwise)
        """
        self.config = config or TabManagerConfig()
        self.event_logger = event_logger or get_event_logger()
        if self.config.logging.debug_mode:
            self.event_logger.debug_mode = True
        self.clock = clock or time.time

        self.registry = registry or TabRegistry(build_home_tab(self.config.home, self.clock()), clock=self.clock)
        self.open_policy = OpenPolicy(
            self.registry,
            self.event_logger,
            default_source=TabSource(self.config.navigation.default_source),
        )
        self.eviction_policy = EvictionPolicy(
            self.registry,
            self.event_logger,
            max_temporary_tabs=self.config.eviction.max_temporary_tabs,
        )
        self.close_guard = CloseGuard(self.registry, self.event_logger)
        self.refresh_triggers = RefreshTriggers(self.event_logger)

    # State accessors
    @property
    def tabs(self) -> List[Tab]:
        return self.registry.all()

    @property
    def active_tab_id(self) -> str:
        return self.registry.active_tab_id

    def get_active_tab(self) -> Tab:
        return self.registry.active_tab()

    def get_tab(self, tab_id: str) -> Optional[Tab]:
        return self.registry.by_id(tab_id)

    def get_temporary_tabs_count(self) -> int:
        """Number of temporary tabs (the home tab never counts)"""
        return len(self.registry.temporary_tabs())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener(registry) after every change; returns an unsubscribe function"""
        return self.registry.subscribe(listener)

    # Navigation
    def open_tab(self, descriptor: DescriptorInput, options: OpenOptionsInput = None) -> Tab:
        """
        Open a page in the workspace.

        Args:
            descriptor: TabDescriptor or mapping with kind, path, title, entity_id
            options: {"source": ..., "force_new": ...}, a bare source, or the
                legacy boolean meaning "open pinned"

        Returns:
            The opened or retargeted tab
        """
        tab, _ = self.open_policy.open(descriptor, options)
        self.eviction_policy.cleanup_temporary_tabs()
        return tab

    def open_path(self, path: str, options: OpenOptionsInput = None) -> Optional[Tab]:
        """Open whatever page a browser path points to; None for unknown paths"""
        descriptor = descriptor_from_path(path)
        if descriptor is None:
            self.event_logger.system_warning(f"No tab route for path: {path}", path=path)
            return None
        return self.open_tab(descriptor, options)

    def set_active_tab(self, tab_id: str) -> bool:
        previous = self.registry.active_tab_id
        if not self.registry.set_active(tab_id):
            return False
        self.event_logger.tab_activated(tab_id=tab_id, previous_tab_id=previous)
        return True

    def cleanup_temporary_tabs(self) -> List[str]:
        return self.eviction_policy.cleanup_temporary_tabs()

    # Protection state
    def pin_tab(self, tab_id: str) -> bool:
        """Exempt a tab from replacement, eviction and closing until unpinned. Idempotent."""
        tab = self.registry.by_id(tab_id)
        if tab is None or not tab.is_temporary:
            return False
        self.registry.replace(tab_id, is_temporary=False)
        self.event_logger.tab_pinned(tab_id=tab_id)
        return True

    make_tab_permanent = pin_tab

    def unpin_tab(self, tab_id: str) -> bool:
        """Turn a user-pinned tab back into a temporary one. The home tab stays pinned."""
        tab = self.registry.by_id(tab_id)
        if tab is None or tab.pinned or tab.is_temporary:
            return False
        self.registry.replace(tab_id, is_temporary=True)
        self.event_logger.tab_unpinned(tab_id=tab_id)
        self.eviction_policy.cleanup_temporary_tabs()
        return True

    def set_tab_dirty(self, tab_id: str, dirty: bool) -> bool:
        if not self.registry.replace(tab_id, is_dirty=bool(dirty)):
            return False
        self.event_logger.tab_dirty_changed(tab_id=tab_id, dirty=bool(dirty))
        if not dirty:
            # a clean temporary tab counts toward the cap again
            self.eviction_policy.cleanup_temporary_tabs()
        return True

    def update_tab_title(self, tab_id: str, title: str) -> bool:
        if not self.registry.replace(tab_id, title=title):
            return False
        self.event_logger.tab_title_changed(tab_id=tab_id, title=title)
        return True

    def reorder_tabs(self, from_index: int, to_index: int) -> bool:
        tabs = self.registry.all()
        if not self.registry.reorder(from_index, to_index):
            return False
        self.event_logger.tab_reordered(tab_id=tabs[from_index].id, from_index=from_index, to_index=to_index)
        return True

    # Closing
    def close_refusal(self, tab_id: str) -> Optional[CloseRefusal]:
        """Why close_tab would refuse this tab (for UI feedback), None if closable"""
        return self.close_guard.close_refusal(tab_id)

    def close_tab(self, tab_id: str) -> bool:
        return self.close_guard.close_tab(tab_id)

    def close_all_temporary_tabs(self) -> List[str]:
        return self.close_guard.close_all_temporary_tabs()

    # Refresh triggers
    def trigger_refresh(self, entity_type: EntityType) -> int:
        return self.refresh_triggers.trigger(entity_type)

    def refresh_count(self, entity_type: EntityType) -> int:
        return self.refresh_triggers.count(entity_type)

    # Snapshots
    def snapshot(self) -> TabsSnapshot:
        return TabsSnapshot(
            tabs=[TabRecord.from_tab(tab) for tab in self.registry.all()],
            active_tab_id=self.registry.active_tab_id,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: TabsSnapshot,
        config: Optional[TabManagerConfig] = None,
        event_logger: Optional[EventLogger] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> "TabManager":
        """Rebuild a manager from a snapshot, repairing it where needed"""
        config = config or TabManagerConfig()
        clock = clock or time.time
        tabs, active_id, repaired = repair_snapshot(snapshot, build_home_tab(config.home, clock()))

        home_index = 0
        registry = TabRegistry(next(tab for tab in tabs if tab.pinned), clock=clock)
        for position, tab in enumerate(tabs):
            if tab.pinned:
                home_index = position
            else:
                registry.insert(tab)
        registry.reorder(0, home_index)
        registry.set_active(active_id, touch=False)

        restored = cls(config=config, event_logger=event_logger, clock=clock, registry=registry)
        restored.event_logger.snapshot_restored(tab_count=len(registry), active_tab_id=active_id, repaired=repaired)
        restored.eviction_policy.cleanup_temporary_tabs()
        return restored
