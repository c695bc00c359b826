"""
TabRegistry - the ordered tab collection and the active pointer.
"""
import time
from dataclasses import fields
from typing import Callable, Dict, Iterator, List, Optional

from .tab_info import Tab, TabSource
from .tab_kinds import TabKind

Listener = Callable[["TabRegistry"], None]

# Fields replace() may never touch
_IMMUTABLE_FIELDS = frozenset({"id", "pinned"})
_TAB_FIELDS = frozenset(f.name for f in fields(Tab))


class TabRegistry:
    """
    Owns every tab of a workspace session.

    Guarantees, after every call:
    - exactly one home tab exists and it is never removed
    - active_tab_id names a tab in the collection

    Mutations return True when they changed something and False when they
    were rejected or had nothing to do. Listeners are notified after every
    effective mutation, in call order.
    """

    def __init__(self, home: Tab, clock: Optional[Callable[[], float]] = None):
        """
        Args:
            home: The permanent home tab, becomes the initial active tab
            clock: Time source for last_accessed_at stamps
        """
        if not home.pinned:
            raise ValueError("home tab must be flagged pinned")
        home.is_temporary = False
        home.is_dirty = False
        self._clock = clock or time.time
        self._tabs: List[Tab] = [home]
        self._index: Dict[str, Tab] = {home.id: home}
        self._home_id = home.id
        self._active_tab_id = home.id
        self._listeners: List[Listener] = []

    # Read accessors
    @property
    def home_id(self) -> str:
        return self._home_id

    @property
    def active_tab_id(self) -> str:
        return self._active_tab_id

    def by_id(self, tab_id: str) -> Optional[Tab]:
        tab = self._index.get(tab_id)
        return tab.copy() if tab else None

    def all(self) -> List[Tab]:
        """Tabs in strip order (copies)"""
        return [tab.copy() for tab in self._tabs]

    def active_tab(self) -> Tab:
        return self._index[self._active_tab_id].copy()

    def temporary_tabs(self) -> List[Tab]:
        return [tab.copy() for tab in self._tabs if tab.is_temporary and not tab.pinned]

    def index_of(self, tab_id: str) -> int:
        for position, tab in enumerate(self._tabs):
            if tab.id == tab_id:
                return position
        return -1

    def now(self) -> float:
        return self._clock()

    def __len__(self) -> int:
        return len(self._tabs)

    def __contains__(self, tab_id: object) -> bool:
        return tab_id in self._index

    def __iter__(self) -> Iterator[Tab]:
        return iter(self.all())

    # Subscriptions
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with this registry after each mutation.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # Primitive mutations
    def insert(self, tab: Tab) -> bool:
        """Append a tab. A second home tab or a duplicate id is rejected."""
        if tab.pinned or tab.id in self._index:
            return False
        self._tabs.append(tab)
        self._index[tab.id] = tab
        self._notify()
        return True

    def replace(self, tab_id: str, **changes) -> bool:
        """
        Update fields of a tab in place, keeping its identity.

        id and pinned cannot be changed, and the home tab stays non-temporary.

        Raises:
            TypeError: for a field name Tab does not have
        """
        unknown = set(changes) - _TAB_FIELDS
        if unknown:
            raise TypeError(f"Unknown tab field(s): {', '.join(sorted(unknown))}")

        tab = self._index.get(tab_id)
        if tab is None or _IMMUTABLE_FIELDS & set(changes):
            return False
        if tab.pinned and (changes.get("is_temporary") or changes.get("is_dirty")):
            return False

        if "kind" in changes:
            changes["kind"] = TabKind(changes["kind"])
        if "opened_by" in changes:
            changes["opened_by"] = TabSource(changes["opened_by"])

        changed = False
        for name, value in changes.items():
            if getattr(tab, name) != value:
                setattr(tab, name, value)
                changed = True
        if changed:
            self._notify()
        return changed

    def remove(self, tab_id: str) -> bool:
        """
        Remove a tab. The home tab cannot be removed.

        Removing the active tab hands activation to the home tab; callers
        wanting a different successor activate it before removing.
        """
        if tab_id == self._home_id or tab_id not in self._index:
            return False
        tab = self._index.pop(tab_id)
        self._tabs.remove(tab)
        if self._active_tab_id == tab_id:
            self._active_tab_id = self._home_id
            self._index[self._home_id].last_accessed_at = self._clock()
        self._notify()
        return True

    def set_active(self, tab_id: str, touch: bool = True) -> bool:
        """
        Make a tab active and stamp its last_accessed_at.

        Args:
            tab_id: Tab to activate
            touch: Stamp last_accessed_at (False when restoring a snapshot)
        """
        tab = self._index.get(tab_id)
        if tab is None:
            return False
        self._active_tab_id = tab_id
        if touch:
            tab.last_accessed_at = self._clock()
        self._notify()
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move the tab at from_index to to_index in the strip."""
        size = len(self._tabs)
        if not (0 <= from_index < size and 0 <= to_index < size) or from_index == to_index:
            return False
        tab = self._tabs.pop(from_index)
        self._tabs.insert(to_index, tab)
        self._notify()
        return True
