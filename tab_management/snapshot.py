"""
Tab snapshots - the tab list plus the active id, for session restore.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from error_handling import SnapshotError

from .tab_info import Tab, TabSource
from .tab_kinds import TabKind


class TabRecord(BaseModel):
    """Serialized form of a Tab"""

    id: str = Field(min_length=1)
    kind: TabKind
    path: str = Field(min_length=1)
    title: str
    entity_id: Optional[str] = None
    is_temporary: bool = True
    is_dirty: bool = False
    pinned: bool = False
    opened_by: TabSource = TabSource.USER
    last_accessed_at: float = 0.0

    @classmethod
    def from_tab(cls, tab: Tab) -> TabRecord:
        return cls(**tab.to_dict())

    def to_tab(self) -> Tab:
        return Tab(**self.model_dump())


class TabsSnapshot(BaseModel):
    """Everything needed to rebuild a registry"""

    tabs: List[TabRecord] = Field(default_factory=list)
    active_tab_id: Optional[str] = None

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, raw: str) -> TabsSnapshot:
        """
        Parse a snapshot produced by to_json.

        Raises:
            SnapshotError: if the payload is not a valid snapshot
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise SnapshotError(f"Invalid tab snapshot: {e}", operation="restore", payload=raw)


def repair_snapshot(snapshot: TabsSnapshot, home: Tab) -> Tuple[List[Tab], str, bool]:
    """
    Make a snapshot satisfy the registry invariants.

    - duplicate ids are dropped (first one wins)
    - the home tab is added in first position when missing
    - only the configured home tab keeps the pinned flag; it is never temporary or dirty
    - an unknown active id falls back to the home tab

    Args:
        snapshot: Parsed snapshot
        home: The configured home tab

    Returns:
        (tabs in strip order, active tab id, whether anything was repaired)
    """
    repaired = False
    tabs: List[Tab] = []
    seen = set()

    for record in snapshot.tabs:
        if record.id in seen:
            repaired = True
            continue
        seen.add(record.id)
        tab = record.to_tab()
        if tab.id == home.id:
            if not tab.pinned or tab.is_temporary or tab.is_dirty:
                repaired = True
            tab.pinned = True
            tab.is_temporary = False
            tab.is_dirty = False
        elif tab.pinned:
            tab.pinned = False
            tab.is_temporary = False
            repaired = True
        tabs.append(tab)

    if home.id not in seen:
        tabs.insert(0, home)
        repaired = True

    active_id = snapshot.active_tab_id
    if active_id not in {tab.id for tab in tabs}:
        active_id = home.id
        repaired = True

    return tabs, active_id, repaired
