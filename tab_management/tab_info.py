"""
Tab - a navigation entry in the workspace, plus the inputs used to open one.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Any, Optional
import time
import uuid

from pydantic import BaseModel, ConfigDict, Field

from .tab_kinds import TabKind


class TabSource(str, Enum):
    """Who triggered a navigation"""
    SIDEBAR = "sidebar"  # Fixed navigation link
    USER = "user"  # Click inside tab content
    LLM = "llm"  # Assistant-driven action


def new_tab_id() -> str:
    return f"tab_{uuid.uuid4().hex[:12]}"


@dataclass
class Tab:
    """
    A navigation entry shown in the tab strip.

    Attributes:
        id: Unique identifier, stable for the tab's lifetime
        kind: Page category, drives icon lookup
        path: Logical address mirroring the browser URL
        title: Display title, may change once the record loads
        entity_id: Record shown by the tab (None for list and creation pages)
        is_temporary: Ephemeral tab, may be replaced or evicted
        is_dirty: Holds unsaved input
        pinned: Permanent home tab flag, never closable
        opened_by: Source that created or last navigated the tab
        last_accessed_at: Timestamp of the last activation
    """
    id: str
    kind: TabKind
    path: str
    title: str
    entity_id: Optional[str] = None
    is_temporary: bool = True
    is_dirty: bool = False
    pinned: bool = False
    opened_by: TabSource = TabSource.USER
    last_accessed_at: float = field(default_factory=time.time)

    def __post_init__(self):
        if not self.id:
            raise ValueError("id is required")
        if not self.path:
            raise ValueError("path is required")
        self.kind = TabKind(self.kind)
        self.opened_by = TabSource(self.opened_by)

    @property
    def is_home(self) -> bool:
        return self.pinned

    @property
    def is_protected(self) -> bool:
        """Pinned, dirty or home tabs may not be closed"""
        return self.pinned or self.is_dirty or not self.is_temporary

    def copy(self) -> "Tab":
        return Tab(**{f.name: getattr(self, f.name) for f in fields(self)})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary"""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "path": self.path,
            "title": self.title,
            "entity_id": self.entity_id,
            "is_temporary": self.is_temporary,
            "is_dirty": self.is_dirty,
            "pinned": self.pinned,
            "opened_by": self.opened_by.value,
            "last_accessed_at": self.last_accessed_at,
        }


class TabDescriptor(BaseModel):
    """What a navigation wants to show: enough to build or retarget a tab."""

    model_config = ConfigDict(frozen=True)

    kind: TabKind = Field(description="Page category")
    path: str = Field(min_length=1, description="Logical address of the page")
    title: str = Field(description="Initial display title")
    entity_id: Optional[str] = Field(default=None, description="Record shown by the page, if any")


class OpenTabOptions(BaseModel):
    """
    Canonical form of open_tab's second argument.

    The legacy boolean call form maps to pin=True/False; the options form maps
    to source/force_new.
    """

    model_config = ConfigDict(frozen=True)

    source: TabSource = Field(default=TabSource.USER, description="Who triggered the navigation")
    force_new: bool = Field(default=False, description="Explicit 'open in new tab' gesture")
    pin: bool = Field(default=False, description="Open the tab already pinned (legacy call form)")
