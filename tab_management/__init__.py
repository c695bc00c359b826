"""
Tab Management - workspace tab lifecycle.

Decides how navigation requests create, retarget, pin and evict tabs
depending on who triggered them, and protects pinned, dirty and home tabs.
"""
from .tab_kinds import TabKind, TAB_ICONS, icon_for
from .tab_info import Tab, TabSource, TabDescriptor, OpenTabOptions
from .tab_registry import TabRegistry
from .open_policy import OpenAction, OpenPolicy, decide_open_action, normalize_open_options
from .eviction_policy import EvictionPolicy
from .close_guard import CloseGuard, CloseRefusal
from .refresh_triggers import EntityType, RefreshTriggers
from .routes import descriptor_from_path, descriptor_for, path_for
from .snapshot import TabsSnapshot, TabRecord
from .tab_manager import TabManager

__all__ = [
    "TabKind", "TAB_ICONS", "icon_for",
    "Tab", "TabSource", "TabDescriptor", "OpenTabOptions",
    "TabRegistry",
    "OpenAction", "OpenPolicy", "decide_open_action", "normalize_open_options",
    "EvictionPolicy",
    "CloseGuard", "CloseRefusal",
    "EntityType", "RefreshTriggers",
    "descriptor_from_path", "descriptor_for", "path_for",
    "TabsSnapshot", "TabRecord",
    "TabManager",
]
