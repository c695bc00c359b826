"""
OpenPolicy - decides what a navigation request does to the tab strip.

Rules, evaluated against the current active tab:
- sidebar: retarget a temporary active tab in place, else open a new tab
- user: same as sidebar, unless force_new asks for a new tab
- llm: always open a new temporary tab
- legacy pin=True: always open a new pinned tab
A dirty active tab is never retargeted.
"""
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from error_handling import InvalidDescriptorError, InvalidOpenOptionsError
from utils.event_logger import EventLogger

from .tab_info import OpenTabOptions, Tab, TabDescriptor, TabSource, new_tab_id
from .tab_registry import TabRegistry

OpenOptionsInput = Union[None, bool, str, TabSource, Mapping[str, Any], OpenTabOptions]
DescriptorInput = Union[TabDescriptor, Mapping[str, Any]]

# camelCase keys accepted from UI payloads
_OPTION_ALIASES = {"forceNew": "force_new", "permanent": "pin"}
_DESCRIPTOR_ALIASES = {"type": "kind", "entityId": "entity_id"}


class OpenAction(str, Enum):
    """Outcome of the open decision"""
    REPLACE_ACTIVE = "replace_active"  # Retarget the active tab, same id
    INSERT_NEW = "insert_new"  # Append a new tab and activate it


def normalize_open_options(options: OpenOptionsInput, default_source: TabSource = TabSource.USER) -> OpenTabOptions:
    """
    Reduce every accepted call form to one OpenTabOptions.

    Accepted forms:
        None            -> default source
        bool            -> legacy form, True opens the tab pinned
        "llm"/TabSource -> source only
        dict            -> {"source", "force_new"/"forceNew", "pin"}
        OpenTabOptions  -> returned as is

    Raises:
        InvalidOpenOptionsError: for any other shape or invalid values
    """
    if isinstance(options, OpenTabOptions):
        return options
    if options is None:
        return OpenTabOptions(source=default_source)
    if isinstance(options, bool):
        return OpenTabOptions(source=default_source, pin=options)
    if isinstance(options, (str, TabSource)):
        try:
            return OpenTabOptions(source=TabSource(options))
        except ValueError:
            raise InvalidOpenOptionsError(f"Unknown navigation source: {options!r}", operation="open_tab", payload=options)
    if isinstance(options, Mapping):
        data = {_OPTION_ALIASES.get(key, key): value for key, value in options.items()}
        data.setdefault("source", default_source)
        try:
            return OpenTabOptions(**data)
        except (ValidationError, TypeError) as e:
            raise InvalidOpenOptionsError(f"Invalid open options: {e}", operation="open_tab", payload=options)
    raise InvalidOpenOptionsError(
        f"open_tab options must be a bool, a source or a mapping, got {type(options).__name__}",
        operation="open_tab",
        payload=options,
    )


def coerce_descriptor(descriptor: DescriptorInput) -> TabDescriptor:
    """Validate a descriptor given as a TabDescriptor or a plain mapping."""
    if isinstance(descriptor, TabDescriptor):
        return descriptor
    if isinstance(descriptor, Mapping):
        data = {_DESCRIPTOR_ALIASES.get(key, key): value for key, value in descriptor.items()}
        try:
            return TabDescriptor(**data)
        except ValidationError as e:
            raise InvalidDescriptorError(f"Invalid tab descriptor: {e}", operation="open_tab", payload=descriptor)
    raise InvalidDescriptorError(
        f"Tab descriptor must be a TabDescriptor or a mapping, got {type(descriptor).__name__}",
        operation="open_tab",
        payload=descriptor,
    )


def decide_open_action(active: Optional[Tab], options: OpenTabOptions) -> OpenAction:
    """
    Pure decision: replace the active tab in place or insert a new one.

    Args:
        active: Current active tab
        options: Normalized open options

    Returns:
        OpenAction to apply
    """
    if options.pin or options.force_new or options.source == TabSource.LLM:
        return OpenAction.INSERT_NEW
    if active is None or active.pinned or not active.is_temporary or active.is_dirty:
        return OpenAction.INSERT_NEW
    return OpenAction.REPLACE_ACTIVE


class OpenPolicy:
    """Applies open decisions to a registry."""

    def __init__(self, registry: TabRegistry, event_logger: EventLogger,
                 default_source: TabSource = TabSource.USER):
        self.registry = registry
        self.event_logger = event_logger
        self.default_source = TabSource(default_source)

    def open(self, descriptor: DescriptorInput, options: OpenOptionsInput = None) -> Tuple[Tab, OpenAction]:
        """
        Open a descriptor according to the rules above.

        Returns:
            (tab as it now stands, action taken)
        """
        target = coerce_descriptor(descriptor)
        normalized = normalize_open_options(options, self.default_source)
        active = self.registry.active_tab()
        action = decide_open_action(active, normalized)

        if action == OpenAction.REPLACE_ACTIVE:
            self.registry.replace(
                active.id,
                kind=target.kind,
                path=target.path,
                title=target.title,
                entity_id=target.entity_id,
                opened_by=normalized.source,
            )
            self.registry.set_active(active.id)
            self.event_logger.tab_replaced(
                tab_id=active.id,
                kind=target.kind.value,
                path=target.path,
                previous_path=active.path,
                source=normalized.source.value,
            )
            return self.registry.by_id(active.id), action

        tab = Tab(
            id=new_tab_id(),
            kind=target.kind,
            path=target.path,
            title=target.title,
            entity_id=target.entity_id,
            is_temporary=not normalized.pin,
            opened_by=normalized.source,
            last_accessed_at=self.registry.now(),
        )
        self.registry.insert(tab)
        self.registry.set_active(tab.id)
        self.event_logger.tab_opened(
            tab_id=tab.id,
            kind=tab.kind.value,
            path=tab.path,
            source=normalized.source.value,
            temporary=tab.is_temporary,
        )
        return self.registry.by_id(tab.id), action
