"""
Unit tests for the open decision rules and option normalization.
"""
import pytest

from error_handling import InvalidDescriptorError, InvalidOpenOptionsError
from tab_management import (
    OpenAction,
    OpenTabOptions,
    Tab,
    TabKind,
    TabSource,
    decide_open_action,
    normalize_open_options,
)
from utils.event_logger import EventType


def temp_tab(**overrides):
    fields = dict(id="t", kind=TabKind.CLIENTS, path="/clients", title="Clients")
    fields.update(overrides)
    return Tab(**fields)


class TestNormalizeOpenOptions:
    def test_none_uses_default_source(self):
        assert normalize_open_options(None) == OpenTabOptions(source=TabSource.USER)
        assert normalize_open_options(None, TabSource.SIDEBAR).source is TabSource.SIDEBAR

    def test_legacy_true_means_pinned(self):
        """The boolean call form sets pin, never force_new"""
        options = normalize_open_options(True)
        assert options.pin is True
        assert options.force_new is False

    def test_legacy_false_is_plain_user_navigation(self):
        assert normalize_open_options(False) == OpenTabOptions(source=TabSource.USER, pin=False)

    def test_mapping_with_camel_case_keys(self):
        options = normalize_open_options({"source": "user", "forceNew": True})
        assert options == OpenTabOptions(source=TabSource.USER, force_new=True)

    def test_bare_source_string(self):
        assert normalize_open_options("llm").source is TabSource.LLM

    def test_options_instance_passes_through(self):
        options = OpenTabOptions(source=TabSource.SIDEBAR)
        assert normalize_open_options(options) is options

    @pytest.mark.parametrize("bad", [42, 1.5, ["sidebar"], object()])
    def test_unsupported_shapes_raise(self, bad):
        with pytest.raises(InvalidOpenOptionsError):
            normalize_open_options(bad)

    def test_unknown_source_raises(self):
        with pytest.raises(InvalidOpenOptionsError):
            normalize_open_options({"source": "robot"})
        with pytest.raises(InvalidOpenOptionsError):
            normalize_open_options("robot")


class TestDecideOpenAction:
    @pytest.mark.parametrize("source", [TabSource.SIDEBAR, TabSource.USER])
    def test_temporary_active_is_replaced(self, source):
        """R1/R2: a clean temporary active tab is retargeted"""
        assert decide_open_action(temp_tab(), OpenTabOptions(source=source)) is OpenAction.REPLACE_ACTIVE

    @pytest.mark.parametrize("source", [TabSource.SIDEBAR, TabSource.USER])
    def test_pinned_active_gets_new_tab(self, source):
        """R1/R2: a pinned active tab is never retargeted"""
        pinned = temp_tab(is_temporary=False)
        assert decide_open_action(pinned, OpenTabOptions(source=source)) is OpenAction.INSERT_NEW

    def test_home_active_gets_new_tab(self):
        home = temp_tab(id="dashboard", kind=TabKind.DASHBOARD, path="/", is_temporary=False, pinned=True)
        assert decide_open_action(home, OpenTabOptions(source=TabSource.SIDEBAR)) is OpenAction.INSERT_NEW

    def test_force_new_always_inserts(self):
        """R2b"""
        assert decide_open_action(temp_tab(), OpenTabOptions(force_new=True)) is OpenAction.INSERT_NEW

    @pytest.mark.parametrize("active", [temp_tab(), temp_tab(is_temporary=False), temp_tab(is_dirty=True)])
    def test_llm_always_inserts(self, active):
        """R4"""
        assert decide_open_action(active, OpenTabOptions(source=TabSource.LLM)) is OpenAction.INSERT_NEW

    def test_dirty_active_is_not_replaced(self):
        """Unsaved input is never silently discarded"""
        dirty = temp_tab(is_dirty=True)
        assert decide_open_action(dirty, OpenTabOptions(source=TabSource.SIDEBAR)) is OpenAction.INSERT_NEW

    def test_legacy_pin_inserts(self):
        assert decide_open_action(temp_tab(), OpenTabOptions(pin=True)) is OpenAction.INSERT_NEW


class TestOpenTabThroughManager:
    def test_descriptor_mapping_is_accepted(self, manager):
        """Plain mappings, including camelCase keys, work as descriptors"""
        tab = manager.open_tab({"type": "client", "path": "/clients/7", "title": "ACME", "entityId": "7"},
                               {"source": "llm"})
        assert tab.kind is TabKind.CLIENT
        assert tab.entity_id == "7"

    def test_invalid_descriptor_raises(self, manager):
        with pytest.raises(InvalidDescriptorError):
            manager.open_tab({"kind": "spaceship", "path": "/x", "title": "X"})
        with pytest.raises(InvalidDescriptorError):
            manager.open_tab({"kind": "clients", "path": "", "title": "X"})
        with pytest.raises(InvalidDescriptorError):
            manager.open_tab("clients")

    def test_invalid_options_leave_registry_untouched(self, manager, clients):
        with pytest.raises(InvalidOpenOptionsError):
            manager.open_tab(clients, 3)
        assert len(manager.tabs) == 1

    def test_replace_logs_previous_path(self, manager, clients, invoices, event_logger):
        manager.open_tab(clients, {"source": "sidebar"})
        manager.open_tab(invoices, {"source": "sidebar"})
        replaced = event_logger.events_of(EventType.TAB_REPLACED)
        assert len(replaced) == 1
        assert replaced[0].details["previous_path"] == "/clients"
        assert replaced[0].details["path"] == "/invoices"

    def test_default_source_from_config(self, clock, event_logger, clients, invoices):
        """Calls without options use the configured default source"""
        from tab_config import NavigationConfig, TabManagerConfig
        from tab_management import TabManager

        manager = TabManager(
            config=TabManagerConfig(navigation=NavigationConfig(default_source="llm")),
            event_logger=event_logger,
            clock=clock,
        )
        manager.open_tab(clients)
        manager.open_tab(invoices)
        assert len(manager.tabs) == 3
        assert all(tab.opened_by is TabSource.LLM for tab in manager.tabs[1:])
