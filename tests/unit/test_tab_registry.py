"""
Unit tests for TabRegistry primitives and invariants.
"""
import pytest

from tab_management import Tab, TabKind, TabRegistry, TabSource


def make_home():
    return Tab(id="dashboard", kind=TabKind.DASHBOARD, path="/", title="Dashboard",
               is_temporary=False, pinned=True, last_accessed_at=0.0)


def make_tab(tab_id: str, **overrides):
    fields = dict(id=tab_id, kind=TabKind.CLIENTS, path="/clients", title="Clients", last_accessed_at=0.0)
    fields.update(overrides)
    return Tab(**fields)


@pytest.fixture
def registry(clock):
    return TabRegistry(make_home(), clock=clock)


class TestRegistryInitialState:
    def test_starts_with_home_tab_active(self, registry):
        """A new registry holds only the home tab, which is active"""
        assert len(registry) == 1
        assert registry.active_tab_id == "dashboard"
        assert registry.active_tab().pinned is True
        assert registry.home_id == "dashboard"

    def test_home_tab_must_be_pinned(self, clock):
        """The registry refuses a home tab without the pinned flag"""
        with pytest.raises(ValueError):
            TabRegistry(make_tab("not-home"), clock=clock)


class TestRegistryInsert:
    def test_insert_appends_in_order(self, registry):
        """Inserted tabs keep strip order"""
        assert registry.insert(make_tab("a")) is True
        assert registry.insert(make_tab("b")) is True
        assert [tab.id for tab in registry.all()] == ["dashboard", "a", "b"]

    def test_second_home_tab_is_rejected(self, registry):
        """Inserting another pinned home tab is a no-op"""
        other_home = make_tab("home2", pinned=True, is_temporary=False)
        assert registry.insert(other_home) is False
        assert len(registry) == 1

    def test_duplicate_id_is_rejected(self, registry):
        """Two tabs cannot share an id"""
        registry.insert(make_tab("a"))
        assert registry.insert(make_tab("a", title="Other")) is False
        assert registry.by_id("a").title == "Clients"


class TestRegistryReplace:
    def test_replace_keeps_identity(self, registry):
        """replace changes fields in place and keeps the id and position"""
        registry.insert(make_tab("a"))
        assert registry.replace("a", kind=TabKind.CLIENT, path="/clients/1", title="ACME", entity_id="1") is True
        tab = registry.by_id("a")
        assert (tab.kind, tab.path, tab.title, tab.entity_id) == (TabKind.CLIENT, "/clients/1", "ACME", "1")
        assert registry.index_of("a") == 1

    def test_replace_accepts_raw_enum_values(self, registry):
        """Kinds and sources given as strings are coerced"""
        registry.insert(make_tab("a"))
        registry.replace("a", kind="invoices", opened_by="llm")
        tab = registry.by_id("a")
        assert tab.kind is TabKind.INVOICES
        assert tab.opened_by is TabSource.LLM

    def test_replace_cannot_change_id_or_pinned(self, registry):
        """id and the home flag are not replaceable"""
        registry.insert(make_tab("a"))
        assert registry.replace("a", id="b") is False
        assert registry.replace("a", pinned=True) is False
        assert registry.by_id("a").pinned is False

    def test_home_tab_stays_permanent(self, registry):
        """The home tab cannot be made temporary or dirty"""
        assert registry.replace("dashboard", is_temporary=True) is False
        assert registry.replace("dashboard", is_dirty=True) is False
        assert registry.by_id("dashboard").is_temporary is False

    def test_replace_unknown_tab_is_noop(self, registry):
        assert registry.replace("missing", title="x") is False

    def test_replace_unknown_field_raises(self, registry):
        """A field Tab does not have is a programming error"""
        with pytest.raises(TypeError):
            registry.replace("dashboard", colour="red")

    def test_replace_without_change_reports_false(self, registry):
        registry.insert(make_tab("a"))
        assert registry.replace("a", title="Clients") is False


class TestRegistryRemove:
    def test_remove_home_is_rejected(self, registry):
        """The home tab can never be removed"""
        assert registry.remove("dashboard") is False
        assert "dashboard" in registry

    def test_remove_unknown_is_noop(self, registry):
        assert registry.remove("missing") is False

    def test_removing_active_tab_falls_back_to_home(self, registry):
        """active_tab_id never dangles"""
        registry.insert(make_tab("a"))
        registry.set_active("a")
        assert registry.remove("a") is True
        assert registry.active_tab_id == "dashboard"


class TestRegistryActivation:
    def test_set_active_stamps_last_access(self, registry, clock):
        """Activation updates last_accessed_at from the clock"""
        registry.insert(make_tab("a"))
        registry.set_active("a")
        assert registry.by_id("a").last_accessed_at == clock.now

    def test_set_active_without_touch(self, registry):
        registry.insert(make_tab("a", last_accessed_at=5.0))
        registry.set_active("a", touch=False)
        assert registry.active_tab_id == "a"
        assert registry.by_id("a").last_accessed_at == 5.0

    def test_set_active_unknown_is_noop(self, registry):
        assert registry.set_active("missing") is False
        assert registry.active_tab_id == "dashboard"


class TestRegistryReadsAreCopies:
    def test_mutating_returned_tab_does_not_touch_registry(self, registry):
        """Readers cannot bypass the mutation API"""
        registry.insert(make_tab("a"))
        tab = registry.by_id("a")
        tab.title = "Hacked"
        assert registry.by_id("a").title == "Clients"


class TestRegistryReorder:
    def test_reorder_moves_tab(self, registry):
        registry.insert(make_tab("a"))
        registry.insert(make_tab("b"))
        assert registry.reorder(2, 0) is True
        assert [tab.id for tab in registry.all()] == ["b", "dashboard", "a"]

    def test_reorder_out_of_range_is_noop(self, registry):
        registry.insert(make_tab("a"))
        assert registry.reorder(0, 5) is False
        assert registry.reorder(1, 1) is False


class TestRegistrySubscriptions:
    def test_listener_sees_every_effective_mutation(self, registry):
        """Each effective mutation notifies once, in call order"""
        seen = []
        registry.subscribe(lambda reg: seen.append(len(reg)))
        registry.insert(make_tab("a"))
        registry.set_active("a")
        registry.remove("a")
        registry.remove("dashboard")  # rejected, no notification
        assert seen == [2, 2, 1]

    def test_unsubscribe_stops_notifications(self, registry):
        seen = []
        unsubscribe = registry.subscribe(lambda reg: seen.append(reg.active_tab_id))
        unsubscribe()
        registry.insert(make_tab("a"))
        assert seen == []
