"""
Unit tests for path to descriptor lookup.
"""
import pytest

from tab_management import TabKind, descriptor_for, descriptor_from_path, path_for
from tab_management.routes import ROUTES, normalize_path


class TestDescriptorFromPath:
    def test_list_page(self):
        descriptor = descriptor_from_path("/clients")
        assert descriptor.kind is TabKind.CLIENTS
        assert descriptor.path == "/clients"
        assert descriptor.entity_id is None

    def test_detail_page_carries_entity_id(self):
        descriptor = descriptor_from_path("/clients/123")
        assert (descriptor.kind, descriptor.path, descriptor.entity_id) == (TabKind.CLIENT, "/clients/123", "123")

    def test_new_page_is_not_a_record(self):
        """'/clients/new' is the creation page, not client 'new'"""
        descriptor = descriptor_from_path("/clients/new")
        assert descriptor.kind is TabKind.NEW_CLIENT
        assert descriptor.entity_id is None

    def test_edit_page(self):
        descriptor = descriptor_from_path("/invoices/9/edit")
        assert descriptor.kind is TabKind.EDIT_INVOICE
        assert descriptor.entity_id == "9"

    @pytest.mark.parametrize("path,kind,entity_id", [
        ("/", TabKind.DASHBOARD, None),
        ("/dashboard", TabKind.DASHBOARD, None),
        ("/deals/4/new-quote", TabKind.NEW_QUOTE_FOR_DEAL, "4"),
        ("/missions/8/new-invoice", TabKind.NEW_INVOICE_FOR_MISSION, "8"),
        ("/proposals/templates", TabKind.PROPOSAL_TEMPLATES, None),
        ("/briefs/templates/3", TabKind.EDIT_BRIEF_TEMPLATE, "3"),
        ("/reviews/requests/new", TabKind.NEW_REVIEW_REQUEST, None),
        ("/reviews/requests/11", TabKind.REVIEW_REQUEST, "11"),
        ("/suppliers/quotes", TabKind.SUPPLIER_QUOTES, None),
        ("/suppliers/quotes/5", TabKind.SUPPLIER_QUOTE, "5"),
        ("/suppliers/77", TabKind.SUPPLIER, "77"),
    ])
    def test_nested_routes(self, path, kind, entity_id):
        descriptor = descriptor_from_path(path)
        assert descriptor.kind is kind
        assert descriptor.entity_id == entity_id

    def test_query_string_and_trailing_slash_are_ignored(self):
        descriptor = descriptor_from_path("/clients/42/?tab=notes#top")
        assert descriptor.kind is TabKind.CLIENT
        assert descriptor.path == "/clients/42"

    def test_reserved_segment_is_not_an_id(self):
        assert descriptor_from_path("/suppliers/quotes/edit") is None

    @pytest.mark.parametrize("path", ["/unknown", "/clients/1/2/3", "/clients/1/delete"])
    def test_unknown_paths_return_none(self, path):
        assert descriptor_from_path(path) is None


class TestPathSynthesis:
    def test_path_for_list_and_detail(self):
        assert path_for(TabKind.QUOTES) == "/quotes"
        assert path_for(TabKind.QUOTE, "12") == "/quotes/12"
        assert path_for("edit-deal", "3") == "/deals/3/edit"

    def test_record_route_requires_entity(self):
        with pytest.raises(ValueError):
            path_for(TabKind.CLIENT)

    def test_descriptor_for_default_and_custom_title(self):
        assert descriptor_for(TabKind.INVOICES).title == "Invoices"
        custom = descriptor_for(TabKind.INVOICE, "5", title="Invoice #5")
        assert custom.title == "Invoice #5"
        assert custom.path == "/invoices/5"
        assert custom.entity_id == "5"

    def test_every_route_resolves_back_to_its_kind(self):
        """No two routes shadow each other"""
        for route in ROUTES:
            path = route.build("42")
            assert descriptor_from_path(path).kind is route.kind, path

    def test_normalize_path(self):
        assert normalize_path("/clients/?a=1") == "/clients"
        assert normalize_path("") == "/"
        assert normalize_path("/") == "/"


class TestOpenPath:
    def test_open_path_uses_route_lookup(self, manager):
        tab = manager.open_path("/deals/7", {"source": "llm"})
        assert tab.kind is TabKind.DEAL
        assert tab.entity_id == "7"

    def test_unknown_path_is_a_logged_noop(self, manager, event_logger):
        assert manager.open_path("/nowhere") is None
        assert len(manager.tabs) == 1
        assert event_logger.history[-1].level == "WARNING"
