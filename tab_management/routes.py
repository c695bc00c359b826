"""
Route table - translate browser paths to tab descriptors and back.

Every TabKind owns exactly one route template. Templates use ``{id}`` for the
record id segment, e.g. ``/clients/{id}/edit``.
"""
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern
from urllib.parse import urlsplit

from .tab_info import TabDescriptor
from .tab_kinds import TabKind, ensure_exhaustive


# Segments that name sub-pages and can never be a record id
RESERVED_SEGMENTS = frozenset({
    "new", "edit", "templates", "requests", "consultations", "quotes",
    "invoices", "delivery-notes", "purchase-orders", "review-templates",
})


@dataclass(frozen=True)
class Route:
    kind: TabKind
    template: str
    title: str

    @property
    def has_entity(self) -> bool:
        return "{id}" in self.template

    def compile(self) -> Pattern:
        parts = [re.escape(part) for part in self.template.split("{id}")]
        return re.compile("^" + r"(?P<id>[^/]+)".join(parts) + "$")

    def build(self, entity_id: Optional[str] = None) -> str:
        if not self.has_entity:
            return self.template
        if not entity_id:
            raise ValueError(f"Route for {self.kind.value} needs an entity id")
        return self.template.replace("{id}", str(entity_id))


def _family(prefix: str, plural: TabKind, single: TabKind, new: TabKind, edit: Optional[TabKind],
            list_title: str, title: str, new_title: str) -> List[Route]:
    """Standard list / detail / new / edit routes of one entity family"""
    routes = [
        Route(plural, prefix, list_title),
        Route(new, f"{prefix}/new", new_title),
        Route(single, f"{prefix}/{{id}}", title),
    ]
    if edit is not None:
        routes.append(Route(edit, f"{prefix}/{{id}}/edit", f"Edit {title.lower()}"))
    return routes


ROUTES: List[Route] = [
    Route(TabKind.DASHBOARD, "/", "Dashboard"),
    Route(TabKind.COMPANIES, "/companies", "Companies"),
    Route(TabKind.NEW_COMPANY, "/companies/new", "New company"),
    Route(TabKind.EDIT_COMPANY, "/companies/{id}/edit", "Edit company"),
    *_family("/clients", TabKind.CLIENTS, TabKind.CLIENT, TabKind.NEW_CLIENT, TabKind.EDIT_CLIENT,
             "Clients", "Client", "New client"),
    *_family("/contacts", TabKind.CONTACTS, TabKind.CONTACT, TabKind.NEW_CONTACT, TabKind.EDIT_CONTACT,
             "Contacts", "Contact", "New contact"),
    *_family("/deals", TabKind.DEALS, TabKind.DEAL, TabKind.NEW_DEAL, TabKind.EDIT_DEAL,
             "Deals", "Deal", "New deal"),
    Route(TabKind.NEW_DEAL_FOR_PROPOSAL, "/proposals/{id}/new-deal", "New deal"),
    *_family("/missions", TabKind.MISSIONS, TabKind.MISSION, TabKind.NEW_MISSION, TabKind.EDIT_MISSION,
             "Missions", "Mission", "New mission"),
    Route(TabKind.REVIEWS, "/reviews", "Reviews"),
    Route(TabKind.REVIEW, "/reviews/{id}", "Review"),
    Route(TabKind.NEW_REVIEW_REQUEST, "/reviews/requests/new", "New review request"),
    Route(TabKind.REVIEW_REQUEST, "/reviews/requests/{id}", "Review request"),
    Route(TabKind.NEW_REVIEW_TEMPLATE, "/settings/review-templates/new", "New review template"),
    Route(TabKind.EDIT_REVIEW_TEMPLATE, "/settings/review-templates/{id}", "Edit review template"),
    Route(TabKind.DOCUMENTS, "/documents", "Documents"),
    *_family("/quotes", TabKind.QUOTES, TabKind.QUOTE, TabKind.NEW_QUOTE, TabKind.EDIT_QUOTE,
             "Quotes", "Quote", "New quote"),
    Route(TabKind.NEW_QUOTE_FOR_DEAL, "/deals/{id}/new-quote", "New quote"),
    *_family("/invoices", TabKind.INVOICES, TabKind.INVOICE, TabKind.NEW_INVOICE, TabKind.EDIT_INVOICE,
             "Invoices", "Invoice", "New invoice"),
    Route(TabKind.NEW_INVOICE_FOR_MISSION, "/missions/{id}/new-invoice", "New invoice"),
    *_family("/delivery-notes", TabKind.DELIVERY_NOTES, TabKind.DELIVERY_NOTE, TabKind.NEW_DELIVERY_NOTE, None,
             "Delivery notes", "Delivery note", "New delivery note"),
    Route(TabKind.NEW_DELIVERY_NOTE_FOR_MISSION, "/missions/{id}/new-delivery-note", "New delivery note"),
    Route(TabKind.PROPOSAL_TEMPLATES, "/proposals/templates", "Proposal templates"),
    *_family("/proposals", TabKind.PROPOSALS, TabKind.PROPOSAL, TabKind.NEW_PROPOSAL, TabKind.EDIT_PROPOSAL,
             "Proposals", "Proposal", "New proposal"),
    Route(TabKind.BRIEF_TEMPLATES, "/briefs/templates", "Brief templates"),
    Route(TabKind.EDIT_BRIEF_TEMPLATE, "/briefs/templates/{id}", "Edit template"),
    *_family("/briefs", TabKind.BRIEFS, TabKind.BRIEF, TabKind.NEW_BRIEF, TabKind.EDIT_BRIEF,
             "Briefs", "Brief", "New brief"),
    *_family("/todos", TabKind.TODOS, TabKind.TODO, TabKind.NEW_TODO, None,
             "Todos", "Todo", "New todo"),
    Route(TabKind.SETTINGS, "/settings", "Settings"),
    *_family("/suppliers/consultations", TabKind.SUPPLIER_CONSULTATIONS, TabKind.SUPPLIER_CONSULTATION,
             TabKind.NEW_SUPPLIER_CONSULTATION, None, "Consultations", "Consultation", "New consultation"),
    *_family("/suppliers/quotes", TabKind.SUPPLIER_QUOTES, TabKind.SUPPLIER_QUOTE,
             TabKind.NEW_SUPPLIER_QUOTE, None, "Supplier quotes", "Supplier quote", "New supplier quote"),
    *_family("/suppliers/invoices", TabKind.SUPPLIER_INVOICES, TabKind.SUPPLIER_INVOICE,
             TabKind.NEW_SUPPLIER_INVOICE, None, "Supplier invoices", "Supplier invoice", "New supplier invoice"),
    *_family("/suppliers/delivery-notes", TabKind.SUPPLIER_DELIVERY_NOTES, TabKind.SUPPLIER_DELIVERY_NOTE,
             TabKind.NEW_SUPPLIER_DELIVERY_NOTE, None,
             "Supplier delivery notes", "Supplier delivery note", "New supplier delivery note"),
    *_family("/suppliers/purchase-orders", TabKind.PURCHASE_ORDERS, TabKind.PURCHASE_ORDER,
             TabKind.NEW_PURCHASE_ORDER, None, "Purchase orders", "Purchase order", "New purchase order"),
    *_family("/suppliers", TabKind.SUPPLIERS, TabKind.SUPPLIER, TabKind.NEW_SUPPLIER, TabKind.EDIT_SUPPLIER,
             "Suppliers", "Supplier", "New supplier"),
    *_family("/expenses", TabKind.EXPENSES, TabKind.EXPENSE, TabKind.NEW_EXPENSE, None,
             "Expenses", "Expense", "New expense"),
]

ROUTES_BY_KIND: Dict[TabKind, Route] = {route.kind: route for route in ROUTES}
ensure_exhaustive(ROUTES_BY_KIND, "ROUTES_BY_KIND")
if len(ROUTES_BY_KIND) != len(ROUTES):
    raise RuntimeError("ROUTES declares the same TabKind twice")

# Static paths win over parametric ones ("/clients/new" is not client "new")
_STATIC_ROUTES: Dict[str, Route] = {route.template: route for route in ROUTES if not route.has_entity}
_STATIC_ROUTES["/dashboard"] = ROUTES_BY_KIND[TabKind.DASHBOARD]
_PARAMETRIC_ROUTES = [(route, route.compile()) for route in ROUTES if route.has_entity]


def normalize_path(path: str) -> str:
    """Drop query string, fragment and trailing slash."""
    pathname = urlsplit(path or "").path or "/"
    if len(pathname) > 1:
        pathname = pathname.rstrip("/") or "/"
    return pathname


def descriptor_from_path(path: str) -> Optional[TabDescriptor]:
    """
    Build a tab descriptor for a browser path.

    Pure lookup: unknown route shapes return None.

    Args:
        path: Browser path, optionally with a query string

    Returns:
        TabDescriptor for the matching route, or None
    """
    pathname = normalize_path(path)

    static = _STATIC_ROUTES.get(pathname)
    if static is not None:
        return TabDescriptor(kind=static.kind, path=static.template, title=static.title)

    for route, pattern in _PARAMETRIC_ROUTES:
        match = pattern.match(pathname)
        if match is None:
            continue
        entity_id = match.group("id")
        if entity_id in RESERVED_SEGMENTS:
            continue
        return TabDescriptor(kind=route.kind, path=pathname, title=route.title, entity_id=entity_id)

    return None


def path_for(kind: TabKind, entity_id: Optional[str] = None) -> str:
    """Synthesize the canonical path of a kind (entity_id required for record pages)."""
    return ROUTES_BY_KIND[TabKind(kind)].build(entity_id)


def descriptor_for(kind: TabKind, entity_id: Optional[str] = None, title: Optional[str] = None) -> TabDescriptor:
    """Descriptor for a kind, using the route's default title unless one is given."""
    route = ROUTES_BY_KIND[TabKind(kind)]
    return TabDescriptor(
        kind=route.kind,
        path=route.build(entity_id),
        title=title if title is not None else route.title,
        entity_id=entity_id if route.has_entity else None,
    )
