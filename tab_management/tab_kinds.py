"""
TabKind - the closed set of page categories a tab can show.
"""
from enum import Enum
from typing import Dict


class TabKind(str, Enum):
    """Page/entity categories. Every consumer table below must cover all members."""
    DASHBOARD = "dashboard"

    # Companies (unified clients/suppliers view)
    COMPANIES = "companies"
    NEW_COMPANY = "new-company"
    EDIT_COMPANY = "edit-company"

    # Clients & contacts
    CLIENTS = "clients"
    CLIENT = "client"
    NEW_CLIENT = "new-client"
    EDIT_CLIENT = "edit-client"
    CONTACTS = "contacts"
    CONTACT = "contact"
    NEW_CONTACT = "new-contact"
    EDIT_CONTACT = "edit-contact"

    # Sales pipeline
    DEALS = "deals"
    DEAL = "deal"
    NEW_DEAL = "new-deal"
    NEW_DEAL_FOR_PROPOSAL = "new-deal-for-proposal"
    EDIT_DEAL = "edit-deal"
    MISSIONS = "missions"
    MISSION = "mission"
    NEW_MISSION = "new-mission"
    EDIT_MISSION = "edit-mission"

    # Reviews
    REVIEWS = "reviews"
    REVIEW = "review"
    REVIEW_REQUEST = "review-request"
    NEW_REVIEW_REQUEST = "new-review-request"
    NEW_REVIEW_TEMPLATE = "new-review-template"
    EDIT_REVIEW_TEMPLATE = "edit-review-template"

    # Documents
    DOCUMENTS = "documents"
    QUOTES = "quotes"
    QUOTE = "quote"
    NEW_QUOTE = "new-quote"
    NEW_QUOTE_FOR_DEAL = "new-quote-for-deal"
    EDIT_QUOTE = "edit-quote"
    INVOICES = "invoices"
    INVOICE = "invoice"
    NEW_INVOICE = "new-invoice"
    NEW_INVOICE_FOR_MISSION = "new-invoice-for-mission"
    EDIT_INVOICE = "edit-invoice"
    DELIVERY_NOTES = "delivery-notes"
    DELIVERY_NOTE = "delivery-note"
    NEW_DELIVERY_NOTE = "new-delivery-note"
    NEW_DELIVERY_NOTE_FOR_MISSION = "new-delivery-note-for-mission"

    # Proposals & briefs
    PROPOSALS = "proposals"
    PROPOSAL = "proposal"
    NEW_PROPOSAL = "new-proposal"
    EDIT_PROPOSAL = "edit-proposal"
    PROPOSAL_TEMPLATES = "proposal-templates"
    BRIEFS = "briefs"
    BRIEF = "brief"
    NEW_BRIEF = "new-brief"
    EDIT_BRIEF = "edit-brief"
    BRIEF_TEMPLATES = "brief-templates"
    EDIT_BRIEF_TEMPLATE = "edit-brief-template"

    # Todos & settings
    TODOS = "todos"
    TODO = "todo"
    NEW_TODO = "new-todo"
    SETTINGS = "settings"

    # Suppliers & expenses
    SUPPLIERS = "suppliers"
    SUPPLIER = "supplier"
    NEW_SUPPLIER = "new-supplier"
    EDIT_SUPPLIER = "edit-supplier"
    SUPPLIER_CONSULTATIONS = "supplier-consultations"
    SUPPLIER_CONSULTATION = "supplier-consultation"
    NEW_SUPPLIER_CONSULTATION = "new-supplier-consultation"
    SUPPLIER_QUOTES = "supplier-quotes"
    SUPPLIER_QUOTE = "supplier-quote"
    NEW_SUPPLIER_QUOTE = "new-supplier-quote"
    SUPPLIER_INVOICES = "supplier-invoices"
    SUPPLIER_INVOICE = "supplier-invoice"
    NEW_SUPPLIER_INVOICE = "new-supplier-invoice"
    SUPPLIER_DELIVERY_NOTES = "supplier-delivery-notes"
    SUPPLIER_DELIVERY_NOTE = "supplier-delivery-note"
    NEW_SUPPLIER_DELIVERY_NOTE = "new-supplier-delivery-note"
    PURCHASE_ORDERS = "purchase-orders"
    PURCHASE_ORDER = "purchase-order"
    NEW_PURCHASE_ORDER = "new-purchase-order"
    EXPENSES = "expenses"
    EXPENSE = "expense"
    NEW_EXPENSE = "new-expense"


TAB_ICONS: Dict[TabKind, str] = {
    TabKind.DASHBOARD: "home",
    TabKind.COMPANIES: "building",
    TabKind.NEW_COMPANY: "plus",
    TabKind.EDIT_COMPANY: "edit",
    TabKind.CLIENTS: "users",
    TabKind.CLIENT: "user",
    TabKind.NEW_CLIENT: "user-plus",
    TabKind.EDIT_CLIENT: "edit",
    TabKind.CONTACTS: "contact",
    TabKind.CONTACT: "contact",
    TabKind.NEW_CONTACT: "contact-plus",
    TabKind.EDIT_CONTACT: "edit",
    TabKind.DEALS: "dollar-sign",
    TabKind.DEAL: "dollar-sign",
    TabKind.NEW_DEAL: "plus",
    TabKind.NEW_DEAL_FOR_PROPOSAL: "plus",
    TabKind.EDIT_DEAL: "edit",
    TabKind.MISSIONS: "briefcase",
    TabKind.MISSION: "briefcase",
    TabKind.NEW_MISSION: "plus",
    TabKind.EDIT_MISSION: "edit",
    TabKind.REVIEWS: "star",
    TabKind.REVIEW: "star",
    TabKind.REVIEW_REQUEST: "mail",
    TabKind.NEW_REVIEW_REQUEST: "plus",
    TabKind.NEW_REVIEW_TEMPLATE: "plus",
    TabKind.EDIT_REVIEW_TEMPLATE: "edit",
    TabKind.DOCUMENTS: "folder",
    TabKind.QUOTES: "file-text",
    TabKind.QUOTE: "file-text",
    TabKind.NEW_QUOTE: "file-plus",
    TabKind.NEW_QUOTE_FOR_DEAL: "file-plus",
    TabKind.EDIT_QUOTE: "edit",
    TabKind.INVOICES: "file-invoice",
    TabKind.INVOICE: "file-invoice",
    TabKind.NEW_INVOICE: "file-plus",
    TabKind.NEW_INVOICE_FOR_MISSION: "file-plus",
    TabKind.EDIT_INVOICE: "edit",
    TabKind.DELIVERY_NOTES: "package",
    TabKind.DELIVERY_NOTE: "package",
    TabKind.NEW_DELIVERY_NOTE: "package-plus",
    TabKind.NEW_DELIVERY_NOTE_FOR_MISSION: "package-plus",
    TabKind.PROPOSALS: "file-check",
    TabKind.PROPOSAL: "file-check",
    TabKind.NEW_PROPOSAL: "file-plus",
    TabKind.EDIT_PROPOSAL: "edit",
    TabKind.PROPOSAL_TEMPLATES: "file-check",
    TabKind.BRIEFS: "clipboard",
    TabKind.BRIEF: "clipboard",
    TabKind.NEW_BRIEF: "clipboard-plus",
    TabKind.EDIT_BRIEF: "edit",
    TabKind.BRIEF_TEMPLATES: "clipboard",
    TabKind.EDIT_BRIEF_TEMPLATE: "edit",
    TabKind.TODOS: "check-square",
    TabKind.TODO: "square",
    TabKind.NEW_TODO: "plus",
    TabKind.SETTINGS: "settings",
    TabKind.SUPPLIERS: "truck",
    TabKind.SUPPLIER: "truck",
    TabKind.NEW_SUPPLIER: "plus",
    TabKind.EDIT_SUPPLIER: "edit",
    TabKind.SUPPLIER_CONSULTATIONS: "layers",
    TabKind.SUPPLIER_CONSULTATION: "layers",
    TabKind.NEW_SUPPLIER_CONSULTATION: "plus",
    TabKind.SUPPLIER_QUOTES: "file-text",
    TabKind.SUPPLIER_QUOTE: "file-text",
    TabKind.NEW_SUPPLIER_QUOTE: "file-plus",
    TabKind.SUPPLIER_INVOICES: "file-invoice",
    TabKind.SUPPLIER_INVOICE: "file-invoice",
    TabKind.NEW_SUPPLIER_INVOICE: "file-plus",
    TabKind.SUPPLIER_DELIVERY_NOTES: "package-check",
    TabKind.SUPPLIER_DELIVERY_NOTE: "package-check",
    TabKind.NEW_SUPPLIER_DELIVERY_NOTE: "package-plus",
    TabKind.PURCHASE_ORDERS: "shopping-cart",
    TabKind.PURCHASE_ORDER: "shopping-cart",
    TabKind.NEW_PURCHASE_ORDER: "plus",
    TabKind.EXPENSES: "credit-card",
    TabKind.EXPENSE: "credit-card",
    TabKind.NEW_EXPENSE: "plus",
}


def missing_kinds(table: Dict[TabKind, object]) -> set:
    """Return the kinds a lookup table does not cover."""
    return set(TabKind) - set(table)


def ensure_exhaustive(table: Dict[TabKind, object], name: str) -> None:
    """
    Fail loudly when a kind-indexed table forgot a member.

    Called at import time by every module that owns such a table, so adding a
    TabKind without updating its consumers breaks on first import.
    """
    missing = missing_kinds(table)
    if missing:
        names = ", ".join(sorted(kind.value for kind in missing))
        raise RuntimeError(f"{name} is missing entries for: {names}")


def icon_for(kind: TabKind) -> str:
    """Icon name used by the tab strip for a kind."""
    return TAB_ICONS[TabKind(kind)]


ensure_exhaustive(TAB_ICONS, "TAB_ICONS")
