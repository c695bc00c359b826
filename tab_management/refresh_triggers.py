"""
RefreshTriggers - per entity family counters that list tabs watch.

When a record changes outside the tab showing it (an assistant action, a
modal in another tab), the caller bumps the family's counter and every list
tab of that family reloads on the next render.
"""
from enum import Enum
from typing import Dict, Optional

from utils.event_logger import EventLogger


class EntityType(str, Enum):
    CLIENTS = "clients"
    INVOICES = "invoices"
    QUOTES = "quotes"
    DEALS = "deals"
    MISSIONS = "missions"
    PROPOSALS = "proposals"
    BRIEFS = "briefs"
    CONTACTS = "contacts"
    REVIEWS = "reviews"
    SUPPLIERS = "suppliers"
    EXPENSES = "expenses"


class RefreshTriggers:
    def __init__(self, event_logger: Optional[EventLogger] = None):
        self.event_logger = event_logger
        self._counts: Dict[EntityType, int] = {entity: 0 for entity in EntityType}

    def trigger(self, entity_type: EntityType) -> int:
        """Bump the counter of an entity family and return its new value"""
        entity = EntityType(entity_type)
        self._counts[entity] += 1
        if self.event_logger:
            self.event_logger.refresh_triggered(entity_type=entity.value, count=self._counts[entity])
        return self._counts[entity]

    def count(self, entity_type: EntityType) -> int:
        return self._counts[EntityType(entity_type)]

    def as_dict(self) -> Dict[str, int]:
        return {entity.value: count for entity, count in self._counts.items()}
