# src/dealdesk/domain/ports.py
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from dealdesk.domain.property import SavedProperty
    from dealdesk.domain.search import SavedSearch


# ----------------------------
# Saved (favourite) properties
# ----------------------------

class SavedPropertyRepository(Protocol):
    def save(self, user_id: str, item: SavedProperty) -> None:
        ...

    def remove(self, user_id: str, property_id: int | str) -> bool:
        ...

    def list_for_user(self, user_id: str) -> list[SavedProperty]:
        ...

    def ids_for_user(self, user_id: str) -> set[int | str]:
        ...


# ----------------------------
# Saved searches
# ----------------------------

class SavedSearchRepository(Protocol):
    def add(self, user_id: str, search: SavedSearch) -> None:
        ...

    def remove(self, user_id: str, search_id: str) -> bool:
        ...

    def get(self, user_id: str, search_id: str) -> SavedSearch | None:
        ...

    def list_for_user(self, user_id: str) -> list[SavedSearch]:
        ...
