from dealdesk.domain.ports import SavedPropertyRepository, SavedSearchRepository
from dealdesk.domain.property import SavedProperty
from dealdesk.domain.search import SavedSearch


class InMemorySavedPropertyRepository(SavedPropertyRepository):
    def __init__(self) -> None:
        self._items: dict[str, dict[int | str, SavedProperty]] = {}

    def save(self, user_id: str, item: SavedProperty) -> None:
        self._items.setdefault(user_id, {})[item.id] = item

    def remove(self, user_id: str, property_id: int | str) -> bool:
        return self._items.get(user_id, {}).pop(property_id, None) is not None

    def list_for_user(self, user_id: str) -> list[SavedProperty]:
        return list(self._items.get(user_id, {}).values())

    def ids_for_user(self, user_id: str) -> set[int | str]:
        return set(self._items.get(user_id, {}))


class InMemorySavedSearchRepository(SavedSearchRepository):
    def __init__(self) -> None:
        self._items: dict[str, list[SavedSearch]] = {}

    def add(self, user_id: str, search: SavedSearch) -> None:
        self._items.setdefault(user_id, []).append(search)

    def remove(self, user_id: str, search_id: str) -> bool:
        items = self._items.get(user_id, [])
        kept = [s for s in items if s.id != search_id]
        self._items[user_id] = kept
        return len(kept) != len(items)

    def get(self, user_id: str, search_id: str) -> SavedSearch | None:
        for s in self._items.get(user_id, []):
            if s.id == search_id:
                return s
        return None

    def list_for_user(self, user_id: str) -> list[SavedSearch]:
        return list(self._items.get(user_id, []))
