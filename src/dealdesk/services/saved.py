# src/dealdesk/services/saved.py
from __future__ import annotations

import uuid

from dealdesk.adapters.logging_utils import get_logger
from dealdesk.domain.factors import CalculationFactors
from dealdesk.domain.metrics import save_property
from dealdesk.domain.ports import SavedPropertyRepository, SavedSearchRepository
from dealdesk.domain.property import Property, SavedProperty
from dealdesk.domain.search import SavedSearch, SearchFilters
from dealdesk.domain.session import Session

logger = get_logger(__name__)


def toggle_saved(
    repo: SavedPropertyRepository,
    session: Session,
    prop: Property,
    factors: CalculationFactors | None = None,
) -> bool:
    """
    Favourite / un-favourite a listing. Returns True when it is now saved.

    Saving records profit and ROI under the factors in force at that moment.
    """
    if prop.id in repo.ids_for_user(session.user_id):
        repo.remove(session.user_id, prop.id)
        logger.info("property unsaved", extra={"context": {"user_id": session.user_id, "property_id": prop.id}})
        return False

    snapshot: SavedProperty = save_property(prop, factors or session.factors)
    repo.save(session.user_id, snapshot)
    logger.info(
        "property saved",
        extra={
            "context": {
                "user_id": session.user_id,
                "property_id": prop.id,
                "profit": snapshot.profit,
                "roi": snapshot.roi,
            }
        },
    )
    return True


def add_saved_search(
    repo: SavedSearchRepository,
    session: Session,
    name: str,
    filters: SearchFilters,
) -> SavedSearch:
    search = SavedSearch(id=str(uuid.uuid4()), name=name, filters=filters)
    repo.add(session.user_id, search)
    return search


def remove_saved_search(repo: SavedSearchRepository, session: Session, search_id: str) -> bool:
    return repo.remove(session.user_id, search_id)


def load_saved_search(repo: SavedSearchRepository, session: Session, search_id: str) -> SearchFilters:
    search = repo.get(session.user_id, search_id)
    if search is None:
        raise LookupError(f"saved search not found: {search_id}")
    return search.filters


def list_saved_searches(repo: SavedSearchRepository, session: Session) -> list[SavedSearch]:
    return repo.list_for_user(session.user_id)
