# src/dealdesk/domain/session.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, get_args

from dealdesk.domain.factors import CalculationFactors, default_factors

Role = Literal["client", "agent", "inspector", "admin", "vendor", "wholesaler", "va"]
ROLES: tuple[Role, ...] = get_args(Role)

# Stable ids for the built-in test users, one per role.
TEST_USER_IDS: dict[Role, str] = {
    "admin": "123e4567-e89b-12d3-a456-426614174001",
    "client": "123e4567-e89b-12d3-a456-426614174002",
    "agent": "123e4567-e89b-12d3-a456-426614174003",
    "inspector": "123e4567-e89b-12d3-a456-426614174004",
    "vendor": "123e4567-e89b-12d3-a456-426614174005",
    "wholesaler": "123e4567-e89b-12d3-a456-426614174006",
    "va": "123e4567-e89b-12d3-a456-426614174007",
}


@dataclass(frozen=True)
class Session:
    """Explicit per-user context handed to services instead of global state."""
    user_id: str
    role: Role
    email: str | None = None
    factors: CalculationFactors = field(default_factory=default_factors)


def session_for_role(role: str) -> Session:
    r = role.strip().lower() if role else ""
    if r not in TEST_USER_IDS:
        r = "client"
    return Session(user_id=TEST_USER_IDS[r], role=r, email=f"{r}@example.com")  # type: ignore[arg-type]


def has_role(session: Session, *roles: Role) -> bool:
    return session.role in roles


def with_factors(session: Session, factors: CalculationFactors) -> Session:
    return replace(session, factors=factors)
