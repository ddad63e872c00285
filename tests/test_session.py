from dealdesk.domain.factors import default_factors
from dealdesk.domain.session import ROLES, has_role, session_for_role


def test_session_for_each_role_has_stable_id():
    ids = {session_for_role(role).user_id for role in ROLES}
    assert len(ids) == len(ROLES)
    assert session_for_role("admin").user_id == "123e4567-e89b-12d3-a456-426614174001"
    assert session_for_role("Wholesaler").role == "wholesaler"


def test_unknown_role_falls_back_to_client():
    s = session_for_role("landlord")
    assert s.role == "client"
    assert s.email == "client@example.com"


def test_has_role_and_default_factors():
    s = session_for_role("inspector")
    assert has_role(s, "inspector", "admin")
    assert not has_role(s, "client")
    assert s.factors == default_factors()
