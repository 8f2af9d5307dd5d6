from datetime import datetime, timedelta, timezone

from jose import jwt

from crm.client.role_router import Dashboard, resolve_dashboard
from crm.core.security import create_access_token


def test_dashboard_matches_role_claim():
    for role, dashboard in (
        ("superadmin", Dashboard.SUPERADMIN),
        ("admin", Dashboard.ADMIN),
        ("user", Dashboard.USER),
    ):
        token = create_access_token(subject="1", role=role, token_version=0)
        assert resolve_dashboard(token) == dashboard


def test_missing_or_garbage_token_goes_to_login():
    assert resolve_dashboard(None) == Dashboard.LOGIN
    assert resolve_dashboard("") == Dashboard.LOGIN
    assert resolve_dashboard("not-a-jwt") == Dashboard.LOGIN


def test_unknown_role_goes_to_login():
    token = jwt.encode({"role": "janitor"}, "any-secret", algorithm="HS256")
    assert resolve_dashboard(token) == Dashboard.LOGIN


def test_expired_token_goes_to_login():
    token = create_access_token(
        subject="1",
        role="admin",
        token_version=0,
        expires_delta=timedelta(minutes=5),
    )
    later = datetime.now(timezone.utc) + timedelta(minutes=10)
    assert resolve_dashboard(token, now=later) == Dashboard.LOGIN


def test_signature_is_not_checked():
    # a forged token still picks a dashboard; the server rejects it later
    forged = jwt.encode({"role": "superadmin"}, "attacker-secret", algorithm="HS256")
    assert resolve_dashboard(forged) == Dashboard.SUPERADMIN
