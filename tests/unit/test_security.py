from datetime import timedelta

import pytest
from jose import jwt

from crm.core.config import JWT_ACCESS_SECRET_KEY, JWT_ALGORITHM
from crm.core.exceptions import AuthenticationError
from crm.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = hash_password('secret123')

    assert hashed != 'secret123'
    assert verify_password('secret123', hashed)
    assert not verify_password('secret124', hashed)


def test_decode_returns_claims():
    token = create_access_token(subject='7', role='admin', token_version=3)

    claims = decode_access_token(token)

    assert claims['sub'] == '7'
    assert claims['role'] == 'admin'
    assert claims['token_version'] == 3


def test_expired_token_is_refused():
    token = create_access_token(
        subject='7', role='admin', token_version=0, expires_delta=timedelta(seconds=-1)
    )

    with pytest.raises(AuthenticationError) as exc_info:
        decode_access_token(token)
    assert exc_info.value.status_code == 401


def test_foreign_signature_is_refused():
    token = jwt.encode({'sub': '7', 'type': 'access'}, 'someone-else', algorithm=JWT_ALGORITHM)

    with pytest.raises(AuthenticationError):
        decode_access_token(token)


def test_missing_claims_are_refused():
    token = jwt.encode({'sub': '7', 'type': 'access'}, JWT_ACCESS_SECRET_KEY, algorithm=JWT_ALGORITHM)

    with pytest.raises(AuthenticationError) as exc_info:
        decode_access_token(token)
    assert 'token_version' in exc_info.value.detail


def test_wrong_token_type_is_refused():
    token = jwt.encode(
        {'sub': '7', 'role': 'user', 'token_version': 0, 'type': 'refresh', 'exp': 9999999999},
        JWT_ACCESS_SECRET_KEY,
        algorithm=JWT_ALGORITHM,
    )

    with pytest.raises(AuthenticationError):
        decode_access_token(token)
