"""
Authentication endpoint tests
"""
import pytest

from crm.models.enums.user_role import UserRole


class TestLogin:
    """Tests for POST /auth/login"""

    @pytest.mark.asyncio
    async def test_login_success(self, client, admin, password):
        response = await client.post(
            '/auth/login',
            json={'email': admin.username, 'password': password},
        )

        assert response.status_code == 200
        data = response.json()['data']
        assert data['auth']['token_type'] == 'bearer'
        assert data['auth']['access_token']
        assert data['user']['id'] == admin.id
        assert data['user']['role'] == 'admin'

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, admin):
        response = await client.post(
            '/auth/login',
            json={'email': admin.username, 'password': 'wrongpassword'},
        )

        assert response.status_code == 401
        assert response.json()['error_code'] == 'INVALID_CREDENTIALS'

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client, db_session, password):
        response = await client.post(
            '/auth/login',
            json={'email': 'nobody@example.com', 'password': password},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_inactive_user(self, client, make_user, password):
        inactive = await make_user(UserRole.admin, is_active=False)

        response = await client.post(
            '/auth/login',
            json={'email': inactive.username, 'password': password},
        )

        assert response.status_code == 401
        assert response.json()['error_code'] == 'USER_INACTIVE'


class TestSession:
    """Tests for /auth/me and /auth/logout"""

    @pytest.mark.asyncio
    async def test_me_reports_tenant(self, client, user, admin, auth_headers):
        response = await client.get('/auth/me', headers=auth_headers(user))

        assert response.status_code == 200
        data = response.json()['data']
        assert data['id'] == user.id
        assert data['role'] == 'user'
        assert data['tenant_admin_id'] == admin.id

    @pytest.mark.asyncio
    async def test_me_without_token(self, client):
        response = await client.get('/auth/me')

        assert response.status_code == 401
        assert response.headers['www-authenticate'] == 'Bearer'

    @pytest.mark.asyncio
    async def test_logout_revokes_token(self, client, user, auth_headers):
        headers = auth_headers(user)

        response = await client.post('/auth/logout', headers=headers)
        assert response.status_code == 200

        replay = await client.get('/auth/me', headers=headers)
        assert replay.status_code == 401
        assert replay.json()['error_code'] == 'SESSION_EXPIRED'

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get('/')

        assert response.status_code == 200
        assert response.json()['status'] == 'ok'

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client):
        response = await client.get('/', headers={'X-Request-ID': 'abc123'})

        assert response.headers['x-request-id'] == 'abc123'
