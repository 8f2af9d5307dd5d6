"""
CRM API - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['APP_ENV'] = 'development'
os.environ['DB_TYPE'] = 'sqlite'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_crm.db'
os.environ['JWT_ACCESS_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'

from main import app
from crm.core.db import Base, get_db
from crm.core.security import hash_password, issue_access_token
from crm.models.users.user_models import User
from crm.models.enums.user_role import UserRole

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_crm.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def session_per_request_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Test client opening a fresh session for every request, as in production"""
    async def override_get_db():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory persisting a user with the given role and tenant admin"""
    async def _make_user(role: UserRole, created_by: User | None = None, **fields) -> User:
        user = User(
            username=fields.pop('username', fake.unique.email()),
            password_hash=hash_password(fields.pop('password', TEST_PASSWORD)),
            full_name=fake.name(),
            role=role.value,
            is_active=fields.pop('is_active', True),
            created_by_admin_id=created_by.id if created_by else None,
            **fields,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
async def superadmin(make_user) -> User:
    return await make_user(UserRole.superadmin)


@pytest.fixture
async def admin(make_user) -> User:
    return await make_user(UserRole.admin)


@pytest.fixture
async def other_admin(make_user) -> User:
    return await make_user(UserRole.admin)


@pytest.fixture
async def user(make_user, admin: User) -> User:
    """A regular user filed under `admin`"""
    return await make_user(UserRole.user, created_by=admin)


@pytest.fixture
async def other_user(make_user, other_admin: User) -> User:
    """A regular user filed under `other_admin`"""
    return await make_user(UserRole.user, created_by=other_admin)


def auth_headers_for(user: User) -> dict:
    token, _ = issue_access_token(user)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def quotation_payload() -> dict:
    return {
        'service': 'Web Design',
        'enterprise_name': 'Acme',
        'contact_number': '555-0100',
        'email': 'a@acme.com',
        'budget': 5000,
        'description': 'New site',
    }


@pytest.fixture
def auth_headers():
    """Build a bearer header for any persisted user"""
    return auth_headers_for


@pytest.fixture
def password() -> str:
    """Plain password every fixture user is created with"""
    return TEST_PASSWORD
