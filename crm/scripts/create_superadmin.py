"""Bootstrap the first superadmin account.

Usage: python -m crm.scripts.create_superadmin
Reads SUPERADMIN_EMAIL and SUPERADMIN_PASSWORD from the environment.
"""
import asyncio
import os

from sqlalchemy import select

from crm.core.db import AsyncSessionLocal, commit_or_raise
from crm.core.security import hash_password
from crm.models.users.user_models import User
from crm.models.enums.user_role import UserRole


async def create_superadmin(email: str, password: str) -> bool:
    async with AsyncSessionLocal() as session:
        exists = await session.scalar(select(User.id).where(User.username == email))
        if exists:
            return False

        session.add(
            User(
                username=email,
                password_hash=hash_password(password),
                role=UserRole.superadmin.value,
                is_active=True,
            )
        )
        await commit_or_raise(session)
        return True


if __name__ == "__main__":
    email = os.getenv("SUPERADMIN_EMAIL", "superadmin@example.com")
    password = os.getenv("SUPERADMIN_PASSWORD")
    if not password:
        raise SystemExit("SUPERADMIN_PASSWORD must be set")

    created = asyncio.run(create_superadmin(email, password))
    print("Superadmin created!" if created else f"{email} already exists")
