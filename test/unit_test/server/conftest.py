from dataclasses import dataclass
from typing import AsyncGenerator, Awaitable, Callable, Dict, Optional
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from studentos.core.database.entities import EmployerProfile, User
from studentos.core.database.repositories import UserRepository
from studentos.core.models.domain import UserRole, VerificationStatus
from studentos.core.security import create_access_token, hash_password

DEFAULT_PASSWORD = "Str0ng!Password"


@dataclass
class Account:
    """A persisted test account and a ready-made bearer header."""

    user: User
    token: str

    @property
    def id(self) -> str:
        return self.user.id

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


MakeAccount = Callable[..., Awaitable[Account]]


@pytest_asyncio.fixture(name="make_account")
async def make_account_fixture(session: AsyncSession) -> MakeAccount:
    """Factory creating an account with its profile and an access token."""
    counter = {"n": 0}

    async def _make(
        role: UserRole = UserRole.STUDENT,
        email: Optional[str] = None,
        full_name: str = "Test User",
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
        verification: Optional[VerificationStatus] = None,
    ) -> Account:
        counter["n"] += 1
        user = User(
            email=email or f"{role.value.lower()}{counter['n']}@studentos.com",
            password_hash=hash_password(password),
            role=role.value,
            is_active=is_active,
            email_verified=True,
        )
        user, profile = await UserRepository(session).create_with_profile(user, full_name=full_name)
        if verification is not None and isinstance(profile, EmployerProfile):
            profile.verification_status = verification.value
            session.add(profile)
            await session.commit()
        return Account(user=user, token=create_access_token(user.id, user.email, user.role))

    return _make


@pytest_asyncio.fixture
async def student(make_account: MakeAccount) -> Account:
    return await make_account(UserRole.STUDENT, full_name="Stu Dent")


@pytest_asyncio.fixture
async def admin(make_account: MakeAccount) -> Account:
    return await make_account(UserRole.ADMIN, full_name="Ada Admin")


@pytest_asyncio.fixture
async def employer(make_account: MakeAccount) -> Account:
    return await make_account(UserRole.EMPLOYER, full_name="Acme Corp", verification=VerificationStatus.VERIFIED)


@pytest.fixture
def app():
    from studentos.server.main import app as fastapi_app

    return fastapi_app


@pytest_asyncio.fixture(name="client")
async def client_fixture(app, session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from studentos.core.database import get_session

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("studentos.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()
