"""
Account services shared by the auth and user endpoints.

Issuing token pairs, shaping the user summary returned after sign-in, and
computing how complete a student profile is.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from studentos.core.database.entities import EmployerProfile, StudentProfile, User
from studentos.core.database.repositories import RefreshTokenRepository
from studentos.core.models.io.auth import TokenPair, UserSummary
from studentos.core.models.io.profiles import EmployerProfileRead, StudentProfileRead
from studentos.core.security import create_access_token, create_refresh_token

PROFILE_COMPLETION_FIELDS = (
    "full_name",
    "avatar_url",
    "bio",
    "education_level",
    "university",
    "graduation_year",
    "major",
    "country",
    "cv_url",
)


async def issue_tokens(session: AsyncSession, user: User) -> TokenPair:
    """Sign a new access token and persist a new refresh token for ``user``."""
    access_token = create_access_token(user.id, user.email, user.role)
    refresh_token, expires_at = create_refresh_token(user.id)
    await RefreshTokenRepository(session).store(refresh_token, user.id, expires_at)
    return TokenPair(access_token=access_token, refresh_token=refresh_token)


def profile_read(profile: Optional[object]):
    """Read model for whichever profile the account has."""
    if isinstance(profile, StudentProfile):
        return StudentProfileRead.model_validate(profile)
    if isinstance(profile, EmployerProfile):
        return EmployerProfileRead.model_validate(profile)
    return None


def user_summary(user: User, profile: Optional[object]) -> UserSummary:
    return UserSummary(id=user.id, email=user.email, role=user.role, profile=profile_read(profile))


def profile_completion(profile: StudentProfile) -> int:
    """Percentage of the tracked profile fields that are filled in."""
    filled = [
        name for name in PROFILE_COMPLETION_FIELDS if getattr(profile, name, None) not in (None, "")
    ]
    return round(len(filled) / len(PROFILE_COMPLETION_FIELDS) * 100)
