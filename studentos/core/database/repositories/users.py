"""
User account repository.

Data access for accounts, their student/employer profiles and refresh tokens.
Deleting an account removes every row that references it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Union

from sqlalchemy import delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studentos.core.models.domain import UserRole

from ..base import utc_now
from ..entities import (
    AuditLog,
    BlogPost,
    Budget,
    Comment,
    CommunityPost,
    EmployerProfile,
    FinanceCategory,
    Habit,
    HabitLog,
    Job,
    JobApplication,
    LearningPlan,
    Like,
    Notification,
    PlanPhase,
    PlanResource,
    RefreshToken,
    SavedJob,
    SavedScholarship,
    StudentProfile,
    Subscription,
    ToolUsage,
    Transaction,
    User,
    UserAdminRole,
)
from .base import BaseRepository, QueryBuilder

Profile = Union[StudentProfile, EmployerProfile]


class UserRepository(BaseRepository[User]):
    """Repository for accounts and their profiles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def create_with_profile(
        self,
        user: User,
        full_name: str,
        avatar_url: Optional[str] = None,
    ) -> tuple[User, Profile]:
        """Create an account together with the profile matching its role.

        Employers get an employer profile named after ``full_name``; every other
        role gets a student profile.
        """
        self.session.add(user)
        profile: Profile
        if user.role == UserRole.EMPLOYER.value:
            profile = EmployerProfile(user_id=user.id, company_name=full_name, logo_url=avatar_url)
        else:
            profile = StudentProfile(user_id=user.id, full_name=full_name, avatar_url=avatar_url)
        self.session.add(profile)
        await self.session.commit()
        await self.session.refresh(user)
        await self.session.refresh(profile)
        return user, profile

    async def get_student_profile(self, user_id: str) -> Optional[StudentProfile]:
        stmt = select(StudentProfile).where(StudentProfile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_employer_profile(self, user_id: str) -> Optional[EmployerProfile]:
        stmt = select(EmployerProfile).where(EmployerProfile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """Student profile if present, else employer profile."""
        return await self.get_student_profile(user_id) or await self.get_employer_profile(user_id)

    async def save_profile(self, profile: Profile) -> Profile:
        self.session.add(profile)
        await self.session.commit()
        await self.session.refresh(profile)
        return profile

    async def touch_last_login(self, user: User, provider_id: Optional[str] = None) -> User:
        user.last_login_at = utc_now()
        if provider_id:
            user.provider_id = provider_id
        return await self.update(user)

    async def list_users(
        self,
        page: int,
        limit: int,
        role: Optional[str] = None,
        search: Optional[str] = None,
    ) -> tuple[List[User], int]:
        """Newest accounts first, filtered by role and email / full name search."""
        stmt = (
            select(User)
            .outerjoin(StudentProfile, StudentProfile.user_id == User.id)
            .outerjoin(EmployerProfile, EmployerProfile.user_id == User.id)
        )
        if role:
            stmt = stmt.where(User.role == role)
        stmt = QueryBuilder.apply_search(
            stmt, [User.email, StudentProfile.full_name, EmployerProfile.company_name], search
        )
        stmt = stmt.order_by(User.created_at.desc())
        return await self.paginate(stmt, page, limit)

    async def profiles_for(self, user_ids: List[str]) -> dict[str, Profile]:
        """Map of user id to profile (student preferred) for a batch of users."""
        if not user_ids:
            return {}
        profiles: dict[str, Profile] = {}
        employers = await self.session.execute(select(EmployerProfile).where(EmployerProfile.user_id.in_(user_ids)))
        for profile in employers.scalars().all():
            profiles[profile.user_id] = profile
        students = await self.session.execute(select(StudentProfile).where(StudentProfile.user_id.in_(user_ids)))
        for profile in students.scalars().all():
            profiles[profile.user_id] = profile
        return profiles

    async def student_profiles_for(self, user_ids: Iterable[str]) -> dict[str, StudentProfile]:
        """Map of user id to student profile, used for author cards."""
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(StudentProfile).where(StudentProfile.user_id.in_(ids)))
        return {profile.user_id: profile for profile in result.scalars().all()}

    async def delete_cascade(self, user: User) -> None:
        """Delete an account and every row that references it."""
        user_id = user.id
        employer = await self.get_employer_profile(user_id)
        if employer is not None:
            job_ids = select(Job.id).where(Job.employer_id == employer.id)
            await self.session.execute(delete(JobApplication).where(JobApplication.job_id.in_(job_ids)))
            await self.session.execute(delete(SavedJob).where(SavedJob.job_id.in_(job_ids)))
            await self.session.execute(delete(Job).where(Job.employer_id == employer.id))

        post_ids = select(CommunityPost.id).where(CommunityPost.user_id == user_id)
        await self.session.execute(
            delete(Comment).where(or_(Comment.user_id == user_id, Comment.post_id.in_(post_ids)))
        )
        await self.session.execute(delete(Like).where(or_(Like.user_id == user_id, Like.post_id.in_(post_ids))))
        await self.session.execute(delete(CommunityPost).where(CommunityPost.user_id == user_id))

        plan_ids = select(LearningPlan.id).where(LearningPlan.user_id == user_id)
        phase_ids = select(PlanPhase.id).where(PlanPhase.plan_id.in_(plan_ids))
        await self.session.execute(delete(PlanResource).where(PlanResource.phase_id.in_(phase_ids)))
        await self.session.execute(delete(PlanPhase).where(PlanPhase.plan_id.in_(plan_ids)))

        for model in (
            LearningPlan,
            Budget,
            Transaction,
            FinanceCategory,
            Notification,
            ToolUsage,
            HabitLog,
            Habit,
            JobApplication,
            SavedJob,
            SavedScholarship,
            RefreshToken,
            UserAdminRole,
            Subscription,
            StudentProfile,
            EmployerProfile,
        ):
            await self.session.execute(delete(model).where(model.user_id == user_id))
        await self.session.execute(delete(BlogPost).where(BlogPost.author_id == user_id))
        await self.session.execute(delete(AuditLog).where(AuditLog.admin_id == user_id))
        await self.session.delete(user)
        await self.session.commit()

    async def count_active_since(self, since: datetime) -> int:
        return await self.count_where(User.last_login_at >= since)

    async def count_created_since(self, since: datetime) -> int:
        return await self.count_where(User.created_at >= since)

    async def list_admins(self, page: int, limit: int, search: Optional[str] = None) -> tuple[List[User], int]:
        stmt = select(User).outerjoin(StudentProfile, StudentProfile.user_id == User.id).where(
            User.role == UserRole.ADMIN.value
        )
        stmt = QueryBuilder.apply_search(stmt, [User.email, StudentProfile.full_name], search)
        stmt = stmt.order_by(User.created_at.desc())
        return await self.paginate(stmt, page, limit)


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persisted refresh tokens. A token is valid only while its row exists."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, RefreshToken)

    async def store(self, token: str, user_id: str, expires_at: datetime) -> RefreshToken:
        return await self.create(RefreshToken(token=token, user_id=user_id, expires_at=expires_at))

    async def get_valid(self, token: str) -> Optional[RefreshToken]:
        """The stored token, or None when unknown or past its expiry."""
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        stored = (await self.session.execute(stmt)).scalar_one_or_none()
        if stored is None or stored.expires_at < utc_now():
            return None
        return stored

    async def revoke(self, token: str) -> None:
        await self.session.execute(delete(RefreshToken).where(RefreshToken.token == token))
        await self.session.commit()

    async def revoke_all(self, user_id: str) -> None:
        await self.session.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        await self.session.commit()
