"""Unit tests for account and refresh token repositories."""

from datetime import timedelta

import pytest
from sqlalchemy import func
from sqlmodel import select

from studentos.core.database import utc_now
from studentos.core.database.entities import (
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
    StudentProfile,
    Tool,
    ToolUsage,
    Transaction,
    User,
)
from studentos.core.database.repositories import RefreshTokenRepository, UserRepository
from studentos.core.models.domain import TransactionType, UserRole

pytestmark = pytest.mark.asyncio


async def _account(session, role: UserRole = UserRole.STUDENT, email: str = "user@studentos.com", name: str = "Sam"):
    user = User(email=email, password_hash="x", role=role.value)
    return await UserRepository(session).create_with_profile(user, full_name=name)


async def _count(session, model) -> int:
    return int((await session.execute(select(func.count()).select_from(model))).scalar_one())


class TestUserRepository:
    async def test_student_gets_student_profile(self, session):
        user, profile = await _account(session)
        assert isinstance(profile, StudentProfile)
        assert profile.full_name == "Sam"
        assert await UserRepository(session).get_student_profile(user.id) is not None

    async def test_employer_gets_company_profile(self, session):
        user, profile = await _account(session, UserRole.EMPLOYER, name="Acme")
        assert isinstance(profile, EmployerProfile)
        assert profile.company_name == "Acme"
        assert await UserRepository(session).get_student_profile(user.id) is None

    async def test_lookup_by_email(self, session):
        user, _ = await _account(session)
        repository = UserRepository(session)
        assert (await repository.get_by_email("user@studentos.com")).id == user.id
        assert await repository.email_exists("user@studentos.com") is True
        assert await repository.email_exists("other@studentos.com") is False

    async def test_touch_last_login(self, session):
        user, _ = await _account(session)
        user = await UserRepository(session).touch_last_login(user, provider_id="google-1")
        assert user.last_login_at is not None
        assert user.provider_id == "google-1"
        assert await UserRepository(session).count_active_since(utc_now() - timedelta(minutes=1)) == 1

    async def test_profiles_for_mixed_roles(self, session):
        student, _ = await _account(session, email="s@studentos.com")
        employer, _ = await _account(session, UserRole.EMPLOYER, email="e@studentos.com", name="Acme")
        profiles = await UserRepository(session).profiles_for([student.id, employer.id, "missing"])
        assert isinstance(profiles[student.id], StudentProfile)
        assert isinstance(profiles[employer.id], EmployerProfile)
        assert "missing" not in profiles

    async def test_list_admins_search(self, session):
        await _account(session, UserRole.ADMIN, email="ada@studentos.com", name="Ada Lovelace")
        await _account(session, UserRole.ADMIN, email="grace@studentos.com", name="Grace Hopper")
        await _account(session, email="student@studentos.com", name="Ada Student")
        admins, total = await UserRepository(session).list_admins(1, 10, search="ada")
        assert total == 1
        assert admins[0].email == "ada@studentos.com"

    async def test_delete_cascade_removes_owned_rows(self, session):
        student, _ = await _account(session, email="s@studentos.com")
        employer, company = await _account(session, UserRole.EMPLOYER, email="e@studentos.com", name="Acme")
        other, _ = await _account(session, email="o@studentos.com")

        job = Job(employer_id=company.id, title="Intern", company="Acme", location="Remote", description="x")
        post = CommunityPost(user_id=student.id, content="hi")
        habit = Habit(user_id=student.id, title="Read")
        session.add_all([job, post, habit])
        await session.commit()
        session.add_all(
            [
                JobApplication(job_id=job.id, user_id=student.id),
                Comment(post_id=post.id, user_id=other.id, content="hey"),
                Like(post_id=post.id, user_id=other.id),
                HabitLog(habit_id=habit.id, user_id=student.id),
            ]
        )
        await session.commit()

        repository = UserRepository(session)
        await repository.delete_cascade(student)

        assert await repository.get_by_id(student.id) is None
        for model in (StudentProfile, CommunityPost, Comment, Like, Habit, HabitLog, JobApplication):
            remaining = await _count(session, model)
            assert remaining == (1 if model is StudentProfile else 0), model.__name__

        await repository.delete_cascade(employer)
        assert await _count(session, Job) == 0
        assert await _count(session, EmployerProfile) == 0

    async def test_delete_cascade_removes_finance_plans_and_credits(self, session):
        student, _ = await _account(session, email="s@studentos.com")
        other, _ = await _account(session, email="o@studentos.com")
        category = FinanceCategory(user_id=student.id, name="Food", type=TransactionType.EXPENSE.value)
        plan = LearningPlan(user_id=student.id, topic="SQL")
        tool = Tool(name="CV", slug="cv", category="career", credit_cost=5)
        session.add_all([category, plan, tool])
        await session.commit()
        phase = PlanPhase(plan_id=plan.id, title="Phase 1")
        session.add_all(
            [
                phase,
                Transaction(user_id=student.id, category_id=category.id, amount=3, type=category.type),
                Budget(user_id=student.id, category_id=category.id, amount=50),
                Notification(user_id=student.id, title="hi"),
                Notification(user_id=other.id, title="kept"),
                ToolUsage(user_id=student.id, tool_id=tool.id, credits=5),
            ]
        )
        await session.commit()
        session.add(PlanResource(phase_id=phase.id, title="Intro"))
        await session.commit()

        await UserRepository(session).delete_cascade(student)

        for model in (FinanceCategory, Transaction, Budget, LearningPlan, PlanPhase, PlanResource, ToolUsage):
            assert await _count(session, model) == 0, model.__name__
        assert await _count(session, Notification) == 1
        assert await _count(session, Tool) == 1


class TestRefreshTokenRepository:
    async def test_valid_expired_and_revoked(self, session):
        user, _ = await _account(session)
        repository = RefreshTokenRepository(session)
        await repository.store("live", user.id, utc_now() + timedelta(days=1))
        await repository.store("stale", user.id, utc_now() - timedelta(seconds=1))

        assert (await repository.get_valid("live")).user_id == user.id
        assert await repository.get_valid("stale") is None
        assert await repository.get_valid("unknown") is None

        await repository.revoke("live")
        assert await repository.get_valid("live") is None

    async def test_revoke_all(self, session):
        user, _ = await _account(session)
        repository = RefreshTokenRepository(session)
        for token in ("a", "b"):
            await repository.store(token, user.id, utc_now() + timedelta(days=1))
        await repository.revoke_all(user.id)
        assert await _count(session, RefreshToken) == 0
