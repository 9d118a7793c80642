"""Unit tests for account services: token issuing and profile completion."""

import pytest

from studentos.core.database.entities import EmployerProfile, StudentProfile, User
from studentos.core.database.repositories import RefreshTokenRepository
from studentos.core.models.domain import UserRole
from studentos.core.security import decode_access_token, decode_refresh_token
from studentos.server.services.auth import issue_tokens, profile_completion, user_summary


class TestProfileCompletion:
    def test_empty_profile(self):
        assert profile_completion(StudentProfile(user_id="u", full_name="")) == 0

    def test_partial_profile_rounds(self):
        profile = StudentProfile(user_id="u", full_name="Stu", bio="Hi", country="KE")
        assert profile_completion(profile) == 33

    def test_blank_strings_do_not_count(self):
        profile = StudentProfile(user_id="u", full_name="Stu", bio="", major="")
        assert profile_completion(profile) == 11

    def test_full_profile(self):
        profile = StudentProfile(
            user_id="u",
            full_name="Stu",
            avatar_url="https://cdn.studentos.com/a.png",
            bio="Hi",
            education_level="BACHELOR",
            university="MIT",
            graduation_year=2027,
            major="CS",
            country="US",
            cv_url="https://cdn.studentos.com/cv.pdf",
        )
        assert profile_completion(profile) == 100


class TestUserSummary:
    def test_student_profile(self):
        user = User(email="s@studentos.com", role=UserRole.STUDENT.value)
        profile = StudentProfile(user_id=user.id, full_name="Stu")
        summary = user_summary(user, profile).model_dump(by_alias=True)
        assert summary["role"] == "STUDENT"
        assert summary["profile"]["fullName"] == "Stu"

    def test_employer_profile(self):
        user = User(email="e@studentos.com", role=UserRole.EMPLOYER.value)
        profile = EmployerProfile(user_id=user.id, company_name="Acme", verification_status="PENDING")
        summary = user_summary(user, profile).model_dump(by_alias=True)
        assert summary["profile"]["companyName"] == "Acme"

    def test_no_profile(self):
        user = User(email="a@studentos.com", role=UserRole.ADMIN.value)
        assert user_summary(user, None).profile is None


@pytest.mark.asyncio
async def test_issue_tokens_persists_refresh_token(session):
    user = User(email="t@studentos.com", password_hash="x", role=UserRole.STUDENT.value)
    session.add(user)
    await session.commit()

    pair = await issue_tokens(session, user)

    assert decode_access_token(pair.access_token).user_id == user.id
    assert decode_refresh_token(pair.refresh_token) == user.id
    assert await RefreshTokenRepository(session).get_valid(pair.refresh_token) is not None
