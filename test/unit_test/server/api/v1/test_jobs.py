"""
Unit tests for the job board endpoints.

Tests cover public search and filters, job detail with the caller's own
application, bookmarks, applying, and job management by employers and admins.
"""

import pytest
from httpx import AsyncClient

from studentos.core.models.domain import UserRole, VerificationStatus

pytestmark = pytest.mark.asyncio


def _job(**overrides):
    payload = {
        "title": "Junior Frontend Developer",
        "location": "San Francisco, CA",
        "locationType": "REMOTE",
        "salaryMin": 70000,
        "salaryMax": 90000,
        "department": "Engineering",
        "description": "Build responsive UIs",
        "requirements": ["React"],
    }
    payload.update(overrides)
    return payload


async def _post_job(client: AsyncClient, account, **overrides) -> dict:
    response = await client.post("/api/jobs", json=_job(**overrides), headers=account.headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestPostJob:
    async def test_verified_employer_posts_job(self, client: AsyncClient, employer):
        job = await _post_job(client, employer)
        assert job["company"] == "Acme Corp"
        assert job["status"] == "ACTIVE"
        assert job["locationType"] == "REMOTE"

    async def test_company_override(self, client: AsyncClient, employer):
        job = await _post_job(client, employer, company="Acme Labs")
        assert job["company"] == "Acme Labs"

    async def test_unverified_employer_rejected(self, client: AsyncClient, make_account):
        pending = await make_account(UserRole.EMPLOYER, verification=VerificationStatus.PENDING)
        response = await client.post("/api/jobs", json=_job(), headers=pending.headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Your company must be verified before posting jobs"

    async def test_student_rejected(self, client: AsyncClient, student):
        response = await client.post("/api/jobs", json=_job(), headers=student.headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Insufficient permissions"

    async def test_admin_without_employer_profile(self, client: AsyncClient, admin):
        response = await client.post("/api/jobs", json=_job(), headers=admin.headers)
        assert response.status_code == 400

    async def test_salary_range_validated(self, client: AsyncClient, employer):
        response = await client.post("/api/jobs", json=_job(salaryMin=100, salaryMax=10), headers=employer.headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"


class TestSearch:
    async def test_only_active_jobs_listed(self, client: AsyncClient, employer):
        await _post_job(client, employer)
        await _post_job(client, employer, title="Paused Role", status="PAUSED")
        response = await client.get("/api/jobs")
        assert response.status_code == 200
        data = response.json()
        assert [job["title"] for job in data["jobs"]] == ["Junior Frontend Developer"]
        assert data["jobs"][0]["employer"]["companyName"] == "Acme Corp"
        assert data["jobs"][0]["applicantCount"] == 0

    async def test_filters(self, client: AsyncClient, employer):
        await _post_job(client, employer)
        await _post_job(
            client,
            employer,
            title="UX Intern",
            locationType="HYBRID",
            department="Design",
            salaryMin=40000,
            salaryMax=50000,
            location="New York, NY",
        )

        async def titles(**params):
            response = await client.get("/api/jobs", params=params)
            return {job["title"] for job in response.json()["jobs"]}

        assert await titles(locationType="HYBRID") == {"UX Intern"}
        assert await titles(department="Engineering") == {"Junior Frontend Developer"}
        assert await titles(minSalary=60000) == {"Junior Frontend Developer"}
        assert await titles(maxSalary=60000) == {"UX Intern"}
        assert await titles(search="new york") == {"UX Intern"}

    async def test_invalid_location_type(self, client: AsyncClient):
        response = await client.get("/api/jobs", params={"locationType": "MOON"})
        assert response.status_code == 400


class TestStudentFlows:
    async def test_apply_and_detail(self, client: AsyncClient, employer, student):
        job = await _post_job(client, employer)
        response = await client.post(
            f"/api/jobs/{job['id']}/apply", json={"coverLetter": "Hire me"}, headers=student.headers
        )
        assert response.status_code == 201
        application = response.json()
        assert application["status"] == "NEW"
        assert application["job"]["title"] == job["title"]

        duplicate = await client.post(f"/api/jobs/{job['id']}/apply", json={}, headers=student.headers)
        assert duplicate.status_code == 409
        assert duplicate.json()["error"] == "Already applied"

        detail = await client.get(f"/api/jobs/{job['id']}", headers=student.headers)
        data = detail.json()
        assert data["hasApplied"] is True
        assert data["applicantCount"] == 1
        assert data["application"]["coverLetter"] == "Hire me"

        anonymous = await client.get(f"/api/jobs/{job['id']}")
        assert anonymous.json()["hasApplied"] is False
        assert anonymous.json()["application"] is None

        mine = await client.get("/api/jobs/applications/list", headers=student.headers)
        assert [item["job"]["id"] for item in mine.json()] == [job["id"]]
        assert mine.json()[0]["employer"]["companyName"] == "Acme Corp"

    async def test_cannot_apply_to_inactive_job(self, client: AsyncClient, employer, student):
        job = await _post_job(client, employer, status="CLOSED")
        response = await client.post(f"/api/jobs/{job['id']}/apply", json={}, headers=student.headers)
        assert response.status_code == 404

    async def test_get_missing_job(self, client: AsyncClient):
        response = await client.get("/api/jobs/missing")
        assert response.status_code == 404
        assert response.json()["error"] == "Job not found"

    async def test_save_and_unsave(self, client: AsyncClient, employer, student):
        job = await _post_job(client, employer)
        saved = await client.post(f"/api/jobs/{job['id']}/save", headers=student.headers)
        assert saved.status_code == 201
        assert (await client.post(f"/api/jobs/{job['id']}/save", headers=student.headers)).status_code == 409

        listing = await client.get("/api/jobs", headers=student.headers)
        assert listing.json()["jobs"][0]["isSaved"] is True

        saved_list = await client.get("/api/jobs/saved/list", headers=student.headers)
        assert [item["id"] for item in saved_list.json()] == [job["id"]]
        assert saved_list.json()[0]["savedAt"]

        removed = await client.delete(f"/api/jobs/{job['id']}/save", headers=student.headers)
        assert removed.status_code == 204
        again = await client.delete(f"/api/jobs/{job['id']}/save", headers=student.headers)
        assert again.status_code == 404


class TestManageJobs:
    async def test_employer_list_includes_every_status(self, client: AsyncClient, employer, student):
        active = await _post_job(client, employer)
        await _post_job(client, employer, title="Draft Role", status="DRAFT")
        await client.post(f"/api/jobs/{active['id']}/apply", json={}, headers=student.headers)

        response = await client.get("/api/jobs/employer/list", headers=employer.headers)
        assert response.status_code == 200
        counts = {job["title"]: job["applicantCount"] for job in response.json()}
        assert counts == {"Junior Frontend Developer": 1, "Draft Role": 0}

    async def test_update_own_job(self, client: AsyncClient, employer):
        job = await _post_job(client, employer)
        response = await client.patch(
            f"/api/jobs/{job['id']}", json={"title": "Senior Frontend Developer"}, headers=employer.headers
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Senior Frontend Developer"

    async def test_update_checks_merged_salary_range(self, client: AsyncClient, employer):
        job = await _post_job(client, employer)
        response = await client.patch(f"/api/jobs/{job['id']}", json={"salaryMin": 95000}, headers=employer.headers)
        assert response.status_code == 400
        assert response.json()["error"] == "salaryMin must not exceed salaryMax"

    async def test_other_employer_cannot_update(self, client: AsyncClient, employer, make_account):
        job = await _post_job(client, employer)
        rival = await make_account(UserRole.EMPLOYER, full_name="Rival", verification=VerificationStatus.VERIFIED)
        response = await client.patch(f"/api/jobs/{job['id']}", json={"title": "Mine"}, headers=rival.headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Not authorized to update this job"

        deleted = await client.delete(f"/api/jobs/{job['id']}", headers=rival.headers)
        assert deleted.status_code == 403
        assert deleted.json()["error"] == "Not authorized to delete this job"

    async def test_admin_can_manage_any_job(self, client: AsyncClient, employer, admin):
        job = await _post_job(client, employer)
        response = await client.patch(f"/api/jobs/{job['id']}", json={"status": "PAUSED"}, headers=admin.headers)
        assert response.status_code == 200
        assert response.json()["status"] == "PAUSED"

        deleted = await client.delete(f"/api/jobs/{job['id']}", headers=admin.headers)
        assert deleted.status_code == 204
        assert (await client.get(f"/api/jobs/{job['id']}")).status_code == 404

    async def test_delete_removes_applications(self, client: AsyncClient, employer, student):
        job = await _post_job(client, employer)
        await client.post(f"/api/jobs/{job['id']}/apply", json={}, headers=student.headers)
        response = await client.delete(f"/api/jobs/{job['id']}", headers=employer.headers)
        assert response.status_code == 204
        mine = await client.get("/api/jobs/applications/list", headers=student.headers)
        assert mine.json() == []
