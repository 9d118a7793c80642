"""
Unit tests for the AI tool endpoints.

The Gemini model is replaced by Pydantic AI test models, so no request
leaves the process.
"""

from typing import List

import pytest
from httpx import AsyncClient
from pydantic_ai.exceptions import ModelHTTPError
from pydantic_ai.messages import ModelMessage, ModelResponse
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from studentos.core.database.repositories import UserRepository
from studentos.server.services import ai as ai_service
from studentos.server.services.ai import AIService, get_ai_service

pytestmark = pytest.mark.asyncio


@pytest.fixture
def use_model(app):
    def _use(model) -> AIService:
        service = AIService(model, model_name="test")
        app.dependency_overrides[get_ai_service] = lambda: service
        return service

    return _use


class TestTools:
    async def test_analyze_cv_stores_score(self, client: AsyncClient, session, student, use_model):
        use_model(
            TestModel(
                custom_output_args={
                    "score": 72,
                    "missingKeywords": ["Docker"],
                    "weaknesses": ["No metrics"],
                    "actionableFixes": ["Quantify impact"],
                }
            )
        )
        response = await client.post("/api/ai/analyze-cv", json={"cvText": "Python dev"}, headers=student.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 72
        assert data["missingKeywords"] == ["Docker"]

        profile = await UserRepository(session).get_student_profile(student.id)
        await session.refresh(profile)
        assert profile.ats_score == 72

    async def test_cover_letter(self, client: AsyncClient, student, use_model):
        use_model(TestModel(custom_output_text="Dear hiring manager"))
        payload = {"jobTitle": "Intern", "company": "Acme", "jobDescription": "Build things"}
        response = await client.post("/api/ai/cover-letter", json=payload, headers=student.headers)
        assert response.status_code == 200
        assert response.json() == {"coverLetter": "Dear hiring manager"}

    async def test_learning_plan(self, client: AsyncClient, student, use_model):
        use_model(
            TestModel(
                custom_output_args={
                    "title": "Learn SQL",
                    "weeks": [{"week": 1, "topics": ["SELECT"], "resources": ["sqlbolt.com"]}],
                    "milestones": ["First query"],
                }
            )
        )
        response = await client.post("/api/ai/learning-plan", json={"goal": "SQL"}, headers=student.headers)
        assert response.status_code == 200
        assert response.json()["weeks"][0]["topics"] == ["SELECT"]

    async def test_plagiarism_check(self, client: AsyncClient, student, use_model):
        use_model(TestModel(custom_output_args={"score": 95, "analysis": "Original", "suggestions": []}))
        response = await client.post("/api/ai/plagiarism-check", json={"text": "My essay"}, headers=student.headers)
        assert response.status_code == 200
        assert response.json()["score"] == 95

    async def test_presentation_author_is_caller(self, client: AsyncClient, student, use_model):
        use_model(
            TestModel(
                custom_output_args={
                    "title": "Climate",
                    "author": "",
                    "slides": [{"slideNumber": 1, "title": "Intro", "bulletPoints": ["Why it matters"]}],
                    "theme": {"primaryColor": "#112233", "accentColor": "#445566"},
                }
            )
        )
        response = await client.post(
            "/api/ai/generate-presentation", json={"topic": "Climate", "slideCount": 1}, headers=student.headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["author"] == "Stu Dent"
        assert data["slides"][0]["bulletPoints"] == ["Why it matters"]

    async def test_requires_auth(self, client: AsyncClient, use_model):
        use_model(TestModel())
        response = await client.post("/api/ai/plagiarism-check", json={"text": "x"})
        assert response.status_code == 401

    async def test_slide_count_bounds(self, client: AsyncClient, student, use_model):
        use_model(TestModel())
        response = await client.post(
            "/api/ai/generate-presentation", json={"topic": "x", "slideCount": 50}, headers=student.headers
        )
        assert response.status_code == 400


class TestFailures:
    async def test_provider_rate_limit_maps_to_429(self, client: AsyncClient, student, use_model):
        def rate_limited(messages: List[ModelMessage], info: AgentInfo) -> ModelResponse:
            raise ModelHTTPError(status_code=429, model_name="test")

        use_model(FunctionModel(rate_limited))
        response = await client.post("/api/ai/plagiarism-check", json={"text": "x"}, headers=student.headers)
        assert response.status_code == 429
        assert "AI request limit" in response.json()["error"]

    async def test_not_configured(self, client: AsyncClient, student, monkeypatch):
        from studentos.server.core.config import settings

        monkeypatch.setattr(ai_service, "_service", None)
        monkeypatch.setattr(settings, "gemini_api_key", None)
        response = await client.post("/api/ai/plagiarism-check", json={"text": "x"}, headers=student.headers)
        assert response.status_code == 503
        assert response.json()["error"] == "AI service is not configured"
