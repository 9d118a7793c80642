"""
Gemini-backed study and career tools.

Each tool is a Pydantic AI agent whose output type is the response model of the
endpoint, so the model's answer is validated before it reaches the client.
The Gemini model is built lazily from ``GEMINI_API_KEY`` and ``AI_MODEL``;
tests inject any other Pydantic AI model (for example ``TestModel``).
"""

from typing import Any, Iterable, Optional, Type, TypeVar

from fastapi import HTTPException, status
from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError
from pydantic_ai.models import Model

from studentos.core.logging_config import get_logger
from studentos.core.models.io.ai import CVAnalysis, LearningPlan, PlagiarismReport, Presentation
from studentos.server.core.config import AIConfig, settings

logger = get_logger(__name__)

OutputT = TypeVar("OutputT")

SYSTEM_PROMPT = (
    "You are the assistant behind StudentOS, a platform helping students with "
    "scholarships, job applications and study planning. Be specific and practical."
)


class AIRateLimitExceeded(RuntimeError):
    """The model provider rejected the call with HTTP 429."""


class AIService:
    """Runs the AI tools against one Pydantic AI model."""

    def __init__(self, model: Model | str, model_name: Optional[str] = None) -> None:
        self.model = model
        self.model_name = model_name or getattr(model, "model_name", str(model))

    async def _run(self, prompt: str, output_type: Type[OutputT]) -> OutputT:
        agent: Agent[None, Any] = Agent(self.model, output_type=output_type, system_prompt=SYSTEM_PROMPT)
        try:
            result = await agent.run(prompt)
        except ModelHTTPError as exc:
            if exc.status_code == 429:
                raise AIRateLimitExceeded(
                    "You have exceeded the AI request limit. Please wait a moment and try again."
                ) from exc
            raise
        return result.output

    async def analyze_cv(self, cv_text: str, job_description: Optional[str] = None) -> CVAnalysis:
        target = (
            f"Compare it against this job description:\n{job_description}"
            if job_description
            else "Assess it for general job market compatibility."
        )
        prompt = (
            "Act as an experienced recruiter and an Applicant Tracking System. "
            f"Review the resume below. {target}\n\n"
            f"Resume:\n{cv_text}\n\n"
            "Score its ATS compatibility from 0 to 100, list the important keywords it is missing, "
            "its specific weaknesses, and actionable fixes."
        )
        return await self._run(prompt, CVAnalysis)

    async def cover_letter(
        self,
        job_title: str,
        company: str,
        job_description: str,
        applicant_name: str,
        skills: Iterable[str],
        experience: Optional[str] = None,
    ) -> str:
        lines = [
            "Write a professional cover letter for this job application.",
            "",
            f"Position: {job_title}",
            f"Company: {company}",
            f"Job description: {job_description}",
            "",
            f"Applicant: {applicant_name}",
            f"Skills: {', '.join(skills)}",
        ]
        if experience:
            lines.append(f"Experience: {experience}")
        lines += [
            "",
            "Show enthusiasm for the role, highlight the relevant skills, stay professional "
            "without sounding generic, and keep it to roughly 300-400 words.",
        ]
        return await self._run("\n".join(lines), str)

    async def learning_plan(self, goal: str, current_skills: Iterable[str], timeframe: str) -> LearningPlan:
        prompt = (
            "Create a personalised learning plan.\n\n"
            f"Goal: {goal}\n"
            f"Current skills: {', '.join(current_skills) or 'none listed'}\n"
            f"Timeframe: {timeframe}\n\n"
            "Break it into weeks, each with topics and resources (links or book names), "
            "and list the key milestones."
        )
        return await self._run(prompt, LearningPlan)

    async def plagiarism_check(self, text: str) -> PlagiarismReport:
        prompt = (
            "Analyse this text for plagiarism indicators and writing quality. This is not a "
            "database lookup but an analysis of writing patterns.\n\n"
            f'"{text}"\n\n'
            "Give an originality score from 0 to 100 (100 is fully original), a brief analysis "
            "of the style and concerns, and suggestions to improve originality."
        )
        return await self._run(prompt, PlagiarismReport)

    async def presentation(self, topic: str, slide_count: int, style: str) -> Presentation:
        prompt = (
            "Create a presentation outline.\n\n"
            f"Topic: {topic}\n"
            f"Number of slides: {slide_count}\n"
            f"Style: {style}\n\n"
            "Number the slides from 1, give each a title, 3-5 bullet points and optional speaker "
            "notes. Leave the author empty and pick a primary and an accent hex colour suited to "
            "the style."
        )
        return await self._run(prompt, Presentation)


def build_gemini_model(config: AIConfig) -> Model:
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    return GoogleModel(config.model, provider=GoogleProvider(api_key=config.gemini_api_key))


_service: Optional[AIService] = None


def get_ai_service() -> AIService:
    """Shared AI service. Fails with 503 when no Gemini API key is configured."""
    global _service

    if _service is None:
        ai_config = settings.ai
        if not ai_config.gemini_api_key:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="AI service is not configured")
        logger.info(f"Creating Gemini model {ai_config.model} for AI tools")
        _service = AIService(build_gemini_model(ai_config), model_name=ai_config.model)
    return _service


def get_optional_ai_service() -> Optional[AIService]:
    """Shared AI service, or None when no Gemini API key is configured."""
    if _service is None and not settings.ai.gemini_api_key:
        return None
    return get_ai_service()
