"""
AI Tools Endpoints.

Study and career helpers backed by a Gemini model: CV analysis, cover
letters, learning plans, plagiarism checks and presentation outlines. The
caller's student profile personalises the prompts.
"""

from typing import Annotated, Awaitable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, status

from studentos.core.database.repositories import UserRepository
from studentos.core.logging_config import get_logger
from studentos.core.monitoring import log_ai_call
from studentos.core.models.io.ai import (
    CoverLetterRequest,
    CoverLetterResponse,
    CVAnalysis,
    CVAnalysisRequest,
    LearningPlan,
    LearningPlanRequest,
    PlagiarismCheckRequest,
    PlagiarismReport,
    Presentation,
    PresentationRequest,
)
from studentos.server.services.ai import AIRateLimitExceeded, AIService, get_ai_service
from studentos.server.services.deps import CurrentUser, SessionDep

logger = get_logger(__name__)

router = APIRouter()

AIServiceDep = Annotated[AIService, Depends(get_ai_service)]

ResultT = TypeVar("ResultT")

APPLICANT_FALLBACK_NAME = "Applicant"

_AI_RESPONSES = {
    429: {"description": "AI provider rate limit reached"},
    503: {"description": "AI service is not configured"},
}


async def _call(ai: AIService, tool_name: str, user_id: str, tool: Awaitable[ResultT]) -> ResultT:
    log_ai_call(tool_name, ai.model_name, user_id)
    try:
        return await tool
    except AIRateLimitExceeded as exc:
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(exc)) from exc


@router.post(
    "/analyze-cv",
    response_model=CVAnalysis,
    summary="Analyze CV",
    description="ATS-style review of a resume, optionally against a job description. "
    "The score is stored on the caller's profile.",
    responses=_AI_RESPONSES,
)
async def analyze_cv(body: CVAnalysisRequest, user: CurrentUser, session: SessionDep, ai: AIServiceDep) -> CVAnalysis:
    analysis = await _call(ai, "analyze-cv", user.id, ai.analyze_cv(body.cv_text, body.job_description))

    repository = UserRepository(session)
    profile = await repository.get_student_profile(user.id)
    if profile is not None:
        profile.ats_score = analysis.score
        await repository.save_profile(profile)
    logger.info(f"CV analysed for user {user.id} with score {analysis.score}")
    return analysis


@router.post(
    "/cover-letter",
    response_model=CoverLetterResponse,
    summary="Generate Cover Letter",
    description="A cover letter written from the caller's name, skills and bio.",
    responses=_AI_RESPONSES,
)
async def generate_cover_letter(
    body: CoverLetterRequest, user: CurrentUser, session: SessionDep, ai: AIServiceDep
) -> CoverLetterResponse:
    profile = await UserRepository(session).get_student_profile(user.id)
    letter = await _call(
        ai,
        "cover-letter",
        user.id,
        ai.cover_letter(
            job_title=body.job_title,
            company=body.company,
            job_description=body.job_description,
            applicant_name=(profile.full_name if profile else None) or APPLICANT_FALLBACK_NAME,
            skills=profile.skills if profile else [],
            experience=profile.bio if profile else None,
        ),
    )
    return CoverLetterResponse(cover_letter=letter)


@router.post(
    "/learning-plan",
    response_model=LearningPlan,
    summary="Generate Learning Plan",
    description="A week-by-week plan towards a goal, starting from the caller's current skills.",
    responses=_AI_RESPONSES,
)
async def generate_learning_plan(
    body: LearningPlanRequest, user: CurrentUser, session: SessionDep, ai: AIServiceDep
) -> LearningPlan:
    profile = await UserRepository(session).get_student_profile(user.id)
    skills = profile.skills if profile else []
    return await _call(ai, "learning-plan", user.id, ai.learning_plan(body.goal, skills, body.timeframe))


@router.post(
    "/plagiarism-check",
    response_model=PlagiarismReport,
    summary="Check Originality",
    responses=_AI_RESPONSES,
)
async def check_plagiarism(body: PlagiarismCheckRequest, user: CurrentUser, ai: AIServiceDep) -> PlagiarismReport:
    return await _call(ai, "plagiarism-check", user.id, ai.plagiarism_check(body.text))


@router.post(
    "/generate-presentation",
    response_model=Presentation,
    summary="Generate Presentation",
    description="A slide outline for a topic. The author is the caller's name.",
    responses=_AI_RESPONSES,
)
async def generate_presentation(
    body: PresentationRequest, user: CurrentUser, session: SessionDep, ai: AIServiceDep
) -> Presentation:
    presentation = await _call(
        ai, "generate-presentation", user.id, ai.presentation(body.topic, body.slide_count, body.style)
    )
    profile = await UserRepository(session).get_student_profile(user.id)
    if profile is not None and profile.full_name:
        presentation.author = profile.full_name
    return presentation
