"""
AI tool I/O models.

Request payloads for the Gemini-backed study and career tools, and the
structured outputs the model is asked to produce.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class CVAnalysisRequest(CamelModel):
    cv_text: str = Field(min_length=1)
    job_description: Optional[str] = None


class CVAnalysis(CamelModel):
    """ATS-style review of a resume."""

    score: int = Field(ge=0, le=100, description="ATS compatibility score")
    missing_keywords: List[str] = Field(default_factory=list, description="Important keywords to add")
    weaknesses: List[str] = Field(default_factory=list, description="Specific weaknesses of the resume")
    actionable_fixes: List[str] = Field(default_factory=list, description="Concrete improvements")


class CoverLetterRequest(CamelModel):
    job_title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    job_description: str = Field(min_length=1)


class CoverLetterResponse(CamelModel):
    cover_letter: str


class LearningPlanRequest(CamelModel):
    goal: str = Field(min_length=1)
    timeframe: str = "4 weeks"


class LearningWeek(CamelModel):
    week: int
    topics: List[str] = Field(default_factory=list)
    resources: List[str] = Field(default_factory=list, description="Links or book names")


class LearningPlan(CamelModel):
    title: str
    weeks: List[LearningWeek] = Field(default_factory=list)
    milestones: List[str] = Field(default_factory=list)


class PlagiarismCheckRequest(CamelModel):
    text: str = Field(min_length=1)


class PlagiarismReport(CamelModel):
    score: int = Field(ge=0, le=100, description="Originality score, 100 is fully original")
    analysis: str
    suggestions: List[str] = Field(default_factory=list)


class PresentationRequest(CamelModel):
    topic: str = Field(min_length=1)
    slide_count: int = Field(default=5, ge=1, le=20)
    style: str = "professional"


class Slide(CamelModel):
    slide_number: int
    title: str
    bullet_points: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class PresentationTheme(CamelModel):
    primary_color: str = Field(description="Hex colour")
    accent_color: str = Field(description="Hex colour")


class Presentation(CamelModel):
    title: str
    author: str = ""
    slides: List[Slide] = Field(default_factory=list)
    theme: PresentationTheme
