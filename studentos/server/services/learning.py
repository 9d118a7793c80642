"""
Building saved learning plans.

The AI planner answers week by week; a saved plan is grouped into at most
three phases of a few resources each. When no model is available, or it fails,
a templated plan for the topic is used instead so the student always gets one.
"""

import math
from typing import List, Optional, Sequence, Tuple

from pydantic_ai.exceptions import AgentRunError

from studentos.core.database.entities import PlanPhase, PlanResource
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import ResourceType
from studentos.core.models.io.ai import LearningPlan as GeneratedPlan

from .ai import AIRateLimitExceeded, AIService

logger = get_logger(__name__)

PhaseDraft = Tuple[PlanPhase, List[PlanResource]]

MAX_PHASES = 3
RESOURCES_PER_PHASE = 4
PHASE_NAMES = ("Foundations", "Core Skills", "Advanced & Practice")
ALTERNATING_KINDS = ((ResourceType.VIDEO, "30 mins"), (ResourceType.ARTICLE, "15 min read"))

# (title suffix, description, [(resource title, type, duration)]); "{topic}" is filled in
TEMPLATE_PHASES = (
    (
        "Foundations",
        "Understanding the basics of {topic}",
        [
            ("{topic} for Beginners", ResourceType.VIDEO, "45 mins"),
            ("Introduction to {topic}", ResourceType.ARTICLE, "12 min read"),
            ("{topic} Fundamentals Crash Course", ResourceType.VIDEO, "30 mins"),
        ],
    ),
    (
        "Core Concepts",
        "Deep dive into key {topic} principles",
        [
            ("Mastering {topic} Essentials", ResourceType.VIDEO, "50 mins"),
            ("{topic} Best Practices Guide", ResourceType.ARTICLE, "15 min read"),
            ("Case Study: {topic} in Action", ResourceType.ARTICLE, "10 min read"),
        ],
    ),
    (
        "Hands-on Practice",
        "Building real projects with {topic}",
        [
            ("Build Your First {topic} Project", ResourceType.VIDEO, "60 mins"),
            ("{topic} Project Walkthrough", ResourceType.ARTICLE, "20 min read"),
        ],
    ),
    (
        "Advanced & Portfolio",
        "Advanced techniques and portfolio building",
        [
            ("Advanced {topic} Techniques", ResourceType.VIDEO, "40 mins"),
            ("{topic} Portfolio Guide", ResourceType.ARTICLE, "18 min read"),
        ],
    ),
)


def _resource(title: str, kind: ResourceType, duration: str) -> PlanResource:
    return PlanResource(title=title, type=kind.value, duration_text=duration)


def template_phases(topic: str, weeks: int) -> List[PhaseDraft]:
    """Two to four templated phases, one per two weeks."""
    count = min(len(TEMPLATE_PHASES), max(2, math.ceil(weeks / 2)))
    return [
        (
            PlanPhase(title=f"Phase {index + 1}: {suffix}", description=description.format(topic=topic)),
            [_resource(title.format(topic=topic), kind, duration) for title, kind, duration in resources],
        )
        for index, (suffix, description, resources) in enumerate(TEMPLATE_PHASES[:count])
    ]


def phases_from_weeks(topic: str, plan: GeneratedPlan) -> List[PhaseDraft]:
    """Group the planner's weeks into up to three phases.

    Each phase is described by its first three topics and keeps its first four
    resources, alternating video and article. A phase whose weeks list no
    resources gets an introductory video and guide for the topic.
    """
    weeks: Sequence = plan.weeks
    per_phase = max(1, math.ceil(len(weeks) / MAX_PHASES))
    phases: List[PhaseDraft] = []
    for index in range(MAX_PHASES):
        chunk = weeks[index * per_phase : (index + 1) * per_phase]
        if not chunk:
            break
        topics = [item for week in chunk for item in week.topics]
        titles = [item for week in chunk for item in week.resources][:RESOURCES_PER_PHASE]
        resources = [_resource(title, *ALTERNATING_KINDS[i % 2]) for i, title in enumerate(titles)]
        if not resources:
            resources = [
                _resource(f"Introduction to {topic}", ResourceType.VIDEO, "25 mins"),
                _resource(f"{topic} Guide", ResourceType.ARTICLE, "10 min read"),
            ]
        phase = PlanPhase(title=f"Phase {index + 1}: {PHASE_NAMES[index]}", description=", ".join(topics[:3]))
        phases.append((phase, resources))
    return phases


async def build_phases(
    ai: Optional[AIService], topic: str, weeks: int, skills: Sequence[str]
) -> List[PhaseDraft]:
    """Phases for a new plan, from the AI planner when it answers, otherwise from the template."""
    if ai is not None:
        try:
            generated = await ai.learning_plan(topic, skills, f"{weeks} weeks")
        except (AIRateLimitExceeded, AgentRunError) as exc:
            logger.warning(f"AI learning plan failed, using the template plan: {exc}")
        else:
            if generated.weeks:
                return phases_from_weeks(topic, generated)
    return template_phases(topic, weeks)
