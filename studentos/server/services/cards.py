"""Response building helpers shared by several routers."""

from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel

from studentos.core.database.entities import EmployerProfile, StudentProfile, User
from studentos.core.models.io.applications import ApplicantSummary
from studentos.core.models.io.blog import AuthorCard
from studentos.core.models.io.jobs import EmployerCard

ReadModel = TypeVar("ReadModel", bound=BaseModel)


def read_with(model: Type[ReadModel], entity: Any, **extras: Any) -> ReadModel:
    """Build ``model`` from an ORM entity plus fields the entity does not carry."""
    data = {
        name: getattr(entity, name)
        for name in model.model_fields
        if name not in extras and hasattr(entity, name)
    }
    return model(**data, **extras)


def author_card(user_id: str, profiles: Mapping[str, StudentProfile], fallback_name: str) -> AuthorCard:
    profile = profiles.get(user_id)
    if profile is None:
        return AuthorCard(id=user_id, name=fallback_name)
    return AuthorCard(id=user_id, name=profile.full_name or fallback_name, avatar=profile.avatar_url)


def employer_card(profile: Optional[EmployerProfile]) -> Optional[EmployerCard]:
    return EmployerCard.model_validate(profile) if profile is not None else None


def applicant_summary(user: User, profile: Optional[StudentProfile]) -> ApplicantSummary:
    """Applicant card keyed by the account id, filled from the student profile when present."""
    if profile is None:
        return ApplicantSummary(id=user.id, email=user.email)
    return read_with(ApplicantSummary, profile, id=user.id, email=user.email)
