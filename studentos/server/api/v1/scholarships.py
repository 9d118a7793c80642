"""
Scholarship Endpoints.

Public scholarship search with per-user bookmarks, and the admin catalogue.
"""

from datetime import timedelta
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from studentos.core.database import utc_now
from studentos.core.database.entities import Scholarship
from studentos.core.database.repositories import ScholarshipRepository
from studentos.core.models.io.base import Pagination
from studentos.core.models.io.scholarships import (
    SavedScholarshipRead,
    ScholarshipCreate,
    ScholarshipPage,
    ScholarshipRead,
    ScholarshipStats,
    ScholarshipUpdate,
)
from studentos.server.core.constant import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from studentos.server.services.cards import read_with
from studentos.server.services.deps import AdminUser, CurrentUser, OptionalUser, SessionDep

router = APIRouter()

EXPIRING_SOON_DAYS = 30


async def _get_or_404(repository: ScholarshipRepository, scholarship_id: str) -> Scholarship:
    scholarship = await repository.get_by_id(scholarship_id)
    if scholarship is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scholarship not found")
    return scholarship


@router.get(
    "",
    response_model=ScholarshipPage,
    summary="Search Scholarships",
    description="Active scholarships ordered by deadline, with filters and pagination.",
)
async def list_scholarships(
    session: SessionDep,
    user: OptionalUser,
    country: Optional[str] = Query(None, description="Exact country match"),
    study_level: Optional[str] = Query(None, alias="studyLevel", description="Exact study level match"),
    search: Optional[str] = Query(None, description="Case-insensitive match on title or institution"),
    min_amount: Optional[str] = Query(None, alias="minAmount", description="Accepted for compatibility, ignored"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> ScholarshipPage:
    """
    Search scholarships.

    Anonymous callers get ``isSaved`` false on every item.
    """
    repository = ScholarshipRepository(session)
    scholarships, total = await repository.list_active(
        page, limit, country=country, study_level=study_level, search=search
    )
    saved = await repository.saved_ids(user.id, [s.id for s in scholarships]) if user else set()
    return ScholarshipPage(
        scholarships=[read_with(ScholarshipRead, s, is_saved=s.id in saved) for s in scholarships],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "/saved/list",
    response_model=List[ScholarshipRead],
    summary="Saved Scholarships",
    description="The caller's bookmarked scholarships, most recently saved first.",
)
async def list_saved(user: CurrentUser, session: SessionDep) -> List[ScholarshipRead]:
    rows = await ScholarshipRepository(session).list_saved(user.id)
    return [read_with(ScholarshipRead, scholarship, is_saved=True, saved_at=saved_at) for scholarship, saved_at in rows]


@router.get(
    "/admin/list",
    response_model=ScholarshipPage,
    summary="Admin Scholarship List",
    description="Every scholarship, active or not, for the admin catalogue.",
)
async def admin_list(
    admin: AdminUser,
    session: SessionDep,
    search: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(active|inactive)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> ScholarshipPage:
    is_active = None if status_filter is None else status_filter == "active"
    scholarships, total = await ScholarshipRepository(session).list_admin(
        page, limit, search=search, is_active=is_active
    )
    return ScholarshipPage(
        scholarships=[ScholarshipRead.model_validate(s) for s in scholarships],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "/admin/stats",
    response_model=ScholarshipStats,
    summary="Admin Scholarship Stats",
    description="Catalogue counters, including active scholarships whose deadline falls within 30 days.",
)
async def admin_stats(admin: AdminUser, session: SessionDep) -> ScholarshipStats:
    now = utc_now()
    stats = await ScholarshipRepository(session).stats(
        expiring_before=now + timedelta(days=EXPIRING_SOON_DAYS), now=now
    )
    return ScholarshipStats(**stats)


@router.get(
    "/{scholarship_id}",
    response_model=ScholarshipRead,
    summary="Get Scholarship",
    responses={404: {"description": "Scholarship not found"}},
)
async def get_scholarship(scholarship_id: str, session: SessionDep, user: OptionalUser) -> ScholarshipRead:
    repository = ScholarshipRepository(session)
    scholarship = await _get_or_404(repository, scholarship_id)
    saved = await repository.get_saved(user.id, scholarship.id) if user else None
    return read_with(
        ScholarshipRead,
        scholarship,
        is_saved=saved is not None,
        saved_at=saved.saved_at if saved else None,
    )


@router.post(
    "/{scholarship_id}/save",
    response_model=SavedScholarshipRead,
    status_code=status.HTTP_201_CREATED,
    summary="Save Scholarship",
    responses={404: {"description": "Scholarship not found"}, 409: {"description": "Already saved"}},
)
async def save_scholarship(scholarship_id: str, user: CurrentUser, session: SessionDep) -> SavedScholarshipRead:
    repository = ScholarshipRepository(session)
    await _get_or_404(repository, scholarship_id)
    if await repository.get_saved(user.id, scholarship_id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already saved")
    saved = await repository.save_for_user(user.id, scholarship_id)
    return SavedScholarshipRead.model_validate(saved)


@router.delete(
    "/{scholarship_id}/save",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unsave Scholarship",
    responses={404: {"description": "Scholarship not saved"}},
)
async def unsave_scholarship(scholarship_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = ScholarshipRepository(session)
    saved = await repository.get_saved(user.id, scholarship_id)
    if saved is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scholarship not saved")
    await repository.unsave_for_user(saved)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "",
    response_model=ScholarshipRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Scholarship",
)
async def create_scholarship(body: ScholarshipCreate, admin: AdminUser, session: SessionDep) -> ScholarshipRead:
    scholarship = await ScholarshipRepository(session).create(Scholarship(**body.model_dump()))
    return ScholarshipRead.model_validate(scholarship)


@router.patch(
    "/{scholarship_id}",
    response_model=ScholarshipRead,
    summary="Update Scholarship",
    responses={404: {"description": "Scholarship not found"}},
)
async def update_scholarship(
    scholarship_id: str, body: ScholarshipUpdate, admin: AdminUser, session: SessionDep
) -> ScholarshipRead:
    repository = ScholarshipRepository(session)
    scholarship = await _get_or_404(repository, scholarship_id)
    scholarship = await repository.update(scholarship, body.model_dump(exclude_unset=True))
    return ScholarshipRead.model_validate(scholarship)


@router.delete(
    "/{scholarship_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Scholarship",
    responses={404: {"description": "Scholarship not found"}},
)
async def delete_scholarship(scholarship_id: str, admin: AdminUser, session: SessionDep) -> Response:
    repository = ScholarshipRepository(session)
    scholarship = await _get_or_404(repository, scholarship_id)
    await repository.delete_cascade(scholarship)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
