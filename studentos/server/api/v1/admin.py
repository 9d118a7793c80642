"""
Admin Back-Office Endpoints.

Platform statistics, account management, employer verification, pricing
plans, the contact inbox, in-app notifications and the audit log. Every
route requires an ADMIN account; changes to accounts, employers and plans and
sent notifications are written to the audit log. Verified or rejected
employers are notified in-app.
"""

from datetime import timedelta
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response, status

from studentos.core.database import utc_now
from studentos.core.database.entities import Job, Notification, PricingPlan, Scholarship, User
from studentos.core.database.repositories import (
    ApplicationRepository,
    AuditLogRepository,
    ContactMessageRepository,
    EmployerProfileRepository,
    JobRepository,
    NotificationRepository,
    PricingPlanRepository,
    ScholarshipRepository,
    UserRepository,
)
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import AuditAction, JobStatus, NotificationType, UserRole, VerificationStatus
from studentos.core.models.io.admin import (
    AdminEmployerRead,
    AdminStats,
    AdminUserCreate,
    AdminUserCreated,
    AdminUserPage,
    AdminUserRead,
    AdminUserUpdate,
    AuditLogPage,
    AuditLogRead,
    EmployerAccount,
    EmployerVerificationUpdate,
    PricingPlanCreate,
    PricingPlanRead,
    PricingPlanUpdate,
)
from studentos.core.models.io.base import Pagination
from studentos.core.models.io.contact import ContactMessageRead
from studentos.core.models.io.notifications import (
    NotificationHistory,
    NotificationRecipient,
    NotificationSend,
    NotificationSent,
    SentNotificationRead,
)
from studentos.core.models.io.profiles import EmployerProfileRead
from studentos.core.security import hash_password
from studentos.server.core.constant import MAX_PAGE_LIMIT
from studentos.server.services.audit import record_audit
from studentos.server.services.cards import read_with
from studentos.server.services.deps import AdminUser, SessionDep
from studentos.server.services.notifications import notify

logger = get_logger(__name__)

router = APIRouter()

ADMIN_PAGE_LIMIT = 20


def _user_read(user: User, profiles: Dict[str, object]) -> AdminUserRead:
    profile = profiles.get(user.id)
    return read_with(
        AdminUserRead,
        user,
        full_name=getattr(profile, "full_name", None),
        avatar_url=getattr(profile, "avatar_url", None),
        company_name=getattr(profile, "company_name", None),
        logo_url=getattr(profile, "logo_url", None),
    )


async def _get_user_or_404(repository: UserRepository, user_id: str) -> User:
    user = await repository.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


async def _get_plan_or_404(repository: PricingPlanRepository, plan_id: str) -> PricingPlan:
    plan = await repository.get_by_id(plan_id)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pricing plan not found")
    return plan


# =====================================================================
# Dashboard
# =====================================================================


@router.get(
    "/stats",
    response_model=AdminStats,
    summary="Platform Stats",
    description="Account, catalogue and subscription counters for the admin dashboard.",
)
async def get_stats(admin: AdminUser, session: SessionDep) -> AdminStats:
    now = utc_now()
    users = UserRepository(session)
    return AdminStats(
        total_users=await users.count_where(),
        active_users=await users.count_active_since(now - timedelta(hours=24)),
        total_scholarships=await ScholarshipRepository(session).count_where(
            Scholarship.is_active == True  # noqa: E712
        ),
        total_jobs=await JobRepository(session).count_where(Job.status == JobStatus.ACTIVE.value),
        total_applications=await ApplicationRepository(session).count_where(),
        recent_transactions=await PricingPlanRepository(session).count_active_subscriptions(),
        new_users_this_week=await users.count_created_since(now - timedelta(days=7)),
    )


# =====================================================================
# Users
# =====================================================================


@router.get("/users", response_model=AdminUserPage, summary="List Users")
async def list_users(
    admin: AdminUser,
    session: SessionDep,
    role: Optional[UserRole] = None,
    search: Optional[str] = Query(None, description="Matches email or full name"),
    page: int = Query(1, ge=1),
    limit: int = Query(ADMIN_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> AdminUserPage:
    repository = UserRepository(session)
    users, total = await repository.list_users(page, limit, role=role.value if role else None, search=search)
    profiles = await repository.profiles_for([u.id for u in users])
    return AdminUserPage(
        users=[_user_read(user, profiles) for user in users],
        pagination=Pagination.build(page, limit, total),
    )


@router.post(
    "/users",
    response_model=AdminUserCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create an account of any role with the profile matching that role.",
    responses={409: {"description": "User already exists"}},
)
async def create_user(
    body: AdminUserCreate, request: Request, admin: AdminUser, session: SessionDep
) -> AdminUserCreated:
    repository = UserRepository(session)
    if await repository.email_exists(body.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

    user = User(
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role,
        email_verified=True,
    )
    user, _ = await repository.create_with_profile(user, full_name=body.full_name)
    await record_audit(
        session, request, admin, AuditAction.CREATE_USER, "USER", user.id, {"role": user.role}
    )
    return AdminUserCreated.model_validate(user)


@router.patch(
    "/users/{user_id}",
    response_model=AdminUserRead,
    summary="Update User",
    description="Activate, deactivate or change the role of an account.",
    responses={400: {"description": "Cannot deactivate yourself"}, 404: {"description": "User not found"}},
)
async def update_user(
    user_id: str, body: AdminUserUpdate, request: Request, admin: AdminUser, session: SessionDep
) -> AdminUserRead:
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if user_id == admin.id and changes.get("is_active") is False:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot deactivate your own account")

    repository = UserRepository(session)
    user = await repository.update(await _get_user_or_404(repository, user_id), changes)
    await record_audit(session, request, admin, AuditAction.UPDATE_USER, "USER", user.id, changes)
    return _user_read(user, await repository.profiles_for([user.id]))


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete User",
    description="Delete an account and everything it owns.",
    responses={400: {"description": "Cannot delete yourself"}, 404: {"description": "User not found"}},
)
async def delete_user(user_id: str, request: Request, admin: AdminUser, session: SessionDep) -> Response:
    if user_id == admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")

    repository = UserRepository(session)
    user = await _get_user_or_404(repository, user_id)
    email = user.email
    await repository.delete_cascade(user)
    await record_audit(
        session, request, admin, AuditAction.DELETE_USER, "USER", user_id, {"email": email}
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Employer verification
# =====================================================================


@router.get(
    "/employers",
    response_model=List[AdminEmployerRead],
    summary="List Employers",
    description="Employer profiles newest first, with the owning account and job count.",
)
async def list_employers(
    admin: AdminUser,
    session: SessionDep,
    verification_status: Optional[VerificationStatus] = Query(None, alias="status"),
) -> List[AdminEmployerRead]:
    rows = await EmployerProfileRepository(session).list_with_users(
        verification_status.value if verification_status else None
    )
    counts = await JobRepository(session).count_for_employers(profile.id for profile, _ in rows)
    return [
        read_with(
            AdminEmployerRead,
            profile,
            user=EmployerAccount.model_validate(user),
            job_count=counts.get(profile.id, 0),
        )
        for profile, user in rows
    ]


@router.patch(
    "/employers/{employer_id}/verify",
    response_model=EmployerProfileRead,
    summary="Verify Employer",
    description="Set the verification state of an employer. ``verifiedAt`` is stamped when VERIFIED.",
    responses={404: {"description": "Employer not found"}},
)
async def verify_employer(
    employer_id: str, body: EmployerVerificationUpdate, request: Request, admin: AdminUser, session: SessionDep
) -> EmployerProfileRead:
    repository = EmployerProfileRepository(session)
    profile = await repository.get_by_id(employer_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employer not found")

    verified = body.status == VerificationStatus.VERIFIED.value
    profile = await repository.update(
        profile,
        {
            "verification_status": body.status,
            "verification_note": body.note,
            "verified_at": utc_now() if verified else None,
        },
    )
    await record_audit(
        session,
        request,
        admin,
        AuditAction.VERIFY_EMPLOYER,
        "EMPLOYER",
        profile.id,
        {"status": profile.verification_status, "note": body.note},
    )
    await notify(
        session,
        profile.user_id,
        f"Employer verification: {profile.verification_status.lower()}",
        body.note,
        NotificationType.SUCCESS if verified else NotificationType.WARNING,
        "/employer/profile",
    )
    return EmployerProfileRead.model_validate(profile)


# =====================================================================
# Pricing plans
# =====================================================================


@router.get(
    "/pricing",
    response_model=List[PricingPlanRead],
    summary="List Pricing Plans",
    description="Every plan, cheapest first, with its subscription count.",
)
async def list_plans(admin: AdminUser, session: SessionDep) -> List[PricingPlanRead]:
    rows = await PricingPlanRepository(session).list_with_subscription_counts()
    return [read_with(PricingPlanRead, plan, subscription_count=count) for plan, count in rows]


@router.post("/pricing", response_model=PricingPlanRead, status_code=status.HTTP_201_CREATED, summary="Create Plan")
async def create_plan(
    body: PricingPlanCreate, request: Request, admin: AdminUser, session: SessionDep
) -> PricingPlanRead:
    plan = await PricingPlanRepository(session).create(PricingPlan(**body.model_dump()))
    await record_audit(
        session, request, admin, AuditAction.CREATE_PRICING_PLAN, "PRICING_PLAN", plan.id, {"name": plan.name}
    )
    return PricingPlanRead.model_validate(plan)


@router.patch(
    "/pricing/{plan_id}",
    response_model=PricingPlanRead,
    summary="Update Plan",
    responses={404: {"description": "Pricing plan not found"}},
)
async def update_plan(
    plan_id: str, body: PricingPlanUpdate, request: Request, admin: AdminUser, session: SessionDep
) -> PricingPlanRead:
    repository = PricingPlanRepository(session)
    changes = body.model_dump(exclude_unset=True)
    plan = await repository.update(await _get_plan_or_404(repository, plan_id), changes)
    await record_audit(
        session, request, admin, AuditAction.UPDATE_PRICING_PLAN, "PRICING_PLAN", plan.id, changes
    )
    return PricingPlanRead.model_validate(plan)


@router.delete(
    "/pricing/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Plan",
    description="Delete a plan together with its subscriptions.",
    responses={404: {"description": "Pricing plan not found"}},
)
async def delete_plan(plan_id: str, request: Request, admin: AdminUser, session: SessionDep) -> Response:
    repository = PricingPlanRepository(session)
    plan = await _get_plan_or_404(repository, plan_id)
    name = plan.name
    await repository.delete_cascade(plan)
    await record_audit(
        session, request, admin, AuditAction.DELETE_PRICING_PLAN, "PRICING_PLAN", plan_id, {"name": name}
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Contact inbox
# =====================================================================


@router.get("/messages", response_model=List[ContactMessageRead], summary="List Contact Messages")
async def list_messages(admin: AdminUser, session: SessionDep) -> List[ContactMessageRead]:
    messages = await ContactMessageRepository(session).list_newest()
    return [ContactMessageRead.model_validate(message) for message in messages]


@router.patch(
    "/messages/{message_id}",
    response_model=ContactMessageRead,
    summary="Mark Message Read",
    responses={404: {"description": "Message not found"}},
)
async def mark_message_read(message_id: str, admin: AdminUser, session: SessionDep) -> ContactMessageRead:
    repository = ContactMessageRepository(session)
    message = await repository.get_by_id(message_id)
    if message is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    return ContactMessageRead.model_validate(await repository.update(message, {"is_read": True}))


# =====================================================================
# Audit log
# =====================================================================


@router.get(
    "/audit-logs",
    response_model=AuditLogPage,
    summary="Audit Log",
    description="Admin actions newest first, optionally filtered by action or acting admin.",
)
async def list_audit_logs(
    admin: AdminUser,
    session: SessionDep,
    action: Optional[AuditAction] = None,
    admin_id: Optional[str] = Query(None, alias="adminId"),
    page: int = Query(1, ge=1),
    limit: int = Query(ADMIN_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> AuditLogPage:
    rows, total = await AuditLogRepository(session).list_with_admin(
        page, limit, action=action.value if action else None, admin_id=admin_id
    )
    return AuditLogPage(
        logs=[read_with(AuditLogRead, entry, admin_email=email) for entry, email in rows],
        pagination=Pagination.build(page, limit, total),
    )


# =====================================================================
# Notifications
# =====================================================================


@router.post(
    "/notifications",
    response_model=NotificationSent,
    status_code=status.HTTP_201_CREATED,
    summary="Send Notification",
    description="Send an in-app notification to one account by email, or broadcast it to every active account.",
    responses={404: {"description": "User not found"}},
)
async def send_notification(
    body: NotificationSend, request: Request, admin: AdminUser, session: SessionDep
) -> NotificationSent:
    repository = NotificationRepository(session)
    if body.broadcast:
        user_ids = await repository.active_user_ids()
    else:
        user = await UserRepository(session).get_by_email(body.email)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        user_ids = [user.id]

    content = body.model_dump(include={"title", "message", "type", "link"})
    recipients = await repository.create_many(Notification(user_id=user_id, **content) for user_id in user_ids)
    await record_audit(
        session,
        request,
        admin,
        AuditAction.SEND_NOTIFICATION,
        "NOTIFICATION",
        None,
        {"title": body.title, "recipients": recipients, "broadcast": body.broadcast},
    )
    return NotificationSent(message=f"Notification sent to {recipients} user(s)", recipients=recipients)


@router.get(
    "/notifications",
    response_model=NotificationHistory,
    summary="Notification History",
    description="Every notification sent on the platform, newest first, with its recipient.",
)
async def list_notifications(
    admin: AdminUser,
    session: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(ADMIN_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> NotificationHistory:
    rows, total = await NotificationRepository(session).history(page, limit)
    profiles = await UserRepository(session).profiles_for(list({n.user_id for n, _ in rows}))
    notifications = [
        read_with(
            SentNotificationRead,
            notification,
            user=NotificationRecipient(
                id=notification.user_id,
                email=email,
                full_name=getattr(profiles.get(notification.user_id), "full_name", None),
            )
            if email
            else None,
        )
        for notification, email in rows
    ]
    return NotificationHistory(notifications=notifications, pagination=Pagination.build(page, limit, total))
