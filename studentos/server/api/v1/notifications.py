"""
In-App Notification Endpoints.

The caller's inbox: the latest notifications with an unread count, marking
them read, and posting one to yourself.
"""

from fastapi import APIRouter, HTTPException, status

from studentos.core.database.repositories import NotificationRepository
from studentos.core.models.domain import NotificationType
from studentos.core.models.io.notifications import MarkedRead, NotificationCreate, NotificationInbox, NotificationRead
from studentos.server.services.deps import CurrentUser, SessionDep
from studentos.server.services.notifications import notify

router = APIRouter()

INBOX_LIMIT = 50


@router.get(
    "",
    response_model=NotificationInbox,
    summary="Inbox",
    description="The 50 most recent notifications, newest first, and how many are unread.",
)
async def get_inbox(user: CurrentUser, session: SessionDep) -> NotificationInbox:
    repository = NotificationRepository(session)
    notifications = await repository.latest(user.id, INBOX_LIMIT)
    return NotificationInbox(
        notifications=[NotificationRead.model_validate(n) for n in notifications],
        unread_count=await repository.count_unread(user.id),
    )


@router.patch("/read-all", response_model=MarkedRead, summary="Mark All Read")
async def mark_all_read(user: CurrentUser, session: SessionDep) -> MarkedRead:
    return MarkedRead(updated=await NotificationRepository(session).mark_all_read(user.id))


@router.patch(
    "/{notification_id}/read",
    response_model=NotificationRead,
    summary="Mark Read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_read(notification_id: str, user: CurrentUser, session: SessionDep) -> NotificationRead:
    repository = NotificationRepository(session)
    notification = await repository.get_owned(notification_id, user.id)
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return NotificationRead.model_validate(await repository.update(notification, {"is_read": True}))


@router.post("", response_model=NotificationRead, status_code=status.HTTP_201_CREATED, summary="Create Notification")
async def create_notification(body: NotificationCreate, user: CurrentUser, session: SessionDep) -> NotificationRead:
    notification = await notify(session, user.id, body.title, body.message, NotificationType(body.type), body.link)
    return NotificationRead.model_validate(notification)
