"""Creating in-app notifications from other features."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from studentos.core.database.entities import Notification
from studentos.core.database.repositories import NotificationRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import NotificationType

logger = get_logger(__name__)


async def notify(
    session: AsyncSession,
    user_id: str,
    title: str,
    message: Optional[str] = None,
    type: NotificationType = NotificationType.INFO,
    link: Optional[str] = None,
) -> Notification:
    """Store a notification for ``user_id``; it shows up in their inbox on the next fetch."""
    notification = await NotificationRepository(session).create(
        Notification(user_id=user_id, title=title, message=message, type=type.value, link=link)
    )
    logger.debug(f"Notification {notification.id} queued for user {user_id}")
    return notification
