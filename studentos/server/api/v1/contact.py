"""Public contact form."""

from fastapi import APIRouter, status

from studentos.core.database.entities import ContactMessage
from studentos.core.database.repositories import ContactMessageRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.io.contact import ContactMessageCreate, ContactMessageRead
from studentos.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ContactMessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send Contact Message",
    description="Store a message from the public contact form for the admin inbox.",
)
async def send_message(body: ContactMessageCreate, session: SessionDep) -> ContactMessageRead:
    message = await ContactMessageRepository(session).create(ContactMessage(**body.model_dump()))
    logger.info(f"Contact message {message.id} received")
    return ContactMessageRead.model_validate(message)
