# PHM/backend/phm/routes/contact.py

import logging
from fastapi import APIRouter
from phm.middleware import truncate
from phm.schemas.schemas import ContactMessage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("/")
def send_message(message: ContactMessage):
    # Not stored or mailed yet, the log is the inbox
    logger.info(
        f"Contact form submission from {message.name} <{message.email}> "
        f"subject={message.subject or 'No subject'!r} length={len(message.message)}"
    )
    logger.debug(f"Contact message: {truncate(message.message)}")
    return {"message": "Message sent successfully"}
