"""
app/api/contacts.py

Purpose: Public contact form endpoint

- POST /contact
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from pymongo.errors import PyMongoError

from app.api.deps import get_contact_repository
from app.core.exceptions import PersistenceError
from app.core.logging import get_logger
from app.db.repositories import ContactRepository
from app.schemas.contact import ContactRequest
from app.services import contact_service

logger = get_logger(__name__)
router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_contact(
    payload: Optional[ContactRequest] = None,
    contacts: ContactRepository = Depends(get_contact_repository),
):
    try:
        contact = await contact_service.submit_contact(contacts, payload or ContactRequest())
    except PyMongoError as e:
        logger.error(f"Error storing contact message: {e}", exc_info=True)
        raise PersistenceError("Server error") from e
    return {"message": "Message sent successfully", "contact": contact}
