"""
app/services/contact_service.py

Purpose: Contact form submissions
"""

from typing import Dict, Any

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.db.repositories import ContactRepository
from app.schemas.contact import ContactRequest
from utils.document_utils import serialize_document
from utils.validation_utils import missing_fields

logger = get_logger(__name__)


async def submit_contact(contacts: ContactRepository, payload: ContactRequest) -> Dict[str, Any]:
    """
    Stores a contact message.

    Raises:
        ValidationError: name, email or message missing
    """
    if missing_fields({
        "name": payload.name,
        "email": payload.email,
        "message": payload.message,
    }):
        raise ValidationError("Incomplete details")

    contact = await contacts.insert(payload.name, payload.email, payload.message)
    logger.info("Contact message stored")
    return serialize_document(contact)
