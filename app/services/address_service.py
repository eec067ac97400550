"""
app/services/address_service.py

Purpose: Postal addresses owned by an account

- Parses the single-string address form
- Stores addresses against the authenticated account
- Lists an account's own addresses
"""

from typing import Dict, Any, List, Optional

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.db.repositories import AddressRepository
from utils.document_utils import serialize_document
from utils.validation_utils import split_positional, missing_fields

logger = get_logger(__name__)

# Order of the comma-separated segments
ADDRESS_FIELDS = ["street", "city", "state", "country", "postalCode"]


def parse_combined_address(combined: Optional[str]) -> Dict[str, str]:
    """
    Splits "street, city, state, country, postal code" into fields.

    Raises:
        ValidationError: input absent, fewer than five segments, or a
        blank segment
    """
    if not isinstance(combined, str):
        raise ValidationError("Incomplete address")

    fields = split_positional(combined, ADDRESS_FIELDS)
    if missing_fields(fields):
        raise ValidationError("Incomplete address")

    return fields


async def add_address(
    addresses: AddressRepository,
    account_id: str,
    combined: Optional[str]
) -> Dict[str, Any]:
    fields = parse_combined_address(combined)
    address = await addresses.insert(account_id, fields)
    logger.info("Address added", extra={"account_id": account_id})
    return serialize_document(address)


async def list_addresses(addresses: AddressRepository, account_id: str) -> List[Dict[str, Any]]:
    return [serialize_document(a) for a in await addresses.list_for_account(account_id)]
