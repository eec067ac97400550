"""
app/api/addresses.py

Purpose: Address endpoints (Bearer)

- POST /addresses/add
- GET /addresses
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from pymongo.errors import PyMongoError

from app.api.deps import get_address_repository
from app.core.auth import BearerProtectedRoute, get_current_account_id
from app.core.exceptions import PersistenceError
from app.core.logging import get_logger
from app.db.repositories import AddressRepository
from app.schemas.address import AddAddressRequest
from app.services import address_service

logger = get_logger(__name__)
router = APIRouter(route_class=BearerProtectedRoute)


@router.post("/add", status_code=status.HTTP_201_CREATED)
async def add_address(
    payload: Optional[AddAddressRequest] = None,
    account_id: str = Depends(get_current_account_id),
    addresses: AddressRepository = Depends(get_address_repository),
):
    try:
        address = await address_service.add_address(addresses, account_id, (payload or AddAddressRequest()).combined_address)
    except PyMongoError as e:
        logger.error(f"Error adding address: {e}", exc_info=True)
        raise PersistenceError("Server error") from e
    return {"message": "Address added successfully", "address": address}


@router.get("")
async def list_addresses(
    account_id: str = Depends(get_current_account_id),
    addresses: AddressRepository = Depends(get_address_repository),
):
    """Lists the authenticated account's addresses."""
    try:
        return await address_service.list_addresses(addresses, account_id)
    except PyMongoError as e:
        logger.error(f"Error listing addresses: {e}", exc_info=True)
        raise PersistenceError("Server error") from e
