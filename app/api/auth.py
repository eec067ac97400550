"""
app/api/auth.py

Purpose: Account endpoints

- router: POST /signup, POST /login (public)
- account_router: GET /users/me, PUT /update, PUT /change-password (Bearer)
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from pymongo.errors import PyMongoError

from app.api.deps import get_account_repository, get_token_service
from app.core.auth import BearerProtectedRoute, get_current_account_id
from app.core.exceptions import PersistenceError
from app.core.logging import get_logger
from app.core.tokens import TokenService
from app.db.repositories import AccountRepository
from app.schemas.account import (
    SignupRequest,
    LoginRequest,
    UpdateProfileRequest,
    ChangePasswordRequest,
)
from app.schemas.response import TokenResponse, MessageResponse
from app.services import account_service

logger = get_logger(__name__)
router = APIRouter()
account_router = APIRouter(route_class=BearerProtectedRoute)


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
async def signup(
    payload: Optional[SignupRequest] = None,
    accounts: AccountRepository = Depends(get_account_repository),
    tokens: TokenService = Depends(get_token_service),
):
    """Creates an account and returns a token for it."""
    try:
        token = await account_service.signup(accounts, tokens, payload or SignupRequest())
    except PyMongoError as e:
        logger.error(f"Error during signup: {e}", exc_info=True)
        raise PersistenceError("An error occurred during signup") from e
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: Optional[LoginRequest] = None,
    accounts: AccountRepository = Depends(get_account_repository),
    tokens: TokenService = Depends(get_token_service),
):
    try:
        token = await account_service.login(accounts, tokens, payload or LoginRequest())
    except PyMongoError as e:
        logger.error(f"Error during login: {e}", exc_info=True)
        raise PersistenceError("An error occurred during login") from e
    return TokenResponse(token=token)


@account_router.get("/users/me")
async def get_me(
    account_id: str = Depends(get_current_account_id),
    accounts: AccountRepository = Depends(get_account_repository),
):
    """Returns the authenticated account, without its password."""
    try:
        return await account_service.get_profile(accounts, account_id)
    except PyMongoError as e:
        logger.error(f"Error fetching user data: {e}", exc_info=True)
        raise PersistenceError("Failed to fetch user data") from e


@account_router.put("/update")
async def update_me(
    payload: Optional[UpdateProfileRequest] = None,
    account_id: str = Depends(get_current_account_id),
    accounts: AccountRepository = Depends(get_account_repository),
):
    try:
        return await account_service.update_profile(accounts, account_id, payload or UpdateProfileRequest())
    except PyMongoError as e:
        logger.error(f"Error updating user information: {e}", exc_info=True)
        raise PersistenceError("Failed to update user information") from e


@account_router.put("/change-password", response_model=MessageResponse)
async def change_password(
    payload: Optional[ChangePasswordRequest] = None,
    account_id: str = Depends(get_current_account_id),
    accounts: AccountRepository = Depends(get_account_repository),
):
    try:
        message = await account_service.change_password(accounts, account_id, payload or ChangePasswordRequest())
    except PyMongoError as e:
        logger.error(f"Error changing password: {e}", exc_info=True)
        raise PersistenceError("Failed to change password") from e
    return MessageResponse(message=message)
