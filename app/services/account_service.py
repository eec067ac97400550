"""
app/services/account_service.py

Purpose: Account management

- Signup and login, issuing bearer tokens
- Profile retrieval and update for the authenticated account
- Password change with re-hashing
"""

from typing import Dict, Any

from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ValidationError, ConflictError, ResourceNotFoundError
from app.core.logging import get_logger, LogContext
from app.core.security import verify_password
from app.core.tokens import TokenService
from app.db.repositories import AccountRepository
from app.schemas.account import (
    SignupRequest,
    LoginRequest,
    UpdateProfileRequest,
    ChangePasswordRequest,
)
from utils.document_utils import serialize_document
from utils.validation_utils import missing_fields, is_blank

logger = get_logger(__name__)

# Request field -> stored field
PROFILE_FIELDS = {
    "first_name": "firstname",
    "last_name": "lastname",
    "email": "email",
    "phone": "phone",
}


async def signup(
    accounts: AccountRepository,
    tokens: TokenService,
    payload: SignupRequest
) -> str:
    """
    Creates an account and returns a token scoped to it.

    Raises:
        ValidationError: a field is missing
        ConflictError: username or email already taken
    """
    if missing_fields({
        "username": payload.username,
        "email": payload.email,
        "password": payload.password,
    }):
        raise ValidationError("All fields are required")

    existing = await accounts.find_by_username_or_email(payload.username, payload.email)
    if existing:
        raise ConflictError("Username or email already exists")

    try:
        account = await accounts.insert(payload.username, payload.email, payload.password)
    except DuplicateKeyError as e:
        # Lost a race with a concurrent signup; the unique index caught it
        raise ConflictError("Username or email already exists") from e

    account_id = str(account["_id"])
    logger.info("New account created", extra={"account_id": account_id})
    return tokens.issue(account_id)


async def login(
    accounts: AccountRepository,
    tokens: TokenService,
    payload: LoginRequest
) -> str:
    """
    Checks credentials and returns a fresh token.

    Raises:
        ValidationError: missing field, unknown email or wrong password
    """
    if missing_fields({"email": payload.email, "password": payload.password}):
        raise ValidationError("Email and password are required")

    account = await accounts.find_by_email(payload.email)
    if not account:
        raise ValidationError("User with this email does not exist")

    account_id = str(account["_id"])
    if not verify_password(payload.password, account.get("password")):
        logger.warning("Login with wrong password", extra={"account_id": account_id})
        raise ValidationError("Invalid password")

    logger.info("Account logged in", extra={"account_id": account_id})
    return tokens.issue(account_id)


async def get_profile(accounts: AccountRepository, account_id: str) -> Dict[str, Any]:
    """
    Returns the account document without its password.

    Raises:
        ResourceNotFoundError: account no longer exists
    """
    account = await accounts.find_by_id(account_id)
    if not account:
        raise ResourceNotFoundError("User not found")
    return serialize_document(account)


async def update_profile(
    accounts: AccountRepository,
    account_id: str,
    payload: UpdateProfileRequest
) -> Dict[str, Any]:
    """
    Overwrites the supplied profile fields. Fields left out of the
    request keep their stored values.

    Raises:
        ValidationError: email supplied but empty
        ConflictError: email belongs to another account
        ResourceNotFoundError: account no longer exists
    """
    submitted = payload.model_dump(exclude_none=True)
    fields = {PROFILE_FIELDS[key]: value for key, value in submitted.items()}

    if "email" in fields and is_blank(fields["email"]):
        raise ValidationError("Email cannot be empty")

    with LogContext(account_id=account_id):
        try:
            updated = await accounts.update_fields(account_id, fields)
        except DuplicateKeyError as e:
            raise ConflictError("Email already in use") from e

        if updated is None:
            logger.warning("Profile update for missing account")
            raise ResourceNotFoundError("User not found")

        logger.info(f"Profile updated: {sorted(fields)}")
        return serialize_document(updated)


async def change_password(
    accounts: AccountRepository,
    account_id: str,
    payload: ChangePasswordRequest
) -> str:
    """
    Verifies the current password and stores a hash of the new one.

    Raises:
        ValidationError: missing field or wrong current password
        ResourceNotFoundError: account no longer exists
    """
    if missing_fields({
        "currentPassword": payload.current_password,
        "newPassword": payload.new_password,
    }):
        raise ValidationError("Current password and new password are required")

    with LogContext(account_id=account_id):
        account = await accounts.find_by_id(account_id, include_password=True)
        if not account:
            raise ResourceNotFoundError("User not found")

        if not verify_password(payload.current_password, account.get("password")):
            logger.warning("Password change with wrong current password")
            raise ValidationError("Current password is incorrect")

        if not await accounts.set_password(account_id, payload.new_password):
            raise ResourceNotFoundError("User not found")

        logger.info("Password changed")
        return "Password updated successfully"
