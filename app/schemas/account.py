"""
app/schemas/account.py

Purpose: Account request bodies

- Every field is optional at the schema level so that missing values
  reach the handlers and produce their own 400 messages
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SignupRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "jdoe",
                "email": "jdoe@example.com",
                "password": "correct horse battery staple"
            }
        }
    )


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileRequest(BaseModel):
    """
    Profile fields. Absent or null fields are left unchanged.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: Optional[str] = Field(default=None, alias="currentPassword")
    new_password: Optional[str] = Field(default=None, alias="newPassword")
