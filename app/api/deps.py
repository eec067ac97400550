"""
app/api/deps.py

Purpose: Request-scoped access to application components

- Repositories and TokenService live on app.state, set by the lifespan
"""

from fastapi import Request

from app.core.tokens import TokenService
from app.db.repositories import AccountRepository, AddressRepository, ContactRepository


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_account_repository(request: Request) -> AccountRepository:
    return request.app.state.repositories.accounts


def get_address_repository(request: Request) -> AddressRepository:
    return request.app.state.repositories.addresses


def get_contact_repository(request: Request) -> ContactRepository:
    return request.app.state.repositories.contacts
