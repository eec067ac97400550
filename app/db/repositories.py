"""
app/db/repositories.py

Purpose: Narrow per-collection data access

- AccountRepository: lookups, inserts and field updates on users
- AddressRepository: inserts and per-account listing
- ContactRepository: inserts
- Plaintext passwords are hashed here, before anything reaches MongoDB
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any, List

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from app.core.security import hash_password
from app.db.mongo import MongoDatabase
from utils.document_utils import to_object_id
from utils.time_utils import utc_now

# Projection hiding the stored digest
WITHOUT_PASSWORD = {"password": 0}


class AccountRepository:
    """Data access for the users collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self._collection = collection

    async def find_by_username_or_email(self, username: str, email: str) -> Optional[Dict[str, Any]]:
        return await self._collection.find_one(
            {"$or": [{"username": username}, {"email": email}]}
        )

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self._collection.find_one({"email": email})

    async def find_by_id(self, account_id: str, include_password: bool = False) -> Optional[Dict[str, Any]]:
        """
        Retrieves an account by id.

        Args:
            account_id: Account id as found in the token
            include_password: Keep the stored digest in the result

        Returns:
            Account document or None if not found
        """
        oid = to_object_id(account_id)
        if oid is None:
            return None
        projection = None if include_password else WITHOUT_PASSWORD
        return await self._collection.find_one({"_id": oid}, projection)

    async def insert(self, username: str, email: str, password: str) -> Dict[str, Any]:
        """
        Creates an account. The password is hashed before insertion.

        Returns:
            The stored document, including its new _id
        """
        now = utc_now()
        document = {
            "username": username,
            "email": email,
            "password": hash_password(password),
            "created_at": now,
            "updated_at": now,
        }
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    async def update_fields(self, account_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Sets the given fields and returns the updated document without
        its password, or None when no account matches.
        """
        oid = to_object_id(account_id)
        if oid is None:
            return None
        return await self._collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updated_at": utc_now()}},
            projection=WITHOUT_PASSWORD,
            return_document=ReturnDocument.AFTER,
        )

    async def set_password(self, account_id: str, new_password: str) -> bool:
        """
        Replaces the stored digest with a fresh hash of new_password.

        Returns:
            True if an account matched
        """
        oid = to_object_id(account_id)
        if oid is None:
            return False
        result = await self._collection.update_one(
            {"_id": oid},
            {"$set": {"password": hash_password(new_password), "updated_at": utc_now()}},
        )
        return result.matched_count > 0


class AddressRepository:
    """Data access for the addresses collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self._collection = collection

    async def insert(self, account_id: str, fields: Dict[str, str]) -> Dict[str, Any]:
        document = {
            **fields,
            "user": to_object_id(account_id),
            "created_at": utc_now(),
        }
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    async def list_for_account(self, account_id: str) -> List[Dict[str, Any]]:
        oid = to_object_id(account_id)
        if oid is None:
            return []
        cursor = self._collection.find({"user": oid})
        return await cursor.to_list(length=None)


class ContactRepository:
    """Data access for the contacts collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self._collection = collection

    async def insert(self, name: str, email: str, message: str) -> Dict[str, Any]:
        document = {
            "name": name,
            "email": email,
            "message": message,
            "created_at": utc_now(),
        }
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document


@dataclass
class Repositories:
    """The repositories a running application hands to its routes."""

    accounts: AccountRepository
    addresses: AddressRepository
    contacts: ContactRepository

    @classmethod
    def from_database(cls, db: MongoDatabase) -> "Repositories":
        return cls(
            accounts=AccountRepository(db.users),
            addresses=AddressRepository(db.addresses),
            contacts=ContactRepository(db.contacts),
        )
