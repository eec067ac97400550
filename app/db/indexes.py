"""
app/db/indexes.py

Purpose: Database index management

- Unique username/email indexes guard against duplicate signups
- Lookup index for an account's addresses
"""

from app.db.mongo import MongoDatabase
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(db: MongoDatabase):
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        logger.info("Creating database indexes...")

        # ==============================================
        # USERS COLLECTION INDEXES
        # ==============================================

        await db.users.create_index("username", unique=True, name="username_unique")
        logger.debug("Created unique index on users.username")

        await db.users.create_index("email", unique=True, name="email_unique")
        logger.debug("Created unique index on users.email")

        # ==============================================
        # ADDRESSES COLLECTION INDEXES
        # ==============================================

        await db.addresses.create_index("user", name="address_user_idx")
        logger.debug("Created index on addresses.user")

        # ==============================================
        # CONTACTS COLLECTION INDEXES
        # ==============================================

        await db.contacts.create_index("created_at", name="contact_created_idx")
        logger.debug("Created index on contacts.created_at")

        logger.info("✅ All database indexes created successfully")

        user_indexes = await db.users.index_information()
        address_indexes = await db.addresses.index_information()
        contact_indexes = await db.contacts.index_information()

        logger.info(
            f"Index summary: Users={len(user_indexes)}, "
            f"Addresses={len(address_indexes)}, "
            f"Contacts={len(contact_indexes)}"
        )

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise
