"""
Database initialization script

Run once (or after changing indexes) to create collections and indexes:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

import logging

from app.core.config import Settings
from app.db.indexes import create_indexes
from app.db.mongo import MongoDatabase, USERS_COLLECTION, ADDRESSES_COLLECTION, CONTACTS_COLLECTION

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


async def main():
    """Main initialization"""
    logger.info("=" * 60)
    logger.info("  Address Book Database Setup")
    logger.info("=" * 60 + "\n")

    settings = Settings()
    db = MongoDatabase(settings)

    logger.info(f"🔌 Connecting to MongoDB: {settings.MONGODB_DB_NAME}")
    await db.connect()

    try:
        await create_indexes(db)

        logger.info("\n🔍 Verifying indexes...")
        for collection_name in [USERS_COLLECTION, ADDRESSES_COLLECTION, CONTACTS_COLLECTION]:
            collection = db.database[collection_name]
            indexes = await collection.index_information()
            count = await collection.count_documents({})
            logger.info(f"\n  {collection_name} ({count} documents):")
            for idx_name in indexes.keys():
                if idx_name != "_id_":
                    logger.info(f"    ✅ {idx_name}")

        logger.info("\n✅ Database initialization complete!")

    except Exception as e:
        logger.error(f"\n❌ Error: {e}")
        raise

    finally:
        await db.close()

    logger.info("\n" + "=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
