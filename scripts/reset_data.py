"""
Reset the console data to the built-in defaults.

Run this script to wipe every stored collection, the session pointer and the
sidebar preference, then reseed:
- Default departments and categories
- Default roles (including the super administrator)
- Sample users and documents
- Default branding configuration

Usage:
    python -m scripts.reset_data
"""
import asyncio

from docuflow.core.database.engine import AsyncSessionLocal, engine, init_db
from docuflow.core.store import PersistentStore
from docuflow.features.configuration.backup import reset_data
from docuflow.utils import get_logger


log = get_logger(__name__)


async def main():
    """Main function to reset and reseed the store."""
    log.info("Starting data reset...")

    # Initialize database tables first
    log.info("Initializing database tables...")
    await init_db()

    try:
        state = await reset_data(PersistentStore(AsyncSessionLocal))
    except Exception as e:
        log.error(f"Error resetting data: {e}", exc_info=True)
        raise
    finally:
        await engine.dispose()

    log.info("Data reset completed successfully!")
    log.info("")
    log.info("Default roles created:")
    for role in state.roles:
        log.info(f"  - {role.name}: {role.description}")
    log.info("Sign-in accounts:")
    for user in state.users:
        log.info(f"  - {user.email} ({user.status})")


if __name__ == "__main__":
    asyncio.run(main())
