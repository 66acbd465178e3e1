"""
Expiry sweep task.

Moves AVAILABLE reward accounts past their expiry age to EXPIRED.
Runs periodically; each run uses its own session.
"""

from datetime import datetime

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reward_vault.config.settings import Settings, settings
from reward_vault.services.reward_distribution_service import create_distribution_service
from reward_vault.utils.encryption import SecretCipher, create_cipher


async def run_expiry_sweep(
    session_maker: async_sessionmaker[AsyncSession] | None = None,
    cipher: SecretCipher | None = None,
    config: Settings | None = None,
    now: datetime | None = None,
) -> int:
    """
    Expire stale reward accounts.

    Accounts claimed while the sweep runs keep their assignment; each row is
    expired by its own conditional write.

    Args:
        session_maker: Session factory (defaults to the application one)
        cipher: Credential cipher (built from settings if omitted)
        config: Settings to use (defaults to the loaded settings)
        now: Reference time (defaults to current UTC time)

    Returns:
        Number of accounts expired
    """
    config = config or settings
    if session_maker is None:
        from reward_vault.config.database import async_session_maker

        session_maker = async_session_maker
    if cipher is None:
        cipher = create_cipher(config.encryption_secret, config.encryption_salt)

    logger.info("Starting reward expiry sweep")

    async with session_maker() as session:
        try:
            service = create_distribution_service(session, cipher, config)
            expired = await service.mark_expired(now)
        except Exception as e:
            logger.error(f"Error in reward expiry sweep: {type(e).__name__}: {e}")
            await session.rollback()
            raise

    logger.info(f"Reward expiry sweep completed: {expired} accounts expired")
    return expired
