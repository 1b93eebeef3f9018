"""Database initialization utilities."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import hash_password
from app.db.base import Base
from app.db.session import engine
from app.models.user import User, UserRole
from app.services.availability import AvailabilityService
from app.services.catalog import CatalogService

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """Create all database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def create_initial_admin(session: AsyncSession) -> User | None:
    """Create initial admin user if none exists.

    Args:
        session: Database session

    Returns:
        Created admin user or None if admin already exists
    """
    result = await session.execute(
        select(User).where(User.role == UserRole.ADMIN.value).limit(1)
    )
    existing_admin = result.scalar_one_or_none()

    if existing_admin:
        logger.info("Admin user already exists, skipping creation")
        return None

    # Credentials come from settings and should be changed after first login
    admin = User(
        name="System Admin",
        email=settings.initial_admin_email.lower(),
        hashed_password=hash_password(settings.initial_admin_password),
        role=UserRole.ADMIN.value,
        is_active=True,
    )
    session.add(admin)
    await session.commit()
    await session.refresh(admin)

    logger.warning(
        f"Created initial admin user {admin.email}. "
        "Change the password immediately!"
    )
    return admin


async def init_db(session: AsyncSession) -> None:
    """Initialize database with required data.

    Seeds the initial admin, the default service catalog and the
    availability settings record. Safe to run on every startup.

    Args:
        session: Database session
    """
    await create_initial_admin(session)
    await CatalogService(session).ensure_default_services()
    await AvailabilityService(session).ensure_settings()
    logger.info("Database initialization complete")
