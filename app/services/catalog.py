"""Service catalog: the bookable services offered to customers."""

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service import Service
from app.utils.time import utc_now

logger = logging.getLogger(__name__)

DEFAULT_SERVICES = [
    {
        "name": "General Consultation",
        "description": "Professional consultation with experienced staff",
        "duration_minutes": 30,
        "price": Decimal("30"),
    },
    {
        "name": "Skin Care Session",
        "description": "Refreshing skin treatment for glowing results",
        "duration_minutes": 45,
        "price": Decimal("45"),
    },
    {
        "name": "Business Coaching",
        "description": "One on one growth and strategy guidance",
        "duration_minutes": 60,
        "price": Decimal("60"),
    },
    {
        "name": "Salon Services",
        "description": "Premium hair and beauty services",
        "duration_minutes": 90,
        "price": Decimal("75"),
    },
]


class CatalogService:
    """Lookup and seeding of bookable services."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_service_by_id(self, service_id: str) -> Service | None:
        result = await self.session.execute(
            select(Service).where(Service.id == service_id)
        )
        return result.scalar_one_or_none()

    async def ensure_default_services(self) -> int:
        """Insert the default services when the catalog is empty.

        Returns:
            Number of services inserted
        """
        count = await self.session.scalar(select(func.count()).select_from(Service))
        if count:
            return 0

        # Distinct timestamps keep the catalog in its listed order
        seeded_at = utc_now()
        self.session.add_all(
            Service(**data, created_at=seeded_at + timedelta(microseconds=i))
            for i, data in enumerate(DEFAULT_SERVICES)
        )
        await self.session.commit()

        logger.info(f"Seeded {len(DEFAULT_SERVICES)} default services")
        return len(DEFAULT_SERVICES)

    async def list_active_services(self) -> Sequence[Service]:
        """List active services in creation order, seeding defaults first."""
        await self.ensure_default_services()

        result = await self.session.execute(
            select(Service)
            .where(Service.is_active == True)  # noqa: E712
            .order_by(Service.created_at)
        )
        return result.scalars().all()
