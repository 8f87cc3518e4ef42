from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func

from clinic.core.coercion import to_decimal, utcnow
from clinic.domain.deliveries.models import DeliveryService, BABY_WEIGHT_SCALE


class DeliveryServiceRepository:
    """Repository for delivery record data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, delivery_data: dict) -> DeliveryService:
        """Insert a delivery record and return the stored row"""
        delivery_data = dict(delivery_data)
        delivery_data["baby_weight"] = to_decimal(delivery_data["baby_weight"], BABY_WEIGHT_SCALE)

        now = utcnow()
        delivery = DeliveryService(**delivery_data, created_at=now, updated_at=now)

        self.db.add(delivery)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        await self.db.refresh(delivery)

        return delivery

    async def get_all(self) -> List[DeliveryService]:
        result = await self.db.execute(
            select(DeliveryService).order_by(DeliveryService.id)
        )
        return list(result.scalars().all())

    async def get_by_patient_id(self, patient_id: int) -> List[DeliveryService]:
        """All deliveries recorded for a patient"""
        result = await self.db.execute(
            select(DeliveryService)
            .where(DeliveryService.patient_id == patient_id)
            .order_by(DeliveryService.id)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(DeliveryService.id)))
        return result.scalar()
