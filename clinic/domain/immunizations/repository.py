from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func

from clinic.core.coercion import utcnow
from clinic.domain.immunizations.models import Immunization


class ImmunizationRepository:
    """Repository for immunization data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, immunization_data: dict) -> Immunization:
        """Insert a vaccination record and return the stored row"""
        now = utcnow()
        immunization = Immunization(**immunization_data, created_at=now, updated_at=now)

        self.db.add(immunization)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        await self.db.refresh(immunization)

        return immunization

    async def get_all(self) -> List[Immunization]:
        result = await self.db.execute(
            select(Immunization).order_by(Immunization.id)
        )
        return list(result.scalars().all())

    async def get_by_patient_id(self, patient_id: int) -> List[Immunization]:
        """Vaccination history of a patient"""
        result = await self.db.execute(
            select(Immunization)
            .where(Immunization.patient_id == patient_id)
            .order_by(Immunization.id)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Immunization.id)))
        return result.scalar()
