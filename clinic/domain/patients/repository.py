from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, update, func

from clinic.core.coercion import utcnow
from clinic.domain.patients.models import Patient


class PatientRepository:
    """Repository for patient data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, patient_data: dict) -> Patient:
        """Insert a patient and return the stored row"""
        now = utcnow()
        patient = Patient(**patient_data, created_at=now, updated_at=now)

        self.db.add(patient)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        await self.db.refresh(patient)

        return patient

    async def get_by_id(self, patient_id: int) -> Optional[Patient]:
        """Get patient by ID"""
        result = await self.db.execute(
            select(Patient)
            .where(Patient.id == patient_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[Patient]:
        """All patients in insertion order"""
        result = await self.db.execute(select(Patient).order_by(Patient.id))
        return list(result.scalars().all())

    async def update(self, patient_id: int, update_data: dict) -> Optional[Patient]:
        """Apply the given columns; None when no row has this id"""
        update_data = {**update_data, "updated_at": utcnow()}
        try:
            result = await self.db.execute(
                update(Patient)
                .where(Patient.id == patient_id)
                .values(**update_data)
            )
            if result.rowcount == 0:
                await self.db.rollback()
                return None
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

        return await self.get_by_id(patient_id)

    async def count(self) -> int:
        """Count registered patients"""
        result = await self.db.execute(select(func.count(Patient.id)))
        return result.scalar()
