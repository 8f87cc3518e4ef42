from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, update, func

from clinic.core.coercion import to_decimal, utcnow
from clinic.domain.checkups.models import MedicalCheckup, DECIMAL_SCALES


def _quantize_vitals(data: dict) -> dict:
    """Fix numeric vitals to their column scale; only touches keys present"""
    data = dict(data)
    for field, places in DECIMAL_SCALES.items():
        if field in data:
            data[field] = to_decimal(data[field], places)
    return data


class MedicalCheckupRepository:
    """Repository for medical checkup data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, checkup_data: dict) -> MedicalCheckup:
        """Insert a checkup and return the stored row"""
        now = utcnow()
        checkup = MedicalCheckup(**_quantize_vitals(checkup_data), created_at=now, updated_at=now)

        self.db.add(checkup)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        await self.db.refresh(checkup)

        return checkup

    async def get_by_id(self, checkup_id: int) -> Optional[MedicalCheckup]:
        result = await self.db.execute(
            select(MedicalCheckup)
            .where(MedicalCheckup.id == checkup_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[MedicalCheckup]:
        result = await self.db.execute(
            select(MedicalCheckup).order_by(MedicalCheckup.id)
        )
        return list(result.scalars().all())

    async def get_by_patient_id(self, patient_id: int) -> List[MedicalCheckup]:
        """Checkups of a patient, most recent checkup_date first"""
        result = await self.db.execute(
            select(MedicalCheckup)
            .where(MedicalCheckup.patient_id == patient_id)
            .order_by(MedicalCheckup.checkup_date.desc(), MedicalCheckup.id.desc())
        )
        return list(result.scalars().all())

    async def update(self, checkup_id: int, update_data: dict) -> Optional[MedicalCheckup]:
        """Apply the given columns; None when no row has this id"""
        update_data = {**_quantize_vitals(update_data), "updated_at": utcnow()}
        try:
            result = await self.db.execute(
                update(MedicalCheckup)
                .where(MedicalCheckup.id == checkup_id)
                .values(**update_data)
            )
            if result.rowcount == 0:
                await self.db.rollback()
                return None
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

        return await self.get_by_id(checkup_id)

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(MedicalCheckup.id)))
        return result.scalar()
