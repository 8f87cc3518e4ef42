from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.domain.patients.service import PatientService
from clinic.domain.deliveries.service import DeliveryServiceService
from clinic.domain.immunizations.service import ImmunizationService
from clinic.domain.checkups.service import MedicalCheckupService
from clinic.api.v1.statistics.schemas import StatisticsResponse
from clinic.infrastructure.database import get_db

router = APIRouter(tags=["Statistics"])


async def collect_statistics(db: AsyncSession) -> StatisticsResponse:
    return StatisticsResponse(
        patients=await PatientService(db).count_patients(),
        delivery_services=await DeliveryServiceService(db).count_delivery_services(),
        immunizations=await ImmunizationService(db).count_immunizations(),
        medical_checkups=await MedicalCheckupService(db).count_medical_checkups(),
    )


@router.get("/getStatistics", response_model=StatisticsResponse)
async def get_statistics(db: AsyncSession = Depends(get_db)):
    """Counts per entity"""
    return await collect_statistics(db)
