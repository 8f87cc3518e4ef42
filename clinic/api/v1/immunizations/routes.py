from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from clinic.domain.immunizations.service import ImmunizationService
from clinic.api.v1.common import GetByPatientIdInput
from clinic.api.v1.immunizations.schemas import ImmunizationCreate, ImmunizationResponse
from clinic.infrastructure.database import get_db

router = APIRouter(tags=["Immunizations"])


@router.post(
    "/createImmunization",
    response_model=ImmunizationResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_immunization(
    immunization_data: ImmunizationCreate,
    db: AsyncSession = Depends(get_db)
):
    """Record a vaccination"""
    return await ImmunizationService(db).create_immunization(immunization_data)


@router.get("/getImmunizations", response_model=List[ImmunizationResponse])
async def get_immunizations(db: AsyncSession = Depends(get_db)):
    return await ImmunizationService(db).get_immunizations()


@router.get("/getImmunizationsByPatient", response_model=List[ImmunizationResponse])
async def get_immunizations_by_patient(
    patient_id: int = Query(..., alias="patientId"),
    db: AsyncSession = Depends(get_db)
):
    return await ImmunizationService(db).get_immunizations_by_patient(
        GetByPatientIdInput(patientId=patient_id)
    )
