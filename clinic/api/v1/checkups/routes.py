from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from clinic.domain.checkups.service import MedicalCheckupService
from clinic.api.v1.common import GetByPatientIdInput
from clinic.api.v1.checkups.schemas import (
    MedicalCheckupCreate,
    MedicalCheckupUpdate,
    MedicalCheckupResponse
)
from clinic.infrastructure.database import get_db

router = APIRouter(tags=["Medical Checkups"])


@router.post(
    "/createMedicalCheckup",
    response_model=MedicalCheckupResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_medical_checkup(
    checkup_data: MedicalCheckupCreate,
    db: AsyncSession = Depends(get_db)
):
    """Log a medical checkup"""
    return await MedicalCheckupService(db).create_medical_checkup(checkup_data)


@router.get("/getMedicalCheckups", response_model=List[MedicalCheckupResponse])
async def get_medical_checkups(db: AsyncSession = Depends(get_db)):
    return await MedicalCheckupService(db).get_medical_checkups()


@router.get("/getMedicalCheckupsByPatient", response_model=List[MedicalCheckupResponse])
async def get_medical_checkups_by_patient(
    patient_id: int = Query(..., alias="patientId"),
    db: AsyncSession = Depends(get_db)
):
    """A patient's checkups, most recent first"""
    return await MedicalCheckupService(db).get_medical_checkups_by_patient(
        GetByPatientIdInput(patientId=patient_id)
    )


@router.post("/updateMedicalCheckup", response_model=MedicalCheckupResponse)
async def update_medical_checkup(
    checkup_data: MedicalCheckupUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Partially update a checkup"""
    return await MedicalCheckupService(db).update_medical_checkup(checkup_data)
