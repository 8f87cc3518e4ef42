from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from clinic.domain.patients.service import PatientService
from clinic.api.v1.patients.schemas import (
    PatientCreate,
    PatientUpdate,
    PatientResponse,
    GetPatientByIdInput
)
from clinic.infrastructure.database import get_db

router = APIRouter(tags=["Patients"])


@router.post("/createPatient", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    patient_data: PatientCreate,
    db: AsyncSession = Depends(get_db)
):
    """Register a new patient"""
    return await PatientService(db).create_patient(patient_data)


@router.get("/getPatients", response_model=List[PatientResponse], status_code=status.HTTP_200_OK)
async def get_patients(db: AsyncSession = Depends(get_db)):
    """List every patient"""
    return await PatientService(db).get_patients()


@router.get("/getPatientById", response_model=Optional[PatientResponse], status_code=status.HTTP_200_OK)
async def get_patient_by_id(
    patient_id: int = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db)
):
    """Get patient by ID; null when there is no such patient"""
    return await PatientService(db).get_patient_by_id(GetPatientByIdInput(id=patient_id))


@router.post("/updatePatient", response_model=PatientResponse, status_code=status.HTTP_200_OK)
async def update_patient(
    patient_data: PatientUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Partially update a patient"""
    return await PatientService(db).update_patient(patient_data)
