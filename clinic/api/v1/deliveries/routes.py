from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from clinic.domain.deliveries.service import DeliveryServiceService
from clinic.api.v1.common import GetByPatientIdInput
from clinic.api.v1.deliveries.schemas import DeliveryServiceCreate, DeliveryServiceResponse
from clinic.infrastructure.database import get_db

router = APIRouter(tags=["Delivery Services"])


@router.post(
    "/createDeliveryService",
    response_model=DeliveryServiceResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_delivery_service(
    delivery_data: DeliveryServiceCreate,
    db: AsyncSession = Depends(get_db)
):
    """Record a delivery"""
    return await DeliveryServiceService(db).create_delivery_service(delivery_data)


@router.get("/getDeliveryServices", response_model=List[DeliveryServiceResponse])
async def get_delivery_services(db: AsyncSession = Depends(get_db)):
    return await DeliveryServiceService(db).get_delivery_services()


@router.get("/getDeliveryServicesByPatient", response_model=List[DeliveryServiceResponse])
async def get_delivery_services_by_patient(
    patient_id: int = Query(..., alias="patientId"),
    db: AsyncSession = Depends(get_db)
):
    return await DeliveryServiceService(db).get_delivery_services_by_patient(
        GetByPatientIdInput(patientId=patient_id)
    )
