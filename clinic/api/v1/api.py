from datetime import datetime, timezone
from fastapi import APIRouter

from clinic.core.exceptions import ErrorResponse, ValidationErrorResponse

from clinic.api.v1.patients import routes as patients
from clinic.api.v1.deliveries import routes as deliveries
from clinic.api.v1.immunizations import routes as immunizations
from clinic.api.v1.checkups import routes as checkups
from clinic.api.v1.statistics import routes as statistics

# Procedures are addressed by name: /rpc/createPatient, /rpc/getPatients, ...
api_router = APIRouter(
    responses={
        404: {"model": ErrorResponse},
        422: {"model": ValidationErrorResponse},
        500: {"model": ErrorResponse},
    }
)
api_router.include_router(patients.router)
api_router.include_router(deliveries.router)
api_router.include_router(immunizations.router)
api_router.include_router(checkups.router)
api_router.include_router(statistics.router)


@api_router.get("/healthcheck", tags=["Health"])
async def healthcheck():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
