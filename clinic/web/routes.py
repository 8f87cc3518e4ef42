"""
Form-driven web UI.

Each entity gets a list page with a creation dialog; patients and checkups
also get a pre-populated edit dialog per row. Form posts are parsed into the
same pydantic inputs the RPC procedures use and go through the same services,
then redirect back to the list so every page load shows fresh data.
"""

from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Type
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.exceptions import BaseCustomException, group_validation_errors
from clinic.infrastructure.database import get_db
from clinic.api.v1.statistics.routes import collect_statistics
from clinic.api.v1.patients.schemas import PatientCreate, PatientUpdate
from clinic.api.v1.deliveries.schemas import DeliveryServiceCreate
from clinic.api.v1.immunizations.schemas import ImmunizationCreate
from clinic.api.v1.checkups.schemas import MedicalCheckupCreate, MedicalCheckupUpdate
from clinic.domain.patients.models import Gender
from clinic.domain.deliveries.models import DeliveryType
from clinic.domain.immunizations.models import VaccineType
from clinic.domain.checkups.models import CheckupType
from clinic.domain.patients.service import PatientService
from clinic.domain.deliveries.service import DeliveryServiceService
from clinic.domain.immunizations.service import ImmunizationService
from clinic.domain.checkups.service import MedicalCheckupService

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter(include_in_schema=False)

# Days ahead of a follow-up date that count as "due soon"
DUE_SOON_DAYS = 7

LABELS = {
    Gender.MALE.value: "Male",
    Gender.FEMALE.value: "Female",
    DeliveryType.NORMAL.value: "Normal",
    DeliveryType.CAESAREAN.value: "Caesarean",
    DeliveryType.ASSISTED.value: "Assisted",
    VaccineType.BASIC.value: "Basic",
    VaccineType.ADDITIONAL.value: "Additional",
    VaccineType.BOOSTER.value: "Booster",
    CheckupType.ROUTINE.value: "Routine",
    CheckupType.PREGNANCY.value: "Pregnancy",
    CheckupType.CHILD.value: "Child",
    CheckupType.ADULT.value: "Adult",
    CheckupType.ELDERLY.value: "Elderly",
}


def label(value: Any) -> str:
    key = getattr(value, "value", value)
    return LABELS.get(key, str(key))


def age(date_of_birth: date, today: Optional[date] = None) -> int:
    """Whole years since date_of_birth"""
    today = today or date.today()
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def follow_up_status(next_date: Optional[date], today: Optional[date] = None) -> Optional[str]:
    """Badge for a follow-up date: overdue when past, due when within DUE_SOON_DAYS"""
    if next_date is None:
        return None
    today = today or date.today()
    days = (next_date - today).days
    if days < 0:
        return "overdue"
    if days <= DUE_SOON_DAYS:
        return "due"
    return None


templates.env.filters["label"] = label
templates.env.globals["age"] = age
templates.env.globals["follow_up_status"] = follow_up_status
templates.env.globals["choices"] = {
    "gender": list(Gender),
    "delivery_type": list(DeliveryType),
    "vaccine_type": list(VaccineType),
    "checkup_type": list(CheckupType),
}


def form_payload(form: Any, fields: Iterable[str]) -> Dict[str, Optional[str]]:
    """Pick the model's fields out of a submitted form.

    Blank inputs become None so optional columns are stored as null.
    """
    payload = {}
    for name in fields:
        if name in form:
            value = form.get(name)
            if isinstance(value, str):
                value = value.strip()
            payload[name] = value if value != "" else None
    return payload


async def parse_form(request: Request, model: Type[BaseModel], **extra) -> BaseModel:
    form = await request.form()
    payload = form_payload(form, model.model_fields)
    payload.update(extra)
    return model.model_validate(payload)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


class PageErrors:
    """Collects a failed submission for re-rendering"""

    def __init__(self, exc: Exception):
        if isinstance(exc, PydanticValidationError):
            self.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
            self.message = "Please correct the highlighted fields."
            self.fields = group_validation_errors(exc.errors())
        else:
            self.status_code = exc.status_code
            self.message = exc.message
            self.fields = {}


# Pages

async def render_patients(request: Request, db: AsyncSession, errors: Optional[PageErrors] = None):
    patients = await PatientService(db).get_patients()
    return templates.TemplateResponse(
        request,
        "patients.html",
        {"active": "patients", "patients": patients, "errors": errors},
        status_code=errors.status_code if errors else status.HTTP_200_OK,
    )


async def render_deliveries(request: Request, db: AsyncSession, errors: Optional[PageErrors] = None):
    patients = await PatientService(db).get_patients()
    deliveries = await DeliveryServiceService(db).get_delivery_services()
    return templates.TemplateResponse(
        request,
        "deliveries.html",
        {
            "active": "deliveries",
            "patients": patients,
            "patient_names": {p.id: p.name for p in patients},
            "deliveries": deliveries,
            "errors": errors,
        },
        status_code=errors.status_code if errors else status.HTTP_200_OK,
    )


async def render_immunizations(request: Request, db: AsyncSession, errors: Optional[PageErrors] = None):
    patients = await PatientService(db).get_patients()
    immunizations = await ImmunizationService(db).get_immunizations()
    return templates.TemplateResponse(
        request,
        "immunizations.html",
        {
            "active": "immunizations",
            "patients": patients,
            "patient_names": {p.id: p.name for p in patients},
            "immunizations": immunizations,
            "errors": errors,
        },
        status_code=errors.status_code if errors else status.HTTP_200_OK,
    )


async def render_checkups(request: Request, db: AsyncSession, errors: Optional[PageErrors] = None):
    patients = await PatientService(db).get_patients()
    checkups = await MedicalCheckupService(db).get_medical_checkups()
    return templates.TemplateResponse(
        request,
        "checkups.html",
        {
            "active": "checkups",
            "patients": patients,
            "patient_names": {p.id: p.name for p in patients},
            "checkups": checkups,
            "errors": errors,
        },
        status_code=errors.status_code if errors else status.HTTP_200_OK,
    )


@router.get("/")
async def dashboard(request: Request, db: AsyncSession = Depends(get_db)):
    stats = await collect_statistics(db)
    return templates.TemplateResponse(
        request, "dashboard.html", {"active": "dashboard", "stats": stats}
    )


@router.get("/patients")
async def patients_page(request: Request, db: AsyncSession = Depends(get_db)):
    return await render_patients(request, db)


@router.post("/patients")
async def submit_patient(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        patient_data = await parse_form(request, PatientCreate)
        await PatientService(db).create_patient(patient_data)
    except (PydanticValidationError, BaseCustomException) as e:
        logger.warning(f"Patient form rejected: {e}")
        return await render_patients(request, db, PageErrors(e))
    return redirect("/patients")


@router.post("/patients/{patient_id}")
async def submit_patient_edit(patient_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    try:
        patient_data = await parse_form(request, PatientUpdate, id=patient_id)
        await PatientService(db).update_patient(patient_data)
    except (PydanticValidationError, BaseCustomException) as e:
        logger.warning(f"Patient edit form rejected: {e}")
        return await render_patients(request, db, PageErrors(e))
    return redirect("/patients")


@router.get("/deliveries")
async def deliveries_page(request: Request, db: AsyncSession = Depends(get_db)):
    return await render_deliveries(request, db)


@router.post("/deliveries")
async def submit_delivery(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        delivery_data = await parse_form(request, DeliveryServiceCreate)
        await DeliveryServiceService(db).create_delivery_service(delivery_data)
    except (PydanticValidationError, BaseCustomException) as e:
        logger.warning(f"Delivery form rejected: {e}")
        return await render_deliveries(request, db, PageErrors(e))
    return redirect("/deliveries")


@router.get("/immunizations")
async def immunizations_page(request: Request, db: AsyncSession = Depends(get_db)):
    return await render_immunizations(request, db)


@router.post("/immunizations")
async def submit_immunization(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        immunization_data = await parse_form(request, ImmunizationCreate)
        await ImmunizationService(db).create_immunization(immunization_data)
    except (PydanticValidationError, BaseCustomException) as e:
        logger.warning(f"Immunization form rejected: {e}")
        return await render_immunizations(request, db, PageErrors(e))
    return redirect("/immunizations")


@router.get("/checkups")
async def checkups_page(request: Request, db: AsyncSession = Depends(get_db)):
    return await render_checkups(request, db)


@router.post("/checkups")
async def submit_checkup(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        checkup_data = await parse_form(request, MedicalCheckupCreate)
        await MedicalCheckupService(db).create_medical_checkup(checkup_data)
    except (PydanticValidationError, BaseCustomException) as e:
        logger.warning(f"Checkup form rejected: {e}")
        return await render_checkups(request, db, PageErrors(e))
    return redirect("/checkups")


@router.post("/checkups/{checkup_id}")
async def submit_checkup_edit(checkup_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    try:
        checkup_data = await parse_form(request, MedicalCheckupUpdate, id=checkup_id)
        await MedicalCheckupService(db).update_medical_checkup(checkup_data)
    except (PydanticValidationError, BaseCustomException) as e:
        logger.warning(f"Checkup edit form rejected: {e}")
        return await render_checkups(request, db, PageErrors(e))
    return redirect("/checkups")
