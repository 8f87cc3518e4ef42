from pydantic import BaseModel


class StatisticsResponse(BaseModel):
    """Record counts shown on the dashboard cards"""
    patients: int
    delivery_services: int
    immunizations: int
    medical_checkups: int
