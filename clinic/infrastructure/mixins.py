from sqlalchemy import Column, DateTime
from clinic.core.coercion import utcnow


class TimestampMixin:
    """created_at / updated_at stamped by the application at call time"""
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
