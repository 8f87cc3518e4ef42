from datetime import datetime, timezone
from typing import Dict, Any, Optional
from fastapi import status
from pydantic import BaseModel
import logging

logger = logging.getLogger(__name__)


class BaseCustomException(Exception):
    """Base class for custom exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(BaseCustomException):
    """Exception for validation errors"""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code=error_code or "VALIDATION_ERROR"
        )


class NotFoundError(BaseCustomException):
    """Exception for resource not found errors"""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code=error_code or "NOT_FOUND_ERROR"
        )


class PatientReferenceError(NotFoundError):
    """A clinical record points at a patient that does not exist"""

    def __init__(self, patient_id: int):
        self.patient_id = patient_id
        super().__init__(
            message=f"Patient with id {patient_id} not found",
            details={"patient_id": patient_id},
            error_code="PATIENT_NOT_FOUND"
        )


class DatabaseError(BaseCustomException):
    """Exception for database errors"""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code=error_code or "DATABASE_ERROR"
        )


# Response models for errors
class ErrorResponse(BaseModel):
    """Standard error response model"""
    error: str
    message: str
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: Optional[str] = None
    request_id: Optional[str] = None


class ValidationErrorResponse(BaseModel):
    """Validation error response model"""
    error: str = "Validation Error"
    message: str
    error_code: Optional[str] = None
    validation_errors: Optional[Dict[str, list]] = None
    timestamp: Optional[str] = None
    request_id: Optional[str] = None


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_error_response(
    exception: BaseCustomException,
    request_id: Optional[str] = None
) -> Dict[str, Any]:
    """Create standardized error response"""
    response = {
        "error": exception.__class__.__name__.replace("Error", " Error"),
        "message": exception.message,
        "error_code": exception.error_code,
        "timestamp": _timestamp(),
        "request_id": request_id
    }

    if exception.details:
        response["details"] = exception.details

    return response


def create_validation_error_response(
    exception: ValidationError,
    validation_errors: Optional[Dict[str, list]] = None,
    request_id: Optional[str] = None
) -> Dict[str, Any]:
    """Create validation error response"""
    response = {
        "error": "Validation Error",
        "message": exception.message,
        "error_code": exception.error_code,
        "timestamp": _timestamp(),
        "request_id": request_id
    }

    if validation_errors:
        response["validation_errors"] = validation_errors

    if exception.details:
        response["details"] = exception.details

    return response


def group_validation_errors(errors: list) -> Dict[str, list]:
    """Group pydantic error dicts by dotted field location"""
    grouped: Dict[str, list] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        field = ".".join(loc) or "__root__"
        grouped.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return grouped


# Utility functions for common error scenarios
def is_foreign_key_violation(error: Exception) -> bool:
    """True for FK violations on both PostgreSQL and SQLite"""
    return "foreign key" in str(error).lower()


def handle_database_error(error: Exception, operation: str = "database operation") -> DatabaseError:
    """Handle database errors and convert to DatabaseError"""
    logger.error(f"Database error during {operation}: {error}")

    error_message = "Database operation failed"
    if "connection" in str(error).lower():
        error_message = "Database connection failed"
    elif "timeout" in str(error).lower():
        error_message = "Database operation timed out"
    elif "constraint" in str(error).lower():
        error_message = "Database constraint violation"

    return DatabaseError(
        message=error_message,
        details={"operation": operation, "original_error": str(error)},
        error_code="DATABASE_OPERATION_ERROR"
    )


def handle_patient_reference_error(
    error: Exception,
    patient_id: Optional[int],
    operation: str
) -> BaseCustomException:
    """Map a failed write on a clinical record to the right error.

    A foreign key violation means the patient reference is dangling; anything
    else is a generic database failure.
    """
    if patient_id is not None and is_foreign_key_violation(error):
        logger.error(f"{operation} failed: patient {patient_id} does not exist")
        return PatientReferenceError(patient_id)
    return handle_database_error(error, operation)
