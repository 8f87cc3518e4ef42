from typing import Any, ClassVar, Dict, Tuple
from pydantic import BaseModel, Field, model_validator


class PartialUpdateSchema(BaseModel):
    """Base for update inputs.

    Omitted fields are left alone, fields sent as null are cleared. Columns
    listed in NON_NULLABLE may be omitted but never nulled.
    """
    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ()

    id: int

    @model_validator(mode="after")
    def reject_null_on_required_columns(self):
        nulled = [
            name for name in self.NON_NULLABLE
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self

    def changes(self) -> Dict[str, Any]:
        """Explicitly supplied fields, id excluded"""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class GetByPatientIdInput(BaseModel):
    """Input of the patient-scoped list procedures"""
    patientId: int = Field(...)
