from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clinic_api.models.base import Payload


class EyeMeasurement(BaseModel):
    """One eye of a spectacle prescription."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    sph: Optional[float] = None
    cyl: Optional[float] = None
    axis: Optional[float] = None
    add: Optional[float] = None
    pd: Optional[float] = None
    bc: Optional[float] = None

    @field_validator("axis")
    @classmethod
    def validate_axis(cls, v):
        if v is not None and not 0 <= v <= 180:
            raise ValueError("axis must be between 0 and 180")
        return v


class PrescriptionCreate(Payload):
    patient_id: str = Field(..., alias="patientId")
    right_eye: EyeMeasurement = Field(..., alias="rightEye")
    left_eye: EyeMeasurement = Field(..., alias="leftEye")

    @field_validator("patient_id", mode="before")
    @classmethod
    def normalize_patient_id(cls, v):
        # Clients send both 1 and "PAT001" style ids
        if isinstance(v, bool):
            raise ValueError("patientId must be a string or number")
        if isinstance(v, (int, float)):
            return str(int(v)) if float(v).is_integer() else str(v)
        return v
