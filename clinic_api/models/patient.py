from typing import Optional, Union

from pydantic import Field, field_validator

from clinic_api.models.base import Payload


class PatientCreate(Payload):
    name: str = Field(..., description="Patient full name")
    age: int = Field(..., description="Age in years")
    gender: str = Field(..., description="Gender as entered at the desk")
    email: str = ""
    phone: str = ""
    address: Union[str, dict, None] = None
    medical_history: str = Field("", alias="medicalHistory")
    shop_id: Optional[str] = Field(None, alias="shopId")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if len(v) < 2:
            raise ValueError("name must be at least 2 characters")
        return v

    @field_validator("age")
    @classmethod
    def validate_age(cls, v):
        if not 0 < v <= 150:
            raise ValueError("age must be between 1 and 150")
        return v

    @field_validator("phone", "email", "medical_history", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    def address_record(self) -> dict:
        """Patients always carry {city, state}; a bare string is the city."""
        if isinstance(self.address, dict):
            return {
                "city": str(self.address.get("city") or ""),
                "state": str(self.address.get("state") or ""),
            }
        return {"city": (self.address or "").strip(), "state": ""}
