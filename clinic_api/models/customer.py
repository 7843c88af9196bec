from pydantic import field_validator

from clinic_api.models.base import Payload


class CustomerCreate(Payload):
    name: str
    phone: str = ""
    address: str = ""

    @field_validator("phone", "address", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v
