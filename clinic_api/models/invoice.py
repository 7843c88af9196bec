from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clinic_api.models.base import Payload


class ProductRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None


class InvoiceItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    unit_price: float = Field(..., alias="unitPrice")
    quantity: int = 1
    product: Optional[ProductRef] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v):
        # 0, null and "" all mean a single unit
        return v or 1

    @field_validator("unit_price")
    @classmethod
    def validate_price(cls, v):
        if v < 0:
            raise ValueError("unitPrice cannot be negative")
        return v


class WalkInCustomer(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class WalkInInvoiceCreate(Payload):
    customer: WalkInCustomer
    items: List[InvoiceItemIn]
    payment_method: str = Field("cash", alias="paymentMethod")
    staff_id: Union[int, str] = Field(1, alias="staffId")
    paid_amount: float = Field(0, alias="paidAmount")
    discount: float = 0

    @field_validator("paid_amount", "discount", mode="before")
    @classmethod
    def none_to_zero(cls, v):
        return v or 0
