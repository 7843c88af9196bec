from clinic_api.models.base import validate_payload
from clinic_api.models.customer import CustomerCreate
from clinic_api.models.invoice import InvoiceItemIn, WalkInCustomer, WalkInInvoiceCreate
from clinic_api.models.patient import PatientCreate
from clinic_api.models.prescription import EyeMeasurement, PrescriptionCreate

__all__ = [
    "validate_payload",
    "CustomerCreate",
    "InvoiceItemIn",
    "WalkInCustomer",
    "WalkInInvoiceCreate",
    "PatientCreate",
    "EyeMeasurement",
    "PrescriptionCreate",
]
