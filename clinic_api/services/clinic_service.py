from datetime import datetime
from typing import Optional
import logging

import pytz

from clinic_api.errors import NotFound
from clinic_api.models import (
    CustomerCreate,
    PatientCreate,
    PrescriptionCreate,
    WalkInInvoiceCreate,
)
from clinic_api.models import seed_data as sd
from clinic_api.services.pagination import Page, filter_by_substring, paginate
from clinic_api.services.repository import Repository, normalize_id


logger = logging.getLogger("clinic_api.clinic_service")


def _now_iso() -> str:
    return datetime.now(pytz.UTC).isoformat()


def _page_payload(key: str, page: Page) -> dict:
    return {key: page.data, "total": page.total, "page": page.page, "totalPages": page.total_pages}


# -------------------------------
# 👤 PATIENT HELPERS
# -------------------------------

def list_patients(repo: Repository) -> list[dict]:
    return repo.list(sd.PATIENTS)


def search_patients(repo: Repository, page=None, limit=None, search: str = "") -> dict:
    """Paginated patient list, optionally filtered by name."""
    filtered = filter_by_substring(repo.list(sd.PATIENTS), "name", search)
    return _page_payload("patients", paginate(filtered, page, limit))


def get_patient(repo: Repository, patient_id) -> dict:
    patient = repo.get(sd.PATIENTS, patient_id)
    if not patient:
        raise NotFound("Patient not found")
    return patient


def create_patient(repo: Repository, payload: PatientCreate) -> dict:
    """Register a patient. Ids follow the PAT001 pattern of the seed data."""
    now = _now_iso()
    patient = {
        "id": f"PAT{repo.next_id(sd.PATIENTS):03d}",
        "name": payload.name,
        "age": payload.age,
        "gender": payload.gender,
        "email": payload.email,
        "phone": payload.phone,
        "address": payload.address_record(),
        "insuranceProvider": "",
        "insurancePolicyNumber": "",
        "prescription": {
            "sphere": {"right": 0, "left": 0},
            "cylinder": {"right": 0, "left": 0},
            "axis": {"right": 0, "left": 0},
            "add": {"right": 0, "left": 0},
        },
        "lastVisit": now,
        "loyaltyPoints": 0,
        "loyaltyTier": "Bronze",
        "shopId": payload.shop_id or "SHOP001",
        "medicalHistory": payload.medical_history,
        "createdAt": now,
        "updatedAt": now,
    }
    repo.add(sd.PATIENTS, patient)
    logger.info(f"[create_patient] Created patient id={patient['id']}")
    return patient


def _patient_summary(repo: Repository, patient_id) -> Optional[dict]:
    """Reduced projection embedded in prescription responses."""
    if patient_id is None:
        return None
    patient = repo.get(sd.PATIENTS, patient_id)
    if not patient:
        return None
    return {
        "id": patient["id"],
        "name": patient.get("name"),
        "age": patient.get("age"),
        "gender": patient.get("gender"),
    }


# -------------------------------
# 🧾 CUSTOMER HELPERS
# -------------------------------

def _new_customer(repo: Repository, name: str, phone: str, address: str) -> dict:
    now = _now_iso()
    customer = {
        "id": repo.next_id(sd.CUSTOMERS),
        "name": name,
        "phone": phone,
        "address": address,
        "createdAt": now,
        "updatedAt": now,
    }
    repo.add(sd.CUSTOMERS, customer)
    return customer


def create_customer(repo: Repository, payload: CustomerCreate) -> dict:
    customer = _new_customer(repo, payload.name, payload.phone, payload.address)
    logger.info(f"[create_customer] Created customer id={customer['id']}")
    return customer


def search_customers(repo: Repository, page=None, limit=None, search: str = "") -> dict:
    filtered = filter_by_substring(repo.list(sd.CUSTOMERS), "name", search)
    return _page_payload("customers", paginate(filtered, page, limit))


def _project_invoice_items(items: list[dict]) -> list[dict]:
    return [
        {
            "id": it.get("productId"),
            "quantity": it.get("quantity"),
            "unitPrice": it.get("unitPrice"),
            "product": {"name": it.get("productName")},
        }
        for it in items or []
    ]


def customer_invoices(repo: Repository, customer: dict) -> list[dict]:
    """
    Invoices belonging to a customer:
    - seed invoices matched by patient name or by patientId == customer id
    - walk-in invoices created for this customer
    """
    cid = normalize_id(customer["id"])
    related = []

    for inv in repo.list(sd.INVOICES):
        if inv.get("patientName") == customer.get("name") or normalize_id(inv.get("patientId", "")) == cid:
            related.append({
                "id": inv["id"],
                "totalAmount": inv.get("total"),
                "status": (inv.get("status") or "PAID").upper(),
                "items": _project_invoice_items(inv.get("items")),
            })

    for inv in repo.list(sd.WALK_IN_INVOICES):
        if normalize_id(inv.get("customerId", "")) == cid:
            related.append({
                "id": inv["id"],
                "totalAmount": inv["totalAmount"],
                "status": inv["status"],
                "items": inv["items"],
            })

    return related


def get_customer_with_invoices(repo: Repository, customer_id) -> dict:
    customer = repo.get(sd.CUSTOMERS, customer_id)
    if not customer:
        raise NotFound("Customer not found")
    return {
        "id": customer["id"],
        "name": customer["name"],
        "phone": customer.get("phone", ""),
        "address": customer.get("address", ""),
        "invoices": customer_invoices(repo, customer),
    }


def customer_hotspots() -> list[dict]:
    """Static demo aggregate, not computed from the customer list."""
    return [dict(h) for h in sd.CUSTOMER_HOTSPOTS]


# -------------------------------
# 🧮 WALK-IN INVOICE
# -------------------------------

def invoice_total(items, discount: float = 0) -> float:
    return sum(it.unit_price * it.quantity for it in items) - (discount or 0)


def create_walk_in_invoice(repo: Repository, payload: WalkInInvoiceCreate) -> dict:
    """
    Create a customer and an invoice for them in one go.
    Not transactional: if the invoice write fails the customer stays.
    """
    walk_in = payload.customer
    customer = _new_customer(
        repo,
        name=walk_in.name or "Walk-in Customer",
        phone=walk_in.phone or "",
        address=walk_in.address or "",
    )

    total = invoice_total(payload.items, payload.discount)
    now = datetime.now(pytz.UTC)
    seq = repo.next_id(sd.WALK_IN_INVOICES)

    invoice = {
        "id": f"INV-{now:%Y}-W{seq:04d}",
        "customerId": customer["id"],
        "staffId": payload.staff_id,
        "paymentMethod": payload.payment_method,
        "paidAmount": payload.paid_amount,
        "discount": payload.discount,
        "totalAmount": total,
        "status": "PAID" if payload.paid_amount >= total else "UNPAID",
        "items": [
            {
                "id": idx,
                "quantity": it.quantity,
                "unitPrice": it.unit_price,
                "product": {"name": (it.product.name if it.product and it.product.name else "Item")},
            }
            for idx, it in enumerate(payload.items, start=1)
        ],
        "createdAt": now.isoformat(),
        "updatedAt": now.isoformat(),
    }
    repo.add(sd.WALK_IN_INVOICES, invoice)
    logger.info(
        f"[create_walk_in_invoice] Created invoice id={invoice['id']} "
        f"customer_id={customer['id']} total={total} status={invoice['status']}"
    )

    return {**invoice, "customer": customer}


# -------------------------------
# 👓 PRESCRIPTION HELPERS
# -------------------------------

def _with_patient(repo: Repository, record: dict) -> dict:
    patient = _patient_summary(repo, record.get("patientId"))
    if patient is None:
        return dict(record)
    return {**record, "patient": patient}


def create_prescription(repo: Repository, payload: PrescriptionCreate) -> dict:
    now = _now_iso()
    record = {
        "id": repo.next_id(sd.PRESCRIPTIONS),
        "patientId": payload.patient_id,
        "rightEye": payload.right_eye.model_dump(),
        "leftEye": payload.left_eye.model_dump(),
        "createdAt": now,
        "updatedAt": now,
    }
    repo.add(sd.PRESCRIPTIONS, record)
    logger.info(f"[create_prescription] Created prescription id={record['id']} patient_id={record['patientId']}")
    return _with_patient(repo, record)


def search_prescriptions(repo: Repository, page=None, limit=None, patient_id=None) -> dict:
    records = repo.list(sd.PRESCRIPTIONS)
    if patient_id not in (None, ""):
        wanted = normalize_id(patient_id)
        records = [pr for pr in records if normalize_id(pr.get("patientId", "")) == wanted]

    result = paginate(records, page, limit)
    result.data = [_with_patient(repo, pr) for pr in result.data]
    return _page_payload("prescriptions", result)


def get_prescription(repo: Repository, prescription_id) -> dict:
    record = repo.get(sd.PRESCRIPTIONS, prescription_id)
    if not record:
        raise NotFound("Prescription not found")
    return _with_patient(repo, record)


# -------------------------------
# 📦 STATIC READS
# -------------------------------

STATIC_COLLECTIONS = {
    "products": sd.PRODUCTS,
    "invoices": sd.INVOICES,
    "purchase-orders": sd.PURCHASE_ORDERS,
    "appointments": sd.APPOINTMENTS,
    "shops": sd.SHOPS,
    "doctors": sd.DOCTORS,
    "staff": sd.STAFF,
    "admins": sd.ADMINS,
    "admin-payment-notices": sd.ADMIN_PAYMENT_NOTICES,
}


def list_static(repo: Repository, resource: str) -> list[dict]:
    """Read-only seed collections exposed verbatim."""
    collection = STATIC_COLLECTIONS.get(resource)
    if collection is None:
        raise NotFound(f"Unknown resource '{resource}'")
    return repo.list(collection)
