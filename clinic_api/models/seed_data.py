"""Demo records loaded into the repository when the app starts."""
import logging
from datetime import datetime, timedelta

import pytz


logger = logging.getLogger("clinic_api.seed_data")

PATIENTS = "patients"
CUSTOMERS = "customers"
PRESCRIPTIONS = "prescriptions"
PRODUCTS = "products"
INVOICES = "invoices"
WALK_IN_INVOICES = "walk_in_invoices"
PURCHASE_ORDERS = "purchase_orders"
APPOINTMENTS = "appointments"
SHOPS = "shops"
DOCTORS = "doctors"
STAFF = "staff"
ADMINS = "admins"
ADMIN_PAYMENT_NOTICES = "admin_payment_notices"


def _rx(sph, cyl, axis, add) -> dict:
    return {
        "sphere": {"right": sph[0], "left": sph[1]},
        "cylinder": {"right": cyl[0], "left": cyl[1]},
        "axis": {"right": axis[0], "left": axis[1]},
        "add": {"right": add[0], "left": add[1]},
    }


def _patient(pid, name, age, gender, email, phone, city, insurer, policy, rx, last_visit, points, tier, shop):
    return {
        "id": pid,
        "name": name,
        "age": age,
        "gender": gender,
        "email": email,
        "phone": phone,
        "address": {"city": city, "state": "CA"},
        "insuranceProvider": insurer,
        "insurancePolicyNumber": policy,
        "prescription": rx,
        "lastVisit": last_visit,
        "loyaltyPoints": points,
        "loyaltyTier": tier,
        "shopId": shop,
        "medicalHistory": "",
    }


def _product(pid, name, description, price, stock, kind, brand=None):
    product = {
        "id": pid,
        "name": name,
        "description": description,
        "price": price,
        "stock": stock,
        "type": kind,
    }
    if brand:
        product["brand"] = brand
    return product


def _invoice(iid, patient_id, patient_name, issued, due, total, status, items, shop):
    return {
        "id": iid,
        "patientId": patient_id,
        "patientName": patient_name,
        "issueDate": issued,
        "dueDate": due,
        "total": total,
        "status": status,
        "items": [
            {"productId": p, "productName": n, "quantity": q, "unitPrice": u}
            for p, n, q, u in items
        ],
        "shopId": shop,
    }


def build_seed_data(timezone: str = "UTC") -> dict:
    """
    Fresh copy of every seed collection. Appointment dates are relative
    to today in the clinic timezone.
    """
    try:
        tz = pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"[build_seed_data] Unknown CLINIC_TIMEZONE '{timezone}', falling back to UTC")
        tz = pytz.UTC

    now = datetime.now(tz)
    now_utc = datetime.now(pytz.UTC)

    def days_from_today(n: int) -> str:
        return (now + timedelta(days=n)).strftime("%Y-%m-%d")

    patients = [
        _patient("PAT001", "Priya Sharma", 28, "Female", "priya.s@example.com", "555-0101", "Optic City",
                 "Global Health", "GH-12345678",
                 _rx((-1.25, -1.5), (-0.5, -0.75), (180, 175), (0, 0)),
                 "2023-10-15", 1250, "Silver", "SHOP001"),
        _patient("PAT002", "Rohan Mehta", 54, "Male", "rohan.m@example.com", "555-0102", "Visionville",
                 "United Coverage", "UC-87654321",
                 _rx((2.0, 2.25), (0, 0), (0, 0), (1.75, 1.75)),
                 "2023-11-02", 800, "Bronze", "SHOP002"),
        _patient("PAT003", "Anjali Singh", 35, "Female", "anjali.s@example.com", "555-0103", "Optic City",
                 "Nile Assurance", "NA-10101010",
                 _rx((-3.5, -3.75), (-1.25, -1.0), (90, 85), (0, 0)),
                 "2023-09-20", 2100, "Gold", "SHOP001"),
        _patient("PAT004", "Vikram Kumar", 61, "Male", "vikram.k@example.com", "555-0104", "Lensburg",
                 "Magic Shield", "MS-24681357",
                 _rx((0.5, 0.25), (0, 0), (0, 0), (2.5, 2.5)),
                 "2024-01-05", 50, "Bronze", "SHOP002"),
        _patient("PAT005", "Sunita Patil", 42, "Female", "sunita.p@example.com", "555-0105", "Optic City",
                 "Global Health", "GH-98765432",
                 _rx((-2.0, -2.25), (0, 0), (0, 0), (0, 0)),
                 "2024-03-12", 450, "Bronze", "SHOP001"),
    ]
    seeded_at = now_utc.isoformat()
    for p in patients:
        p["createdAt"] = seeded_at
        p["updatedAt"] = seeded_at

    customers = [
        {
            "id": 1,
            "name": "Jane Smith",
            "phone": "+91-9876543210",
            "address": "456 Oak Ave, Sometown, USA",
            "createdAt": "2025-09-04T10:30:00+00:00",
            "updatedAt": "2025-09-04T10:30:00+00:00",
        },
    ]

    prescriptions = [
        {
            "id": 1,
            "patientId": "PAT001",
            "rightEye": {"sph": -1.25, "cyl": -0.5, "axis": 180, "add": 0, "pd": 32, "bc": 8.6},
            "leftEye": {"sph": -1.5, "cyl": -0.75, "axis": 170, "add": 0, "pd": 32, "bc": 8.6},
            "createdAt": "2025-09-04T10:35:00+00:00",
            "updatedAt": "2025-09-04T10:35:00+00:00",
        },
    ]

    products = [
        _product("Z5X-C9V-B2N", "VisionPro Ultra-Thin Frames",
                 "Lightweight and durable frames for all-day comfort.", 199.99, 50, "Eyewear", "VisionPro"),
        _product("A1S-D4F-G7H", "Comprehensive Eye Exam",
                 "Full eye health and vision assessment.", 120.0, 999, "Service"),
        _product("Q2W-E5R-T8Y", "AquaSoft Daily Lenses (30-pack)",
                 "Daily disposable contact lenses for ultimate convenience.", 45.5, 200, "Contact Lenses", "AquaSoft"),
        _product("U3I-O6P-L9K", "Blue-Light Filtering Add-on",
                 "Protect your eyes from digital screen strain.", 50.0, 999, "Service"),
        _product("M4N-B7V-C1X", "Ray-Ban Aviator Classic",
                 "Timeless style and 100% UV protection.", 154.0, 25, "Eyewear", "Ray-Ban"),
        _product("GUC-123-XYZ", "Gucci GG0276S Sunglasses",
                 "Oversized square sunglasses with a bold aesthetic.", 450.0, 15, "Eyewear", "Gucci"),
        _product("ARM-456-ABC", "Armani Exchange AX3050",
                 "Modern and versatile rectangular frames.", 130.0, 30, "Eyewear", "Armani"),
        _product("RAY-789-DEF", "Ray-Ban Wayfarer Classic",
                 "The most recognizable style in the history of sunglasses.", 161.0, 40, "Eyewear", "Ray-Ban"),
        _product("LOCAL-001", "Classic Round Frames",
                 "Simple and elegant round frames for a timeless look.", 79.99, 100, "Eyewear"),
        _product("LOCAL-002", "Modern Cat-Eye Glasses",
                 "A stylish cat-eye design with a modern twist.", 89.99, 80, "Eyewear"),
        _product("LOCAL-003", "Minimalist Rectangular Frames",
                 "Sleek and professional rectangular frames.", 75.0, 120, "Eyewear"),
    ]

    invoices = [
        _invoice("INV-2024-001", "PAT001", "Priya Sharma", "2023-10-15", "2023-11-14", 249.99, "Paid",
                 [("Z5X-C9V-B2N", "VisionPro Ultra-Thin Frames", 1, 199.99),
                  ("U3I-O6P-L9K", "Blue-Light Filtering Add-on", 1, 50.0)], "SHOP001"),
        _invoice("INV-2024-002", "PAT002", "Rohan Mehta", "2023-11-02", "2023-12-02", 120.0, "Overdue",
                 [("A1S-D4F-G7H", "Comprehensive Eye Exam", 1, 120.0)], "SHOP002"),
        _invoice("INV-2024-003", "PAT003", "Anjali Singh", "2023-09-20", "2023-10-20", 45.5, "Paid",
                 [("Q2W-E5R-T8Y", "AquaSoft Daily Lenses (30-pack)", 1, 45.5)], "SHOP001"),
        _invoice("INV-2024-004", "PAT004", "Vikram Kumar", "2024-01-05", "2024-02-04", 120.0, "Unpaid",
                 [("A1S-D4F-G7H", "Comprehensive Eye Exam", 1, 120.0)], "SHOP002"),
        _invoice("INV-2024-005", "PAT001", "Priya Sharma", "2024-02-01", "2024-03-01", 161.0, "Paid",
                 [("RAY-789-DEF", "Ray-Ban Wayfarer Classic", 1, 161.0)], "SHOP001"),
        _invoice("INV-2024-006", "PAT005", "Sunita Patil", "2024-03-12", "2024-04-11", 329.99, "Paid",
                 [("GUC-123-XYZ", "Gucci GG0276S Sunglasses", 1, 279.99),
                  ("U3I-O6P-L9K", "Blue-Light Filtering Add-on", 1, 50.0)], "SHOP001"),
        _invoice("INV-2024-007", "PAT002", "Rohan Mehta", "2024-04-15", "2024-05-15", 130.0, "Paid",
                 [("ARM-456-ABC", "Armani Exchange AX3050", 1, 130.0)], "SHOP002"),
    ]

    purchase_orders = [
        {
            "id": "PO-2024-001",
            "supplier": "VisionPro Optics",
            "orderDate": "2024-01-10",
            "total": 2500,
            "status": "Received",
            "items": [
                {"productId": "Z5X-C9V-B2N", "productName": "VisionPro Ultra-Thin Frames",
                 "quantity": 25, "unitPrice": 100, "brand": "VisionPro"},
            ],
            "shopId": "SHOP001",
        },
        {
            "id": "PO-2024-002",
            "supplier": "Ray-Ban Inc.",
            "orderDate": "2024-01-15",
            "total": 3500,
            "status": "Received",
            "items": [
                {"productId": "M4N-B7V-C1X", "productName": "Ray-Ban Aviator Classic",
                 "quantity": 25, "unitPrice": 80, "brand": "Ray-Ban"},
                {"productId": "RAY-789-DEF", "productName": "Ray-Ban Wayfarer Classic",
                 "quantity": 25, "unitPrice": 60, "brand": "Ray-Ban"},
            ],
            "shopId": "SHOP001",
        },
        {
            "id": "PO-2024-003",
            "supplier": "AquaSoft Global",
            "orderDate": "2024-02-05",
            "total": 2000,
            "status": "Pending",
            "items": [
                {"productId": "Q2W-E5R-T8Y", "productName": "AquaSoft Daily Lenses (30-pack)",
                 "quantity": 100, "unitPrice": 20, "brand": "AquaSoft"},
            ],
            "shopId": "SHOP002",
        },
    ]

    appointments = [
        {"id": "APP001", "patientId": "PAT001", "patientName": "Priya Sharma", "doctorName": "Dr. Sunita Gupta",
         "date": days_from_today(0), "time": "10:00 AM", "status": "Scheduled", "shopId": "SHOP001"},
        {"id": "APP002", "patientId": "PAT002", "patientName": "Rohan Mehta", "doctorName": "Dr. Ramesh Sharma",
         "date": days_from_today(2), "time": "11:00 AM", "status": "Scheduled", "shopId": "SHOP002"},
        {"id": "APP003", "patientId": "PAT003", "patientName": "Anjali Singh", "doctorName": "Dr. Sunita Gupta",
         "date": days_from_today(2), "time": "02:00 PM", "status": "Scheduled", "shopId": "SHOP001"},
        {"id": "APP004", "patientId": "PAT004", "patientName": "Vikram Kumar", "doctorName": "Dr. Meena Iyer",
         "date": days_from_today(4), "time": "09:00 AM", "status": "Scheduled", "shopId": "SHOP002"},
        {"id": "APP005", "patientId": "PAT005", "patientName": "Sunita Patil", "doctorName": "Dr. Ramesh Sharma",
         "date": days_from_today(5), "time": "03:00 PM", "status": "Scheduled", "shopId": "SHOP001"},
    ]

    shops = [
        {"id": "SHOP001", "name": "OptiVision Flagship (Optic City)",
         "address": "123 Visionary Ave, Optic City, CA 90210", "phone": "555-123-4567"},
        {"id": "SHOP002", "name": "OptiVision Visionville",
         "address": "456 Lens Lane, Visionville, CA 90211", "phone": "555-987-6543"},
    ]

    doctors = [
        {"id": "DOC001", "name": "Dr. Sunita Gupta", "email": "doctor@example.com", "lastLogin": "2024-05-20 11:00 AM"},
        {"id": "DOC002", "name": "Dr. Ramesh Sharma", "email": "doctor2@example.com", "lastLogin": "2024-05-21 09:30 AM"},
        {"id": "DOC003", "name": "Dr. Meena Iyer", "email": "doctor3@example.com", "lastLogin": "2024-05-21 09:30 AM"},
    ]

    # Admins, staff and payment notices have no natural id; the email is the key.
    admins = [
        {"id": "admin@example.com", "name": "Admin User", "email": "admin@example.com",
         "lastLogin": "2024-05-22 09:00 AM"},
    ]
    staff = [
        {"id": "staff@example.com", "name": "Raj Patel", "email": "staff@example.com",
         "lastLogin": "2024-05-20 10:00 AM"},
    ]
    admin_payment_notices = [
        {"id": "admin@example.com", "adminEmail": "admin@example.com", "amountDue": 250,
         "dueDate": (now_utc - timedelta(days=5)).isoformat(), "lockOnExpire": True, "status": "pending"},
    ]

    return {
        PATIENTS: patients,
        CUSTOMERS: customers,
        PRESCRIPTIONS: prescriptions,
        PRODUCTS: products,
        INVOICES: invoices,
        WALK_IN_INVOICES: [],
        PURCHASE_ORDERS: purchase_orders,
        APPOINTMENTS: appointments,
        SHOPS: shops,
        DOCTORS: doctors,
        STAFF: staff,
        ADMINS: admins,
        ADMIN_PAYMENT_NOTICES: admin_payment_notices,
    }


CUSTOMER_HOTSPOTS = [
    {"address": "Main Street", "customerCount": 15},
    {"address": "Oak Avenue", "customerCount": 12},
]
