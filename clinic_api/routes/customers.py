from flask import Blueprint, jsonify, request

from extensions import store
from clinic_api.models import CustomerCreate, WalkInInvoiceCreate, validate_payload
from clinic_api.services import clinic_service


customers_bp = Blueprint("customers", __name__, url_prefix="/api/customer")


@customers_bp.route("", methods=["GET"])
def search_customers():
    """
    Paginated customers: ?page=1&limit=10&search=jane
    """
    return jsonify(
        clinic_service.search_customers(
            store.repository,
            page=request.args.get("page"),
            limit=request.args.get("limit"),
            search=request.args.get("search", ""),
        )
    )


@customers_bp.route("", methods=["POST"])
def create_customer():
    payload = validate_payload(CustomerCreate, request.get_json(silent=True))
    customer = clinic_service.create_customer(store.repository, payload)
    return jsonify(customer), 201


# /hotspots and /invoice never reach the <int:customer_id> rule below.
@customers_bp.route("/hotspots", methods=["GET"])
def customer_hotspots():
    return jsonify(clinic_service.customer_hotspots())


@customers_bp.route("/invoice", methods=["POST"])
def create_walk_in_invoice():
    """
    Walk-in sale: new customer + invoice in one request.

    Expected JSON body:
    {
        "customer": {"name": "Asha", "phone": "555-0199"},
        "items": [{"unitPrice": 10, "quantity": 2, "product": {"name": "Lens cloth"}}],
        "paymentMethod": "cash",
        "paidAmount": 0,
        "discount": 5
    }
    """
    payload = validate_payload(WalkInInvoiceCreate, request.get_json(silent=True))
    invoice = clinic_service.create_walk_in_invoice(store.repository, payload)
    return jsonify(invoice), 201


@customers_bp.route("/<int:customer_id>", methods=["GET"])
def get_customer(customer_id: int):
    """Customer with related invoices."""
    return jsonify(clinic_service.get_customer_with_invoices(store.repository, customer_id))
