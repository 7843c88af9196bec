from flask import Blueprint, jsonify, request

from extensions import store
from clinic_api.auth import require_token
from clinic_api.models import PatientCreate, validate_payload
from clinic_api.services import clinic_service


patients_bp = Blueprint("patients", __name__, url_prefix="/api")


@patients_bp.route("/patients", methods=["GET"])
def list_patients():
    """Every patient, seeded and newly registered."""
    return jsonify(clinic_service.list_patients(store.repository))


@patients_bp.route("/patient", methods=["GET"])
def search_patients():
    """
    Paginated patients: ?page=1&limit=10&search=priya
    """
    return jsonify(
        clinic_service.search_patients(
            store.repository,
            page=request.args.get("page"),
            limit=request.args.get("limit"),
            search=request.args.get("search", ""),
        )
    )


@patients_bp.route("/patient/<patient_id>", methods=["GET"])
def get_patient(patient_id: str):
    return jsonify(clinic_service.get_patient(store.repository, patient_id))


@patients_bp.route("/patient", methods=["POST"])
@require_token(config_flag="PATIENT_CREATE_REQUIRES_AUTH")
def create_patient():
    """
    Register a patient. Requires the bearer token unless
    PATIENT_CREATE_REQUIRES_AUTH is switched off.
    """
    payload = validate_payload(PatientCreate, request.get_json(silent=True))
    patient = clinic_service.create_patient(store.repository, payload)
    return jsonify(patient), 201
