from flask import Blueprint, jsonify, request

from extensions import store
from clinic_api.models import PrescriptionCreate, validate_payload
from clinic_api.services import clinic_service


prescriptions_bp = Blueprint("prescriptions", __name__, url_prefix="/api/prescription")


@prescriptions_bp.route("", methods=["GET"])
def search_prescriptions():
    """
    Paginated prescriptions: ?page=1&limit=10&patientId=PAT001
    """
    return jsonify(
        clinic_service.search_prescriptions(
            store.repository,
            page=request.args.get("page"),
            limit=request.args.get("limit"),
            patient_id=request.args.get("patientId"),
        )
    )


@prescriptions_bp.route("", methods=["POST"])
def create_prescription():
    payload = validate_payload(PrescriptionCreate, request.get_json(silent=True))
    record = clinic_service.create_prescription(store.repository, payload)
    return jsonify(record), 201


@prescriptions_bp.route("/<int:prescription_id>", methods=["GET"])
def get_prescription(prescription_id: int):
    return jsonify(clinic_service.get_prescription(store.repository, prescription_id))
