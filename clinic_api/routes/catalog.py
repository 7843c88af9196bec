from datetime import datetime

import pytz
from flask import Blueprint, jsonify

from extensions import store
from clinic_api.services import clinic_service


catalog_bp = Blueprint("catalog", __name__, url_prefix="/api")


def _static_view(resource: str):
    def view():
        return jsonify(clinic_service.list_static(store.repository, resource))
    view.__name__ = f"list_{resource.replace('-', '_')}"
    view.__doc__ = f"GET /api/{resource} - seed data, read only."
    return view


for _resource in clinic_service.STATIC_COLLECTIONS:
    catalog_bp.add_url_rule(f"/{_resource}", view_func=_static_view(_resource), methods=["GET"])


@catalog_bp.route("/health", methods=["GET"])
def health_check():
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now(pytz.UTC).isoformat(),
    })
