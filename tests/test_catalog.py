import logging
from datetime import datetime

import pytest
import pytz

from clinic_api.models.seed_data import APPOINTMENTS, build_seed_data


@pytest.mark.parametrize(
    "path,count",
    [
        ("/api/products", 11),
        ("/api/invoices", 7),
        ("/api/purchase-orders", 3),
        ("/api/appointments", 5),
        ("/api/shops", 2),
        ("/api/doctors", 3),
        ("/api/staff", 1),
        ("/api/admins", 1),
        ("/api/admin-payment-notices", 1),
    ],
)
def test_static_reads(client, path, count):
    resp = client.get(path)
    assert resp.status_code == 200
    assert len(resp.get_json()) == count


def test_first_appointment_is_today(client, app):
    today = datetime.now(pytz.timezone(app.config["CLINIC_TIMEZONE"])).strftime("%Y-%m-%d")
    appointments = client.get("/api/appointments").get_json()
    assert appointments[0]["date"] == today
    assert appointments[0]["doctorName"] == "Dr. Sunita Gupta"


def test_walk_in_invoices_stay_out_of_static_list(client):
    client.post("/api/customer/invoice", json={"customer": {}, "items": [{"unitPrice": 1}]})
    assert len(client.get("/api/invoices").get_json()) == 7


def test_health(client):
    body = client.get("/api/health").get_json()
    assert body["status"] == "healthy"


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_wrong_method_is_json_405(client):
    resp = client.delete("/api/products")
    assert resp.status_code == 405
    assert "error" in resp.get_json()


def test_cors_header_present(client):
    resp = client.get("/api/shops", headers={"Origin": "http://localhost:5173"})
    assert resp.headers.get("Access-Control-Allow-Origin") == "*"


def test_unknown_timezone_falls_back_to_utc_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="clinic_api.seed_data"):
        data = build_seed_data("Not/AZone")

    assert "Unknown CLINIC_TIMEZONE 'Not/AZone'" in caplog.text
    assert data[APPOINTMENTS][0]["date"] == datetime.now(pytz.UTC).strftime("%Y-%m-%d")
