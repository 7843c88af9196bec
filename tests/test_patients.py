from config import TestConfig
from clinic_api.app_factory import create_app
from clinic_api.services.repository import InMemoryRepository


NEW_PATIENT = {"name": "Kiran Rao", "age": 31, "gender": "Male", "phone": "555-0199", "address": "Lensburg"}


def test_list_patients_returns_seed(client):
    patients = client.get("/api/patients").get_json()
    assert [p["id"] for p in patients] == ["PAT001", "PAT002", "PAT003", "PAT004", "PAT005"]
    assert patients[0]["loyaltyTier"] == "Silver"


def test_create_patient_requires_token(client, repo):
    before = repo.count("patients")

    resp = client.post("/api/patient", json=NEW_PATIENT)
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Unauthorized: Missing Bearer Token"}

    resp = client.post("/api/patient", json=NEW_PATIENT, headers={"Authorization": "Token mysecrettoken"})
    assert resp.status_code == 401

    resp = client.post("/api/patient", json=NEW_PATIENT, headers={"Authorization": "Bearer wrong"})
    assert resp.status_code == 403
    assert resp.get_json() == {"error": "Forbidden: Invalid Token"}

    assert repo.count("patients") == before


def test_create_patient(client, auth_headers):
    resp = client.post("/api/patient", json=NEW_PATIENT, headers=auth_headers)
    assert resp.status_code == 201
    patient = resp.get_json()
    assert patient["id"] == "PAT006"
    assert patient["name"] == "Kiran Rao"
    assert patient["age"] == 31
    assert patient["address"] == {"city": "Lensburg", "state": ""}
    assert patient["loyaltyTier"] == "Bronze"

    assert client.get("/api/patient/PAT006").get_json()["name"] == "Kiran Rao"
    assert len(client.get("/api/patients").get_json()) == 6


def test_missing_age_is_rejected_without_mutation(client, repo, auth_headers):
    before = repo.count("patients")
    body = {k: v for k, v in NEW_PATIENT.items() if k != "age"}

    resp = client.post("/api/patient", json=body, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "age is required"}
    assert repo.count("patients") == before


def test_all_missing_fields_are_named(client, auth_headers):
    resp = client.post("/api/patient", json={"name": "Kiran"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "age, gender are required"}


def test_invalid_age(client, auth_headers):
    resp = client.post("/api/patient", json={**NEW_PATIENT, "age": "old"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"].startswith("age")


def test_auth_can_be_switched_off():
    class OpenConfig(TestConfig):
        PATIENT_CREATE_REQUIRES_AUTH = False

    app = create_app(OpenConfig, repository=InMemoryRepository())
    resp = app.test_client().post("/api/patient", json=NEW_PATIENT)
    assert resp.status_code == 201


def test_search_patients(client):
    body = client.get("/api/patient?search=singh").get_json()
    assert body["total"] == 1
    assert body["patients"][0]["id"] == "PAT003"

    body = client.get("/api/patient?page=3&limit=2").get_json()
    assert body["totalPages"] == 3
    assert [p["id"] for p in body["patients"]] == ["PAT005"]


def test_unknown_patient_is_404(client):
    resp = client.get("/api/patient/PAT999")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Patient not found"}


def test_token_must_match_exactly(client, repo):
    before = repo.count("patients")
    for header in ("Bearer   mysecrettoken", "Bearer mysecrettoken ", "Bearer "):
        resp = client.post("/api/patient", json=NEW_PATIENT, headers={"Authorization": header})
        assert resp.status_code == 403
        assert resp.get_json() == {"error": "Forbidden: Invalid Token"}
    assert repo.count("patients") == before


def test_structured_address_is_kept(client, auth_headers):
    body = {**NEW_PATIENT, "address": {"city": "Visionville", "state": "CA"}}
    patient = client.post("/api/patient", json=body, headers=auth_headers).get_json()
    assert patient["address"] == {"city": "Visionville", "state": "CA"}


def test_null_address_becomes_empty(client, auth_headers):
    body = {**NEW_PATIENT, "address": None}
    resp = client.post("/api/patient", json=body, headers=auth_headers)
    assert resp.status_code == 201
    assert resp.get_json()["address"] == {"city": "", "state": ""}


def test_blank_gender_is_rejected(client, repo, auth_headers):
    before = repo.count("patients")
    resp = client.post("/api/patient", json={**NEW_PATIENT, "gender": "   "}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "gender is required"}
    assert repo.count("patients") == before
