import pytest
import requests

from clinic_api.client import ApiClientError, ClinicApiClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload if payload is not None else {}
        self.text = str(self._payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return self._payload


class ScriptedSession:
    """Replays a list of responses/exceptions and records each call."""

    def __init__(self, script):
        self.script = list(script)
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        step = self.script.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


def make_client(script, **kwargs):
    session = ScriptedSession(script)
    client = ClinicApiClient(
        base_url="http://api.test/", token="mysecrettoken", timeout=5, retries=3, backoff=0, session=session, **kwargs
    )
    return client, session


def test_fetch_builds_url_and_returns_json():
    client, session = make_client([FakeResponse(payload=[{"id": "SHOP001"}])])
    assert client.get_shops() == [{"id": "SHOP001"}]

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "http://api.test/api/shops")
    assert kwargs["timeout"] == 5
    assert "Authorization" not in kwargs["headers"]


def test_query_params_skip_empty_values():
    client, session = make_client([FakeResponse(payload={"customers": []})])
    client.get_customers(page=2, search="")
    assert session.calls[0][2]["params"] == {"page": 2}


def test_retries_network_errors_then_succeeds():
    client, session = make_client([
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.Timeout("slow"),
        FakeResponse(payload={"status": "ok"}),
    ])
    assert client.fetch("health") == {"status": "ok"}
    assert len(session.calls) == 3


def test_network_failure_after_last_attempt_has_status_zero():
    client, session = make_client([requests.exceptions.ConnectionError("refused")] * 3)
    with pytest.raises(ApiClientError) as exc:
        client.get_products()
    assert exc.value.status == 0
    assert exc.value.endpoint == "products"
    assert len(session.calls) == 3


def test_server_error_retried_until_final_attempt():
    client, session = make_client([FakeResponse(503, reason="Service Unavailable")] * 3)
    with pytest.raises(ApiClientError) as exc:
        client.get_invoices()
    assert exc.value.status == 503
    assert len(session.calls) == 3


def test_not_found_is_not_retried():
    client, session = make_client([FakeResponse(404, {"error": "Prescription not found"}, "NOT FOUND")])
    with pytest.raises(ApiClientError) as exc:
        client.get_prescription(99999)
    assert exc.value.status == 404
    assert len(session.calls) == 1


def test_create_patient_sends_bearer_token():
    client, session = make_client([FakeResponse(201, {"id": "PAT006"})])
    assert client.create_patient({"name": "Kiran", "age": 31, "gender": "Male"}) == {"id": "PAT006"}

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://api.test/api/patient")
    assert kwargs["headers"]["Authorization"] == "Bearer mysecrettoken"
    assert kwargs["json"]["name"] == "Kiran"


def test_post_is_not_retried():
    client, session = make_client([requests.exceptions.ConnectionError("refused"), FakeResponse(201)])
    with pytest.raises(ApiClientError) as exc:
        client.create_customer({"name": "Test"})
    assert exc.value.status == 0
    assert len(session.calls) == 1


def test_post_error_status_raises():
    client, _ = make_client([FakeResponse(400, {"error": "name is required"}, "BAD REQUEST")])
    with pytest.raises(ApiClientError) as exc:
        client.create_customer({})
    assert exc.value.status == 400


def test_client_against_flask_app(app):
    """End to end through the Flask test client, using it as the session."""
    flask_client = app.test_client()

    class FlaskSession:
        def get(self, url, params=None, headers=None, timeout=None):
            return _wrap(flask_client.get(url.replace("http://api.test", ""), query_string=params, headers=headers))

        def post(self, url, json=None, headers=None, timeout=None):
            return _wrap(flask_client.post(url.replace("http://api.test", ""), json=json, headers=headers))

    def _wrap(resp):
        return FakeResponse(resp.status_code, resp.get_json(), resp.status)

    client = ClinicApiClient(base_url="http://api.test", token="mysecrettoken", retries=1, backoff=0,
                             session=FlaskSession())

    created = client.create_customer({"name": "Test"})
    assert client.get_customer(created["id"])["name"] == "Test"

    invoice = client.create_walk_in_invoice({"customer": {}, "items": [{"unitPrice": 10, "quantity": 2}], "discount": 5})
    assert invoice["totalAmount"] == 15
    assert invoice["status"] == "UNPAID"

    patient = client.create_patient({"name": "Kiran Rao", "age": 31, "gender": "Male"})
    assert client.get_patient(patient["id"])["name"] == "Kiran Rao"

    with pytest.raises(ApiClientError) as exc:
        client.get_prescription(99999)
    assert exc.value.status == 404


class HtmlResponse(FakeResponse):
    """A 2xx page that is not JSON, e.g. a proxy's maintenance page."""

    def json(self):
        raise requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)


def test_non_json_body_keeps_http_status():
    client, session = make_client([HtmlResponse(200, "<html>")])
    with pytest.raises(ApiClientError) as exc:
        client.get_products()
    assert exc.value.status == 200
    assert exc.value.endpoint == "products"
    assert "Invalid JSON" in exc.value.message
    assert len(session.calls) == 1


def test_post_non_json_body_keeps_http_status():
    client, _ = make_client([HtmlResponse(201, "<html>")])
    with pytest.raises(ApiClientError) as exc:
        client.create_customer({"name": "Test"})
    assert exc.value.status == 201
