"""HTTP client for the clinic API.

Purpose: the data layer dashboards and scripts use to talk to the API.

Pattern: requests.Session with connection pooling, tenacity retry with
exponential backoff on GETs, a per-request timeout, and the bearer token
attached only where an endpoint needs it.
"""
import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from config import ClientConfig


logger = logging.getLogger("clinic_api.client")

# Server-side hiccups worth another attempt; other 4xx are final.
RETRY_STATUSES = {408, 429, 500, 502, 503, 504}


class ApiClientError(Exception):
    """
    Raised for failed API calls.

    status is the HTTP status code, or 0 for network-level failures
    (connection refused, DNS, timeout).
    """

    def __init__(self, message: str, status: int, endpoint: str):
        super().__init__(message)
        self.message = message
        self.status = status
        self.endpoint = endpoint


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
        return True
    return isinstance(exc, ApiClientError) and exc.status in RETRY_STATUSES


def create_http_session(pool_size: int = 10) -> requests.Session:
    """Session with pooled connections. Retries are handled by tenacity, not urllib3."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"Content-Type": "application/json"})
    return session


class ClinicApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or ClientConfig.API_BASE_URL).rstrip("/")
        self.token = token if token is not None else ClientConfig.API_TOKEN
        self.timeout = timeout if timeout is not None else ClientConfig.API_TIMEOUT
        self.retries = max(retries if retries is not None else ClientConfig.API_RETRIES, 1)
        self.backoff = backoff if backoff is not None else ClientConfig.API_BACKOFF
        self.session = session or create_http_session()

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/api/{endpoint.lstrip('/')}"

    def _headers(self, requires_auth: bool) -> dict:
        if requires_auth:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    @staticmethod
    def _json(response: requests.Response, endpoint: str):
        """Decode the body. A bad body is an HTTP-level failure, never a network one."""
        try:
            return response.json()
        except requests.exceptions.JSONDecodeError as e:
            logger.error(f"[{endpoint}] Response is not JSON status={response.status_code}")
            raise ApiClientError(
                f"Invalid JSON from {endpoint}: {e}",
                response.status_code,
                endpoint,
            ) from e

    @staticmethod
    def _raise_for_status(response: requests.Response, endpoint: str, verb: str) -> None:
        if response.ok:
            return
        logger.error(f"[{verb} {endpoint}] API error status={response.status_code} body={response.text[:200]!r}")
        raise ApiClientError(
            f"Failed to {verb.lower()} {endpoint}: {response.status_code} {response.reason}",
            response.status_code,
            endpoint,
        )

    # -------------------------------
    # Transport
    # -------------------------------

    def fetch(self, endpoint: str, params: Optional[dict] = None, requires_auth: bool = False):
        """
        GET with retry. Retries connection errors, timeouts and retryable
        statuses with exponential backoff, up to `retries` attempts in total.
        """
        query = {k: v for k, v in (params or {}).items() if v not in (None, "")}

        def attempt():
            response = self.session.get(
                self._url(endpoint),
                params=query or None,
                headers=self._headers(requires_auth),
                timeout=self.timeout,
            )
            self._raise_for_status(response, endpoint, "GET")
            return self._json(response, endpoint)

        retrying = Retrying(
            stop=stop_after_attempt(self.retries),
            wait=wait_exponential(multiplier=self.backoff, exp_base=2, max=30),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        try:
            return retrying(attempt)
        except ApiClientError:
            raise
        except requests.exceptions.RequestException as e:
            raise ApiClientError(f"Network error for {endpoint}: {e}", 0, endpoint) from e

    def post(self, endpoint: str, data: dict, requires_auth: bool = False):
        """POST once. Writes are never retried."""
        try:
            response = self.session.post(
                self._url(endpoint),
                json=data,
                headers=self._headers(requires_auth),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ApiClientError(f"Network error for {endpoint}: {e}", 0, endpoint) from e

        self._raise_for_status(response, endpoint, "POST")
        logger.info(f"[POST {endpoint}] created status={response.status_code}")
        return self._json(response, endpoint)

    # -------------------------------
    # 👤 Patients
    # -------------------------------

    def get_patients(self):
        return self.fetch("patients")

    def search_patients(self, page: int = 1, limit: int = 10, search: str = ""):
        return self.fetch("patient", {"page": page, "limit": limit, "search": search})

    def get_patient(self, patient_id):
        return self.fetch(f"patient/{patient_id}")

    def create_patient(self, patient: dict):
        # The only write the API guards with the bearer token
        return self.post("patient", patient, requires_auth=True)

    # -------------------------------
    # 🧾 Customers
    # -------------------------------

    def create_customer(self, customer: dict):
        return self.post("customer", customer)

    def get_customers(self, page: Optional[int] = None, limit: Optional[int] = None, search: str = ""):
        return self.fetch("customer", {"page": page, "limit": limit, "search": search})

    def get_customer(self, customer_id):
        return self.fetch(f"customer/{customer_id}")

    def get_customer_hotspots(self):
        return self.fetch("customer/hotspots")

    def create_walk_in_invoice(self, invoice: dict):
        return self.post("customer/invoice", invoice)

    # -------------------------------
    # 👓 Prescriptions
    # -------------------------------

    def create_prescription(self, prescription: dict):
        return self.post("prescription", prescription)

    def get_prescriptions(self, page: Optional[int] = None, limit: Optional[int] = None, patient_id=None):
        return self.fetch("prescription", {"page": page, "limit": limit, "patientId": patient_id})

    def get_prescription(self, prescription_id):
        return self.fetch(f"prescription/{prescription_id}")

    # -------------------------------
    # 📦 Static reads
    # -------------------------------

    def get_products(self):
        return self.fetch("products")

    def get_invoices(self):
        return self.fetch("invoices")

    def get_purchase_orders(self):
        return self.fetch("purchase-orders")

    def get_appointments(self):
        return self.fetch("appointments")

    def get_shops(self):
        return self.fetch("shops")

    def get_doctors(self):
        return self.fetch("doctors")

    def get_staff(self):
        return self.fetch("staff")

    def get_admins(self):
        return self.fetch("admins")

    def get_admin_payment_notices(self):
        return self.fetch("admin-payment-notices")
