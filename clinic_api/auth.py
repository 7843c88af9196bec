import logging
from functools import wraps

from flask import current_app, request

from clinic_api.errors import Forbidden, Unauthorized


logger = logging.getLogger("clinic_api.auth")


def check_bearer_token(header: str | None, expected: str) -> None:
    """
    Static bearer token check. This is a placeholder gate, not a security model.
    Raises Unauthorized (no/ill-formed header) or Forbidden (wrong token).
    """
    if not header or not header.startswith("Bearer "):
        raise Unauthorized("Unauthorized: Missing Bearer Token")

    token = header[len("Bearer "):]
    if token != expected:
        raise Forbidden("Forbidden: Invalid Token")


def require_token(config_flag: str | None = None):
    """
    Guard a view with the API_TOKEN bearer check.
    When `config_flag` is given, the check only runs if that config value is truthy.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if config_flag is None or current_app.config.get(config_flag, True):
                try:
                    check_bearer_token(request.headers.get("Authorization"), current_app.config["API_TOKEN"])
                except (Unauthorized, Forbidden) as e:
                    logger.warning(f"[auth] Rejected {request.method} {request.path}: {e.message}")
                    raise
            return view(*args, **kwargs)
        return wrapper
    return decorator
