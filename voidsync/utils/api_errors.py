from __future__ import annotations

from fastapi import HTTPException

from ..config import settings

_DEV_ENVS = {"dev", "development", "local", "test", "testing"}


class VoidHTTPError(HTTPException):
    def __init__(self, status_code: int, error: str, message: str | None = None):
        detail = {"error": error}
        if message is not None:
            detail["message"] = message
        super().__init__(status_code=status_code, detail=detail)


def error_detail(exc: object) -> str | None:
    """Exception text for a response body, only outside production or when forced."""
    if settings.app_env.strip().lower() in _DEV_ENVS or settings.expose_internal_error_details:
        return str(exc)
    return None

def bad_request(error: str, message: str | None = None) -> VoidHTTPError:
    return VoidHTTPError(400, error, message)


def method_not_allowed() -> VoidHTTPError:
    return VoidHTTPError(405, "Method not allowed")


def payload_too_large(limit: int) -> VoidHTTPError:
    return VoidHTTPError(413, "Payload too large", f"Request body exceeds {limit} bytes")
