# api/_resp.py
from typing import NoReturn

from fastapi import HTTPException

from core.exceptions import (
    APIKeyMissingError,
    ApiStatusError,
    AppError,
    DecodeError,
    DirectionsRequestError,
    DistanceMatrixRequestError,
    EmptyRouteError,
    MalformedPolylineError,
)

# upstream statuses that mean "nothing to route", not "provider broken"
_NOT_FOUND_STATUSES = {"NOT_FOUND", "ZERO_RESULTS"}


def ok(data: dict | list | str | int | float | None = None, **extras):
    payload = {"status": "success"}
    if data is not None:
        payload["data"] = data
    if extras:
        payload.update(extras)
    return payload


def fail(status: int, message: str, **detail) -> NoReturn:
    raise HTTPException(status, {"message": message, **detail} if detail else message)


def fail_from(exc: AppError) -> NoReturn:
    """Translate a domain error into the HTTP error the UI expects."""
    if isinstance(exc, ApiStatusError):
        code = 404 if exc.status in _NOT_FOUND_STATUSES else 502
        fail(code, str(exc), api_status=exc.raw_status, error_message=exc.error_message)
    if isinstance(exc, EmptyRouteError):
        fail(404, str(exc))
    if isinstance(exc, DecodeError):
        fail(422, str(exc), path=exc.path)
    if isinstance(exc, MalformedPolylineError):
        fail(422, str(exc), path=exc.path, position=exc.position)
    if isinstance(exc, APIKeyMissingError):
        fail(503, str(exc))
    if isinstance(exc, (DirectionsRequestError, DistanceMatrixRequestError)):
        fail(502, str(exc))
    fail(500, str(exc))
