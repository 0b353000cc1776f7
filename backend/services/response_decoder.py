# services/response_decoder.py
"""
Raw provider JSON -> typed Directions / Distance Matrix records.

The top-level `status` is checked before anything else: a non-OK response
raises ApiStatusError and its `routes` / `rows` are never read. Structural
problems raise DecodeError (MissingFieldError for absent keys) carrying the
path of the offending field.
"""
from __future__ import annotations
import json
from typing import Any, Dict, Sequence, Type, Union

from pydantic import BaseModel, ValidationError

from core.exceptions import ApiStatusError, DecodeError, MissingFieldError
from core.logger import get_logger
from models.directions import (
    ApiStatus,
    DirectionsResult,
    DistanceMatrixResult,
    ResponseKind,
)

logger = get_logger(__name__)

RawPayload = Union[bytes, bytearray, str, Dict[str, Any]]

_MODELS: Dict[ResponseKind, Type[BaseModel]] = {
    ResponseKind.DIRECTIONS: DirectionsResult,
    ResponseKind.DISTANCE_MATRIX: DistanceMatrixResult,
}


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """('routes', 0, 'legs', 1, 'distance') -> 'routes[0].legs[1].distance'"""
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out or "$"


def _load(raw: RawPayload) -> Dict[str, Any]:
    if isinstance(raw, dict):
        return raw
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _check_status(data: Dict[str, Any], kind: ResponseKind) -> None:
    if "status" not in data or data["status"] is None:
        raise MissingFieldError("status")
    raw_status = data["status"]
    if not isinstance(raw_status, str):
        raise DecodeError("status must be a string", "status")
    if raw_status == ApiStatus.OK.value:
        return
    error_message = data.get("error_message")
    logger.warning(
        f"{kind.value} responded {raw_status}"
        + (f": {error_message}" if error_message else "")
    )
    raise ApiStatusError(
        status=ApiStatus.parse(raw_status).value,
        error_message=error_message if isinstance(error_message, str) else None,
        kind=kind.value,
        raw_status=raw_status,
    )


def _raise_from_validation(exc: ValidationError) -> None:
    errors = exc.errors()
    # missing keys win over type errors so callers see the most specific failure
    for err in errors:
        if err.get("type") == "missing":
            raise MissingFieldError(format_path(err.get("loc", ()))) from exc
    first = errors[0] if errors else {}
    raise DecodeError(
        first.get("msg", "invalid value"), format_path(first.get("loc", ()))
    ) from exc


def decode_response(
    raw: RawPayload, kind: ResponseKind
) -> Union[DirectionsResult, DistanceMatrixResult]:
    kind = ResponseKind(kind)
    data = _load(raw)
    _check_status(data, kind)
    try:
        return _MODELS[kind].model_validate(data)
    except ValidationError as e:
        _raise_from_validation(e)
        raise  # unreachable; keeps type checkers quiet


def decode_directions(raw: RawPayload) -> DirectionsResult:
    return decode_response(raw, ResponseKind.DIRECTIONS)  # type: ignore[return-value]


def decode_distance_matrix(raw: RawPayload) -> DistanceMatrixResult:
    return decode_response(raw, ResponseKind.DISTANCE_MATRIX)  # type: ignore[return-value]
