from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base app error."""


class APIKeyMissingError(AppError):
    """Exception raised when an API key is missing or invalid."""


class DecodeError(AppError):
    """Raised when a provider payload cannot be decoded; `path` points at the offending field."""

    def __init__(self, message: str, path: str = "$"):
        super().__init__(f"{path}: {message}")
        self.message = message
        self.path = path


class MissingFieldError(DecodeError):
    """Raised when a required JSON field is absent."""

    def __init__(self, path: str):
        super().__init__("required field is missing", path)


class MatrixShapeError(DecodeError):
    """Raised when matrix rows/elements do not line up with the request."""


class ApiStatusError(AppError):
    """Raised when the top-level `status` of a response is not OK."""

    def __init__(
        self,
        status: str,
        error_message: Optional[str] = None,
        kind: Optional[str] = None,
        raw_status: Optional[str] = None,
    ):
        self.status = status
        self.error_message = error_message
        self.kind = kind
        self.raw_status = raw_status if raw_status is not None else status
        detail = f"{kind or 'API'} status {self.raw_status}"
        if error_message:
            detail = f"{detail}: {error_message}"
        super().__init__(detail)


class MalformedPolylineError(AppError):
    """Raised when an encoded polyline is truncated or contains invalid characters."""

    def __init__(self, message: str, position: int, path: Optional[str] = None):
        self.message = message
        self.position = position
        self.path = path
        where = f"{path} " if path else ""
        super().__init__(f"{where}(offset {position}): {message}")

    def at(self, path: str) -> "MalformedPolylineError":
        return MalformedPolylineError(self.message, self.position, path)


class EmptyRouteError(AppError):
    """Raised when a successful response carries no routes, legs or rows."""

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(message)
        self.kind = kind


class DirectionsRequestError(AppError):
    """Raised when a directions provider fails."""


class DistanceMatrixRequestError(AppError):
    """Raised when a distance-matrix provider fails."""
