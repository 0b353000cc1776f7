# models/directions.py
from __future__ import annotations
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from models.waypoints import Coordinate


class ApiStatus(str, Enum):
    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    ZERO_RESULTS = "ZERO_RESULTS"
    MAX_WAYPOINTS_EXCEEDED = "MAX_WAYPOINTS_EXCEEDED"
    MAX_ROUTE_LENGTH_EXCEEDED = "MAX_ROUTE_LENGTH_EXCEEDED"
    MAX_ELEMENTS_EXCEEDED = "MAX_ELEMENTS_EXCEEDED"
    MAX_DIMENSIONS_EXCEEDED = "MAX_DIMENSIONS_EXCEEDED"
    INVALID_REQUEST = "INVALID_REQUEST"
    OVER_DAILY_LIMIT = "OVER_DAILY_LIMIT"
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    REQUEST_DENIED = "REQUEST_DENIED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    @classmethod
    def parse(cls, raw: str) -> "ApiStatus":
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN_ERROR


class ResponseKind(str, Enum):
    DIRECTIONS = "directions"
    DISTANCE_MATRIX = "distance_matrix"


# ---- shared pieces ----
# Google ships extra keys everywhere (geocoded_waypoints, travel_mode, ...);
# pydantic ignores them by default, frozen keeps decoded records immutable.
class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class TextValue(_Record):
    text: Optional[str] = None
    value: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.text is not None and self.value is not None


class EncodedPolyline(_Record):
    points: str


# ---- Directions ----
class DirectionsRequest(BaseModel):
    origin: Coordinate
    destination: Coordinate
    mode: str = "driving"
    alternatives: bool = False
    route_index: int = 0


class Step(_Record):
    distance: Optional[TextValue] = None
    duration: Optional[TextValue] = None
    html_instructions: str = ""
    polyline: EncodedPolyline
    start_location: Coordinate
    end_location: Coordinate
    maneuver: Optional[str] = None


class Leg(_Record):
    distance: TextValue
    duration: TextValue
    start_address: str
    end_address: str
    steps: List[Step]
    start_location: Optional[Coordinate] = None
    end_location: Optional[Coordinate] = None
    # Not part of Google's leg payload; some proxies add one per leg
    status: str = ApiStatus.OK.value


class Route(_Record):
    legs: List[Leg]
    overview_polyline: EncodedPolyline
    summary: str = ""
    warnings: List[str] = []


class DirectionsResult(_Record):
    status: ApiStatus
    error_message: Optional[str] = None
    routes: List[Route]


# ---- Distance Matrix ----
class Element(_Record):
    status: str
    distance: Optional[TextValue] = None
    duration: Optional[TextValue] = None

    @property
    def is_ok(self) -> bool:
        return self.status == ApiStatus.OK.value


class Row(_Record):
    elements: List[Element]


class DistanceMatrixResult(_Record):
    status: ApiStatus
    error_message: Optional[str] = None
    origin_addresses: List[str] = []
    destination_addresses: List[str] = []
    rows: List[Row]
