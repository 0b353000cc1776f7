from typing import List, Dict, Optional, Any
from pydantic import BaseModel, field_validator, model_validator

from models.waypoints import Coordinate


def _coerce_coords(raw: Any) -> List[Dict[str, float]]:
    """
    Accept:
      - [{lat,lng}, ...] or [{lat,lon}, ...]
      - [[lat,lng], ...]  (Google order; swapped via heuristic if it looks like [lng,lat])
    Return: list of {lat, lng} dicts.
    """
    out: List[Dict[str, float]] = []
    if raw is None:
        return out
    for item in raw:
        if isinstance(item, Coordinate):
            out.append({"lat": item.lat, "lng": item.lng})
        elif isinstance(item, dict) and "lat" in item and ("lng" in item or "lon" in item):
            lng = item["lng"] if "lng" in item else item["lon"]
            out.append({"lat": float(item["lat"]), "lng": float(lng)})
        elif isinstance(item, (list, tuple)) and len(item) >= 2:
            a = float(item[0])
            b = float(item[1])
            # |lat| <= 90, so a first value beyond that must be a longitude
            if abs(a) > 90 and abs(b) <= 90:
                a, b = b, a
            out.append({"lat": a, "lng": b})
        else:
            raise ValueError(f"Bad coordinate item: {item!r}")
    return out


class MatrixRequest(BaseModel):
    adapter: str = "google"
    mode: str = "driving"
    parameters: Optional[Dict[str, Any]] = None

    # You may send either origins+destinations, or a single coordinates array
    origins: Optional[List[Coordinate]] = None
    destinations: Optional[List[Coordinate]] = None
    coordinates: Optional[List[Coordinate]] = None

    @model_validator(mode="before")
    @classmethod
    def fill_and_coerce(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        values = dict(values)
        for key in ("origins", "destinations", "coordinates"):
            if values.get(key) is not None:
                values[key] = _coerce_coords(values[key])

        # If only `coordinates` was provided, use it for both O & D
        if (
            values.get("origins") is None or values.get("destinations") is None
        ) and values.get("coordinates"):
            values["origins"] = values.get("origins") or values["coordinates"]
            values["destinations"] = values.get("destinations") or values["coordinates"]

        if values.get("origins") is None or values.get("destinations") is None:
            raise ValueError(
                "origins and destinations are required (or provide coordinates)"
            )
        return values

    @field_validator("origins", "destinations")
    @classmethod
    def non_empty(cls, v: List[Coordinate]) -> List[Coordinate]:
        if not v:
            raise ValueError("must contain at least 1 coordinate")
        return v


class MatrixResult(BaseModel):
    # Dense view: distances in **kilometers**, durations in **seconds**; unreachable cells are inf
    distances: List[List[float]]
    durations: Optional[List[List[float]]] = None
