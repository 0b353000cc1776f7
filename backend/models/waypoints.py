from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, model_validator


class Coordinate(BaseModel):
    """WGS84 point in degrees. Accepts {lat,lng}, {lat,lon} or [lat, lng]."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float

    @model_validator(mode="before")
    @classmethod
    def _accept_loose_shapes(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)) and len(v) == 2:
            return {"lat": v[0], "lng": v[1]}
        if isinstance(v, dict) and "lng" not in v and "lon" in v:
            out: Dict[str, Any] = dict(v)
            out["lng"] = out.pop("lon")
            return out
        return v

    def as_tuple(self) -> tuple:
        return (self.lat, self.lng)

    def as_query(self) -> str:
        # Google expects "lat,lng"
        return f"{self.lat},{self.lng}"


class Driver(BaseModel):
    id: str
    name: Optional[str] = None
    location: Coordinate

    # Accept the flat {id, lat, lng} shape the driver app posts
    @model_validator(mode="before")
    @classmethod
    def _accept_flat_shape(cls, v: Any) -> Any:
        if not isinstance(v, dict) or "location" in v:
            return v
        if "lat" in v and ("lng" in v or "lon" in v):
            out: Dict[str, Any] = dict(v)
            lng = out.pop("lng") if "lng" in out else out.pop("lon")
            out.pop("lon", None)
            out["location"] = {"lat": float(out.pop("lat")), "lng": float(lng)}
            return out
        return v


class DriversRequest(BaseModel):
    drivers: List[Driver]
    passenger: Coordinate
    adapter: str = "google"
