# backend/core/coords.py
from __future__ import annotations
from math import atan2, cos, radians, sin, sqrt
from typing import Union

from models.waypoints import Coordinate

EARTH_RADIUS_M = 6371000.0


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (straight-line) distance in meters."""
    phi1, phi2 = radians(a.lat), radians(b.lat)
    dphi = radians(b.lat - a.lat)
    dlmb = radians(b.lng - a.lng)
    h = sin(dphi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(dlmb / 2) ** 2
    return EARTH_RADIUS_M * 2 * atan2(sqrt(h), sqrt(1 - h))


def format_distance(meters: Union[int, float]) -> str:
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{int(meters)} m"


def format_duration(seconds: Union[int, float]) -> str:
    """Google-style label: '45 secs' under a minute, then '12 mins', '1 hour 5 mins'."""
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds} secs"
    minutes = (seconds + 30) // 60
    hours, minutes = divmod(minutes, 60)
    parts = []
    if hours:
        parts.append(f"{hours} hour" + ("s" if hours > 1 else ""))
    if minutes or not hours:
        parts.append(f"{minutes} min" + ("s" if minutes != 1 else ""))
    return " ".join(parts)
