# backend/config.py
from __future__ import annotations
from pathlib import Path
import os
from dotenv import load_dotenv

# Load exactly backend/.env (do NOT call load_dotenv() without a path)
ENV_FILE = Path(__file__).with_name(".env")
load_dotenv(ENV_FILE, override=False)


def get_settings():
    return Settings


class Settings:
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GOOGLE_MAPS_BASE_URL: str = os.getenv(
        "GOOGLE_MAPS_BASE_URL", "https://maps.googleapis.com"
    ).rstrip("/")
    GOOGLE_LANGUAGE: str = os.getenv("GOOGLE_LANGUAGE", "zh-TW")
    GOOGLE_REGION: str = os.getenv("GOOGLE_REGION", "TW")
    TRAVEL_MODE: str = os.getenv("TRAVEL_MODE", "driving")
    HTTP_TIMEOUT_S: float = float(os.getenv("HTTP_TIMEOUT_S", "15.0"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # Dispatch: drivers further than this (straight line) are not queried
    DISPATCH_RADIUS_M: float = float(os.getenv("DISPATCH_RADIUS_M", "10000"))
    # Straight-line ETA fallback speed (~36 km/h urban average)
    FALLBACK_SPEED_MPS: float = float(os.getenv("FALLBACK_SPEED_MPS", "10.0"))
    ENABLE_HAVERSINE: bool = os.getenv("ENABLE_HAVERSINE", "1") == "1"
    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000")


settings = Settings
