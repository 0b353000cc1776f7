# core/register_adapters.py
from __future__ import annotations
import os
from typing import Callable

from config import get_settings
from core.adapter_factory_registry import (
    AdapterFactoryRegistry,
    DirectionsFactoryRegistry,
)
from core.logger import get_logger

# Offline adapters
from adapters.offline.haversine_adapter import HaversineAdapter

# Online adapters
from adapters.online.google_directions_adapter import GoogleDirectionsAdapter
from adapters.online.google_matrix_adapter import GoogleMatrixAdapter

logger = get_logger(__name__)

_registered = False


def _get_key(settings_obj, attr_name: str, *env_fallbacks: str) -> str | None:
    """Pull API key from settings object if present; otherwise from env."""
    val = getattr(settings_obj, attr_name, None)
    if val:
        return str(val)
    for env in env_fallbacks:
        val = os.getenv(env)
        if val:
            return val
    return None


def _safe_register(registry, name: str, factory: Callable[[], object]) -> None:
    """Idempotent: a second registration under the same name is ignored."""
    try:
        registry.register(name, factory)
    except ValueError:
        logger.debug(f"{name} already registered in {registry.__name__}")


def register_adapters() -> None:
    global _registered
    if _registered:
        return

    settings_obj = get_settings()

    # -----------------------------
    # Offline / local adapters
    # -----------------------------
    # Straight-line fallback used by dispatch when Google is unavailable
    if settings_obj.ENABLE_HAVERSINE:
        _safe_register(AdapterFactoryRegistry, "haversine", lambda: HaversineAdapter())

    # -----------------------------
    # Online providers
    # -----------------------------
    google_key = _get_key(settings_obj, "GOOGLE_API_KEY", "GOOGLE_API_KEY", "GOOGLE_MAPS_API_KEY")
    if google_key:
        _safe_register(
            AdapterFactoryRegistry, "google", lambda k=google_key: GoogleMatrixAdapter(api_key=k)
        )
        _safe_register(
            DirectionsFactoryRegistry,
            "google",
            lambda k=google_key: GoogleDirectionsAdapter(api_key=k),
        )
    else:
        logger.warning("GOOGLE_API_KEY not set; only offline adapters are available")

    _registered = True
