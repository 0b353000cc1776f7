import httpx
from typing import Optional

from config import settings
from core.exceptions import APIKeyMissingError, DirectionsRequestError
from core.interfaces import DirectionsAdapter
from core.logger import get_logger
from models.directions import DirectionsRequest
from models.normalized import NormalizedRoute
from services.response_decoder import decode_directions
from services.route_normalizer import normalize_directions

logger = get_logger(__name__)

GOOGLE_DIRECTIONS_PATH = "/maps/api/directions/json"


class GoogleDirectionsAdapter(DirectionsAdapter):
    """Directions API (legacy JSON endpoint) -> NormalizedRoute."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or settings.GOOGLE_API_KEY
        if not self.api_key:
            raise APIKeyMissingError("Google Directions API key not provided.")
        self.url = (base_url or settings.GOOGLE_MAPS_BASE_URL).rstrip("/") + GOOGLE_DIRECTIONS_PATH
        self.timeout = timeout or settings.HTTP_TIMEOUT_S

    async def get_directions(self, request: DirectionsRequest) -> NormalizedRoute:
        params = {
            "origin": request.origin.as_query(),
            "destination": request.destination.as_query(),
            "mode": request.mode,
            "alternatives": str(request.alternatives).lower(),
            "language": settings.GOOGLE_LANGUAGE,
            "region": settings.GOOGLE_REGION,
            "key": self.api_key,
        }

        logger.debug(f"directions: {params['origin']} -> {params['destination']}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url, params=params)
                response.raise_for_status()
                body = response.content
        except httpx.HTTPError as e:
            logger.error(f"Google directions request failed: {e}")
            raise DirectionsRequestError(f"Failed to fetch Google directions: {e}") from e

        route = normalize_directions(decode_directions(body), route_index=request.route_index)
        logger.debug(f"directions ok: {route.distance_text}, {route.duration_text}")
        return route
