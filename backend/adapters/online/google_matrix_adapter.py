import httpx
from typing import Optional

from config import settings
from core.exceptions import APIKeyMissingError, DistanceMatrixRequestError
from core.interfaces import DistanceMatrixAdapter
from core.logger import get_logger
from models.distance_matrix import MatrixRequest
from models.normalized import NormalizedMatrix
from services.response_decoder import decode_distance_matrix
from services.route_normalizer import normalize_distance_matrix

logger = get_logger(__name__)

GOOGLE_MATRIX_PATH = "/maps/api/distancematrix/json"


class GoogleMatrixAdapter(DistanceMatrixAdapter):
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or settings.GOOGLE_API_KEY
        if not self.api_key:
            raise APIKeyMissingError("Google Distance Matrix API key not provided.")
        self.url = (base_url or settings.GOOGLE_MAPS_BASE_URL).rstrip("/") + GOOGLE_MATRIX_PATH
        self.timeout = timeout or settings.HTTP_TIMEOUT_S

    async def get_matrix(self, request: MatrixRequest) -> NormalizedMatrix:
        parameters = request.parameters or {}

        # Format origins and destinations as required by Google API
        origins = "|".join(c.as_query() for c in request.origins)
        destinations = "|".join(c.as_query() for c in request.destinations)

        params = {
            "origins": origins,
            "destinations": destinations,
            "mode": parameters.get("mode", request.mode),
            "language": parameters.get("language", settings.GOOGLE_LANGUAGE),
            "region": parameters.get("region", settings.GOOGLE_REGION),
            "units": "metric",
            "key": self.api_key,
        }

        logger.debug(
            f"distance matrix: {len(request.origins)} origins x {len(request.destinations)} destinations"
        )
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url, params=params)
                response.raise_for_status()
                body = response.content
        except httpx.HTTPError as e:
            logger.error(f"Google matrix request failed: {e}")
            raise DistanceMatrixRequestError(f"Failed to fetch Google matrix: {e}") from e

        # Decode/normalize errors (status, shape, missing fields) propagate typed
        result = decode_distance_matrix(body)
        return normalize_distance_matrix(
            result,
            origin_count=len(request.origins),
            destination_count=len(request.destinations),
        )

