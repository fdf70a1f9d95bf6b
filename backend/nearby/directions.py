from __future__ import annotations

from typing import Any

import httpx

from .logging_config import get_logger
from .settings import Settings
from .upstream import UpstreamError, get_json

logger = get_logger(__name__)

PROVIDER = "mapbox"


class DirectionsError(UpstreamError):
    label = "directions error"


class DirectionsClient:
    """Pass-through to the Mapbox driving-directions API."""

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        *,
        client: httpx.Client,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.Client) -> DirectionsClient:
        return cls(settings.MAPBOX_DIRECTIONS_URL, settings.MAPBOX_TOKEN, client=client)

    def route(self, from_lng: float, from_lat: float, to_lng: float, to_lat: float) -> Any:
        # Mapbox takes lng,lat pairs
        url = f"{self.base_url}/{from_lng},{from_lat};{to_lng},{to_lat}"
        params = {
            "geometries": "geojson",
            "access_token": self.access_token,
            "overview": "full",
        }
        try:
            data = get_json(
                self.client,
                url,
                provider=PROVIDER,
                error_cls=DirectionsError,
                params=params,
            )
        except DirectionsError as exc:
            logger.warning(
                "directions_failed",
                origin=(from_lat, from_lng),
                destination=(to_lat, to_lng),
                error=exc.message,
            )
            raise
        logger.info("directions", origin=(from_lat, from_lng), destination=(to_lat, to_lng))
        return data


__all__ = ["DirectionsClient", "DirectionsError"]
