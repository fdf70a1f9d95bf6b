from __future__ import annotations

from dataclasses import dataclass

import httpx

from .contracts import SearchEnvelope
from .geo import DEFAULT_RADIUS_M, filter_by_radius
from .logging_config import get_logger
from .settings import Settings
from .storage import RestaurantStore
from .upstream import UpstreamError, get_json

logger = get_logger(__name__)

DEFAULT_LIMIT = 10
PROVIDER = "places"


class ExternalAPIError(UpstreamError):
    label = "External API error"


def _number(value: float) -> int | float:
    # 5000.0 goes out as "5000"
    return int(value) if float(value).is_integer() else value


@dataclass(slots=True, frozen=True)
class SearchConfig:
    external_api_key: str | None = None
    external_api_url: str | None = None
    default_radius: float = DEFAULT_RADIUS_M

    @property
    def external_enabled(self) -> bool:
        return bool(self.external_api_key) and bool(self.external_api_url)

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchConfig:
        return cls(
            external_api_key=settings.PLACES_API_KEY,
            external_api_url=settings.PLACES_API_URL,
            default_radius=settings.DEFAULT_RADIUS or DEFAULT_RADIUS_M,
        )


class PlacesSearch:
    """
    Blend the external places provider with nearby local restaurants.

    When the provider key or URL is missing the search degrades to local
    results only and ``external`` is None. When it is configured, any provider
    failure fails the whole search with ``ExternalAPIError``.
    """

    def __init__(
        self,
        config: SearchConfig,
        store: RestaurantStore,
        client: httpx.Client,
    ) -> None:
        self.config = config
        self.store = store
        # shared client, owned and closed by the caller
        self.client = client

    def _nearby(self, lat: float | None, lng: float | None, radius: float):
        return filter_by_radius(self.store.read_all(), lat, lng, radius)

    def search(
        self,
        query: str = "",
        lat: float | None = None,
        lng: float | None = None,
        limit: int | None = None,
        radius: float | None = None,
    ) -> SearchEnvelope:
        limit = DEFAULT_LIMIT if limit is None else limit
        radius = self.config.default_radius if radius is None else radius

        if not self.config.external_enabled:
            local = self._nearby(lat, lng, radius)
            logger.info("places_search_local_only", query=query, local_count=len(local))
            return SearchEnvelope(external=None, local=local)

        params = {
            "query": query,
            "ll": f"{_number(lat)},{_number(lng)}" if lat is not None and lng is not None else None,
            "radius": _number(radius),
            "limit": _number(limit),
        }
        headers = {
            "Authorization": self.config.external_api_key or "",
            "Accept": "application/json",
        }
        try:
            external = get_json(
                self.client,
                self.config.external_api_url or "",
                provider=PROVIDER,
                error_cls=ExternalAPIError,
                params=params,
                headers=headers,
            )
        except ExternalAPIError as exc:
            logger.warning("places_search_failed", query=query, error=exc.message)
            raise
        if external is None:
            # a null body would read as "provider not configured"
            logger.warning("places_search_failed", query=query, error="empty body")
            raise ExternalAPIError(f"Empty body from {PROVIDER}")

        local = self._nearby(lat, lng, radius)
        logger.info("places_search", query=query, local_count=len(local))
        return SearchEnvelope(external=external, local=local)


__all__ = ["DEFAULT_LIMIT", "ExternalAPIError", "PlacesSearch", "SearchConfig"]
