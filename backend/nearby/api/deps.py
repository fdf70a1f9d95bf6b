from __future__ import annotations

import httpx
from fastapi import Depends

from ..directions import DirectionsClient
from ..search import PlacesSearch, SearchConfig
from ..settings import settings
from ..storage import JsonFileStore, RestaurantStore

_http_client: httpx.Client | None = None


def get_http_client() -> httpx.Client:
    global _http_client
    if _http_client is None:
        _http_client = httpx.Client(headers={"User-Agent": "nearby-eats/0.1"})
    return _http_client


def close_http_client() -> None:
    global _http_client
    if _http_client is not None:
        _http_client.close()
        _http_client = None


def get_store() -> RestaurantStore:
    # resolved per request so DATA_DIR changes apply without a restart
    return JsonFileStore(settings.db_path)


def get_places_search(
    store: RestaurantStore = Depends(get_store),
    client: httpx.Client = Depends(get_http_client),
) -> PlacesSearch:
    return PlacesSearch(SearchConfig.from_settings(settings), store, client)


def get_directions(client: httpx.Client = Depends(get_http_client)) -> DirectionsClient:
    return DirectionsClient.from_settings(settings, client)
