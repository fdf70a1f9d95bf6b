from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ...contracts import SearchEnvelope
from ...directions import DirectionsClient
from ...search import DEFAULT_LIMIT, PlacesSearch
from ..deps import get_directions, get_places_search

router = APIRouter(tags=["places"])


@router.get("/search", response_model=SearchEnvelope)
def search(
    query: str = "",
    lat: float | None = None,
    lng: float | None = None,
    limit: int = Query(DEFAULT_LIMIT),
    radius: float | None = Query(None, description="Meters; defaults to DEFAULT_RADIUS"),
    places: PlacesSearch = Depends(get_places_search),
):
    """Local restaurants near (lat, lng), merged with the places provider when configured."""
    return places.search(query=query, lat=lat, lng=lng, limit=limit, radius=radius)


@router.get("/directions")
def directions(
    fromLng: float | None = None,  # noqa: N803
    fromLat: float | None = None,  # noqa: N803
    toLng: float | None = None,  # noqa: N803
    toLat: float | None = None,  # noqa: N803
    client: DirectionsClient = Depends(get_directions),
):
    """Raw driving route from the directions provider."""
    if None in (fromLng, fromLat, toLng, toLat):
        raise HTTPException(400, "missing coordinates")
    return client.route(fromLng, fromLat, toLng, toLat)
