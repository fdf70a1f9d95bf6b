from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException

from ...contracts import DeleteResult, Restaurant, RestaurantCreate
from ...logging_config import get_logger
from ...storage import RestaurantStore
from ..deps import get_store

router = APIRouter(tags=["restaurants"])
logger = get_logger(__name__)


@router.get("/restaurants", response_model=list[Restaurant])
def list_restaurants(store: RestaurantStore = Depends(get_store)):
    return store.read_all()


@router.get("/restaurants/{rid}", response_model=Restaurant)
def get_restaurant(rid: str, store: RestaurantStore = Depends(get_store)):
    record = store.get(rid)
    if not record:
        raise HTTPException(404, "Not found")
    return record


@router.post("/restaurants", response_model=Restaurant, status_code=201)
def create_restaurant(
    payload: RestaurantCreate | None = Body(default=None),
    store: RestaurantStore = Depends(get_store),
):
    if payload is None or not payload.is_complete:
        raise HTTPException(400, "name, latitude and longitude required")
    record = payload.materialize()
    store.append(record)
    logger.info("restaurant_created", restaurant_id=record.id, name=record.name)
    return record


@router.delete("/restaurants/{rid}", response_model=DeleteResult)
def delete_restaurant(rid: str, store: RestaurantStore = Depends(get_store)):
    removed = store.remove_by_id(rid)
    logger.info("restaurant_deleted", restaurant_id=rid, removed=removed)
    return DeleteResult(ok=True, removed=removed)
