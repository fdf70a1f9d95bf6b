from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_CATEGORY = "Unknown"
ID_LENGTH = 8


def new_restaurant_id() -> str:
    return uuid4().hex[:ID_LENGTH]


# --- Restaurants (wire names follow the JSON file: isVeg, createdAt) ---
class Restaurant(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    category: str = UNKNOWN_CATEGORY
    rating: float = 0
    price_range: int = 1
    is_veg: bool = Field(default=False, alias="isVeg")
    latitude: float | None = None
    longitude: float | None = None
    images: list[str] = Field(default_factory=list)
    opening_hours: str = ""
    created_at: datetime | None = Field(default=None, alias="createdAt")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class RestaurantCreate(BaseModel):
    """Create payload. Presence of name/latitude/longitude is checked by the route."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    category: str | None = None
    rating: float | None = None
    price_range: int | None = None
    is_veg: bool | None = Field(default=None, alias="isVeg")
    latitude: float | None = None
    longitude: float | None = None
    opening_hours: str | None = None

    @field_validator("name", "category", "opening_hours")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip()

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and self.latitude is not None and self.longitude is not None

    def materialize(self) -> Restaurant:
        """Build the stored record: assign an id, stamp createdAt and apply defaults."""
        return Restaurant(
            id=new_restaurant_id(),
            name=self.name or "",
            category=self.category or UNKNOWN_CATEGORY,
            rating=self.rating or 0,
            price_range=self.price_range or 1,
            is_veg=bool(self.is_veg),
            latitude=self.latitude,
            longitude=self.longitude,
            images=[],
            opening_hours=self.opening_hours or "",
            created_at=datetime.now(UTC),
        )


class DeleteResult(BaseModel):
    ok: bool = True
    removed: int


# --- Search ---
class SearchEnvelope(BaseModel):
    """``external`` is None only when the places provider is not configured."""

    external: Any | None = None
    local: list[Restaurant] = Field(default_factory=list)
