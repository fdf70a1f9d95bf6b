"""Health check with store and provider configuration status."""

from __future__ import annotations

import time
from typing import Any

from .settings import settings
from .storage import RestaurantStore, StoreError


def _is_configured(value: str | None) -> bool:
    """Return True when a config string is non-empty after trimming."""
    if value is None:
        return False
    return bool(value.strip())


class HealthChecker:
    def check(self, store: RestaurantStore) -> dict[str, Any]:
        checks = {
            "store": self._check_store(store),
            "places": {
                "status": "configured"
                if _is_configured(settings.PLACES_API_KEY) and _is_configured(settings.PLACES_API_URL)
                else "disabled"
            },
            "directions": {
                "status": "configured" if _is_configured(settings.MAPBOX_TOKEN) else "disabled"
            },
        }
        return {
            "ok": checks["store"]["status"] == "ok",
            "timestamp": time.time(),
            "restaurants": checks["store"].get("restaurant_count"),
            "places": checks["places"]["status"],
            "checks": checks,
        }

    def _check_store(self, store: RestaurantStore) -> dict[str, Any]:
        try:
            count = len(store.read_all())
        except (StoreError, OSError) as exc:
            return {"status": "error", "error": str(exc)}
        return {"status": "ok", "restaurant_count": count}


health_checker = HealthChecker()
