import os
import sys
from pathlib import Path

import httpx
import pytest
import sentry_sdk
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Disable outbound Sentry calls during tests
sentry_sdk.init = lambda *args, **kwargs: None  # type: ignore[assignment]
os.environ["SENTRY_DSN"] = ""
test_data_dir = ROOT / "artifacts" / "test-data"
test_data_dir.mkdir(parents=True, exist_ok=True)
os.environ["DATA_DIR"] = str(test_data_dir)
for key in ("PLACES_API_KEY", "PLACES_API_URL", "MAPBOX_TOKEN"):
    os.environ.pop(key, None)

from backend.nearby.api.deps import get_http_client, get_store  # noqa: E402
from backend.nearby.contracts import Restaurant  # noqa: E402
from backend.nearby.main import app  # noqa: E402
from backend.nearby.settings import settings  # noqa: E402
from backend.nearby.storage import JsonFileStore  # noqa: E402


class Recorder:
    """Collects outbound requests and answers them with a canned handler."""

    def __init__(self, handler=None) -> None:
        self.requests: list[httpx.Request] = []
        self.handler = handler or (lambda request: httpx.Response(200, json={"results": []}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


def make_restaurant(rid: str, lat: float | None, lng: float | None, **extra) -> Restaurant:
    return Restaurant(id=rid, name=extra.pop("name", f"Place {rid}"), latitude=lat, longitude=lng, **extra)


@pytest.fixture(autouse=True)
def reset_settings():
    settings.PLACES_API_KEY = None
    settings.PLACES_API_URL = None
    settings.MAPBOX_TOKEN = None
    settings.DEFAULT_RADIUS = 5000
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def store(tmp_path) -> JsonFileStore:
    return JsonFileStore(tmp_path / "db.json")


@pytest.fixture
def upstream() -> Recorder:
    return Recorder()


@pytest.fixture
def client(store, upstream) -> TestClient:
    http_client = upstream.client()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_http_client] = lambda: http_client
    yield TestClient(app)
    http_client.close()
