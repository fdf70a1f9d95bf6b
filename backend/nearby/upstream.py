"""Single-shot GET helper shared by the places and directions proxies."""

from __future__ import annotations

import time
from typing import Any

import httpx

from .metrics import upstream_request_duration_seconds, upstream_requests_total


class UpstreamError(RuntimeError):
    """An outbound provider call failed. ``label`` is the public error classification."""

    label = "upstream error"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def drop_missing(params: dict[str, Any]) -> dict[str, Any]:
    """Keep only parameters that carry a value; ``None`` means absent."""
    return {key: value for key, value in params.items() if value is not None}


def get_json(
    client: httpx.Client,
    url: str,
    *,
    provider: str,
    error_cls: type[UpstreamError],
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    """GET ``url`` once and return the decoded body, raising ``error_cls`` on any failure."""
    started = time.perf_counter()
    try:
        response = client.get(url, params=drop_missing(params or {}), headers=headers)
        response.raise_for_status()
        body = response.json()
    except httpx.HTTPStatusError as exc:
        upstream_requests_total.labels(provider=provider, result="error").inc()
        raise error_cls(
            f"{provider} responded {exc.response.status_code}: {exc.response.text[:200]}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        upstream_requests_total.labels(provider=provider, result="error").inc()
        raise error_cls(str(exc) or exc.__class__.__name__) from exc
    except ValueError as exc:
        upstream_requests_total.labels(provider=provider, result="error").inc()
        raise error_cls(f"Invalid JSON from {provider}") from exc
    finally:
        upstream_request_duration_seconds.labels(provider=provider).observe(
            time.perf_counter() - started
        )
    upstream_requests_total.labels(provider=provider, result="ok").inc()
    return body


__all__ = ["UpstreamError", "drop_missing", "get_json"]
