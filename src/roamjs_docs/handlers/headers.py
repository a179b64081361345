"""CORS headers for documentation responses."""

from typing import Any

from roamjs_docs.config import DEV_SITE_URL, SITE_URL

ALLOWED_ORIGINS: frozenset[str] = frozenset({SITE_URL, DEV_SITE_URL})


def cors_headers(event: dict[str, Any] | None = None) -> dict[str, str]:
    """Return response headers, echoing the request origin when it is allowed."""
    request_headers = (event or {}).get("headers") or {}
    origin = request_headers.get("origin") or request_headers.get("Origin") or ""
    return {
        "Access-Control-Allow-Origin": origin if origin in ALLOWED_ORIGINS else SITE_URL,
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
        "Content-Type": "application/json",
    }
