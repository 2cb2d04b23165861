"""Response error extraction for load test observability.

Parses Storefront API error envelopes into human-readable messages:

    {"success": false, "message": "...", "errors": [{"field": ..., "message": ...}], "error": "..."}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    parts = [body.get("message") or ""]
    for error in body.get("errors") or []:
        parts.append(f"{error.get('field')}: {error.get('message')}")
    if body.get("error"):
        parts.append(str(body["error"]))

    detail = " | ".join(part for part in parts if part)
    return detail or str(body)[:300]


def data_of(response: Response) -> dict:
    """The ``data`` member of a success envelope."""
    return response.json()["data"]
