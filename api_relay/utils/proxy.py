"""
Upstream relay helpers
Build outbound URLs and mirror upstream responses back to the caller
"""

from typing import Mapping, Optional

import httpx
from fastapi import Response

JSON_MEDIA_TYPE = "application/json"


def build_forward_url(base_url: str, path: str = "", params: Optional[Mapping[str, str]] = None) -> str:
    """
    Build an absolute upstream URL

    Args:
        base_url: Upstream origin, optionally with a base path
        path: Path appended to the base, with a leading slash
        params: Query parameters, in forwarding order

    Returns:
        URL string
    """
    url = httpx.URL(base_url.rstrip("/") + path)
    if params:
        url = url.copy_merge_params(dict(params))
    return str(url)


def relay_response(upstream: httpx.Response) -> Response:
    """Mirror the upstream status and text body, always labelled as JSON"""
    return Response(
        content=upstream.text,
        status_code=upstream.status_code,
        media_type=JSON_MEDIA_TYPE
    )


def describe_error(error: Exception) -> str:
    """Error message for response bodies; some transport errors stringify to ''"""
    return str(error) or error.__class__.__name__
