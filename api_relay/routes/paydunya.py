"""
PayDunya Routes
Forwards browser calls to the PayDunya API, which blocks cross-origin requests
"""

import logging
from typing import Dict, Optional
from urllib.parse import quote

import httpx
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from starlette.types import Receive, Scope, Send

from ..models import PaymentNetworkErrorResponse, UpstreamErrorResponse
from ..utils.dependencies import get_http_client, get_settings
from ..utils.proxy import JSON_MEDIA_TYPE, build_forward_url, describe_error, relay_response
from ..utils.query_params import string_query_params

logger = logging.getLogger(__name__)

router = APIRouter()

PAYDUNYA_PREFIX = "/api/paydunya"

# Forwarded verbatim, "" when absent. No other inbound header reaches PayDunya.
PAYDUNYA_AUTH_HEADERS = (
    "PAYDUNYA-MASTER-KEY",
    "PAYDUNYA-PRIVATE-KEY",
    "PAYDUNYA-TOKEN",
)

BODYLESS_METHODS = {"GET", "HEAD"}

# Consumed by the relay; the production host is used either way
SANDBOX_PARAM = "sandbox"

ERROR_PREVIEW_CHARS = 500


def build_forward_headers(request: Request) -> Dict[str, str]:
    """Explicit header allow-list for the PayDunya call"""
    headers = {name: request.headers.get(name, "") for name in PAYDUNYA_AUTH_HEADERS}
    headers["Content-Type"] = request.headers.get("content-type") or JSON_MEDIA_TYPE
    headers["Accept"] = JSON_MEDIA_TYPE
    return headers


def forward_path(request: Request) -> str:
    """
    Path below /api/paydunya, still percent-encoded.

    Decoding first would turn %3F or %23 inside a segment into a query
    or fragment delimiter upstream.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = quote(request.scope["path"], safe="/:@!$&'()*+,;=")
    return path.replace(PAYDUNYA_PREFIX, "", 1)


async def read_forward_body(request: Request) -> Optional[str]:
    """
    Inbound body as text, None for GET/HEAD.

    Bodies are decoded as UTF-8 whatever the declared content type, so
    binary payloads are not forwarded faithfully.
    """
    if request.method.upper() in BODYLESS_METHODS:
        return None
    raw = await request.body()
    return raw.decode("utf-8", errors="replace")


async def paydunya_proxy(request: Request) -> Response:
    """Relay any method under /api/paydunya/ to the same path on PayDunya"""
    method = request.method
    try:
        settings = get_settings(request)
        client = get_http_client(request)

        path = forward_path(request)
        params = string_query_params(request.query_params, exclude=(SANDBOX_PARAM,))
        forward_url = build_forward_url(settings.paydunya_base_url, path, params)

        headers = build_forward_headers(request)
        body = await read_forward_body(request)

        try:
            upstream = await client.request(method, forward_url, headers=headers, content=body)
        except httpx.RequestError as e:
            logger.error(
                f"[paydunya-proxy] fetch failed method={method} forwardUrl={forward_url} "
                f"error={describe_error(e)}"
            )
            error_body = PaymentNetworkErrorResponse(details=describe_error(e), forward_url=forward_url)
            return JSONResponse(status_code=502, content=error_body.to_body())

        if upstream.status_code >= 400:
            logger.warning(
                f"[paydunya-proxy] upstream error method={method} forwardUrl={forward_url} "
                f"status={upstream.status_code} bodyPreview={upstream.text[:ERROR_PREVIEW_CHARS]!r}"
            )

        return relay_response(upstream)

    except Exception as e:
        logger.error(
            f"[paydunya-proxy] internal error method={method} path={request.url.path} "
            f"query={dict(request.query_params)} error={describe_error(e)}"
        )
        return JSONResponse(status_code=500, content=UpstreamErrorResponse(error=describe_error(e)).to_body())


class PayDunyaProxyEndpoint:
    """ASGI endpoint for paydunya_proxy; class endpoints are registered without a method filter"""

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        request = Request(scope, receive)
        response = await paydunya_proxy(request)
        await response(scope, receive, send)


router.add_route("/{path:path}", PayDunyaProxyEndpoint(), include_in_schema=False)
