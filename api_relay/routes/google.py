"""
Google Maps Routes
Pass-through proxies for Places, Geocoding, Directions and Distance Matrix
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from ..config import Settings
from ..models import UpstreamErrorResponse
from ..utils.dependencies import get_http_client, get_settings
from ..utils.proxy import build_forward_url, describe_error, relay_response
from ..utils.query_params import string_query_params

logger = logging.getLogger(__name__)

router = APIRouter()

# Route path -> Google Maps web service endpoint
GOOGLE_ENDPOINTS = {
    "/places/autocomplete": "/place/autocomplete/json",
    "/places/details": "/place/details/json",
    "/geocode": "/geocode/json",
    "/directions": "/directions/json",
    "/distance-matrix": "/distancematrix/json",
}


async def google_passthrough(
    request: Request,
    client: httpx.AsyncClient,
    settings: Settings,
    endpoint: str
) -> Response:
    """
    Forward a GET to a Google Maps endpoint and relay the answer

    The upstream status is returned unchanged, including 4xx/5xx. Any
    failure to reach Google becomes a 500 with a {status, error} body.
    The outbound URL carries the caller's API key, so it is never logged.
    """
    try:
        params = string_query_params(request.query_params)
        url = build_forward_url(settings.google_maps_base_url, endpoint, params)
        upstream = await client.get(url)
        return relay_response(upstream)
    except httpx.RequestError as e:
        logger.error(f"[google-proxy] {endpoint} request failed: {describe_error(e)}")
        return JSONResponse(status_code=500, content=UpstreamErrorResponse(error=describe_error(e)).to_body())
    except Exception as e:
        logger.exception(f"[google-proxy] {endpoint} internal error: {e}")
        return JSONResponse(status_code=500, content=UpstreamErrorResponse(error=describe_error(e)).to_body())


@router.get("/places/autocomplete")
async def places_autocomplete(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
):
    """Proxy Google Places Autocomplete"""
    return await google_passthrough(request, client, settings, GOOGLE_ENDPOINTS["/places/autocomplete"])


@router.get("/places/details")
async def places_details(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
):
    """Proxy Google Places Details"""
    return await google_passthrough(request, client, settings, GOOGLE_ENDPOINTS["/places/details"])


@router.get("/geocode")
async def geocode(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
):
    """Proxy Google Geocoding"""
    return await google_passthrough(request, client, settings, GOOGLE_ENDPOINTS["/geocode"])


@router.get("/directions")
async def directions(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
):
    """Proxy Google Directions"""
    return await google_passthrough(request, client, settings, GOOGLE_ENDPOINTS["/directions"])


@router.get("/distance-matrix")
async def distance_matrix(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
):
    """Proxy Google Distance Matrix"""
    return await google_passthrough(request, client, settings, GOOGLE_ENDPOINTS["/distance-matrix"])
