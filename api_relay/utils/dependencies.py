"""
FastAPI dependencies
Expose the process-wide settings and upstream HTTP client to route handlers
"""

import httpx
from fastapi import Request

from ..config import Settings
from .agora_token import RtcTokenIssuer


def get_settings(request: Request) -> Settings:
    """Dependency to get the immutable relay settings"""
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Dependency to get the shared upstream HTTP client"""
    return request.app.state.http_client


def get_token_issuer(request: Request) -> RtcTokenIssuer:
    """Dependency to get an RTC token issuer bound to the configured credentials"""
    settings = get_settings(request)
    return RtcTokenIssuer(
        app_id=settings.agora_app_id,
        app_cert=settings.agora_app_cert
    )
