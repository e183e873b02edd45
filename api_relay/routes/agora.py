"""
Agora Routes
Short-lived RTC token issuance for audio/video channels
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..models import AgoraConfigErrorResponse, ErrorResponse, TokenResponse
from ..utils.agora_token import (
    DEFAULT_EXPIRE_SECONDS,
    DEFAULT_UID,
    AgoraConfigurationError,
    RtcTokenIssuer,
    TokenRequestError,
    parse_int_param,
)
from ..utils.dependencies import get_token_issuer

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/rtc-token",
    response_model=TokenResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": AgoraConfigErrorResponse}}
)
async def rtc_token(
    channel: List[str] = Query([], description="Agora channel name"),
    uid: Optional[str] = Query(None, description="Numeric user id, 0 by default"),
    expire: Optional[str] = Query(None, description="Token lifetime in seconds, 3600 by default"),
    issuer: RtcTokenIssuer = Depends(get_token_issuer)
):
    """
    Issue an RTC publisher token for a channel

    A repeated channel parameter is joined with commas (?channel=a&channel=b
    names channel "a,b"), the way browser-style query parsing stringifies it.
    """
    try:
        issuer.ensure_configured()
    except AgoraConfigurationError as e:
        logger.error(
            f"[agora-token] Missing environment variables: "
            f"hasAppId={e.has_app_id}, hasAppCert={e.has_app_cert}"
        )
        body = AgoraConfigErrorResponse(has_app_id=e.has_app_id, has_app_cert=e.has_app_cert)
        return JSONResponse(status_code=500, content=body.to_body())

    channel_name = ",".join(channel)
    if not channel_name:
        return JSONResponse(status_code=400, content=ErrorResponse(error="Missing channel").to_body())

    try:
        uid_value = parse_int_param("uid", uid, DEFAULT_UID)
        expire_seconds = parse_int_param("expire", expire, DEFAULT_EXPIRE_SECONDS)
    except TokenRequestError as e:
        return JSONResponse(status_code=400, content=ErrorResponse(error=str(e)).to_body())

    try:
        token = issuer.build_token(channel_name, uid_value, expire_seconds)
    except Exception as e:
        logger.error(f"[agora-token] Failed to build token for channel {channel_name}: {e}")
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(e)).to_body())

    return TokenResponse(
        token=token,
        channel=channel_name,
        uid=uid_value,
        expire_seconds=expire_seconds
    ).to_body()
