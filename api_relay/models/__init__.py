"""
Response models for the API relay
"""

from .responses import (
    HealthResponse,
    TokenResponse,
    ErrorResponse,
    AgoraConfigErrorResponse,
    UpstreamErrorResponse,
    PaymentNetworkErrorResponse,
)

__all__ = [
    "HealthResponse",
    "TokenResponse",
    "ErrorResponse",
    "AgoraConfigErrorResponse",
    "UpstreamErrorResponse",
    "PaymentNetworkErrorResponse",
]
