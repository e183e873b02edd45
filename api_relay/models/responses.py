"""
Response bodies returned by the relay routes
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_body(self) -> Dict[str, Any]:
        """JSON-ready dict using the wire (camelCase) field names"""
        return self.model_dump(by_alias=True)


class HealthResponse(_CamelModel):
    ok: bool = True


class TokenResponse(_CamelModel):
    token: str
    channel: str
    uid: int
    expire_seconds: int = Field(alias="expireSeconds")


class ErrorResponse(_CamelModel):
    error: str


class AgoraConfigErrorResponse(_CamelModel):
    error: str = "Missing AGORA_APP_ID / AGORA_APP_CERT on backend"
    message: str = (
        "Please configure AGORA_APP_ID and AGORA_APP_CERT in your .env file or environment variables. "
        "Get these values from https://console.agora.io/"
    )
    hint: str = "Create a .env file in the backend directory with: AGORA_APP_ID=... and AGORA_APP_CERT=..."
    has_app_id: bool = Field(alias="hasAppId")
    has_app_cert: bool = Field(alias="hasAppCert")


class UpstreamErrorResponse(_CamelModel):
    status: str = "ERROR"
    error: str


class PaymentNetworkErrorResponse(_CamelModel):
    status: str = "ERROR"
    error: str = "PayDunya proxy network error"
    details: str
    forward_url: str = Field(alias="forwardUrl")
