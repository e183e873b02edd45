"""
Agora RTC Token Issuer
Builds short-lived publisher tokens for Agora audio/video channels
"""

import logging
import time
from typing import Callable, Optional

from agora_token_builder import RtcTokenBuilder

logger = logging.getLogger(__name__)

# RtcRole.PUBLISHER in the Agora SDKs
ROLE_PUBLISHER = 1

DEFAULT_UID = 0
DEFAULT_EXPIRE_SECONDS = 3600


class AgoraTokenError(Exception):
    """Base error for token issuance"""


class AgoraConfigurationError(AgoraTokenError):
    """Signing credentials are not configured"""

    def __init__(self, has_app_id: bool, has_app_cert: bool):
        self.has_app_id = has_app_id
        self.has_app_cert = has_app_cert
        super().__init__("Missing AGORA_APP_ID / AGORA_APP_CERT on backend")


class TokenRequestError(AgoraTokenError):
    """Token request parameters are missing or malformed"""


def parse_int_param(name: str, raw: Optional[str], default: int) -> int:
    """
    Parse an optional integer query parameter

    Args:
        name: Parameter name, used in the error message
        raw: Raw query value; None or blank means the default
        default: Value used when the parameter is absent

    Returns:
        Parsed integer

    Raises:
        TokenRequestError: If the value is not an integer
    """
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise TokenRequestError(f"Invalid {name}")


class RtcTokenIssuer:
    """Issues RTC tokens signed with the configured Agora credentials"""

    def __init__(
        self,
        app_id: Optional[str],
        app_cert: Optional[str],
        clock: Callable[[], float] = time.time
    ):
        self.app_id = app_id
        self.app_cert = app_cert
        self.clock = clock

    def ensure_configured(self):
        """Raise AgoraConfigurationError unless both credentials are set"""
        if not self.app_id or not self.app_cert:
            raise AgoraConfigurationError(
                has_app_id=bool(self.app_id),
                has_app_cert=bool(self.app_cert)
            )

    def privilege_expire_ts(self, expire_seconds: int) -> int:
        """Unix time after which the issued token stops granting privileges"""
        return int(self.clock()) + expire_seconds

    def build_token(self, channel: str, uid: int = DEFAULT_UID, expire_seconds: int = DEFAULT_EXPIRE_SECONDS) -> str:
        """
        Build a publisher token for a channel

        Args:
            channel: Agora channel name
            uid: Numeric user id (0 lets Agora assign one)
            expire_seconds: Token lifetime from now

        Returns:
            Signed token string

        Raises:
            AgoraConfigurationError: If credentials are missing
            TokenRequestError: If the channel name is empty
        """
        self.ensure_configured()
        if not channel:
            raise TokenRequestError("Missing channel")

        expire_ts = self.privilege_expire_ts(expire_seconds)
        logger.debug(f"Building RTC token for channel={channel} uid={uid} expire_ts={expire_ts}")

        return RtcTokenBuilder.buildTokenWithUid(
            self.app_id,
            self.app_cert,
            channel,
            uid,
            ROLE_PUBLISHER,
            expire_ts
        )
