"""
Tests for Agora RTC token issuance
"""

from unittest.mock import patch

import pytest

from api_relay.utils.agora_token import (
    ROLE_PUBLISHER,
    AgoraConfigurationError,
    RtcTokenIssuer,
    TokenRequestError,
    parse_int_param,
)
from api_relay.utils.dependencies import get_token_issuer

FIXED_NOW = 1_700_000_000
APP_ID = "970CA35de60c44645bbae8a215061b33"
APP_CERT = "5CFd2fd1755d40ecb72977518be15d3b"


class TestParseIntParam:
    """Test optional integer query parsing"""

    def test_absent_uses_default(self):
        assert parse_int_param("uid", None, 0) == 0

    def test_blank_uses_default(self):
        assert parse_int_param("expire", "  ", 3600) == 3600

    def test_parses_integer(self):
        assert parse_int_param("uid", "42", 0) == 42

    def test_rejects_non_integer(self):
        with pytest.raises(TokenRequestError, match="Invalid uid"):
            parse_int_param("uid", "abc", 0)


class TestRtcTokenIssuer:
    """Test the token issuer in isolation"""

    def test_missing_credentials(self):
        issuer = RtcTokenIssuer(app_id=APP_ID, app_cert=None)
        with pytest.raises(AgoraConfigurationError) as exc_info:
            issuer.build_token("room1")
        assert exc_info.value.has_app_id is True
        assert exc_info.value.has_app_cert is False

    def test_empty_channel(self):
        issuer = RtcTokenIssuer(app_id=APP_ID, app_cert=APP_CERT)
        with pytest.raises(TokenRequestError, match="Missing channel"):
            issuer.build_token("")

    def test_privilege_expire_ts_uses_clock(self):
        issuer = RtcTokenIssuer(app_id=APP_ID, app_cert=APP_CERT, clock=lambda: FIXED_NOW + 0.9)
        assert issuer.privilege_expire_ts(60) == FIXED_NOW + 60

    def test_signs_with_publisher_role(self):
        issuer = RtcTokenIssuer(app_id=APP_ID, app_cert=APP_CERT, clock=lambda: FIXED_NOW)
        with patch("api_relay.utils.agora_token.RtcTokenBuilder") as mock_builder:
            mock_builder.buildTokenWithUid.return_value = "signed-token"
            token = issuer.build_token("room1", 42, 60)

        assert token == "signed-token"
        mock_builder.buildTokenWithUid.assert_called_once_with(
            APP_ID, APP_CERT, "room1", 42, ROLE_PUBLISHER, FIXED_NOW + 60
        )

    def test_same_inputs_same_signing_call(self):
        """Fixed inputs and a fixed clock reach the signer identically"""
        issuer = RtcTokenIssuer(app_id=APP_ID, app_cert=APP_CERT, clock=lambda: FIXED_NOW)
        with patch("api_relay.utils.agora_token.RtcTokenBuilder") as mock_builder:
            mock_builder.buildTokenWithUid.side_effect = lambda *args: "|".join(map(str, args))
            first = issuer.build_token("room1", 7, 120)
            second = issuer.build_token("room1", 7, 120)

        assert first == second
        assert mock_builder.buildTokenWithUid.call_args_list[0] == mock_builder.buildTokenWithUid.call_args_list[1]

    def test_real_signer_same_token_for_fixed_inputs(self):
        """Pinning the clock and the signer's salt source yields identical tokens"""
        issuer = RtcTokenIssuer(app_id=APP_ID, app_cert=APP_CERT, clock=lambda: FIXED_NOW)
        with patch("agora_token_builder.AccessToken.time.time", return_value=FIXED_NOW), \
                patch("agora_token_builder.AccessToken.secrets.SystemRandom") as mock_random:
            mock_random.return_value.randint.return_value = 12345678
            first = issuer.build_token("room1", 7, 60)
            second = issuer.build_token("room1", 7, 60)
            other_channel = issuer.build_token("room2", 7, 60)

        assert first == second
        assert first != other_channel

    def test_real_signer_returns_token(self):
        issuer = RtcTokenIssuer(app_id=APP_ID, app_cert=APP_CERT)
        token = issuer.build_token("room1", 42, 60)
        assert isinstance(token, str)
        assert token


class TestRtcTokenRoute:
    """Test GET /api/agora/rtc-token"""

    def test_issue_token(self, client):
        response = client.get("/api/agora/rtc-token", params={"channel": "room1", "uid": "42", "expire": "60"})

        assert response.status_code == 200
        data = response.json()
        assert data["channel"] == "room1"
        assert data["uid"] == 42
        assert data["expireSeconds"] == 60
        assert isinstance(data["token"], str) and data["token"]

    def test_defaults(self, app, client):
        app.dependency_overrides[get_token_issuer] = lambda: RtcTokenIssuer(APP_ID, APP_CERT, clock=lambda: FIXED_NOW)
        with patch("api_relay.utils.agora_token.RtcTokenBuilder") as mock_builder:
            mock_builder.buildTokenWithUid.return_value = "signed-token"
            response = client.get("/api/agora/rtc-token", params={"channel": "room1"})

        assert response.status_code == 200
        assert response.json() == {"token": "signed-token", "channel": "room1", "uid": 0, "expireSeconds": 3600}
        mock_builder.buildTokenWithUid.assert_called_once_with(
            APP_ID, APP_CERT, "room1", 0, ROLE_PUBLISHER, FIXED_NOW + 3600
        )

    @pytest.mark.parametrize("params", [
        {},
        {"channel": ""},
        {"uid": "42"},
        {"uid": "not-a-number", "expire": "60"},
        {"channel": "", "expire": "oops"},
    ])
    def test_missing_channel(self, client, params):
        response = client.get("/api/agora/rtc-token", params=params)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing channel"}

    @pytest.mark.parametrize("param", ["uid", "expire"])
    def test_invalid_number(self, client, param):
        response = client.get("/api/agora/rtc-token", params={"channel": "room1", param: "abc"})
        assert response.status_code == 400
        assert response.json() == {"error": f"Invalid {param}"}

    @pytest.mark.parametrize("app_id, app_cert", [
        (None, None),
        (APP_ID, None),
        (None, APP_CERT),
        ("", APP_CERT),
    ])
    def test_missing_credentials(self, client_factory, app_id, app_cert):
        client = client_factory(agora_app_id=app_id, agora_app_cert=app_cert)

        response = client.get("/api/agora/rtc-token", params={"channel": "room1"})

        assert response.status_code == 500
        data = response.json()
        assert data["hasAppId"] is bool(app_id)
        assert data["hasAppCert"] is bool(app_cert)
        assert "AGORA_APP_ID" in data["error"]
        assert data["hint"]
        # secrets never leak into the body
        if app_cert:
            assert app_cert not in response.text
        if app_id:
            assert app_id not in response.text

    def test_missing_credentials_checked_before_channel(self, client_factory):
        client = client_factory(agora_app_id=None, agora_app_cert=None)
        response = client.get("/api/agora/rtc-token")
        assert response.status_code == 500

    def test_signer_failure(self, client):
        with patch("api_relay.utils.agora_token.RtcTokenBuilder") as mock_builder:
            mock_builder.buildTokenWithUid.side_effect = RuntimeError("signing failed")
            response = client.get("/api/agora/rtc-token", params={"channel": "room1"})

        assert response.status_code == 500
        assert response.json() == {"error": "signing failed"}

    def test_repeated_channel_joined(self, app, client):
        app.dependency_overrides[get_token_issuer] = lambda: RtcTokenIssuer(APP_ID, APP_CERT, clock=lambda: FIXED_NOW)
        with patch("api_relay.utils.agora_token.RtcTokenBuilder") as mock_builder:
            mock_builder.buildTokenWithUid.return_value = "signed-token"
            response = client.get("/api/agora/rtc-token?channel=a&channel=b")

        assert response.status_code == 200
        assert response.json()["channel"] == "a,b"
        assert mock_builder.buildTokenWithUid.call_args.args[2] == "a,b"
