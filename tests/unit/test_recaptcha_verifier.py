from unittest.mock import MagicMock, patch

import httpx
import pytest

from portfolio_builder.captcha.exceptions import CaptchaVerificationError
from portfolio_builder.captcha.verifier import RecaptchaVerifier

_PATCH_TARGET = "portfolio_builder.captcha.verifier.httpx.post"
VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


def _response(payload: object) -> MagicMock:
    response = MagicMock()
    response.json.return_value = payload
    return response


def _verifier() -> RecaptchaVerifier:
    return RecaptchaVerifier(secret_key="secret", verify_url=VERIFY_URL, timeout_seconds=5)


class TestRecaptchaVerifier:
    def test_accepts_successful_token(self) -> None:
        with patch(_PATCH_TARGET, return_value=_response({"success": True})) as mock_post:
            assert _verifier().verify("token", remote_ip="1.2.3.4") is True
        mock_post.assert_called_once_with(
            VERIFY_URL,
            data={"secret": "secret", "response": "token", "remoteip": "1.2.3.4"},
            timeout=5,
        )

    def test_rejects_failed_token(self) -> None:
        payload = {"success": False, "error-codes": ["invalid-input-response"]}
        with patch(_PATCH_TARGET, return_value=_response(payload)):
            assert _verifier().verify("bad") is False

    def test_empty_token_is_rejected_without_network(self) -> None:
        with patch(_PATCH_TARGET) as mock_post:
            assert _verifier().verify("") is False
        mock_post.assert_not_called()

    def test_omits_remote_ip_when_unknown(self) -> None:
        with patch(_PATCH_TARGET, return_value=_response({"success": True})) as mock_post:
            _verifier().verify("token")
        assert "remoteip" not in mock_post.call_args.kwargs["data"]

    def test_network_failure_raises(self) -> None:
        with patch(_PATCH_TARGET, side_effect=httpx.ConnectError("down")):
            with pytest.raises(CaptchaVerificationError, match="request failed"):
                _verifier().verify("token")

    def test_invalid_json_raises(self) -> None:
        response = MagicMock()
        response.json.side_effect = ValueError("no json")
        with patch(_PATCH_TARGET, return_value=response):
            with pytest.raises(CaptchaVerificationError, match="invalid JSON"):
                _verifier().verify("token")

    @pytest.mark.parametrize("payload", [[{"success": True}], "ok", True, None])
    def test_non_object_payload_raises(self, payload: object) -> None:
        with patch(_PATCH_TARGET, return_value=_response(payload)):
            with pytest.raises(CaptchaVerificationError, match="unexpected payload"):
                _verifier().verify("token")

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(ValueError):
            RecaptchaVerifier(secret_key="")
