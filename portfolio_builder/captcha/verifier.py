import httpx

from portfolio_builder.captcha.exceptions import CaptchaVerificationError
from portfolio_builder.logging.logger import Log


class RecaptchaVerifier:
    """Checks reCAPTCHA tokens against the siteverify endpoint."""

    def __init__(
        self,
        *,
        secret_key: str,
        verify_url: str = "https://www.google.com/recaptcha/api/siteverify",
        timeout_seconds: int = 10,
    ) -> None:
        if not secret_key:
            raise ValueError("recaptcha_secret_key must not be empty")
        self._secret_key = secret_key
        self._verify_url = verify_url
        self._timeout_seconds = timeout_seconds

    def verify(self, token: str, remote_ip: str | None = None) -> bool:
        """Return True if the service accepts *token*.

        Raises:
            CaptchaVerificationError: on network failure or a non-JSON answer.
        """
        if not token:
            return False
        form = {"secret": self._secret_key, "response": token}
        if remote_ip:
            form["remoteip"] = remote_ip
        try:
            response = httpx.post(self._verify_url, data=form, timeout=self._timeout_seconds)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise CaptchaVerificationError(f"reCAPTCHA verification request failed: {exc}") from exc
        except ValueError as exc:
            raise CaptchaVerificationError(f"reCAPTCHA returned invalid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise CaptchaVerificationError(
                f"reCAPTCHA returned an unexpected payload: {type(payload).__name__}"
            )
        success = bool(payload.get("success"))
        if not success:
            Log.warning(f"reCAPTCHA rejected token: {payload.get('error-codes', [])}")
        return success
