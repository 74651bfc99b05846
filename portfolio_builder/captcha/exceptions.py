class CaptchaVerificationError(Exception):
    """Raised when the CAPTCHA verification service cannot be reached or answers garbage."""
