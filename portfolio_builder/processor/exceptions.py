class ProcessorError(Exception):
    """Base exception for all pipeline errors.

    The message is shown to the client; status_code is the HTTP status used
    to report it.
    """

    status_code = 500


class AdmissionError(ProcessorError):
    """Raised when a request is refused before any work is done."""

    status_code = 400


class TooManyRequests(AdmissionError):
    """Raised when the client exceeded the rate limit."""

    status_code = 429


class CaptchaFailed(AdmissionError):
    """Raised when CAPTCHA verification rejects the token."""


class MissingFile(AdmissionError):
    """Raised when no PDF was uploaded."""


class ResumeValidationError(ProcessorError):
    """Raised when the upload does not look like a resume we can render."""

    status_code = 400


class TooShort(ResumeValidationError):
    """Raised when the extracted text is too short to be a resume."""


class TooManyPages(ResumeValidationError):
    """Raised when the PDF has more pages than a resume should."""


class TooLong(ResumeValidationError):
    """Raised when the extracted text exceeds the configured ceiling."""


class NotAResume(ResumeValidationError):
    """Raised when the classifier does not recognise the document as a resume."""


class UnknownTemplate(ResumeValidationError):
    """Raised when the requested template id is not one we have style guidance for."""


class ExtractionFailed(ProcessorError):
    """Raised when the PDF yields no text."""


class MalformedModelOutput(ProcessorError):
    """Raised when the structuring response is not valid JSON."""


class PromptTemplateError(ProcessorError):
    """Raised when a bundled prompt template cannot be loaded."""
