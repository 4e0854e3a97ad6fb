"""
User-facing error messages, status codes and service-layer exceptions.

Every failure the generation flow can produce is described by an ErrorCode.
The code decides the HTTP status and, unless the error passes an upstream
message through, the text shown to the user.
"""
from typing import Tuple, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for different types of failures."""

    # Validation Errors (400)
    PROMPT_REQUIRED = "PROMPT_REQUIRED"
    SOURCE_IMAGE_REQUIRED = "SOURCE_IMAGE_REQUIRED"
    INVALID_PARAMETER = "INVALID_PARAMETER"

    # Configuration Errors (500)
    MISSING_API_KEY = "MISSING_API_KEY"

    # Generation Errors (500)
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    NO_CONTENT_GENERATED = "NO_CONTENT_GENERATED"

    # Generic Errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


ERROR_MESSAGES = {
    ErrorCode.PROMPT_REQUIRED: "Prompt is required",
    ErrorCode.SOURCE_IMAGE_REQUIRED: "Source image is required for this mode",
    ErrorCode.INVALID_PARAMETER: "One or more parameters are invalid. Please review your request and try again.",
    ErrorCode.MISSING_API_KEY: "The service is not properly configured. Please contact support.",
    ErrorCode.UNSUPPORTED_MEDIA_TYPE: "Unsupported media type",
    ErrorCode.PROVIDER_ERROR: "Generation failed",
    ErrorCode.NO_CONTENT_GENERATED: "No media was returned by the generation service.",
    ErrorCode.UNKNOWN_ERROR: "Something unexpected happened. Please try again.",
}


ERROR_STATUS_CODES = {
    ErrorCode.PROMPT_REQUIRED: 400,
    ErrorCode.SOURCE_IMAGE_REQUIRED: 400,
    ErrorCode.INVALID_PARAMETER: 400,
    ErrorCode.MISSING_API_KEY: 500,
    ErrorCode.UNSUPPORTED_MEDIA_TYPE: 500,
    ErrorCode.PROVIDER_ERROR: 500,
    ErrorCode.NO_CONTENT_GENERATED: 500,
    ErrorCode.UNKNOWN_ERROR: 500,
}


def get_error_response(
    error_code: ErrorCode,
    custom_message: Optional[str] = None,
) -> Tuple[str, int]:
    """
    Get user-facing error message and HTTP status code.

    Args:
        error_code: The error code enum
        custom_message: Optional message that replaces the standard one

    Returns:
        Tuple of (error_message, status_code)
    """
    message = custom_message or ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.UNKNOWN_ERROR])
    status_code = ERROR_STATUS_CODES.get(error_code, 500)
    return message, status_code


class GenerationError(Exception):
    """Base class for failures raised by the generation service."""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(self, message: Optional[str] = None, error_code: Optional[ErrorCode] = None):
        if error_code is not None:
            self.error_code = error_code
        self.message = message or ERROR_MESSAGES[self.error_code]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES.get(self.error_code, 500)

    @property
    def public_message(self) -> str:
        """Message safe to return to the client."""
        return self.message


class RequestValidationError(GenerationError):
    """The request is missing something the selected mode needs."""

    error_code = ErrorCode.INVALID_PARAMETER


class ConfigurationError(GenerationError):
    """The provider credential is not configured."""

    error_code = ErrorCode.MISSING_API_KEY

    @property
    def public_message(self) -> str:
        # technical detail stays in the logs
        return ERROR_MESSAGES[ErrorCode.MISSING_API_KEY]


class UnsupportedMediaTypeError(GenerationError):
    error_code = ErrorCode.UNSUPPORTED_MEDIA_TYPE


class ProviderError(GenerationError):
    """The generation provider failed or returned an unexpected shape."""

    error_code = ErrorCode.PROVIDER_ERROR
