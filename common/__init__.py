"""Shared error definitions."""
from common.error_messages import (
    ErrorCode,
    get_error_response,
    GenerationError,
    RequestValidationError,
    ConfigurationError,
    UnsupportedMediaTypeError,
    ProviderError
)

__all__ = [
    "ErrorCode",
    "get_error_response",
    "GenerationError",
    "RequestValidationError",
    "ConfigurationError",
    "UnsupportedMediaTypeError",
    "ProviderError"
]
