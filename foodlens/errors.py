"""Classified failures raised by the analysis pipeline.

Only TransientServiceError is recovered internally (by retry); every other
class is terminal for the call that raised it.
"""
from typing import Optional

from foodlens.constants import (
    AUTH_STATUS_CODES,
    BAD_REQUEST_STATUS_CODES,
    CATEGORY_AUTH,
    CATEGORY_BAD_REQUEST,
    CATEGORY_QUOTA,
    CATEGORY_UNKNOWN,
    GEMINI_OVERLOADED_STATUS,
    GEMINI_QUOTA_STATUS,
    MSG_ERR_SATURATED,
    OVERLOADED_STATUS_CODES,
    QUOTA_STATUS_CODES,
)


class FoodLensError(Exception):
    """Base class for every classified pipeline failure."""


class ConfigurationError(FoodLensError):
    """Missing or unusable configuration, e.g. no API key."""


class InputError(FoodLensError):
    """The supplied file cannot be used; ask the user for another one."""


class UnsupportedMediaTypeError(InputError):
    pass


class ImageDecodeError(InputError):
    pass


class ImageRenderError(InputError):
    pass


class TransientServiceError(FoodLensError):
    """Remote model is overloaded or temporarily unreachable."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ServiceTimeoutError(TransientServiceError):
    pass


class ServiceSaturatedError(FoodLensError):
    """Retry bound exhausted while the model kept reporting overload."""

    def __init__(self, attempts: int) -> None:
        super().__init__(MSG_ERR_SATURATED % attempts)
        self.attempts = attempts


class ResponseValidationError(FoodLensError):
    """Model output is not parseable or does not match the analysis schema."""


class RemoteServiceError(FoodLensError):
    """Permanent rejection by the remote service (auth, quota, bad request…)."""

    def __init__(
        self,
        message: str,
        category: str = CATEGORY_UNKNOWN,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status_code = status_code


def error_for_status(
    status_code: Optional[int],
    message: str,
    provider_status: Optional[str] = None,
) -> FoodLensError:
    """Map a transport-level status to a classified error. Never inspects message text."""
    match (status_code, provider_status):
        case (code, _) if code in OVERLOADED_STATUS_CODES:
            return TransientServiceError(message, status_code=code)
        case (_, status) if status == GEMINI_OVERLOADED_STATUS:
            return TransientServiceError(message, status_code=status_code)
        case (code, _) if code in AUTH_STATUS_CODES:
            return RemoteServiceError(message, CATEGORY_AUTH, code)
        case (code, status) if code in QUOTA_STATUS_CODES or status == GEMINI_QUOTA_STATUS:
            return RemoteServiceError(message, CATEGORY_QUOTA, code)
        case (code, _) if code in BAD_REQUEST_STATUS_CODES:
            return RemoteServiceError(message, CATEGORY_BAD_REQUEST, code)
        case (code, _):
            return RemoteServiceError(message, CATEGORY_UNKNOWN, code)
