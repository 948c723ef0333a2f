"""Scanner — the inbound contract for UI callers: file bytes + MIME type in."""
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any

from foodlens.analysis import AnalysisClient
from foodlens.config import Config
from foodlens.constants import (
    CATEGORY_AUTH,
    CATEGORY_QUOTA,
    IMAGE_MEDIA_PREFIX,
    MSG_ERR_UNSUPPORTED_MEDIA,
    MSG_SCAN_STAMPED,
    MSG_USER_AUTH,
    MSG_USER_CONFIG,
    MSG_USER_INPUT,
    MSG_USER_QUOTA,
    MSG_USER_REMOTE,
    MSG_USER_SATURATED,
    MSG_USER_TRANSIENT,
    MSG_USER_UNKNOWN,
    MSG_USER_VALIDATION,
)
from foodlens.errors import (
    ConfigurationError,
    InputError,
    RemoteServiceError,
    ResponseValidationError,
    ServiceSaturatedError,
    TransientServiceError,
    UnsupportedMediaTypeError,
)
from foodlens.image import normalize_image_async
from foodlens.models import FoodAnalysis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    id: str
    timestamp: int  # epoch milliseconds
    analysis: FoodAnalysis

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "timestamp": self.timestamp, **self.analysis.to_wire()}


def ensure_image_media_type(declared_mime_type: str | None) -> str:
    """Reject anything whose declared MIME type is not image/*."""
    mime = (declared_mime_type or "").strip().lower()
    match mime.startswith(IMAGE_MEDIA_PREFIX):
        case True:
            return mime
        case False:
            raise UnsupportedMediaTypeError(MSG_ERR_UNSUPPORTED_MEDIA % (declared_mime_type or "unknown"))


def user_message(exc: BaseException) -> str:
    """Derive the user-facing message for a classified failure."""
    match exc:
        case ConfigurationError():
            return MSG_USER_CONFIG
        case InputError():
            return MSG_USER_INPUT
        case ServiceSaturatedError():
            return MSG_USER_SATURATED
        case TransientServiceError():
            return MSG_USER_TRANSIENT
        case ResponseValidationError():
            return MSG_USER_VALIDATION
        case RemoteServiceError(category=c) if c == CATEGORY_AUTH:
            return MSG_USER_AUTH
        case RemoteServiceError(category=c) if c == CATEGORY_QUOTA:
            return MSG_USER_QUOTA
        case RemoteServiceError():
            return MSG_USER_REMOTE
        case _:
            return MSG_USER_UNKNOWN


class Scanner:

    def __init__(self, config: Config, client: AnalysisClient | None = None) -> None:
        self._config = config
        self._client = client or AnalysisClient(config)

    async def scan(self, file_bytes: bytes, declared_mime_type: str | None) -> ScanResult:
        ensure_image_media_type(declared_mime_type)
        image = await normalize_image_async(
            file_bytes,
            max_dimension=self._config.max_image_dimension,
            quality=self._config.jpeg_quality,
        )
        analysis = await self._client.analyze(image)
        result = ScanResult(
            id=uuid.uuid4().hex,
            timestamp=int(time.time() * 1000),
            analysis=analysis,
        )
        logger.debug(MSG_SCAN_STAMPED, result.id, result.timestamp)
        return result
