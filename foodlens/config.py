from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from foodlens.constants import (
    BACKOFF_STEP_SECONDS,
    DEFAULT_OUTPUT_LANGUAGE,
    DEFAULT_PROVIDER,
    JPEG_QUALITY,
    MAX_ATTEMPTS,
    MAX_IMAGE_DIMENSION,
    MSG_ERR_UNKNOWN_PROVIDER,
    PROVIDER_CLAUDE,
    PROVIDER_GEMINI,
    PROVIDER_OPENAI,
    PROVIDERS,
    REQUEST_TIMEOUT_SECONDS,
)

# Environment variable holding each provider's credential.
KEY_ENV_VARS = {
    PROVIDER_GEMINI: "GEMINI_API_KEY",
    PROVIDER_CLAUDE: "ANTHROPIC_API_KEY",
    PROVIDER_OPENAI: "OPENAI_API_KEY",
}


@dataclass(frozen=True)
class Config:
    provider: str
    log_level: str
    gemini_api_key: Optional[str]
    anthropic_api_key: Optional[str]
    openai_api_key: Optional[str]
    output_language: str = DEFAULT_OUTPUT_LANGUAGE
    max_image_dimension: int = MAX_IMAGE_DIMENSION
    jpeg_quality: int = JPEG_QUALITY
    request_timeout: Optional[float] = REQUEST_TIMEOUT_SECONDS
    max_attempts: int = MAX_ATTEMPTS
    backoff_seconds: float = BACKOFF_STEP_SECONDS

    def api_key(self) -> Optional[str]:
        """Credential for the configured provider, or None when absent."""
        return {
            PROVIDER_GEMINI: self.gemini_api_key,
            PROVIDER_CLAUDE: self.anthropic_api_key,
            PROVIDER_OPENAI: self.openai_api_key,
        }.get(self.provider)

    def api_key_env_var(self) -> str:
        return KEY_ENV_VARS.get(self.provider, "API_KEY")

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        provider = os.getenv("FOODLENS_PROVIDER", DEFAULT_PROVIDER).strip().lower()
        log_level = os.getenv("LOG_LEVEL", "INFO")
        gemini_api_key = (
            os.getenv("GEMINI_API_KEY")
            or os.getenv("GOOGLE_API_KEY")
            or os.getenv("API_KEY")
            or None
        )
        anthropic_api_key = os.getenv("ANTHROPIC_API_KEY") or None
        openai_api_key = os.getenv("OPENAI_API_KEY") or None
        language = os.getenv("FOODLENS_LANGUAGE", DEFAULT_OUTPUT_LANGUAGE).strip()
        max_dimension = os.getenv("FOODLENS_MAX_DIMENSION", str(MAX_IMAGE_DIMENSION))
        quality = os.getenv("FOODLENS_JPEG_QUALITY", str(JPEG_QUALITY))
        timeout = os.getenv("FOODLENS_REQUEST_TIMEOUT", str(REQUEST_TIMEOUT_SECONDS))
        max_attempts = os.getenv("FOODLENS_MAX_ATTEMPTS", str(MAX_ATTEMPTS))
        backoff = os.getenv("FOODLENS_BACKOFF_SECONDS", str(BACKOFF_STEP_SECONDS))

        return cls._validate(
            provider=provider,
            log_level=log_level,
            gemini_api_key=gemini_api_key,
            anthropic_api_key=anthropic_api_key,
            openai_api_key=openai_api_key,
            output_language=language or DEFAULT_OUTPUT_LANGUAGE,
            max_image_dimension=int(max_dimension),
            jpeg_quality=int(quality),
            request_timeout=float(timeout) or None,
            max_attempts=int(max_attempts),
            backoff_seconds=float(backoff),
        )

    @staticmethod
    def _validate(
        provider: str,
        log_level: str,
        gemini_api_key: Optional[str],
        anthropic_api_key: Optional[str],
        openai_api_key: Optional[str],
        output_language: str,
        max_image_dimension: int,
        jpeg_quality: int,
        request_timeout: Optional[float],
        max_attempts: int,
        backoff_seconds: float,
    ) -> "Config":
        # Credentials are checked on first use, not here.
        match provider:
            case p if p in PROVIDERS:
                pass
            case _:
                raise ValueError(MSG_ERR_UNKNOWN_PROVIDER % (provider, ", ".join(PROVIDERS)))

        match max_image_dimension:
            case n if n > 0:
                pass
            case _:
                raise ValueError("FOODLENS_MAX_DIMENSION must be positive")

        match jpeg_quality:
            case q if 1 <= q <= 95:
                pass
            case _:
                raise ValueError("FOODLENS_JPEG_QUALITY must be between 1 and 95")

        match request_timeout:
            case None:
                pass
            case t if t > 0:
                pass
            case _:
                raise ValueError("FOODLENS_REQUEST_TIMEOUT must not be negative")

        match max_attempts:
            case n if n >= 1:
                pass
            case _:
                raise ValueError("FOODLENS_MAX_ATTEMPTS must be at least 1")

        match backoff_seconds:
            case s if s >= 0:
                pass
            case _:
                raise ValueError("FOODLENS_BACKOFF_SECONDS must not be negative")

        return Config(
            provider=provider,
            log_level=log_level,
            gemini_api_key=gemini_api_key,
            anthropic_api_key=anthropic_api_key,
            openai_api_key=openai_api_key,
            output_language=output_language,
            max_image_dimension=max_image_dimension,
            jpeg_quality=jpeg_quality,
            request_timeout=request_timeout,
            max_attempts=max_attempts,
            backoff_seconds=backoff_seconds,
        )
