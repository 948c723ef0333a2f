"""Select the vision backend for a configured provider."""
from foodlens.constants import (
    MSG_ERR_UNKNOWN_PROVIDER,
    PROVIDER_CLAUDE,
    PROVIDER_GEMINI,
    PROVIDER_OPENAI,
    PROVIDERS,
)
from foodlens.errors import ConfigurationError
from foodlens.vision.claude import ClaudeVisionClient
from foodlens.vision.client import VisionClient
from foodlens.vision.gemini import GeminiVisionClient
from foodlens.vision.openai import OpenAIVisionClient


def make_vision_client(provider: str, api_key: str) -> VisionClient:
    match provider:
        case p if p == PROVIDER_GEMINI:
            return GeminiVisionClient(api_key)
        case p if p == PROVIDER_CLAUDE:
            return ClaudeVisionClient(api_key)
        case p if p == PROVIDER_OPENAI:
            return OpenAIVisionClient(api_key)
        case _:
            raise ConfigurationError(MSG_ERR_UNKNOWN_PROVIDER % (provider, ", ".join(PROVIDERS)))
