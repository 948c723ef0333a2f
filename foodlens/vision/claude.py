"""ClaudeVisionClient — Anthropic Claude backend; schema travels in the prompt."""
from typing import Any

from anthropic import APIConnectionError, APIStatusError, AsyncAnthropic

from foodlens.constants import (
    ANALYSIS_TEMPERATURE,
    CLAUDE_MAX_TOKENS,
    CLAUDE_VISION_MODEL,
    MSG_ERR_EMPTY_RESPONSE,
)
from foodlens.errors import ResponseValidationError, TransientServiceError, error_for_status
from foodlens.image import EncodedImage
from foodlens.prompts import with_inline_schema
from foodlens.vision.client import VisionClient


class ClaudeVisionClient(VisionClient):

    def __init__(self, api_key: str, model: str = CLAUDE_VISION_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def generate(self, image: EncodedImage, prompt: str, schema: dict[str, Any]) -> str:
        client = AsyncAnthropic(api_key=self._api_key)
        try:
            message = await client.messages.create(
                model=self._model,
                max_tokens=CLAUDE_MAX_TOKENS,
                temperature=ANALYSIS_TEMPERATURE,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": image.media_type,
                                    "data": image.data,
                                },
                            },
                            {"type": "text", "text": with_inline_schema(prompt, schema)},
                        ],
                    }
                ],
            )
        except APIStatusError as exc:
            raise error_for_status(exc.status_code, str(exc)) from exc
        except APIConnectionError as exc:
            raise TransientServiceError(str(exc)) from exc

        text = "".join(
            getattr(block, "text", "") for block in message.content
        ).strip()
        match text:
            case "":
                raise ResponseValidationError(MSG_ERR_EMPTY_RESPONSE)
            case _:
                return text
