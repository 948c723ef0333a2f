"""GeminiVisionClient — Google Gemini backend with native structured output."""
import asyncio
from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from foodlens.constants import (
    ANALYSIS_TEMPERATURE,
    GEMINI_VISION_MODEL,
    MSG_ERR_EMPTY_RESPONSE,
)
from foodlens.errors import ResponseValidationError, TransientServiceError, error_for_status
from foodlens.image import EncodedImage
from foodlens.schema import to_gemini_schema, wire_schema
from foodlens.vision.client import VisionClient


class GeminiVisionClient(VisionClient):

    def __init__(self, api_key: str, model: str = GEMINI_VISION_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def generate(self, image: EncodedImage, prompt: str, schema: dict[str, Any]) -> str:
        client = genai.Client(api_key=self._api_key)
        parts = [
            types.Part.from_bytes(data=image.to_bytes(), mime_type=image.media_type),
            types.Part.from_text(text=prompt),
        ]
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=to_gemini_schema(wire_schema(schema)),
            temperature=ANALYSIS_TEMPERATURE,
        )
        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=[types.Content(role="user", parts=parts)],
                config=config,
            )
        except errors.APIError as exc:
            raise error_for_status(exc.code, str(exc), exc.status) from exc
        except (httpx.TransportError, asyncio.TimeoutError) as exc:
            raise TransientServiceError(str(exc) or type(exc).__name__) from exc

        text = response.text
        match text:
            case str() if text.strip():
                return text.strip()
            case _:
                raise ResponseValidationError(MSG_ERR_EMPTY_RESPONSE)
