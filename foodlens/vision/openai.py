"""OpenAIVisionClient — OpenAI GPT-4o backend with json_schema response format."""
from typing import Any

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from foodlens.constants import (
    ANALYSIS_TEMPERATURE,
    MSG_ERR_EMPTY_RESPONSE,
    OPENAI_VISION_MODEL,
    SCHEMA_NAME,
)
from foodlens.errors import ResponseValidationError, TransientServiceError, error_for_status
from foodlens.image import EncodedImage
from foodlens.schema import wire_schema
from foodlens.vision.client import VisionClient


class OpenAIVisionClient(VisionClient):

    def __init__(self, api_key: str, model: str = OPENAI_VISION_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def generate(self, image: EncodedImage, prompt: str, schema: dict[str, Any]) -> str:
        client = AsyncOpenAI(api_key=self._api_key)
        try:
            response = await client.chat.completions.create(
                model=self._model,
                temperature=ANALYSIS_TEMPERATURE,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": SCHEMA_NAME,
                        "schema": wire_schema(schema),
                        "strict": False,
                    },
                },
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image_url",
                                "image_url": {
                                    "url": f"data:{image.media_type};base64,{image.data}"
                                },
                            },
                            {"type": "text", "text": prompt},
                        ],
                    }
                ],
            )
        except APIStatusError as exc:
            raise error_for_status(exc.status_code, str(exc)) from exc
        except APIConnectionError as exc:
            raise TransientServiceError(str(exc)) from exc

        content = response.choices[0].message.content
        match content:
            case str() if content.strip():
                return content.strip()
            case _:
                raise ResponseValidationError(MSG_ERR_EMPTY_RESPONSE)
