"""VisionClient — abstract base for structured image analysis backends."""
from abc import ABC, abstractmethod
from typing import Any

from foodlens.image import EncodedImage


class VisionClient(ABC):
    @abstractmethod
    async def generate(self, image: EncodedImage, prompt: str, schema: dict[str, Any]) -> str:
        """Send image + prompt constrained by schema; return the raw JSON text.

        Raises a classified foodlens.errors exception on transport failure.
        """
        ...
