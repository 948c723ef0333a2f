"""AnalysisClient — one EncodedImage in, one validated FoodAnalysis out."""
import asyncio
import json
import logging
import time
from typing import Optional

from pydantic import ValidationError
from tenacity import RetryError

from foodlens.config import Config
from foodlens.constants import (
    ALTERNATIVES_SCORE_THRESHOLD,
    MSG_ANALYSIS_DONE,
    MSG_ANALYSIS_START,
    MSG_ATTEMPT_TIMEOUT,
    MSG_ERR_EMPTY_RESPONSE,
    MSG_ERR_MISSING_KEY,
    MSG_ERR_NOT_JSON,
    MSG_ERR_NOT_OBJECT,
    MSG_ERR_TIMEOUT,
    MSG_SATURATED,
    MSG_SOFT_ALTERNATIVES,
    MSG_VALIDATION_FAILED,
)
from foodlens.errors import (
    ConfigurationError,
    ResponseValidationError,
    ServiceSaturatedError,
    ServiceTimeoutError,
)
from foodlens.image import EncodedImage
from foodlens.models import FoodAnalysis
from foodlens.prompts import build_analysis_prompt
from foodlens.retry import RetryPolicy, Sleep, retrying
from foodlens.schema import ANALYSIS_SCHEMA
from foodlens.vision.client import VisionClient
from foodlens.vision.factory import make_vision_client

logger = logging.getLogger(__name__)


# ── pure helpers (module-level so tests can import them directly) ──────────────


def parse_analysis(text: Optional[str]) -> FoodAnalysis:
    """Strictly parse model output into a FoodAnalysis.

    Raises ResponseValidationError on empty text, malformed JSON, a non-object
    payload, a missing required field, a wrong type or an out-of-set enum.
    Unknown extra fields are ignored.
    """
    match text:
        case str() if text.strip():
            pass
        case _:
            raise ResponseValidationError(MSG_ERR_EMPTY_RESPONSE)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseValidationError(MSG_ERR_NOT_JSON) from exc
    match payload:
        case dict():
            pass
        case _:
            raise ResponseValidationError(MSG_ERR_NOT_OBJECT)
    try:
        return FoodAnalysis.model_validate(payload)
    except ValidationError as exc:
        raise ResponseValidationError(str(exc)) from exc


def alternatives_consistent(
    analysis: FoodAnalysis, threshold: int = ALTERNATIVES_SCORE_THRESHOLD
) -> bool:
    """Soft check: healthy products (score >= threshold) should carry no alternatives."""
    return analysis.health_score < threshold or not analysis.alternatives


# ── client ────────────────────────────────────────────────────────────────────


class AnalysisClient:
    """Turns a normalized label photo into a validated FoodAnalysis.

    Holds no state between calls; concurrent analyze() calls are independent.
    """

    def __init__(
        self,
        config: Config,
        vision: VisionClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._vision = vision
        self._sleep = sleep
        self._policy = RetryPolicy(
            max_attempts=config.max_attempts,
            backoff_step=config.backoff_seconds,
        )
        self._prompt = build_analysis_prompt(config.output_language)

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def _resolve_vision(self) -> VisionClient:
        api_key = self._config.api_key()
        match api_key:
            case str() if api_key:
                pass
            case _:
                raise ConfigurationError(
                    MSG_ERR_MISSING_KEY % (self._config.api_key_env_var(), self._config.provider)
                )
        match self._vision:
            case None:
                return make_vision_client(self._config.provider, api_key)
            case vision:
                return vision

    async def _attempt(self, vision: VisionClient, image: EncodedImage) -> str:
        timeout = self._config.request_timeout
        call = vision.generate(image, self._prompt, ANALYSIS_SCHEMA)
        match timeout:
            case None:
                return await call
            case seconds:
                try:
                    return await asyncio.wait_for(call, timeout=seconds)
                except asyncio.TimeoutError as exc:
                    logger.warning(MSG_ATTEMPT_TIMEOUT, seconds)
                    raise ServiceTimeoutError(MSG_ERR_TIMEOUT % seconds) from exc

    async def analyze(self, image: EncodedImage) -> FoodAnalysis:
        vision = self._resolve_vision()
        logger.info(
            MSG_ANALYSIS_START, image.media_type, image.width, image.height, self._config.provider
        )
        started = time.monotonic()

        try:
            async for attempt in retrying(self._policy, self._sleep):
                with attempt:
                    text = await self._attempt(vision, image)
        except RetryError as exc:
            logger.error(MSG_SATURATED, self._policy.max_attempts)
            raise ServiceSaturatedError(self._policy.max_attempts) from exc.last_attempt.exception()

        try:
            analysis = parse_analysis(text)
        except ResponseValidationError as exc:
            logger.error(MSG_VALIDATION_FAILED, exc)
            raise

        if not alternatives_consistent(analysis):
            logger.warning(
                MSG_SOFT_ALTERNATIVES,
                analysis.health_score,
                ALTERNATIVES_SCORE_THRESHOLD,
                len(analysis.alternatives or []),
            )
        logger.info(
            MSG_ANALYSIS_DONE,
            analysis.product_name,
            analysis.health_score,
            time.monotonic() - started,
        )
        return analysis
