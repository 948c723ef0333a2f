"""Scanner facade tests: MIME gate, normalization, metadata, user messages."""
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from foodlens.config import Config
from foodlens.errors import (
    ConfigurationError,
    ImageDecodeError,
    ImageRenderError,
    RemoteServiceError,
    ResponseValidationError,
    ServiceSaturatedError,
    ServiceTimeoutError,
    TransientServiceError,
    UnsupportedMediaTypeError,
)
from foodlens.constants import (
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
from foodlens.image import EncodedImage
from foodlens.models import FoodAnalysis
from foodlens.scanner import ScanResult, Scanner, ensure_image_media_type, user_message


def make_config(**overrides) -> Config:
    values = dict(
        provider="gemini",
        log_level="INFO",
        gemini_api_key="test-key",
        anthropic_api_key=None,
        openai_api_key=None,
        max_image_dimension=1024,
        jpeg_quality=80,
    )
    values.update(overrides)
    return Config(**values)


def make_client(analysis: FoodAnalysis) -> MagicMock:
    client = MagicMock()
    client.analyze = AsyncMock(return_value=analysis)
    return client


# ── MIME gate ─────────────────────────────────────────────────────────────────


@pytest.mark.parametrize("mime", ["image/jpeg", "image/png", "IMAGE/WEBP", " image/heic "])
def test_image_media_types_accepted(mime):
    assert ensure_image_media_type(mime).startswith("image/")


@pytest.mark.parametrize("mime", ["text/plain", "application/pdf", "", None, "video/mp4"])
def test_non_image_media_types_rejected(mime):
    with pytest.raises(UnsupportedMediaTypeError):
        ensure_image_media_type(mime)


async def test_scan_rejects_text_before_normalizer(valid_payload):
    client = make_client(FoodAnalysis.model_validate(valid_payload))

    with patch("foodlens.scanner.normalize_image_async", new=AsyncMock()) as normalize:
        with pytest.raises(UnsupportedMediaTypeError):
            await Scanner(make_config(), client=client).scan(b"hello", "text/plain")

    normalize.assert_not_awaited()
    client.analyze.assert_not_awaited()


# ── scan ──────────────────────────────────────────────────────────────────────


async def test_scan_normalizes_and_stamps_result(valid_payload, make_image_bytes):
    analysis = FoodAnalysis.model_validate(valid_payload)
    client = make_client(analysis)

    result = await Scanner(make_config(), client=client).scan(
        make_image_bytes(size=(2048, 1536)), "image/png"
    )

    assert isinstance(result, ScanResult)
    assert result.analysis is analysis
    assert len(result.id) == 32
    assert result.timestamp > 0
    image = client.analyze.await_args.args[0]
    assert isinstance(image, EncodedImage)
    assert image.media_type == "image/jpeg"
    assert (image.width, image.height) == (1024, 768)


async def test_scan_uses_configured_dimension(valid_payload, make_image_bytes):
    client = make_client(FoodAnalysis.model_validate(valid_payload))

    await Scanner(make_config(max_image_dimension=256), client=client).scan(
        make_image_bytes(size=(1000, 500)), "image/png"
    )

    image = client.analyze.await_args.args[0]
    assert (image.width, image.height) == (256, 128)


async def test_scan_ids_are_unique(valid_payload, make_image_bytes):
    scanner = Scanner(make_config(), client=make_client(FoodAnalysis.model_validate(valid_payload)))
    data = make_image_bytes()

    first = await scanner.scan(data, "image/png")
    second = await scanner.scan(data, "image/png")

    assert first.id != second.id


async def test_scan_undecodable_image_never_reaches_client(valid_payload):
    client = make_client(FoodAnalysis.model_validate(valid_payload))

    with pytest.raises(ImageDecodeError):
        await Scanner(make_config(), client=client).scan(b"\x89PNG broken", "image/png")

    client.analyze.assert_not_awaited()


async def test_scan_propagates_client_errors(make_image_bytes):
    client = MagicMock()
    client.analyze = AsyncMock(side_effect=ServiceSaturatedError(3))

    with pytest.raises(ServiceSaturatedError):
        await Scanner(make_config(), client=client).scan(make_image_bytes(), "image/png")


def test_scan_result_to_dict(valid_payload):
    result = ScanResult(
        id="abc", timestamp=1700000000000, analysis=FoodAnalysis.model_validate(valid_payload)
    )

    data = result.to_dict()

    assert data["id"] == "abc"
    assert data["timestamp"] == 1700000000000
    assert data["healthScore"] == valid_payload["healthScore"]
    json.dumps(data)


# ── user messages ─────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "exc,message",
    [
        (ConfigurationError("no key"), MSG_USER_CONFIG),
        (UnsupportedMediaTypeError("text"), MSG_USER_INPUT),
        (ImageDecodeError("bad"), MSG_USER_INPUT),
        (ImageRenderError("bad"), MSG_USER_INPUT),
        (ServiceSaturatedError(3), MSG_USER_SATURATED),
        (TransientServiceError("busy"), MSG_USER_TRANSIENT),
        (ServiceTimeoutError("slow"), MSG_USER_TRANSIENT),
        (ResponseValidationError("bad"), MSG_USER_VALIDATION),
        (RemoteServiceError("x", "auth", 401), MSG_USER_AUTH),
        (RemoteServiceError("x", "quota", 429), MSG_USER_QUOTA),
        (RemoteServiceError("x", "bad_request", 400), MSG_USER_REMOTE),
        (RuntimeError("boom"), MSG_USER_UNKNOWN),
    ],
)
def test_user_message_per_category(exc, message):
    assert user_message(exc) == message
