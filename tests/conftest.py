import io

import pytest
from PIL import Image


def _payload() -> dict:
    return {
        "productName": "Chocolate Hazelnut Spread",
        "healthScore": 28,
        "verdict": "Poor",
        "summary": "Yüksek şeker ve palm yağı içeriği.",
        "pros": ["Fındık içerir"],
        "cons": ["Yüksek şeker", "Palm yağı"],
        "additives": [
            {
                "code": "E322",
                "name": "Lecithin",
                "riskLevel": "Safe",
                "description": "Emülgatör.",
            }
        ],
        "alternatives": [
            {"productName": "Şekersiz fındık ezmesi", "reason": "Daha az şeker"},
        ],
        "highlights": ["Yüksek Şeker"],
        "isVegetarian": True,
        "isGlutenFree": True,
        "isPalmOilFree": False,
    }


@pytest.fixture
def valid_payload() -> dict:
    """A fresh, schema-valid analysis payload (camelCase wire form)."""
    return _payload()


@pytest.fixture
def make_image_bytes():
    """Factory: encode a solid-colour test image in memory."""

    def _make(size=(640, 480), mode="RGB", color=(200, 40, 40), fmt="PNG") -> bytes:
        buf = io.BytesIO()
        Image.new(mode, size, color).save(buf, format=fmt)
        return buf.getvalue()

    return _make
