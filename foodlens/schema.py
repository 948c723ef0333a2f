"""Structured output contract for the food label analysis.

ANALYSIS_SCHEMA is the provider-neutral descriptor (JSON-Schema subset).
Backends with native structured output receive it directly or converted;
the result is always re-validated locally against foodlens.models.
"""
from typing import Any

from google.genai import types

from foodlens.constants import (
    ALTERNATIVES_SCORE_THRESHOLD,
    RISK_LEVELS,
    SCHEMA_VERSION,
    VERDICTS,
)


def _string(description: str = "") -> dict[str, Any]:
    node: dict[str, Any] = {"type": "string"}
    if description:
        node["description"] = description
    return node


def _string_list(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


ADDITIVE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "code": _string("E-number if available, otherwise the additive name."),
        "name": _string("Common name of the additive."),
        "riskLevel": {"type": "string", "enum": list(RISK_LEVELS)},
        "description": _string("Short explanation of why it is good or bad."),
    },
    "required": ["code", "name", "riskLevel", "description"],
}

ALTERNATIVE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "productName": _string("Name of a healthier generic alternative."),
        "reason": _string("Why this alternative is better, e.g. less sugar."),
    },
    "required": ["productName", "reason"],
}

ANALYSIS_SCHEMA: dict[str, Any] = {
    "title": "FoodAnalysis",
    "version": SCHEMA_VERSION,
    "type": "object",
    "properties": {
        "productName": _string(
            "Identified product name. If the brand is hidden, use the product category."
        ),
        "healthScore": {
            "type": "integer",
            "minimum": 0,
            "maximum": 100,
            "description": "Health score from 0 (very unhealthy) to 100 (very healthy).",
        },
        "verdict": {
            "type": "string",
            "enum": list(VERDICTS),
            "description": "Single word verdict on overall healthiness.",
        },
        "summary": _string("Short paragraph summarizing the analysis."),
        "pros": _string_list("Positive aspects, e.g. high protein, no added sugar."),
        "cons": _string_list("Negative aspects, e.g. high sodium, palm oil."),
        "additives": {
            "type": "array",
            "items": ADDITIVE_SCHEMA,
            "description": "Notable additives found on the label.",
        },
        "alternatives": {
            "type": "array",
            "items": ALTERNATIVE_SCHEMA,
            "description": (
                f"If healthScore < {ALTERNATIVES_SCORE_THRESHOLD}, 2-3 healthier generic "
                "alternatives. Otherwise leave empty."
            ),
        },
        "highlights": _string_list("Key highlights such as 'High Protein' or 'Low Carb'."),
        "isVegetarian": {"type": "boolean"},
        "isGlutenFree": {"type": "boolean"},
        "isPalmOilFree": {"type": "boolean"},
    },
    "required": [
        "productName",
        "healthScore",
        "verdict",
        "summary",
        "pros",
        "cons",
        "additives",
        "highlights",
        "isVegetarian",
        "isGlutenFree",
        "isPalmOilFree",
    ],
}

# Keys that are descriptive metadata, not part of the wire contract.
_META_KEYS = ("title", "version")

_GEMINI_TYPES = {
    "object": types.Type.OBJECT,
    "array": types.Type.ARRAY,
    "string": types.Type.STRING,
    "integer": types.Type.INTEGER,
    "number": types.Type.NUMBER,
    "boolean": types.Type.BOOLEAN,
}


def required_fields(schema: dict[str, Any] = ANALYSIS_SCHEMA) -> tuple[str, ...]:
    return tuple(schema.get("required", ()))


def wire_schema(schema: dict[str, Any] = ANALYSIS_SCHEMA) -> dict[str, Any]:
    """Schema without the metadata keys, as sent to providers."""
    return {k: v for k, v in schema.items() if k not in _META_KEYS}


def to_gemini_schema(node: dict[str, Any]) -> types.Schema:
    """Convert a descriptor node into google-genai's Schema type, recursively."""
    kwargs: dict[str, Any] = {"type": _GEMINI_TYPES[node["type"]]}
    match node:
        case {"properties": dict() as props}:
            kwargs["properties"] = {k: to_gemini_schema(v) for k, v in props.items()}
        case _:
            pass
    match node:
        case {"items": dict() as items}:
            kwargs["items"] = to_gemini_schema(items)
        case _:
            pass
    for key in ("required", "enum", "description", "minimum", "maximum"):
        if key in node:
            kwargs[key] = node[key]
    return types.Schema(**kwargs)
