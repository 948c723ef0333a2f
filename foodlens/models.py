"""Pydantic models for the structured analysis result.

Field names are snake_case in Python and camelCase on the wire; the models
validate every field, type and enum declared in foodlens.schema. Scores and
flags are strict: "85", "yes" or 0 are rejected rather than coerced.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Verdict = Literal["Excellent", "Good", "Average", "Poor", "Bad"]
RiskLevel = Literal["Safe", "Moderate", "High"]


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Additive(_WireModel):
    code: str = Field(..., description="E-number, or the name when no code is known")
    name: str
    risk_level: RiskLevel
    description: str


class AlternativeProduct(_WireModel):
    product_name: str
    reason: str


class FoodAnalysis(_WireModel):
    product_name: str
    health_score: int = Field(..., ge=0, le=100, strict=True)
    verdict: Verdict
    summary: str
    pros: List[str]
    cons: List[str]
    additives: List[Additive]
    alternatives: Optional[List[AlternativeProduct]] = None
    highlights: List[str]
    is_vegetarian: bool = Field(..., strict=True)
    is_gluten_free: bool = Field(..., strict=True)
    is_palm_oil_free: bool = Field(..., strict=True)

    def to_wire(self) -> dict:
        """camelCase dict, matching the model's structured output."""
        return self.model_dump(by_alias=True, exclude_none=True)
