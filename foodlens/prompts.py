"""
Instruction block for food label analysis.
Shared by every vision backend; the output language and the alternatives
threshold are the only parameters.
"""
import json

from foodlens.constants import ALTERNATIVES_SCORE_THRESHOLD, DEFAULT_OUTPUT_LANGUAGE
from foodlens.schema import wire_schema

IDENTIFY_PRODUCT = (
    "1. Identify the product:\n"
    "- Read the brand name and product name from the visible text.\n"
    "- If a QR code or barcode is visible, use its digits or pattern to identify the specific product.\n"
    "- If no text or brand is visible, identify the product by its visual appearance.\n"
)

ANALYZE_HEALTH = (
    "2. Analyze health:\n"
    "- Extract the ingredients list and nutrition values where they are visible.\n"
    "- Identify additives (E-numbers) and rate each one Safe, Moderate or High risk.\n"
    "- Base the health score on the observed ingredients and additives, not on brand reputation.\n"
    "- If the text is blurry or missing but the product is identified, estimate from what is "
    "typical for that product type.\n"
)


def _alternatives_rule(threshold: int) -> str:
    return (
        "3. Suggest alternatives:\n"
        f"- ONLY IF the health score is below {threshold} (Average, Poor or Bad), suggest 2-3 "
        "healthier alternatives; otherwise leave the list empty.\n"
        "- Use generic product types or common healthy variations "
        "(e.g. sugary soda -> sparkling water with fruit). Never output brand URLs.\n"
    )


def _output_rule(language: str) -> str:
    return (
        "4. Output:\n"
        "- Weigh benefits against harms and compute a health score from 0 to 100.\n"
        "- Respond ONLY with JSON matching the schema.\n"
        f"- All free-text fields (summary, pros, cons, descriptions, highlights, alternatives) "
        f"MUST be written in {language}.\n"
    )


def build_analysis_prompt(
    language: str = DEFAULT_OUTPUT_LANGUAGE,
    threshold: int = ALTERNATIVES_SCORE_THRESHOLD,
) -> str:
    """Build the complete analysis instruction block."""
    return (
        "Analyze this image for food health purposes. The image may show a nutrition label, "
        "an ingredients list, the front of the packaging, or a QR code / barcode.\n\n"
        + IDENTIFY_PRODUCT
        + "\n"
        + ANALYZE_HEALTH
        + "\n"
        + _alternatives_rule(threshold)
        + "\n"
        + _output_rule(language)
    )


def with_inline_schema(prompt: str, schema: dict) -> str:
    """Append the schema as text, for backends without native structured output."""
    return (
        f"{prompt}\n"
        "Return a single JSON object, with no markdown fences, that conforms to this JSON Schema:\n"
        f"{json.dumps(wire_schema(schema), ensure_ascii=False)}"
    )
