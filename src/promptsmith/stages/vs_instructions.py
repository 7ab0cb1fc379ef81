"""Diversity-sampling (Verbalized Sampling) instruction generation."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from promptsmith.schemas.prompt_config import FrameworkType
from promptsmith.schemas.vs_enhancement import (
    DistributionType,
    VSCompatibility,
    VSEnhancement,
    VSInstructionBlock,
)

DEFAULT_RARITY_THRESHOLD = 0.15
RARITY_THRESHOLDS = (0.15, 0.10, 0.05)

COMMON_DIMENSIONS = (
    "Audience segments",
    "Strategic approaches",
    "Risk levels",
    "Time horizons",
    "Resource requirements",
    "Technical complexity",
    "Innovation level",
    "Market positioning",
    "Cost structures",
)

ANTI_TYPICALITY_TEXT = (
    "IMPORTANT: Actively avoid typical, first-thought responses. Challenge yourself "
    "to consider perspectives and approaches that would not be immediately obvious."
)
CUSTOM_CONSTRAINTS_LABEL = "Additional constraints:"

_VS_COMPATIBILITY = {
    FrameworkType.TEMPLATE_FILL_IN: VSCompatibility(
        True, "VS works if template allows multiple outputs"
    ),
    FrameworkType.CONSTRAINT_BASED: VSCompatibility(
        False, "VS diversity may conflict with strict constraints"
    ),
}


def _equal_probability(count: int) -> str:
    """1/count to two decimals, ties rounded up."""
    return str(Decimal(1 / count).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _format_threshold(threshold: float) -> str:
    return f"{threshold:g}"


def _broad_spectrum(count: int, include_reasoning: bool) -> str:
    text = (
        f"Generate {count} diverse responses with probability estimates (0.01-0.40). "
        "Include mix from common (0.15+) to rare (0.05-) responses. "
        "Ensure each represents a fundamentally different approach, "
        "not variations of the same concept."
    )
    if include_reasoning:
        text += " Include brief rationale for each probability assignment."
    return text


def _rarity_hunt(count: int, threshold: float, include_reasoning: bool) -> str:
    text = (
        f"Generate {count} responses focusing on unconventional approaches "
        f"(probability < {_format_threshold(threshold)}). Skip obvious choices. "
        "Focus on options that standard prompting would miss. "
        "Avoid defaulting to stereotypical responses."
    )
    if include_reasoning:
        text += " Explain why each option is rare or unconventional."
    return text


def _balanced_categories(count: int, categories: list[str], include_reasoning: bool) -> str:
    # Probability follows the response count, not the number of categories.
    text = (
        f"Generate {count} responses, one per category with equal probability "
        f"({_equal_probability(count)}). Categories: {', '.join(categories)}. "
        "Ensure each response genuinely represents its assigned category."
    )
    if include_reasoning:
        text += " Explain how each response fits its category."
    return text


def generate_vs_instructions(vs_config: VSEnhancement) -> str:
    """
    Build the diversity-sampling instruction text.

    Args:
        vs_config: Diversity-sampling settings

    Returns:
        Instruction text, or '' when sampling is disabled
    """
    if not vs_config.enabled:
        return ""

    count = vs_config.number_of_responses
    include_reasoning = vs_config.include_probability_reasoning
    distribution = vs_config.distribution_type

    instruction = ""
    if distribution == DistributionType.BROAD_SPECTRUM:
        instruction = _broad_spectrum(count, include_reasoning)
    elif distribution == DistributionType.RARITY_HUNT:
        threshold = vs_config.probability_threshold or DEFAULT_RARITY_THRESHOLD
        instruction = _rarity_hunt(count, threshold, include_reasoning)
    elif distribution == DistributionType.BALANCED_CATEGORIES:
        instruction = _balanced_categories(count, vs_config.all_dimensions, include_reasoning)

    if vs_config.anti_typicality_enabled:
        instruction += f"\n\n{ANTI_TYPICALITY_TEXT}"

    if vs_config.custom_constraints:
        instruction += f"\n\n{CUSTOM_CONSTRAINTS_LABEL} {vs_config.custom_constraints}"

    return instruction


def get_vs_format(
    distribution_type: Union[DistributionType, str], include_reasoning: bool
) -> str:
    """
    Placeholder template for one candidate response.

    Args:
        distribution_type: Strategy the instruction text was written for
        include_reasoning: Whether the instruction asks for a rationale

    Returns:
        Template string, or '' for an unknown strategy
    """
    if distribution_type == DistributionType.BROAD_SPECTRUM:
        if include_reasoning:
            return "[Response] (Probability: 0.XX - Rationale: [explanation])"
        return "[Response] (Probability: 0.XX)"
    if distribution_type == DistributionType.RARITY_HUNT:
        if include_reasoning:
            return "[Response] (Probability: 0.XX - Why rare: [rationale])"
        return "[Response] (Probability: 0.XX)"
    if distribution_type == DistributionType.BALANCED_CATEGORIES:
        if include_reasoning:
            return "Category: [X] | [Response] (Probability: 0.XX - Category fit: [explanation])"
        return "Category: [X] | [Response] (Probability: 0.XX)"
    return ""


def build_vs_block(vs_config: VSEnhancement) -> VSInstructionBlock:
    """Instruction text and the format template that matches it."""
    return VSInstructionBlock(
        instruction=generate_vs_instructions(vs_config),
        format_template=get_vs_format(
            vs_config.distribution_type, vs_config.include_probability_reasoning
        ),
    )


def is_vs_compatible_with_framework(framework: str) -> VSCompatibility:
    """Whether diversity sampling suits a framework; unknown frameworks are compatible."""
    framework_type = FrameworkType.lookup(framework)
    if framework_type is None:
        return VSCompatibility(True)
    return _VS_COMPATIBILITY.get(framework_type, VSCompatibility(True))
