"""Top-level prompt composition."""

import json
import time
from datetime import datetime, timezone
from typing import Optional

from promptsmith.core.logging import get_logger
from promptsmith.core.validator import load_schema
from promptsmith.schemas.enhancements import AdvancedEnhancements
from promptsmith.schemas.generated import GeneratedPrompt, PromptBundle, PromptMetadata
from promptsmith.schemas.prompt_config import BasePromptConfig, Domain
from promptsmith.schemas.vs_enhancement import DistributionType, VSEnhancement
from promptsmith.stages.enhancement_generator import generate_all_advanced_enhancements
from promptsmith.stages.framework_renderer import generate_framework_prompt
from promptsmith.stages.vs_instructions import build_vs_block

DEFAULT_SYSTEM_PROMPT = "You are a helpful AI assistant."
TARGET_OUTCOME_LABEL = "Target outcome:"

SYSTEM_PROMPTS = {
    Domain.WRITING_CONTENT: (
        "You are an expert writer and content creator with a keen eye for clarity, "
        "engagement, and style."
    ),
    Domain.BUSINESS_STRATEGY: (
        "You are a strategic business consultant with deep expertise in business "
        "analysis and planning."
    ),
    Domain.CODE_DEVELOPMENT: (
        "You are an experienced software engineer with expertise in writing clean, "
        "efficient, and well-documented code."
    ),
    Domain.DATA_ANALYSIS: (
        "You are a data analyst with strong analytical skills and expertise in "
        "interpreting complex datasets."
    ),
    Domain.RESEARCH_LEARNING: (
        "You are a knowledgeable researcher skilled at finding, synthesizing, and "
        "explaining complex information."
    ),
    Domain.MARKETING_SALES: (
        "You are a marketing professional with expertise in persuasive communication "
        "and customer engagement."
    ),
    Domain.CREATIVE_DESIGN: (
        "You are a creative professional with a strong eye for design, aesthetics, "
        "and innovative thinking."
    ),
    Domain.COMMUNICATION: (
        "You are a communication expert skilled at clear, effective, and "
        "audience-appropriate messaging."
    ),
}


def generate_default_system_prompt(domain: Optional[str]) -> str:
    """System prompt for a domain; unknown or missing domains get the generic assistant."""
    for known, prompt in SYSTEM_PROMPTS.items():
        if domain == known.value:
            return prompt
    return DEFAULT_SYSTEM_PROMPT


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_enhanced_prompt(
    base_config: BasePromptConfig,
    vs_enhancement: VSEnhancement,
    advanced_enhancements: Optional[AdvancedEnhancements] = None,
) -> GeneratedPrompt:
    """
    Compose the final prompt.

    The diversity-sampling block (instruction plus its format template) is
    rendered first, then the framework template wraps the base prompt and
    places the block at the end. A target outcome is appended as a trailing
    clause and the result is trimmed. The system prompt depends only on the
    domain.

    Args:
        base_config: Domain, framework, base prompt and framework settings
        vs_enhancement: Diversity-sampling settings
        advanced_enhancements: Optional enhancements, appended after the
            diversity-sampling block

    Returns:
        GeneratedPrompt with final prompt, system prompt and metadata
    """
    start_time = time.perf_counter()

    vs_block = build_vs_block(vs_enhancement).render() if vs_enhancement.enabled else ""

    enhancement_text = vs_block
    if advanced_enhancements is not None:
        advanced_text = generate_all_advanced_enhancements(advanced_enhancements)
        if advanced_text:
            enhancement_text = (
                f"{enhancement_text}\n\n{advanced_text}" if enhancement_text else advanced_text
            )

    if base_config.framework:
        prompt = generate_framework_prompt(
            base_config.framework,
            base_config.framework_config,
            base_config.base_prompt,
            enhancement_text,
        )
    elif enhancement_text:
        prompt = f"{base_config.base_prompt}\n\n{enhancement_text}"
    else:
        prompt = base_config.base_prompt

    if base_config.target_outcome:
        prompt = f"{prompt}\n\n{TARGET_OUTCOME_LABEL} {base_config.target_outcome}"

    final_prompt = prompt.strip()
    metadata = PromptMetadata(
        domain=base_config.domain or "General",
        framework=base_config.framework or "None",
        vs_enabled=vs_enhancement.enabled,
        timestamp=_utc_timestamp(),
    )

    get_logger().log_composition(
        framework=metadata.framework,
        domain=metadata.domain,
        vs_enabled=metadata.vs_enabled,
        prompt_length=len(final_prompt),
        duration_ms=(time.perf_counter() - start_time) * 1000,
    )

    return GeneratedPrompt(
        final_prompt=final_prompt,
        system_prompt=generate_default_system_prompt(base_config.domain),
        metadata=metadata,
    )


def export_prompt_config(bundle: PromptBundle) -> str:
    """Serialize a bundle to indented JSON with camelCase keys."""
    return json.dumps(bundle.to_camel_dict(), indent=2, ensure_ascii=False)


def import_prompt_config(json_string: str) -> Optional[PromptBundle]:
    """
    Parse a bundle exported by ``export_prompt_config`` or the web app.

    Args:
        json_string: JSON text

    Returns:
        PromptBundle, or None when the text is not JSON or lacks the base
        config or diversity-sampling settings

    Raises:
        ValueError: If the sections are present but malformed
    """
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError:
        return None

    if not isinstance(data, dict):
        return None
    has_base = "baseConfig" in data or "base_config" in data
    has_vs = "vsEnhancement" in data or "vs_enhancement" in data
    if not (has_base and has_vs):
        return None

    return load_schema(data, PromptBundle)


def export_as_text(generated: GeneratedPrompt) -> str:
    """System prompt and final prompt separated by a horizontal rule."""
    return f"{generated.system_prompt}\n\n---\n\n{generated.final_prompt}"


def _display_timestamp(timestamp: str) -> str:
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return parsed.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def export_as_markdown(
    generated: GeneratedPrompt,
    base_config: BasePromptConfig,
    vs_enhancement: VSEnhancement,
) -> str:
    """
    Render a composed prompt as a shareable markdown document.

    The document carries a metadata header, the diversity-sampling settings
    when they were enabled, both prompts in fenced blocks and the target
    outcome when one was set.
    """
    metadata = generated.metadata
    lines = [
        "# Generated Prompt\n",
        f"**Generated:** {_display_timestamp(metadata.timestamp)}\n",
        f"**Domain:** {metadata.domain}",
        f"**Framework:** {metadata.framework}",
        f"**VS Enhanced:** {_yes_no(metadata.vs_enabled)}\n",
    ]

    if vs_enhancement.enabled:
        lines.extend(
            [
                "## VS Configuration\n",
                f"- **Distribution Type:** {vs_enhancement.distribution_type.value}",
                f"- **Number of Responses:** {vs_enhancement.number_of_responses}",
                "- **Include Probability Reasoning:** "
                f"{_yes_no(vs_enhancement.include_probability_reasoning)}",
            ]
        )
        if (
            vs_enhancement.distribution_type == DistributionType.RARITY_HUNT
            and vs_enhancement.probability_threshold
        ):
            lines.append(f"- **Probability Threshold:** {vs_enhancement.probability_threshold:g}")
        dimensions = [*vs_enhancement.dimensions, *vs_enhancement.custom_dimensions]
        if vs_enhancement.distribution_type == DistributionType.BALANCED_CATEGORIES and dimensions:
            lines.append(f"- **Dimensions:** {', '.join(dimensions)}")
        if vs_enhancement.anti_typicality_enabled:
            lines.append("- **Anti-Typicality:** Enabled")
        lines.append("")

    lines.extend(
        [
            "## System Prompt\n",
            "```",
            generated.system_prompt,
            "```\n",
            "## User Prompt\n",
            "```",
            generated.final_prompt,
            "```\n",
        ]
    )

    if base_config.target_outcome:
        lines.extend(["## Target Outcome\n", base_config.target_outcome, ""])

    return "\n".join(lines)
