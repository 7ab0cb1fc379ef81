"""Prompt composition stages."""

from promptsmith.stages.enhancement_generator import (
    generate_all_advanced_enhancements,
    generate_conversation_flow,
    generate_format_controller,
    generate_reasoning_scaffold,
    generate_role_enhancement,
    generate_smart_constraints,
)
from promptsmith.stages.framework_renderer import (
    extract_variables,
    generate_framework_prompt,
    get_framework_config_fields,
    substitute_variables,
)
from promptsmith.stages.vs_instructions import (
    build_vs_block,
    generate_vs_instructions,
    get_vs_format,
    is_vs_compatible_with_framework,
)

__all__ = [
    "build_vs_block",
    "extract_variables",
    "generate_all_advanced_enhancements",
    "generate_conversation_flow",
    "generate_format_controller",
    "generate_framework_prompt",
    "generate_reasoning_scaffold",
    "generate_role_enhancement",
    "generate_smart_constraints",
    "generate_vs_instructions",
    "get_framework_config_fields",
    "get_vs_format",
    "is_vs_compatible_with_framework",
    "substitute_variables",
]
