"""promptsmith - compose structured prompts from a base instruction."""

from promptsmith.assembler.composer import (
    export_as_markdown,
    export_as_text,
    export_prompt_config,
    generate_default_system_prompt,
    generate_enhanced_prompt,
    import_prompt_config,
)
from promptsmith.core.validator import (
    analyze_prompt_quality,
    estimate_token_count,
    generate_prompt_variations,
    optimize_prompt,
    validate_complete_prompt_config,
    validate_prompt_config,
    validate_prompt_quality,
)
from promptsmith.stages.enhancement_generator import generate_all_advanced_enhancements
from promptsmith.stages.framework_renderer import generate_framework_prompt
from promptsmith.stages.vs_instructions import (
    build_vs_block,
    generate_vs_instructions,
    get_vs_format,
)

__version__ = "0.1.0"

__all__ = [
    "analyze_prompt_quality",
    "build_vs_block",
    "estimate_token_count",
    "export_as_markdown",
    "export_as_text",
    "export_prompt_config",
    "generate_all_advanced_enhancements",
    "generate_default_system_prompt",
    "generate_enhanced_prompt",
    "generate_framework_prompt",
    "generate_prompt_variations",
    "generate_vs_instructions",
    "get_vs_format",
    "import_prompt_config",
    "optimize_prompt",
    "validate_complete_prompt_config",
    "validate_prompt_config",
    "validate_prompt_quality",
]
