"""Prompt composition."""

from promptsmith.assembler.composer import (
    export_as_markdown,
    export_as_text,
    export_prompt_config,
    generate_enhanced_prompt,
    import_prompt_config,
)

__all__ = [
    "export_as_markdown",
    "export_as_text",
    "export_prompt_config",
    "generate_enhanced_prompt",
    "import_prompt_config",
]
