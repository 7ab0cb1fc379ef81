"""Framework templates that wrap a base prompt in canonical phrasing."""

import re
from typing import Any, Callable, Optional

from promptsmith.core.logging import get_logger
from promptsmith.schemas.prompt_config import (
    FRAMEWORK_CONFIG_TYPES,
    ChainOfThoughtConfig,
    ConstraintBasedConfig,
    FewShotConfig,
    FrameworkType,
    ReasoningStructure,
    RoleBasedConfig,
    TemplateFillInConfig,
)

DEFAULT_ROLE = "an expert assistant"

_VARIABLE_PATTERN = re.compile(r"\{\{(\w+)\}\}")

_REASONING_STRUCTURES = {
    ReasoningStructure.STEP_BY_STEP: "Think through this step-by-step, showing your reasoning process.",
    ReasoningStructure.PROS_CONS: "Analyze the pros and cons of different approaches before concluding.",
    ReasoningStructure.FIRST_PRINCIPLES: (
        "Break this down to first principles and build your reasoning from the ground up."
    ),
}

_CONFIG_FIELDS = {
    FrameworkType.ROLE_BASED: ["role"],
    FrameworkType.FEW_SHOT: ["examples"],
    FrameworkType.CHAIN_OF_THOUGHT: ["reasoning_structure", "custom_reasoning_structure"],
    FrameworkType.TEMPLATE_FILL_IN: ["template_variables"],
    FrameworkType.CONSTRAINT_BASED: ["constraints"],
}


def extract_variables(content: str) -> list[str]:
    """Unique {{name}} placeholders in first-seen order."""
    seen: list[str] = []
    for name in _VARIABLE_PATTERN.findall(content):
        if name not in seen:
            seen.append(name)
    return seen


def substitute_variables(content: str, variables: dict[str, str]) -> str:
    """
    Replace every {{key}} with its value.

    Keys are inserted into the pattern unescaped, so a key containing regex
    metacharacters matches whatever that pattern matches. Keys that do not
    compile at all are skipped.

    Args:
        content: Text containing {{key}} placeholders
        variables: Placeholder values, applied in insertion order

    Returns:
        Text with placeholders replaced
    """
    result = content
    for key, value in variables.items():
        try:
            pattern = re.compile(r"\{\{" + key + r"\}\}")
        except re.error as e:
            get_logger().warning(
                f"Skipping template variable with invalid key: {key!r}",
                context={"event_type": "template_variable", "error": str(e)},
            )
            continue
        result = pattern.sub(lambda _match, text=value: text, result)
    return result


def _role_based(config: RoleBasedConfig, base_prompt: str, vs_block: str) -> str:
    role = config.role or DEFAULT_ROLE
    return f"You are {role}.\n\n{base_prompt}\n\n{vs_block}"


def _chain_of_thought(config: ChainOfThoughtConfig, base_prompt: str, vs_block: str) -> str:
    structure = _REASONING_STRUCTURES.get(config.reasoning_structure, "")
    if not structure and config.custom_reasoning_structure:
        structure = config.custom_reasoning_structure
    return f"{base_prompt}\n\n{structure}\n\n{vs_block}"


def _few_shot(config: FewShotConfig, base_prompt: str, vs_block: str) -> str:
    examples_text = "\n\n".join(
        f"Example {idx}:\nInput: {example.input}\nOutput: {example.output}"
        for idx, example in enumerate(config.examples, start=1)
    )
    return (
        "Here are examples to guide your response:\n\n"
        f"{examples_text}\n\n"
        "Now, please respond to the following:\n"
        f"{base_prompt}\n\n{vs_block}"
    )


def _template_fill_in(config: TemplateFillInConfig, base_prompt: str, vs_block: str) -> str:
    prompt = substitute_variables(base_prompt, config.template_variables)
    return f"{prompt}\n\n{vs_block}"


def _constraint_based(config: ConstraintBasedConfig, base_prompt: str, vs_block: str) -> str:
    constraints_text = "\n".join(
        f"{idx}. {constraint}" for idx, constraint in enumerate(config.constraints, start=1)
    )
    return (
        f"{base_prompt}\n\n"
        f"Please adhere to these constraints:\n{constraints_text}\n\n"
        f"{vs_block}"
    )


def _with_guidance(guidance: str) -> Callable[[Any, str, str], str]:
    """Renderer that follows the base prompt with a fixed guidance paragraph."""

    def render(_config: Any, base_prompt: str, vs_block: str) -> str:
        return f"{base_prompt}\n\n{guidance}\n\n{vs_block}"

    return render


FRAMEWORK_TEMPLATES: dict[FrameworkType, Callable[[Any, str, str], str]] = {
    FrameworkType.ROLE_BASED: _role_based,
    FrameworkType.CHAIN_OF_THOUGHT: _chain_of_thought,
    FrameworkType.FEW_SHOT: _few_shot,
    FrameworkType.TEMPLATE_FILL_IN: _template_fill_in,
    FrameworkType.CONSTRAINT_BASED: _constraint_based,
    FrameworkType.ITERATIVE_MULTI_TURN: _with_guidance(
        "This is part of an iterative conversation. Build upon previous context "
        "and be prepared for follow-up questions."
    ),
    FrameworkType.COMPARATIVE: _with_guidance(
        "Please compare and contrast the different options or approaches. Highlight key "
        "differences, trade-offs, and provide a recommendation based on the criteria."
    ),
    FrameworkType.GENERATIVE: _with_guidance(
        "Generate creative, original content that goes beyond typical examples."
    ),
    FrameworkType.ANALYTICAL: _with_guidance(
        "Provide a thorough analysis by breaking down the components, examining "
        "relationships, and identifying patterns or insights."
    ),
    FrameworkType.TRANSFORMATION: _with_guidance(
        "Transform the content according to the specified format, style, or structure "
        "while preserving core meaning."
    ),
}


def _config_for(framework: FrameworkType, config: Any) -> Any:
    """The config variant for a framework; a missing or mismatched config means defaults."""
    config_type = FRAMEWORK_CONFIG_TYPES[framework]
    if isinstance(config, config_type):
        return config
    if isinstance(config, dict):
        return config_type.model_validate({**config, "framework": framework.value})
    return config_type()


def generate_framework_prompt(
    framework: Optional[str],
    config: Any,
    base_prompt: str,
    vs_block: str,
) -> str:
    """
    Render a base prompt through a framework template.

    Args:
        framework: Framework key (exact match against FrameworkType values)
        config: Config variant for the framework (model or mapping); may be None
        base_prompt: The user's raw instruction
        vs_block: Rendered diversity-sampling block, placed verbatim at the end

    Returns:
        Rendered prompt; unknown frameworks give base_prompt and vs_block joined
        by a blank line
    """
    framework_type = FrameworkType.lookup(framework)
    if framework_type is None:
        return f"{base_prompt}\n\n{vs_block}"

    template = FRAMEWORK_TEMPLATES[framework_type]
    return template(_config_for(framework_type, config), base_prompt, vs_block)


def get_framework_config_fields(framework: Optional[str]) -> list[str]:
    """Config fields a framework's template reads."""
    framework_type = FrameworkType.lookup(framework)
    if framework_type is None:
        return []
    return list(_CONFIG_FIELDS.get(framework_type, []))
