"""Prompt validation, quality scoring and schema loading."""

import math
import re
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from promptsmith.core.logging import get_logger
from promptsmith.schemas.enhancements import (
    AdvancedEnhancements,
    FormatType,
    RoleType,
)
from promptsmith.schemas.generated import (
    OptimizationSuggestion,
    PromptAnalysis,
    QualityReport,
    ValidationIssue,
    ValidationResult,
)
from promptsmith.schemas.prompt_config import (
    BASE_PROMPT_INPUT_LIMIT,
    BASE_PROMPT_MAX_LENGTH,
    BasePromptConfig,
    ChainOfThoughtConfig,
    ConstraintBasedConfig,
    FewShotConfig,
    FrameworkType,
    ReasoningStructure,
    RoleBasedConfig,
    TemplateFillInConfig,
)
from promptsmith.schemas.vs_enhancement import DistributionType, VSEnhancement

ModelT = TypeVar("ModelT", bound=BaseModel)

QUALITY_MIN_LENGTH = 50
QUALITY_MAX_LENGTH = 5000
SHORT_PROMPT_LENGTH = 10

DIRECTIVE_WORDS = ("please", "should", "must", "ensure", "include")
STRUCTURE_MARKERS = ("\n", "•", "-")
INSTRUCTION_WORDS = ("format", "include", "avoid")
ROLE_PHRASES = ("you are", "assume", "role")
PLACEHOLDER_PHRASES = ("lorem ipsum", "placeholder", "todo", "fill this in")
STANDARD_THRESHOLDS = (0.15, 0.10, 0.05)


def _format_validation_error(error: ValidationError, schema_class: type[BaseModel]) -> str:
    """
    Format validation error with actionable suggestions.

    Args:
        error: Pydantic ValidationError
        schema_class: The schema class that failed validation

    Returns:
        Formatted error message with suggestions
    """
    errors = error.errors()
    if not errors:
        return str(error)

    error_parts = [f"Validation failed for {schema_class.__name__}:", ""]

    for err in errors:
        loc = " -> ".join(str(x) for x in err["loc"])
        error_type = err["type"]
        input_value = err.get("input")

        error_parts.append(f"Field: {loc}")
        error_parts.append(f"  Error: {err.get('msg', '')}")
        error_parts.append(f"  Type: {error_type}")

        if error_type == "list_type" and isinstance(input_value, str):
            error_parts.append(
                "  Suggestion: Expected list but got string. Wrap the value in a list: [value]"
            )
        elif error_type == "dict_type" and isinstance(input_value, list):
            error_parts.append(
                "  Suggestion: Expected a mapping but got list. Use key: value pairs."
            )
        elif error_type in ("enum", "literal_error"):
            error_parts.append("  Suggestion: Use one of the values listed in the error.")
        elif error_type in ("less_than_equal", "greater_than_equal"):
            error_parts.append("  Suggestion: Bring the value inside the allowed range.")
        elif error_type == "missing":
            error_parts.append(
                f"  Suggestion: Required field '{loc}' is missing. Add this field to the input data."
            )

        if input_value is not None:
            input_str = str(input_value)
            if len(input_str) > 100:
                input_str = input_str[:97] + "..."
            error_parts.append(f"  Input value: {input_str}")

        error_parts.append("")

    return "\n".join(error_parts).rstrip()


def load_schema(data: Any, schema_class: type[ModelT]) -> ModelT:
    """
    Validate data against a Pydantic schema.

    Args:
        data: Mapping to validate (camelCase or snake_case keys)
        schema_class: Pydantic model class to validate against

    Returns:
        Validated model instance

    Raises:
        ValueError: If validation fails, with a field-by-field message
    """
    try:
        return schema_class.model_validate(data)
    except ValidationError as e:
        raise ValueError(_format_validation_error(e, schema_class)) from e


def validate_prompt_config(base_config: BasePromptConfig) -> dict[str, str]:
    """
    Check a base config before composition.

    Args:
        base_config: Base prompt configuration to validate

    Returns:
        Mapping of field name to error message; empty when valid
    """
    errors: dict[str, str] = {}

    if not base_config.base_prompt or not base_config.base_prompt.strip():
        errors["basePrompt"] = "Base prompt is required"

    if base_config.base_prompt and len(base_config.base_prompt) > BASE_PROMPT_MAX_LENGTH:
        errors["basePrompt"] = "Base prompt must be less than 10,000 characters"

    if base_config.framework_type == FrameworkType.FEW_SHOT:
        config = base_config.framework_config
        if not isinstance(config, FewShotConfig) or not config.examples:
            errors["examples"] = "Few-Shot framework requires at least one example"

    get_logger().log_validation("prompt_config", error_count=len(errors))
    return errors


def validate_prompt_quality(prompt: str) -> QualityReport:
    """
    Heuristic quality score for a prompt text.

    Starts at 100 and deducts for length outside 50-5000 characters, missing
    directive language and missing structure. Instruction and role phrasing
    only add strengths.

    Args:
        prompt: Prompt text

    Returns:
        QualityReport with score clamped to 0-100
    """
    issues: list[str] = []
    strengths: list[str] = []
    score = 100
    lowered = prompt.lower()

    if len(prompt) < QUALITY_MIN_LENGTH:
        issues.append("Prompt is too short (less than 50 characters)")
        score -= 20
    elif len(prompt) > QUALITY_MAX_LENGTH:
        issues.append("Prompt is very long (over 5000 characters)")
        score -= 10
    else:
        strengths.append("Prompt length is appropriate")

    if any(word in lowered for word in DIRECTIVE_WORDS):
        strengths.append("Prompt uses clear directive language")
    else:
        issues.append("Prompt may benefit from clearer directive language")
        score -= 5

    if any(marker in prompt for marker in STRUCTURE_MARKERS):
        strengths.append("Prompt has good structure")
    else:
        issues.append("Prompt may benefit from better structure")
        score -= 5

    if any(word in lowered for word in INSTRUCTION_WORDS):
        strengths.append("Prompt includes specific instructions")

    if any(phrase in lowered for phrase in ROLE_PHRASES):
        strengths.append("Prompt includes role/context information")

    return QualityReport(score=max(0, min(100, score)), issues=issues, strengths=strengths)


VAGUE_TERMS = ("something", "things", "stuff", "maybe", "kind of", "sort of")
ACTION_VERBS = (
    "create",
    "generate",
    "write",
    "analyze",
    "explain",
    "summarize",
    "compare",
    "list",
    "describe",
    "evaluate",
)
CONTEXT_INDICATORS = ("because", "for", "to help", "in order to", "context:", "background:")
FILLER_PHRASES = (
    "please be sure to ",
    "make sure to ",
    "don't forget to ",
    "I would like you to ",
)
SEVERITY_PENALTIES = {"high": 15, "medium": 10, "low": 5}

NUMBERED_LIST_RE = re.compile(r"\d+\.|^\d+\)", re.MULTILINE)
BULLET_LIST_RE = re.compile(r"^[-*•]", re.MULTILINE)
EXAMPLE_RE = re.compile(r"example|for instance|such as|e\.g\.", re.IGNORECASE)


def _readability(prompt: str, word_count: int) -> int:
    sentences = len([part for part in re.split(r"[.!?]+", prompt) if part.strip()])
    score = 100
    if word_count / max(sentences, 1) > 25:
        score -= 20
    if len(prompt) / max(word_count, 1) > 6:
        score -= 15
    return score


def analyze_prompt_quality(prompt: str) -> PromptAnalysis:
    """
    Analyze a prompt for length, specificity, structure and intent.

    Unlike ``validate_prompt_quality``, which scores structural signals, this
    looks at wording: vague terms, action verbs, examples and context
    phrases. Every strength adds 5 points to a base of 70 and every
    suggestion subtracts by severity (high 15, medium 10, low 5).

    Args:
        prompt: Prompt text

    Returns:
        PromptAnalysis with score, counts, suggestions and strengths
    """
    suggestions: list[OptimizationSuggestion] = []
    strengths: list[str] = []
    lower_prompt = prompt.lower()
    word_count = len(re.split(r"\s+", prompt.strip()))

    if word_count < 10:
        suggestions.append(
            OptimizationSuggestion(
                type="length",
                severity="high",
                message="Prompt is very short",
                suggestion="Add more context and detail to help the AI understand your needs better.",
            )
        )
    elif word_count > 500:
        suggestions.append(
            OptimizationSuggestion(
                type="length",
                severity="medium",
                message="Prompt is quite long",
                suggestion=(
                    "Consider breaking this into smaller, focused prompts or using "
                    "structured sections."
                ),
            )
        )
    else:
        strengths.append("Good length for detailed responses")

    if "?" in prompt:
        strengths.append("Contains clear questions")

    if any(term in lower_prompt for term in VAGUE_TERMS):
        suggestions.append(
            OptimizationSuggestion(
                type="specificity",
                severity="medium",
                message="Contains vague language",
                suggestion="Replace vague terms with specific details for better results.",
            )
        )

    if NUMBERED_LIST_RE.search(prompt) or BULLET_LIST_RE.search(prompt):
        strengths.append("Well-structured with lists")

    if EXAMPLE_RE.search(prompt):
        strengths.append("Includes examples for clarity")

    if any(verb in lower_prompt for verb in ACTION_VERBS):
        strengths.append("Uses clear action verbs")
    else:
        suggestions.append(
            OptimizationSuggestion(
                type="clarity",
                severity="medium",
                message="Missing clear action verbs",
                suggestion=(
                    'Start with action verbs like "create", "analyze", or "explain" '
                    "to clarify intent."
                ),
            )
        )

    if any(indicator in lower_prompt for indicator in CONTEXT_INDICATORS):
        strengths.append("Provides helpful context")

    score = 70 + 5 * len(strengths)
    score -= sum(SEVERITY_PENALTIES[item.severity] for item in suggestions)

    return PromptAnalysis(
        score=max(0, min(100, score)),
        word_count=word_count,
        character_count=len(prompt),
        suggestions=suggestions,
        strengths=strengths,
        readability_score=_readability(prompt, word_count),
    )


def optimize_prompt(prompt: str) -> str:
    """Collapse whitespace and strip filler phrases such as 'make sure to'."""
    optimized = re.sub(r"\s+", " ", prompt.strip())
    optimized = re.sub(r"\.\s+", ". ", optimized)
    for phrase in FILLER_PHRASES:
        optimized = re.sub(re.escape(phrase), "", optimized, flags=re.IGNORECASE)
    return optimized


def generate_prompt_variations(base_prompt: str, count: int = 3) -> list[str]:
    """Alternative phrasings: optimized, comprehensive and step-by-step."""
    variations = [
        optimize_prompt(base_prompt),
        f"{base_prompt}\n\nPlease provide a comprehensive response with examples and explanations.",
        f"{base_prompt}\n\nBreak down your response into clear, actionable steps.",
    ]
    return variations[:count]


def estimate_token_count(text: str) -> int:
    # roughly four characters per token
    return math.ceil(len(text) / 4)


def _issue(field: str, message: str, code: str) -> ValidationIssue:
    return ValidationIssue(field=field, message=message, code=code)


def validate_base_prompt(prompt: str) -> ValidationResult:
    """Input-level checks on the raw base prompt."""
    result = ValidationResult()

    if not prompt or not prompt.strip():
        result.errors.append(_issue("basePrompt", "Base prompt cannot be empty", "PROMPT_REQUIRED"))
    elif len(prompt.strip()) < SHORT_PROMPT_LENGTH:
        result.warnings.append(
            _issue(
                "basePrompt",
                "Prompt is very short. Consider adding more detail for better results.",
                "PROMPT_TOO_SHORT",
            )
        )

    if prompt and len(prompt) > BASE_PROMPT_INPUT_LIMIT:
        result.errors.append(
            _issue(
                "basePrompt",
                "Prompt exceeds maximum length of 50,000 characters",
                "PROMPT_TOO_LONG",
            )
        )

    lowered = (prompt or "").lower()
    if any(phrase in lowered for phrase in PLACEHOLDER_PHRASES):
        result.warnings.append(
            _issue("basePrompt", "Prompt may contain placeholder text", "PLACEHOLDER_DETECTED")
        )

    return result


def validate_framework_config(base_config: BasePromptConfig) -> ValidationResult:
    """Framework-specific requirements on the config variant."""
    result = ValidationResult()
    framework = base_config.framework_type
    config = base_config.framework_config

    if framework == FrameworkType.ROLE_BASED:
        role = config.role if isinstance(config, RoleBasedConfig) else None
        if not role or not role.strip():
            result.errors.append(
                _issue(
                    "role",
                    "Role-based framework requires a role to be specified",
                    "ROLE_REQUIRED",
                )
            )

    elif framework == FrameworkType.FEW_SHOT:
        examples = config.examples if isinstance(config, FewShotConfig) else []
        if not examples:
            result.errors.append(
                _issue(
                    "examples",
                    "Few-shot framework requires at least one example",
                    "EXAMPLES_REQUIRED",
                )
            )
        for idx, example in enumerate(examples):
            if not example.input.strip():
                result.errors.append(
                    _issue(
                        f"examples[{idx}].input",
                        f"Example {idx + 1} is missing input",
                        "EXAMPLE_INPUT_REQUIRED",
                    )
                )
            if not example.output.strip():
                result.errors.append(
                    _issue(
                        f"examples[{idx}].output",
                        f"Example {idx + 1} is missing output",
                        "EXAMPLE_OUTPUT_REQUIRED",
                    )
                )

    elif framework == FrameworkType.CHAIN_OF_THOUGHT:
        if (
            isinstance(config, ChainOfThoughtConfig)
            and config.reasoning_structure == ReasoningStructure.CUSTOM
            and not (config.custom_reasoning_structure or "").strip()
        ):
            result.errors.append(
                _issue(
                    "custom_reasoning_structure",
                    "Custom reasoning structure requires a description",
                    "CUSTOM_REASONING_REQUIRED",
                )
            )

    elif framework == FrameworkType.TEMPLATE_FILL_IN:
        if not isinstance(config, TemplateFillInConfig) or not config.template_variables:
            result.warnings.append(
                _issue(
                    "template_variables",
                    "Template framework works best with defined variables",
                    "VARIABLES_RECOMMENDED",
                )
            )

    elif framework == FrameworkType.CONSTRAINT_BASED:
        if not isinstance(config, ConstraintBasedConfig) or not config.constraints:
            result.errors.append(
                _issue(
                    "constraints",
                    "Constraint-based framework requires at least one constraint",
                    "CONSTRAINTS_REQUIRED",
                )
            )

    return result


def validate_vs_enhancement(vs_config: VSEnhancement) -> ValidationResult:
    """Strategy-specific checks on diversity-sampling settings."""
    result = ValidationResult()
    if not vs_config.enabled:
        return result

    if (
        vs_config.distribution_type == DistributionType.BALANCED_CATEGORIES
        and not vs_config.all_dimensions
    ):
        result.errors.append(
            _issue(
                "dimensions",
                "Balanced categories requires at least one dimension",
                "DIMENSIONS_REQUIRED",
            )
        )

    threshold = vs_config.probability_threshold
    if vs_config.distribution_type == DistributionType.RARITY_HUNT and threshold is not None:
        if threshold < 0 or threshold > 1:
            result.errors.append(
                _issue(
                    "probabilityThreshold",
                    "Probability threshold must be between 0 and 1",
                    "INVALID_THRESHOLD",
                )
            )
        elif threshold not in STANDARD_THRESHOLDS:
            result.warnings.append(
                _issue(
                    "probabilityThreshold",
                    "Probability threshold is not one of 0.15, 0.10 or 0.05",
                    "NONSTANDARD_THRESHOLD",
                )
            )

    return result


def validate_advanced_enhancements(enhancements: AdvancedEnhancements) -> ValidationResult:
    """Flag enabled enhancements that will render nothing or contradict themselves."""
    result = ValidationResult()

    role = enhancements.role_enhancement
    if role.enabled:
        if role.type == RoleType.EXPERT and not role.expertise:
            result.errors.append(
                _issue(
                    "roleEnhancement.expertise",
                    "Expert role requires expertise field",
                    "EXPERTISE_REQUIRED",
                )
            )
        elif role.type == RoleType.PERSONA and not role.custom_role:
            result.errors.append(
                _issue(
                    "roleEnhancement.customRole",
                    "Persona role requires custom role description",
                    "CUSTOM_ROLE_REQUIRED",
                )
            )
        elif role.type == RoleType.PERSPECTIVE and not role.perspective:
            result.errors.append(
                _issue(
                    "roleEnhancement.perspective",
                    "Perspective role requires perspective description",
                    "PERSPECTIVE_REQUIRED",
                )
            )

    fmt = enhancements.format_controller
    if fmt.enabled and fmt.type == FormatType.CUSTOM and not fmt.custom_format:
        result.errors.append(
            _issue(
                "formatController.customFormat",
                "Custom format requires format specification",
                "CUSTOM_FORMAT_REQUIRED",
            )
        )

    constraints = enhancements.smart_constraints
    length = constraints.length
    if length.enabled:
        minimum = length.min or 0
        maximum = length.max or 0
        if minimum < 0 or maximum < 0:
            result.errors.append(
                _issue(
                    "smartConstraints.length",
                    "Length constraints cannot be negative",
                    "INVALID_LENGTH",
                )
            )
        if minimum > maximum > 0:
            result.errors.append(
                _issue(
                    "smartConstraints.length",
                    "Minimum length cannot exceed maximum length",
                    "INVALID_LENGTH_RANGE",
                )
            )

    if constraints.tone.enabled and not constraints.tone.tones:
        result.warnings.append(
            _issue(
                "smartConstraints.tone",
                "Tone constraint is enabled but no tones selected",
                "NO_TONES_SELECTED",
            )
        )

    if constraints.audience.enabled and not constraints.audience.target:
        result.warnings.append(
            _issue(
                "smartConstraints.audience",
                "Audience constraint is enabled but no target specified",
                "NO_AUDIENCE_SPECIFIED",
            )
        )

    return result


def validate_complete_prompt_config(
    base_config: BasePromptConfig,
    vs_config: VSEnhancement,
    enhancements: Optional[AdvancedEnhancements] = None,
) -> ValidationResult:
    """Run every detailed validator and merge the results."""
    result = validate_base_prompt(base_config.base_prompt)
    if base_config.framework:
        result = result.merge(validate_framework_config(base_config))
    result = result.merge(validate_vs_enhancement(vs_config))
    if enhancements is not None:
        result = result.merge(validate_advanced_enhancements(enhancements))

    get_logger().log_validation(
        "complete",
        error_count=len(result.errors),
        warning_count=len(result.warnings),
    )
    return result
