"""Advanced enhancement generators.

Each generator turns one enhancement config into an instruction block, or ''
when the enhancement is disabled or missing the field its branch needs. None
of them raise for any config shape; they are rendered in a fixed order by
``generate_all_advanced_enhancements``.
"""

from promptsmith.schemas.enhancements import (
    AdvancedEnhancements,
    ComplexityLevel,
    ConversationFlow,
    FlowType,
    FormatController,
    FormatType,
    ItemsConstraint,
    ReasoningScaffold,
    ReasoningType,
    RoleEnhancement,
    RoleType,
    SmartConstraints,
)

_FORMAT_INSTRUCTIONS = {
    FormatType.MARKDOWN: [
        "Format your response using proper Markdown syntax.",
        "Use headers, lists, code blocks, and emphasis to enhance readability.",
    ],
    FormatType.LIST: [
        "Present your response as a clear, organized list.",
        "Use bullet points or numbering as appropriate for the content.",
    ],
    FormatType.TABLE: [
        "Organize the information in a table format.",
        "Include clear column headers and well-structured rows.",
    ],
    FormatType.CODE: [
        "Format code examples with proper syntax highlighting.",
        "Include comments explaining key sections.",
    ],
}

_COMPLEXITY_DESCRIPTIONS = {
    ComplexityLevel.SIMPLE: "Keep explanations simple and accessible. Minimize jargon.",
    ComplexityLevel.MODERATE: "Balance accessibility with appropriate technical detail.",
    ComplexityLevel.ADVANCED: "Provide in-depth technical analysis and nuanced perspectives.",
    ComplexityLevel.EXPERT: (
        "Assume deep domain expertise. Use precise terminology and advanced concepts."
    ),
}

_REASONING_FRAMEWORKS = {
    ReasoningType.ANALYSIS: (
        "Use this analytical framework:",
        [
            "Identify key components and variables",
            "Examine relationships and dependencies",
            "Evaluate implications and consequences",
            "Synthesize insights and conclusions",
        ],
    ),
    ReasoningType.DECISION: (
        "Apply a decision matrix approach:",
        [
            "List all viable options",
            "Define evaluation criteria",
            "Score each option against criteria",
            "Weight factors by importance",
            "Recommend the optimal choice",
        ],
    ),
    ReasoningType.PROBLEM_SOLVING: (
        "Follow this problem-solving process:",
        [
            "Define the problem clearly",
            "Analyze root causes",
            "Generate potential solutions",
            "Evaluate feasibility and impact",
            "Recommend and justify the best approach",
        ],
    ),
    ReasoningType.CRITICAL_THINKING: (
        "Apply critical thinking principles:",
        [
            "Question underlying assumptions",
            "Evaluate evidence quality and sources",
            "Consider alternative perspectives",
            "Identify potential biases",
            "Draw well-reasoned conclusions",
        ],
    ),
    ReasoningType.CREATIVE: (
        "Use creative exploration techniques:",
        [
            "Generate diverse possibilities without judgment",
            "Combine ideas in novel ways",
            "Challenge conventional approaches",
            "Explore unexpected connections",
            "Refine and develop the most promising ideas",
        ],
    ),
}

_FLOW_INSTRUCTIONS = {
    FlowType.ITERATIVE: [
        "This is part of an iterative process. Build upon and refine previous responses.",
        "Reference earlier context and show progression in your thinking.",
    ],
    FlowType.MULTI_STEP: [
        "Break down your response into clear, sequential steps.",
        "Each step should build logically on the previous one.",
    ],
    FlowType.COLLABORATIVE: [
        "Approach this as a collaborative dialogue.",
        "Invite feedback, suggest alternatives, and be open to refinement in subsequent turns.",
    ],
}


def generate_role_enhancement(config: RoleEnhancement) -> str:
    """Role framing; silent when the branch's required field is missing."""
    if not config.enabled or config.type == RoleType.NONE:
        return ""

    instructions: list[str] = []
    if config.type == RoleType.EXPERT and config.expertise:
        instructions.append(f"You are an expert in {config.expertise}.")
        instructions.append(
            "Draw upon deep domain knowledge and professional experience in your responses."
        )
    elif config.type == RoleType.PERSONA and config.custom_role:
        instructions.append(f"Assume the role of {config.custom_role}.")
        instructions.append("Embody this character fully in your tone, perspective, and approach.")
    elif config.type == RoleType.PERSPECTIVE and config.perspective:
        instructions.append(f"Approach this from the perspective of {config.perspective}.")
        instructions.append(
            "Apply this unique viewpoint throughout your analysis and recommendations."
        )

    return "\n".join(instructions)


def generate_format_controller(config: FormatController) -> str:
    """Output-format instructions."""
    if not config.enabled or config.type == FormatType.NONE:
        return ""

    instructions: list[str] = []
    if config.type == FormatType.STRUCTURED:
        structured = config.structured_format.value.upper() if config.structured_format else "JSON"
        instructions.append(f"Provide your response in {structured} format.")
        instructions.append("Ensure the output is valid and properly formatted.")
        if config.include_examples:
            instructions.append("Include example values where appropriate.")
    elif config.type == FormatType.CUSTOM:
        if config.custom_format:
            instructions.append(f"Follow this format specification:\n{config.custom_format}")
    else:
        instructions.extend(_FORMAT_INSTRUCTIONS.get(config.type, []))

    return "\n".join(instructions)


def _length_instruction(config: SmartConstraints) -> str:
    length = config.length
    minimum = length.min or 0
    maximum = length.max or 0
    if minimum > 0 and maximum > 0:
        return f"Keep your response between {minimum} and {maximum} {length.unit}."
    if minimum > 0:
        return f"Your response should be at least {minimum} {length.unit}."
    if maximum > 0:
        return f"Keep your response under {maximum} {length.unit}."
    return ""


def _bullet_block(label: str, block: ItemsConstraint) -> list[str]:
    if not block.enabled or not block.items:
        return []
    return [f"\n{label}", *(f"- {item}" for item in block.items)]


def generate_smart_constraints(config: SmartConstraints) -> str:
    """Length, tone, audience, exclusions, requirements and complexity, in that order."""
    instructions: list[str] = []

    if config.length.enabled:
        length_text = _length_instruction(config)
        if length_text:
            instructions.append(length_text)

    if config.tone.enabled and config.tone.tones:
        instructions.append(
            f"Maintain a {', '.join(config.tone.tones)} tone throughout your response."
        )

    if config.audience.enabled and config.audience.target:
        instructions.append(f"Tailor your response for: {config.audience.target}")
        instructions.append("Adjust complexity, terminology, and examples accordingly.")

    instructions.extend(_bullet_block("Avoid the following:", config.exclusions))
    instructions.extend(_bullet_block("Ensure your response includes:", config.requirements))

    if config.complexity.enabled:
        description = _COMPLEXITY_DESCRIPTIONS.get(config.complexity.level)
        if description:
            instructions.append(description)

    return "\n".join(instructions)


def generate_reasoning_scaffold(config: ReasoningScaffold) -> str:
    """Numbered reasoning framework, optionally preceded by a show-your-work line."""
    if not config.enabled or config.type == ReasoningType.NONE:
        return ""

    instructions: list[str] = []
    if config.show_work:
        instructions.append("Show your reasoning process step-by-step.")

    framework = _REASONING_FRAMEWORKS.get(config.type)
    if framework:
        heading, steps = framework
        instructions.append(heading)
        instructions.extend(f"{idx}. {step}" for idx, step in enumerate(steps, start=1))

    if config.custom_framework:
        instructions.append(f"\nAdditional framework:\n{config.custom_framework}")

    return "\n".join(instructions)


def generate_conversation_flow(config: ConversationFlow) -> str:
    """Conversation-flow framing plus an optional context clause."""
    if not config.enabled:
        return ""

    instructions: list[str] = []
    if config.type == FlowType.CLARIFYING:
        if config.allow_clarification:
            instructions.append(
                "If the request is ambiguous or requires additional information, ask "
                "clarifying questions before providing your main response."
            )
    else:
        instructions.extend(_FLOW_INSTRUCTIONS.get(config.type, []))

    if config.context:
        instructions.append(f"\nConversation context: {config.context}")

    return "\n".join(instructions)


def generate_all_advanced_enhancements(enhancements: AdvancedEnhancements) -> str:
    """
    Render all five enhancements.

    Order is fixed: role, format, constraints, reasoning, conversation flow.
    Empty sections are dropped and the rest joined by a blank line.
    """
    sections = [
        generate_role_enhancement(enhancements.role_enhancement),
        generate_format_controller(enhancements.format_controller),
        generate_smart_constraints(enhancements.smart_constraints),
        generate_reasoning_scaffold(enhancements.reasoning_scaffold),
        generate_conversation_flow(enhancements.conversation_flow),
    ]
    return "\n\n".join(section for section in sections if section)
