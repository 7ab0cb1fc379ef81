"""Schema for the five advanced prompt enhancements."""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from promptsmith.schemas.base import CamelModel, coerce_choice


class RoleType(str, Enum):
    EXPERT = "expert"
    PERSONA = "persona"
    PERSPECTIVE = "perspective"
    NONE = "none"


class FormatType(str, Enum):
    STRUCTURED = "structured"
    MARKDOWN = "markdown"
    LIST = "list"
    TABLE = "table"
    CODE = "code"
    CUSTOM = "custom"
    NONE = "none"


class StructuredFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    XML = "xml"


class ComplexityLevel(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class ReasoningType(str, Enum):
    ANALYSIS = "analysis"
    DECISION = "decision"
    PROBLEM_SOLVING = "problem_solving"
    CRITICAL_THINKING = "critical_thinking"
    CREATIVE = "creative"
    NONE = "none"


class FlowType(str, Enum):
    SINGLE = "single"
    ITERATIVE = "iterative"
    CLARIFYING = "clarifying"
    MULTI_STEP = "multi_step"
    COLLABORATIVE = "collaborative"


class RoleEnhancement(CamelModel):
    """Role or expertise framing."""

    enabled: bool = False
    type: RoleType = RoleType.NONE
    custom_role: Optional[str] = Field(default=None, description="Required by 'persona'")
    expertise: Optional[str] = Field(default=None, description="Required by 'expert'")
    perspective: Optional[str] = Field(default=None, description="Required by 'perspective'")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v) -> RoleType:
        return coerce_choice(v, RoleType, RoleType.NONE)


class FormatController(CamelModel):
    """Output-format control."""

    enabled: bool = False
    type: FormatType = FormatType.NONE
    structured_format: Optional[StructuredFormat] = Field(
        default=None,
        description="Nested format for 'structured'; JSON when unset",
    )
    custom_format: Optional[str] = Field(default=None, description="Required by 'custom'")
    include_examples: bool = False

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v) -> FormatType:
        return coerce_choice(v, FormatType, FormatType.NONE)

    @field_validator("structured_format", mode="before")
    @classmethod
    def normalize_structured_format(cls, v) -> Optional[StructuredFormat]:
        if isinstance(v, str):
            v = v.lower()
        return coerce_choice(v, StructuredFormat, None)


class LengthConstraint(CamelModel):
    enabled: bool = False
    min: Optional[int] = None
    max: Optional[int] = None
    unit: str = "words"


class ToneConstraint(CamelModel):
    enabled: bool = False
    tones: list[str] = Field(default_factory=list)

    @field_validator("tones", mode="before")
    @classmethod
    def normalize_tones(cls, v) -> list:
        if v is None:
            return []
        return v


class AudienceConstraint(CamelModel):
    enabled: bool = False
    target: str = ""


class ItemsConstraint(CamelModel):
    """A labelled bullet list (exclusions or requirements)."""

    enabled: bool = False
    items: list[str] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def normalize_items(cls, v) -> list:
        if v is None:
            return []
        return v


class ComplexityConstraint(CamelModel):
    enabled: bool = False
    level: Optional[ComplexityLevel] = ComplexityLevel.MODERATE

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v) -> Optional[ComplexityLevel]:
        return coerce_choice(v, ComplexityLevel, None)


class SmartConstraints(CamelModel):
    """Six independently gated constraint blocks."""

    length: LengthConstraint = Field(default_factory=LengthConstraint)
    tone: ToneConstraint = Field(default_factory=ToneConstraint)
    audience: AudienceConstraint = Field(default_factory=AudienceConstraint)
    exclusions: ItemsConstraint = Field(default_factory=ItemsConstraint)
    requirements: ItemsConstraint = Field(default_factory=ItemsConstraint)
    complexity: ComplexityConstraint = Field(default_factory=ComplexityConstraint)

    @field_validator("*", mode="before")
    @classmethod
    def normalize_blocks(cls, v):
        """A null block is a disabled block."""
        if v is None:
            return {}
        return v


class ReasoningScaffold(CamelModel):
    """Reasoning-scaffold framing."""

    enabled: bool = False
    type: ReasoningType = ReasoningType.NONE
    custom_framework: Optional[str] = None
    show_work: bool = Field(
        default=False,
        validation_alias=AliasChoices("show_work", "showWork", "showWorking", "show_working"),
    )

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v) -> ReasoningType:
        return coerce_choice(v, ReasoningType, ReasoningType.NONE)


class ConversationFlow(CamelModel):
    """Conversation-flow framing. The 'single' flow adds nothing."""

    enabled: bool = True
    type: FlowType = FlowType.SINGLE
    context: Optional[str] = None
    allow_clarification: bool = False

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v) -> FlowType:
        return coerce_choice(v, FlowType, FlowType.SINGLE)


class AdvancedEnhancements(CamelModel):
    """The five enhancement configs, rendered in a fixed order."""

    role_enhancement: RoleEnhancement = Field(default_factory=RoleEnhancement)
    format_controller: FormatController = Field(
        default_factory=FormatController,
        validation_alias=AliasChoices("format_controller", "formatController", "formatControl"),
    )
    smart_constraints: SmartConstraints = Field(default_factory=SmartConstraints)
    reasoning_scaffold: ReasoningScaffold = Field(
        default_factory=ReasoningScaffold,
        validation_alias=AliasChoices("reasoning_scaffold", "reasoningScaffold", "reasoningScaffolds"),
    )
    conversation_flow: ConversationFlow = Field(default_factory=ConversationFlow)

    @field_validator("*", mode="before")
    @classmethod
    def normalize_sections(cls, v):
        """A null section keeps its defaults."""
        if v is None:
            return {}
        return v
