"""Schema for the base prompt configuration and framework-specific settings."""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AliasChoices, Field, field_validator, model_validator

from promptsmith.schemas.base import CamelModel, coerce_choice

# Cap applied by the input surface (form / CLI) before composition.
BASE_PROMPT_INPUT_LIMIT = 50_000
# Cap applied by validate_prompt_config.
BASE_PROMPT_MAX_LENGTH = 10_000


class Domain(str, Enum):
    """Prompt domain categories."""

    WRITING_CONTENT = "Writing & Content"
    BUSINESS_STRATEGY = "Business & Strategy"
    CODE_DEVELOPMENT = "Code & Development"
    DATA_ANALYSIS = "Data & Analysis"
    RESEARCH_LEARNING = "Research & Learning"
    MARKETING_SALES = "Marketing & Sales"
    CREATIVE_DESIGN = "Creative & Design"
    COMMUNICATION = "Communication"
    PRODUCTIVITY_PLANNING = "Productivity & Planning"
    EDUCATION_TRAINING = "Education & Training"
    TECHNICAL_WRITING = "Technical Writing"
    LEGAL_COMPLIANCE = "Legal & Compliance"
    HR_RECRUITING = "HR & Recruiting"
    FINANCE_ACCOUNTING = "Finance & Accounting"
    CUSTOMER_SUPPORT = "Customer Support"
    SEO_SEARCH = "SEO & Search"
    SOCIAL_MEDIA = "Social Media"
    TEMPLATES = "Templates"
    FRAMEWORKS = "Frameworks"
    MULTI_STEP_WORKFLOWS = "Multi-step Workflows"
    OTHER = "Other"


class FrameworkType(str, Enum):
    """Supported prompting frameworks."""

    ROLE_BASED = "Role-Based"
    FEW_SHOT = "Few-Shot"
    CHAIN_OF_THOUGHT = "Chain-of-Thought"
    TEMPLATE_FILL_IN = "Template/Fill-in"
    CONSTRAINT_BASED = "Constraint-Based"
    ITERATIVE_MULTI_TURN = "Iterative/Multi-Turn"
    COMPARATIVE = "Comparative"
    GENERATIVE = "Generative"
    ANALYTICAL = "Analytical"
    TRANSFORMATION = "Transformation"

    @classmethod
    def lookup(cls, value: Any) -> Optional["FrameworkType"]:
        """Return the framework for an exact key, or None for unknown keys."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        return None


class ReasoningStructure(str, Enum):
    """Chain-of-Thought reasoning structures."""

    STEP_BY_STEP = "step-by-step"
    PROS_CONS = "pros-cons"
    FIRST_PRINCIPLES = "first-principles"
    CUSTOM = "custom"


class AnalysisDepth(str, Enum):
    """Depth of an analytical prompt."""

    SURFACE = "surface"
    MODERATE = "moderate"
    DEEP = "deep"


class FewShotExample(CamelModel):
    """One input/output pair shown to the model before the task."""

    input: str = ""
    output: str = ""


class RoleBasedConfig(CamelModel):
    framework: Literal["Role-Based"] = "Role-Based"
    role: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("role", "roleBasedRole", "role_based_role", "roleExpertise"),
        description="Role the model should assume",
    )


class FewShotConfig(CamelModel):
    framework: Literal["Few-Shot"] = "Few-Shot"
    examples: list[FewShotExample] = Field(
        default_factory=list,
        validation_alias=AliasChoices("examples", "fewShotExamples", "few_shot_examples"),
        description="Ordered example pairs",
    )

    @field_validator("examples", mode="before")
    @classmethod
    def normalize_examples(cls, v) -> list:
        """Treat a missing example list as empty."""
        if v is None:
            return []
        return v


class ChainOfThoughtConfig(CamelModel):
    framework: Literal["Chain-of-Thought"] = "Chain-of-Thought"
    reasoning_structure: Optional[ReasoningStructure] = None
    custom_reasoning_structure: Optional[str] = None

    @field_validator("reasoning_structure", mode="before")
    @classmethod
    def normalize_structure(cls, v) -> Optional[ReasoningStructure]:
        """Unknown structures are treated as unset."""
        return coerce_choice(v, ReasoningStructure, None)


class TemplateFillInConfig(CamelModel):
    framework: Literal["Template/Fill-in"] = "Template/Fill-in"
    template_variables: dict[str, str] = Field(
        default_factory=dict,
        description="Values substituted for {{name}} placeholders",
    )

    @field_validator("template_variables", mode="before")
    @classmethod
    def normalize_variables(cls, v) -> dict[str, str]:
        """Stringify variable values."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(key): "" if value is None else str(value) for key, value in v.items()}
        return v


class ConstraintBasedConfig(CamelModel):
    framework: Literal["Constraint-Based"] = "Constraint-Based"
    constraints: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("constraints", "constraintSpecs", "constraint_specs"),
    )

    @field_validator("constraints", mode="before")
    @classmethod
    def normalize_constraints(cls, v) -> list:
        """Treat a missing constraint list as empty."""
        if v is None:
            return []
        return v


class IterativeConfig(CamelModel):
    framework: Literal["Iterative/Multi-Turn"] = "Iterative/Multi-Turn"
    conversation_context: Optional[str] = None


class ComparativeConfig(CamelModel):
    framework: Literal["Comparative"] = "Comparative"
    comparison_criteria: list[str] = Field(default_factory=list)

    @field_validator("comparison_criteria", mode="before")
    @classmethod
    def normalize_criteria(cls, v) -> list:
        if v is None:
            return []
        return v


class GenerativeConfig(CamelModel):
    framework: Literal["Generative"] = "Generative"


class AnalyticalConfig(CamelModel):
    framework: Literal["Analytical"] = "Analytical"
    analysis_depth: Optional[AnalysisDepth] = None

    @field_validator("analysis_depth", mode="before")
    @classmethod
    def normalize_depth(cls, v) -> Optional[AnalysisDepth]:
        """Unknown depths are treated as unset."""
        return coerce_choice(v, AnalysisDepth, None)


class TransformationConfig(CamelModel):
    framework: Literal["Transformation"] = "Transformation"
    source_format: Optional[str] = None
    target_format: Optional[str] = None


FrameworkConfig = Annotated[
    Union[
        RoleBasedConfig,
        FewShotConfig,
        ChainOfThoughtConfig,
        TemplateFillInConfig,
        ConstraintBasedConfig,
        IterativeConfig,
        ComparativeConfig,
        GenerativeConfig,
        AnalyticalConfig,
        TransformationConfig,
    ],
    Field(discriminator="framework"),
]

FRAMEWORK_CONFIG_TYPES: dict[FrameworkType, type[CamelModel]] = {
    FrameworkType.ROLE_BASED: RoleBasedConfig,
    FrameworkType.FEW_SHOT: FewShotConfig,
    FrameworkType.CHAIN_OF_THOUGHT: ChainOfThoughtConfig,
    FrameworkType.TEMPLATE_FILL_IN: TemplateFillInConfig,
    FrameworkType.CONSTRAINT_BASED: ConstraintBasedConfig,
    FrameworkType.ITERATIVE_MULTI_TURN: IterativeConfig,
    FrameworkType.COMPARATIVE: ComparativeConfig,
    FrameworkType.GENERATIVE: GenerativeConfig,
    FrameworkType.ANALYTICAL: AnalyticalConfig,
    FrameworkType.TRANSFORMATION: TransformationConfig,
}


class BasePromptConfig(CamelModel):
    """The user's foundational prompt input."""

    domain: Optional[str] = Field(
        default=None,
        description="Domain category; only selects the system prompt",
    )
    framework: Optional[str] = Field(
        default=None,
        description="Framework key; unknown keys fall back to plain concatenation",
    )
    base_prompt: str = Field(default="", description="The user's raw instruction")
    target_outcome: Optional[str] = Field(
        default=None,
        description="Desired result, appended as a trailing clause",
    )
    framework_config: Optional[FrameworkConfig] = Field(
        default=None,
        description="Settings for the selected framework",
    )

    @field_validator("domain", "framework", mode="before")
    @classmethod
    def normalize_enum_keys(cls, v) -> Optional[str]:
        """Accept enum members as well as their string values."""
        if isinstance(v, Enum):
            return v.value
        return v

    @field_validator("base_prompt", mode="before")
    @classmethod
    def normalize_base_prompt(cls, v) -> str:
        """Treat a missing base prompt as empty."""
        if v is None:
            return ""
        return v

    @model_validator(mode="before")
    @classmethod
    def tag_framework_config(cls, data: Any) -> Any:
        """Key a raw framework config bag by the selected framework."""
        if not isinstance(data, dict):
            return data
        key = "frameworkConfig" if "frameworkConfig" in data else "framework_config"
        bag = data.get(key)
        if not isinstance(bag, dict):
            return data

        data = dict(data)
        framework = FrameworkType.lookup(
            data["framework"].value if isinstance(data.get("framework"), Enum) else data.get("framework")
        )
        if framework is None:
            # Irrelevant to an unknown or absent framework
            data[key] = None
        else:
            data[key] = {**bag, "framework": framework.value}
        return data

    @property
    def framework_type(self) -> Optional[FrameworkType]:
        """The selected framework when it is one of the known keys."""
        return FrameworkType.lookup(self.framework)
