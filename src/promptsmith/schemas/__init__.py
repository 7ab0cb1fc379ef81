"""Pydantic schemas for prompt configuration and composer output."""

from promptsmith.schemas.enhancements import (
    AdvancedEnhancements,
    ConversationFlow,
    FormatController,
    ReasoningScaffold,
    RoleEnhancement,
    SmartConstraints,
)
from promptsmith.schemas.generated import (
    GeneratedPrompt,
    PromptBundle,
    PromptMetadata,
    QualityReport,
    ValidationIssue,
    ValidationResult,
)
from promptsmith.schemas.prompt_config import (
    BasePromptConfig,
    Domain,
    FewShotExample,
    FrameworkType,
)
from promptsmith.schemas.vs_enhancement import (
    DistributionType,
    VSCompatibility,
    VSEnhancement,
    VSInstructionBlock,
)

__all__ = [
    "AdvancedEnhancements",
    "BasePromptConfig",
    "ConversationFlow",
    "DistributionType",
    "Domain",
    "FewShotExample",
    "FormatController",
    "FrameworkType",
    "GeneratedPrompt",
    "PromptBundle",
    "PromptMetadata",
    "QualityReport",
    "ReasoningScaffold",
    "RoleEnhancement",
    "SmartConstraints",
    "ValidationIssue",
    "ValidationResult",
    "VSCompatibility",
    "VSEnhancement",
    "VSInstructionBlock",
]
