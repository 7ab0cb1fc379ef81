"""Schemas for composer output, saved bundles and diagnostics."""

from typing import Literal, Optional

from pydantic import ConfigDict, Field

from promptsmith.schemas.base import CamelModel
from promptsmith.schemas.enhancements import AdvancedEnhancements
from promptsmith.schemas.prompt_config import BasePromptConfig
from promptsmith.schemas.vs_enhancement import VSEnhancement


class PromptMetadata(CamelModel):
    """Generation metadata attached to every composed prompt."""

    model_config = ConfigDict(frozen=True)

    domain: str = Field(description="Domain, or 'General' when unset")
    framework: str = Field(description="Framework key, or 'None' when unset")
    vs_enabled: bool
    timestamp: str = Field(description="ISO-8601 UTC time of composition")


class GeneratedPrompt(CamelModel):
    """Immutable result of one composition."""

    model_config = ConfigDict(frozen=True)

    final_prompt: str
    system_prompt: str
    metadata: PromptMetadata


class PromptBundle(CamelModel):
    """Everything needed to recompose a prompt, as saved or shared."""

    base_config: BasePromptConfig
    vs_enhancement: VSEnhancement = Field(default_factory=VSEnhancement)
    advanced_enhancements: Optional[AdvancedEnhancements] = None
    generated_prompt: Optional[GeneratedPrompt] = None


class QualityReport(CamelModel):
    """Heuristic quality assessment of a prompt text."""

    score: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)


class OptimizationSuggestion(CamelModel):
    """One improvement suggested by the prompt analyzer."""

    type: Literal["clarity", "specificity", "structure", "length", "context"]
    severity: Literal["low", "medium", "high"]
    message: str
    suggestion: str


class PromptAnalysis(CamelModel):
    """Word-level analysis of a prompt text."""

    score: int = Field(ge=0, le=100)
    word_count: int
    character_count: int
    suggestions: list[OptimizationSuggestion] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    readability_score: int


class ValidationIssue(CamelModel):
    """One error or warning raised by a detailed validator."""

    field: str
    message: str
    code: str


class ValidationResult(CamelModel):
    """Errors and warnings from a detailed validator."""

    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Combine two results, errors and warnings kept in order."""
        return ValidationResult(
            errors=[*self.errors, *other.errors],
            warnings=[*self.warnings, *other.warnings],
        )
