"""Schema for diversity-sampling (Verbalized Sampling) settings."""

from enum import Enum
from typing import NamedTuple, Optional

from pydantic import Field, field_validator

from promptsmith.schemas.base import CamelModel, coerce_choice

FORMAT_HEADER = "Format each response as:"


class DistributionType(str, Enum):
    """Diversity-sampling strategy."""

    BROAD_SPECTRUM = "broad_spectrum"
    RARITY_HUNT = "rarity_hunt"
    BALANCED_CATEGORIES = "balanced_categories"


class VSEnhancement(CamelModel):
    """Controls the diversity-sampling instruction generator."""

    enabled: bool = False
    number_of_responses: int = Field(
        default=5,
        ge=1,
        le=20,
        description="How many candidate responses to request",
    )
    distribution_type: DistributionType = Field(
        default=DistributionType.BROAD_SPECTRUM,
        description="Sampling strategy",
    )
    probability_threshold: Optional[float] = Field(
        default=None,
        description="Rarity cut-off, only read by rarity_hunt",
    )
    dimensions: list[str] = Field(
        default_factory=list,
        description="Predefined categories, only read by balanced_categories",
    )
    custom_dimensions: list[str] = Field(
        default_factory=list,
        description="User categories appended after the predefined ones",
    )
    include_probability_reasoning: bool = False
    anti_typicality_enabled: bool = False
    custom_constraints: str = ""

    @field_validator("distribution_type", mode="before")
    @classmethod
    def normalize_distribution_type(cls, v):
        """Accept hyphenated spellings such as 'broad-spectrum'; null means the default."""
        if v is None:
            return DistributionType.BROAD_SPECTRUM
        return coerce_choice(v, DistributionType, None) or v

    @field_validator("dimensions", "custom_dimensions", mode="before")
    @classmethod
    def normalize_dimensions(cls, v) -> list[str]:
        """Normalize dimension lists to lists of strings."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, list):
            return [str(item) if not isinstance(item, str) else item for item in v]
        return [str(v)]

    @field_validator("custom_constraints", mode="before")
    @classmethod
    def normalize_custom_constraints(cls, v) -> str:
        if v is None:
            return ""
        return v

    @property
    def all_dimensions(self) -> list[str]:
        """Predefined then custom dimensions, duplicates kept."""
        return [*self.dimensions, *self.custom_dimensions]


class VSInstructionBlock(NamedTuple):
    """Instruction text paired with the candidate format it was written for."""

    instruction: str
    format_template: str

    def render(self) -> str:
        """Render the block appended to a prompt, or '' when there is no instruction."""
        if not self.instruction:
            return ""
        return f"{self.instruction}\n\n{FORMAT_HEADER}\n{self.format_template}"


class VSCompatibility(NamedTuple):
    """Whether diversity sampling suits a framework."""

    compatible: bool
    warning: Optional[str] = None
