"""Shared base model for prompt-builder schemas."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both camelCase (web app) and snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_camel_dict(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def coerce_choice(value: Any, choices: type[Enum], default: Optional[Enum]) -> Any:
    """
    Normalize a loosely-typed enum value.

    Hyphens are accepted in place of underscores. Unknown or missing values
    collapse to ``default`` instead of failing validation.

    Args:
        value: Raw input value
        choices: Enum class the value should belong to
        default: Member (or None) used when the value is not recognised

    Returns:
        Matching enum value, or ``default``
    """
    if value is None:
        return default
    if isinstance(value, choices):
        return value
    if isinstance(value, Enum):
        value = value.value
    text = str(value).strip()
    for member in choices:
        if text == member.value or text.replace("-", "_") == member.value:
            return member
    return default
