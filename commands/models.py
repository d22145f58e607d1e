"""
Command Records
---------------
Validated data contract for catalogue entries and parameter options.

Required fields are enforced; absent optional collections default to
empty tuples rather than rejecting the record.
"""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


ID_DELIMITER = ":"


def _as_tuple(value: Any) -> Tuple:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (set, frozenset)):
        return tuple(sorted(value, key=str))
    return tuple(value)


class ParamOption(BaseModel):
    """One selectable value for a parameterized command."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str
    description: Optional[str] = None


class Command(BaseModel):
    """A named action the palette can invoke."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Hierarchical id, e.g. 'infra:start'")
    label: str = Field(..., description="Display string")
    category: str = Field(..., description="Grouping string")
    keywords: Tuple[str, ...] = Field(default=(), description="Extra searchable terms")
    aliases: Tuple[str, ...] = Field(default=(), description="Alternate phrasings")
    params: Tuple[ParamOption, ...] = Field(default=(), description="Static parameter list")

    @field_validator("keywords", "aliases", "params", mode="before")
    @classmethod
    def _default_collections(cls, value: Any) -> Tuple:
        return _as_tuple(value)

    @property
    def takes_param(self) -> bool:
        return len(self.params) > 0

    def __repr__(self) -> str:
        return f"Command(id={self.id}, label={self.label})"
