"""
Dynamic Profile Models

A profile is a sparse, dynamically keyed record of facts inferred about a user.
Field names are free-form (e.g. "name", "hobbies", "contact"); values are one of
the ProfileValue kinds below. The reserved "metadata" key holds bookkeeping.
"""

import copy
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

METADATA_KEY = "metadata"

# str | int | float | List[str] | Dict[str, ProfileValue]
ProfileValue = Union[str, int, float, List[str], Dict[str, Any]]
PartialProfile = Dict[str, ProfileValue]


class ProfileValueKind(str, Enum):
    """Tagged variant of a profile value; drives the merge dispatch."""

    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    RECORD = "record"


def classify_value(value: Any) -> Optional[ProfileValueKind]:
    """
    Determine the kind of a profile value.

    Args:
        value: Any value taken from a profile or a partial profile

    Returns:
        The ProfileValueKind, or None for unsupported values (None, bool, objects)
    """
    # bool is an int subclass, exclude it first
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return ProfileValueKind.STRING
    if isinstance(value, (int, float)):
        return ProfileValueKind.NUMBER
    if isinstance(value, (list, tuple)):
        return ProfileValueKind.ARRAY
    if isinstance(value, dict):
        return ProfileValueKind.RECORD
    return None


def resolve_path(fields: Mapping[str, Any], path: Tuple[str, ...]) -> Any:
    """Follow `path` through nested records; None when any step is missing."""
    value: Any = fields
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def is_non_empty(value: Any) -> bool:
    """Non-empty string, non-empty array, non-empty record or nonzero number."""
    kind = classify_value(value)
    if kind is ProfileValueKind.STRING:
        return value.strip() != ""
    if kind is ProfileValueKind.NUMBER:
        return value != 0
    if kind is ProfileValueKind.ARRAY or kind is ProfileValueKind.RECORD:
        return len(value) > 0
    return False


class ProfileMetadata(BaseModel):
    """Bookkeeping stored under the reserved "metadata" key."""

    confidence: float = Field(0.0, ge=0.0, le=10.0, description="Confidence (0-10)")
    created_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        description="When the profile was first created",
    )
    last_updated: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("last_updated", "lastUpdated"),
        description="When the profile was last merged",
    )
    total_interactions: int = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("total_interactions", "totalInteractions"),
        description="Number of merges applied",
    )
    source: str = Field("", description="Channel that produced the last update")

    # Unknown bookkeeping keys from storage are carried along untouched
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Profile(BaseModel):
    """
    A user's dynamic profile.

    `attributes` holds every non-metadata key. Use `to_dict()` / `from_dict()` to
    convert from/to the flat persisted shape where metadata is a sibling key.
    """

    attributes: Dict[str, Any] = Field(default_factory=dict)
    metadata: ProfileMetadata = Field(default_factory=ProfileMetadata)

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    @property
    def is_empty(self) -> bool:
        return not any(is_non_empty(value) for value in self.attributes.values())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert profile to its flat dictionary shape.

        Returns:
            Dictionary with profile fields and a "metadata" entry
        """
        data = copy.deepcopy(self.attributes)
        data[METADATA_KEY] = self.metadata.model_dump(mode="json")
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Profile":
        """
        Create profile from its flat dictionary shape.

        Args:
            data: Stored profile dictionary; None means an empty profile

        Returns:
            Profile instance
        """
        if not data:
            return cls()

        attributes = {
            key: copy.deepcopy(value)
            for key, value in data.items()
            if key != METADATA_KEY
        }
        metadata = data.get(METADATA_KEY) or {}
        return cls(attributes=attributes, metadata=ProfileMetadata.model_validate(metadata))
