"""
Profile Merger

Combines newly extracted profile fragments into an existing profile without
discarding what was captured before. The merge is a pure copy-and-combine:
neither argument is mutated.

Combination rule per incoming value kind:
- ARRAY:  set union with the existing array, first-seen order kept
- RECORD: one-level shallow merge, incoming keys overwrite existing keys
- STRING / NUMBER: overwrite

When a field changes shape, the earlier value is folded into the new one:
a scalar joins an array, an array is kept under a record's "items" key and
a scalar under its "value" key.
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from app.ai_core.profile.confidence import confidence
from app.models.profile import (
    METADATA_KEY,
    Profile,
    ProfileMetadata,
    ProfileValueKind,
    classify_value,
)

logger = logging.getLogger(__name__)

# Sub-keys that hold a non-record value folded into a record
RECORD_ITEMS_KEY = "items"
RECORD_VALUE_KEY = "value"

_SCALAR_KINDS = (ProfileValueKind.STRING, ProfileValueKind.NUMBER)


def _union(existing: Any, incoming: List[Any]) -> List[Any]:
    if isinstance(existing, list):
        merged = list(existing)
    elif classify_value(existing) in _SCALAR_KINDS:
        # Promote a scalar so the earlier value is not lost
        merged = [existing]
    else:
        merged = []

    for item in incoming:
        if item not in merged:
            merged.append(copy.deepcopy(item))
    return merged


def _merge_array(existing: Any, incoming: List[Any]) -> Any:
    if isinstance(existing, dict):
        merged = dict(existing)
        merged[RECORD_ITEMS_KEY] = _union(existing.get(RECORD_ITEMS_KEY), incoming)
        return merged
    return _union(existing, incoming)


def _shallow_merge(existing: Any, incoming: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(existing, dict):
        merged = dict(existing)
    elif isinstance(existing, list) and existing:
        merged = {RECORD_ITEMS_KEY: existing}
    elif classify_value(existing) in _SCALAR_KINDS:
        merged = {RECORD_VALUE_KEY: existing}
    else:
        merged = {}

    for key, value in incoming.items():
        merged[key] = copy.deepcopy(value)
    return merged


def _merge_scalar(existing: Any, incoming: Union[str, int, float]) -> Any:
    if isinstance(existing, list):
        return _union(existing, [incoming])
    if isinstance(existing, dict):
        merged = dict(existing)
        merged[RECORD_VALUE_KEY] = incoming
        return merged
    return incoming


def merge_fields(existing: Mapping[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge incoming field values into a deep copy of existing fields.

    Args:
        existing: Current profile fields (metadata excluded)
        incoming: Partial profile

    Returns:
        New field mapping
    """
    merged = copy.deepcopy(dict(existing))

    for key, value in incoming.items():
        if key == METADATA_KEY:
            continue

        kind = classify_value(value)
        if kind is ProfileValueKind.ARRAY:
            merged[key] = _merge_array(merged.get(key), list(value))
        elif kind is ProfileValueKind.RECORD:
            merged[key] = _shallow_merge(merged.get(key), value)
        elif kind in _SCALAR_KINDS:
            merged[key] = _merge_scalar(merged.get(key), value)
        else:
            logger.debug(f"Skipping unsupported value for profile field '{key}'")

    return merged


def merge(
    existing: Union[Profile, Mapping[str, Any], None],
    incoming: Optional[Mapping[str, Any]],
    source: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Profile:
    """
    Merge a partial profile into an existing profile.

    Args:
        existing: Current profile (model or flat dict); None means empty
        incoming: Partial profile to merge; None is treated as {}
        source: Channel that produced the update; None keeps the stored source
        now: Timestamp for the update (defaults to current UTC time)

    Returns:
        New Profile with recomputed metadata
    """
    if isinstance(existing, Profile):
        base = existing.model_copy(deep=True)
    else:
        base = Profile.from_dict(dict(existing) if existing else None)

    now = now or datetime.now(timezone.utc)
    attributes = merge_fields(base.attributes, incoming or {})

    previous = base.metadata
    metadata = ProfileMetadata(
        **{
            **(previous.model_extra or {}),
            "created_at": previous.created_at or now,
            "last_updated": now,
            "total_interactions": previous.total_interactions + 1,
            "source": previous.source if source is None else source,
            "confidence": confidence(attributes),
        }
    )

    return Profile(attributes=attributes, metadata=metadata)
