"""
Profile Confidence Calculator

Confidence (0-10) summarizes how much profile information has been captured:
one point per non-empty top-level field plus one bonus point for each
high-value group (name, hobbies/interests, education, phone/email).
"""

from typing import Any, Dict, Mapping, Tuple, Union

from app.models.profile import METADATA_KEY, Profile, is_non_empty, resolve_path

MAX_CONFIDENCE = 10.0
FIELD_SCORE = 1.0
BONUS_SCORE = 1.0

# Each group earns its bonus once if any of its paths holds a non-empty value.
# Paths cover both flat AI-generated fields and the regex category layout.
BONUS_GROUPS: Dict[str, Tuple[Tuple[str, ...], ...]] = {
    "name": (("name",), ("basic", "name")),
    "interests": (
        ("hobbies",),
        ("interests",),
        ("interests", "hobbies"),
    ),
    "education": (("education",),),
    "contact": (
        ("phone",),
        ("email",),
        ("contact", "phone"),
        ("contact", "email"),
    ),
}


def _fields_of(profile: Union[Profile, Mapping[str, Any], None]) -> Dict[str, Any]:
    if profile is None:
        return {}
    if isinstance(profile, Profile):
        return profile.attributes
    return {key: value for key, value in profile.items() if key != METADATA_KEY}


def confidence(profile: Union[Profile, Mapping[str, Any], None]) -> float:
    """
    Compute the confidence score of a profile.

    Args:
        profile: Profile model or flat profile dictionary

    Returns:
        Score in [0, 10]
    """
    fields = _fields_of(profile)

    field_count = sum(1 for value in fields.values() if is_non_empty(value))
    score = field_count * FIELD_SCORE

    for paths in BONUS_GROUPS.values():
        if any(is_non_empty(resolve_path(fields, path)) for path in paths):
            score += BONUS_SCORE

    return min(score, MAX_CONFIDENCE)
