"""
Profile description rendering for prompts and API responses.
"""

from typing import Any, List, Mapping, Optional, Tuple, Union

from app.models.profile import METADATA_KEY, Profile, is_non_empty, resolve_path

# (label, suffix, candidate paths) - first non-empty path wins
DESCRIPTION_LINES: Tuple[Tuple[str, str, Tuple[Tuple[str, ...], ...]], ...] = (
    ("姓名", "", (("name",), ("basic", "name"))),
    ("年齡", "歲", (("age",), ("basic", "age"))),
    ("居住地", "", (("location",), ("basic", "location"))),
    ("學校", "", (("school",), ("education", "school"), ("education",))),
    ("專業", "", (("major",), ("education", "major"))),
    ("公司", "", (("company",), ("career", "company"))),
    ("職位", "", (("position",), ("career", "position"), ("career",))),
    ("興趣", "", (("hobbies",), ("interests", "hobbies"), ("interests",))),
)


def _format_value(value: Any) -> Optional[str]:
    if isinstance(value, list):
        return "、".join(str(item) for item in value)
    if isinstance(value, dict):
        # A whole category record is only useful as a scalar line
        return None
    return str(value)


def describe_profile(profile: Union[Profile, Mapping[str, Any], None]) -> str:
    """
    Render a short human-readable description of a profile.

    Args:
        profile: Profile model or flat dictionary

    Returns:
        One "label：value" line per known field; "" for an empty profile
    """
    if profile is None:
        return ""
    if isinstance(profile, Profile):
        fields = profile.attributes
    else:
        fields = {k: v for k, v in profile.items() if k != METADATA_KEY}

    lines: List[str] = []
    for label, suffix, paths in DESCRIPTION_LINES:
        for path in paths:
            value = resolve_path(fields, path)
            if not is_non_empty(value):
                continue
            formatted = _format_value(value)
            if formatted:
                lines.append(f"{label}：{formatted}{suffix}")
                break

    return "\n".join(lines)
