from app.ai_core.profile.field_extractors import (
    FieldExtractor,
    FieldRule,
    RegexFieldExtractor,
    DEFAULT_FIELD_EXTRACTORS,
)
from app.ai_core.profile.profile_extractor import ProfileFieldExtractor, extract
from app.ai_core.profile.profile_merger import merge
from app.ai_core.profile.confidence import confidence
from app.ai_core.profile.ai_profile_parser import (
    AIResponsePayload,
    parse_ai_response,
    has_valid_content,
)
from app.ai_core.profile.profile_summary import describe_profile

__all__ = [
    "FieldExtractor",
    "FieldRule",
    "RegexFieldExtractor",
    "DEFAULT_FIELD_EXTRACTORS",
    "ProfileFieldExtractor",
    "extract",
    "merge",
    "confidence",
    "AIResponsePayload",
    "parse_ai_response",
    "has_valid_content",
    "describe_profile",
]
