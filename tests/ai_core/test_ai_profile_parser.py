"""
Unit Tests for AI Response Parsing and Profile Descriptions
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.ai_core.profile import describe_profile, has_valid_content, parse_ai_response
from app.models.profile import Profile

REPLY = """每學期學費為五萬元。

```json
{
  "profile": {"name": "陳大大", "hobbies": ["籃球"]},
  "suggestions": ["有獎學金嗎？", "繳費期限是什麼時候？"]
}
```"""


def test_parse_ai_response_splits_json_block():
    payload = parse_ai_response(REPLY)

    assert payload.answer == "每學期學費為五萬元。"
    assert payload.profile == {"name": "陳大大", "hobbies": ["籃球"]}
    assert payload.suggestions == ["有獎學金嗎？", "繳費期限是什麼時候？"]


def test_parse_ai_response_without_block():
    payload = parse_ai_response("  您好，請問有什麼可以幫忙？ ")

    assert payload.answer == "您好，請問有什麼可以幫忙？"
    assert payload.profile == {}
    assert payload.suggestions == []


def test_parse_ai_response_invalid_json():
    """Malformed JSON drops the block but keeps the answer."""
    payload = parse_ai_response('答案\n```json\n{"profile": {"name": \n```')

    assert payload.answer == "答案"
    assert payload.profile == {}


def test_parse_ai_response_non_object_payloads():
    assert parse_ai_response('答案\n```json\n["a"]\n```').profile == {}
    assert parse_ai_response('答案\n```json\n{"profile": "x"}\n```').profile == {}


def test_parse_ai_response_empty():
    payload = parse_ai_response(None)
    assert payload.answer == ""
    assert payload.profile == {}


def test_has_valid_content():
    assert has_valid_content({"name": "陳大大"})
    assert has_valid_content({"age": 20})
    assert not has_valid_content({})
    assert not has_valid_content(None)
    assert not has_valid_content({"name": "", "hobbies": [], "contact": {}, "age": 0})


def test_describe_profile_mixed_layout():
    profile = {"basic": {"name": "陳大大", "age": 20}, "hobbies": ["籃球", "電競"]}
    assert describe_profile(profile) == "姓名：陳大大\n年齡：20歲\n興趣：籃球、電競"


def test_describe_profile_prefers_flat_fields():
    profile = {"name": "王小明", "basic": {"name": "陳大大"}, "metadata": {"source": "x"}}
    assert describe_profile(profile) == "姓名：王小明"


def test_describe_profile_skips_records():
    """A whole category record is not rendered as a line."""
    profile = Profile(attributes={"education": {"grade": "大一"}, "career": {"company": "SAP"}})
    assert describe_profile(profile) == "公司：SAP"


def test_describe_profile_empty():
    assert describe_profile(None) == ""
    assert describe_profile({}) == ""
    assert describe_profile(Profile()) == ""
