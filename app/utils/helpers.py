"""
Shared Utility Functions

Common helper functions used across multiple modules.
"""

import re
import json
import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

# Punctuation trimmed from both ends of extracted values (CJK and ASCII)
VALUE_STRIP_CHARS = " \t\r\n　，。！？、；：,.!?;:\"'「」『』（）()【】"

_JSON_CODE_BLOCK = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)


def flatten_list(items: Any) -> List[str]:
    """
    Flatten a potentially nested list to a single-level list of strings.

    Handles various formats:
    - Nested lists: [["a", "b"]] → ["a", "b"]
    - Flat lists: ["a", "b"] → ["a", "b"]
    - Single string: "a" → ["a"]
    - None/empty: None → []
    - Non-string items: [1, None, "a"] → ["a"]

    Non-string values are dropped rather than converted, since they usually
    come from a malformed LLM reply and would otherwise match arbitrary text.

    Args:
        items: Any value that could be a list, nested list, or string

    Returns:
        Flat list of strings
    """
    if not items:
        return []

    if isinstance(items, str):
        return [items]

    if not isinstance(items, (list, tuple)):
        return []

    result = []
    for item in items:
        if isinstance(item, (list, tuple)):
            for subitem in item:
                if isinstance(subitem, str):
                    result.append(subitem)
        elif isinstance(item, str):
            result.append(item)

    return result


def strip_value(value: str) -> str:
    """Trim surrounding whitespace and punctuation from an extracted value."""
    return value.strip(VALUE_STRIP_CHARS)


def extract_json_block(text: str) -> Optional[str]:
    """
    Return the body of the first ```json fenced block in text.

    Args:
        text: LLM response text

    Returns:
        The JSON text inside the fence, or None when no fence is present
    """
    if not text:
        return None
    match = _JSON_CODE_BLOCK.search(text)
    if not match:
        return None
    return match.group(1).strip()


def remove_json_block(text: str) -> str:
    """Remove all ```json fenced blocks from text and trim the result."""
    if not text:
        return ""
    return _JSON_CODE_BLOCK.sub("", text).strip()


def load_json_safely(text: str) -> Any:
    """
    Parse JSON text, returning None instead of raising on bad input.

    Args:
        text: JSON text

    Returns:
        Parsed value or None
    """
    if not text:
        return None
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.debug(f"JSON parsing failed: {e}")
        return None
