"""
Profile Field Extractors

Regex heuristics that pull personal-profile fragments out of free-text user
messages. Each category (basic, contact, education, ...) is one FieldExtractor;
a category groups several sub-fields, each with an ordered list of patterns
where the first matching pattern wins.

Patterns run against the raw message so names and values keep their case.
"""

import re
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern, Tuple

from app.models.profile import ProfileValue
from app.utils import strip_value

logger = logging.getLogger(__name__)

# A value run: anything up to CJK/ASCII punctuation or whitespace
V = r"[^，。！？、；：,.!?;:\s]"


def _compile(*patterns: str, flags: int = 0) -> Tuple[Pattern, ...]:
    return tuple(re.compile(pattern, flags) for pattern in patterns)


def parse_int(value: str) -> int:
    return int(value)


@dataclass(frozen=True)
class FieldRule:
    """One sub-field of a category with its ordered patterns."""

    name: str
    patterns: Tuple[Pattern, ...]
    parser: Optional[Callable[[str], ProfileValue]] = None


class FieldExtractor(ABC):
    """Extracts one profile category from a message."""

    category: str

    @abstractmethod
    def extract(self, message: str) -> Optional[Dict[str, ProfileValue]]:
        """
        Args:
            message: Raw user message

        Returns:
            Sub-field values for this category, or None when nothing matched
        """


class RegexFieldExtractor(FieldExtractor):
    """FieldExtractor backed by ordered regular expressions."""

    def __init__(self, category: str, rules: List[FieldRule]):
        self.category = category
        self.rules = rules

    def extract(self, message: str) -> Optional[Dict[str, ProfileValue]]:
        values: Dict[str, ProfileValue] = {}
        for rule in self.rules:
            value = self._match_rule(rule, message)
            if value is not None:
                values[rule.name] = value
        return values or None

    def _match_rule(self, rule: FieldRule, message: str) -> Optional[ProfileValue]:
        for pattern in rule.patterns:
            match = pattern.search(message)
            if not match:
                continue

            raw = strip_value(match.group(1))
            if not raw:
                continue

            if rule.parser is None:
                return raw

            try:
                return rule.parser(raw)
            except ValueError:
                logger.debug(
                    f"Dropping {self.category}.{rule.name}: cannot parse '{raw}'"
                )
                return None
        return None

    def __repr__(self) -> str:
        return f"RegexFieldExtractor(category={self.category!r}, rules={len(self.rules)})"


BASIC = RegexFieldExtractor(
    "basic",
    [
        FieldRule(
            "name",
            _compile(
                rf"我叫({V}{{2,10}})",
                rf"我的名字(?:是|叫)({V}{{2,10}})",
                rf"名字(?:是|叫)({V}{{2,10}})",
            )
            + _compile(r"my name is ([a-z][a-z'-]*(?: [a-z][a-z'-]*)?)", flags=re.IGNORECASE),
        ),
        FieldRule(
            "age",
            _compile(
                r"我(?:今年)?(\d{1,3})\s*歲",
                r"今年(\d{1,3})\s*歲",
                r"年齡(?:是)?\s*(\d{1,3})",
            )
            + _compile(r"(\d{1,3})\s*years?\s*old", flags=re.IGNORECASE),
            parser=parse_int,
        ),
        FieldRule("gender", _compile(r"我是(男|女)(?:生|性)")),
        FieldRule(
            "location",
            _compile(rf"我住在({V}{{2,20}})", rf"住在({V}{{2,20}})")
            + _compile(r"i live in ([a-z][a-z -]{1,30}[a-z])", flags=re.IGNORECASE),
        ),
    ],
)

CONTACT = RegexFieldExtractor(
    "contact",
    [
        FieldRule(
            "phone",
            _compile(
                r"(\d{2,4}[-－]\d{3,4}[-－]\d{3,4})",
                r"(?<![0-9A-Za-z@._%+-])(\d{8,11})(?![0-9A-Za-z@])",
            ),
        ),
        FieldRule(
            "email",
            _compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"),
        ),
        FieldRule("address", _compile(r"地址(?:是)?[：:]?\s*([^，。！？\s]{5,50})")),
    ],
)

EDUCATION = RegexFieldExtractor(
    "education",
    [
        FieldRule(
            "school",
            _compile(
                rf"就讀(?:於)?({V}{{2,20}})",
                rf"在({V}{{2,20}})(?:上學|念書|讀書)",
            ),
        ),
        FieldRule(
            "major",
            _compile(rf"主修({V}{{2,20}})", rf"讀({V}{{2,20}}?)系"),
        ),
        FieldRule(
            "grade",
            _compile(
                r"我(?:是|讀|念)?(大[一二三四]|研[一二]|碩[一二]|博[一二三四五六七]|高[一二三])",
                r"(大[一二三四]|研[一二]|碩[一二]|高[一二三])(?:學生|生)",
            ),
        ),
    ],
)

CAREER = RegexFieldExtractor(
    "career",
    [
        FieldRule(
            "company",
            _compile(
                rf"在({V}{{2,20}}?)(?:工作|上班)",
                rf"公司(?:是)?[：:]?\s*({V}{{2,20}})",
            ),
        ),
        FieldRule(
            "position",
            _compile(
                rf"擔任({V}{{2,20}})",
                rf"職位是({V}{{2,20}})",
                rf"我是一名({V}{{2,20}})",
            )
            + _compile(r"i work as an? ([a-z][a-z -]{1,30}[a-z])", flags=re.IGNORECASE),
        ),
        FieldRule(
            "industry",
            _compile(
                rf"從事({V}{{2,20}}?)(?:行業|產業)",
                rf"在({V}{{2,20}}?)領域工作",
            ),
        ),
    ],
)

INTERESTS = RegexFieldExtractor(
    "interests",
    [
        FieldRule(
            "hobbies",
            _compile(
                rf"我喜歡({V}{{2,20}})",
                rf"興趣是({V}{{2,20}})",
                rf"愛好(?:是)?({V}{{2,20}})",
            ),
        ),
        FieldRule(
            "sports",
            _compile(rf"我(?:會)?打({V}{{2,10}})", rf"喜歡({V}{{2,10}}?)運動"),
        ),
        FieldRule(
            "entertainment",
            _compile(rf"我聽({V}{{2,20}}?)音樂", rf"看({V}{{2,20}}?)電影"),
        ),
    ],
)

PERSONALITY = RegexFieldExtractor(
    "personality",
    [
        FieldRule(
            "traits",
            _compile(
                rf"我是一個({V}{{2,10}}?)的人",
                rf"我比較({V}{{2,10}})",
                rf"個性(?:很|比較)?({V}{{2,10}})",
            ),
        ),
        FieldRule(
            "values",
            _compile(rf"我重視({V}{{2,20}})", rf"我相信({V}{{2,20}})"),
        ),
    ],
)

LIFESTYLE = RegexFieldExtractor(
    "lifestyle",
    [
        FieldRule(
            "family",
            _compile(
                r"我(已婚|未婚|單身)",
                r"我有((?:[一二三四五六七八九十兩]|\d{1,2})個(?:孩子|小孩))",
            ),
        ),
        FieldRule(
            "pets",
            _compile(rf"我養(?:了)?({V}{{1,10}})", rf"我有({V}{{1,10}}?)寵物"),
        ),
        FieldRule("health", _compile(rf"我有({V}{{2,20}}?)(?:的)?問題")),
    ],
)

DEFAULT_FIELD_EXTRACTORS: Tuple[FieldExtractor, ...] = (
    BASIC,
    CONTACT,
    EDUCATION,
    CAREER,
    INTERESTS,
    PERSONALITY,
    LIFESTYLE,
)
