"""
Curated domain keyword table for education-service agents.

Each term found in a user message boosts entries whose title (weight x2)
or content (weight x1) also contains it. Terms are stored lower-case.
"""

from typing import Dict

KEYWORD_WEIGHTS: Dict[str, int] = {
    # Weight 4 - core education services
    "報名": 4, "註冊": 4, "入學": 4, "招生": 4, "enrollment": 4,
    "學費": 4, "費用": 4, "收費": 4, "tuition": 4, "fee": 4,
    "課程": 4, "課表": 4, "course": 4, "schedule": 4,
    "考試": 4, "成績": 4, "exam": 4,
    "畢業": 4, "學位": 4, "證書": 4, "degree": 4,

    # Weight 3 - important education information
    "申請": 3, "報到": 3, "學測": 3,
    "科系": 3, "專業": 3, "major": 3, "department": 3,
    "師資": 3, "老師": 3, "教授": 3, "teacher": 3,
    "宿舍": 3, "住宿": 3, "dormitory": 3,
    "獎學金": 3, "補助": 3, "scholarship": 3,
    "實習": 3, "就業": 3, "internship": 3, "career": 3,
    "圖書館": 3, "設施": 3, "library": 3,
    "社團": 3, "活動": 3, "clubs": 3,

    # Weight 2 - general services
    "時間": 2, "日期": 2, "deadline": 2,
    "流程": 2, "步驟": 2, "procedure": 2,
    "聯絡": 2, "電話": 2, "地址": 2, "contact": 2,
    "服務": 2, "service": 2,

    # Weight 1 - generic inquiries
    "資訊": 1, "資料": 1, "information": 1,
    "說明": 1, "介紹": 1, "introduction": 1,
    "幫助": 1, "help": 1,
    "查詢": 1, "inquiry": 1,
}
