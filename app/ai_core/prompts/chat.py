"""
Prompts for answering user messages.

The system prompt is assembled from the agent's base prompt, the selected
knowledge entries, the user's current profile, the current time and the
recent conversation history.
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from app.models.knowledge import KnowledgeEntry

NO_KNOWLEDGE_CONTENT = "無相關知識庫內容"

ANSWER_INSTRUCTIONS = (
    "請基於以上知識庫內容回答用戶問題，如果知識庫中沒有相關資訊，"
    "請誠實告知並建議用戶聯繫客服。"
)

PROFILE_JSON_INSTRUCTIONS = """
【回覆格式】
1. 先回答用戶的問題，不超過 100 字，使用純文字，不要使用 Markdown。
2. 在回覆最後附上以下 JSON 區塊：
```json
{
  "profile": {},
  "suggestions": ["從用戶角度提出的延伸問題"]
}
```

【人物誌規則】
- 人物誌記錄的是用戶的個人資訊，不是你的資訊。
- 只包含用戶實際提到的資訊，不要推測，不要建立空欄位。
- 欄位名稱簡潔，例如 name、age、hobbies、interests、education、location、phone、email、career、personality。
- 單一值使用字串（如 "陳大大"），複數值使用陣列（如 ["打籃球", "電競"]）。
- 用戶沒有提供個人資訊時，profile 保持為空物件。
- 延伸問題最多一個，要與當前對話相關且容易回答。"""

WIDGET_PROFILE_HINT = "你具備智能引導功能，能夠在適當的時機引導用戶提供個人資訊。"

HISTORY_INSTRUCTIONS = """
【對話記憶】
這不是第一次對話。請基於以下對話歷史提供連續性的回應：
- 不要像第一次見面一樣打招呼
- 不要重複之前已經問過的問題或建議
- 用戶已提供的資訊請記住並在回應中體現
- 回應自然，像朋友之間的對話"""

FIRST_TURN_INSTRUCTIONS = "【重要】這是第一次對話，請建立良好的第一印象。"


def build_knowledge_context(entries: Sequence[KnowledgeEntry]) -> str:
    """
    Format selected knowledge entries for the system prompt.

    Args:
        entries: Selected entries, best first

    Returns:
        Numbered knowledge blocks, or the "no content" marker
    """
    if not entries:
        return NO_KNOWLEDGE_CONTENT

    return "\n\n".join(
        f"知識庫 {i} ({entry.title}):\n{entry.content}"
        for i, entry in enumerate(entries, 1)
    )


def format_history(history: Optional[Sequence[Dict[str, Any]]], limit: int) -> List[str]:
    """
    Render the last `limit` conversation turns as "用戶：..." / "助手：..." lines.

    Accepts both {"role", "content"} messages and
    {"userMessage", "assistantMessage"} turn records.
    """
    lines: List[str] = []
    turns = list(history or [])[-limit:] if limit > 0 else []
    for turn in turns:
        if not isinstance(turn, dict):
            continue
        if "role" in turn:
            role = "用戶" if turn.get("role") == "user" else "助手"
            lines.append(f"{role}：{turn.get('content', '')}")
        else:
            if turn.get("userMessage"):
                lines.append(f"用戶：{turn['userMessage']}")
            if turn.get("assistantMessage"):
                lines.append(f"助手：{turn['assistantMessage']}")
    return lines


def build_profile_prompt(
    profile_fields: Optional[Dict[str, Any]], request_profile_json: bool
) -> str:
    """
    Build the profile section of the system prompt.

    Args:
        profile_fields: Current profile fields (metadata excluded)
        request_profile_json: Whether the model must append the JSON block

    Returns:
        Prompt section text
    """
    if not request_profile_json:
        return WIDGET_PROFILE_HINT

    prompt = PROFILE_JSON_INSTRUCTIONS
    if profile_fields:
        prompt += "\n\n目前已有的用戶人物誌：\n"
        prompt += json.dumps(profile_fields, ensure_ascii=False, indent=2)
        prompt += "\n\n請保持現有資訊不變，只新增或更新用戶新提到的內容。"
    else:
        prompt += "\n\n這是第一次建立人物誌，只包含用戶實際提到的資訊。"
    return prompt


def create_chat_system_prompt(
    system_prompt: str,
    message: str,
    knowledge_entries: Sequence[KnowledgeEntry],
    profile_fields: Optional[Dict[str, Any]] = None,
    request_profile_json: bool = False,
    user_id: Optional[str] = None,
    current_time: Optional[str] = None,
    history: Optional[Sequence[Dict[str, Any]]] = None,
    history_limit: int = 10,
) -> str:
    """
    Assemble the full system prompt for one answer.

    Returns:
        Prompt text ending with the current user message
    """
    sections = [
        system_prompt.strip(),
        f"相關知識庫：\n{build_knowledge_context(knowledge_entries)}",
        build_profile_prompt(profile_fields, request_profile_json),
        ANSWER_INSTRUCTIONS,
    ]

    if user_id:
        sections.append(f"【用戶識別】\n用戶ID: {user_id}")

    if current_time:
        sections.append(f"【當前時間】\n{current_time} (請根據此時間提供相關建議)")

    history_lines = format_history(history, history_limit)
    if history_lines:
        sections.append(HISTORY_INSTRUCTIONS.strip())
        sections.append("對話歷史：\n" + "\n".join(history_lines))
        sections.append(f"當前用戶訊息：{message}")
    else:
        sections.append(f"當前用戶訊息：{message}")
        sections.append(FIRST_TURN_INSTRUCTIONS)

    return "\n\n".join(section for section in sections if section)
