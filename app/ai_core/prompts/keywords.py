"""
Keyword Extraction Prompt

Asks the model for a short JSON array of keywords used to match the user's
question against the agent's knowledge base.
"""

from typing import Dict, List, Optional

KEYWORD_EXTRACTION_PROMPT = """Analyze the intent of the user's question and extract keywords for knowledge base matching.

{context_section}Current user question: {message}

Extract:
1. Keywords of the current question
2. Likely search terms a knowledge base entry would use
3. Both Chinese (Traditional) and English keywords where relevant

Return ONLY a JSON array of strings, for example:
["關鍵字1", "關鍵字2", "keyword3"]"""


def create_keyword_prompt(
    message: str, context: Optional[List[Dict[str, str]]] = None
) -> str:
    """
    Build the keyword extraction prompt.

    Args:
        message: Current user message
        context: Recent turns as [{"role": "user"|"assistant", "content": str}]

    Returns:
        Prompt text
    """
    context_section = ""
    if context:
        lines = []
        for turn in context:
            role = "User" if turn.get("role") == "user" else "Assistant"
            lines.append(f"{role}: {turn.get('content', '')}")
        context_section = "Conversation context:\n" + "\n".join(lines) + "\n\n"

    return KEYWORD_EXTRACTION_PROMPT.format(
        context_section=context_section, message=message
    )
