# AI Core module

"""
AI Core Module - Knowledge selection and user profiling logic.

Key responsibilities:
- AI keyword extraction via the chat model
- Knowledge relevance scoring and selection
- Profile field extraction, merging and confidence
- Prompts for keyword extraction and answers
"""
