"""
Knowledge Selector

Turns scored entries into the knowledge context handed to the answer prompt:
drop irrelevant entries, order by score, and cap the result size.
"""

import logging
from typing import List, Sequence

from app.models.knowledge import KnowledgeEntry, ScoredEntry

logger = logging.getLogger(__name__)

MAX_SELECTED_ENTRIES = 3


def rank(scored: Sequence[ScoredEntry]) -> List[ScoredEntry]:
    """
    Keep positively scored entries, sorted by descending score.

    Python's sort is stable, so entries with equal scores keep their input order.

    Args:
        scored: Output of the relevance scorer

    Returns:
        Relevant scored entries, best first
    """
    relevant = [item for item in scored or [] if item.score > 0]
    return sorted(relevant, key=lambda item: item.score, reverse=True)


def select_scored(
    scored: Sequence[ScoredEntry], limit: int = MAX_SELECTED_ENTRIES
) -> List[ScoredEntry]:
    """
    Apply the selection policy and keep the scores.

    - No relevant entries: return [] (never fall back to all entries)
    - At most `limit` relevant entries: return all of them
    - Otherwise: return the top `limit`
    """
    relevant = rank(scored)

    if not relevant:
        logger.debug("No relevant knowledge entries")
        return []

    if len(relevant) <= limit:
        return relevant

    logger.debug(f"Keeping top {limit} of {len(relevant)} relevant entries")
    return relevant[:limit]


def select(
    scored: Sequence[ScoredEntry], limit: int = MAX_SELECTED_ENTRIES
) -> List[KnowledgeEntry]:
    """
    Select the knowledge entries to inject into the prompt.

    Args:
        scored: Output of the relevance scorer
        limit: Maximum number of entries to return

    Returns:
        Between 0 and `limit` entries, in descending score order
    """
    return [item.entry for item in select_scored(scored, limit)]
