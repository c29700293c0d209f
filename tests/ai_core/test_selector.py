"""
Unit Tests for the Knowledge Selector
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.ai_core.ranking import MAX_SELECTED_ENTRIES, rank, score, select, select_scored
from app.models.knowledge import KnowledgeEntry, ScoredEntry


def scored(*scores):
    """Build scored entries with ids e0, e1, ... in the given order."""
    return [
        ScoredEntry(
            entry=KnowledgeEntry(id=f"e{i}", title=f"Entry {i}", content="text"),
            score=value,
        )
        for i, value in enumerate(scores)
    ]


def ids(entries):
    return [entry.id for entry in entries]


def test_select_empty():
    """Nothing in, nothing out."""
    assert select([]) == []
    assert select(None) == []


def test_select_no_relevant_entries_does_not_fall_back():
    """Only zero scores: return [] rather than all entries."""
    assert select(scored(0, 0, 0, 0)) == []


def test_select_returns_all_when_few():
    """Up to 3 relevant entries are all returned, best first."""
    result = select(scored(0, 2, 0, 7))
    assert ids(result) == ["e3", "e1"]


def test_select_exactly_three():
    result = select(scored(1, 3, 2))
    assert ids(result) == ["e1", "e2", "e0"]


def test_select_caps_at_three():
    """Five positive entries: the three highest are returned."""
    result = select(scored(4, 9, 1, 6, 2))
    assert len(result) == MAX_SELECTED_ENTRIES == 3
    assert ids(result) == ["e1", "e3", "e0"]


def test_select_ties_keep_input_order():
    """Equal scores keep their original relative order."""
    result = select(scored(5, 5, 8, 5, 5))
    assert ids(result) == ["e2", "e0", "e1"]


def test_select_never_returns_non_positive():
    result = select(scored(0, 3, 0, 0, 0.5))
    assert ids(result) == ["e1", "e4"]


def test_select_custom_limit():
    assert ids(select(scored(1, 2, 3, 4), limit=2)) == ["e3", "e2"]


def test_rank_and_select_scored_keep_scores():
    ranked = rank(scored(1, 0, 3))
    assert [item.score for item in ranked] == [3, 1]

    selected = select_scored(scored(1, 2, 3, 4, 5))
    assert [item.score for item in selected] == [5, 4, 3]


def test_score_then_select_excludes_irrelevant():
    """End-to-end: the irrelevant entry is excluded from the selection."""
    entries = [
        KnowledgeEntry(id="kb1", title="學費資訊", content="...", keywords=["費用"]),
        KnowledgeEntry(id="kb2", title="社團活動", content="...", keywords=[]),
    ]
    assert ids(select(score("學費多少", entries, []))) == ["kb1"]
