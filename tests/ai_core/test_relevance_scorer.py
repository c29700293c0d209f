"""
Unit Tests for the Knowledge Relevance Scorer
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest

from app.ai_core.ranking import normalize_ai_keywords, score
from app.models.knowledge import KnowledgeEntry, ScoredEntry


@pytest.fixture
def parking_entry():
    return KnowledgeEntry(
        id="p1",
        title="Parking",
        content="Visitors park in lot B.",
        keywords=["parking"],
    )


def test_score_empty_entries():
    """No entries (empty or absent) gives an empty result."""
    assert score("學費多少", []) == []
    assert score("學費多少", None) == []
    assert score("學費多少", None, ["學費"]) == []


def test_score_tuition_example():
    """Weighted domain term in message and title gives a positive score."""
    tuition = KnowledgeEntry(id="kb1", title="學費資訊", content="...", keywords=["費用"])
    clubs = KnowledgeEntry(id="kb2", title="社團活動", content="...", keywords=[])

    result = score("學費多少", [tuition, clubs], [])

    assert len(result) == 2
    assert all(isinstance(item, ScoredEntry) for item in result)
    assert result[0].entry.id == "kb1"
    assert result[0].score > 0
    assert result[0].score == 8.0  # "學費" weight 4, doubled for the title
    assert result[1].entry.id == "kb2"
    assert result[1].score == 0.0


def test_score_signals_without_ai_keywords(parking_entry):
    """Title containment (+5), entry keyword (+4), title token (+1)."""
    result = score("Parking rules", [parking_entry])
    assert result[0].score == 10.0


def test_score_ai_keywords_stack(parking_entry):
    """AI keywords in title/content/tags add on top of the other signals."""
    # "park": title +6, content +5, tag overlap +7; "lot": content +5
    result = score("Parking rules", [parking_entry], ["Park", ["LOT"]])
    assert result[0].score == 33.0


def test_score_ignores_malformed_ai_keywords(parking_entry):
    """Non-string, nested garbage and blank keywords are silently ignored."""
    clean = score("Parking rules", [parking_entry], ["park"])
    noisy = score(
        "Parking rules",
        [parking_entry],
        ["park", 42, None, "", "   ", {"k": "v"}, [None, 7]],
    )
    assert noisy[0].score == clean[0].score


def test_score_ai_keywords_not_a_list(parking_entry):
    """A non-list payload from the keyword parser does not raise."""
    assert score("Parking rules", [parking_entry], None)[0].score == 10.0
    assert score("Parking rules", [parking_entry], 123)[0].score == 10.0


def test_score_content_containment():
    """Whole message found in content adds +3."""
    entry = KnowledgeEntry(id="x", title="Visitors", content="where is the gate today")
    result = score("the gate", [entry])
    # +3 content containment, token "the" +0.5, "gate" +0.5
    assert result[0].score == 4.0


def test_score_incomplete_entries_score_zero():
    """Entries without title or content score 0."""
    entries = [
        {"id": "a", "content": "學費為五萬元"},
        {"id": "b", "title": "學費資訊"},
        {"id": "c", "title": None, "content": None, "keywords": None},
    ]
    result = score("學費", entries)
    assert [item.entry.id for item in result] == ["a", "b", "c"]
    assert all(item.score == 0 for item in result)


def test_score_accepts_storage_dicts():
    """Plain dictionaries from storage are accepted."""
    result = score(
        "學費多少",
        [{"id": "kb1", "title": "學費資訊", "content": "...", "keywords": [["費用"]]}],
    )
    assert result[0].entry.keywords == ["費用"]
    assert result[0].score == 8.0


def test_score_is_case_insensitive():
    """Comparisons ignore case on both sides."""
    entry = KnowledgeEntry(id="t", title="TUITION", content="Fees per term")
    lower = score("tuition", [entry])
    upper = score("TUITION", [entry])
    assert lower[0].score == upper[0].score > 0


def test_score_blank_message_has_no_containment():
    """A blank message does not match every entry by containment."""
    entry = KnowledgeEntry(id="t", title="Visitors", content="Opening hours")
    assert score("   ", [entry])[0].score == 0


def test_score_is_deterministic(parking_entry):
    """Identical inputs give identical scores."""
    first = [item.score for item in score("Parking rules", [parking_entry], ["lot"])]
    second = [item.score for item in score("Parking rules", [parking_entry], ["lot"])]
    assert first == second


def test_score_preserves_input_order():
    """Scored entries keep the input order."""
    entries = [
        KnowledgeEntry(id=str(i), title=f"Title {i}", content="text") for i in range(5)
    ]
    assert [item.entry.id for item in score("hello", entries)] == ["0", "1", "2", "3", "4"]


def test_normalize_ai_keywords():
    """Keywords are flattened, lower-cased and stripped; repeats are kept."""
    assert normalize_ai_keywords([" Fee ", ["fee", "Tuition"], 3, None, ""]) == [
        "fee",
        "fee",
        "tuition",
    ]
    assert normalize_ai_keywords(None) == []
    assert normalize_ai_keywords("學費") == ["學費"]


def test_score_tag_overlap_counts_every_matching_tag():
    """Each (AI keyword, tag) overlap adds +7."""
    entry = KnowledgeEntry(
        id="v",
        title="Visitor info",
        content="Ask at the desk.",
        keywords=["parking", "park lot"],
    )
    assert score("hello", [entry], ["park"])[0].score == 14.0


def test_score_repeated_ai_keywords_score_again():
    entry = KnowledgeEntry(
        id="v",
        title="Visitor info",
        content="Ask at the desk.",
        keywords=["parking", "park lot"],
    )
    assert score("hello", [entry], ["park", ["PARK"]])[0].score == 28.0


def test_score_repeated_words_stack():
    """Every occurrence of a message word counts toward partial overlap."""
    entry = KnowledgeEntry(id="f", title="fee table", content="see the office")
    # "fee" weight 4 doubled in the title, plus +1 per occurrence
    assert score("fee fee fee", [entry])[0].score == 11.0


def test_score_words_split_on_whitespace_only():
    """Words keep their punctuation, so "c++" can match a title."""
    entry = KnowledgeEntry(id="c", title="c++ basics", content="pointers and classes")
    assert score("c++ qqq", [entry])[0].score == 1.0
