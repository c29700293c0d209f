"""
Unit Tests for the Agent Knowledge Store
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest

from app.models.knowledge import AgentConfig, KnowledgeEntry
from app.services.knowledge_store import AgentNotFoundError, KnowledgeStore

YAML_SEED = """
agents:
  school:
    name: School Assistant
    system_prompt: 你是學校的招生助理。
    knowledge_bases:
      - id: kb1
        title: 學費資訊
        content: 每學期學費為五萬元
        keywords: [費用]
      - id: kb2
        title: 社團活動
        content: 社團活動每週三舉行
  shop:
    knowledge_bases:
      faq1:
        title: Returns
        content: Returns are accepted within 30 days.
"""


def test_from_yaml(tmp_path):
    path = tmp_path / "knowledge.yaml"
    path.write_text(YAML_SEED, encoding="utf-8")

    store = KnowledgeStore.from_yaml(str(path))

    assert store.list_agents() == ["school", "shop"]
    school = store.get_agent("school")
    assert school.system_prompt == "你是學校的招生助理。"
    assert [entry.id for entry in school.knowledge_bases] == ["kb1", "kb2"]
    assert school.knowledge_bases[0].keywords == ["費用"]
    # id -> entry mappings take the key as the entry id
    assert store.get_entries("shop")[0].id == "faq1"


def test_from_yaml_without_agents(tmp_path):
    path = tmp_path / "knowledge.yaml"
    path.write_text("something: else\n", encoding="utf-8")

    with pytest.raises(ValueError):
        KnowledgeStore.from_yaml(str(path))


def test_unknown_agent_raises():
    store = KnowledgeStore()
    with pytest.raises(AgentNotFoundError):
        store.get_agent("missing")
    with pytest.raises(AgentNotFoundError):
        store.set_entries("missing", [])


def test_set_entries_replaces_knowledge():
    store = KnowledgeStore([AgentConfig(agent_id="school", system_prompt="hi")])

    updated = store.set_entries(
        "school",
        [
            {"id": 7, "title": "學費資訊", "content": "五萬元"},
            KnowledgeEntry(id="kb2", title="社團活動", content="週三"),
        ],
    )

    assert updated.system_prompt == "hi"
    assert [entry.id for entry in store.get_entries("school")] == ["7", "kb2"]


def test_upsert_agent():
    store = KnowledgeStore()
    store.upsert_agent(AgentConfig(agent_id="a"))
    store.upsert_agent(AgentConfig(agent_id="a", name="Renamed"))

    assert store.list_agents() == ["a"]
    assert store.get_agent("a").name == "Renamed"


class LockCheckingDict(dict):
    """Records whether every write happened while the store lock was held."""

    def __init__(self, lock, *args):
        super().__init__(*args)
        self.lock = lock
        self.unlocked_writes = 0

    def __setitem__(self, key, value):
        if not self.lock.locked():
            self.unlocked_writes += 1
        super().__setitem__(key, value)

    def get(self, key, default=None):
        assert self.lock.locked()
        return super().get(key, default)


def test_set_entries_reads_and_writes_under_lock():
    store = KnowledgeStore([AgentConfig(agent_id="school")])
    store._agents = LockCheckingDict(store._lock, store._agents)

    store.set_entries("school", [{"id": "kb1", "title": "學費資訊", "content": "五萬元"}])

    assert store._agents.unlocked_writes == 0
    assert [entry.id for entry in store._agents["school"].knowledge_bases] == ["kb1"]
