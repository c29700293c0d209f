"""
API Tests

Exercises the HTTP routes with in-memory stores and a mocked chat model.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from app.config import Settings
from app.main import create_app
from app.models.knowledge import AgentConfig, KnowledgeEntry
from app.services.knowledge_store import KnowledgeStore


class FakeLLM:
    async def ainvoke(self, messages):
        return AIMessage(
            content='每學期學費為五萬元。\n```json\n{"profile": {}, "suggestions": []}\n```'
        )


@pytest.fixture
def client():
    store = KnowledgeStore(
        [
            AgentConfig(
                agent_id="school",
                system_prompt="你是學校的招生助理。",
                knowledge_bases=[
                    KnowledgeEntry(
                        id="kb1",
                        title="學費資訊",
                        content="每學期學費為五萬元",
                        keywords=["費用"],
                    ),
                    KnowledgeEntry(id="kb2", title="社團活動", content="社團活動每週三舉行"),
                ],
            )
        ]
    )
    keyword_extractor = MagicMock()
    keyword_extractor.extract_keywords = AsyncMock(return_value=[])

    app = create_app(
        settings=Settings(timezone="UTC"),
        knowledge_store=store,
        keyword_extractor=keyword_extractor,
        llm=FakeLLM(),
    )
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "ConvAI Agent"}


def test_root_lists_endpoints(client):
    assert "chat" in client.get("/").json()["endpoints"]


def test_chat(client):
    response = client.post(
        "/api/chat/school", json={"message": "學費多少？", "user_id": "U1"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "success"
    assert data["answer"] == "每學期學費為五萬元。"
    assert data["knowledge_bases"] == ["學費資訊"]
    assert data["profile_updated"] is False


def test_chat_unknown_agent(client):
    response = client.post("/api/chat/missing", json={"message": "學費多少？"})
    assert response.status_code == 404


def test_chat_rejects_empty_message(client):
    response = client.post("/api/chat/school", json={"message": ""})
    assert response.status_code == 422


def test_rank(client):
    response = client.post(
        "/api/knowledge/school/rank",
        json={"message": "學費多少", "ai_keywords": [" 學費 ", ["費用"], 3]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["ai_keywords"] == ["學費", "費用"]
    assert data["total_candidates"] == 2
    assert data["total_relevant"] == 1
    assert [item["entry"]["id"] for item in data["selected"]] == ["kb1"]
    assert data["selected"][0]["score"] > 0


def test_rank_unknown_agent(client):
    response = client.post("/api/knowledge/missing/rank", json={"message": "hi"})
    assert response.status_code == 404


def test_list_and_replace_entries(client):
    assert [e["id"] for e in client.get("/api/knowledge/school").json()] == ["kb1", "kb2"]

    response = client.put(
        "/api/knowledge/school",
        json={"entries": [{"id": "kb9", "title": "宿舍", "content": "每間四人"}]},
    )
    assert response.status_code == 200
    assert [e["id"] for e in client.get("/api/knowledge/school").json()] == ["kb9"]

    assert client.get("/api/knowledge/missing").status_code == 404


def test_analyze_get_and_clear_profile(client):
    response = client.post(
        "/api/profiles/school/U1/analyze",
        json={"message": "我叫陳大大，電話是0912345678"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["extracted"] == {
        "basic": {"name": "陳大大"},
        "contact": {"phone": "0912345678"},
    }
    assert data["confidence"] == 4.0
    assert data["description"] == "姓名：陳大大"

    profile = client.get("/api/profiles/school/U1").json()
    assert profile["profile"]["basic"] == {"name": "陳大大"}
    assert profile["profile"]["metadata"]["total_interactions"] == 1

    assert client.delete("/api/profiles/school/U1").json() == {
        "status": "success",
        "removed": True,
    }
    assert client.get("/api/profiles/school/U1").json()["confidence"] == 0.0


def test_profile_unknown_agent(client):
    assert client.get("/api/profiles/missing/U1").status_code == 404
    assert client.delete("/api/profiles/missing/U1").status_code == 404
    response = client.post(
        "/api/profiles/missing/U1/analyze", json={"message": "我叫陳大大"}
    )
    assert response.status_code == 404
