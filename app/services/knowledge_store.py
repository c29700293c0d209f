"""
Agent knowledge store.

Holds agent configurations (system prompt + knowledge entries) in memory,
optionally seeded from a YAML file of the form:

    agents:
      school-bot:
        name: School Assistant
        system_prompt: 你是學校的招生助理。
        knowledge_bases:
          - id: kb1
            title: 學費資訊
            content: 每學期學費為 ...
            keywords: [費用, 學雜費]
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from app.models.knowledge import AgentConfig, KnowledgeEntry

logger = logging.getLogger(__name__)


class AgentNotFoundError(Exception):
    """Raised when an agent id has no configuration."""

    pass


class KnowledgeStore:
    """In-memory store of agent configurations keyed by agent id."""

    def __init__(self, agents: Optional[List[AgentConfig]] = None):
        self._lock = threading.Lock()
        self._agents: Dict[str, AgentConfig] = {}
        for agent in agents or []:
            self._agents[agent.agent_id] = agent

    @classmethod
    def from_yaml(cls, path: str) -> "KnowledgeStore":
        """
        Load agents from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            KnowledgeStore with every agent in the file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file does not contain an "agents" mapping
        """
        with Path(path).open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        agents_data = data.get("agents") if isinstance(data, dict) else None
        if not isinstance(agents_data, dict):
            raise ValueError(f"Knowledge file {path} has no 'agents' mapping")

        agents = [
            AgentConfig.model_validate({**(config or {}), "agent_id": agent_id})
            for agent_id, config in agents_data.items()
        ]
        logger.info(f"Loaded {len(agents)} agents from {path}")
        return cls(agents)

    def get_agent(self, agent_id: str) -> AgentConfig:
        with self._lock:
            agent = self._agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(f"Agent '{agent_id}' does not exist")
        return agent

    def get_entries(self, agent_id: str) -> List[KnowledgeEntry]:
        return list(self.get_agent(agent_id).knowledge_bases)

    def upsert_agent(self, agent: AgentConfig) -> None:
        with self._lock:
            self._agents[agent.agent_id] = agent

    def set_entries(self, agent_id: str, entries: List[Any]) -> AgentConfig:
        """
        Replace the knowledge entries of an existing agent.

        Args:
            agent_id: Agent identifier
            entries: KnowledgeEntry models or storage dicts

        Returns:
            Updated agent configuration
        """
        knowledge_bases = [
            e if isinstance(e, KnowledgeEntry) else KnowledgeEntry.from_dict(e)
            for e in entries
        ]
        # Read and write under one lock
        with self._lock:
            agent = self._agents.get(agent_id)
            if agent is None:
                raise AgentNotFoundError(f"Agent '{agent_id}' does not exist")
            updated = agent.model_copy(update={"knowledge_bases": knowledge_bases})
            self._agents[agent_id] = updated
        logger.info(f"Stored {len(updated.knowledge_bases)} entries for agent {agent_id}")
        return updated

    def list_agents(self) -> List[str]:
        with self._lock:
            return sorted(self._agents.keys())
