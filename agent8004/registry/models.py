"""Registry data models — agent records, the registry document, load results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

AGENT_KEYS = ("projectDir", "name", "agentType", "agentId", "chainId")


class AgentType(str, Enum):
    """Behavioral capability of a generated agent."""

    generic = "generic"
    feedback = "feedback-agent"

    @classmethod
    def parse(cls, value) -> "AgentType":
        """Decode a stored tag, falling back to ``generic`` for unknown values."""
        if isinstance(value, AgentType):
            return value
        try:
            return cls(value)
        except (TypeError, ValueError):
            return cls.generic


def _chain_id_or_none(value) -> Optional[int]:
    # bool is an int subclass; floats like 1.9 are not chain ids
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


@dataclass
class RegistryAgent:
    """A single agent project tracked by the registry."""

    project_dir: str  # Unique key within one registry file
    name: str
    agent_type: AgentType = AgentType.generic

    # Set once on-chain registration completes
    agent_id: Optional[str] = None  # chainId:tokenId
    chain_id: Optional[int] = None

    # Keys written by other tools, carried through rewrites
    extra: dict = field(default_factory=dict)

    @property
    def is_deployed(self) -> bool:
        return self.agent_id is not None and self.chain_id is not None

    @property
    def can_give_feedback(self) -> bool:
        return self.agent_type == AgentType.feedback

    def to_dict(self) -> dict:
        data = {
            "projectDir": self.project_dir,
            "name": self.name,
            "agentType": self.agent_type.value,
            "agentId": self.agent_id,
            "chainId": self.chain_id,
        }
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "RegistryAgent":
        """Decode one record. Ids of the wrong type read as unregistered."""
        name = data.get("name")
        agent_id = data.get("agentId")
        return cls(
            project_dir=data["projectDir"],
            name=name if isinstance(name, str) else "",
            agent_type=AgentType.parse(data.get("agentType", "generic")),
            agent_id=agent_id if isinstance(agent_id, str) else None,
            chain_id=_chain_id_or_none(data.get("chainId")),
            extra={k: v for k, v in data.items() if k not in AGENT_KEYS},
        )


@dataclass
class RegistryFile:
    """The whole registry document. ``agents`` keeps insertion order."""

    agents: list[RegistryAgent] = field(default_factory=list)
    extra: dict = field(default_factory=dict)

    def find(self, project_dir: str) -> Optional[RegistryAgent]:
        for agent in self.agents:
            if agent.project_dir == project_dir:
                return agent
        return None

    def find_all(self, project_dir: str) -> list[RegistryAgent]:
        return [a for a in self.agents if a.project_dir == project_dir]

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data["agents"] = [a.to_dict() for a in self.agents]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "RegistryFile":
        """Build from parsed JSON. Malformed agent items are skipped."""
        agents = []
        for item in data.get("agents", []):
            if not isinstance(item, dict) or not isinstance(item.get("projectDir"), str):
                continue
            agents.append(RegistryAgent.from_dict(item))
        return cls(
            agents=agents,
            extra={k: v for k, v in data.items() if k != "agents"},
        )


class LoadStatus(str, Enum):
    ok = "ok"
    absent = "absent"
    corrupt = "corrupt"


@dataclass
class LoadResult:
    """Outcome of loading a registry file from one exact path.

    ``registry`` is always usable: it is empty when the file is absent or
    its content does not have the expected shape.
    """

    status: LoadStatus
    registry: RegistryFile = field(default_factory=RegistryFile)
