"""Per-project marker file (``.8004.json``).

Written into each generated agent project so that commands run from inside
the project can find their own registry key.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from agent8004.registry import AGENT_META_FILENAME
from agent8004.registry.models import AgentType


@dataclass
class AgentMeta:
    project_dir: str
    agent_type: AgentType = AgentType.generic


def agent_meta_path(project_path: str | Path) -> Path:
    return Path(project_path) / AGENT_META_FILENAME


def write_agent_meta(
    project_path: str | Path, project_dir: str, agent_type: AgentType | str
) -> Path:
    """Write the marker into ``project_path``. Returns the file path."""
    path = agent_meta_path(project_path)
    meta = {"projectDir": project_dir, "agentType": AgentType.parse(agent_type).value}
    path.write_text(json.dumps(meta, separators=(",", ":")), encoding="utf-8")
    return path


def read_agent_meta(project_path: str | Path) -> Optional[AgentMeta]:
    """Read the marker in ``project_path``; None if missing or malformed."""
    path = agent_meta_path(project_path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return None
    if not isinstance(data, dict) or not isinstance(data.get("projectDir"), str):
        return None
    return AgentMeta(
        project_dir=data["projectDir"],
        agent_type=AgentType.parse(data.get("agentType", "generic")),
    )
