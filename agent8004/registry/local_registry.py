"""Local file-based agent registry.

One JSON document per repository tree, ``.8004-agents.json`` at the repo
root, recording every agent project generated from (or registered against)
that repository. Readers find it by walking up from a starting directory;
writers address it directly by repo root.

Writes replace the whole document via a temp file and ``os.replace``. There
is no locking: two processes mutating the same file race and the last writer
wins, but a reader never sees a truncated file.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

from agent8004.registry import REGISTRY_FILENAME
from agent8004.registry.models import (
    AgentType,
    LoadResult,
    LoadStatus,
    RegistryAgent,
    RegistryFile,
)

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Base class for registry storage failures."""


class RegistryReadError(RegistryError):
    """The registry file exists but could not be read."""


class RegistryWriteError(RegistryError):
    """The registry file could not be written."""


# ------------------------------------------------------------------
# Discovery
# ------------------------------------------------------------------


def find_registry_root(start_dir: str | Path) -> Optional[Path]:
    """Return the nearest directory at or above ``start_dir`` holding the registry file.

    Directories that cannot be inspected for lack of permission are treated
    as not holding it. Returns None once the filesystem root has been checked.
    """
    current = Path(start_dir).resolve()
    while True:
        candidate = current / REGISTRY_FILENAME
        try:
            if candidate.is_file():
                logger.debug("Found registry at %s", candidate)
                return current
        except PermissionError:
            logger.debug("Skipping unreadable directory %s", current)
        if current.parent == current:
            return None
        current = current.parent


def get_registry_path(start_dir: str | Path) -> Optional[Path]:
    """Full path of the nearest registry file, or None if there is none."""
    root = find_registry_root(start_dir)
    return root / REGISTRY_FILENAME if root else None


# ------------------------------------------------------------------
# Load / persist
# ------------------------------------------------------------------


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def load_registry_file(path: str | Path) -> LoadResult:
    """Load the registry at exactly ``path``.

    Missing files are ``absent``; content that is not UTF-8 JSON or not shaped
    like a registry is ``corrupt``. Both carry an empty registry. Any other I/O
    failure raises RegistryReadError.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except (FileNotFoundError, NotADirectoryError):
        return LoadResult(status=LoadStatus.absent)
    except OSError as e:
        raise RegistryReadError(f"Cannot read registry {path}: {e}") from e

    try:
        data = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except ValueError:
        logger.warning("Registry %s is not valid JSON; treating it as empty", path)
        return LoadResult(status=LoadStatus.corrupt)

    if not isinstance(data, dict) or not isinstance(data.get("agents"), list):
        logger.warning("Registry %s has no agents list; treating it as empty", path)
        return LoadResult(status=LoadStatus.corrupt)

    return LoadResult(status=LoadStatus.ok, registry=RegistryFile.from_dict(data))


def write_registry(path: str | Path, registry: RegistryFile) -> None:
    """Atomically replace the registry at ``path`` with ``registry``.

    The parent directory must already exist. An existing file keeps its
    permission bits; a new one gets the usual umask-derived mode.
    """
    path = Path(path)
    content = json.dumps(registry.to_dict(), indent=2, ensure_ascii=False) + "\n"
    tmp_name = None
    try:
        try:
            mode = stat.S_IMODE(path.stat().st_mode)
        except FileNotFoundError:
            mode = _new_file_mode()
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f"{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
        raise RegistryWriteError(f"Cannot write registry {path}: {e}") from e
    logger.debug("Wrote %d agent(s) to %s", len(registry.agents), path)


def read_registry(start_dir: str | Path) -> Optional[RegistryFile]:
    """Read the nearest registry, searching upward from ``start_dir``.

    Returns None when no registry exists up to the filesystem root, and an
    empty registry when the file found is corrupt.
    """
    path = get_registry_path(start_dir)
    if path is None:
        return None
    return load_registry_file(path).registry


def get_deployed_agents(registry: RegistryFile) -> list[RegistryAgent]:
    """Agents that completed on-chain registration, in registry order."""
    return [a for a in registry.agents if a.is_deployed]


# ------------------------------------------------------------------
# Repo-root bound store
# ------------------------------------------------------------------


class AgentRegistry:
    """Registry file owned by one repository root.

    Unlike ``read_registry`` this never searches upward: the file lives at
    ``<repo_root>/.8004-agents.json`` and is created there on first upsert.
    """

    def __init__(self, repo_root: str | Path):
        self.repo_root = Path(repo_root)
        self.path = self.repo_root / REGISTRY_FILENAME

    def load(self) -> RegistryFile:
        return load_registry_file(self.path).registry

    def get(self, project_dir: str) -> Optional[RegistryAgent]:
        return self.load().find(project_dir)

    def upsert(
        self,
        project_dir: str,
        name: str,
        agent_type: AgentType | str = AgentType.generic,
        agent_id: Optional[str] = None,
        chain_id: Optional[int] = None,
    ) -> RegistryAgent:
        """Add or replace the agent keyed by ``project_dir``.

        Existing ``agent_id``/``chain_id`` survive unless new values are given,
        and keys this tool does not know about are kept.
        """
        registry = self.load()
        existing = registry.find(project_dir)

        agent = RegistryAgent(
            project_dir=project_dir,
            name=name,
            agent_type=AgentType.parse(agent_type),
            agent_id=agent_id if agent_id is not None else (existing.agent_id if existing else None),
            chain_id=chain_id if chain_id is not None else (existing.chain_id if existing else None),
            extra=dict(existing.extra) if existing else {},
        )

        if existing:
            registry.agents = [agent if a.project_dir == project_dir else a for a in registry.agents]
            logger.debug("Updated agent %s in %s", project_dir, self.path)
        else:
            registry.agents.append(agent)
            logger.debug("Added agent %s to %s", project_dir, self.path)

        write_registry(self.path, registry)
        return agent

    def update_after_register(
        self, project_dir: str, agent_id: str, chain_id: int
    ) -> Optional[RegistryAgent]:
        """Record the on-chain ids on every record keyed by ``project_dir``.

        Returns the updated agent, or None without touching the filesystem
        when the registry is missing or unreadable or has no such agent.
        """
        result = load_registry_file(self.path)
        if result.status != LoadStatus.ok:
            logger.debug("No usable registry at %s; skipping update", self.path)
            return None

        matches = result.registry.find_all(project_dir)
        if not matches:
            logger.debug("Agent %s not in %s; skipping update", project_dir, self.path)
            return None

        for agent in matches:
            agent.agent_id = agent_id
            agent.chain_id = chain_id
        write_registry(self.path, result.registry)
        return matches[0]
