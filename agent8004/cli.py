"""agent8004 CLI — inspect and update the local agent registry."""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from agent8004 import __version__

console = Console()

ROOT_ENVVAR = "AGENT8004_ROOT"


def _fail(message: str):
    console.print(f"[red]{message}[/]")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """agent8004 — local registry of ERC-8004 agent projects.

    Tracks every agent project generated in a repository in a
    .8004-agents.json file at the repository root.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        force=True,
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


# ── Where ────────────────────────────────────────────────────────────


@main.command()
@click.option("--from", "start_dir", default=".", envvar=ROOT_ENVVAR, help="Directory to search upward from")
def where(start_dir: str):
    """Print the directory holding the nearest registry file."""
    from agent8004.registry.local_registry import find_registry_root

    root = find_registry_root(start_dir)
    if root is None:
        _fail("No local registry found (no .8004-agents.json up to the filesystem root).")
    console.print(str(root))


# ── List ─────────────────────────────────────────────────────────────


@main.command(name="list")
@click.option("--from", "start_dir", default=".", envvar=ROOT_ENVVAR, help="Directory to search upward from")
@click.option("--deployed", is_flag=True, help="Only show agents registered on-chain")
def list_agents(start_dir: str, deployed: bool):
    """List agents in the nearest registry."""
    from agent8004.chains import chain_by_id
    from agent8004.registry.local_registry import get_deployed_agents, read_registry

    registry = read_registry(start_dir)
    if registry is None:
        _fail("No local registry found. Create an agent first, or run from the repo holding .8004-agents.json.")

    agents = get_deployed_agents(registry) if deployed else registry.agents
    if not agents:
        console.print("[yellow]No deployed agents.[/]" if deployed else "[yellow]Registry is empty.[/]")
        return

    table = Table(title=f"Agents ({len(agents)})")
    table.add_column("Name", style="cyan")
    table.add_column("Project")
    table.add_column("Type")
    table.add_column("Agent ID", style="green")
    table.add_column("Chain")

    for agent in agents:
        chain = chain_by_id(agent.chain_id) if agent.chain_id is not None else None
        if chain:
            chain_label = chain.name
        elif agent.chain_id is not None:
            chain_label = str(agent.chain_id)
        else:
            chain_label = "[dim]-[/]"
        table.add_row(
            agent.name,
            agent.project_dir,
            agent.agent_type.value,
            agent.agent_id or "[dim]not registered[/]",
            chain_label,
        )

    console.print(table)


# ── Add ──────────────────────────────────────────────────────────────


@main.command()
@click.argument("project_dir")
@click.option("--name", "-n", required=True, help="Display name of the agent")
@click.option(
    "--type", "agent_type", default="generic",
    type=click.Choice(["generic", "feedback-agent"]), help="Agent type",
)
@click.option("--repo-root", "-r", default=".", envvar=ROOT_ENVVAR, help="Repository root holding the registry")
@click.option("--write-meta", is_flag=True, help="Also write .8004.json into the project directory")
def add(project_dir: str, name: str, agent_type: str, repo_root: str, write_meta: bool):
    """Add an agent project to the registry, or update it if already present."""
    from pathlib import Path

    from agent8004.registry.agent_meta import write_agent_meta
    from agent8004.registry.local_registry import AgentRegistry, RegistryError

    project_path = Path(repo_root) / project_dir
    if write_meta and not project_path.is_dir():
        _fail(f"Project directory does not exist: {project_path}")

    reg = AgentRegistry(repo_root)
    try:
        agent = reg.upsert(project_dir, name, agent_type)
    except RegistryError as e:
        _fail(str(e))

    if write_meta:
        write_agent_meta(project_path, project_dir, agent.agent_type)

    status = f"[green]{agent.agent_id}[/]" if agent.is_deployed else "[yellow]not registered[/]"
    console.print(f"  Saved: [cyan]{agent.name}[/] ({agent.project_dir}) {status}")


# ── Registered ───────────────────────────────────────────────────────


@main.command()
@click.argument("agent_id")
@click.option("--project-dir", "-p", default=None, help="Registry key (default: read from .8004.json)")
@click.option("--chain", "-c", "chain_key", default=None, help="Chain key, e.g. arbitrum-sepolia")
@click.option("--from", "start_dir", default=".", envvar=ROOT_ENVVAR, help="Agent project directory")
def registered(agent_id: str, project_dir: str | None, chain_key: str | None, start_dir: str):
    """Record the on-chain AGENT_ID (chainId:tokenId) for an agent project."""
    from agent8004.chains import InvalidAgentIdError, UnknownChainError, get_chain, parse_agent_id
    from agent8004.registry.agent_meta import read_agent_meta
    from agent8004.registry.local_registry import AgentRegistry, RegistryError, find_registry_root

    try:
        chain_id, _ = parse_agent_id(agent_id)
    except InvalidAgentIdError as e:
        _fail(str(e))

    if chain_key:
        try:
            chain = get_chain(chain_key)
        except UnknownChainError:
            _fail(f"Unknown chain: {chain_key}")
        if chain.chain_id != chain_id:
            _fail(f"Agent ID {agent_id} does not belong to {chain.name} (chain {chain.chain_id}).")

    if project_dir is None:
        meta = read_agent_meta(start_dir)
        if meta is None:
            _fail("No .8004.json found. Pass --project-dir or run from inside an agent project.")
        project_dir = meta.project_dir

    root = find_registry_root(start_dir)
    if root is None:
        _fail("No local registry found (no .8004-agents.json up to the filesystem root).")

    try:
        agent = AgentRegistry(root).update_after_register(project_dir, agent_id.strip(), chain_id)
    except RegistryError as e:
        _fail(str(e))

    if agent is None:
        _fail(f"Agent {project_dir} is not in {root}; add it first.")
    console.print(f"  Registered: [cyan]{agent.name}[/] as [green]{agent.agent_id}[/]")


# ── Chains ───────────────────────────────────────────────────────────


@main.command()
def chains():
    """List supported chains."""
    from agent8004.chains import CHAINS

    table = Table(title=f"Chains ({len(CHAINS)})")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Chain ID", justify="right")
    table.add_column("Network", no_wrap=True)
    table.add_column("Registries", justify="center")
    table.add_column("RPC URL", style="dim")

    for chain in CHAINS.values():
        has = "[green]Y[/]" if chain.has_registries else "[red]N[/]"
        network = "testnet" if chain.testnet else "mainnet"
        table.add_row(chain.key, chain.name, str(chain.chain_id), network, has, chain.rpc_url)

    console.print(table)


if __name__ == "__main__":
    main()
