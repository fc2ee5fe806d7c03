"""Registry — the per-repository record of generated agent projects.

The registry provides:
- Discovery: find the registry file by walking up from a directory
- Tracking: insert or update agents keyed by project directory
- Deployment state: record on-chain ids once registration completes
"""

REGISTRY_FILENAME = ".8004-agents.json"
AGENT_META_FILENAME = ".8004.json"
