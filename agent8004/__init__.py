"""agent8004 — local registry of ERC-8004 agent projects."""

__version__ = "0.1.0"
