"""Supported chains and ERC-8004 agent id helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


class UnknownChainError(KeyError):
    """Chain key is not in the catalogue."""


class InvalidAgentIdError(ValueError):
    """Agent id is not in ``chainId:tokenId`` form."""


@dataclass(frozen=True)
class Chain:
    key: str
    name: str
    chain_id: int
    rpc_url: str
    testnet: bool = False
    identity_registry: Optional[str] = None
    reputation_registry: Optional[str] = None

    @property
    def has_registries(self) -> bool:
        return bool(self.identity_registry and self.reputation_registry)


_MAINNET_IDENTITY = "0x8004A169FB4a3325136EB29fA0ceB6D2e539a432"
_MAINNET_REPUTATION = "0x8004BAa17C55a88189AE136b182e5fdA19dE9b63"
_TESTNET_IDENTITY = "0x8004A818BFB912233c491871b3d84c89A494BD9e"
_TESTNET_REPUTATION = "0x8004B663056A597Dffe9eCcC1965A193B7388713"

CHAINS: dict[str, Chain] = {
    c.key: c
    for c in [
        # Mainnets
        Chain("eth-mainnet", "Ethereum Mainnet", 1,
              "https://ethereum-rpc.publicnode.com",
              identity_registry=_MAINNET_IDENTITY, reputation_registry=_MAINNET_REPUTATION),
        Chain("arbitrum-mainnet", "Arbitrum One", 42161,
              "https://arb1.arbitrum.io/rpc",
              identity_registry=_MAINNET_IDENTITY, reputation_registry=_MAINNET_REPUTATION),
        Chain("base-mainnet", "Base Mainnet", 8453,
              "https://mainnet.base.org"),
        Chain("polygon-mainnet", "Polygon Mainnet", 137,
              "https://polygon-rpc.com"),
        # Testnets
        Chain("eth-sepolia", "Ethereum Sepolia (Testnet)", 11155111,
              "https://ethereum-sepolia-rpc.publicnode.com", testnet=True,
              identity_registry=_TESTNET_IDENTITY, reputation_registry=_TESTNET_REPUTATION),
        Chain("arbitrum-sepolia", "Arbitrum Sepolia (Testnet)", 421614,
              "https://sepolia-rollup.arbitrum.io/rpc", testnet=True,
              identity_registry=_TESTNET_IDENTITY, reputation_registry=_TESTNET_REPUTATION),
        Chain("base-sepolia", "Base Sepolia (Testnet)", 84532,
              "https://sepolia.base.org", testnet=True),
        Chain("polygon-amoy", "Polygon Amoy (Testnet)", 80002,
              "https://rpc-amoy.polygon.technology", testnet=True),
    ]
}

AGENT_ID_PATTERN = re.compile(r"^\d+:\d+$")


def get_chain(key: str) -> Chain:
    try:
        return CHAINS[key]
    except KeyError:
        raise UnknownChainError(key) from None


def chain_by_id(chain_id: int) -> Optional[Chain]:
    for chain in CHAINS.values():
        if chain.chain_id == chain_id:
            return chain
    return None


def parse_agent_id(agent_id: str) -> tuple[int, int]:
    """Split ``chainId:tokenId`` into its two integers."""
    value = (agent_id or "").strip()
    if not AGENT_ID_PATTERN.match(value):
        raise InvalidAgentIdError(
            f"Use format chainId:tokenId (e.g. 421614:5), got {agent_id!r}"
        )
    chain_id, token_id = value.split(":")
    return int(chain_id), int(token_id)
