"""Tests for the chain catalogue and agent id helpers."""

import pytest

from agent8004.chains import (
    CHAINS,
    InvalidAgentIdError,
    UnknownChainError,
    chain_by_id,
    get_chain,
    parse_agent_id,
)


def test_chain_keys_unique_ids():
    ids = [c.chain_id for c in CHAINS.values()]
    assert len(ids) == len(set(ids))
    assert all(key == c.key for key, c in CHAINS.items())


def test_get_chain():
    chain = get_chain("arbitrum-sepolia")
    assert chain.chain_id == 421614
    assert chain.testnet
    assert chain.has_registries


def test_get_chain_unknown():
    with pytest.raises(UnknownChainError):
        get_chain("dogechain")


def test_chain_without_registries():
    assert not get_chain("base-sepolia").has_registries


def test_chain_by_id():
    assert chain_by_id(8453).key == "base-mainnet"
    assert chain_by_id(999999) is None


def test_parse_agent_id():
    assert parse_agent_id("421614:5") == (421614, 5)
    assert parse_agent_id("  1:22 ") == (1, 22)


@pytest.mark.parametrize("value", ["", "421614", "421614:", ":5", "abc:5", "1:2:3", "1 :2"])
def test_parse_agent_id_invalid(value):
    with pytest.raises(InvalidAgentIdError):
        parse_agent_id(value)
