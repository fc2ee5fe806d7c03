"""Tests for registry data models."""

from agent8004.registry.models import (
    AgentType,
    LoadResult,
    LoadStatus,
    RegistryAgent,
    RegistryFile,
)


def test_registry_agent_defaults():
    agent = RegistryAgent(project_dir="agents/a", name="A")
    assert agent.agent_type == AgentType.generic
    assert agent.agent_id is None
    assert agent.chain_id is None
    assert not agent.is_deployed
    assert not agent.can_give_feedback


def test_registry_agent_deployed_needs_both_ids():
    assert RegistryAgent("a", "A", agent_id="1:1", chain_id=1).is_deployed
    assert not RegistryAgent("a", "A", agent_id="1:1").is_deployed
    assert not RegistryAgent("a", "A", chain_id=1).is_deployed


def test_feedback_agent_can_give_feedback():
    assert RegistryAgent("a", "A", AgentType.feedback).can_give_feedback


def test_agent_type_parse():
    assert AgentType.parse("feedback-agent") == AgentType.feedback
    assert AgentType.parse("generic") == AgentType.generic
    assert AgentType.parse(AgentType.feedback) == AgentType.feedback
    assert AgentType.parse("something-else") == AgentType.generic


def test_registry_agent_dict_uses_camel_case():
    agent = RegistryAgent("agents/a", "A", AgentType.feedback, agent_id="421614:5", chain_id=421614)
    data = agent.to_dict()
    assert data == {
        "projectDir": "agents/a",
        "name": "A",
        "agentType": "feedback-agent",
        "agentId": "421614:5",
        "chainId": 421614,
    }
    assert RegistryAgent.from_dict(data) == agent


def test_registry_file_find():
    registry = RegistryFile(agents=[RegistryAgent("agents/a", "A"), RegistryAgent("agents/b", "B")])
    assert registry.find("agents/b").name == "B"
    assert registry.find("agents/c") is None


def test_registry_file_defaults_to_empty_list():
    assert RegistryFile().agents == []
    assert RegistryFile.from_dict({}).agents == []
    assert RegistryFile().to_dict() == {"agents": []}


def test_load_result_defaults_to_empty_registry():
    result = LoadResult(status=LoadStatus.absent)
    assert result.registry.agents == []
    assert result.registry.extra == {}


def test_from_dict_ignores_ids_of_wrong_type():
    agent = RegistryAgent.from_dict(
        {"projectDir": "agents/a", "name": 7, "agentId": 12, "chainId": True}
    )
    assert agent.name == ""
    assert agent.agent_id is None
    assert agent.chain_id is None
    assert not agent.is_deployed

    assert RegistryAgent.from_dict({"projectDir": "a", "chainId": 1.9}).chain_id is None
    assert RegistryAgent.from_dict({"projectDir": "a", "chainId": "1"}).chain_id is None


def test_unknown_keys_are_carried_through():
    data = {
        "version": 1,
        "agents": [{
            "projectDir": "agents/a",
            "name": "A",
            "agentType": "generic",
            "agentId": None,
            "chainId": None,
            "createdAt": "2026-01-01",
        }],
    }
    registry = RegistryFile.from_dict(data)
    assert registry.extra == {"version": 1}
    assert registry.agents[0].extra == {"createdAt": "2026-01-01"}
    assert registry.to_dict() == data
