"""Tests for agent creation, status handling and selection."""
from __future__ import annotations

import pytest

from workbench.agents.templates import STARTER_TEMPLATES
from workbench.core.errors import AgentNotFoundError
from workbench.core.models import AgentStatus, AgentType, AIModel, StepOutcome
from workbench.orchestration.agent_registry import AgentRegistry, score_agent


@pytest.fixture
def registry() -> AgentRegistry:
    registry = AgentRegistry()
    registry.initialize()
    return registry


def test_initialize_is_idempotent() -> None:
    registry = AgentRegistry()
    assert not registry.initialized
    registry.initialize()
    size = len(registry)
    registry.initialize()

    assert registry.initialized
    assert len(registry) == size == len(STARTER_TEMPLATES)


def test_starter_agents_carry_template_categories(registry: AgentRegistry) -> None:
    assert registry.require("agent-organizer").type is AgentType.META_ORCHESTRATION
    assert registry.require("context-manager").type is AgentType.META_ORCHESTRATION
    assert registry.require("nextjs-developer").type is AgentType.DEVELOPMENT
    assert registry.require("ui-designer").type is AgentType.DEVELOPMENT
    assert registry.require("requirement-analyst").type is AgentType.DOMAIN_SPECIFIC
    assert registry.require("ui-designer").model is AIModel.QWEN3_VL_PLUS


def test_create_agent_defaults() -> None:
    registry = AgentRegistry()
    agent = registry.create_agent("data-ai")

    assert agent.id.startswith("data-ai-")
    assert agent.status is AgentStatus.IDLE
    assert agent.performance.tasks_completed == 0
    assert agent.performance.success_rate == 100
    assert agent.performance.average_response_time == 0
    assert agent.performance.rating == 5
    assert agent.model is AIModel.GLM_4_6
    assert agent.name == "data-ai Agent"
    assert agent in registry.list_available()


def test_create_agent_overrides() -> None:
    registry = AgentRegistry()
    agent = registry.create_agent(
        AgentType.QUALITY_SECURITY,
        name="Auditor",
        capabilities=["security", "security"],
        model="deepseek-v3.2",
    )
    assert agent.name == "Auditor"
    assert agent.capabilities == {"security"}
    assert agent.model is AIModel.DEEPSEEK_V3_2


def test_created_ids_do_not_collide() -> None:
    registry = AgentRegistry()
    ids = {registry.create_agent("development").id for _ in range(50)}
    assert len(ids) == 50


def test_create_agent_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        AgentRegistry().create_agent("wizardry")


def test_create_from_template_avoids_taken_ids(registry: AgentRegistry) -> None:
    agent = registry.create_from_template("api-architect")
    assert agent.id == "api-architect"
    duplicate = registry.create_from_template("api-architect")
    assert duplicate.id != "api-architect"
    assert duplicate.id.startswith("api-architect-")


def test_update_status_ignores_unknown_agent(registry: AgentRegistry) -> None:
    registry.update_status("ghost", AgentStatus.BUSY)
    assert "ghost" not in registry


def test_update_status_replaces_current_task(registry: AgentRegistry) -> None:
    registry.update_status("ui-designer", "busy", "drawing")
    agent = registry.require("ui-designer")
    assert agent.status is AgentStatus.BUSY
    assert agent.current_task == "drawing"

    registry.update_status("ui-designer", AgentStatus.IDLE)
    assert agent.current_task is None


def test_require_raises_for_unknown_agent(registry: AgentRegistry) -> None:
    with pytest.raises(AgentNotFoundError):
        registry.require("ghost")


def test_list_available_excludes_offline_and_error(registry: AgentRegistry) -> None:
    registry.update_status("agent-organizer", AgentStatus.OFFLINE)
    registry.update_status("context-manager", AgentStatus.ERROR)
    registry.update_status("ui-designer", AgentStatus.BUSY)

    available = {agent.id for agent in registry.list_available()}
    assert "agent-organizer" not in available
    assert "context-manager" not in available
    assert "ui-designer" in available


def test_list_available_uses_any_capability_match(registry: AgentRegistry) -> None:
    available = registry.list_available(["routing", "scope-definition"])
    assert [agent.id for agent in available] == ["nextjs-developer", "requirement-analyst"]


def test_select_best_agent_prefers_capability_match(registry: AgentRegistry) -> None:
    best = registry.select_best_agent("component-creation")
    assert best is not None
    assert best.id == "nextjs-developer"


def test_select_best_agent_breaks_ties_by_registry_order(registry: AgentRegistry) -> None:
    best = registry.select_best_agent("no-such-capability")
    assert best is not None
    assert best.id == "agent-organizer"


@pytest.mark.parametrize("status", [AgentStatus.OFFLINE, AgentStatus.ERROR])
def test_select_best_agent_skips_unavailable(registry: AgentRegistry, status: AgentStatus) -> None:
    registry.update_status("nextjs-developer", status)
    best = registry.select_best_agent("component-creation", {"capabilities": ["component-creation"]})
    assert best is None


def test_select_best_agent_returns_none_when_empty() -> None:
    assert AgentRegistry().select_best_agent("anything") is None


def test_score_components(registry: AgentRegistry) -> None:
    agent = registry.require("nextjs-developer")
    # 50 capability + 30 success + 50 speed + 20 idle
    assert score_agent(agent, "routing") == pytest.approx(150)

    agent.performance.average_response_time = 12_000
    agent.status = AgentStatus.BUSY
    assert score_agent(agent, "routing") == pytest.approx(80)


def test_record_step_result_updates_statistics(registry: AgentRegistry) -> None:
    registry.mark_active("react-specialist", "hooks")
    registry.record_step_result("react-specialist", StepOutcome(success=True, duration_ms=1000))
    agent = registry.require("react-specialist")

    assert agent.status is AgentStatus.IDLE
    assert agent.current_task is None
    assert agent.performance.tasks_completed == 1
    assert agent.performance.average_response_time == 500

    registry.record_step_result("react-specialist", StepOutcome(success=False, duration_ms=0))
    assert agent.performance.tasks_failed == 1
    assert agent.performance.success_rate == 50


def test_select_best_agent_treats_bare_capability_string_as_one_capability(registry: AgentRegistry) -> None:
    best = registry.select_best_agent("planning", {"capabilities": "state-management"})
    assert best is not None
    assert best.id == "context-manager"
    assert registry.select_best_agent("planning", {"capabilities": "a"}) is None
