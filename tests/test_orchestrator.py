"""End-to-end tests for the orchestrator facade."""
from __future__ import annotations

import pytest

from workbench.core.errors import AgentNotFoundError
from workbench.core.models import AgentStatus, StepStatus, WorkflowStatus
from workbench.orchestration.orchestrator import Orchestrator
from workbench.services.executor import SimulatedExecutor


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def orchestrator() -> Orchestrator:
    orchestrator = Orchestrator(executor=SimulatedExecutor(delay=0))
    orchestrator.initialize()
    return orchestrator


def test_initialize_twice_keeps_agent_count() -> None:
    orchestrator = Orchestrator(executor=SimulatedExecutor(delay=0))
    orchestrator.initialize()
    count = len(orchestrator.list_agents())
    orchestrator.initialize()

    assert orchestrator.initialized
    assert len(orchestrator.list_agents()) == count


def test_initialize_keeps_agents_created_earlier() -> None:
    orchestrator = Orchestrator(executor=SimulatedExecutor(delay=0))
    early = orchestrator.create_agent("devops-infrastructure")
    orchestrator.initialize()

    assert orchestrator.get_agent(early.id) is early


def test_initialize_keeps_template_agent_holding_starter_id() -> None:
    orchestrator = Orchestrator(executor=SimulatedExecutor(delay=0))
    early = orchestrator.create_agent_from_template("nextjs-developer")
    early.performance.tasks_completed = 7
    orchestrator.initialize()

    agent = orchestrator.get_agent("nextjs-developer")
    assert agent is early
    assert agent.performance.tasks_completed == 7
    assert len([a for a in orchestrator.list_agents() if a.id == "nextjs-developer"]) == 1


@pytest.mark.anyio
async def test_assign_and_execute_component_task(orchestrator: Orchestrator) -> None:
    workflow_id = orchestrator.assign_task("nextjs-developer", {"type": "component-creation"})
    agent = orchestrator.get_agent("nextjs-developer")
    assert agent.status is AgentStatus.ACTIVE

    workflow = await orchestrator.execute_workflow(workflow_id)

    assert workflow.status is WorkflowStatus.COMPLETED
    assert workflow.progress == 100
    assert workflow.steps[0].status is StepStatus.COMPLETED
    assert agent.status is AgentStatus.IDLE
    assert agent.current_task is None
    assert agent.performance.tasks_completed == 1


def test_assign_task_to_unknown_agent(orchestrator: Orchestrator) -> None:
    with pytest.raises(AgentNotFoundError):
        orchestrator.assign_task("ghost", {"type": "planning"})
    assert orchestrator.list_workflows() == []


def test_register_then_evolve_tool_once(orchestrator: Orchestrator) -> None:
    tool_id = orchestrator.register_tool(name="Formatter", description="Format code")
    orchestrator.evolve_tool(tool_id, {"success": True, "execution_time": 500})
    perf = orchestrator.get_tool(tool_id).performance

    assert perf.usage_count == 1
    assert perf.success_rate == 100
    assert perf.average_execution_time == 250


def test_created_agents_are_immediately_available(orchestrator: Orchestrator) -> None:
    created = [orchestrator.create_agent(agent_type) for agent_type in ("data-ai", "business-product")]
    available = {agent.id for agent in orchestrator.list_available()}
    assert {agent.id for agent in created} <= available


def test_best_agent_ignores_offline_agents(orchestrator: Orchestrator) -> None:
    orchestrator.update_agent_status("nextjs-developer", AgentStatus.OFFLINE)
    best = orchestrator.select_best_agent("component-creation")
    assert best is not None
    assert best.id != "nextjs-developer"


@pytest.mark.anyio
async def test_slower_agent_loses_selection_after_work() -> None:
    slow = Orchestrator(executor=SimulatedExecutor(delay=0.01))
    slow.initialize()
    await slow.run_task("agent-organizer", {"type": "planning"})

    # Still idle and fully successful, but now carries a 5 ms average.
    assert slow.select_best_agent("nothing-matches").id == "context-manager"
