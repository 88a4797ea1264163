"""Tests for the step executors."""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from workbench.config import LLMConfig
from workbench.core.models import AgentRecord, AgentType, AIModel, WorkflowStep
from workbench.services.executor import LLMStepExecutor, SimulatedExecutor
from workbench.services.llm_pool import LLMPool


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeCompletions:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.requests: List[Dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.requests.append(kwargs)
        if self.fail:
            raise ConnectionError("endpoint unreachable")
        message = SimpleNamespace(content=f"done with {kwargs['model']}")
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakePool(LLMPool):
    def __init__(self, completions: FakeCompletions) -> None:
        super().__init__()
        self.completions = completions

    def _create_client(self, config: LLMConfig) -> Any:
        return SimpleNamespace(chat=SimpleNamespace(completions=self.completions))


def _agent(model: Any = AIModel.QWEN3_CODER_PLUS) -> AgentRecord:
    return AgentRecord(
        id="coder",
        name="Coder",
        type=AgentType.DEVELOPMENT,
        description="writes code",
        capabilities={"code-generation"},
        model=model,
    )


def _step(payload: Any) -> WorkflowStep:
    return WorkflowStep(id="step-0", name="Execute Task", agent_id="coder", input=payload)


@pytest.mark.anyio
async def test_simulated_executor_reports_canned_success() -> None:
    outcome = await SimulatedExecutor(delay=0).execute(_agent(), _step(None))
    assert outcome.success
    assert outcome.output == {"success": True, "result": "Task completed by Coder"}
    assert outcome.duration_ms == 0


@pytest.mark.anyio
async def test_llm_executor_uses_bound_model() -> None:
    completions = FakeCompletions()
    pool = FakePool(completions)
    pool.register_all(LLMConfig(api_key="test", temperature=0.2))

    outcome = await LLMStepExecutor(pool).execute(_agent(), _step({"prompt": "Build a navbar"}))

    assert outcome.success
    assert outcome.output["result"] == "done with qwen3-coder-plus"
    request = completions.requests[0]
    assert request["temperature"] == 0.2
    assert request["messages"][1]["content"] == "Build a navbar"


@pytest.mark.anyio
async def test_llm_executor_routes_unbound_agent_by_task_type() -> None:
    completions = FakeCompletions()
    pool = FakePool(completions)
    pool.register_all(LLMConfig(api_key="test"))

    await LLMStepExecutor(pool).execute(_agent(model=None), _step({"type": "security"}))

    assert completions.requests[0]["model"] == "deepseek-v3.2"


@pytest.mark.anyio
async def test_llm_executor_turns_errors_into_failed_outcomes() -> None:
    pool = FakePool(FakeCompletions(fail=True))
    pool.register_all(LLMConfig(api_key="test"))

    outcome = await LLMStepExecutor(pool).execute(_agent(), _step("anything"))

    assert not outcome.success
    assert outcome.error == "endpoint unreachable"


@pytest.mark.anyio
async def test_unregistered_model_is_a_failed_outcome() -> None:
    outcome = await LLMStepExecutor(FakePool(FakeCompletions())).execute(_agent(), _step("anything"))
    assert not outcome.success
    assert "not registered" in outcome.error
