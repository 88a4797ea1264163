"""Backends that perform the work of a single workflow step."""
from __future__ import annotations

import asyncio
import json
import time
from typing import Any, Mapping, Protocol

from workbench.core.models import AgentRecord, StepOutcome, WorkflowStep
from workbench.routing.router import select_model_for_task
from workbench.services.llm_pool import LLMPool


class StepExecutor(Protocol):
    """Anything able to carry out one step on behalf of an agent."""

    async def execute(
        self,
        agent: AgentRecord,
        step: WorkflowStep,
        workflow_input: Any = None,
    ) -> StepOutcome:
        ...


class SimulatedExecutor:
    """Stand-in backend: waits a fixed delay and reports a canned success."""

    def __init__(self, delay: float = 1.0) -> None:
        self.delay = delay

    async def execute(
        self,
        agent: AgentRecord,
        step: WorkflowStep,
        workflow_input: Any = None,
    ) -> StepOutcome:
        await asyncio.sleep(self.delay)
        return StepOutcome(
            success=True,
            output={"success": True, "result": f"Task completed by {agent.name}"},
            duration_ms=self.delay * 1000,
        )


def _build_prompt(step: WorkflowStep, workflow_input: Any) -> str:
    payload = step.input
    if isinstance(payload, Mapping):
        text = payload.get("prompt") or payload.get("description") or payload.get("content")
        if not text:
            text = json.dumps(dict(payload), default=str)
    elif payload is None:
        text = step.name
    else:
        text = str(payload)
    if workflow_input is not None:
        text = f"{text}\n\nContext:\n{json.dumps(workflow_input, default=str)}"
    return text


class LLMStepExecutor:
    """Executes steps by prompting the model bound to the agent."""

    def __init__(self, pool: LLMPool) -> None:
        self._pool = pool

    async def execute(
        self,
        agent: AgentRecord,
        step: WorkflowStep,
        workflow_input: Any = None,
    ) -> StepOutcome:
        model = agent.model
        if model is None:
            task_type = step.input.get("type") if isinstance(step.input, Mapping) else None
            model = select_model_for_task(task_type or "")

        system_prompt = (
            f"You are {agent.name}, {agent.description}. "
            f"Capabilities: {', '.join(sorted(agent.capabilities)) or 'general'}."
        )
        started = time.perf_counter()
        try:
            async with self._pool.acquire(model) as client:
                response = await client.chat.completions.create(
                    model=model.value,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": _build_prompt(step, workflow_input)},
                    ],
                    temperature=self._pool.config_for(model).temperature,
                )
        except Exception as exc:  # noqa: BLE001
            return StepOutcome(
                success=False,
                error=str(exc),
                duration_ms=(time.perf_counter() - started) * 1000,
            )

        return StepOutcome(
            success=True,
            output={
                "success": True,
                "result": response.choices[0].message.content,
                "model": model.value,
                "agent_name": agent.name,
            },
            duration_ms=(time.perf_counter() - started) * 1000,
        )
