"""Sequential workflow execution over registered agents."""
from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from workbench.core.errors import WorkflowNotFoundError, WorkflowStateError
from workbench.core.models import (
    AgentRecord,
    AgentStatus,
    StepOutcome,
    StepStatus,
    ToolUsage,
    Workflow,
    WorkflowStatus,
    WorkflowStep,
    utcnow,
)
from workbench.orchestration.agent_registry import AgentRegistry
from workbench.orchestration.tool_registry import ToolRegistry
from workbench.services.executor import StepExecutor

logger = logging.getLogger("workbench.workflow")

StepSpec = Union[WorkflowStep, Mapping[str, Any]]

DEFAULT_TASK_LABEL = "Executing task"


def _build_step(index: int, spec: StepSpec) -> WorkflowStep:
    step_id = f"step-{index}"
    if isinstance(spec, WorkflowStep):
        return dataclasses.replace(
            spec,
            id=step_id,
            status=spec.status or StepStatus.WAITING,
            dependencies=list(spec.dependencies),
        )
    return WorkflowStep(
        id=step_id,
        name=spec["name"],
        agent_id=spec["agent_id"],
        tool_id=spec.get("tool_id"),
        status=StepStatus(spec.get("status") or StepStatus.WAITING),
        input=spec.get("input"),
        dependencies=list(spec.get("dependencies") or ()),
    )


class WorkflowEngine:
    """Creates workflows and drives their steps one after another.

    Steps run strictly in declared order. A step's dependencies must name
    earlier steps of the same workflow; a step whose dependencies did not all
    complete is skipped. A step whose agent is missing fails on its own and
    the workflow carries on. Only an exception escaping a step fails the whole
    workflow, and side effects of earlier steps are kept.
    """

    def __init__(
        self,
        *,
        agents: AgentRegistry,
        tools: ToolRegistry,
        executor: StepExecutor,
    ) -> None:
        self._agents = agents
        self._tools = tools
        self._executor = executor
        self._workflows: Dict[str, Workflow] = {}

    @property
    def agents(self) -> AgentRegistry:
        return self._agents

    @property
    def tools(self) -> ToolRegistry:
        return self._tools

    def create_workflow(self, name: str, description: str, steps: Sequence[StepSpec]) -> str:
        built: List[WorkflowStep] = []
        for index, spec in enumerate(steps):
            step = _build_step(index, spec)
            declared = {existing.id for existing in built}
            for dependency in step.dependencies:
                if dependency not in declared:
                    raise ValueError(
                        f"Step {step.id} depends on '{dependency}', which is not an earlier step"
                    )
            built.append(step)

        workflow = Workflow(
            id=f"workflow-{uuid.uuid4().hex[:12]}",
            name=name,
            description=description,
            steps=built,
        )
        self._workflows[workflow.id] = workflow
        logger.info("Created workflow: %s (%d steps)", name, len(built))
        return workflow.id

    def get(self, workflow_id: str) -> Optional[Workflow]:
        return self._workflows.get(workflow_id)

    def require(self, workflow_id: str) -> Workflow:
        workflow = self._workflows.get(workflow_id)
        if workflow is None:
            raise WorkflowNotFoundError(workflow_id)
        return workflow

    def list_workflows(self) -> List[Workflow]:
        return list(self._workflows.values())

    def assign_task(self, agent_id: str, task: Any = None) -> str:
        """Mark the agent active and wrap ``task`` in a single-step workflow.

        ``task`` is usually a mapping whose ``description`` or ``type`` labels
        the work; any other payload is passed to the step unchanged and gets
        the default label. The workflow is not executed here; see ``run_task``.
        """
        agent = self._agents.require(agent_id)
        fields: Mapping[str, Any] = task if isinstance(task, Mapping) else {}
        label = fields.get("description") or fields.get("type") or DEFAULT_TASK_LABEL
        self._agents.mark_active(agent.id, label)
        logger.info("Assigned task to %s: %s", agent.name, label)

        task_type = fields.get("type") or "general"
        step_input = dict(fields) if task is None or isinstance(task, Mapping) else task
        return self.create_workflow(
            f"Task: {task_type}",
            f"Executing {task_type} task",
            [{"name": "Execute Task", "agent_id": agent.id, "input": step_input}],
        )

    async def run_task(
        self,
        agent_id: str,
        task: Any = None,
        workflow_input: Any = None,
    ) -> Workflow:
        workflow_id = self.assign_task(agent_id, task)
        return await self.execute_workflow(workflow_id, workflow_input)

    async def execute_workflow(self, workflow_id: str, workflow_input: Any = None) -> Workflow:
        workflow = self.require(workflow_id)
        if workflow.status is not WorkflowStatus.PENDING:
            raise WorkflowStateError(
                f"Workflow {workflow_id} is {workflow.status.value}; only pending workflows run"
            )

        workflow.status = WorkflowStatus.RUNNING
        workflow.started_at = utcnow()
        logger.info("Executing workflow: %s", workflow.name)

        total = len(workflow.steps)
        try:
            for finished, step in enumerate(workflow.steps, start=1):
                await self._run_step(workflow, step, workflow_input)
                workflow.progress = finished * 100 // total
        except asyncio.CancelledError:
            workflow.status = WorkflowStatus.CANCELLED
            workflow.error = "Cancelled"
            workflow.completed_at = utcnow()
            logger.warning("Workflow cancelled: %s", workflow.name)
            raise
        except Exception as exc:  # noqa: BLE001
            workflow.status = WorkflowStatus.FAILED
            workflow.error = str(exc) or type(exc).__name__
            logger.exception("Workflow failed: %s", workflow.name)
        else:
            workflow.status = WorkflowStatus.COMPLETED
            workflow.completed_at = utcnow()
            workflow.progress = 100
            logger.info("Workflow completed: %s", workflow.name)
        return workflow

    async def _run_step(self, workflow: Workflow, step: WorkflowStep, workflow_input: Any) -> None:
        unmet = [
            dependency
            for dependency in step.dependencies
            if self._find_step(workflow, dependency).status is not StepStatus.COMPLETED
        ]
        if unmet:
            step.status = StepStatus.SKIPPED
            step.error = f"Unmet dependencies: {', '.join(unmet)}"
            logger.info("Skipping %s/%s: %s", workflow.id, step.id, step.error)
            return

        agent = self._agents.get(step.agent_id)
        if agent is None:
            step.status = StepStatus.FAILED
            step.error = f"Agent {step.agent_id} not found"
            step.completed_at = utcnow()
            logger.warning("Step %s/%s failed: %s", workflow.id, step.id, step.error)
            return

        step.status = StepStatus.RUNNING
        step.started_at = utcnow()
        self._agents.mark_active(agent.id, agent.current_task or step.name)

        started = time.perf_counter()
        try:
            outcome = await self._executor.execute(agent, step, workflow_input)
        except asyncio.CancelledError:
            step.status = StepStatus.FAILED
            step.error = "Cancelled"
            step.completed_at = utcnow()
            self._agents.update_status(agent.id, AgentStatus.IDLE)
            raise
        except Exception as exc:
            outcome = StepOutcome(
                success=False,
                error=str(exc) or type(exc).__name__,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
            self._finish_step(workflow, step, agent, outcome)
            raise
        self._finish_step(workflow, step, agent, outcome)

    def _finish_step(
        self,
        workflow: Workflow,
        step: WorkflowStep,
        agent: AgentRecord,
        outcome: StepOutcome,
    ) -> None:
        step.completed_at = utcnow()
        if outcome.success:
            step.status = StepStatus.COMPLETED
            step.output = outcome.output
        else:
            step.status = StepStatus.FAILED
            step.output = outcome.output or None
            step.error = outcome.error or "Step failed"
            logger.warning("Step %s/%s failed: %s", workflow.id, step.id, step.error)

        self._agents.record_step_result(agent.id, outcome)
        if step.tool_id is not None:
            self._tools.evolve(
                step.tool_id,
                ToolUsage(success=outcome.success, execution_time=outcome.duration_ms),
            )

    @staticmethod
    def _find_step(workflow: Workflow, step_id: str) -> WorkflowStep:
        return next(step for step in workflow.steps if step.id == step_id)
