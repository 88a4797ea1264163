"""Orchestrator owning the agent, tool and workflow collections."""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from workbench.agents.templates import AgentTemplateId
from workbench.core.models import (
    AgentRecord,
    AgentStatus,
    AgentType,
    AIModel,
    ToolRecord,
    ToolUsage,
    Workflow,
)
from workbench.orchestration.agent_registry import AgentRegistry
from workbench.orchestration.tool_registry import ToolRegistry
from workbench.orchestration.workflow_engine import StepSpec, WorkflowEngine
from workbench.services.executor import SimulatedExecutor, StepExecutor

logger = logging.getLogger("workbench.orchestrator")


class Orchestrator:
    """Coordinate agent selection, task assignment and workflow execution.

    One instance holds all state; callers receive it explicitly (see
    ``workbench.runtime``) rather than reaching for module globals.
    """

    def __init__(self, *, executor: Optional[StepExecutor] = None) -> None:
        self.agents = AgentRegistry()
        self.tools = ToolRegistry()
        self.workflows = WorkflowEngine(
            agents=self.agents,
            tools=self.tools,
            executor=executor or SimulatedExecutor(),
        )

    @property
    def initialized(self) -> bool:
        return self.agents.initialized

    def initialize(self) -> None:
        if self.agents.initialized:
            return
        logger.info("Initializing agent orchestrator")
        self.agents.initialize()

    # Agents

    def create_agent(
        self,
        agent_type: Union[AgentType, str],
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        capabilities: Optional[Iterable[str]] = None,
        tools: Optional[Iterable[str]] = None,
        model: Optional[Union[AIModel, str]] = None,
    ) -> AgentRecord:
        return self.agents.create_agent(
            agent_type,
            name=name,
            description=description,
            capabilities=capabilities,
            tools=tools,
            model=model,
        )

    def create_agent_from_template(self, template_id: Union[AgentTemplateId, str]) -> AgentRecord:
        return self.agents.create_from_template(template_id)

    def get_agent(self, agent_id: str) -> Optional[AgentRecord]:
        return self.agents.get(agent_id)

    def list_agents(self) -> List[AgentRecord]:
        return self.agents.list_agents()

    def update_agent_status(
        self,
        agent_id: str,
        status: Union[AgentStatus, str],
        current_task: Optional[str] = None,
    ) -> None:
        self.agents.update_status(agent_id, status, current_task)

    def list_available(self, capabilities: Optional[Iterable[str]] = None) -> List[AgentRecord]:
        return self.agents.list_available(capabilities)

    def select_best_agent(
        self,
        task_type: str,
        requirements: Optional[Mapping[str, Any]] = None,
    ) -> Optional[AgentRecord]:
        return self.agents.select_best_agent(task_type, requirements)

    # Tasks and workflows

    def assign_task(self, agent_id: str, task: Any = None) -> str:
        return self.workflows.assign_task(agent_id, task)

    async def run_task(
        self,
        agent_id: str,
        task: Any = None,
        workflow_input: Any = None,
    ) -> Workflow:
        return await self.workflows.run_task(agent_id, task, workflow_input)

    def create_workflow(self, name: str, description: str, steps: List[StepSpec]) -> str:
        return self.workflows.create_workflow(name, description, steps)

    async def execute_workflow(self, workflow_id: str, workflow_input: Any = None) -> Workflow:
        return await self.workflows.execute_workflow(workflow_id, workflow_input)

    def get_workflow(self, workflow_id: str) -> Optional[Workflow]:
        return self.workflows.get(workflow_id)

    def list_workflows(self) -> List[Workflow]:
        return self.workflows.list_workflows()

    # Tools

    def register_tool(self, **tool_config: Any) -> str:
        return self.tools.register(**tool_config)

    async def create_dynamic_tool(self, description: str, requirements: Any = None) -> ToolRecord:
        return await self.tools.create_dynamic_tool(description, requirements)

    def evolve_tool(self, tool_id: str, usage: Union[ToolUsage, Mapping[str, Any]]) -> None:
        self.tools.evolve(tool_id, usage)

    def get_tool(self, tool_id: str) -> Optional[ToolRecord]:
        return self.tools.get(tool_id)

    def list_tools(self) -> List[ToolRecord]:
        return self.tools.list_tools()
