"""Errors raised by the orchestration core."""
from __future__ import annotations


class OrchestrationError(Exception):
    """Base class for orchestration failures surfaced to callers."""


class AgentNotFoundError(OrchestrationError, KeyError):
    def __init__(self, agent_id: str) -> None:
        super().__init__(f"Agent {agent_id} not found")
        self.agent_id = agent_id

    def __str__(self) -> str:
        return self.args[0]


class WorkflowNotFoundError(OrchestrationError, KeyError):
    def __init__(self, workflow_id: str) -> None:
        super().__init__(f"Workflow {workflow_id} not found")
        self.workflow_id = workflow_id

    def __str__(self) -> str:
        return self.args[0]


class UnknownModelError(OrchestrationError, KeyError):
    def __init__(self, model: object) -> None:
        super().__init__(f"Unknown model '{model}'")
        self.model = model

    def __str__(self) -> str:
        return self.args[0]


class WorkflowStateError(OrchestrationError, RuntimeError):
    """Raised when a workflow is asked to do something its status forbids."""
