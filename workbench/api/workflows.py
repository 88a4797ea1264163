"""HTTP API for creating and executing workflows."""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from workbench.core.errors import WorkflowNotFoundError, WorkflowStateError
from workbench.core.models import StepStatus, Workflow, WorkflowStatus, WorkflowStep
from workbench.orchestration.orchestrator import Orchestrator
from workbench.runtime import get_orchestrator

router = APIRouter(prefix="/workflows", tags=["workflows"])


class StepRequest(BaseModel):
    name: str
    agent_id: str
    tool_id: Optional[str] = None
    input: Any = None
    dependencies: List[str] = Field(default_factory=list)


class WorkflowCreateRequest(BaseModel):
    name: str
    description: str = ""
    steps: List[StepRequest] = Field(..., min_length=1)


class ExecuteRequest(BaseModel):
    input: Any = None


class StepResponse(BaseModel):
    id: str
    name: str
    agent_id: str
    tool_id: Optional[str]
    status: StepStatus
    input: Any
    output: Any
    error: Optional[str]
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    dependencies: List[str]

    @classmethod
    def from_step(cls, step: WorkflowStep) -> "StepResponse":
        return cls(
            id=step.id,
            name=step.name,
            agent_id=step.agent_id,
            tool_id=step.tool_id,
            status=step.status,
            input=step.input,
            output=step.output,
            error=step.error,
            started_at=step.started_at,
            completed_at=step.completed_at,
            dependencies=list(step.dependencies),
        )


class WorkflowResponse(BaseModel):
    id: str
    name: str
    description: str
    status: WorkflowStatus
    progress: int
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    error: Optional[str]
    steps: List[StepResponse]

    @classmethod
    def from_workflow(cls, workflow: Workflow) -> "WorkflowResponse":
        return cls(
            id=workflow.id,
            name=workflow.name,
            description=workflow.description,
            status=workflow.status,
            progress=workflow.progress,
            started_at=workflow.started_at,
            completed_at=workflow.completed_at,
            error=workflow.error,
            steps=[StepResponse.from_step(step) for step in workflow.steps],
        )


@router.get("", response_model=List[WorkflowResponse])
async def list_workflows(orchestrator: Orchestrator = Depends(get_orchestrator)) -> List[WorkflowResponse]:
    return [WorkflowResponse.from_workflow(wf) for wf in orchestrator.list_workflows()]


@router.post("", response_model=WorkflowResponse, status_code=status.HTTP_201_CREATED)
async def create_workflow(
    request: WorkflowCreateRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    try:
        workflow_id = orchestrator.create_workflow(
            request.name,
            request.description,
            [step.model_dump() for step in request.steps],
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return WorkflowResponse.from_workflow(orchestrator.get_workflow(workflow_id))


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: str,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    workflow = orchestrator.get_workflow(workflow_id)
    if workflow is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown workflow")
    return WorkflowResponse.from_workflow(workflow)


@router.post("/{workflow_id}/execute", response_model=WorkflowResponse)
async def execute_workflow(
    workflow_id: str,
    request: Optional[ExecuteRequest] = None,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    try:
        workflow = await orchestrator.execute_workflow(
            workflow_id,
            request.input if request is not None else None,
        )
    except WorkflowNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except WorkflowStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return WorkflowResponse.from_workflow(workflow)
