"""HTTP API exposing agent registry and task assignment."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from workbench.core.errors import AgentNotFoundError
from workbench.core.models import AgentRecord, AgentStatus, AgentType, AIModel
from workbench.orchestration.orchestrator import Orchestrator
from workbench.runtime import get_orchestrator

router = APIRouter(prefix="/agents", tags=["agents"])


class PerformanceResponse(BaseModel):
    tasks_completed: int
    tasks_failed: int
    success_rate: float
    average_response_time: float
    last_active: datetime
    rating: float


class AgentResponse(BaseModel):
    id: str
    name: str
    type: AgentType
    description: str
    capabilities: List[str]
    status: AgentStatus
    current_task: Optional[str]
    tools: List[str]
    model: Optional[AIModel]
    performance: PerformanceResponse

    @classmethod
    def from_record(cls, agent: AgentRecord) -> "AgentResponse":
        perf = agent.performance
        return cls(
            id=agent.id,
            name=agent.name,
            type=agent.type,
            description=agent.description,
            capabilities=sorted(agent.capabilities),
            status=agent.status,
            current_task=agent.current_task,
            tools=sorted(agent.tools),
            model=agent.model,
            performance=PerformanceResponse(
                tasks_completed=perf.tasks_completed,
                tasks_failed=perf.tasks_failed,
                success_rate=perf.success_rate,
                average_response_time=perf.average_response_time,
                last_active=perf.last_active,
                rating=perf.rating,
            ),
        )


class AgentCreateRequest(BaseModel):
    type: AgentType = Field(..., description="Domain category of the new agent")
    name: Optional[str] = None
    description: Optional[str] = None
    capabilities: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    model: Optional[AIModel] = Field(default=None, description="Overrides the routed model")


class StatusUpdateRequest(BaseModel):
    status: AgentStatus
    current_task: Optional[str] = None


class TaskRequest(BaseModel):
    type: Optional[str] = Field(default=None, description="Task category, e.g. component-creation")
    description: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)
    execute: bool = Field(default=False, description="Run the created workflow before responding")


class TaskAssignmentResponse(BaseModel):
    workflow_id: str
    workflow_status: str


@router.get("", response_model=List[AgentResponse])
async def list_agents(orchestrator: Orchestrator = Depends(get_orchestrator)) -> List[AgentResponse]:
    return [AgentResponse.from_record(agent) for agent in orchestrator.list_agents()]


@router.post("", response_model=AgentResponse, status_code=status.HTTP_201_CREATED)
async def create_agent(
    request: AgentCreateRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> AgentResponse:
    agent = orchestrator.create_agent(
        request.type,
        name=request.name,
        description=request.description,
        capabilities=request.capabilities,
        tools=request.tools,
        model=request.model,
    )
    return AgentResponse.from_record(agent)


@router.post(
    "/templates/{template_id}",
    response_model=AgentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_agent_from_template(
    template_id: str,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> AgentResponse:
    try:
        agent = orchestrator.create_agent_from_template(template_id)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown agent template '{template_id}'",
        ) from exc
    return AgentResponse.from_record(agent)


@router.get("/available", response_model=List[AgentResponse])
async def list_available_agents(
    capability: Optional[List[str]] = Query(default=None),
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> List[AgentResponse]:
    return [AgentResponse.from_record(agent) for agent in orchestrator.list_available(capability)]


@router.get("/best", response_model=AgentResponse)
async def best_agent_for_task(
    task_type: str,
    capability: Optional[List[str]] = Query(default=None),
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> AgentResponse:
    requirements = {"capabilities": capability} if capability else None
    agent = orchestrator.select_best_agent(task_type, requirements)
    if agent is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No agent available")
    return AgentResponse.from_record(agent)


@router.get("/{agent_id}", response_model=AgentResponse)
async def get_agent(agent_id: str, orchestrator: Orchestrator = Depends(get_orchestrator)) -> AgentResponse:
    agent = orchestrator.get_agent(agent_id)
    if agent is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown agent")
    return AgentResponse.from_record(agent)


@router.put("/{agent_id}/status", status_code=status.HTTP_204_NO_CONTENT)
async def update_agent_status(
    agent_id: str,
    request: StatusUpdateRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> None:
    orchestrator.update_agent_status(agent_id, request.status, request.current_task)


@router.post(
    "/{agent_id}/tasks",
    response_model=TaskAssignmentResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def assign_task(
    agent_id: str,
    request: TaskRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> TaskAssignmentResponse:
    task = dict(request.payload)
    if request.type is not None:
        task["type"] = request.type
    if request.description is not None:
        task["description"] = request.description

    try:
        workflow_id = orchestrator.assign_task(agent_id, task)
    except AgentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    if request.execute:
        workflow = await orchestrator.execute_workflow(workflow_id)
    else:
        workflow = orchestrator.get_workflow(workflow_id)
    return TaskAssignmentResponse(workflow_id=workflow_id, workflow_status=workflow.status.value)
