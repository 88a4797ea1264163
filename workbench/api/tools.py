"""HTTP API for the tool registry."""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from workbench.core.models import ParameterType, ToolRecord, ToolType, ToolUsage
from workbench.orchestration.orchestrator import Orchestrator
from workbench.runtime import get_orchestrator

router = APIRouter(prefix="/tools", tags=["tools"])


class ParameterSchema(BaseModel):
    name: str
    type: ParameterType
    required: bool = False
    description: str = ""
    default_value: Any = None


class ToolPerformanceResponse(BaseModel):
    usage_count: int
    success_rate: float
    average_execution_time: float
    last_used: datetime
    rating: float


class ToolResponse(BaseModel):
    id: str
    name: str
    description: str
    type: ToolType
    category: str
    is_custom: bool
    is_dynamic: bool
    parameters: List[ParameterSchema]
    performance: ToolPerformanceResponse
    created_by: Optional[str]

    @classmethod
    def from_record(cls, tool: ToolRecord) -> "ToolResponse":
        perf = tool.performance
        return cls(
            id=tool.id,
            name=tool.name,
            description=tool.description,
            type=tool.type,
            category=tool.category,
            is_custom=tool.is_custom,
            is_dynamic=tool.is_dynamic,
            parameters=[
                ParameterSchema(
                    name=p.name,
                    type=p.type,
                    required=p.required,
                    description=p.description,
                    default_value=p.default_value,
                )
                for p in tool.parameters
            ],
            performance=ToolPerformanceResponse(
                usage_count=perf.usage_count,
                success_rate=perf.success_rate,
                average_execution_time=perf.average_execution_time,
                last_used=perf.last_used,
                rating=perf.rating,
            ),
            created_by=tool.created_by,
        )


class ToolCreateRequest(BaseModel):
    name: str
    description: str
    type: ToolType = ToolType.STATIC
    category: str = "general"
    is_custom: bool = False
    is_dynamic: bool = False
    parameters: List[ParameterSchema] = Field(default_factory=list)
    created_by: Optional[str] = None


class DynamicToolRequest(BaseModel):
    description: str
    requirements: Any = None


class ToolUsageRequest(BaseModel):
    success: Optional[bool] = None
    execution_time: Optional[float] = Field(default=None, ge=0, description="Milliseconds")


@router.get("", response_model=List[ToolResponse])
async def list_tools(orchestrator: Orchestrator = Depends(get_orchestrator)) -> List[ToolResponse]:
    return [ToolResponse.from_record(tool) for tool in orchestrator.list_tools()]


@router.post("", response_model=ToolResponse, status_code=status.HTTP_201_CREATED)
async def register_tool(
    request: ToolCreateRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> ToolResponse:
    tool_id = orchestrator.register_tool(**request.model_dump())
    return ToolResponse.from_record(orchestrator.get_tool(tool_id))


@router.post("/dynamic", response_model=ToolResponse, status_code=status.HTTP_201_CREATED)
async def create_dynamic_tool(
    request: DynamicToolRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> ToolResponse:
    tool = await orchestrator.create_dynamic_tool(request.description, request.requirements)
    return ToolResponse.from_record(tool)


@router.get("/{tool_id}", response_model=ToolResponse)
async def get_tool(tool_id: str, orchestrator: Orchestrator = Depends(get_orchestrator)) -> ToolResponse:
    tool = orchestrator.get_tool(tool_id)
    if tool is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown tool")
    return ToolResponse.from_record(tool)


@router.post("/{tool_id}/evolve", status_code=status.HTTP_204_NO_CONTENT)
async def evolve_tool(
    tool_id: str,
    request: ToolUsageRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> None:
    orchestrator.evolve_tool(
        tool_id,
        ToolUsage(success=request.success, execution_time=request.execution_time),
    )
