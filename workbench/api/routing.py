"""HTTP API over the model capability table and the router."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Path, status
from pydantic import BaseModel

from workbench.core.errors import UnknownModelError
from workbench.core.models import AIModel, ModelCapability, Modality, Speed
from workbench.routing.capabilities import get_capabilities, list_models
from workbench.routing.router import (
    select_model_for_agent_type,
    select_model_for_context_size,
    select_model_for_task,
)

router = APIRouter(prefix="/models", tags=["models"])


class ModelResponse(BaseModel):
    model: AIModel
    name: str
    description: str
    strengths: List[str]
    use_cases: List[str]
    context_window: int
    speed: Speed
    modalities: List[Modality]

    @classmethod
    def from_capability(cls, capability: ModelCapability) -> "ModelResponse":
        return cls(
            model=capability.model,
            name=capability.name,
            description=capability.description,
            strengths=list(capability.strengths),
            use_cases=list(capability.use_cases),
            context_window=capability.context_window,
            speed=capability.speed,
            modalities=sorted(capability.modalities, key=lambda m: m.value),
        )


class RouteResponse(BaseModel):
    model: AIModel


@router.get("", response_model=List[ModelResponse])
async def list_all_models() -> List[ModelResponse]:
    return [ModelResponse.from_capability(cap) for cap in list_models()]


@router.get("/route/task/{task_category}", response_model=RouteResponse)
async def route_by_task(task_category: str) -> RouteResponse:
    return RouteResponse(model=select_model_for_task(task_category))


@router.get("/route/agent/{agent_type}", response_model=RouteResponse)
async def route_by_agent_type(agent_type: str) -> RouteResponse:
    return RouteResponse(model=select_model_for_agent_type(agent_type))


@router.get("/route/context/{size}", response_model=RouteResponse)
async def route_by_context_size(size: int = Path(..., ge=0)) -> RouteResponse:
    return RouteResponse(model=select_model_for_context_size(size))


@router.get("/{model}", response_model=ModelResponse)
async def get_model(model: str) -> ModelResponse:
    try:
        capability = get_capabilities(model)
    except UnknownModelError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ModelResponse.from_capability(capability)
