"""Application runtime composition helpers."""
from __future__ import annotations

from functools import lru_cache

from workbench.config import config
from workbench.orchestration.orchestrator import Orchestrator
from workbench.services.executor import LLMStepExecutor, SimulatedExecutor, StepExecutor
from workbench.services.llm_pool import LLMPool


@lru_cache
def get_llm_pool() -> LLMPool:
    pool = LLMPool()

    # Register the OpenAI-compatible endpoint for every routed model if configured
    if config.llm:
        pool.register_all(config.llm)

    return pool


@lru_cache
def get_executor() -> StepExecutor:
    if config.executor == "llm":
        if config.llm is None:
            raise RuntimeError("WORKBENCH_EXECUTOR=llm requires WORKBENCH_LLM_API_KEY to be set")
        return LLMStepExecutor(get_llm_pool())
    return SimulatedExecutor(delay=config.step_delay)


@lru_cache
def get_orchestrator() -> Orchestrator:
    return Orchestrator(executor=get_executor())
