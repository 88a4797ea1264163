"""Model routing by task category, agent type or context size.

Every selector is total: unknown inputs fall back to ``DEFAULT_MODEL`` instead
of failing, so adding a model only means extending the tables below.
"""
from __future__ import annotations

from typing import Dict, Tuple

from workbench.core.models import AIModel

DEFAULT_MODEL = AIModel.GLM_4_6

_TASK_MODELS: Dict[str, AIModel] = {
    "conversation": AIModel.GLM_4_6,
    "requirements": AIModel.GLM_4_6,
    "prompt-enhancement": AIModel.GLM_4_6,
    "vision": AIModel.QWEN3_VL_PLUS,
    "image-analysis": AIModel.QWEN3_VL_PLUS,
    "design-conversion": AIModel.QWEN3_VL_PLUS,
    "code-generation": AIModel.QWEN3_CODER_PLUS,
    "component-creation": AIModel.QWEN3_CODER_PLUS,
    "api-development": AIModel.QWEN3_CODER_PLUS,
    "architecture": AIModel.KIMI_K2,
    "planning": AIModel.KIMI_K2,
    "complex-design": AIModel.KIMI_K2,
    "debugging": AIModel.DEEPSEEK_V3_2,
    "optimization": AIModel.DEEPSEEK_V3_2,
    "security": AIModel.DEEPSEEK_V3_2,
    "problem-solving": AIModel.DEEPSEEK_V3_2,
}

_AGENT_MODELS: Dict[str, AIModel] = {
    "agent-organizer": AIModel.KIMI_K2,
    "context-manager": AIModel.KIMI_K2,
    "performance-monitor": AIModel.DEEPSEEK_V3_2,
    "error-coordinator": AIModel.DEEPSEEK_V3_2,
    "nextjs-developer": AIModel.QWEN3_CODER_PLUS,
    "react-specialist": AIModel.QWEN3_CODER_PLUS,
    "ui-designer": AIModel.QWEN3_VL_PLUS,
    "backend-architect": AIModel.QWEN3_CODER_PLUS,
    "requirement-analyst": AIModel.GLM_4_6,
    "user-researcher": AIModel.GLM_4_6,
}

# Checked in order; strict greater-than, first match wins.
_CONTEXT_THRESHOLDS: Tuple[Tuple[int, AIModel], ...] = (
    (100_000, AIModel.KIMI_K2),
    (50_000, AIModel.DEEPSEEK_V3_2),
    (20_000, AIModel.QWEN3_CODER_PLUS),
)


def _key(value: object) -> str:
    return getattr(value, "value", value) if value is not None else ""


def select_model_for_task(task_category: str) -> AIModel:
    return _TASK_MODELS.get(_key(task_category), DEFAULT_MODEL)


def select_model_for_agent_type(agent_type: str) -> AIModel:
    return _AGENT_MODELS.get(_key(agent_type), DEFAULT_MODEL)


def select_model_for_context_size(size_in_tokens: int) -> AIModel:
    for threshold, model in _CONTEXT_THRESHOLDS:
        if size_in_tokens > threshold:
            return model
    return DEFAULT_MODEL
