"""Static capability table for the models the workbench can route to."""
from __future__ import annotations

from typing import Dict, List, Union

from workbench.core.errors import UnknownModelError
from workbench.core.models import AIModel, ModelCapability, Modality, Speed

MODEL_CAPABILITIES: Dict[AIModel, ModelCapability] = {
    AIModel.QWEN3_CODER_PLUS: ModelCapability(
        model=AIModel.QWEN3_CODER_PLUS,
        name="Qwen3 Coder Plus",
        description="Advanced code generation and software development",
        strengths=(
            "Code completion and generation",
            "Multi-language programming support",
            "Code refactoring and optimization",
            "API integration and documentation",
        ),
        use_cases=(
            "React/Next.js component generation",
            "Backend API development",
            "Database schema design",
            "Code review and optimization",
        ),
        context_window=32_000,
        speed=Speed.FAST,
        modalities=frozenset({Modality.TEXT, Modality.CODE}),
    ),
    AIModel.QWEN3_VL_PLUS: ModelCapability(
        model=AIModel.QWEN3_VL_PLUS,
        name="Qwen3 Vision Plus",
        description="Vision and multimodal understanding",
        strengths=(
            "Image-to-code conversion",
            "UI/UX design analysis",
            "Visual component recognition",
            "Mockup interpretation",
        ),
        use_cases=(
            "Converting design mockups to code",
            "Analyzing uploaded UI screenshots",
            "Visual debugging and layout optimization",
            "Design system component extraction",
        ),
        context_window=8_000,
        speed=Speed.MEDIUM,
        modalities=frozenset({Modality.TEXT, Modality.VISION, Modality.CODE}),
    ),
    AIModel.KIMI_K2: ModelCapability(
        model=AIModel.KIMI_K2,
        name="Kimi K2",
        description="Long context planning and architecture",
        strengths=(
            "Extended context understanding",
            "System architecture design",
            "Complex project planning",
            "Multi-file coordination",
        ),
        use_cases=(
            "Project architecture planning",
            "Multi-component system design",
            "Long-term project evolution",
            "Complex workflow orchestration",
        ),
        context_window=200_000,
        speed=Speed.MEDIUM,
        modalities=frozenset({Modality.TEXT, Modality.CODE}),
    ),
    AIModel.GLM_4_6: ModelCapability(
        model=AIModel.GLM_4_6,
        name="GLM 4.6",
        description="Natural language and user interaction",
        strengths=(
            "Natural conversation flow",
            "Requirement gathering",
            "User intent understanding",
            "Content generation",
        ),
        use_cases=(
            "Initial user conversation and requirement gathering",
            "Prompt enhancement and optimization",
            "Documentation generation",
            "User experience optimization",
        ),
        context_window=16_000,
        speed=Speed.FAST,
        modalities=frozenset({Modality.TEXT}),
    ),
    AIModel.DEEPSEEK_V3_2: ModelCapability(
        model=AIModel.DEEPSEEK_V3_2,
        name="DeepSeek V3.2",
        description="Advanced reasoning and problem solving",
        strengths=(
            "Complex problem decomposition",
            "Advanced debugging and error resolution",
            "Performance optimization",
            "Security analysis",
        ),
        use_cases=(
            "Complex bug diagnosis",
            "Performance bottleneck analysis",
            "Security vulnerability assessment",
            "Advanced algorithm implementation",
        ),
        context_window=64_000,
        speed=Speed.SLOW,
        modalities=frozenset({Modality.TEXT, Modality.CODE}),
    ),
}


def get_capabilities(model: Union[AIModel, str]) -> ModelCapability:
    """Return the declared capabilities of ``model``.

    Raises ``UnknownModelError`` for identifiers outside the fixed model set.
    """
    try:
        return MODEL_CAPABILITIES[AIModel(model)]
    except ValueError:
        raise UnknownModelError(model) from None


def list_models() -> List[ModelCapability]:
    return list(MODEL_CAPABILITIES.values())
