"""Core data models shared across orchestrator components."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Set, Tuple


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AIModel(str, Enum):
    """Model identifiers known to the router."""

    QWEN3_CODER_PLUS = "qwen3-coder-plus"
    QWEN3_VL_PLUS = "qwen3-vl-plus"
    KIMI_K2 = "kimi-k2-0905"
    GLM_4_6 = "glm-4.6"
    DEEPSEEK_V3_2 = "deepseek-v3.2"


class Speed(str, Enum):
    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"


class Modality(str, Enum):
    TEXT = "text"
    VISION = "vision"
    CODE = "code"


@dataclass(frozen=True)
class ModelCapability:
    """Declared metadata for a single model."""

    model: AIModel
    name: str
    description: str
    strengths: Tuple[str, ...]
    use_cases: Tuple[str, ...]
    context_window: int
    speed: Speed
    modalities: FrozenSet[Modality]


class AgentType(str, Enum):
    """Domain categories an agent belongs to."""

    META_ORCHESTRATION = "meta-orchestration"
    DEVELOPMENT = "development"
    DOMAIN_SPECIFIC = "domain-specific"
    QUALITY_SECURITY = "quality-security"
    DATA_AI = "data-ai"
    DEVOPS_INFRASTRUCTURE = "devops-infrastructure"
    BUSINESS_PRODUCT = "business-product"
    USER_EXPERIENCE = "user-experience"


class AgentStatus(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    BUSY = "busy"
    ERROR = "error"
    OFFLINE = "offline"


UNAVAILABLE_STATUSES = frozenset({AgentStatus.OFFLINE, AgentStatus.ERROR})


@dataclass(slots=True)
class AgentPerformance:
    """Running statistics kept for every agent."""

    tasks_completed: int = 0
    success_rate: float = 100.0
    average_response_time: float = 0.0
    last_active: datetime = field(default_factory=utcnow)
    rating: float = 5.0
    tasks_failed: int = 0


@dataclass(slots=True)
class AgentRecord:
    """Descriptor held by the agent registry for each known agent."""

    id: str
    name: str
    type: AgentType
    description: str
    capabilities: Set[str] = field(default_factory=set)
    status: AgentStatus = AgentStatus.IDLE
    current_task: Optional[str] = None
    performance: AgentPerformance = field(default_factory=AgentPerformance)
    tools: Set[str] = field(default_factory=set)
    model: Optional[AIModel] = None

    @property
    def is_available(self) -> bool:
        return self.status not in UNAVAILABLE_STATUSES


class ToolType(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"
    EVOLVED = "evolved"
    USER_GENERATED = "user-generated"


class ParameterType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(slots=True)
class ToolParameter:
    name: str
    type: ParameterType
    required: bool = False
    description: str = ""
    default_value: Any = None


@dataclass(slots=True)
class ToolPerformance:
    usage_count: int = 0
    success_rate: float = 100.0
    average_execution_time: float = 0.0
    last_used: datetime = field(default_factory=utcnow)
    rating: float = 5.0


@dataclass(slots=True)
class ToolRecord:
    """A tool known to the tool registry. Only evolution writes `performance`."""

    id: str
    name: str
    description: str
    type: ToolType
    category: str
    is_custom: bool = False
    is_dynamic: bool = False
    parameters: List[ToolParameter] = field(default_factory=list)
    performance: ToolPerformance = field(default_factory=ToolPerformance)
    created_by: Optional[str] = None


@dataclass(slots=True)
class ToolUsage:
    """Outcome of one tool invocation fed into tool evolution."""

    success: Optional[bool] = None
    execution_time: Optional[float] = None


class WorkflowStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class StepStatus(str, Enum):
    WAITING = "waiting"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


TERMINAL_STEP_STATUSES = frozenset({StepStatus.COMPLETED, StepStatus.FAILED, StepStatus.SKIPPED})


@dataclass(slots=True)
class WorkflowStep:
    """One unit of work bound to a single agent."""

    id: str
    name: str
    agent_id: str
    tool_id: Optional[str] = None
    status: StepStatus = StepStatus.WAITING
    input: Any = None
    output: Any = None
    error: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    dependencies: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Workflow:
    id: str
    name: str
    description: str
    steps: List[WorkflowStep] = field(default_factory=list)
    status: WorkflowStatus = WorkflowStatus.PENDING
    progress: int = 0
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    error: Optional[str] = None


@dataclass(slots=True)
class StepOutcome:
    """Result handed back by the generation backend for one step."""

    success: bool
    output: Dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0
    error: Optional[str] = None
