"""Agent templates the orchestrator can instantiate by identifier."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Tuple

from workbench.core.models import AgentType, AIModel


class AgentTemplateId(str, Enum):
    AGENT_ORGANIZER = "agent-organizer"
    CONTEXT_MANAGER = "context-manager"
    PERFORMANCE_MONITOR = "performance-monitor"
    ERROR_COORDINATOR = "error-coordinator"
    NEXTJS_DEVELOPER = "nextjs-developer"
    REACT_SPECIALIST = "react-specialist"
    UI_DESIGNER = "ui-designer"
    MOBILE_DEVELOPER = "mobile-developer"
    API_ARCHITECT = "api-architect"
    REQUIREMENT_ANALYST = "requirement-analyst"


@dataclass(frozen=True)
class AgentTemplate:
    """Fixed definition an agent record is stamped from."""

    name: str
    description: str
    agent_type: AgentType
    capabilities: FrozenSet[str]
    tools: FrozenSet[str]
    model: AIModel


AGENT_TEMPLATES: Dict[AgentTemplateId, AgentTemplate] = {
    AgentTemplateId.AGENT_ORGANIZER: AgentTemplate(
        name="Agent Organizer",
        description="Multi-agent coordinator and team assembly specialist",
        agent_type=AgentType.META_ORCHESTRATION,
        capabilities=frozenset(
            {"task-decomposition", "agent-selection", "workflow-design", "team-optimization"}
        ),
        tools=frozenset({"context-query", "agent-capability-mapping", "workflow-orchestration"}),
        model=AIModel.KIMI_K2,
    ),
    AgentTemplateId.CONTEXT_MANAGER: AgentTemplate(
        name="Context Manager",
        description="Information storage, retrieval, and synchronization expert",
        agent_type=AgentType.META_ORCHESTRATION,
        capabilities=frozenset(
            {"state-management", "data-synchronization", "context-optimization", "retrieval"}
        ),
        tools=frozenset({"database-query", "state-sync", "context-retrieval", "data-lifecycle"}),
        model=AIModel.KIMI_K2,
    ),
    AgentTemplateId.PERFORMANCE_MONITOR: AgentTemplate(
        name="Performance Monitor",
        description="System-wide metrics collection and optimization specialist",
        agent_type=AgentType.META_ORCHESTRATION,
        capabilities=frozenset(
            {"metrics-collection", "anomaly-detection", "performance-analysis", "optimization"}
        ),
        tools=frozenset({"metrics-aggregation", "alert-management", "bottleneck-analysis"}),
        model=AIModel.DEEPSEEK_V3_2,
    ),
    AgentTemplateId.ERROR_COORDINATOR: AgentTemplate(
        name="Error Coordinator",
        description="Distributed error handling and recovery specialist",
        agent_type=AgentType.META_ORCHESTRATION,
        capabilities=frozenset(
            {"error-correlation", "failure-recovery", "cascade-prevention", "system-resilience"}
        ),
        tools=frozenset({"error-aggregation", "circuit-breaker", "recovery-orchestration"}),
        model=AIModel.DEEPSEEK_V3_2,
    ),
    AgentTemplateId.NEXTJS_DEVELOPER: AgentTemplate(
        name="Next.js Developer",
        description="Next.js 14+ full-stack development specialist",
        agent_type=AgentType.DEVELOPMENT,
        capabilities=frozenset(
            {"component-creation", "api-development", "routing", "optimization", "deployment"}
        ),
        tools=frozenset({"code-generation", "file-manipulation", "build-optimization"}),
        model=AIModel.QWEN3_CODER_PLUS,
    ),
    AgentTemplateId.REACT_SPECIALIST: AgentTemplate(
        name="React Specialist",
        description="React 18+ modern patterns and state management expert",
        agent_type=AgentType.DEVELOPMENT,
        capabilities=frozenset(
            {"component-architecture", "state-management", "hooks-optimization", "performance"}
        ),
        tools=frozenset({"component-generation", "state-optimization", "performance-analysis"}),
        model=AIModel.QWEN3_CODER_PLUS,
    ),
    AgentTemplateId.UI_DESIGNER: AgentTemplate(
        name="UI Designer",
        description="Modern UI/UX design and component creation specialist",
        agent_type=AgentType.DEVELOPMENT,
        capabilities=frozenset(
            {"design-systems", "component-design", "accessibility", "responsive-design"}
        ),
        tools=frozenset({"design-generation", "component-styling", "accessibility-check"}),
        model=AIModel.QWEN3_VL_PLUS,
    ),
    AgentTemplateId.MOBILE_DEVELOPER: AgentTemplate(
        name="Mobile Developer",
        description="Cross-platform mobile application specialist",
        agent_type=AgentType.DEVELOPMENT,
        capabilities=frozenset(
            {"mobile-ui", "native-features", "app-optimization", "store-deployment"}
        ),
        tools=frozenset({"mobile-generation", "native-integration", "performance-optimization"}),
        model=AIModel.QWEN3_CODER_PLUS,
    ),
    AgentTemplateId.API_ARCHITECT: AgentTemplate(
        name="API Architect",
        description="RESTful API and backend service design expert",
        agent_type=AgentType.DOMAIN_SPECIFIC,
        capabilities=frozenset(
            {"api-design", "database-integration", "authentication", "rate-limiting"}
        ),
        tools=frozenset({"api-generation", "schema-validation", "auth-implementation"}),
        model=AIModel.QWEN3_CODER_PLUS,
    ),
    AgentTemplateId.REQUIREMENT_ANALYST: AgentTemplate(
        name="Requirement Analyst",
        description="User requirement gathering and analysis specialist",
        agent_type=AgentType.DOMAIN_SPECIFIC,
        capabilities=frozenset(
            {"requirement-extraction", "user-story-creation", "scope-definition"}
        ),
        tools=frozenset({"conversation-analysis", "requirement-structuring", "scope-validation"}),
        model=AIModel.GLM_4_6,
    ),
}

# Populated by Orchestrator.initialize(), in this order.
STARTER_TEMPLATES: Tuple[AgentTemplateId, ...] = (
    AgentTemplateId.AGENT_ORGANIZER,
    AgentTemplateId.CONTEXT_MANAGER,
    AgentTemplateId.NEXTJS_DEVELOPER,
    AgentTemplateId.REACT_SPECIALIST,
    AgentTemplateId.UI_DESIGNER,
    AgentTemplateId.REQUIREMENT_ANALYST,
)
