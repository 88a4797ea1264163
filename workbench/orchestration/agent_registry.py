"""In-memory registry of agent records and the agent selection logic."""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from workbench.agents.templates import (
    AGENT_TEMPLATES,
    STARTER_TEMPLATES,
    AgentTemplate,
    AgentTemplateId,
)
from workbench.core.errors import AgentNotFoundError
from workbench.core.models import (
    AgentPerformance,
    AgentRecord,
    AgentStatus,
    AgentType,
    AIModel,
    StepOutcome,
    utcnow,
)
from workbench.routing.router import select_model_for_agent_type

logger = logging.getLogger("workbench.agents")

CAPABILITY_MATCH_BONUS = 50.0
SUCCESS_RATE_WEIGHT = 0.3
SPEED_BONUS_WEIGHT = 5.0
IDLE_BONUS = 20.0


def score_agent(agent: AgentRecord, task_type: str) -> float:
    """Score ``agent`` for ``task_type``; higher is better."""
    perf = agent.performance
    score = 0.0
    if task_type in agent.capabilities:
        score += CAPABILITY_MATCH_BONUS
    score += perf.success_rate * SUCCESS_RATE_WEIGHT
    # Faster agents earn up to 50 points; nothing below zero past a 10s average.
    score += max(0.0, 10 - perf.average_response_time / 1000) * SPEED_BONUS_WEIGHT
    if agent.status is AgentStatus.IDLE:
        score += IDLE_BONUS
    return score


def _record_from_template(agent_id: str, template: AgentTemplate) -> AgentRecord:
    return AgentRecord(
        id=agent_id,
        name=template.name,
        type=template.agent_type,
        description=template.description,
        capabilities=set(template.capabilities),
        tools=set(template.tools),
        model=template.model,
    )


class AgentRegistry:
    """Agent records keyed by id, in insertion order."""

    def __init__(self) -> None:
        self._agents: Dict[str, AgentRecord] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents

    def initialize(self) -> None:
        """Populate the starter agents once; later calls do nothing.

        A starter whose id is already taken, e.g. by an earlier
        ``create_from_template``, keeps the existing record.
        """
        if self._initialized:
            return
        logger.info("Initializing agent registry")
        added = 0
        for template_id in STARTER_TEMPLATES:
            if template_id.value in self._agents:
                continue
            self._agents[template_id.value] = _record_from_template(
                template_id.value, AGENT_TEMPLATES[template_id]
            )
            added += 1
        self._initialized = True
        logger.info("Initialized %d agents", added)

    def create_agent(
        self,
        agent_type: Union[AgentType, str],
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        capabilities: Optional[Iterable[str]] = None,
        tools: Optional[Iterable[str]] = None,
        model: Optional[Union[AIModel, str]] = None,
    ) -> AgentRecord:
        agent_type = AgentType(agent_type)
        agent = AgentRecord(
            id=f"{agent_type.value}-{uuid.uuid4().hex[:12]}",
            name=name or f"{agent_type.value} Agent",
            type=agent_type,
            description=description or f"Specialized {agent_type.value} agent",
            capabilities=set(capabilities or ()),
            tools=set(tools or ()),
            model=AIModel(model) if model else select_model_for_agent_type(agent_type),
        )
        self._agents[agent.id] = agent
        logger.info("Created agent %s (%s)", agent.name, agent.type.value)
        return agent

    def create_from_template(self, template_id: Union[AgentTemplateId, str]) -> AgentRecord:
        template_id = AgentTemplateId(template_id)
        agent_id = template_id.value
        if agent_id in self._agents:
            agent_id = f"{agent_id}-{uuid.uuid4().hex[:12]}"
        agent = _record_from_template(agent_id, AGENT_TEMPLATES[template_id])
        self._agents[agent_id] = agent
        logger.info("Created agent %s from template %s", agent_id, template_id.value)
        return agent

    def get(self, agent_id: str) -> Optional[AgentRecord]:
        return self._agents.get(agent_id)

    def require(self, agent_id: str) -> AgentRecord:
        agent = self._agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)
        return agent

    def list_agents(self) -> List[AgentRecord]:
        return list(self._agents.values())

    def update_status(
        self,
        agent_id: str,
        status: Union[AgentStatus, str],
        current_task: Optional[str] = None,
    ) -> None:
        """Best-effort status update; unknown agents are ignored."""
        agent = self._agents.get(agent_id)
        if agent is None:
            logger.debug("Ignoring status update for unknown agent %s", agent_id)
            return
        agent.status = AgentStatus(status)
        agent.current_task = current_task
        agent.performance.last_active = utcnow()

    def mark_active(self, agent_id: str, task: str) -> AgentRecord:
        agent = self.require(agent_id)
        agent.status = AgentStatus.ACTIVE
        agent.current_task = task
        agent.performance.last_active = utcnow()
        return agent

    def record_step_result(self, agent_id: str, outcome: StepOutcome) -> None:
        """Fold a finished step into the agent's statistics and release it."""
        agent = self._agents.get(agent_id)
        if agent is None:
            return
        perf: AgentPerformance = agent.performance
        if outcome.success:
            perf.tasks_completed += 1
        else:
            perf.tasks_failed += 1
        attempts = perf.tasks_completed + perf.tasks_failed
        perf.success_rate = min(100.0, max(0.0, perf.tasks_completed / attempts * 100))
        perf.average_response_time = (perf.average_response_time + outcome.duration_ms) / 2
        perf.last_active = utcnow()
        agent.status = AgentStatus.IDLE
        agent.current_task = None

    def list_available(
        self,
        required_capabilities: Optional[Union[str, Iterable[str]]] = None,
    ) -> List[AgentRecord]:
        """Agents not offline or in error, optionally sharing any required capability."""
        if isinstance(required_capabilities, str):
            required_capabilities = [required_capabilities]
        wanted = set(required_capabilities or ())
        return [
            agent
            for agent in self._agents.values()
            if agent.is_available and (not wanted or agent.capabilities & wanted)
        ]

    def select_best_agent(
        self,
        task_type: str,
        requirements: Optional[Mapping[str, Any]] = None,
    ) -> Optional[AgentRecord]:
        capabilities = (requirements or {}).get("capabilities")
        candidates = self.list_available(capabilities)
        if not candidates:
            return None
        # max() keeps the first of equal scores, i.e. registry order.
        return max(candidates, key=lambda agent: score_agent(agent, task_type))
