"""Registry of static and dynamically synthesized tools."""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from workbench.core.models import (
    ParameterType,
    ToolParameter,
    ToolPerformance,
    ToolRecord,
    ToolType,
    ToolUsage,
    utcnow,
)

logger = logging.getLogger("workbench.tools")


def _coerce_parameter(parameter: Union[ToolParameter, Mapping[str, Any]]) -> ToolParameter:
    if isinstance(parameter, ToolParameter):
        return parameter
    return ToolParameter(
        name=parameter["name"],
        type=ParameterType(parameter["type"]),
        required=bool(parameter.get("required", False)),
        description=parameter.get("description", ""),
        default_value=parameter.get("default_value"),
    )


class ToolRegistry:
    """Owns every tool record; tool performance changes only through ``evolve``."""

    def __init__(self) -> None:
        self._tools: Dict[str, ToolRecord] = {}

    def __len__(self) -> int:
        return len(self._tools)

    def register(
        self,
        *,
        name: str,
        description: str,
        type: Union[ToolType, str] = ToolType.STATIC,
        category: str = "general",
        is_custom: bool = False,
        is_dynamic: bool = False,
        parameters: Optional[Iterable[Union[ToolParameter, Mapping[str, Any]]]] = None,
        created_by: Optional[str] = None,
    ) -> str:
        tool = ToolRecord(
            id=f"tool-{uuid.uuid4().hex[:12]}",
            name=name,
            description=description,
            type=ToolType(type),
            category=category,
            is_custom=is_custom,
            is_dynamic=is_dynamic,
            parameters=[_coerce_parameter(p) for p in parameters or ()],
            performance=ToolPerformance(),
            created_by=created_by,
        )
        self._tools[tool.id] = tool
        logger.info("Registered tool: %s", tool.name)
        return tool.id

    async def create_dynamic_tool(self, description: str, requirements: Any = None) -> ToolRecord:
        """Register a placeholder tool for ``description``.

        Synthesizing real parameters from ``requirements`` belongs to the
        generation backend; the registry only tracks the record.
        """
        tool_id = self.register(
            name=f"Dynamic Tool: {description}",
            description=description,
            type=ToolType.DYNAMIC,
            category="generated",
            is_custom=True,
            is_dynamic=True,
            parameters=[],
            created_by="system",
        )
        logger.info("Created dynamic tool: %s", description)
        return self._tools[tool_id]

    def get(self, tool_id: str) -> Optional[ToolRecord]:
        return self._tools.get(tool_id)

    def list_tools(self) -> List[ToolRecord]:
        return list(self._tools.values())

    def evolve(self, tool_id: str, usage: Union[ToolUsage, Mapping[str, Any]]) -> None:
        """Fold one usage outcome into the tool's statistics.

        Execution time uses the two-point blend ``(old + new) / 2``, which
        weights recent runs more heavily than a true mean. The success rate is
        rebuilt from the implied success count of the previous rate. Unknown
        tool ids are ignored.
        """
        tool = self._tools.get(tool_id)
        if tool is None:
            logger.debug("Ignoring evolution of unknown tool %s", tool_id)
            return
        if not isinstance(usage, ToolUsage):
            usage = ToolUsage(
                success=usage.get("success"),
                execution_time=usage.get("execution_time"),
            )

        perf = tool.performance
        perf.usage_count += 1
        perf.last_used = utcnow()

        if usage.execution_time is not None:
            perf.average_execution_time = (perf.average_execution_time + usage.execution_time) / 2

        if usage.success is not None:
            total = perf.usage_count
            if total == 1:
                rate = 100.0 if usage.success else 0.0
            else:
                previous_successes = perf.success_rate * (total - 1) / 100
                rate = (previous_successes + (1 if usage.success else 0)) / total * 100
            perf.success_rate = min(100.0, max(0.0, rate))

        logger.info("Evolved tool: %s (success rate: %.1f%%)", tool.name, perf.success_rate)
