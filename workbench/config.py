"""Configuration management for the workbench orchestrator."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LLMConfig:
    """OpenAI-compatible endpoint serving the routed models."""

    api_key: str
    base_url: Optional[str] = None
    max_concurrent: int = 50
    temperature: float = 0.7


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""

    llm: Optional[LLMConfig] = None
    environment: str = "development"
    log_level: str = "INFO"
    executor: str = "simulated"
    step_delay: float = 1.0

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables."""
        api_key = os.getenv("WORKBENCH_LLM_API_KEY")

        llm_config = None
        if api_key:
            llm_config = LLMConfig(
                api_key=api_key,
                base_url=os.getenv("WORKBENCH_LLM_BASE_URL") or None,
                max_concurrent=int(os.getenv("WORKBENCH_LLM_MAX_CONCURRENT", "50")),
                temperature=float(os.getenv("WORKBENCH_LLM_TEMPERATURE", "0.7")),
            )

        return cls(
            llm=llm_config,
            environment=os.getenv("WORKBENCH_ENVIRONMENT", "development"),
            log_level=os.getenv("WORKBENCH_LOG_LEVEL", "INFO").upper(),
            executor=os.getenv("WORKBENCH_EXECUTOR", "simulated").lower(),
            step_delay=float(os.getenv("WORKBENCH_STEP_DELAY", "1.0")),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Global config instance
config = Config.from_env()
