"""LLM client pool for shared model access with concurrency control."""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Union

from openai import AsyncOpenAI

from workbench.config import LLMConfig
from workbench.core.models import AIModel


class LLMPool:
    """Manages one lazily created client per routed model, with a concurrency cap."""

    def __init__(self) -> None:
        self._configs: Dict[AIModel, LLMConfig] = {}
        self._clients: Dict[AIModel, Any] = {}
        self._semaphores: Dict[AIModel, asyncio.Semaphore] = {}

    def register(self, model: Union[AIModel, str], config: LLMConfig) -> None:
        """Register the endpoint serving ``model``."""
        model = AIModel(model)
        self._configs[model] = config
        self._semaphores[model] = asyncio.Semaphore(config.max_concurrent)
        self._clients.pop(model, None)

    def register_all(self, config: LLMConfig) -> None:
        for model in AIModel:
            self.register(model, config)

    def is_registered(self, model: Union[AIModel, str]) -> bool:
        try:
            return AIModel(model) in self._configs
        except ValueError:
            return False

    def config_for(self, model: Union[AIModel, str]) -> LLMConfig:
        return self._configs[AIModel(model)]

    @asynccontextmanager
    async def acquire(self, model: Union[AIModel, str]) -> AsyncIterator[Any]:
        """Acquire access to a model client with concurrency control."""
        if not self.is_registered(model):
            raise KeyError(f"Model '{model}' not registered in LLM pool")
        model = AIModel(model)

        async with self._semaphores[model]:
            # Lazy initialization on first use
            if model not in self._clients:
                self._clients[model] = self._create_client(self._configs[model])
            yield self._clients[model]

    def _create_client(self, config: LLMConfig) -> Any:
        return AsyncOpenAI(api_key=config.api_key, base_url=config.base_url)
