"""
LLM Provider - Abstract Interface

Every model call goes through this interface. Swap providers by
changing RECLAIM_LLM_PROVIDER in env.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import Optional

_FENCE = re.compile(r"```(?:json)?\n?|\n?```")


class LLMProvider(ABC):
    """Abstract base for LLM providers."""

    name: str = "llm"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: float = 0.7,
        json_mode: bool = False,
    ) -> str:
        """Generate a text response from the LLM."""
        ...

    async def generate_json(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: float = 0.1,
    ) -> dict:
        """Generate and parse a JSON object response."""
        text = await self.generate(
            prompt=prompt,
            system_instruction=system_instruction,
            temperature=temperature,
            json_mode=True,
        )
        # Models sometimes wrap JSON in ```json fences
        cleaned = _FENCE.sub("", text or "").strip()
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"LLM returned invalid JSON: {e}. Raw response: {(text or '')[:300]}"
            ) from e
        if not isinstance(parsed, dict):
            raise ValueError(f"LLM returned {type(parsed).__name__}, expected a JSON object")
        return parsed
