"""Base agent class with common LLM functionality."""

import hashlib
import json
import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import anthropic
import openai
from pydantic import BaseModel

from ..config import settings
from ..database.cache import CacheManager
from ..exceptions import ModelCallError
from ..models.judgments import LLMUsage

logger = logging.getLogger(__name__)


class LLMResponse(BaseModel):
    """Raw model output plus usage metadata."""

    text: str
    usage: LLMUsage


class BaseAgent(ABC):
    """Narrow adapter between the core and a generative model provider.

    Clients are only built when an API key is configured, and can be injected
    directly.
    """

    def __init__(self, model_name: str = None, cache_manager: CacheManager = None,
                 openai_client: Any = None, anthropic_client: Any = None):
        """Initialize the base agent."""
        self.model_name = model_name or settings.judge_model
        self.cache_manager = cache_manager

        self.openai_client = openai_client
        if self.openai_client is None and settings.openai_api_key:
            self.openai_client = openai.OpenAI(api_key=settings.openai_api_key)

        self.anthropic_client = anthropic_client
        if self.anthropic_client is None and settings.anthropic_api_key:
            self.anthropic_client = anthropic.Anthropic(api_key=settings.anthropic_api_key)

    @abstractmethod
    def process(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Process input data and return results."""
        pass

    def call_llm(self, prompt: str, system: Optional[str] = None, model: str = None,
                 max_tokens: int = 2048, temperature: float = 0.7) -> LLMResponse:
        """Call the appropriate LLM based on model name."""
        model = model or self.model_name

        try:
            if model.startswith('claude-'):
                return self._call_anthropic(prompt, system, model, max_tokens, temperature)
            return self._call_openai(prompt, system, model, max_tokens, temperature)

        except (openai.OpenAIError, anthropic.AnthropicError) as e:
            logger.error(f"Error calling LLM {model}: {e}")
            raise ModelCallError(f"LLM call to {model} failed: {e}") from e

    def _call_openai(self, prompt: str, system: Optional[str], model: str, max_tokens: int,
                     temperature: float) -> LLMResponse:
        """Call OpenAI API."""
        if not self.openai_client:
            raise ModelCallError("OpenAI client not initialized")

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        response = self.openai_client.chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            response_format={"type": "json_object"}
        )
        usage = response.usage
        return LLMResponse(
            text=response.choices[0].message.content,
            usage=LLMUsage(
                model=response.model or model,
                request_id=response.id,
                prompt_tokens=usage.prompt_tokens if usage else 0,
                completion_tokens=usage.completion_tokens if usage else 0,
                total_tokens=usage.total_tokens if usage else 0
            )
        )

    def _call_anthropic(self, prompt: str, system: Optional[str], model: str, max_tokens: int,
                        temperature: float) -> LLMResponse:
        """Call Anthropic API."""
        if not self.anthropic_client:
            raise ModelCallError("Anthropic client not initialized")

        kwargs = {}
        if system:
            kwargs["system"] = system

        response = self.anthropic_client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
            **kwargs
        )
        usage = response.usage
        return LLMResponse(
            text=response.content[0].text,
            usage=LLMUsage(
                model=response.model or model,
                request_id=response.id,
                prompt_tokens=usage.input_tokens,
                completion_tokens=usage.output_tokens,
                total_tokens=usage.input_tokens + usage.output_tokens
            )
        )

    def call_llm_with_cache(self, prompt: str, system: Optional[str] = None, cache_key: str = None,
                            **kwargs) -> LLMResponse:
        """Call LLM with caching support."""
        if self.cache_manager is None:
            return self.call_llm(prompt, system=system, **kwargs)

        if not cache_key:
            prompt_hash = hashlib.md5(f"{system or ''}\n{prompt}".encode()).hexdigest()
            cache_key = f"{self.model_name}:{prompt_hash}"

        cached = self.cache_manager.get_cached_llm_response(cache_key)
        if cached:
            logger.debug(f"Cache hit for key: {cache_key}")
            response = LLMResponse.model_validate(cached)
            response.usage.cache_hit = True
            return response

        response = self.call_llm(prompt, system=system, **kwargs)
        self.cache_manager.cache_llm_response(cache_key, response.model_dump())

        return response

    def get_agent_metadata(self) -> Dict[str, Any]:
        """Get metadata about this agent."""
        return {
            "agent_name": self.__class__.__name__,
            "model_name": self.model_name,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    def validate_input(self, input_data: Dict[str, Any], required_keys: List[str]) -> bool:
        """Validate that input data contains required keys."""
        missing_keys = [key for key in required_keys if key not in input_data]
        if missing_keys:
            raise ValueError(f"Missing required keys: {missing_keys}")
        return True

    def parse_json_response(self, response: str) -> Dict[str, Any]:
        """Parse JSON response from LLM, handling common formatting issues."""
        response = response.strip()

        # Remove markdown code blocks if present
        if response.startswith('```'):
            lines = response.split('\n')
            start_idx = next(i for i, line in enumerate(lines) if line.startswith('```'))
            end_idx = next(i for i in range(len(lines) - 1, -1, -1) if lines[i].startswith('```'))
            response = '\n'.join(lines[start_idx + 1:end_idx])

        json_match = re.search(r'\{.*\}', response, re.DOTALL)
        if json_match:
            response = json_match.group(0)

        try:
            return json.loads(response)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON response: {e}")
            logger.error(f"Response was: {response}")
            raise ValueError(f"Invalid JSON response: {e}")
