"""Model-backed agents for the puzzle generation side."""

from .base import BaseAgent, LLMResponse
from .judge import PuzzleJudgeAgent

__all__ = ["BaseAgent", "LLMResponse", "PuzzleJudgeAgent"]
