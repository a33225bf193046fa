"""
Base chat agent interface.
A chat agent turns one assembled prompt into one completion: no streaming, no tools.
"""

from dataclasses import dataclass
from abc import ABC, abstractmethod


@dataclass
class AgentResponse:
    """Response format from any chat agent."""
    content: str
    model_used: str
    processing_time_ms: int = 0


class BaseChatAgent(ABC):
    """
    Abstract base class for chat agents.
    Subclasses implement respond(); generate() returns just the text.
    """

    def __init__(self, agent_id: str, model_name: str):
        self.agent_id = agent_id
        self.model_name = model_name

    @abstractmethod
    def respond(self, prompt: str) -> AgentResponse:
        """
        Send a single user prompt to the model.

        Args:
            prompt: The fully assembled prompt

        Returns:
            AgentResponse: The model's completion and call timing

        Raises:
            ServiceUnavailable: if the backend cannot be reached
        """
        pass

    def generate(self, prompt: str) -> str:
        """Single-shot completion returning only the generated text."""
        return self.respond(prompt).content
