"""
Ollama chat agent.
Talks to a local Ollama server; no authentication.
"""

import time

import httpx
import ollama

from .agent import BaseChatAgent, AgentResponse
from ..core.errors import ServiceUnavailable
from ..util.logging import logger


class OllamaAgent(BaseChatAgent):
    """
    Agent implementation that uses a local Ollama model.
    """

    def __init__(self, client: "ollama.Client", model_name: str, agent_id: str = "ollama"):
        super().__init__(agent_id, model_name)
        self.client = client

    def respond(self, prompt: str) -> AgentResponse:
        """
        Send the prompt as a single user message via the Ollama chat API.

        Args:
            prompt: The assembled prompt

        Returns:
            AgentResponse with Ollama model output
        """
        messages = [{'role': 'user', 'content': prompt}]

        start_time = time.time()
        try:
            response = self.client.chat(model=self.model_name, messages=messages)
        except (ConnectionError, httpx.HTTPError) as e:
            logger.log_client_call("ollama", "chat", start_time, time.time(), "failed",
                                   {"model": self.model_name, "error": str(e)})
            raise ServiceUnavailable("Ollama chat", str(e)) from e
        except ollama.ResponseError as e:
            # Handle Ollama-specific errors
            logger.log_client_call("ollama", "chat", start_time, time.time(), "failed",
                                   {"model": self.model_name, "error": e.error})
            if e.status_code >= 500:
                raise ServiceUnavailable("Ollama chat", e.error) from e
            raise
        end_time = time.time()

        response_content = response['message']['content'] or ''
        processing_time = int((end_time - start_time) * 1000)

        logger.log_client_call("ollama", "chat", start_time, end_time, details={
            "model": self.model_name,
            "prompt": prompt,
            "response_length": len(response_content)
        })

        return AgentResponse(
            content=response_content,
            model_used=self.model_name,
            processing_time_ms=processing_time
        )

