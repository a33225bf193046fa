"""
Hosted chat agent for OpenAI-compatible endpoints (GitHub Models by default).
Bearer-token authenticated through the openai SDK.
"""

import time
import openai

from .agent import BaseChatAgent, AgentResponse
from ..core.errors import ServiceUnavailable
from ..util.logging import logger


class OpenAIAgent(BaseChatAgent):
    """Agent implementation backed by the chat completions API."""

    def __init__(self, client: "openai.OpenAI", model_name: str = "gpt-4o-mini", agent_id: str = "openai"):
        super().__init__(agent_id, model_name)
        self.client = client

    def respond(self, prompt: str) -> AgentResponse:
        start_time = time.time()
        try:
            completion = self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APIConnectionError, openai.InternalServerError) as e:
            logger.log_client_call("openai", "chat", start_time, time.time(), "failed",
                                   {"model": self.model_name, "error": str(e)})
            raise ServiceUnavailable("OpenAI chat", str(e)) from e
        end_time = time.time()

        response_content = completion.choices[0].message.content or ""

        logger.log_client_call("openai", "chat", start_time, end_time, details={
            "model": self.model_name,
            "prompt": prompt,
            "response_length": len(response_content)
        })

        return AgentResponse(
            content=response_content,
            model_used=completion.model or self.model_name,
            processing_time_ms=int((end_time - start_time) * 1000)
        )
