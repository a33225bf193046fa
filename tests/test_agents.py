"""
Chat agent tests - hosted and local agents with mocked SDK clients.
"""

import pytest
import httpx
import ollama
import openai
from unittest.mock import MagicMock
from ragdemo.agents import BaseChatAgent, AgentResponse, OpenAIAgent, OllamaAgent
from ragdemo.core.errors import ServiceUnavailable

CHAT_URL = "https://models.inference.ai.azure.com/chat/completions"


def make_completion(content="A story\n\nFacts: [0, 3]"):
    completion = MagicMock()
    completion.model = "gpt-4o-mini"
    completion.choices = [MagicMock(finish_reason="stop")]
    completion.choices[0].message.content = content
    return completion


def make_status_error(error_class, status_code, message):
    response = httpx.Response(status_code, request=httpx.Request("POST", CHAT_URL))
    return error_class(message, response=response, body=None)


class TestOpenAIAgent:
    """Hosted chat agent."""

    def test_generate_sends_single_user_message(self):
        """Test that the prompt is sent as one user message and the text returned."""
        client = MagicMock()
        client.chat.completions.create.return_value = make_completion()
        agent = OpenAIAgent(client, model_name="gpt-4o-mini")

        answer = agent.generate("the prompt")

        assert answer == "A story\n\nFacts: [0, 3]"
        client.chat.completions.create.assert_called_once_with(
            model="gpt-4o-mini",
            messages=[{"role": "user", "content": "the prompt"}],
        )

    def test_respond_reports_model(self):
        """Test the structured response."""
        client = MagicMock()
        client.chat.completions.create.return_value = make_completion()

        response = OpenAIAgent(client).respond("the prompt")

        assert isinstance(response, AgentResponse)
        assert response.content == "A story\n\nFacts: [0, 3]"
        assert response.model_used == "gpt-4o-mini"
        assert response.processing_time_ms >= 0

    def test_empty_content_becomes_empty_string(self):
        """Test that a null completion body yields an empty string."""
        client = MagicMock()
        client.chat.completions.create.return_value = make_completion(content=None)

        assert OpenAIAgent(client).generate("p") == ""

    def test_timeout_maps_to_service_unavailable(self):
        """Test that a request timeout raises ServiceUnavailable."""
        client = MagicMock()
        client.chat.completions.create.side_effect = openai.APITimeoutError(request=httpx.Request("POST", CHAT_URL))

        with pytest.raises(ServiceUnavailable) as excinfo:
            OpenAIAgent(client).generate("p")
        assert excinfo.value.service == "OpenAI chat"

    def test_server_error_maps_to_service_unavailable(self):
        """Test that a 5xx response raises ServiceUnavailable."""
        client = MagicMock()
        error = make_status_error(openai.InternalServerError, 503, "Service Unavailable")
        client.chat.completions.create.side_effect = error

        with pytest.raises(ServiceUnavailable) as excinfo:
            OpenAIAgent(client).generate("p")
        assert excinfo.value.__cause__ is error

    def test_authentication_error_propagates_unchanged(self):
        """Test that a 401 is re-raised as the SDK error, not masked."""
        client = MagicMock()
        error = make_status_error(openai.AuthenticationError, 401, "Bad credentials")
        client.chat.completions.create.side_effect = error

        with pytest.raises(openai.AuthenticationError) as excinfo:
            OpenAIAgent(client).generate("p")
        assert excinfo.value is error


class TestOllamaAgent:
    """Local chat agent."""

    def test_generate_returns_message_content(self):
        """Test that the Ollama chat response content is returned."""
        client = MagicMock()
        client.chat.return_value = {"message": {"role": "assistant", "content": "Drupert Story"}}
        agent = OllamaAgent(client, model_name="llama3.2:1b")

        assert isinstance(agent, BaseChatAgent)
        assert agent.generate("the prompt") == "Drupert Story"
        client.chat.assert_called_once_with(
            model="llama3.2:1b",
            messages=[{"role": "user", "content": "the prompt"}],
        )

    def test_unreachable_server_maps_to_service_unavailable(self):
        """Test that a refused connection raises ServiceUnavailable."""
        client = MagicMock()
        client.chat.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(ServiceUnavailable):
            OllamaAgent(client, model_name="llama3.2:1b").generate("p")

    def test_model_error_propagates(self):
        """Test that a 4xx Ollama error is not masked."""
        client = MagicMock()
        client.chat.side_effect = ollama.ResponseError("model not found", 404)

        with pytest.raises(ollama.ResponseError):
            OllamaAgent(client, model_name="llama3.2:1b").generate("p")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
