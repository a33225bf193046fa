"""
Chat agents: hosted (OpenAI-compatible) and local (Ollama).
"""

from .agent import BaseChatAgent, AgentResponse
from .openai_agent import OpenAIAgent
from .ollama_agent import OllamaAgent

__all__ = [
    'BaseChatAgent',
    'AgentResponse',
    'OpenAIAgent',
    'OllamaAgent'
]
