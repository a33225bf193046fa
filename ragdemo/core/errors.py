"""
Error taxonomy for the RAG sample runs.
Library code raises these; only the console entry point catches and reports them.
"""

from typing import Optional


class RagDemoError(Exception):
    """Base class for all errors raised by ragdemo."""


class ConfigurationError(RagDemoError):
    """A required setting is missing or empty. Fatal at startup."""

    def __init__(self, setting: str, message: Optional[str] = None):
        self.setting = setting
        super().__init__(message or f"Missing configuration: {setting}.")


class ServiceUnavailable(RagDemoError):
    """The embedding or chat backend could not be reached."""

    def __init__(self, service: str, message: str, stage: Optional[str] = None):
        self.service = service
        self.stage = stage
        super().__init__(f"{service} unavailable: {message}")


class InvariantViolation(RagDemoError):
    """A programming error, e.g. mixing vectors of different dimensions."""
