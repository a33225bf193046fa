"""
Core pipeline: configuration, client factory, ingestion, retrieval, prompt assembly.
"""

from .errors import RagDemoError, ConfigurationError, ServiceUnavailable, InvariantViolation
from .config import Settings, ConfigurationSource, SampleVariant, get_token

__all__ = [
    'RagDemoError',
    'ConfigurationError',
    'ServiceUnavailable',
    'InvariantViolation',
    'Settings',
    'ConfigurationSource',
    'SampleVariant',
    'get_token'
]
