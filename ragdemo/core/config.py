"""
Configuration for the RAG samples.
Settings are an explicit value built once at startup and passed into each component.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values

from .errors import ConfigurationError

# Name of the only secret the samples need
TOKEN_SETTING = "GitHubModels:Token"

DEFAULT_SECRETS_FILE = Path.home() / ".ragdemo" / "secrets.env"

# Hosted (GitHub Models, OpenAI-compatible) defaults
HOSTED_ENDPOINT = "https://models.inference.ai.azure.com"
HOSTED_CHAT_MODEL = "gpt-4o-mini"
HOSTED_EMBEDDING_MODEL = "text-embedding-3-small"
EMBEDDING_DIMENSION = 1536

# Local (Ollama) defaults
LOCAL_ENDPOINT = "http://localhost:11434/"
LOCAL_MODEL = "llama3.2:1b"

COLLECTION_NAME = "drupert-collection"
TOP_K = 5
REQUEST_TIMEOUT_SEC = 60.0
INGEST_WORKERS = 1
LOG_LEVEL = "WARNING"


class SampleVariant(str, Enum):
    """Which backend a sample run talks to."""

    HOSTED = "hosted"
    LOCAL = "local"

    @property
    def title(self) -> str:
        return {
            SampleVariant.HOSTED: "Text Embedding",
            SampleVariant.LOCAL: "Text Embedding Ollama",
        }[self]

    @classmethod
    def from_title(cls, title: str) -> "SampleVariant":
        for variant in cls:
            if variant.title == title:
                return variant
        raise ValueError(f"Unknown sample: {title}")


def env_key(setting: str) -> str:
    """Map a hierarchical setting name to its environment form ("A:B" -> "A__B")."""
    return setting.replace(":", "__").upper()


class ConfigurationSource:
    """
    Layered settings lookup: user-level secrets file first, environment on top.

    A setting such as "GitHubModels:Token" is looked up under its literal name
    and under its environment form GITHUBMODELS__TOKEN in each layer.
    """

    def __init__(self, secrets_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None):
        self.secrets_path = Path(secrets_path) if secrets_path is not None else None
        self._environ = environ if environ is not None else os.environ
        self._secrets: Optional[Dict[str, Optional[str]]] = None

    @property
    def secrets(self) -> Dict[str, Optional[str]]:
        """Lazy-loaded contents of the secrets file (empty if it does not exist)."""
        if self._secrets is None:
            if self.secrets_path is not None and self.secrets_path.is_file():
                self._secrets = dict(dotenv_values(self.secrets_path))
            else:
                self._secrets = {}
        return self._secrets

    def get(self, setting: str) -> Optional[str]:
        """Return the raw value of a setting, or None when no layer defines it."""
        names = [setting, env_key(setting)]
        for layer in (self._environ, self.secrets):
            for name in names:
                value = layer.get(name)
                if value is not None:
                    return value
        return None


def get_token(source: ConfigurationSource) -> str:
    """
    Resolve the hosted API token.

    Raises:
        ConfigurationError: if the token is absent or blank.
    """
    token = source.get(TOKEN_SETTING)
    if token is None or not token.strip():
        raise ConfigurationError(
            TOKEN_SETTING,
            f"Missing configuration: {TOKEN_SETTING}. "
            f"Set {env_key(TOKEN_SETTING)} in the environment or add it to {source.secrets_path or DEFAULT_SECRETS_FILE}."
        )
    return token.strip()


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(name, f"{name} must be an integer, got {raw!r}")


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(name, f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Application settings resolved from RAGDEMO_* environment variables."""

    hosted_endpoint: str = HOSTED_ENDPOINT
    hosted_chat_model: str = HOSTED_CHAT_MODEL
    hosted_embedding_model: str = HOSTED_EMBEDDING_MODEL
    embedding_dimension: int = EMBEDDING_DIMENSION
    local_endpoint: str = LOCAL_ENDPOINT
    local_model: str = LOCAL_MODEL
    collection_name: str = COLLECTION_NAME
    top_k: int = TOP_K
    request_timeout_sec: float = REQUEST_TIMEOUT_SEC
    ingest_workers: int = INGEST_WORKERS
    log_level: str = LOG_LEVEL
    secrets_path: Path = field(default=DEFAULT_SECRETS_FILE)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = environ if environ is not None else os.environ
        secrets_file = env.get("RAGDEMO_SECRETS_FILE")
        return cls(
            hosted_endpoint=env.get("RAGDEMO_HOSTED_ENDPOINT", HOSTED_ENDPOINT),
            hosted_chat_model=env.get("RAGDEMO_HOSTED_CHAT_MODEL", HOSTED_CHAT_MODEL),
            hosted_embedding_model=env.get("RAGDEMO_HOSTED_EMBEDDING_MODEL", HOSTED_EMBEDDING_MODEL),
            embedding_dimension=_env_int(env, "RAGDEMO_EMBEDDING_DIMENSION", EMBEDDING_DIMENSION),
            local_endpoint=env.get("RAGDEMO_LOCAL_ENDPOINT", LOCAL_ENDPOINT),
            local_model=env.get("RAGDEMO_LOCAL_MODEL", LOCAL_MODEL),
            collection_name=env.get("RAGDEMO_COLLECTION_NAME", COLLECTION_NAME),
            top_k=_env_int(env, "RAGDEMO_TOP_K", TOP_K),
            request_timeout_sec=_env_float(env, "RAGDEMO_REQUEST_TIMEOUT_SEC", REQUEST_TIMEOUT_SEC),
            ingest_workers=_env_int(env, "RAGDEMO_INGEST_WORKERS", INGEST_WORKERS),
            log_level=env.get("RAGDEMO_LOG_LEVEL", LOG_LEVEL).upper(),
            secrets_path=Path(secrets_file).expanduser() if secrets_file else DEFAULT_SECRETS_FILE,
        )

    def configuration_source(self, environ: Optional[Mapping[str, str]] = None) -> ConfigurationSource:
        """Build the layered source used to resolve secrets."""
        return ConfigurationSource(self.secrets_path, environ)

    def validate(self) -> List[str]:
        """Validate settings and return any issues."""
        issues = []

        if self.top_k < 1:
            issues.append(f"RAGDEMO_TOP_K must be >= 1, got {self.top_k}")

        if self.request_timeout_sec <= 0:
            issues.append(f"RAGDEMO_REQUEST_TIMEOUT_SEC must be > 0, got {self.request_timeout_sec}")

        if not 1 <= self.ingest_workers <= 16:
            issues.append(f"RAGDEMO_INGEST_WORKERS must be 1-16, got {self.ingest_workers}")

        if self.embedding_dimension < 1:
            issues.append(f"RAGDEMO_EMBEDDING_DIMENSION must be >= 1, got {self.embedding_dimension}")

        return issues
