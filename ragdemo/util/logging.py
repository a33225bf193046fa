"""
Structured operation logging for the RAG samples.
Logs go to stderr so the sample echoes on stdout stay readable.
"""

import logging
from typing import Any, Dict

# Fields whose contents are truncated before logging
TRUNCATED_FIELDS = ['text', 'prompt', 'query', 'value', 'content']
MAX_FIELD_LENGTH = 50


class StructuredLogger:
    """Structured logger for vector, client and pipeline operations."""

    def __init__(self, name: str = "ragdemo", level: str = "WARNING"):
        self.logger = logging.getLogger(name)
        self.configure(level)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def configure(self, level: str) -> None:
        """Set the log level by name (DEBUG, INFO, WARNING, ...)."""
        self.logger.setLevel(getattr(logging, str(level).upper(), logging.WARNING))

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {sanitize_details(details)}"

        self.logger.log(level, message)

    def log_vector_operation(self, operation: str, record_id: Any, details: Dict[str, Any] = None, status: str = "success"):
        """Log a vector collection operation."""
        log_details = {"record_id": record_id}
        if details:
            log_details.update(details)

        self.log_operation(f"vector.{operation}", status, log_details, level=logging.DEBUG)

    def log_client_call(self, client: str, operation: str, start_time: float, end_time: float,
                        status: str = "success", details: Dict[str, Any] = None):
        """Log an embedding or chat backend call."""
        duration_ms = round((end_time - start_time) * 1000, 2)
        log_details = {"duration_ms": duration_ms}
        if details:
            log_details.update(details)

        level = logging.INFO if status == "success" else logging.ERROR
        self.log_operation(f"{client}.{operation}", status, log_details, level=level)

    def log_pipeline_stage(self, stage: str, status: str, details: Dict[str, Any] = None):
        """Log a pipeline stage transition or failure."""
        level = logging.ERROR if status == "failed" else logging.INFO
        self.log_operation(f"pipeline.{stage}", status, details, level=level)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


def sanitize_details(details: Dict[str, Any]) -> Dict[str, Any]:
    """Truncate long text fields so prompts and facts never flood the log."""
    sanitized = {}
    for k, v in details.items():
        if k in TRUNCATED_FIELDS and isinstance(v, str) and len(v) > MAX_FIELD_LENGTH:
            sanitized[k] = v[:MAX_FIELD_LENGTH] + "..."
        else:
            sanitized[k] = v
    return sanitized


# Global logger instance
logger = StructuredLogger()
