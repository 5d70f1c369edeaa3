"""Utility modules for gham."""

from gham.utils.logging_config import configure_logging, get_logger, redact_text

__all__ = ["configure_logging", "get_logger", "redact_text"]
