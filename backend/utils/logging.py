"""
Logging utilities for the product review backend.

Provides standardized logger configuration.

SECURITY RULES:
- NEVER log Gemini, SerpAPI or Supabase keys
- NEVER log full prompts sent to Gemini (they embed third-party content)

Acceptable logging:
- High-level events (e.g., "Detected product 'XYZ Phone'")
- Pipeline flow (e.g., "ReviewPipeline → QueryPlanner")
- Retry attempts with status codes and delays
- Error types and sanitized error messages
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from backend.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        # Own handler; skip the root handler installed by configure_logging
        logger.propagate = False

    return logger


def configure_logging(level_name: str = "INFO") -> None:
    """
    Configure root logging once at application startup.

    Args:
        level_name: Level name such as "DEBUG" or "INFO" (from settings.LOG_LEVEL).
                    Unknown names fall back to INFO.
    """
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
