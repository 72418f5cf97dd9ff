"""
Logging helpers for GameHub Insight backend.

``gamehub.main`` configures the root logger for the API process. Code that
runs without it (the API client inside scripts or bots, the try-out script)
gets a usable console logger from get_logger().

Never log bearer tokens, Supabase keys, the Google API key or full prompts
(they embed the whole catalog). Model output goes through preview().
"""

import logging
from typing import Optional

from gamehub.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger that prints even when logging was never configured.

    Args:
        name: Module name (typically __name__)
        level: Logging level; defaults to settings.LOG_LEVEL

    A console handler is attached only when the root logger has none, so
    inside the API process records keep flowing to the root handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else getattr(logging, settings.LOG_LEVEL, logging.INFO))

    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def preview(text: Optional[str], limit: int = 80) -> str:
    """
    One-line, length-capped rendering of untrusted text for log messages.

    >>> preview("```json\\n[1, 2]\\n```")
    '```json [1, 2] ```'
    """
    if not text:
        return "<empty>"
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[:limit] + f"... ({len(flat)} chars)"
