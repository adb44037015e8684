"""Structured logger setup shared across the package."""
from __future__ import annotations

import logging
import os

from pythonjsonlogger.json import JsonFormatter


def get_logger(name: str) -> logging.Logger:
  """Configure a JSON logger once per name and reuse it.

  The level comes from LOG_LEVEL (default INFO).
  """
  logger = logging.getLogger(name)
  if logger.handlers:
    return logger

  handler = logging.StreamHandler()
  formatter = JsonFormatter(
    '%(levelname)s %(name)s %(message)s %(asctime)s'
  )
  handler.setFormatter(formatter)
  logger.addHandler(handler)
  logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
  logger.propagate = False
  return logger
