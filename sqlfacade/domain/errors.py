"""Exceptions raised by the query facade."""
from __future__ import annotations

from typing import Optional, Union


class SqlFacadeError(Exception):
  """Base class for query facade errors."""


class InvalidArgument(SqlFacadeError, ValueError):
  """Raised when a call is malformed (empty maps, bad identifiers, unsupported input)."""


class DatabaseError(SqlFacadeError):
  """Raised when the underlying database client fails.

  Wraps connection failures, syntax errors and constraint violations alike.
  """

  def __init__(self, message: str, code: Optional[Union[int, str]] = None):
    super().__init__(message)
    self.message = message
    self.code = code

  def __str__(self) -> str:
    if self.code is None:
      return self.message
    return f'[{self.code}] {self.message}'
