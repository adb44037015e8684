"""Input port for formatting rows and query logs."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol

from sqlfacade.domain.entities.query_log import QueryLogEntry


class ResultPresenter(Protocol):
  def present_rows(self, rows: Iterable[Mapping[str, Any]]) -> Any:
    ...

  def present_log(self, entries: Iterable[QueryLogEntry]) -> Any:
    ...

  def present_error(self, error: Exception) -> Any:
    ...
