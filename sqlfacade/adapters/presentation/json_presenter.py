"""JSON presenter implementation."""
from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from sqlfacade.domain.entities.query_log import QueryLogEntry
from sqlfacade.domain.errors import DatabaseError
from sqlfacade.ports.input.result_presenter import ResultPresenter


class JsonPresenter(ResultPresenter):
  def present_rows(self, rows: Iterable[Mapping[str, Any]]) -> str:
    payload = [dict(row) for row in rows]
    return json.dumps(payload, ensure_ascii=False, indent=2, default=str)

  def present_log(self, entries: Iterable[QueryLogEntry]) -> str:
    payload = [entry.as_dict() for entry in entries]
    return json.dumps(payload, ensure_ascii=False, indent=2, default=str)

  def present_error(self, error: Exception) -> str:
    payload: dict = {'status': 'error', 'error': str(error)}
    if isinstance(error, DatabaseError):
      payload['error'] = error.message
      payload['code'] = error.code
    return json.dumps(payload, ensure_ascii=False, indent=2, default=str)
