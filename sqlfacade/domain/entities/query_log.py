"""Append-only record of statements sent to the database."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class QueryLogEntry:
  """A statement and its bound parameter values, in binding order."""

  query: str
  params: Tuple[Any, ...] = ()
  executed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

  def as_dict(self) -> dict:
    return {
      'query': self.query,
      'params': list(self.params),
      'executed_at': self.executed_at.isoformat(),
    }


class QueryLog:
  """Append-only log with no size bound or rotation."""

  def __init__(self) -> None:
    self._entries: List[QueryLogEntry] = []

  def append(
    self,
    query: str,
    params: Optional[Union[Mapping[str, Any], Sequence[Any]]] = None,
  ) -> QueryLogEntry:
    if params is None:
      values: Tuple[Any, ...] = ()
    elif isinstance(params, Mapping):
      values = tuple(params.values())
    else:
      values = tuple(params)
    entry = QueryLogEntry(query=query, params=values)
    self._entries.append(entry)
    return entry

  def entries(self) -> Tuple[QueryLogEntry, ...]:
    return tuple(self._entries)

  def last(self) -> Optional[QueryLogEntry]:
    return self._entries[-1] if self._entries else None

  def __len__(self) -> int:
    return len(self._entries)

  def __iter__(self) -> Iterator[QueryLogEntry]:
    return iter(self.entries())
