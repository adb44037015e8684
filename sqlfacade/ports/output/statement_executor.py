"""Output port for executing statements against a database."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

from sqlfacade.domain.entities.query_log import QueryLog

Row = Dict[str, Any]
RowSet = List[Row]
Params = Union[Mapping[str, Any], Sequence[Any]]


class StatementExecutor(Protocol):
  """Defines how the facade hands prepared statements to a database client."""

  @property
  def query_log(self) -> QueryLog:
    ...

  def execute(self, sql: str, params: Optional[Params] = None) -> Union[RowSet, bool]:
    """Run a statement with bound parameters.

    SELECT statements return their rows; anything else returns whether at
    least one row was affected.
    """
    ...

  def last_insert_id(self) -> Optional[int]:
    ...

  def has_table(self, table: str) -> bool:
    ...

  def has_column(self, table: str, column: str) -> bool:
    ...

  def close(self) -> None:
    ...
