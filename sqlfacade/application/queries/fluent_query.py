"""Immutable select/limit/offset builder consumed by `fetch_with_offset`."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from sqlfacade.domain.errors import InvalidArgument
from sqlfacade.domain.services.clause_builder import (
  build_where_clause,
  validate_identifier,
  validate_select_fields,
)
from sqlfacade.domain.value_objects.clause import Clause, RawQuery
from sqlfacade.ports.output.statement_executor import RowSet

if TYPE_CHECKING:
  from sqlfacade.application.services.query_facade import QueryFacade

TableOrRawQuery = Union[str, RawQuery, Mapping[str, Any]]


@dataclass(frozen=True)
class FluentQuery:
  """A chain of `select`/`limit`/`offset` calls.

  Every setter returns a new value, so a chain never leaks into the next one
  and two chains on the same facade cannot interfere.
  """

  facade: 'QueryFacade' = field(repr=False, compare=False)
  select_fields: str = '*'
  limit_value: Optional[int] = None
  offset_value: Optional[int] = None

  def select(self, fields: str) -> 'FluentQuery':
    return replace(self, select_fields=validate_select_fields(fields))

  def limit(self, limit: int) -> 'FluentQuery':
    return replace(self, limit_value=_non_negative('limit', limit))

  def offset(self, offset: int) -> 'FluentQuery':
    return replace(self, offset_value=_non_negative('offset', offset))

  def to_clause(self, table: str, conditions: Optional[Mapping[str, Any]] = None) -> Clause:
    if self.offset_value is not None and self.limit_value is None:
      # SQLite and MySQL reject OFFSET without LIMIT
      raise InvalidArgument('offset requires limit; call limit() before fetching')
    where = build_where_clause(conditions)
    parts = [f'SELECT {self.select_fields} FROM {validate_identifier(table)}']
    if where:
      parts.append(where.sql)
    if self.limit_value is not None:
      parts.append(f'LIMIT {self.limit_value}')
    if self.offset_value is not None:
      parts.append(f'OFFSET {self.offset_value}')
    return Clause(' '.join(parts), where.params)

  def fetch_with_offset(
    self,
    table_or_raw: TableOrRawQuery,
    conditions: Optional[Mapping[str, Any]] = None,
  ) -> Union[RowSet, bool]:
    """Run the chain against a table, or run a raw query as-is.

    A raw query (a `RawQuery` or a mapping with an `sql` key) skips clause
    building entirely; limit and offset are ignored for it.
    """
    if isinstance(table_or_raw, str):
      clause = self.to_clause(table_or_raw, conditions)
      return self.facade.raw(clause.sql, clause.params)

    raw_query = _as_raw_query(table_or_raw)
    return self.facade.raw(raw_query.sql, raw_query.params)


def _non_negative(name: str, value: int) -> int:
  if isinstance(value, bool) or not isinstance(value, int) or value < 0:
    raise InvalidArgument(f'{name} must be a non-negative integer, got {value!r}')
  return value


def _as_raw_query(value: Any) -> RawQuery:
  if isinstance(value, RawQuery):
    return value
  if isinstance(value, Mapping) and 'sql' in value:
    return RawQuery(sql=value['sql'], params=value.get('params') or {})
  raise InvalidArgument(
    f'fetch_with_offset expects a table name or a raw query, got {type(value).__name__}'
  )
