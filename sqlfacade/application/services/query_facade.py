"""CRUD helpers, raw SQL passthrough and schema checks over a statement executor."""
from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from sqlfacade.application.queries.fluent_query import FluentQuery, TableOrRawQuery
from sqlfacade.common.logging_config import get_logger
from sqlfacade.domain.entities.query_log import QueryLogEntry
from sqlfacade.domain.services.clause_builder import (
  build_insert_clause,
  build_multi_insert_clause,
  build_set_clause,
  build_where_clause,
  validate_identifier,
)
from sqlfacade.ports.output.statement_executor import Params, Row, RowSet, StatementExecutor

logger = get_logger(__name__)


class QueryFacade:
  """Builds parameterized statements from plain mappings and runs them.

  Values are always bound as parameters. Table and column names are
  interpolated into the SQL text, so they are checked against identifier
  syntax first and must come from trusted code, never from user input.

  Example:

    facade = QueryFacade(SqlAlchemyStatementExecutor('sqlite://'))
    active = facade.find_all('users', {'status': 'active'})
    page = facade.select('id, name').limit(10).offset(20).fetch_with_offset('users')
  """

  def __init__(self, executor: StatementExecutor) -> None:
    self._executor = executor

  def insert(self, table: str, data: Mapping[str, Any]) -> bool:
    clause = build_insert_clause(data)
    return self._executor.execute(f'INSERT INTO {validate_identifier(table)} {clause.sql}', clause.params)

  def insert_multiple(self, table: str, rows: Sequence[Mapping[str, Any]]) -> bool:
    """Insert all rows with a single multi-row INSERT.

    Every row must carry the same set of columns.
    """
    clause = build_multi_insert_clause(rows)
    return self._executor.execute(f'INSERT INTO {validate_identifier(table)} {clause.sql}', clause.params)

  def update(self, table: str, data: Mapping[str, Any], where: Optional[Mapping[str, Any]]) -> bool:
    """Update matching rows; returns False when no row was affected.

    An empty `where` updates every row in the table.
    """
    table = validate_identifier(table)
    set_clause = build_set_clause(data, prefix='set_')
    where_clause = build_where_clause(where, prefix='where_')
    if not where_clause:
      logger.warning('Updating without conditions affects every row', extra={'table': table})

    sql = f'UPDATE {table} SET {set_clause.sql} {where_clause.sql}'.rstrip()
    return self._executor.execute(sql, {**set_clause.params, **where_clause.params})

  def delete(self, table: str, where: Optional[Mapping[str, Any]]) -> bool:
    """Delete matching rows; returns False when no row was affected.

    An empty `where` deletes every row in the table.
    """
    table = validate_identifier(table)
    where_clause = build_where_clause(where)
    if not where_clause:
      logger.warning('Deleting without conditions affects every row', extra={'table': table})

    return self._executor.execute(f'DELETE FROM {table} {where_clause.sql}'.rstrip(), where_clause.params)

  def find(self, table: str, conditions: Optional[Mapping[str, Any]] = None) -> Optional[Row]:
    """Return the first matching row, or None when nothing matches."""
    where_clause = build_where_clause(conditions)
    sql = ' '.join(filter(None, [f'SELECT * FROM {validate_identifier(table)}', where_clause.sql, 'LIMIT 1']))
    rows = self._executor.execute(sql, where_clause.params)
    return rows[0] if rows else None

  def find_all(self, table: str, conditions: Optional[Mapping[str, Any]] = None) -> RowSet:
    where_clause = build_where_clause(conditions)
    sql = f'SELECT * FROM {validate_identifier(table)} {where_clause.sql}'.rstrip()
    return self._executor.execute(sql, where_clause.params)

  def count(self, table: str, conditions: Optional[Mapping[str, Any]] = None) -> int:
    where_clause = build_where_clause(conditions)
    sql = f'SELECT COUNT(*) AS count FROM {validate_identifier(table)} {where_clause.sql}'.rstrip()
    rows = self._executor.execute(sql, where_clause.params)
    return int(rows[0]['count']) if rows else 0

  def raw(self, sql: str, params: Optional[Params] = None) -> Union[RowSet, bool]:
    """Execute SQL as written.

    `params` is either a mapping for `:name` placeholders or a sequence for
    the driver's positional placeholders. SELECT statements return their rows,
    anything else returns whether at least one row was affected.
    """
    return self._executor.execute(sql, params)

  def last_insert_id(self) -> Optional[int]:
    return self._executor.last_insert_id()

  def table_exists(self, table: str) -> bool:
    return self._executor.has_table(table)

  def column_exists(self, table: str, column: str) -> bool:
    return self._executor.has_column(table, column)

  def get_query_log(self) -> Tuple[QueryLogEntry, ...]:
    return self._executor.query_log.entries()

  def query(self) -> FluentQuery:
    return FluentQuery(facade=self)

  def select(self, fields: str) -> FluentQuery:
    return self.query().select(fields)

  def limit(self, limit: int) -> FluentQuery:
    return self.query().limit(limit)

  def offset(self, offset: int) -> FluentQuery:
    return self.query().offset(offset)

  def fetch_with_offset(
    self,
    table_or_raw: TableOrRawQuery,
    conditions: Optional[Mapping[str, Any]] = None,
  ) -> Union[RowSet, bool]:
    return self.query().fetch_with_offset(table_or_raw, conditions)

  def close(self) -> None:
    self._executor.close()

  def __enter__(self) -> 'QueryFacade':
    return self

  def __exit__(self, exc_type, exc_val, exc_tb) -> None:
    self.close()

