"""SQLAlchemy-powered statement executor."""
from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple, Union

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from sqlfacade.common.logging_config import get_logger
from sqlfacade.domain.entities.query_log import QueryLog
from sqlfacade.domain.errors import DatabaseError, InvalidArgument
from sqlfacade.ports.output.statement_executor import Params, RowSet, StatementExecutor

logger = get_logger(__name__)


class SqlAlchemyStatementExecutor(StatementExecutor):
  """Owns a single connection and runs every statement through it.

  The engine runs in AUTOCOMMIT mode: each statement commits on its own and
  nothing is rolled back on failure. Callers needing atomicity across calls
  have to manage it themselves.
  """

  def __init__(
    self,
    database_url: str,
    echo: bool = False,
    query_log: Optional[QueryLog] = None,
  ) -> None:
    self._database_url = database_url
    self._echo = echo
    self._engine: Optional[Engine] = None
    self._connection: Optional[Connection] = None
    self._query_log = query_log if query_log is not None else QueryLog()
    self._last_insert_id: Optional[int] = None

  @property
  def query_log(self) -> QueryLog:
    return self._query_log

  def execute(self, sql: str, params: Optional[Params] = None) -> Union[RowSet, bool]:
    if isinstance(params, (str, bytes)):
      raise InvalidArgument('Statement parameters must be a mapping or a sequence')

    self._query_log.append(sql, params)
    logger.debug('Executing statement', extra={'sql': sql, 'param_count': len(params or ())})

    connection = self._get_connection()
    try:
      if params is None or isinstance(params, Mapping):
        result = connection.execute(text(sql), dict(params or {}))
      else:
        result = connection.exec_driver_sql(sql, tuple(params))

      if _starts_with(sql, 'SELECT'):
        return [dict(row._mapping) for row in result]

      if _starts_with(sql, 'INSERT'):
        self._last_insert_id = result.lastrowid
      affected = result.rowcount
      result.close()
      return affected > 0
    except SQLAlchemyError as exc:
      error = _to_database_error(exc)
      logger.error('Statement failed', extra={'sql': sql, 'code': error.code, 'error': error.message})
      raise error from exc

  def last_insert_id(self) -> Optional[int]:
    return self._last_insert_id

  def has_table(self, table: str) -> bool:
    schema, name = _split_table(table)
    try:
      return inspect(self._get_connection()).has_table(name, schema=schema)
    except (SQLAlchemyError, DatabaseError) as exc:
      # Any failure reads as "absent", permission errors included.
      logger.warning('Table lookup failed', extra={'table': table, 'error': str(exc)})
      return False

  def has_column(self, table: str, column: str) -> bool:
    schema, name = _split_table(table)
    try:
      columns = inspect(self._get_connection()).get_columns(name, schema=schema)
    except (SQLAlchemyError, DatabaseError) as exc:
      logger.warning(
        'Column lookup failed',
        extra={'table': table, 'column': column, 'error': str(exc)},
      )
      return False
    return any(meta['name'].lower() == column.lower() for meta in columns)

  def close(self) -> None:
    if self._connection is not None:
      self._connection.close()
      self._connection = None
    if self._engine is not None:
      self._engine.dispose()
      self._engine = None

  def __enter__(self) -> 'SqlAlchemyStatementExecutor':
    return self

  def __exit__(self, exc_type, exc_val, exc_tb) -> None:
    self.close()

  def _get_engine(self) -> Engine:
    if self._engine is None:
      self._engine = create_engine(
        self._database_url,
        echo=self._echo,
        isolation_level='AUTOCOMMIT',
      )
    return self._engine

  def _get_connection(self) -> Connection:
    if self._connection is None:
      try:
        self._connection = self._get_engine().connect()
      except SQLAlchemyError as exc:
        error = _to_database_error(exc)
        logger.error('Connection failed', extra={'code': error.code, 'error': error.message})
        raise error from exc
    return self._connection


def _starts_with(sql: str, keyword: str) -> bool:
  return sql.lstrip().upper().startswith(keyword)


def _split_table(table: str) -> Tuple[Optional[str], str]:
  if '.' in table:
    schema, name = table.split('.', 1)
    return schema, name
  return None, table


def _to_database_error(exc: SQLAlchemyError) -> DatabaseError:
  orig: Any = getattr(exc, 'orig', None)
  if orig is None:
    return DatabaseError(str(exc), getattr(exc, 'code', None))

  code = None
  for attribute in ('sqlite_errorcode', 'pgcode', 'errno'):
    code = getattr(orig, attribute, None)
    if code is not None:
      break
  if code is None and orig.args and isinstance(orig.args[0], int):
    code = orig.args[0]
  if code is None:
    code = getattr(exc, 'code', None)
  return DatabaseError(str(orig), code)
