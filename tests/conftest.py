"""Shared fixtures: an in-memory SQLite facade with a seeded `users` table."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

import pytest

from sqlfacade.adapters.output.database.sqlalchemy_executor import SqlAlchemyStatementExecutor
from sqlfacade.application.services.query_facade import QueryFacade
from sqlfacade.domain.entities.query_log import QueryLog

USERS_DDL = (
  'CREATE TABLE users ('
  ' id INTEGER PRIMARY KEY AUTOINCREMENT,'
  ' name TEXT NOT NULL UNIQUE,'
  ' age INTEGER,'
  ' status TEXT'
  ')'
)

FACADE_LOGGERS = (
  'sqlfacade.application.services.query_facade',
  'sqlfacade.adapters.output.database.sqlalchemy_executor',
)

SEED_USERS = [
  {'name': 'Ana', 'age': 31, 'status': 'active'},
  {'name': 'Bruno', 'age': 24, 'status': 'active'},
  {'name': 'Carla', 'age': 45, 'status': 'inactive'},
]


class FakeExecutor:
  """Records statements instead of running them."""

  def __init__(self, rows: Optional[List[dict]] = None, affected: bool = True):
    self.query_log = QueryLog()
    self.rows = rows if rows is not None else []
    self.affected = affected
    self.calls: List[tuple] = []

  def execute(self, sql: str, params: Any = None):
    self.query_log.append(sql, params)
    self.calls.append((sql, params))
    if sql.lstrip().upper().startswith('SELECT'):
      return list(self.rows)
    return self.affected

  def last_insert_id(self):
    return None

  def has_table(self, table: str) -> bool:
    return False

  def has_column(self, table: str, column: str) -> bool:
    return False

  def close(self) -> None:
    pass


@pytest.fixture
def executor():
  with SqlAlchemyStatementExecutor('sqlite://') as sqlite_executor:
    yield sqlite_executor


@pytest.fixture
def facade(executor):
  return QueryFacade(executor)


@pytest.fixture
def users(facade):
  facade.raw(USERS_DDL)
  facade.insert_multiple('users', SEED_USERS)
  return facade


@pytest.fixture
def fake_executor():
  return FakeExecutor()


@pytest.fixture
def fake_facade(fake_executor):
  return QueryFacade(fake_executor)


@pytest.fixture
def warnings_log(caplog):
  """caplog wired to the package loggers, which do not propagate to root."""
  loggers = [logging.getLogger(name) for name in FACADE_LOGGERS]
  for logger in loggers:
    logger.addHandler(caplog.handler)
  caplog.set_level(logging.WARNING)
  yield caplog
  for logger in loggers:
    logger.removeHandler(caplog.handler)
