"""Thin CRUD, raw SQL and schema-check helpers over SQLAlchemy."""
from __future__ import annotations

from sqlfacade.adapters.output.database.sqlalchemy_executor import SqlAlchemyStatementExecutor
from sqlfacade.adapters.presentation.json_presenter import JsonPresenter
from sqlfacade.application.queries.fluent_query import FluentQuery
from sqlfacade.application.services.query_facade import QueryFacade
from sqlfacade.common.container import create_facade
from sqlfacade.domain.entities.query_log import QueryLog, QueryLogEntry
from sqlfacade.domain.errors import DatabaseError, InvalidArgument, SqlFacadeError
from sqlfacade.domain.value_objects.clause import Clause, RawQuery

__all__ = [
  'Clause',
  'DatabaseError',
  'FluentQuery',
  'InvalidArgument',
  'JsonPresenter',
  'QueryFacade',
  'QueryLog',
  'QueryLogEntry',
  'RawQuery',
  'SqlAlchemyStatementExecutor',
  'SqlFacadeError',
  'create_facade',
]
