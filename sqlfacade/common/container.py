"""Simple dependency wiring helpers."""
from __future__ import annotations

from typing import Optional

from sqlfacade.adapters.output.database.sqlalchemy_executor import SqlAlchemyStatementExecutor
from sqlfacade.application.services.query_facade import QueryFacade
from sqlfacade.common.config import Settings, get_settings
from sqlfacade.common.logging_config import get_logger

logger = get_logger(__name__)


def create_facade(settings: Optional[Settings] = None) -> QueryFacade:
  """Build a facade with its own executor and connection.

  Each call returns a new facade; a facade is meant to be used from one thread.
  """
  settings = settings or get_settings()
  logger.info('Creating query facade', extra={'database': settings.connection.safe_url})
  executor = SqlAlchemyStatementExecutor(settings.database_url, echo=settings.echo)
  return QueryFacade(executor)
