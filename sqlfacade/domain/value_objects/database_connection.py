"""Value object for database connection metadata."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy.engine import URL, make_url


class DatabaseType(str, Enum):
  POSTGRESQL = 'postgresql'
  MYSQL = 'mysql'
  SQLITE = 'sqlite'
  SQLSERVER = 'mssql'
  OTHER = 'other'


@dataclass(frozen=True)
class DatabaseConnection:
  """Immutable representation of a database connection string."""

  url: str
  db_type: DatabaseType
  host: Optional[str]
  port: Optional[int]
  database: Optional[str]
  username: Optional[str] = None
  password: Optional[str] = None

  @property
  def safe_url(self) -> str:
    """The URL with its password masked, for logs."""
    return make_url(self.url).render_as_string(hide_password=True)

  @staticmethod
  def from_url(url: str) -> 'DatabaseConnection':
    if not url:
      raise ValueError('Database URL is required')

    parsed = make_url(url)
    dialect_name = parsed.get_backend_name()

    db_type = DatabaseType(dialect_name) if dialect_name in DatabaseType._value2member_map_ else DatabaseType.OTHER

    return DatabaseConnection(
      url=parsed.render_as_string(hide_password=False),
      db_type=db_type,
      host=parsed.host,
      port=parsed.port,
      database=parsed.database,
      username=parsed.username,
      password=parsed.password,
    )

  @staticmethod
  def from_parts(
    driver: str,
    database: str,
    host: Optional[str] = None,
    port: Optional[int] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    charset: Optional[str] = None,
  ) -> 'DatabaseConnection':
    """Assemble a URL from host, database name, credentials and character set."""
    if not database:
      raise ValueError('Database name is required')

    url = URL.create(
      drivername=driver,
      username=username,
      password=password,
      host=host,
      port=port,
      database=database,
      query={'charset': charset} if charset else {},
    )
    return DatabaseConnection.from_url(url.render_as_string(hide_password=False))
