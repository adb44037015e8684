"""Application-level configuration utilities."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from os import getenv
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from sqlfacade.domain.value_objects.database_connection import DatabaseConnection

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class Settings:
  """Immutable settings describing the database to connect to."""

  database_url: str
  echo: bool = False

  @property
  def connection(self) -> DatabaseConnection:
    return DatabaseConnection.from_url(self.database_url)


def load_settings() -> Settings:
  """Read settings from the environment.

  DATABASE_URL wins when set; otherwise the URL is assembled from the
  DB_DRIVER, DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD and DB_CHARSET
  variables.
  """
  database_url = getenv('DATABASE_URL')
  if not database_url:
    database_name = getenv('DB_NAME')
    if not database_name:
      raise ValueError('DATABASE_URL or DB_NAME must be set in environment or .env file')

    port = getenv('DB_PORT')
    database_url = DatabaseConnection.from_parts(
      driver=getenv('DB_DRIVER', 'mysql+pymysql'),
      database=database_name,
      host=getenv('DB_HOST', '127.0.0.1'),
      port=int(port) if port else None,
      username=getenv('DB_USER'),
      password=getenv('DB_PASSWORD'),
      charset=getenv('DB_CHARSET', 'utf8mb4') or None,
    ).url

  return Settings(
    database_url=database_url,
    echo=(getenv('DB_ECHO') or '').strip().lower() in _TRUTHY,
  )


@lru_cache(maxsize=1)
def get_settings(env_file: Optional[str] = None) -> Settings:
  """Load settings from environment variables once per process."""
  env_path = Path(env_file) if env_file else Path(__file__).resolve().parents[2] / '.env'
  if env_path.exists():
    load_dotenv(env_path)
  else:
    load_dotenv()

  return load_settings()
