"""Value objects for SQL fragments and raw query descriptors."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Sequence, Tuple, Union

from sqlfacade.domain.errors import InvalidArgument

Params = Union[Mapping[str, Any], Sequence[Any]]


@dataclass(frozen=True)
class Clause:
  """A SQL text fragment with its named parameters, in placeholder order."""

  sql: str
  params: Dict[str, Any] = field(default_factory=dict)

  def __bool__(self) -> bool:
    return bool(self.sql)

  def param_values(self) -> Tuple[Any, ...]:
    return tuple(self.params.values())


@dataclass(frozen=True)
class RawQuery:
  """Raw SQL handed to the fluent builder, bypassing clause building."""

  sql: str
  params: Params = field(default_factory=dict)

  def __post_init__(self) -> None:
    if not isinstance(self.sql, str) or not self.sql.strip():
      raise InvalidArgument('Raw query SQL is required')
