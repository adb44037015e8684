"""Domain service turning column/value maps into parameterized SQL fragments.

Values always travel as bound parameters. Identifiers (table and column
names) cannot be bound by the driver, so they are interpolated into the SQL
text after passing `validate_identifier`.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Sequence

from sqlfacade.domain.errors import InvalidArgument
from sqlfacade.domain.value_objects.clause import Clause

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$')
_SELECT_FIELD = re.compile(
  r'^(\*|[A-Za-z_][A-Za-z0-9_]*\.\*|[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?'
  r'(\s+AS\s+[A-Za-z_][A-Za-z0-9_]*)?)$',
  re.IGNORECASE,
)


def validate_identifier(name: str) -> str:
  """Return `name` unchanged if it is a plain (optionally schema-qualified) identifier."""
  if not isinstance(name, str) or not _IDENTIFIER.match(name):
    raise InvalidArgument(f'Invalid SQL identifier: {name!r}')
  return name


def validate_select_fields(fields: str) -> str:
  if not isinstance(fields, str) or not fields.strip():
    raise InvalidArgument('Select fields must be a non-empty string')
  parts = [part.strip() for part in fields.split(',')]
  for part in parts:
    if not _SELECT_FIELD.match(part):
      raise InvalidArgument(f'Invalid select field: {part!r}')
  return ', '.join(parts)


def _placeholder(column: str, taken: Mapping[str, Any], prefix: str = '', suffix: str = '') -> str:
  """Return a bind name for `column` that is not already a key of `taken`."""
  # bind parameter names cannot contain dots
  base = prefix + validate_identifier(column).replace('.', '__') + suffix
  name = base
  counter = 1
  while name in taken:
    name = f'{base}_{counter}'
    counter += 1
  return name


def build_where_clause(conditions: Mapping[str, Any] | None, prefix: str = '') -> Clause:
  """Build `WHERE a = :a AND b = :b` from equality conditions.

  An empty mapping yields an empty clause with no `WHERE` keyword, so callers
  must not assume one is present. `prefix` is prepended to placeholder names
  only, letting a WHERE clause sit next to a SET clause on the same columns.
  """
  if not conditions:
    return Clause('', {})

  predicates: List[str] = []
  params: Dict[str, Any] = {}
  for column, value in conditions.items():
    placeholder = _placeholder(column, params, prefix)
    predicates.append(f'{column} = :{placeholder}')
    params[placeholder] = value

  return Clause('WHERE ' + ' AND '.join(predicates), params)


def build_set_clause(data: Mapping[str, Any], prefix: str = '') -> Clause:
  if not data:
    raise InvalidArgument('At least one column is required to build a SET clause')

  assignments: List[str] = []
  params: Dict[str, Any] = {}
  for column, value in data.items():
    placeholder = _placeholder(column, params, prefix)
    assignments.append(f'{column} = :{placeholder}')
    params[placeholder] = value

  return Clause(', '.join(assignments), params)


def build_insert_clause(data: Mapping[str, Any]) -> Clause:
  """Build `(a, b) VALUES (:a, :b)` for a single row."""
  if not data:
    raise InvalidArgument('At least one column is required to insert a row')

  columns = list(data)
  params: Dict[str, Any] = {}
  for column, value in data.items():
    params[_placeholder(column, params)] = value
  placeholders = ', '.join(f':{name}' for name in params)
  return Clause(f"({', '.join(columns)}) VALUES ({placeholders})", params)


def build_multi_insert_clause(rows: Sequence[Mapping[str, Any]]) -> Clause:
  """Build one VALUES group per row, flattening parameters in row-major order.

  Every row must carry the same column set as the first one. A row listing
  the same columns in another order is read in the first row's order.
  """
  if not rows:
    raise InvalidArgument('At least one row is required for a multi-row insert')

  columns = [validate_identifier(column) for column in rows[0]]
  if not columns:
    raise InvalidArgument('At least one column is required to insert a row')

  expected = set(columns)
  groups: List[str] = []
  params: Dict[str, Any] = {}
  for index, row in enumerate(rows):
    if set(row) != expected:
      raise InvalidArgument(
        f'Row {index} columns {sorted(row)} differ from first row columns {sorted(expected)}'
      )
    names: List[str] = []
    for column in columns:
      name = _placeholder(column, params, suffix=f'_{index}')
      params[name] = row[column]
      names.append(name)
    groups.append('(' + ', '.join(f':{name}' for name in names) + ')')

  return Clause(f"({', '.join(columns)}) VALUES {', '.join(groups)}", params)
