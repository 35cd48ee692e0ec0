# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Compile criteria parameters into a SQLAlchemy ``Select``.

Condition strings are passed through as ``text()`` fragments after two
rewrites, both applied outside single-quoted SQL literals only:

1. Colon-delimited markers (``:ACP0:``, ``:name:``) become SQLAlchemy bind
   markers (``:ACP0``, ``:name``).
2. Bracket-quoted identifiers (``[name]``) lose their brackets.

Values from ``bind`` are attached to the fragment that references them,
typed from ``bindTypes`` when a SQLAlchemy type is given there.

Example::

    builder = manager.create_builder(criteria.get_params()).from_("Robot")
    stmt = builder.get_statement()
    robots = builder.execute()
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import Select, TextClause, bindparam, literal_column, select, text
from sqlalchemy.orm import aliased
from sqlalchemy.types import TypeEngine

from pycriteria.data.join import Join, JoinType
from pycriteria.data.parameters import CriteriaParam
from pycriteria.kernel.exceptions import ConfigurationException, NotImplementedException

if TYPE_CHECKING:
    from pycriteria.data.relational.sqlalchemy.manager import ModelsManager

logger = structlog.get_logger("pycriteria.data.relational.sqlalchemy")

_MARKER_RE = re.compile(r"(?<![:\w]):(\w+):")
_IDENTIFIER_RE = re.compile(r"\[(\w+)\]")
# Same rule text() applies: ":name" not preceded by ":" / word char / backslash.
_BIND_RE = re.compile(r"(?<![:\w\\]):(\w+)(?![:\w])")
# Capturing group: re.split keeps literals at the odd indexes.
_LITERAL_RE = re.compile(r"('(?:[^']|'')*')")


def _code_segments(expression: str) -> list[str]:
    return _LITERAL_RE.split(expression)[::2]


def translate(expression: str) -> str:
    """Rewrite a criteria expression into SQLAlchemy ``text()`` syntax."""
    parts = _LITERAL_RE.split(expression)
    parts[::2] = [_IDENTIFIER_RE.sub(r"\1", _MARKER_RE.sub(r":\1", code)) for code in parts[::2]]
    return "".join(parts)


def _text_sql(expression: str) -> str:
    parts = _LITERAL_RE.split(translate(expression))
    # text() would bind ":name" inside a literal too; "\:name" renders as ":name".
    parts[1::2] = [_BIND_RE.sub(r"\\:\1", literal) for literal in parts[1::2]]
    return "".join(parts)


def _names(value: str | Sequence[str]) -> list[str]:
    return [value] if isinstance(value, str) else list(value)


def _bind_type(value: Any) -> Any:
    if isinstance(value, TypeEngine) or (isinstance(value, type) and issubclass(value, TypeEngine)):
        return value
    return None


class QueryBuilder:
    """``QueryBuilderPort`` implementation producing SQLAlchemy statements."""

    def __init__(self, params: Mapping[str, Any], manager: ModelsManager) -> None:
        self._params = params
        self._manager = manager
        self._model: str | None = None

    def from_(self, model: str) -> QueryBuilder:
        self._model = model
        return self

    def get_from(self) -> str | None:
        return self._model

    def get_params(self) -> Mapping[str, Any]:
        return self._params

    def get_statement(self) -> Select[Any]:
        """Compile the parameters into a ``Select`` against the source model."""
        if not self._model:
            raise ConfigurationException("Query builder has no source model", code="BUILDER_NO_MODEL")

        params = self._params
        entity = self._manager.get_entity(self._model)
        bind = params.get(CriteriaParam.BIND) or {}
        bind_types = params.get(CriteriaParam.BIND_TYPES) or {}

        columns = params.get(CriteriaParam.COLUMNS)
        if columns is None:
            stmt: Select[Any] = select(entity)
        else:
            stmt = select(*(literal_column(translate(c)) for c in _names(columns))).select_from(entity)

        for join in params.get(CriteriaParam.JOINS) or ():
            stmt = self._apply_join(stmt, join, bind, bind_types)

        if params.get(CriteriaParam.CONDITIONS):
            stmt = stmt.where(self._clause(params[CriteriaParam.CONDITIONS], bind, bind_types))

        if params.get(CriteriaParam.GROUP):
            stmt = stmt.group_by(*(text(_text_sql(g)) for g in _names(params[CriteriaParam.GROUP])))

        if params.get(CriteriaParam.HAVING):
            stmt = stmt.having(self._clause(params[CriteriaParam.HAVING], bind, bind_types))

        if params.get(CriteriaParam.ORDER):
            stmt = stmt.order_by(text(_text_sql(params[CriteriaParam.ORDER])))

        limit = params.get(CriteriaParam.LIMIT)
        if isinstance(limit, Mapping):
            stmt = stmt.limit(limit["number"]).offset(limit["offset"])
        elif limit is not None:
            stmt = stmt.limit(limit)

        if params.get(CriteriaParam.DISTINCT):
            stmt = stmt.distinct()

        if params.get(CriteriaParam.FOR_UPDATE):
            stmt = stmt.with_for_update()
        elif params.get(CriteriaParam.SHARED_LOCK):
            stmt = stmt.with_for_update(read=True)

        if params.get(CriteriaParam.CACHE):
            logger.debug("cache_options_ignored", model=self._model)

        return stmt

    def execute(self) -> list[Any]:
        """Run the statement in a new session.

        Returns entities, or rows when ``columns`` was set.
        """
        stmt = self.get_statement()
        with self._manager.session() as session:
            result = session.execute(stmt)
            if self._params.get(CriteriaParam.COLUMNS) is None:
                return list(result.scalars().all())
            return list(result.all())

    def _apply_join(
        self,
        stmt: Select[Any],
        join: Join,
        bind: Mapping[str, Any],
        bind_types: Mapping[str, Any],
    ) -> Select[Any]:
        if join.join_type == JoinType.RIGHT:
            raise NotImplementedException(
                "RIGHT joins are not supported by the SQLAlchemy query builder",
                code="RIGHT_JOIN_UNSUPPORTED",
                context={"model": join.model},
            )
        target: Any = self._manager.get_entity(join.model)
        if join.alias:
            target = aliased(target, name=join.alias)
        onclause = self._clause(join.conditions, bind, bind_types) if join.conditions else None
        return stmt.join(target, onclause, isouter=join.join_type == JoinType.LEFT)

    @staticmethod
    def _clause(expression: str, bind: Mapping[str, Any], bind_types: Mapping[str, Any]) -> TextClause:
        sql = _text_sql(expression)
        referenced = {name for code in _code_segments(sql) for name in _BIND_RE.findall(code)}
        params = [
            bindparam(name, value, type_=_bind_type(bind_types.get(name)))
            for name, value in bind.items()
            if name in referenced
        ]
        return text(sql).bindparams(*params)
