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
"""Fluent query criteria: accumulate parameters, then build or execute.

A :class:`Criteria` collects conditions, bound values, joins, ordering,
limits and locking/cache hints through chained calls. It is finally
consumed by :meth:`Criteria.create_builder`, which seeds a query builder,
or :meth:`Criteria.execute`, which runs a find on the target model.

Example::

    robots = (
        Criteria()
        .set_model("Robots")
        .where("type = :type:", {"type": "mechanical"})
        .between_where("year", 1990, 2010)
        .in_where("id", [1, 2, 3])
        .order_by("name")
        .limit(10, 20)
        .execute(context)
    )

A criteria is owned by one call chain: it holds unsynchronized mutable
state and every mutator returns the same instance.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog

from pycriteria.data.join import Join, JoinType
from pycriteria.data.parameters import CriteriaParam, CriteriaParams, ParameterBag
from pycriteria.data.placeholders import PlaceholderAllocator, placeholder
from pycriteria.data.ports.outbound import (
    MODELS_MANAGER,
    MODELS_METADATA,
    DependencyContext,
    QueryBuilderPort,
)
from pycriteria.data.types import DataType
from pycriteria.kernel.exceptions import ConfigurationException

logger = structlog.get_logger("pycriteria.data.criteria")

# Signed decimal with optional exponent; no underscores, no nan/inf.
_NUMERIC_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*")


def _is_numeric(value: Any) -> bool:
    """Whether *value* is a finite number or a plain decimal string for one."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str) and _NUMERIC_RE.fullmatch(value):
        return math.isfinite(float(value))
    return False


class Criteria:
    """Mutable fluent builder of query parameters for one model."""

    def __init__(self) -> None:
        self._params = ParameterBag()
        self._allocator = PlaceholderAllocator()
        self._model: str | None = None

    # ------------------------------------------------------------------
    # Target and context
    # ------------------------------------------------------------------

    def set_model(self, name: str) -> Criteria:
        self._model = name
        return self

    def get_model_name(self) -> str | None:
        return self._model

    def set_di(self, context: DependencyContext) -> Criteria:
        """Attach the dependency context used when building or executing."""
        self._params.set(CriteriaParam.DI, context)
        return self

    def get_di(self) -> DependencyContext | None:
        return self._params.get(CriteriaParam.DI)

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    def bind(self, values: Mapping[str, Any], merge: bool = False) -> Criteria:
        """Set bound values; with *merge* they are unioned into the existing ones."""
        self._params.set_bind(values, merge)
        return self

    def bind_types(self, values: Mapping[str, Any]) -> Criteria:
        self._params.set(CriteriaParam.BIND_TYPES, dict(values))
        return self

    # ------------------------------------------------------------------
    # Projection and joins
    # ------------------------------------------------------------------

    def distinct(self, flag: bool) -> Criteria:
        self._params.set(CriteriaParam.DISTINCT, flag)
        return self

    def columns(self, columns: str | Sequence[str]) -> Criteria:
        """Select *columns* (one name or an ordered sequence) instead of whole models."""
        self._params.set(CriteriaParam.COLUMNS, columns)
        return self

    def join(
        self,
        model: str,
        conditions: str | None = None,
        alias: str | None = None,
        join_type: JoinType | None = None,
    ) -> Criteria:
        """Append a join against *model*; earlier joins are kept."""
        self._params.append(CriteriaParam.JOINS, Join(model, conditions, alias, join_type))
        return self

    def inner_join(self, model: str, conditions: str | None = None, alias: str | None = None) -> Criteria:
        return self.join(model, conditions, alias, JoinType.INNER)

    def left_join(self, model: str, conditions: str | None = None, alias: str | None = None) -> Criteria:
        return self.join(model, conditions, alias, JoinType.LEFT)

    def right_join(self, model: str, conditions: str | None = None, alias: str | None = None) -> Criteria:
        return self.join(model, conditions, alias, JoinType.RIGHT)

    # ------------------------------------------------------------------
    # Conditions
    # ------------------------------------------------------------------

    def where(
        self,
        conditions: str,
        bind_params: Mapping[str, Any] | None = None,
        bind_types: Mapping[str, Any] | None = None,
    ) -> Criteria:
        """Replace the conditions, merging *bind_params* and *bind_types* into the existing ones."""
        self._params.merge_conditions(conditions, bind_params, bind_types)
        logger.debug("conditions_set", conditions=conditions)
        return self

    def and_where(
        self,
        conditions: str,
        bind_params: Mapping[str, Any] | None = None,
        bind_types: Mapping[str, Any] | None = None,
    ) -> Criteria:
        """Combine *conditions* with the current ones as ``(old) AND (new)``."""
        return self.where(self._combine("AND", conditions), bind_params, bind_types)

    def or_where(
        self,
        conditions: str,
        bind_params: Mapping[str, Any] | None = None,
        bind_types: Mapping[str, Any] | None = None,
    ) -> Criteria:
        """Combine *conditions* with the current ones as ``(old) OR (new)``."""
        return self.where(self._combine("OR", conditions), bind_params, bind_types)

    def between_where(self, expr: str, minimum: Any, maximum: Any) -> Criteria:
        """AND ``expr BETWEEN :ACPn: AND :ACPn+1:`` with both bounds bound."""
        return self._between("BETWEEN", expr, minimum, maximum)

    def not_between_where(self, expr: str, minimum: Any, maximum: Any) -> Criteria:
        return self._between("NOT BETWEEN", expr, minimum, maximum)

    def in_where(self, expr: str, values: Iterable[Any]) -> Criteria:
        """AND ``expr IN (...)`` with one placeholder per value.

        An empty *values* adds the always-false ``expr != expr`` so the query
        matches nothing; no bindings are added in that case.
        """
        values = list(values)
        if not values:
            return self.and_where(f"{expr} != {expr}")
        return self._in("IN", expr, values)

    def not_in_where(self, expr: str, values: Iterable[Any]) -> Criteria:
        """AND ``expr NOT IN (...)`` with one placeholder per value.

        Unlike :meth:`in_where` an empty *values* is not special-cased; the
        result is ``expr NOT IN ()`` and its meaning is left to the query
        translator.
        """
        return self._in("NOT IN", expr, list(values))

    def conditions(self, conditions: str) -> Criteria:
        """Set the conditions verbatim, leaving bindings untouched."""
        self._params.set(CriteriaParam.CONDITIONS, conditions)
        return self

    def _combine(self, operator: str, conditions: str) -> str:
        if self._params.has(CriteriaParam.CONDITIONS):
            return f"({self._params.get(CriteriaParam.CONDITIONS)}) {operator} ({conditions})"
        return conditions

    def _between(self, operator: str, expr: str, minimum: Any, maximum: Any) -> Criteria:
        low, high = self._allocator.allocate_many(2)
        return self.and_where(
            f"{expr} {operator} {placeholder(low)} AND {placeholder(high)}",
            {low: minimum, high: maximum},
        )

    def _in(self, operator: str, expr: str, values: list[Any]) -> Criteria:
        names = self._allocator.allocate_many(len(values))
        markers = ", ".join(placeholder(name) for name in names)
        return self.and_where(f"{expr} {operator} ({markers})", dict(zip(names, values, strict=True)))

    # ------------------------------------------------------------------
    # Ordering, grouping, paging, locking
    # ------------------------------------------------------------------

    def order_by(self, order_columns: str) -> Criteria:
        self._params.set(CriteriaParam.ORDER, order_columns)
        return self

    def group_by(self, group: str | Sequence[str]) -> Criteria:
        self._params.set(CriteriaParam.GROUP, group)
        return self

    def having(self, having: str) -> Criteria:
        self._params.set(CriteriaParam.HAVING, having)
        return self

    def limit(self, limit: int, offset: int | float | str | None = None) -> Criteria:
        """Limit the number of rows, optionally skipping *offset* rows.

        Both numbers are taken as absolute values. A limit of zero leaves the
        criteria unchanged. A numeric *offset* (an int, a finite float or a
        plain decimal string such as ``"10"`` or ``"2.5e1"``) is truncated and
        stores ``{"number": limit, "offset": offset}``; anything else stores
        the bare limit.
        """
        number = abs(limit)
        if number == 0:
            return self
        if _is_numeric(offset):
            skip = offset if isinstance(offset, int) else int(float(offset))  # type: ignore[arg-type]
            self._params.set(CriteriaParam.LIMIT, {"number": number, "offset": abs(skip)})
        else:
            self._params.set(CriteriaParam.LIMIT, number)
        return self

    def for_update(self, for_update: bool = True) -> Criteria:
        self._params.set(CriteriaParam.FOR_UPDATE, for_update)
        return self

    def shared_lock(self, shared_lock: bool = True) -> Criteria:
        self._params.set(CriteriaParam.SHARED_LOCK, shared_lock)
        return self

    def cache(self, options: Mapping[str, Any]) -> Criteria:
        """Attach result-cache options (e.g. ``{"key": ..., "lifetime": 300}``)."""
        self._params.set(CriteriaParam.CACHE, dict(options))
        return self

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_where(self) -> str | None:
        return self._params.get(CriteriaParam.CONDITIONS)

    def get_conditions(self) -> str | None:
        return self._params.get(CriteriaParam.CONDITIONS)

    def get_columns(self) -> str | Sequence[str] | None:
        return self._params.get(CriteriaParam.COLUMNS)

    def get_bind(self) -> dict[str, Any] | None:
        return self._params.get(CriteriaParam.BIND)

    def get_bind_types(self) -> dict[str, Any] | None:
        return self._params.get(CriteriaParam.BIND_TYPES)

    def get_limit(self) -> Any:
        return self._params.get(CriteriaParam.LIMIT)

    def get_order_by(self) -> str | None:
        return self._params.get(CriteriaParam.ORDER)

    def get_group_by(self) -> str | Sequence[str] | None:
        return self._params.get(CriteriaParam.GROUP)

    def get_having(self) -> str | None:
        return self._params.get(CriteriaParam.HAVING)

    def get_params(self) -> CriteriaParams:
        """All parameters set so far; keys that were never set are absent."""
        return self._params.to_dict()

    # ------------------------------------------------------------------
    # Construction from input
    # ------------------------------------------------------------------

    @classmethod
    def from_input(
        cls,
        context: DependencyContext,
        model_name: str,
        data: Mapping[str, Any],
        operator: str = "AND",
    ) -> Criteria:
        """Build criteria matching the fields of *data* known to the model's metadata.

        String-typed fields match with ``LIKE '%value%'``; every other type
        matches by equality. Fields missing from the metadata, and values that
        are ``None`` or ``""``, are ignored. When the model renames columns,
        *data* is keyed by attribute name and conditions use the column name.
        """
        metadata = context.get_shared(MODELS_METADATA)
        data_types = metadata.get_data_types(model_name)
        column_map = metadata.get_reverse_column_map(model_name)

        conditions: list[str] = []
        bind: dict[str, Any] = {}
        for field, data_type in data_types.items():
            attribute = column_map.get(field, field) if column_map else field
            if attribute not in data:
                continue
            value = data[attribute]
            if value is None or (isinstance(value, str) and value == ""):
                continue

            if DataType.coerce(data_type).is_string:
                conditions.append(f"[{field}] LIKE :{field}:")
                bind[field] = f"%{value}%"
            else:
                conditions.append(f"[{field}] = :{field}:")
                bind[field] = value

        criteria = cls().set_di(context)
        if conditions:
            criteria.where(f" {operator} ".join(conditions), bind)
        criteria.set_model(model_name)
        logger.debug("criteria_from_input", model=model_name, fields=list(bind))
        return criteria

    # ------------------------------------------------------------------
    # Consumption
    # ------------------------------------------------------------------

    def create_builder(self, context: DependencyContext | None = None) -> QueryBuilderPort:
        """Create a query builder seeded with these parameters and targeting the model.

        *context* overrides the context attached with :meth:`set_di`.
        Errors raised by the context or the models manager propagate unchanged.
        """
        model = self._require_model()
        manager = self._resolve_context(context).get_shared(MODELS_MANAGER)
        builder = manager.create_builder(self._params.snapshot())
        builder.from_(model)
        logger.debug("query_builder_created", model=model)
        return builder

    def execute(self, context: DependencyContext | None = None) -> Any:
        """Run a find on the target model with these parameters and return its result.

        Raises:
            ConfigurationException: No model name is set, or it is not a
                non-empty string, or no dependency context is available.
        """
        model = self._require_model()
        manager = self._resolve_context(context).get_shared(MODELS_MANAGER)
        finder = manager.load(model)
        logger.debug("criteria_execute", model=model, params=sorted(self._params))
        return finder.find(self._params.snapshot())

    def _require_model(self) -> str:
        if not isinstance(self._model, str) or not self._model:
            raise ConfigurationException(
                "Model name must be a non-empty string",
                code="CRITERIA_NO_MODEL",
                context={"model": repr(self._model)},
            )
        return self._model

    def _resolve_context(self, context: DependencyContext | None) -> DependencyContext:
        resolved = context if context is not None else self.get_di()
        if resolved is None:
            raise ConfigurationException(
                "No dependency context: pass one explicitly or attach it with set_di()",
                code="CRITERIA_NO_CONTEXT",
                context={"model": self._model},
            )
        return resolved
