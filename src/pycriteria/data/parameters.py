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
"""Typed, mergeable storage for accumulated query parameters.

The keys of a :class:`ParameterBag` form a closed set (:class:`CriteriaParam`)
and their spelling is the contract with query builders: ``bindTypes``,
``forUpdate`` and ``sharedLock`` keep their camelCase names. The expected
shape of each key is declared by :class:`CriteriaParams`.

A key is present only once something set it. Reading an absent key gives
``None``; use :meth:`ParameterBag.has` to tell an absent key from a stored
``None``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from enum import StrEnum
from types import MappingProxyType
from typing import Any, TypedDict

from pycriteria.data.join import Join


class CriteriaParam(StrEnum):
    """Names of the parameters a criteria can carry."""

    CONDITIONS = "conditions"
    BIND = "bind"
    BIND_TYPES = "bindTypes"
    COLUMNS = "columns"
    DISTINCT = "distinct"
    JOINS = "joins"
    ORDER = "order"
    GROUP = "group"
    HAVING = "having"
    LIMIT = "limit"
    FOR_UPDATE = "forUpdate"
    SHARED_LOCK = "sharedLock"
    CACHE = "cache"
    DI = "di"


class LimitOffset(TypedDict):
    """Limit stored together with an offset."""

    number: int
    offset: int


# Functional syntax: the keys are not valid identifiers.
CriteriaParams = TypedDict(
    "CriteriaParams",
    {
        "conditions": str,
        "bind": dict[str, Any],
        "bindTypes": dict[str, Any],
        "columns": "str | Sequence[str]",
        "distinct": bool,
        "joins": list[Join],
        "order": str,
        "group": "str | Sequence[str]",
        "having": str,
        "limit": "int | LimitOffset",
        "forUpdate": bool,
        "sharedLock": bool,
        "cache": dict[str, Any],
        "di": Any,
    },
    total=False,
)

_MERGEABLE = (CriteriaParam.BIND, CriteriaParam.BIND_TYPES, CriteriaParam.CACHE)


class ParameterBag:
    """Mutable mapping of :class:`CriteriaParam` to value with merge rules.

    Names outside :class:`CriteriaParam` raise ``ValueError``.
    """

    __slots__ = ("_params",)

    def __init__(self) -> None:
        self._params: dict[str, Any] = {}

    def set(self, name: str, value: Any) -> None:
        self._params[CriteriaParam(name)] = value

    def get(self, name: str) -> Any:
        return self._params.get(CriteriaParam(name))

    def has(self, name: str) -> bool:
        return CriteriaParam(name) in self._params

    def remove(self, name: str) -> None:
        self._params.pop(CriteriaParam(name), None)

    def append(self, name: str, item: Any) -> None:
        """Append *item* to the list stored under *name*, creating it if absent."""
        key = CriteriaParam(name)
        current = self._params.get(key)
        if isinstance(current, list):
            current.append(item)
        else:
            self._params[key] = [item]

    def set_bind(self, values: Mapping[str, Any], merge: bool = False) -> None:
        """Replace the ``bind`` mapping, or union into it when *merge* is true.

        The union is right-biased: *values* win on key collisions. A stored
        ``bind`` that is not a mapping is replaced wholesale so that a
        malformed earlier value never blocks new bindings.
        """
        self._merge(CriteriaParam.BIND, values, merge)

    def merge_conditions(
        self,
        conditions: str,
        bind_params: Mapping[str, Any] | None = None,
        bind_types: Mapping[str, Any] | None = None,
    ) -> None:
        """Overwrite ``conditions`` and merge any given bindings and bind types.

        Combining the new expression with the previous one is the caller's
        job (see ``Criteria.and_where`` / ``Criteria.or_where``).
        """
        self._params[CriteriaParam.CONDITIONS] = conditions
        if isinstance(bind_params, Mapping):
            self._merge(CriteriaParam.BIND, bind_params, True)
        if isinstance(bind_types, Mapping):
            self._merge(CriteriaParam.BIND_TYPES, bind_types, True)

    def _merge(self, key: CriteriaParam, values: Mapping[str, Any], merge: bool) -> None:
        current = self._params.get(key)
        if merge and isinstance(current, Mapping):
            self._params[key] = {**current, **values}
        else:
            self._params[key] = dict(values) if isinstance(values, Mapping) else values

    def to_dict(self) -> CriteriaParams:
        """Shallow copy of every stored parameter keyed by its plain name."""
        return {str(k): v for k, v in self._params.items()}  # type: ignore[return-value]

    def snapshot(self) -> Mapping[str, Any]:
        """Read-only copy handed to query builders and finders.

        Nested ``bind``/``bindTypes``/``cache`` mappings are copied and
        ``joins`` is frozen into a tuple, so later mutation of the bag never
        leaks into a snapshot already handed out.
        """
        frozen: dict[str, Any] = {}
        for key, value in self._params.items():
            if key in _MERGEABLE and isinstance(value, Mapping):
                value = MappingProxyType(dict(value))
            elif key == CriteriaParam.JOINS and isinstance(value, list):
                value = tuple(value)
            elif key == CriteriaParam.LIMIT and isinstance(value, Mapping):
                value = MappingProxyType(dict(value))
            frozen[str(key)] = value
        return MappingProxyType(frozen)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            return self.has(name)
        except ValueError:
            return False

    def __iter__(self) -> Iterator[str]:
        return (str(k) for k in self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"ParameterBag({self.to_dict()!r})"
