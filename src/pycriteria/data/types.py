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
"""Declared field data types reported by model metadata."""

from __future__ import annotations

from enum import StrEnum


class DataType(StrEnum):
    """Column data type as declared on a model.

    Values are lowercase names so metadata providers may report either the
    enum member or its plain string value.
    """

    CHAR = "char"
    VARCHAR = "varchar"
    TEXT = "text"
    INTEGER = "integer"
    BIGINTEGER = "biginteger"
    DECIMAL = "decimal"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    JSON = "json"
    BLOB = "blob"
    UUID = "uuid"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: object) -> DataType:
        """Map a reported type (member or name, any case) to a member; unknown names give OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER

    @property
    def is_string(self) -> bool:
        """Whether values of this type are matched with ``LIKE``."""
        return self in _STRING_TYPES


_STRING_TYPES = frozenset({DataType.CHAR, DataType.VARCHAR, DataType.TEXT})
