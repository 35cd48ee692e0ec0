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
"""Models metadata read from declared SQLAlchemy mappings."""

from __future__ import annotations

from collections.abc import Iterable

import sqlalchemy as sa
from sqlalchemy.types import TypeEngine

from pycriteria.data.relational.sqlalchemy.entity import EntityRegistry
from pycriteria.data.types import DataType

# Most specific first: Text and CHAR subclass String, BigInteger subclasses
# Integer, Double subclasses Float which subclasses Numeric.
_TYPE_MAP: tuple[tuple[type[TypeEngine], DataType], ...] = (
    (sa.CHAR, DataType.CHAR),
    (sa.Text, DataType.TEXT),
    (sa.String, DataType.VARCHAR),
    (sa.Boolean, DataType.BOOLEAN),
    (sa.BigInteger, DataType.BIGINTEGER),
    (sa.Integer, DataType.INTEGER),
    (sa.Double, DataType.DOUBLE),
    (sa.Float, DataType.FLOAT),
    (sa.Numeric, DataType.DECIMAL),
    (sa.DateTime, DataType.DATETIME),
    (sa.Date, DataType.DATE),
    (sa.Time, DataType.TIME),
    (sa.JSON, DataType.JSON),
    (sa.LargeBinary, DataType.BLOB),
    (sa.Uuid, DataType.UUID),
)


def data_type_of(column_type: TypeEngine) -> DataType:
    """Classify a SQLAlchemy column type."""
    for sa_type, data_type in _TYPE_MAP:
        if isinstance(column_type, sa_type):
            return data_type
    return DataType.OTHER


class ModelsMetadata:
    """``modelsMetadata`` collaborator backed by mapper inspection.

    Only declared mappings are consulted; the database is never queried.
    """

    def __init__(self, entities: EntityRegistry | Iterable[type]) -> None:
        self._registry = entities if isinstance(entities, EntityRegistry) else EntityRegistry(entities)

    def get_data_types(self, model: str) -> dict[str, DataType]:
        """Column name → declared data type."""
        mapper = sa.inspect(self._registry.get(model))
        return {
            column.name: data_type_of(column.type)
            for attr in mapper.column_attrs
            for column in attr.columns
        }

    def get_reverse_column_map(self, model: str) -> dict[str, str]:
        """Column name → attribute name, for columns whose attribute is named differently."""
        mapper = sa.inspect(self._registry.get(model))
        return {
            column.name: attr.key
            for attr in mapper.column_attrs
            for column in attr.columns
            if column.name != attr.key
        }
