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
"""Declarative base and the name → entity registry shared by the adapter."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from sqlalchemy.orm import DeclarativeBase

from pycriteria.kernel.exceptions import ResourceNotFoundException


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for entities queried through criteria."""


class EntityRegistry:
    """Maps model names used in criteria to mapped entity classes.

    An entity is registered under ``__model_name__`` when it defines one,
    otherwise under its class name.
    """

    def __init__(self, entities: Iterable[type] = ()) -> None:
        self._entities: dict[str, type] = {}
        for entity in entities:
            self.register(entity)

    def register(self, entity: type, name: str | None = None) -> None:
        self._entities[name or getattr(entity, "__model_name__", entity.__name__)] = entity

    def get(self, name: str) -> type:
        try:
            return self._entities[name]
        except KeyError:
            raise ResourceNotFoundException(
                f"Unknown model '{name}'",
                code="MODEL_NOT_FOUND",
                context={"model": name, "known": sorted(self._entities)},
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[str]:
        return iter(self._entities)
