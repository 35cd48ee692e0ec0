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
"""Models manager and per-model finders over a SQLAlchemy session factory."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from sqlalchemy.orm import Session, sessionmaker

from pycriteria.data.relational.sqlalchemy.builder import QueryBuilder
from pycriteria.data.relational.sqlalchemy.entity import EntityRegistry

logger = structlog.get_logger("pycriteria.data.relational.sqlalchemy")


class ModelFinder:
    """``find`` capability of one model, resolved by :meth:`ModelsManager.load`."""

    def __init__(self, model: str, manager: ModelsManager) -> None:
        self._model = model
        self._manager = manager

    @property
    def model(self) -> str:
        return self._model

    def find(self, params: Mapping[str, Any]) -> list[Any]:
        """Return the model's entities (or column rows) matching *params*."""
        builder = self._manager.create_builder(params).from_(self._model)
        result = builder.execute()
        logger.debug("model_find", model=self._model, rows=len(result))
        return result


class ModelsManager:
    """``modelsManager`` collaborator: query builder factory and finder lookup."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        entities: EntityRegistry | Iterable[type],
    ) -> None:
        self._session_factory = session_factory
        self._registry = entities if isinstance(entities, EntityRegistry) else EntityRegistry(entities)

    def create_builder(self, params: Mapping[str, Any]) -> QueryBuilder:
        return QueryBuilder(params, self)

    def load(self, model: str) -> ModelFinder:
        """Finder for *model*; unknown models raise ``ResourceNotFoundException``."""
        self._registry.get(model)
        return ModelFinder(model, self)

    def get_entity(self, model: str) -> type:
        return self._registry.get(model)

    def session(self) -> Session:
        return self._session_factory()
