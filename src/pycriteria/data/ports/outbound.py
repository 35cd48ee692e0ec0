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
"""Outbound ports: dependency context, metadata, query builder and finder interfaces."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from pycriteria.data.types import DataType

MODELS_METADATA = "modelsMetadata"
MODELS_MANAGER = "modelsManager"


@runtime_checkable
class DependencyContext(Protocol):
    """Resolves shared collaborators by name.

    Implementations raise a ``CollaboratorResolutionException`` subclass for
    unknown names.
    """

    def get_shared(self, name: str) -> Any: ...


@runtime_checkable
class ModelsMetadataPort(Protocol):
    """Declared field metadata of models."""

    def get_data_types(self, model: str) -> Mapping[str, DataType | str]: ...

    def get_reverse_column_map(self, model: str) -> Mapping[str, str]: ...


@runtime_checkable
class QueryBuilderPort(Protocol):
    """Query builder seeded with criteria parameters."""

    def from_(self, model: str) -> QueryBuilderPort: ...


@runtime_checkable
class ModelFinderPort(Protocol):
    """Per-model find capability."""

    def find(self, params: Mapping[str, Any]) -> Any: ...


@runtime_checkable
class ModelsManagerPort(Protocol):
    """Creates query builders and loads model finders."""

    def create_builder(self, params: Mapping[str, Any]) -> QueryBuilderPort: ...

    def load(self, model: str) -> ModelFinderPort: ...
