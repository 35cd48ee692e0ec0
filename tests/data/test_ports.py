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
"""Tests for the outbound port protocols and their adapter implementations."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pycriteria.container import Container
from pycriteria.data.ports.outbound import (
    MODELS_MANAGER,
    MODELS_METADATA,
    DependencyContext,
    ModelFinderPort,
    ModelsManagerPort,
    ModelsMetadataPort,
    QueryBuilderPort,
)
from pycriteria.data.relational.sqlalchemy import ModelsManager, ModelsMetadata


class TestCollaboratorNames:
    def test_well_known_names(self):
        assert MODELS_METADATA == "modelsMetadata"
        assert MODELS_MANAGER == "modelsManager"


class TestProtocolConformance:
    def test_container_is_dependency_context(self):
        assert isinstance(Container(), DependencyContext)

    def test_sqlalchemy_adapters_conform(self):
        manager = ModelsManager(sessionmaker(create_engine("sqlite://")), [])
        assert isinstance(manager, ModelsManagerPort)
        assert isinstance(ModelsMetadata([]), ModelsMetadataPort)
        assert isinstance(manager.create_builder({}), QueryBuilderPort)

    def test_unrelated_objects_do_not_conform(self):
        assert not isinstance(object(), DependencyContext)
        assert not isinstance(object(), ModelFinderPort)
        assert not isinstance({}, ModelsManagerPort)
