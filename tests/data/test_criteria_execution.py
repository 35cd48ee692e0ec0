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
"""Tests for Criteria.create_builder / Criteria.execute against fake collaborators."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from pycriteria.container import Container, NoSuchBeanError
from pycriteria.data.criteria import Criteria
from pycriteria.data.ports.outbound import MODELS_MANAGER, ModelsManagerPort, QueryBuilderPort
from pycriteria.kernel.exceptions import (
    CollaboratorResolutionException,
    ConfigurationException,
    PyCriteriaException,
)

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeBuilder:
    def __init__(self, params: Mapping[str, Any]) -> None:
        self.params = params
        self.source: str | None = None

    def from_(self, model: str) -> FakeBuilder:
        self.source = model
        return self


class FakeFinder:
    def __init__(self, model: str, calls: list[tuple[str, Mapping[str, Any]]]) -> None:
        self._model = model
        self._calls = calls

    def find(self, params: Mapping[str, Any]) -> list[str]:
        self._calls.append((self._model, params))
        return [f"{self._model}-result"]


class FakeManager:
    def __init__(self) -> None:
        self.builders: list[FakeBuilder] = []
        self.find_calls: list[tuple[str, Mapping[str, Any]]] = []

    def create_builder(self, params: Mapping[str, Any]) -> FakeBuilder:
        builder = FakeBuilder(params)
        self.builders.append(builder)
        return builder

    def load(self, model: str) -> FakeFinder:
        return FakeFinder(model, self.find_calls)


class FailingManager(FakeManager):
    def load(self, model: str) -> FakeFinder:
        raise RuntimeError("database unavailable")


@pytest.fixture
def manager() -> FakeManager:
    return FakeManager()


@pytest.fixture
def context(manager: FakeManager) -> Container:
    container = Container()
    container.register_instance(MODELS_MANAGER, manager)
    return container


# ---------------------------------------------------------------------------
# create_builder
# ---------------------------------------------------------------------------


class TestCreateBuilder:
    def test_fakes_conform_to_ports(self, manager: FakeManager):
        assert isinstance(manager, ModelsManagerPort)
        assert isinstance(FakeBuilder({}), QueryBuilderPort)

    def test_builder_is_seeded_and_targets_model(self, context: Container, manager: FakeManager):
        criteria = Criteria().set_model("Robots").set_di(context).where("id = :id:", {"id": 1}).limit(3)
        builder = criteria.create_builder()

        assert builder is manager.builders[0]
        assert builder.source == "Robots"
        assert builder.params["conditions"] == "id = :id:"
        assert dict(builder.params["bind"]) == {"id": 1}
        assert builder.params["limit"] == 3
        assert builder.params["di"] is context

    def test_explicit_context_wins_over_attached(self, context: Container, manager: FakeManager):
        other = FakeManager()
        attached = Container()
        attached.register_instance(MODELS_MANAGER, other)

        Criteria().set_model("Robots").set_di(attached).create_builder(context)

        assert len(manager.builders) == 1
        assert other.builders == []

    def test_params_handed_out_are_immutable_snapshot(self, context: Container):
        criteria = Criteria().set_model("Robots").bind({"a": 1})
        builder = criteria.create_builder(context)
        criteria.bind({"b": 2}, merge=True).order_by("name")

        assert dict(builder.params["bind"]) == {"a": 1}
        assert "order" not in builder.params
        with pytest.raises(TypeError):
            builder.params["order"] = "x"

    def test_requires_model(self, context: Container):
        with pytest.raises(ConfigurationException) as exc_info:
            Criteria().create_builder(context)
        assert exc_info.value.code == "CRITERIA_NO_MODEL"

    def test_requires_context(self):
        with pytest.raises(ConfigurationException) as exc_info:
            Criteria().set_model("Robots").create_builder()
        assert exc_info.value.code == "CRITERIA_NO_CONTEXT"

    def test_unresolvable_manager_propagates(self):
        with pytest.raises(NoSuchBeanError) as exc_info:
            Criteria().set_model("Robots").create_builder(Container())
        assert isinstance(exc_info.value, CollaboratorResolutionException)
        assert exc_info.value.bean_name == MODELS_MANAGER


# ---------------------------------------------------------------------------
# execute
# ---------------------------------------------------------------------------


class TestExecute:
    def test_delegates_to_model_finder(self, context: Container, manager: FakeManager):
        result = Criteria().set_model("Robots").in_where("id", [1, 2]).execute(context)

        assert result == ["Robots-result"]
        model, params = manager.find_calls[0]
        assert model == "Robots"
        assert params["conditions"] == "id IN (:ACP0:, :ACP1:)"
        assert dict(params["bind"]) == {"ACP0": 1, "ACP1": 2}

    def test_uses_attached_context(self, context: Container, manager: FakeManager):
        Criteria().set_model("Robots").set_di(context).execute()
        assert len(manager.find_calls) == 1

    @pytest.mark.parametrize("model", [None, "", 42])
    def test_model_must_be_non_empty_string(self, context: Container, manager: FakeManager, model):
        criteria = Criteria().set_di(context)
        if model is not None:
            criteria.set_model(model)
        with pytest.raises(ConfigurationException) as exc_info:
            criteria.execute()
        assert exc_info.value.code == "CRITERIA_NO_MODEL"
        assert isinstance(exc_info.value, PyCriteriaException)
        assert manager.find_calls == []

    def test_finder_errors_propagate_unchanged(self):
        container = Container()
        container.register_instance(MODELS_MANAGER, FailingManager())
        with pytest.raises(RuntimeError, match="database unavailable"):
            Criteria().set_model("Robots").execute(container)

    def test_criteria_can_be_reused_after_execute(self, context: Container, manager: FakeManager):
        criteria = Criteria().set_model("Robots").set_di(context)
        criteria.execute()
        criteria.where("id = 1").execute()
        assert [p.get("conditions") for _, p in manager.find_calls] == [None, "id = 1"]
