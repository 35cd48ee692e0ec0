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
"""pycriteria Data — fluent query criteria and the ports they consume.

:class:`Criteria` accumulates conditions, bindings, joins, ordering,
limits and locking/cache hints, then hands an immutable snapshot of them
to a query builder (``create_builder``) or a model finder (``execute``).

Adapters:
    - **SQLAlchemy** (``pycriteria.data.relational.sqlalchemy``) — models
      metadata, models manager, query builder and finder.
"""

from pycriteria.data.criteria import Criteria
from pycriteria.data.join import Join, JoinType
from pycriteria.data.parameters import CriteriaParam, CriteriaParams, ParameterBag
from pycriteria.data.placeholders import PLACEHOLDER_PREFIX, PlaceholderAllocator
from pycriteria.data.ports.outbound import (
    MODELS_MANAGER,
    MODELS_METADATA,
    DependencyContext,
    ModelFinderPort,
    ModelsManagerPort,
    ModelsMetadataPort,
    QueryBuilderPort,
)
from pycriteria.data.types import DataType

__all__ = [
    "Criteria",
    "CriteriaParam",
    "CriteriaParams",
    "DataType",
    "DependencyContext",
    "Join",
    "JoinType",
    "MODELS_MANAGER",
    "MODELS_METADATA",
    "ModelFinderPort",
    "ModelsManagerPort",
    "ModelsMetadataPort",
    "PLACEHOLDER_PREFIX",
    "ParameterBag",
    "PlaceholderAllocator",
    "QueryBuilderPort",
]
