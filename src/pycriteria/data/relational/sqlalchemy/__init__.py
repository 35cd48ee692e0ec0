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
"""SQLAlchemy adapter — models metadata, models manager, query builder and finder."""

from pycriteria.data.relational.sqlalchemy.builder import QueryBuilder
from pycriteria.data.relational.sqlalchemy.configuration import create_context
from pycriteria.data.relational.sqlalchemy.entity import Base, EntityRegistry
from pycriteria.data.relational.sqlalchemy.manager import ModelFinder, ModelsManager
from pycriteria.data.relational.sqlalchemy.metadata import ModelsMetadata

__all__ = [
    "Base",
    "EntityRegistry",
    "ModelFinder",
    "ModelsManager",
    "ModelsMetadata",
    "QueryBuilder",
    "create_context",
]
