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
"""pycriteria — fluent query criteria for ORM models."""

from pycriteria.container import Container
from pycriteria.core.config import Config
from pycriteria.data import Criteria, JoinType
from pycriteria.kernel.exceptions import (
    CollaboratorResolutionException,
    ConfigurationException,
    PyCriteriaException,
)

__version__ = "0.1.0"

__all__ = [
    "CollaboratorResolutionException",
    "Config",
    "ConfigurationException",
    "Container",
    "Criteria",
    "JoinType",
    "PyCriteriaException",
    "__version__",
]
