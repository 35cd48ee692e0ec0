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
"""Join descriptors accumulated by :class:`~pycriteria.data.criteria.Criteria`."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class JoinType(StrEnum):
    """Kind of join; ``None`` on a :class:`Join` means the builder's default."""

    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


@dataclass(frozen=True, slots=True)
class Join:
    """One join of the target model against *model*.

    Attributes:
        model: Name of the joined model.
        conditions: ON expression, or ``None`` to let the query builder
            infer it from relationships.
        alias: Alias the joined model is referred to by in conditions.
        join_type: Join kind, or ``None`` for the default join.
    """

    model: str
    conditions: str | None = None
    alias: str | None = None
    join_type: JoinType | None = None
