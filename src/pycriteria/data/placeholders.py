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
"""Bind-parameter name generation for BETWEEN / IN expansions.

Generated names are ``ACP<n>`` with ``n`` counting up from 0. Conditions
embed them colon-delimited (``:ACP0:``); downstream translators treat that
form as a bind marker.
"""

from __future__ import annotations

import structlog

PLACEHOLDER_PREFIX = "ACP"

logger = structlog.get_logger("pycriteria.data.placeholders")


def placeholder(name: str) -> str:
    """Format *name* as an embedded bind marker, e.g. ``:ACP0:``."""
    return f":{name}:"


class PlaceholderAllocator:
    """Monotonic per-criteria counter producing unique bind names.

    Names are unique only within one allocator; two criteria objects both
    start at ``ACP0``.
    """

    __slots__ = ("_next_id",)

    def __init__(self) -> None:
        self._next_id = 0

    @property
    def next_id(self) -> int:
        """The number the next allocated name will carry."""
        return self._next_id

    def allocate(self) -> str:
        name = f"{PLACEHOLDER_PREFIX}{self._next_id}"
        self._next_id += 1
        return name

    def allocate_many(self, count: int) -> list[str]:
        """Allocate *count* consecutive names."""
        names = [self.allocate() for _ in range(count)]
        if names:
            logger.debug("placeholders_allocated", first=names[0], last=names[-1])
        return names
