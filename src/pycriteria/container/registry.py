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
"""Service registration metadata."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pycriteria.container.types import Scope


@dataclass
class Registration:
    """Metadata for a registered service.

    Exactly one of ``factory`` and ``instance`` is set at registration time.
    ``created`` flips once a product sits in ``instance``, which may be ``None``.
    """

    name: str
    factory: Callable[..., Any] | None = None
    scope: Scope = Scope.SINGLETON
    instance: Any = field(default=None, repr=False)
    created: bool = False
