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
"""Logging port: how a host application plugs its logging setup into pycriteria.

``create_context`` accepts any implementation and hands it the same
:class:`~pycriteria.core.config.Config` the data layer is wired from, so
``pycriteria.logging.*`` keys take effect before the first query runs.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pycriteria.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Configures rendering and levels for the ``pycriteria.*`` loggers."""

    def configure(self, config: Config) -> None:
        """Apply the ``pycriteria.logging`` section of *config*."""
        ...

    def get_logger(self, name: str) -> Any:
        """Logger bound to *name*, e.g. ``pycriteria.data.criteria``."""
        ...

    def set_level(self, name: str, level: str) -> None:
        """Change the level of one logger at runtime."""
        ...
