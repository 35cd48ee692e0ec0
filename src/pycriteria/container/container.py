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
"""Lightweight name-keyed service container."""

from __future__ import annotations

import difflib
from collections.abc import Callable
from typing import Any

import structlog

from pycriteria.container.exceptions import BeanCurrentlyInCreationError, NoSuchBeanError
from pycriteria.container.registry import Registration
from pycriteria.container.types import Scope

logger = structlog.get_logger("pycriteria.container")


class Container:
    """Dependency context resolving shared collaborators by name.

    Services are registered either as ready instances or as factories
    taking the container itself, so a factory can pull its own
    dependencies::

        container = Container()
        container.register_instance("modelsMetadata", metadata)
        container.register("modelsManager", lambda c: ModelsManager(session_factory, entities))

        manager = container.get_shared("modelsManager")

    Singleton factories run once; prototype factories run on every
    :meth:`get`. Circular factory chains are detected.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, Registration] = {}
        self._resolving: dict[str, None] = {}  # insertion-ordered, O(1) lookup

    def register(
        self,
        name: str,
        factory: Callable[[Container], Any],
        scope: Scope = Scope.SINGLETON,
    ) -> None:
        """Register a factory under *name*, replacing any previous registration."""
        self._registrations[name] = Registration(name=name, factory=factory, scope=scope)
        logger.debug("service_registered", name=name, scope=scope.name)

    def register_instance(self, name: str, instance: Any) -> None:
        """Register a ready-made shared instance under *name*."""
        self._registrations[name] = Registration(name=name, instance=instance, created=True)
        logger.debug("service_registered", name=name, scope=Scope.SINGLETON.name)

    def get_shared(self, name: str) -> Any:
        """Resolve the shared instance registered under *name*.

        Prototype registrations are promoted: the first product is cached and
        returned on every later ``get_shared`` call.
        """
        reg = self._lookup(name)
        if not reg.created:
            reg.instance = self._create(reg)
            reg.created = True
        return reg.instance

    def get(self, name: str) -> Any:
        """Resolve *name* honouring its scope (new instance for PROTOTYPE)."""
        reg = self._lookup(name)
        if reg.scope == Scope.PROTOTYPE and reg.factory is not None:
            return self._create(reg)
        return self.get_shared(name)

    def contains(self, name: str) -> bool:
        """Check if a service is registered under *name*."""
        return name in self._registrations

    def __contains__(self, name: object) -> bool:
        return name in self._registrations

    def names(self) -> list[str]:
        """Registered service names, in registration order."""
        return list(self._registrations)

    def _lookup(self, name: str) -> Registration:
        try:
            return self._registrations[name]
        except KeyError:
            raise NoSuchBeanError(
                bean_name=name,
                required_by=next(reversed(self._resolving), None),
                suggestions=difflib.get_close_matches(name, list(self._registrations), n=5, cutoff=0.4),
            ) from None

    def _create(self, reg: Registration) -> Any:
        if reg.name in self._resolving:
            raise BeanCurrentlyInCreationError(chain=list(self._resolving), current=reg.name)
        self._resolving[reg.name] = None
        try:
            return reg.factory(self)
        finally:
            self._resolving.pop(reg.name, None)
