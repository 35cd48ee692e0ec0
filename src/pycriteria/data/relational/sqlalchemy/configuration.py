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
"""Wire a dependency context for criteria from configuration."""

from __future__ import annotations

from collections.abc import Iterable

import structlog
from sqlalchemy import create_engine, make_url
from sqlalchemy.orm import sessionmaker

from pycriteria.config.properties.data import RelationalProperties
from pycriteria.container import Container
from pycriteria.core.config import Config
from pycriteria.data.ports.outbound import MODELS_MANAGER, MODELS_METADATA
from pycriteria.data.relational.sqlalchemy.entity import EntityRegistry
from pycriteria.data.relational.sqlalchemy.manager import ModelsManager
from pycriteria.data.relational.sqlalchemy.metadata import ModelsMetadata
from pycriteria.logging.port import LoggingPort

ENGINE = "engine"
SESSION_FACTORY = "sessionFactory"

logger = structlog.get_logger("pycriteria.data.relational.sqlalchemy")


def create_context(
    config: Config,
    entities: Iterable[type],
    logging_port: LoggingPort | None = None,
) -> Container:
    """Build a container exposing ``modelsMetadata`` and ``modelsManager``.

    The engine URL and echo flag come from ``pycriteria.data.relational``.
    Collaborators are created lazily on first lookup. When *logging_port*
    is given it is configured from *config* first.
    """
    if logging_port is not None:
        logging_port.configure(config)

    props = config.bind(RelationalProperties)
    registry = EntityRegistry(entities)

    container = Container()
    container.register(ENGINE, lambda c: create_engine(props.url, echo=props.echo))
    container.register(SESSION_FACTORY, lambda c: sessionmaker(c.get_shared(ENGINE), expire_on_commit=False))
    container.register(MODELS_METADATA, lambda c: ModelsMetadata(registry))
    container.register(MODELS_MANAGER, lambda c: ModelsManager(c.get_shared(SESSION_FACTORY), registry))

    logger.info(
        "criteria_context_created",
        url=make_url(props.url).render_as_string(hide_password=True),
        models=sorted(registry),
    )
    return container
