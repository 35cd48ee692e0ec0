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
"""Layered configuration for pycriteria.

Values are looked up by dotted key (``pycriteria.data.relational.url``).
Sources are layered, the later one winning:

1. ``pycriteria-defaults.yaml`` shipped in :mod:`pycriteria.resources`
2. a YAML or TOML file
3. profile overlays next to that file, named ``<stem>-<profile><suffix>``
4. ``PYCRITERIA_*`` environment variables (looked up on every ``get``)

Sections are turned into typed objects with :meth:`Config.bind`, for
classes marked with :func:`config_properties`.
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import tomllib
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

_PREFIX_ATTR = "__pycriteria_config_prefix__"
_ENV_PREFIX = "PYCRITERIA_"
_DEFAULTS_FILE = "pycriteria-defaults.yaml"
_DEFAULTS_SOURCE = f"{_DEFAULTS_FILE} (defaults)"

_TRUE_STRINGS = frozenset({"true", "1", "yes"})

# Env values always arrive as strings; scalar dataclass fields are converted.
_COERCERS: dict[Any, Callable[[str], Any]] = {
    int: int,
    float: float,
    bool: lambda raw: raw.strip().lower() in _TRUE_STRINGS,
}


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Bind a dataclass or pydantic model to the section at *prefix*."""

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def _env_key(key: str) -> str:
    # pycriteria.data.relational.url -> PYCRITERIA_DATA_RELATIONAL_URL
    return _ENV_PREFIX + key.removeprefix("pycriteria.").upper().replace(".", "_").replace("-", "_")


def _merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        merged[key] = _merge(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return merged


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with path.open("rb") as fh:
            return tomllib.load(fh)
    with path.open() as fh:
        return yaml.safe_load(fh) or {}


def _read_defaults() -> dict[str, Any]:
    resource = importlib.resources.files("pycriteria.resources").joinpath(_DEFAULTS_FILE)
    return yaml.safe_load(resource.read_text()) or {}


class Config:
    """Nested configuration mapping with dotted-key access."""

    def __init__(self, data: dict[str, Any] | None = None, sources: Iterable[str] = ()) -> None:
        self._data: dict[str, Any] = data or {}
        self._sources = list(sources)

    @property
    def loaded_sources(self) -> list[str]:
        """Files merged into this configuration, in merge order."""
        return list(self._sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load *path* over the packaged defaults, then its profile overlays.

        A missing *path* is not an error; only the defaults are loaded.
        """
        path = Path(path)
        data: dict[str, Any] = _read_defaults() if load_defaults else {}
        sources = [_DEFAULTS_SOURCE] if load_defaults else []

        if path.exists():
            layers = [(path, str(path))]
            for profile in active_profiles or ():
                overlay = path.with_name(f"{path.stem}-{profile}{path.suffix}")
                layers.append((overlay, f"{overlay} (profile: {profile})"))
            for layer, label in layers:
                if layer.exists():
                    data = _merge(data, _read(layer))
                    sources.append(label)

        return cls(data, sources)

    @classmethod
    def defaults(cls) -> Config:
        """Configuration holding only the packaged defaults."""
        return cls(_read_defaults(), [_DEFAULTS_SOURCE])

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dotted *key*; a matching ``PYCRITERIA_*`` env var wins."""
        env_value = os.environ.get(_env_key(key))
        if env_value is not None:
            return env_value
        value = self._walk(key)
        return default if value is None else value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """The mapping stored under *prefix*, or ``{}``."""
        section = self._walk(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Build a :func:`config_properties` class from its section.

        Pydantic models are validated from the raw section; invalid values
        raise ``ValueError``. Dataclass fields are read through :meth:`get`,
        so environment overrides apply to them.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        if issubclass(config_cls, BaseModel):
            try:
                return config_cls.model_validate(self.get_section(prefix))
            except ValidationError as exc:
                raise ValueError(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}"
                ) from exc

        hints = get_type_hints(config_cls)
        values: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            coerce = _COERCERS.get(hints.get(field.name))
            values[field.name] = coerce(value) if coerce and isinstance(value, str) else value
        return config_cls(**values)

    def _walk(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        return node
