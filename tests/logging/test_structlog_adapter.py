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
"""Tests for StructlogAdapter — default LoggingPort implementation."""

import logging

import pytest

from pycriteria.core.config import Config
from pycriteria.logging import LoggingPort, StructlogAdapter


class TestStructlogAdapterConfigure:
    def test_satisfies_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_objects_without_configure_are_not_ports(self):
        assert not isinstance(logging.getLogger("pycriteria"), LoggingPort)

    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"
        assert adapter._module_levels == {}

    def test_configure_with_packaged_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config.defaults())
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pycriteria": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pycriteria": {"logging": {"format": "json"}}}))
        assert adapter._format == "json"

    def test_configure_rejects_unknown_format(self):
        adapter = StructlogAdapter()
        with pytest.raises(ValueError, match="LoggingProperties"):
            adapter.configure(Config({"pycriteria": {"logging": {"format": "xml"}}}))

    def test_configure_applies_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"pycriteria": {"logging": {"level": {"root": "INFO", "pycriteria.data.criteria": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"pycriteria.data.criteria": "DEBUG"}
        assert logging.getLogger("pycriteria.data.criteria").level == logging.DEBUG


class TestStructlogAdapterLoggers:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("pycriteria.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))

    def test_set_level_updates_stdlib_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        adapter.set_level("pycriteria.container", "warning")
        assert logging.getLogger("pycriteria.container").level == logging.WARNING
