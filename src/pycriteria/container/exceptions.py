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
"""Container exceptions — failures resolving shared services by name."""

from __future__ import annotations

from pycriteria.kernel.exceptions import CollaboratorResolutionException


class NoSuchBeanError(CollaboratorResolutionException):
    """No service is registered under the requested name."""

    def __init__(
        self,
        *,
        bean_name: str,
        required_by: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.bean_name = bean_name
        self.required_by = required_by
        self.suggestions = suggestions or []

        headline = f"No service named '{bean_name}' is registered"
        lines = [f"NoSuchBeanError: {headline}"]

        if required_by:
            lines.append("")
            lines.append(f"  Required by: {required_by}")

        lines.append("")
        lines.append("  Suggestions:")
        lines.append("    - Register it with Container.register() or register_instance()")
        lines.append("    - Build the context with create_context() for the SQLAlchemy adapter")

        if self.suggestions:
            lines.append("")
            lines.append(f"  Similar registered names: {', '.join(self.suggestions)}")

        super().__init__(
            message=headline,
            code="BEAN_NOT_FOUND",
            context={"bean_name": bean_name},
        )
        self.args = ("\n".join(lines),)

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class BeanCurrentlyInCreationError(CollaboratorResolutionException):
    """Circular dependency detected while running service factories.

    The ``chain`` attribute contains the names requested so far, in order.
    """

    def __init__(self, *, chain: list[str], current: str) -> None:
        self.chain = chain
        self.current = current

        chain_str = " -> ".join([*chain, current])
        headline = f"Circular dependency: {chain_str}"

        lines = [f"BeanCurrentlyInCreationError: {headline}"]
        lines.append("")
        lines.append("  Suggestion: Break the cycle by resolving one side lazily")

        super().__init__(
            message=headline,
            code="BEAN_CIRCULAR",
            context={"chain": [*chain, current]},
        )
        self.args = ("\n".join(lines),)

    def __str__(self) -> str:
        return self.args[0] if self.args else ""
