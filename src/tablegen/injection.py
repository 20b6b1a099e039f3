"""Injection configuration: extra context and templates for each output file.

An InjectionConfig is assembled once through its Builder and then shared,
read-only, with the generator for the whole run. For every table the
generator calls merge() on the context map it is about to render:

  1. static context entries are copied in, overwriting engine-supplied keys
  2. the output hook (if any) is called with the table and the same map

The hook runs second, so it always wins on key collisions.

The template file registry and the override flag are plain data here;
the renderer and the file writer consult them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Protocol

from tablegen.errors import InvalidConfigError
from tablegen.models.table import TableInfo

logger = logging.getLogger(__name__)

# Set once the deprecated Builder.file_override() has logged its warning.
_file_override_warned = False


class OutputHook(Protocol):
    """Per-table callback run just before the table's files are rendered.

    Receives the table metadata and the mutable context map that will be
    passed to the renderer verbatim. Communicates only by mutating the map.
    Any plain function with this signature satisfies the protocol.
    """

    def __call__(self, table: TableInfo, context: MutableMapping[str, Any]) -> None:
        ...


class InjectionConfig:
    """Caller customization applied to every generated file.

    Attributes (read-only):
        static_context: Values copied into every table's context map
        template_files: Logical template name → template file path
        override_enabled: Whether existing output files may be overwritten
        output_hook: Per-table callback, or None
    """

    def __init__(self) -> None:
        self._static_context: Mapping[str, Any] = {}
        self._template_files: Mapping[str, str] = {}
        self._override_enabled = False
        self._output_hook: OutputHook | None = None

    @classmethod
    def builder(cls) -> Builder:
        return Builder()

    @property
    def static_context(self) -> Mapping[str, Any]:
        """The static context mapping, returned by reference (not copied)."""
        return self._static_context

    @property
    def template_files(self) -> Mapping[str, str]:
        return self._template_files

    def template_file(self, name: str) -> str | None:
        """Look up the template path registered for name.

        Returns None when nothing is registered, meaning the renderer
        should use its built-in default for that name.
        """
        return self._template_files.get(name)

    @property
    def override_enabled(self) -> bool:
        return self._override_enabled

    @property
    def output_hook(self) -> OutputHook | None:
        return self._output_hook

    def merge(self, table_info: TableInfo, context: MutableMapping[str, Any]) -> None:
        """Populate context for table_info just before it is rendered.

        Static context entries overwrite same-named keys already in
        context, then the output hook may overwrite anything. The static
        context mapping itself is never modified. Exceptions raised by
        the hook propagate to the caller.
        """
        if self._static_context:
            context.update(self._static_context)
        if self._output_hook is not None:
            self._output_hook(table_info, context)

    def __repr__(self) -> str:
        return (
            f"InjectionConfig(static_context={sorted(self._static_context)!r}, "
            f"template_files={dict(self._template_files)!r}, "
            f"override_enabled={self._override_enabled!r}, "
            f"output_hook={self._output_hook!r})"
        )


class Builder:
    """Fluent construction of a single InjectionConfig.

    Each setter validates its argument immediately and returns the
    builder. Setters replace the previous value wholesale; mappings are
    not merged and a second hook replaces the first.

    build() always returns the same instance. The builder does not reset,
    so it is meant to be used once.
    """

    def __init__(self) -> None:
        self._config = InjectionConfig()

    def with_static_context(self, static_context: Mapping[str, Any]) -> Builder:
        """Replace the values copied into every table's context map."""
        if static_context is None:
            raise InvalidConfigError("static context must be a mapping, not None")
        self._config._static_context = static_context
        return self

    def with_template_files(self, template_files: Mapping[str, str]) -> Builder:
        """Replace the template registry: {logical name: template path}."""
        if template_files is None:
            raise InvalidConfigError("template files must be a mapping, not None")
        self._config._template_files = template_files
        return self

    def with_output_hook(self, hook: OutputHook) -> Builder:
        """Set the per-table output hook, replacing any previous one."""
        if hook is None:
            raise InvalidConfigError("output hook must not be None")
        if not callable(hook):
            raise InvalidConfigError(f"output hook must be callable, got {hook!r}")
        self._config._output_hook = hook
        return self

    def enable_override(self) -> Builder:
        """Allow the generator to overwrite existing output files."""
        self._config._override_enabled = True
        return self

    def file_override(self) -> Builder:
        """Deprecated alias for enable_override()."""
        global _file_override_warned
        if not _file_override_warned:
            logger.warning(
                "Builder.file_override() is deprecated and will be removed; "
                "use enable_override() instead"
            )
            _file_override_warned = True
        return self.enable_override()

    def build(self) -> InjectionConfig:
        return self._config
