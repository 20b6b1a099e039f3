"""Load generator configuration from tablegen.toml."""

from __future__ import annotations

import importlib
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from tablegen.errors import InvalidConfigError
from tablegen.injection import Builder, InjectionConfig, OutputHook
from tablegen.models.table import TableInfo, build_table


@dataclass
class OutputConfig:
    """Where generated files go.

    Attributes:
        directory: Root directory for generated files; each table gets
            a subdirectory named after its entity
        package: Package/namespace made available to templates
    """

    directory: Path = field(default_factory=lambda: Path("generated"))
    package: str = ""


@dataclass
class GeneratorConfig:
    """Full generator configuration loaded from tablegen.toml."""

    injection: InjectionConfig
    output: OutputConfig = field(default_factory=OutputConfig)
    tables: list[TableInfo] = field(default_factory=list)


def load_hook(reference: str) -> OutputHook:
    """Import an output hook from a 'package.module:attribute' reference."""
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise InvalidConfigError(
            f"output hook must look like 'module:function', got {reference!r}"
        )
    try:
        mod = importlib.import_module(module_name)
    except ImportError as e:
        raise InvalidConfigError(f"cannot import output hook module {module_name!r}: {e}") from e
    hook = getattr(mod, attr, None)
    if hook is None or not callable(hook):
        raise InvalidConfigError(f"output hook {reference!r} is not a callable")
    return hook


def _build_injection(data: dict, override: bool = False) -> InjectionConfig:
    """Build the InjectionConfig from the [injection] section.

    All values go through the Builder, so its validation applies.
    """
    section = data.get("injection", {})
    builder = Builder()
    builder.with_static_context(section.get("static_context", {}))
    builder.with_template_files(
        {name: str(path) for name, path in section.get("template_files", {}).items()}
    )
    hook_ref = section.get("output_hook")
    if hook_ref:
        builder.with_output_hook(load_hook(hook_ref))
    if override or section.get("file_override", False):
        builder.enable_override()
    return builder.build()


def _build_tables(data: dict) -> list[TableInfo]:
    """Build table metadata from the [tables] section."""
    section = data.get("tables", {})
    prefix = section.get("prefix", [])
    if isinstance(prefix, str):
        prefix = [prefix]
    return [build_table(t, prefix) for t in section.get("table", [])]


def load_config(
    config_path: Path | str | None = None, override: bool = False
) -> GeneratorConfig:
    """Load generator configuration from a TOML file.

    If config_path is None, looks for tablegen.toml in the current
    directory. override=True enables file overriding regardless of the
    file's [injection] file_override setting.
    """
    if config_path is None:
        config_path = Path("tablegen.toml")
    else:
        config_path = Path(config_path)

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    output_data = data.get("output", {})
    return GeneratorConfig(
        injection=_build_injection(data, override=override),
        output=OutputConfig(
            directory=Path(output_data.get("directory", "generated")),
            package=output_data.get("package", ""),
        ),
        tables=_build_tables(data),
    )
