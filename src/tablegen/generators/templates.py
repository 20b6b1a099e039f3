"""Per-table source generator.

Renders one file per (table, template) pair with jinja2. Before a
table's files are rendered, the engine-built context map is passed
through InjectionConfig.merge() so static context and the output hook
can add or override values.

Template sources are resolved through the injection template registry,
falling back to the built-in defaults below.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import jinja2

from tablegen.injection import InjectionConfig
from tablegen.models.table import TableInfo

logger = logging.getLogger(__name__)

_TEMPLATE_SUFFIXES = (".j2", ".vm")

DEFAULT_TEMPLATES: dict[str, str] = {
    "entity.py": """\
\"\"\"{{ table.comment or entity }} ({{ table.name }}).
{% if author %}

Author: {{ author }}
{% endif %}
Generated on {{ date }}.
\"\"\"

from __future__ import annotations

from dataclasses import dataclass
{% set types = fields | map(attribute='property_type') | list %}
{% if 'Decimal' in types %}
from decimal import Decimal
{% endif %}
{% if 'datetime' in types or 'date' in types %}
import datetime
{% endif %}


@dataclass
class {{ entity }}:
{% for f in fields %}
    {{ f.property_name }}: {{ 'datetime.' ~ f.property_type if f.property_type in ('datetime', 'date') else f.property_type }} | None = None{% if f.comment %}  # {{ f.comment }}{% endif %}

{% else %}
    pass
{% endfor %}
""",
    "mapper.xml": """\
<?xml version="1.0" encoding="UTF-8"?>
<mapper namespace="{{ package ~ '.' if package }}{{ entity }}Mapper">
    <resultMap id="BaseResultMap" type="{{ package ~ '.' if package }}{{ entity }}">
{% for f in fields %}
        <{{ 'id' if f.key_flag else 'result' }} column="{{ f.name }}" property="{{ f.property_name }}"/>
{% endfor %}
    </resultMap>

    <sql id="Base_Column_List">
        {{ table.column_names | join(', ') }}
    </sql>
</mapper>
""",
}


def _environment(search: jinja2.BaseLoader | None = None) -> jinja2.Environment:
    """Environment serving the built-in defaults.

    With a search loader, its templates are found first, so a registered
    template can include or extend its neighbours.
    """
    loader: jinja2.BaseLoader = jinja2.DictLoader(DEFAULT_TEMPLATES)
    if search is not None:
        loader = jinja2.ChoiceLoader([search, loader])
    return jinja2.Environment(
        loader=loader,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def output_name(template_name: str) -> str:
    """'mapper.xml.j2' → 'mapper.xml'."""
    for suffix in _TEMPLATE_SUFFIXES:
        if template_name.endswith(suffix):
            return template_name[: -len(suffix)]
    return template_name


def template_names_for(injection: InjectionConfig) -> list[str]:
    """Built-in template names followed by any extra registered names.

    A registered name that produces the same output file as a built-in
    takes the built-in's place (e.g. 'mapper.xml.vm' replaces
    'mapper.xml'), so each output file is rendered once.
    """
    registered = list(injection.template_files)
    names: list[str] = []
    for default in DEFAULT_TEMPLATES:
        same_output = [n for n in registered if output_name(n) == output_name(default)]
        names.append(same_output[0] if same_output else default)
    names.extend(n for n in registered if n not in names)
    return names


def load_template(
    env: jinja2.Environment, name: str, injection: InjectionConfig
) -> jinja2.Template:
    """Resolve a logical template name to a compiled template.

    A path registered in the injection config wins; otherwise the
    built-in default is used. A registered template is loaded from its
    own directory, so it may include or extend files beside it.

    Raises:
        jinja2.TemplateNotFound: If neither exists, or the registered
            path does not exist.
    """
    path = injection.template_file(name)
    if path is None:
        return env.get_template(name)
    template_path = Path(path)
    search = jinja2.FileSystemLoader(template_path.parent)
    return search.load(_environment(search), template_path.name)


def build_context(table: TableInfo, package: str = "") -> dict[str, Any]:
    """Build the engine-supplied context map for one table."""
    return {
        "table": table,
        "entity": table.entity_name,
        "fields": table.fields,
        "package": package,
        "date": datetime.date.today().isoformat(),
    }


def generate_tables(
    tables: Iterable[TableInfo],
    injection: InjectionConfig,
    package: str = "",
    template_names: list[str] | None = None,
) -> dict[str, str]:
    """Render every template for every table.

    Returns a dict mapping "{entity_name}/{output name}" to content.
    """
    env = _environment()
    if template_names is None:
        template_names = template_names_for(injection)
    templates = {name: load_template(env, name, injection) for name in template_names}

    files: dict[str, str] = {}
    for table in tables:
        context = build_context(table, package)
        injection.merge(table, context)
        logger.debug("Rendering %d template(s) for table %s", len(templates), table.name)
        for name, template in templates.items():
            files[f"{table.entity_name}/{output_name(name)}"] = template.render(context)
    return files
