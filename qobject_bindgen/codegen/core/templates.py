"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation. The header and source
layouts of a generated translation unit ship as built-in templates;
a template directory can override either of them.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    select_autoescape,
)
from jinja2.exceptions import TemplateError as JinjaTemplateError

from ...logging_config import get_logger

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


HEADER_TEMPLATE_NAME = "header.h.j2"
SOURCE_TEMPLATE_NAME = "source.cpp.j2"

HEADER_TEMPLATE = """\
{% if comment %}
// Generated by qobject-bindgen from the "{{ stem }}" bridge. Do not edit.
{% endif %}
#pragma once

{% for include in includes %}
#include {{ include }}
{% endfor %}

{% for declare in forward_declares %}
{{ declare }}

{% endfor %}
{% for qobject in qobjects %}
{% if qobject.namespace %}
namespace {{ qobject.namespace }} {
{% endif %}
class {{ qobject.ident }};
{% for declare in qobject.forward_declares %}
{{ declare }}
{% endfor %}
{% if qobject.namespace %}
} // namespace {{ qobject.namespace }}
{% endif %}

{% endfor %}
{% if cxx_header %}
#include {{ cxx_header }}

{% endif %}
{% for block in extern_blocks %}
{% for declare in block.forward_declares %}
{{ declare }}
{% endfor %}
{% if block.header %}
{{ block.header }}

{% endif %}
{% endfor %}
{% for qobject in qobjects %}
{% if qobject.namespace %}
namespace {{ qobject.namespace }} {
{% endif %}
class {{ qobject.ident }} : public {{ qobject.base_class }}
{
{{ "Q_OBJECT" | indent(indent) }}
{% for entry in qobject.metaobjects %}
{{ entry | indent(indent) }}
{% endfor %}

public:
{% for header in qobject.public %}
{{ header | indent(indent) }}
{% endfor %}
{{ ("~" ~ qobject.ident ~ "();") | indent(indent) }}

private:
{% for header in qobject.private %}
{{ header | indent(indent) }}
{% endfor %}
{% for member in qobject.members %}
{{ member | indent(indent) }}
{% endfor %}
};

static_assert(std::is_base_of<QObject, {{ qobject.ident }}>::value,
              "{{ qobject.ident }} must inherit from QObject");
{% if qobject.namespace %}
} // namespace {{ qobject.namespace }}
{% endif %}

Q_DECLARE_METATYPE({{ qobject.qualified }}*)

{% endfor %}
"""

SOURCE_TEMPLATE = """\
{% if comment %}
// Generated by qobject-bindgen from the "{{ stem }}" bridge. Do not edit.
{% endif %}
#include "{{ header_name }}"

{% for block in extern_blocks %}
{% if block.source %}
{{ block.source }}

{% endif %}
{% endfor %}
{% for qobject in qobjects %}
{% if qobject.namespace %}
namespace {{ qobject.namespace }} {
{% endif %}
{{ qobject.ident }}::~{{ qobject.ident }}()
{
{% for statement in qobject.deconstructors %}
{{ statement | indent(indent) }}
{% endfor %}
}

{% for source in qobject.sources %}
{{ source }}
{% endfor %}
{% if qobject.namespace %}
} // namespace {{ qobject.namespace }}
{% endif %}

{% endfor %}
"""

BUILTIN_TEMPLATES = {
    HEADER_TEMPLATE_NAME: HEADER_TEMPLATE,
    SOURCE_TEMPLATE_NAME: SOURCE_TEMPLATE,
}


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files that take
                precedence over the built-in templates
        """
        self.template_dir = Path(template_dir) if template_dir else None
        self._builtins = DictLoader(dict(BUILTIN_TEMPLATES))
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            logger.debug("Using templates from %s", self.template_dir)
            loader = ChoiceLoader(
                [FileSystemLoader(str(self.template_dir)), self._builtins]
            )
        else:
            loader = self._builtins

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        # Add custom filters for code generation
        self._env.filters["indent"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._builtins.mapping[name] = content
        # Templates are cached per name
        if self._env.cache is not None:
            self._env.cache.clear()

    # Template filters for code generation

    def _indent_filter(self, value: str, spaces: int = 2) -> str:
        """Indent all lines in a string."""
        indent = " " * spaces
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally backed by a template directory."""
    return TemplateEngine(template_dir)
