"""``context.template`` -- Jinja2 rendering over plugin templates.

Templates live in the running plugin's ``templates/`` directory. Props are
passed to the template both as top-level variables and as ``props``, so
``{{ name }}`` and ``{{ props.name }}`` are equivalent.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from plugcli.exceptions import LoadError

TEMPLATES_DIR = "templates"


def _create_jinja_env(directory: Optional[Path] = None) -> Environment:
    """Jinja2 environment for generated source files (no autoescape)."""
    return Environment(
        loader=FileSystemLoader(str(directory)) if directory is not None else None,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class TemplateToolbox:
    def __init__(self, context: Any) -> None:
        self._context = context

    def render(self, text: str, props: Optional[dict[str, Any]] = None) -> str:
        props = props or {}
        return _create_jinja_env().from_string(text).render({**props, "props": props})

    def template_dir(self, directory: Optional[str | Path] = None) -> Path:
        """Return *directory*, or the running plugin's ``templates/`` directory."""
        if directory is not None:
            return Path(directory)
        plugin = self._context.plugin
        if plugin is None or plugin.directory is None:
            raise LoadError("No plugin directory to look up templates in")
        return Path(plugin.directory) / TEMPLATES_DIR

    def generate(
        self,
        template: str,
        target: Optional[str | Path] = None,
        props: Optional[dict[str, Any]] = None,
        directory: Optional[str | Path] = None,
    ) -> str:
        """Render *template* and optionally write it to *target*.

        Args:
            template: Template name relative to the templates directory.
            target: File to write the rendered text to; parents are created.
            props: Template variables.
            directory: Templates directory; defaults to the running
                plugin's ``templates/``.

        Returns:
            The rendered text.

        Raises:
            LoadError: If the template does not exist.
        """
        template_dir = self.template_dir(directory)
        props = props or {}
        try:
            loaded = _create_jinja_env(template_dir).get_template(template)
        except TemplateNotFound as exc:
            raise LoadError(f"Template not found: {template_dir / template}") from exc
        content = loaded.render({**props, "props": props})
        if target is not None:
            target_path = Path(target)
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(content, encoding="utf-8")
        return content


def setup(context: Any) -> None:
    context.template = TemplateToolbox(context)
