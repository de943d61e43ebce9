"""Jinja2 template rendering for ARCADE project files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``arcade_cli/scaffolder/templates/`` directory and renders the generated
C source, Makefile and ``.gitignore``.  Rendering is pure: nothing here
touches the project directory.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class SourceKind(str, Enum):
    """Which main source file to generate."""

    DEMO = "demo"
    BLANK = "blank"


_MAIN_TEMPLATES: dict[SourceKind, str] = {
    SourceKind.DEMO: "main_demo.c.j2",
    SourceKind.BLANK: "main_blank.c.j2",
}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the Jinja2 templates used to scaffold a game project.

    Undefined template variables are errors rather than empty strings, so a
    missing context key never produces a silently broken Makefile.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"Makefile.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- Project files -----------------------------------------------------

    def render_main_source(self, kind: SourceKind, source_stem: str) -> str:
        """Render the demo game or the empty stub for ``<source_stem>.c``."""
        return self.render(_MAIN_TEMPLATES[SourceKind(kind)], {"source_stem": source_stem})

    def render_build_file(self, binary_name: str, source_file: str) -> str:
        """Render the Makefile building *source_file* into *binary_name*."""
        return self.render(
            "Makefile.j2",
            {"binary_name": binary_name, "source_file": source_file},
        )

    def render_ignore_file(self) -> str:
        """Render the static ``.gitignore``."""
        return self.render("gitignore.j2", {})
