"""ARCADE project scaffolder -- generates new game directories.

Quick usage::

    from arcade_cli.scaffolder import ProjectScaffolder

    scaffolder = ProjectScaffolder()
    result = scaffolder.scaffold("my-game", blank=False)
    print(result.project_path, result.release_tag)
"""

from arcade_cli.scaffolder.generator import ProjectScaffolder, ScaffoldResult
from arcade_cli.scaffolder.templates import SourceKind, TemplateRenderer

__all__ = [
    "ProjectScaffolder",
    "ScaffoldResult",
    "SourceKind",
    "TemplateRenderer",
]
