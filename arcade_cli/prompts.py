"""Interactive collection of project metadata.

Prompts are built on ``rich.prompt.Prompt``.  Each question carries a
validator; an invalid answer raises ``InvalidResponse`` from
``process_response`` so Rich prints the message and asks again.  Aborting a
prompt (Ctrl-C or end of input) raises :class:`PromptCancelled`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from rich.console import Console
from rich.prompt import InvalidResponse, Prompt

from arcade_cli.config import (
    DEFAULT_BINARY_NAME,
    DEFAULT_SOURCE_FILE,
    DEFAULT_VERSION,
    NAME_PATTERN,
    RESERVED_NAMES,
    SOURCE_SUFFIX,
    ProjectConfig,
)
from arcade_cli.errors import InvalidProjectName, PromptCancelled

Validator = Callable[[str], Optional[str]]


# ---------------------------------------------------------------------------
# Validators (return an error message, or None when the value is fine)
# ---------------------------------------------------------------------------


def validate_project_name(value: str) -> str | None:
    if not value:
        return "Project name cannot be empty."
    if not NAME_PATTERN.match(value):
        return "Use only letters, numbers, hyphens and underscores."
    if value.upper() in RESERVED_NAMES:
        return f"'{value}' is a reserved name on Windows."
    return None


def validate_binary_name(value: str) -> str | None:
    if not value:
        return "Binary name cannot be empty."
    if not NAME_PATTERN.match(value):
        return "Use only letters, numbers, hyphens and underscores."
    return None


def validate_source_file(value: str) -> str | None:
    if len(value) <= len(SOURCE_SUFFIX) or not value.endswith(SOURCE_SUFFIX):
        return f"Source file must end with {SOURCE_SUFFIX} (e.g. {DEFAULT_SOURCE_FILE})."
    if "/" in value or "\\" in value:
        return "Source file must sit in the project root (no directories)."
    return None


def validate_required(label: str) -> Validator:
    """Return a validator rejecting empty answers for *label*."""

    def _check(value: str) -> str | None:
        return f"{label} cannot be empty." if not value else None

    return _check


# ---------------------------------------------------------------------------
# Prompter
# ---------------------------------------------------------------------------


class _ValidatedPrompt(Prompt):
    """A ``Prompt`` that re-asks until *validator* accepts the answer."""

    def __init__(self, prompt: str, *, validator: Validator | None = None, **kwargs: Any) -> None:
        super().__init__(prompt, **kwargs)
        self.validator = validator

    def process_response(self, value: str) -> str:
        value = super().process_response(value)
        if self.validator is not None:
            error = self.validator(value)
            if error:
                raise InvalidResponse(f"[prompt.invalid]{error}")
        return value


class Prompter:
    """Asks the operator for the project name and configuration.

    With ``interactive=False`` no question is asked and every field takes its
    default value.
    """

    def __init__(self, console: Console | None = None, interactive: bool = True) -> None:
        self.console = console or Console()
        self.interactive = interactive

    def _ask(self, label: str, *, default: Any = ..., validator: Validator | None = None) -> str:
        # Rich returns the default for an empty answer without validating it.
        prompt = _ValidatedPrompt(
            f"[cyan]{label}[/cyan]",
            console=self.console,
            validator=validator,
            show_default=isinstance(default, str) and bool(default),
        )
        try:
            return prompt(default=default)
        except (KeyboardInterrupt, EOFError) as exc:
            raise PromptCancelled() from exc

    def prompt_project_name(self) -> str:
        """Ask for the project (directory) name."""
        if not self.interactive:
            raise InvalidProjectName("", "a project name is required when prompts are disabled")
        return self._ask("Project name", validator=validate_project_name)

    def prompt_project_config(self, default_name: str) -> ProjectConfig:
        """Ask for the game metadata, offering defaults derived from *default_name*."""
        if not self.interactive:
            return ProjectConfig(project_name=default_name, game_name=default_name)

        self.console.print("[magenta]Configure your game[/magenta] [dim](Enter accepts the default)[/dim]")
        game_name = self._ask("Game name", default=default_name, validator=validate_required("Game name"))
        version = self._ask("Version", default=DEFAULT_VERSION)
        binary_name = self._ask("Binary name", default=DEFAULT_BINARY_NAME, validator=validate_binary_name)
        source_file = self._ask("Main source file", default=DEFAULT_SOURCE_FILE, validator=validate_source_file)
        icon_path = self._ask("Icon path (optional)", default="")
        author = self._ask("Author (optional)", default="")
        description = self._ask("Description (optional)", default="")

        return ProjectConfig(
            project_name=default_name,
            game_name=game_name,
            version=version or DEFAULT_VERSION,
            binary_name=binary_name,
            main_source_file=source_file,
            icon_path=icon_path,
            author=author,
            description=description,
        )
