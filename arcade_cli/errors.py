"""Exception types raised while scaffolding an ARCADE project.

Every fatal condition derives from :class:`ArcadeError` and carries the
process exit code the CLI should terminate with.  Errors are raised at the
step that fails and caught exactly once, in ``arcade_cli.cli.main``.
"""

from __future__ import annotations

from pathlib import Path

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_CONFLICT = 2
EXIT_FAILURE = 3


class ArcadeError(Exception):
    """Base class for every fatal scaffolding error."""

    exit_code: int = EXIT_FAILURE


class PromptCancelled(ArcadeError):
    """Raised when the operator aborts an interactive prompt."""

    def __init__(self, message: str = "Prompt cancelled by user.") -> None:
        super().__init__(message)


class InvalidProjectName(ArcadeError):
    """Raised when a project name passed on the command line is rejected."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f"Invalid project name {name!r}: {reason}")


class DirectoryConflict(ArcadeError):
    """Raised when the target project directory already exists."""

    exit_code = EXIT_CONFLICT

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory {path} already exists.")


class FilesystemError(ArcadeError):
    """Raised when a directory or file cannot be created or written."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


class AssetFetchError(ArcadeError):
    """Raised when downloading (or saving) a remote asset fails."""

    def __init__(self, asset_path: str, cause: BaseException) -> None:
        self.asset_path = asset_path
        self.cause = cause
        super().__init__(f"Failed to fetch {asset_path}: {cause}")


class ReleaseResolutionError(Exception):
    """Raised when the latest release tag cannot be determined.

    Never escapes :mod:`arcade_cli.remote`; the resolver falls back to the
    configured default tag instead.
    """
