"""Main scaffolding orchestrator.

Takes a project name (or asks for one) and builds a ready-to-compile ARCADE
game directory::

    <name>/
        arcade/arcade.h, stb_image.h, stb_image_write.h, stb_image_resize2.h
        assets/background_music.wav      (not in blank mode)
        main.c                           (name is configurable)
        Makefile
        .gitignore
        arcade.config.json

Steps run strictly in order.  A failure aborts the run; nothing already
written is rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field

from arcade_cli.catalog import AssetDescriptor, list_audio_assets, list_header_assets
from arcade_cli.config import ASSETS_DIR, HEADERS_DIR, METADATA_FILENAME, ProjectConfig, Settings
from arcade_cli.errors import DirectoryConflict, FilesystemError, InvalidProjectName
from arcade_cli.prompts import Prompter, validate_project_name
from arcade_cli.remote import ArcadeRepoClient
from arcade_cli.utils import ProgressReporter

from .templates import SourceKind, TemplateRenderer

logger = logging.getLogger(__name__)


class ScaffoldResult(BaseModel):
    """Outcome of a successful scaffold."""

    project_path: Path
    release_tag: str
    config: ProjectConfig
    blank: bool = False
    files: list[Path] = Field(default_factory=list)


class ProjectScaffolder:
    """Creates a new ARCADE project directory.

    Collaborators are injected so a run can be driven without a terminal or
    network: *prompter* supplies the name and metadata, *client* downloads
    the catalog assets, *reporter* renders progress, *renderer* produces the
    generated files.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        prompter: Prompter | None = None,
        reporter: ProgressReporter | None = None,
        client: ArcadeRepoClient | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.prompter = prompter or Prompter()
        self.reporter = reporter or ProgressReporter()
        self.client = client or ArcadeRepoClient(self.settings)
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def scaffold(
        self,
        name: str | None = None,
        *,
        blank: bool = False,
        release: str | None = None,
        output_dir: str | Path = ".",
    ) -> ScaffoldResult:
        """Run every scaffolding step and return the result.

        Prompts are asked between event-loop runs, never inside one, so
        Ctrl-C at a prompt raises ``KeyboardInterrupt`` in ``input()``
        instead of being turned into a task cancellation by ``asyncio.run``.

        Args:
            name: Project directory name.  Prompted for when ``None``.
            blank: Skip the demo game and audio assets.
            release: Use this ARCADE release tag instead of resolving the
                latest one.
            output_dir: Parent directory of the new project.

        Raises:
            PromptCancelled: The operator aborted a prompt.
            InvalidProjectName: *name* was given but is not acceptable.
            DirectoryConflict: The project directory already exists.
            FilesystemError: A directory or file could not be written.
            AssetFetchError: A header or audio download failed.
        """
        # 1. Name resolution
        project_name = self._resolve_name(name)
        root = Path(output_dir) / project_name

        # 2. Directory check
        if root.exists():
            raise DirectoryConflict(root)

        # 3-6. Directories and downloads
        tag = asyncio.run(self._prepare(root, blank=blank, release=release))

        # 7. Configuration
        config = self.prompter.prompt_project_config(project_name)

        # 8. File emission
        with self.reporter.status("Writing project files..."):
            files = asyncio.run(self._emit_files(root, config, blank))

        logger.debug("Scaffolded %s with ARCADE %s", root, tag)
        return ScaffoldResult(
            project_path=root,
            release_tag=tag,
            config=config,
            blank=blank,
            files=files,
        )

    # -- Steps ---------------------------------------------------------------

    def _resolve_name(self, name: str | None) -> str:
        if name is None:
            return self.prompter.prompt_project_name()
        error = validate_project_name(name)
        if error:
            raise InvalidProjectName(name, error)
        return name

    async def _prepare(self, root: Path, *, blank: bool, release: str | None) -> str:
        """Create the project tree and download its assets; return the release tag."""
        with self.reporter.status("Creating project directory..."):
            await self._mkdir(root)
            await self._mkdir(root / HEADERS_DIR)

        if release:
            tag = release
        else:
            with self.reporter.status("Checking latest ARCADE release..."):
                tag = await self.client.resolve_release_tag(on_fallback=self.reporter.report_warning)
        await self._fetch("Fetching headers", list_header_assets(tag, self.settings), root)

        if not blank:
            await self._mkdir(root / ASSETS_DIR)
            await self._fetch("Fetching audio", list_audio_assets(self.settings), root)
        return tag

    async def _fetch(self, label: str, assets: Sequence[AssetDescriptor], root: Path) -> None:
        with self.reporter.track(label, len(assets)) as advance:
            await self.client.fetch_all(assets, root, on_done=lambda _asset: advance())

    async def _emit_files(self, root: Path, config: ProjectConfig, blank: bool) -> list[Path]:
        kind = SourceKind.BLANK if blank else SourceKind.DEMO
        contents = {
            config.main_source_file: self.renderer.render_main_source(kind, config.source_stem),
            "Makefile": self.renderer.render_build_file(config.binary_name, config.main_source_file),
            ".gitignore": self.renderer.render_ignore_file(),
            METADATA_FILENAME: config.to_json(),
        }
        written: list[Path] = []
        for relative, content in contents.items():
            written.append(await self._write(root / relative, content))
        return written

    # -- Filesystem ------------------------------------------------------------

    @staticmethod
    async def _mkdir(path: Path) -> None:
        try:
            await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(path, exc) from exc

    @staticmethod
    async def _write(path: Path, content: str) -> Path:
        try:
            await asyncio.to_thread(_write_file, path, content)
        except OSError as exc:
            raise FilesystemError(path, exc) from exc
        return path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
