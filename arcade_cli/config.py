"""ARCADE CLI configuration.

Two Pydantic v2 models live here:

* ``Settings`` -- where the library is fetched from and how long to wait for
  it.  Built once by the CLI (usually via :meth:`Settings.from_env`) and passed
  to the remote client and asset catalog.
* ``ProjectConfig`` -- the metadata collected for one generated project and
  persisted as ``arcade.config.json`` inside it.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SOURCE_SUFFIX = ".c"
FALLBACK_RELEASE_TAG = "v1.0.0"
DEFAULT_VERSION = "1.0.0"
DEFAULT_BINARY_NAME = "game"
DEFAULT_SOURCE_FILE = "main.c"

HEADERS_DIR = "arcade"
ASSETS_DIR = "assets"
METADATA_FILENAME = "arcade.config.json"

NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

# Device names Windows refuses as file or directory names.
RESERVED_NAMES: frozenset[str] = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)


class Settings(BaseModel):
    """Where the ARCADE library lives and how to reach it."""

    repo_owner: str = Field(default="GeorgeET15")
    repo_name: str = Field(default="arcade-lib")
    api_url: str = Field(default="https://api.github.com")
    raw_url: str = Field(default="https://raw.githubusercontent.com")
    download_url: str = Field(default="https://github.com")
    branch: str = Field(default="main")
    fallback_tag: str = Field(default=FALLBACK_RELEASE_TAG, min_length=1)
    timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    github_token: str | None = Field(default=None)

    @property
    def latest_release_url(self) -> str:
        """GitHub API endpoint describing the latest published release."""
        return f"{self.api_url.rstrip('/')}/repos/{self.repo_owner}/{self.repo_name}/releases/latest"

    @property
    def raw_base(self) -> str:
        """Base URL for files on the configured branch."""
        return f"{self.raw_url.rstrip('/')}/{self.repo_owner}/{self.repo_name}/{self.branch}"

    def release_asset_url(self, tag: str, filename: str) -> str:
        """URL of a file attached to the release *tag*."""
        return (
            f"{self.download_url.rstrip('/')}/{self.repo_owner}/{self.repo_name}"
            f"/releases/download/{tag}/{filename}"
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            ARCADE_REPO_OWNER, ARCADE_REPO_NAME, ARCADE_API_URL,
            ARCADE_RAW_URL, ARCADE_DOWNLOAD_URL, ARCADE_BRANCH,
            ARCADE_FALLBACK_TAG, ARCADE_TIMEOUT, GITHUB_TOKEN.
        """
        env_map = {
            "ARCADE_REPO_OWNER": "repo_owner",
            "ARCADE_REPO_NAME": "repo_name",
            "ARCADE_API_URL": "api_url",
            "ARCADE_RAW_URL": "raw_url",
            "ARCADE_DOWNLOAD_URL": "download_url",
            "ARCADE_BRANCH": "branch",
            "ARCADE_FALLBACK_TAG": "fallback_tag",
            "GITHUB_TOKEN": "github_token",
        }
        kwargs: dict[str, Any] = {}
        for var, field_name in env_map.items():
            if os.environ.get(var):
                kwargs[field_name] = os.environ[var]
        if os.environ.get("ARCADE_TIMEOUT"):
            kwargs["timeout"] = float(os.environ["ARCADE_TIMEOUT"])
        return cls(**kwargs)


class ProjectConfig(BaseModel):
    """Metadata describing one scaffolded game project.

    Serialised with camelCase keys (``projectName``, ``binaryName``...) so the
    file reads naturally next to the generated C sources.  Instances are
    frozen: once written to disk the configuration is not mutated.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    project_name: str = Field(..., min_length=1)
    game_name: str = Field(..., min_length=1)
    version: str = Field(default=DEFAULT_VERSION)
    binary_name: str = Field(default=DEFAULT_BINARY_NAME)
    main_source_file: str = Field(default=DEFAULT_SOURCE_FILE)
    icon_path: str = Field(default="")
    author: str = Field(default="")
    description: str = Field(default="")

    @field_validator("binary_name")
    @classmethod
    def _check_binary_name(cls, value: str) -> str:
        if not NAME_PATTERN.match(value):
            raise ValueError("binary name may only contain letters, digits, '_' and '-'")
        return value

    @field_validator("main_source_file")
    @classmethod
    def _check_source_file(cls, value: str) -> str:
        if len(value) <= len(SOURCE_SUFFIX) or not value.endswith(SOURCE_SUFFIX):
            raise ValueError(f"main source file must end with {SOURCE_SUFFIX}")
        if "/" in value or "\\" in value:
            raise ValueError("main source file must be a plain file name")
        return value

    @property
    def source_stem(self) -> str:
        """``main`` for ``main.c``."""
        return self.main_source_file[: -len(SOURCE_SUFFIX)]

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_json(self) -> str:
        """Return the metadata file contents (2-space indented JSON)."""
        return self.model_dump_json(by_alias=True, indent=2) + "\n"

    def save(self, path: Path) -> Path:
        """Write the configuration to *path* and return it."""
        target = Path(path)
        target.write_text(self.to_json(), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ProjectConfig":
        """Load a previously written ``arcade.config.json``."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)
