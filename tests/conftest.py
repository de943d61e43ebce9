"""Shared pytest fixtures for the ARCADE CLI test suite.

Provides reusable fixtures for:
- A silent Rich console
- Scripted answers for interactive prompts
- A fake ARCADE GitHub repository served through ``httpx.MockTransport``
- A ready-to-run ``ProjectScaffolder`` wired to the fakes
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable

import httpx
import pytest
from rich.console import Console
from rich.prompt import Prompt

from arcade_cli.config import Settings
from arcade_cli.prompts import Prompter
from arcade_cli.remote import ArcadeRepoClient
from arcade_cli.scaffolder import ProjectScaffolder
from arcade_cli.utils import ProgressReporter

# Contains bytes that are not valid UTF-8, so a text-mode transfer would mangle it.
WAV_BYTES = b"RIFF\x24\x00\x00\x00WAVEfmt \x10\x00\x00\x00\xff\xfe\x80\x00"


# ---------------------------------------------------------------------------
# Fake remote repository
# ---------------------------------------------------------------------------


class FakeArcadeRepo:
    """In-memory stand-in for GitHub's API, release downloads and raw files.

    Attributes:
        tag: ``tag_name`` returned by the latest-release endpoint.
        release_error: When set, the latest-release request fails with a
            connection error.
        fail_suffixes: URLs ending with any of these answer HTTP 404.
        requests: Every URL requested, in order.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.tag = "v2.3.0"
        self.release_error = False
        self.fail_suffixes: tuple[str, ...] = ()
        self.requests: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url == self.settings.latest_release_url:
            if self.release_error:
                raise httpx.ConnectError("network unreachable", request=request)
            return httpx.Response(200, json={"tag_name": self.tag})
        if any(url.endswith(suffix) for suffix in self.fail_suffixes):
            return httpx.Response(404, text="Not Found")
        if url.endswith(".wav"):
            return httpx.Response(200, content=WAV_BYTES)
        if url.endswith(".h"):
            return httpx.Response(200, text=f"/* {url.rsplit('/', 1)[-1]} */\n")
        return httpx.Response(404, text="Not Found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def release_requests(self) -> list[str]:
        return [u for u in self.requests if u == self.settings.latest_release_url]


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo ``configure_logging`` so caplog sees records in every test."""
    yield
    package_logger = logging.getLogger("arcade_cli")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def wav_bytes() -> bytes:
    return WAV_BYTES


@pytest.fixture
def settings() -> Settings:
    """Default settings (pointing at the real GitHub URLs, never contacted)."""
    return Settings()


@pytest.fixture
def fake_repo(settings: Settings) -> FakeArcadeRepo:
    return FakeArcadeRepo(settings)


@pytest.fixture
def repo_client(settings: Settings, fake_repo: FakeArcadeRepo) -> ArcadeRepoClient:
    """An ``ArcadeRepoClient`` whose requests are served by ``fake_repo``."""
    return ArcadeRepoClient(settings, transport=fake_repo.transport)


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_console() -> Console:
    """A Rich console that writes into memory."""
    return Console(file=io.StringIO(), width=120, force_terminal=False)


@pytest.fixture
def scripted_input(monkeypatch: pytest.MonkeyPatch) -> Callable[..., list[str]]:
    """Feed canned answers to every Rich prompt.

    Call the fixture with the answers in order; an empty string accepts the
    prompt's default.  Once the answers run out the next prompt raises
    ``EOFError``, as ``input()`` does at end of input.  Returns the list of
    remaining answers so tests can check everything was consumed.
    """
    remaining: list[str] = []

    def _get_input(cls, console, prompt, password, stream=None):  # noqa: ANN001
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    monkeypatch.setattr(Prompt, "get_input", classmethod(_get_input))

    def _script(*answers: str) -> list[str]:
        remaining[:] = list(answers)
        return remaining

    return _script


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------


@pytest.fixture
def make_scaffolder(
    settings: Settings,
    repo_client: ArcadeRepoClient,
    quiet_console: Console,
) -> Callable[..., ProjectScaffolder]:
    """Factory for scaffolders wired to the fake repo and a silent console."""

    def _make(interactive: bool = False, reporter: ProgressReporter | None = None) -> ProjectScaffolder:
        return ProjectScaffolder(
            settings=settings,
            prompter=Prompter(quiet_console, interactive=interactive),
            reporter=reporter or ProgressReporter(quiet_console),
            client=repo_client,
        )

    return _make
