"""Fixed list of remote files copied into every new project."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from arcade_cli.config import ASSETS_DIR, HEADERS_DIR, Settings

STB_HEADERS = ("stb_image.h", "stb_image_write.h", "stb_image_resize2.h")
AUDIO_FILES = ("background_music.wav",)


class AssetDescriptor(BaseModel):
    """A remote file and where it lands inside the project."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Remote location of the file")
    path: str = Field(..., description="Destination, relative to the project root")
    binary: bool = Field(default=False, description="Transfer as bytes rather than text")


def list_header_assets(tag: str, settings: Settings | None = None) -> list[AssetDescriptor]:
    """Return the library headers for release *tag*.

    ``arcade.h`` is attached to each GitHub release; the stb headers are
    vendored on the default branch and do not depend on the tag.
    """
    settings = settings or Settings()
    headers = [
        AssetDescriptor(
            url=settings.release_asset_url(tag, "arcade.h"),
            path=f"{HEADERS_DIR}/arcade.h",
        )
    ]
    for name in STB_HEADERS:
        headers.append(
            AssetDescriptor(
                url=f"{settings.raw_base}/include/{name}",
                path=f"{HEADERS_DIR}/{name}",
            )
        )
    return headers


def list_audio_assets(settings: Settings | None = None) -> list[AssetDescriptor]:
    """Return the audio files used by the demo game."""
    settings = settings or Settings()
    return [
        AssetDescriptor(
            url=f"{settings.raw_base}/{ASSETS_DIR}/{name}",
            path=f"{ASSETS_DIR}/{name}",
            binary=True,
        )
        for name in AUDIO_FILES
    ]
