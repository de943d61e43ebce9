"""Unit tests for the remote asset catalog (arcade_cli.catalog)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from arcade_cli.catalog import AssetDescriptor, list_audio_assets, list_header_assets
from arcade_cli.config import Settings

pytestmark = pytest.mark.unit


class TestHeaderAssets:
    def test_four_headers_in_arcade_dir(self):
        assets = list_header_assets("v2.3.0")
        assert [a.path for a in assets] == [
            "arcade/arcade.h",
            "arcade/stb_image.h",
            "arcade/stb_image_write.h",
            "arcade/stb_image_resize2.h",
        ]

    def test_only_arcade_h_depends_on_tag(self):
        first = list_header_assets("v1.0.0")
        second = list_header_assets("v2.3.0")
        assert first[0].url != second[0].url
        assert "v2.3.0" in second[0].url
        assert [a.url for a in first[1:]] == [a.url for a in second[1:]]

    def test_release_download_url(self):
        arcade_h = list_header_assets("v2.3.0")[0]
        assert arcade_h.url == (
            "https://github.com/GeorgeET15/arcade-lib/releases/download/v2.3.0/arcade.h"
        )

    def test_stb_headers_from_raw_include(self):
        stb = list_header_assets("v2.3.0")[1]
        assert stb.url == (
            "https://raw.githubusercontent.com/GeorgeET15/arcade-lib/main/include/stb_image.h"
        )

    def test_headers_are_text(self):
        assert not any(a.binary for a in list_header_assets("v2.3.0"))

    def test_custom_settings(self):
        s = Settings(repo_owner="fork", branch="dev")
        assets = list_header_assets("v3", s)
        assert "/fork/" in assets[0].url
        assert "/fork/arcade-lib/dev/include/" in assets[1].url


class TestAudioAssets:
    def test_background_music(self):
        assets = list_audio_assets()
        assert len(assets) == 1
        assert assets[0].path == "assets/background_music.wav"
        assert assets[0].binary is True
        assert assets[0].url.endswith("/assets/background_music.wav")


class TestAssetDescriptor:
    def test_frozen(self):
        asset = AssetDescriptor(url="https://x/a.h", path="arcade/a.h")
        with pytest.raises(ValidationError):
            asset.path = "elsewhere.h"
