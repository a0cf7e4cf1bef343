from __future__ import annotations

import pytest

from pydsc.cdn import CdnUrlBuilder
from pydsc.config import DscConfig
from pydsc.exceptions import DscConfigError


def test_avatar_defaults_to_webp() -> None:
    cdn = CdnUrlBuilder()
    assert cdn.avatar("1", "abc") == "https://cdn.discordapp.com/avatars/1/abc.webp"


def test_animated_hash_uses_gif_unless_forced_static() -> None:
    cdn = CdnUrlBuilder("https://cdn.example/")
    assert cdn.avatar("1", "a_abc") == "https://cdn.example/avatars/1/a_abc.gif"
    assert cdn.avatar("1", "a_abc", {"force_static": True}) == "https://cdn.example/avatars/1/a_abc.webp"


def test_banner_with_size_and_extension() -> None:
    cdn = CdnUrlBuilder()
    url = cdn.banner("1", "abc", {"extension": "png", "size": 1024})
    assert url == "https://cdn.discordapp.com/banners/1/abc.png?size=1024"


def test_builder_defaults_from_config() -> None:
    cdn = CdnUrlBuilder.from_config(
        DscConfig(cdn_url="https://media.example", default_image_extension="png", default_image_size=128)
    )
    assert cdn.avatar("1", "abc") == "https://media.example/avatars/1/abc.png?size=128"
    assert cdn.avatar("1", "abc", {"size": 16}) == "https://media.example/avatars/1/abc.png?size=16"


def test_default_avatar() -> None:
    assert CdnUrlBuilder().default_avatar(3) == "https://cdn.discordapp.com/embed/avatars/3.png"
    with pytest.raises(ValueError):
        CdnUrlBuilder().default_avatar(5)


@pytest.mark.parametrize("options", [{"size": 100}, {"extension": "bmp"}, {"unknown": True}])
def test_invalid_options_raise_config_error(options: dict) -> None:
    with pytest.raises(DscConfigError):
        CdnUrlBuilder().avatar("1", "abc", options)
