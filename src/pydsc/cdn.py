"""CDN asset URL construction.

Only URL building lives here; no request is ever made to the CDN.
"""

from __future__ import annotations

from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from pydsc.config import DEFAULT_CDN_URL, DscConfig
from pydsc.exceptions import DscConfigError

ImageExtension = Literal["webp", "png", "jpg", "jpeg", "gif"]

#: Sizes the CDN accepts (powers of two from 16 to 4096).
ALLOWED_SIZES: frozenset[int] = frozenset(2**exp for exp in range(4, 13))

#: Number of default avatars addressable by ``discriminator % 5``.
DEFAULT_AVATAR_COUNT = 5


class ImageURLOptions(BaseModel):
    """Options for an image URL.

    ``force_static`` keeps animated hashes (``a_`` prefix) on the static
    ``extension`` instead of switching to ``gif``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    extension: ImageExtension | None = None
    size: int | None = None
    force_static: bool = False

    @field_validator("size")
    @classmethod
    def _check_size(cls, value: int | None) -> int | None:
        if value is not None and value not in ALLOWED_SIZES:
            raise ValueError(f"size must be one of {sorted(ALLOWED_SIZES)}")
        return value


class AssetUrlBuilder(Protocol):
    """Structural interface for the image URL builder a user is bound to.

    Lets tests and alternative CDNs stand in for :class:`CdnUrlBuilder`.
    """

    def avatar(self, user_id: str, avatar_hash: str, options: dict[str, Any] | None = None) -> str: ...

    def banner(self, user_id: str, banner_hash: str, options: dict[str, Any] | None = None) -> str: ...

    def default_avatar(self, index: int) -> str: ...


def is_animated(asset_hash: str) -> bool:
    return asset_hash.startswith("a_")


class CdnUrlBuilder:
    """Build avatar, banner and default-avatar URLs for the media CDN."""

    def __init__(
        self,
        base_url: str = DEFAULT_CDN_URL,
        *,
        default_extension: ImageExtension = "webp",
        default_size: int | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._defaults = self._options(extension=default_extension, size=default_size)

    @classmethod
    def from_config(cls, config: DscConfig) -> CdnUrlBuilder:
        return cls(
            config.cdn_url,
            default_extension=config.default_image_extension,  # type: ignore[arg-type]
            default_size=config.default_image_size,
        )

    @staticmethod
    def _options(**options: Any) -> ImageURLOptions:
        try:
            return ImageURLOptions.model_validate(options)
        except ValidationError as exc:
            raise DscConfigError(f"Invalid image URL options: {exc}") from exc

    def _dynamic(self, route: str, asset_hash: str, options: dict[str, Any]) -> str:
        opts = self._options(**options)
        extension = opts.extension or self._defaults.extension or "webp"
        if is_animated(asset_hash) and not opts.force_static:
            extension = "gif"
        size = opts.size if opts.size is not None else self._defaults.size
        url = f"{self._base_url}/{route}/{asset_hash}.{extension}"
        if size is not None:
            url = f"{url}?size={size}"
        return url

    def avatar(self, user_id: str, avatar_hash: str, options: dict[str, Any] | None = None) -> str:
        return self._dynamic(f"avatars/{user_id}", avatar_hash, dict(options or {}))

    def banner(self, user_id: str, banner_hash: str, options: dict[str, Any] | None = None) -> str:
        return self._dynamic(f"banners/{user_id}", banner_hash, dict(options or {}))

    def default_avatar(self, index: int) -> str:
        """Default avatars are always PNG and take no options."""
        if not 0 <= index < DEFAULT_AVATAR_COUNT:
            raise ValueError(f"default avatar index out of range: {index}")
        return f"{self._base_url}/embed/avatars/{index}.png"
