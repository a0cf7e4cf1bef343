"""Client configuration for pydsc."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pydsc.exceptions import DscConfigError

DEFAULT_API_URL = "https://discord.com/api/v10"
DEFAULT_CDN_URL = "https://cdn.discordapp.com"
USER_AGENT = "DiscordBot (https://github.com/pydsc/pydsc, 0.1)"


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise DscConfigError(f"{key} must be a number, got {raw!r}") from exc


def _env_int(env: Mapping[str, str], key: str) -> int | None:
    value = _env_float(env, key)
    if value is None:
        return None
    if not value.is_integer():
        raise DscConfigError(f"{key} must be an integer, got {env[key]!r}")
    return int(value)


@dataclasses.dataclass(frozen=True)
class DscConfig:
    """Client configuration.

    Parameters
    ----------
    api_url : str
        REST API base URL including the version segment.
    cdn_url : str
        Base URL of the media CDN used for avatars and banners.
    default_image_extension : str
        Extension used for static image URLs when the caller gives none.
    default_image_size : int or None
        Size query parameter appended to image URLs when the caller
        gives none. ``None`` lets the CDN pick.
    request_timeout : float
        Total timeout in seconds for a single REST request.
    user_agent : str
        ``User-Agent`` header sent with every request.
    headers : dict
        Extra HTTP headers sent verbatim with every request. Credentials
        belong here; pydsc does not interpret them.
    """

    api_url: str = DEFAULT_API_URL
    cdn_url: str = DEFAULT_CDN_URL
    default_image_extension: str = "webp"
    default_image_size: int | None = None
    request_timeout: float = 15.0
    user_agent: str = USER_AGENT
    headers: dict[str, str] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise DscConfigError("request_timeout must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> DscConfig:
        """Create configuration from ``DSC_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "DSC_API_URL": "api_url",
            "DSC_CDN_URL": "cdn_url",
            "DSC_IMAGE_EXTENSION": "default_image_extension",
            "DSC_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "default_image_size" not in overrides:
            size = _env_int(env, "DSC_IMAGE_SIZE")
            if size is not None:
                config_kwargs["default_image_size"] = size

        if "request_timeout" not in overrides:
            timeout = _env_float(env, "DSC_REQUEST_TIMEOUT")
            if timeout is not None:
                config_kwargs["request_timeout"] = timeout

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
