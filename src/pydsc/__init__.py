"""pydsc - Async Python models for mirrored chat-platform users."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydsc")
except PackageNotFoundError:
    __version__ = "0+local"
from pydsc.cdn import CdnUrlBuilder, ImageURLOptions
from pydsc.client import DscClient
from pydsc.config import DscConfig
from pydsc.events import UserUpdate
from pydsc.exceptions import (
    DscApiError,
    DscConfigError,
    DscError,
    DscInvalidDerivedInputError,
    DscMissingIdError,
    DscNotFoundError,
    DscTransportError,
)
from pydsc.messaging import DirectMessenger
from pydsc.models.messageable import Messageable
from pydsc.models import (
    NOT_FETCHED,
    DMChannel,
    Message,
    MessageCreate,
    User,
    UserFlag,
    UserFlags,
    UserPayload,
)
from pydsc.store import UserStore

__all__ = [
    "__version__",
    "CdnUrlBuilder",
    "DMChannel",
    "DirectMessenger",
    "DscApiError",
    "DscClient",
    "DscConfig",
    "DscConfigError",
    "DscError",
    "DscInvalidDerivedInputError",
    "DscMissingIdError",
    "DscNotFoundError",
    "DscTransportError",
    "ImageURLOptions",
    "Message",
    "MessageCreate",
    "Messageable",
    "NOT_FETCHED",
    "User",
    "UserFlag",
    "UserFlags",
    "UserPayload",
    "UserStore",
    "UserUpdate",
]
