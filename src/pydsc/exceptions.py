"""Custom exception hierarchy for pydsc."""

from __future__ import annotations


class DscError(Exception):
    """Base exception for all pydsc errors."""


class DscConfigError(DscError):
    """Invalid or missing configuration."""


class DscMissingIdError(DscError, ValueError):
    """An entity was constructed from a record without an ``id``.

    This is a programming error on the caller's side; records handed to
    :class:`pydsc.models.user.User` must always carry the identifier.
    """


class DscInvalidDerivedInputError(DscError, ValueError):
    """A derived value could not be computed from the stored fields.

    Raised instead of returning a plausible-looking but wrong value, e.g.
    when the default avatar index is requested for a user whose
    discriminator is missing or not numeric.
    """

    def __init__(self, message: str, *, field: str = "", value: object = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message)


class DscTransportError(DscError):
    """HTTP-level failure (network, unexpected status, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class DscApiError(DscError):
    """API answered with an error body (application-level error)."""

    def __init__(
        self,
        message: str,
        *,
        code: int | str = "",
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.code = code
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class DscNotFoundError(DscApiError):
    """Requested resource does not exist (HTTP 404)."""
