"""Data models for API records and mirrored entities."""

from pydsc.models._base import DscBaseModel, Snowflake, parse_snowflake
from pydsc.models.flags import UserFlag, UserFlags
from pydsc.models.message import Message, MessageCreate
from pydsc.models.user import NOT_FETCHED, Fetchable, Unfetched, User, UserPayload
from pydsc.models.channel import DMChannel

__all__ = [
    "DMChannel",
    "DscBaseModel",
    "Fetchable",
    "Message",
    "MessageCreate",
    "NOT_FETCHED",
    "Snowflake",
    "Unfetched",
    "User",
    "UserFlag",
    "UserFlags",
    "UserPayload",
    "parse_snowflake",
]
