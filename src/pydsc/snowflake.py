"""Snowflake identifier decoding.

A snowflake is a 64-bit integer (sent as a decimal string) whose top 42
bits hold milliseconds since the platform epoch, followed by worker id,
process id and a per-process increment.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import NamedTuple

#: First millisecond of 2015, the platform epoch.
EPOCH_MS = 1_420_070_400_000

_TIMESTAMP_SHIFT = 22


class DeconstructedSnowflake(NamedTuple):
    id: int
    timestamp: int
    worker_id: int
    process_id: int
    increment: int


def _as_int(snowflake: str | int) -> int:
    value = int(snowflake)
    if value < 0:
        raise ValueError(f"snowflake must be non-negative, got {snowflake!r}")
    return value


def timestamp_from(snowflake: str | int) -> int:
    """Return the creation time encoded in *snowflake*, in epoch milliseconds."""
    return (_as_int(snowflake) >> _TIMESTAMP_SHIFT) + EPOCH_MS


def datetime_from(snowflake: str | int) -> datetime:
    """Return the creation time encoded in *snowflake* as an aware UTC datetime."""
    return datetime(1970, 1, 1, tzinfo=UTC) + timedelta(milliseconds=timestamp_from(snowflake))


def deconstruct(snowflake: str | int) -> DeconstructedSnowflake:
    value = _as_int(snowflake)
    return DeconstructedSnowflake(
        id=value,
        timestamp=(value >> _TIMESTAMP_SHIFT) + EPOCH_MS,
        worker_id=(value >> 17) & 0x1F,
        process_id=(value >> 12) & 0x1F,
        increment=value & 0xFFF,
    )


def generate(timestamp_ms: int, *, worker_id: int = 0, process_id: int = 0, increment: int = 0) -> str:
    """Build a snowflake for *timestamp_ms*; handy for tests and pagination bounds."""
    if timestamp_ms < EPOCH_MS:
        raise ValueError("timestamp precedes the snowflake epoch")
    value = (
        ((timestamp_ms - EPOCH_MS) << _TIMESTAMP_SHIFT)
        | ((worker_id & 0x1F) << 17)
        | ((process_id & 0x1F) << 12)
        | (increment & 0xFFF)
    )
    return str(value)
