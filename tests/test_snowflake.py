from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pydsc import snowflake


def test_timestamp_from_known_id() -> None:
    assert snowflake.timestamp_from("175928847299117063") == 1462015105796


def test_timestamp_accepts_int() -> None:
    assert snowflake.timestamp_from(175928847299117063) == 1462015105796


def test_zero_is_epoch() -> None:
    assert snowflake.timestamp_from("0") == snowflake.EPOCH_MS
    assert snowflake.datetime_from("0") == datetime(2015, 1, 1, tzinfo=UTC)


def test_deterministic() -> None:
    assert snowflake.timestamp_from("80351110224678912") == snowflake.timestamp_from("80351110224678912")


def test_deconstruct() -> None:
    parts = snowflake.deconstruct("175928847299117063")
    assert parts.timestamp == 1462015105796
    assert parts.worker_id == 1
    assert parts.process_id == 0
    assert parts.increment == 7


def test_generate_round_trips_timestamp() -> None:
    generated = snowflake.generate(1462015105796, worker_id=1, increment=7)
    assert generated == "175928847299117063"


def test_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        snowflake.timestamp_from("not-a-snowflake")
    with pytest.raises(ValueError):
        snowflake.timestamp_from(-1)
