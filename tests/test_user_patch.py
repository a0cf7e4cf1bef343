"""Merge semantics of User._patch."""

from __future__ import annotations

import pytest

from pydsc.exceptions import DscMissingIdError
from pydsc.models.flags import UserFlag, UserFlags
from pydsc.models.user import NOT_FETCHED, User, UserPayload

FULL_RECORD: dict = {
    "id": "175928847299117063",
    "username": "ada",
    "discriminator": "0007",
    "avatar": "a1b2c3",
    "public_flags": 64,
}


class TestConstruct:
    def test_id_only_record_is_partial(self) -> None:
        user = User({"id": "1"})
        assert user.partial is True
        assert user.bot is None
        assert user.system is None
        assert user.flags is None
        assert user.username is None
        assert user.discriminator is None
        assert user.avatar is None
        assert user.banner is NOT_FETCHED
        assert user.accent_color is NOT_FETCHED

    def test_missing_id_fails_fast(self) -> None:
        with pytest.raises(DscMissingIdError):
            User({"username": "ada"})

    def test_empty_id_fails_fast(self) -> None:
        with pytest.raises(DscMissingIdError):
            User({"id": ""})

    def test_missing_id_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            User(UserPayload())

    def test_integer_id_normalised_to_string(self) -> None:
        assert User({"id": 42}).id == "42"

    def test_full_record_is_not_partial(self) -> None:
        user = User(FULL_RECORD)
        assert user.partial is False
        assert user.bot is False
        assert user.system is False
        assert user.flags == UserFlags(UserFlag.HYPESQUAD_ONLINE_HOUSE_1)

    def test_id_is_read_only(self) -> None:
        user = User({"id": "1"})
        with pytest.raises(AttributeError):
            user.id = "2"  # type: ignore[misc]


class TestPlainOptional:
    def test_explicit_null_overwrites(self) -> None:
        user = User(FULL_RECORD)
        user._patch({"avatar": None})
        assert user.avatar is None

    def test_absent_field_is_kept(self) -> None:
        user = User(FULL_RECORD)
        user._patch({"discriminator": "0008"})
        assert user.username == "ada"
        assert user.avatar == "a1b2c3"
        assert user.discriminator == "0008"

    def test_username_null_makes_user_partial_again(self) -> None:
        user = User(FULL_RECORD)
        user._patch({"username": None})
        assert user.partial is True


class TestPartialAwareBooleans:
    def test_booleans_stay_unknown_while_partial(self) -> None:
        user = User({"id": "1"})
        user._patch({})
        user._patch({"avatar": "abc"})
        assert user.bot is None
        assert user.system is None

    def test_full_record_without_bot_sets_false(self) -> None:
        user = User({"id": "1"})
        user._patch({"username": "ada", "discriminator": "0007"})
        assert user.bot is False
        assert user.system is False

    def test_present_value_is_coerced_to_bool(self) -> None:
        user = User({"id": "1", "bot": 1, "system": None})
        assert user.bot is True
        assert user.system is False

    def test_explicit_bool_survives_later_sparse_records(self) -> None:
        user = User({**FULL_RECORD, "bot": True})
        user._patch({})
        assert user.bot is True

    def test_partial_user_can_learn_booleans_explicitly(self) -> None:
        user = User({"id": "1", "bot": True})
        assert user.partial is True
        assert user.bot is True
        assert user.system is None


class TestStickyNullable:
    def test_banner_lifecycle(self) -> None:
        user = User({"id": "1"})
        user._patch({"banner": "abc"})
        user._patch({})
        assert user.banner == "abc"

        user._patch({"banner": None})
        assert user.banner is None

        user._patch({})
        user._patch({"username": "ada"})
        assert user.banner is None

    def test_accent_color_lifecycle(self) -> None:
        user = User({"id": "1"})
        user._patch({})
        assert user.accent_color is NOT_FETCHED

        user._patch({"accent_color": 0xFF00FF})
        user._patch({})
        assert user.accent_color == 0xFF00FF

        user._patch({"accent_color": None})
        user._patch({})
        assert user.accent_color is None

    def test_value_can_replace_null(self) -> None:
        user = User({"id": "1", "banner": None})
        user._patch({"banner": "def"})
        assert user.banner == "def"


class TestFlagsReplace:
    def test_absent_flags_keep_previous(self) -> None:
        user = User({"id": "1", "public_flags": 4})
        user._patch({})
        assert user.flags is not None
        assert user.flags.bitfield == 4

    def test_last_write_wins(self) -> None:
        user = User({"id": "1", "public_flags": 4})
        first = user.flags
        user._patch({"public_flags": 1})
        assert user.flags is not None
        assert user.flags.bitfield == 1
        assert user.flags is not first

    def test_null_clears_flags(self) -> None:
        user = User({"id": "1", "public_flags": 4})
        user._patch({"public_flags": None})
        assert user.flags is None


def test_documented_scenario() -> None:
    user = User({"id": "1"})
    assert user.partial is True

    user._patch({"username": "ada", "discriminator": "0007"})
    assert user.partial is False
    assert user.tag == "ada#0007"

    user._patch({})
    assert user.bot is False

    user._patch({"bot": True})
    assert user.bot is True


def test_update_returns_snapshot_before_patch() -> None:
    user = User(FULL_RECORD)
    before = user._update({"username": "grace", "banner": "xyz"})

    assert before.username == "ada"
    assert before.banner is NOT_FETCHED
    assert user.username == "grace"
    assert user.banner == "xyz"
    assert before.id == user.id


def test_payload_tracks_presence_of_null_keys() -> None:
    payload = UserPayload.model_validate({"id": "1", "banner": None})
    assert payload.has("banner") is True
    assert payload.has("accent_color") is False
    assert payload.raw == {"id": "1", "banner": None}


def test_numeric_discriminator_is_zero_padded() -> None:
    payload = UserPayload.model_validate({"id": "1", "discriminator": 7})
    assert payload.discriminator == "0007"
