"""Tests for megaplan/utils.py -- naming, coercion, IDs, URIs and signing."""

from __future__ import annotations

import base64
import string
from datetime import datetime, timezone
from urllib.parse import parse_qsl

import pytest

from megaplan import UsageError
from megaplan import utils

# =========================================================================
# Case conversion
# =========================================================================


class TestCaseConversion:
    @pytest.mark.parametrize(
        ("snake", "pascal"),
        [
            ("folder", "Folder"),
            ("time_created", "TimeCreated"),
            ("subject_id", "SubjectId"),
            ("only_actual", "OnlyActual"),
            ("a_b_c", "ABC"),
        ],
    )
    def test_to_pascal_case(self, snake: str, pascal: str) -> None:
        assert utils.to_pascal_case(snake) == pascal

    @pytest.mark.parametrize(
        ("pascal", "snake"),
        [
            ("Folder", "folder"),
            ("TimeCreated", "time_created"),
            ("AccessId", "access_id"),
            ("id", "id"),
        ],
    )
    def test_to_underscore(self, pascal: str, snake: str) -> None:
        assert utils.to_underscore(pascal) == snake

    @pytest.mark.parametrize(
        "name",
        ["id", "time_created", "employee_id", "deadline_type", "favorites_only", "x"],
    )
    def test_snake_case_survives_round_trip(self, name: str) -> None:
        assert utils.to_underscore(utils.to_pascal_case(name)) == name

    def test_only_lowercase_letters_and_underscores_are_used(self) -> None:
        name = "comments_unread"
        assert set(name) <= set(string.ascii_lowercase + "_")
        assert utils.to_underscore(utils.to_pascal_case(name)) == name

    def test_non_string_keys_are_stringified(self) -> None:
        assert utils.to_pascal_case(0) == "0"


class TestConvertKeys:
    def test_nested_mappings_are_rekeyed(self) -> None:
        data = {"subject_type": "task", "model": {"text": "hi", "work_date": None}}
        assert utils.convert_keys_to_pascal_case(data) == {
            "SubjectType": "task",
            "Model": {"Text": "hi", "WorkDate": None},
        }

    def test_lists_keep_positions_and_rekey_members(self) -> None:
        data = {"Tasks": [{"Id": 1}, {"Id": 2}], "Tags": ["a", "b"]}
        assert utils.convert_keys_to_underscore(data) == {
            "tasks": [{"id": 1}, {"id": 2}],
            "tags": ["a", "b"],
        }

    def test_scalars_pass_through(self) -> None:
        stamp = datetime(2020, 1, 1)
        assert utils.convert_keys_to_underscore(stamp) is stamp
        assert utils.convert_keys_to_underscore("TimeCreated") == "TimeCreated"
        assert utils.convert_keys_to_underscore(5) == 5

    def test_source_is_not_mutated(self) -> None:
        data = {"Id": 1}
        utils.convert_keys_to_underscore(data)
        assert data == {"Id": 1}


# =========================================================================
# Value coercion
# =========================================================================


class TestConvertValuesToNatives:
    def test_date_fields_are_parsed(self) -> None:
        out = utils.convert_values_to_natives(
            {"time_created": "2020-01-01T00:00:00Z", "birthday": "1990-05-17"}
        )
        assert out["time_created"] == datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert out["birthday"] == datetime(1990, 5, 17)

    def test_empty_date_becomes_none(self) -> None:
        assert utils.convert_values_to_natives({"fire_day": ""}) == {"fire_day": None}

    def test_other_fields_untouched(self) -> None:
        data = {"name": "2020-01-01", "deadline": "2020-01-01 10:00:00", "id": 5}
        assert utils.convert_values_to_natives(data) == data

    def test_nested_mappings_and_lists(self) -> None:
        data = {"task": {"activity": "2021-03-04 05:06:07"}, "events": [{"start_time": ""}]}
        out = utils.convert_values_to_natives(data)
        assert out["task"]["activity"] == datetime(2021, 3, 4, 5, 6, 7)
        assert out["events"] == [{"start_time": None}]

    def test_unparseable_date_is_kept(self) -> None:
        assert utils.convert_values_to_natives({"time_updated": "yesterday"}) == {
            "time_updated": "yesterday"
        }


# =========================================================================
# object_filter
# =========================================================================


class TestObjectFilter:
    def test_default_drops_none(self) -> None:
        assert utils.object_filter({"a": 1, "b": None, "c": None}) == {"a": 1}

    def test_falsy_values_are_kept(self) -> None:
        assert utils.object_filter({"a": 0, "b": "", "c": False}) == {"a": 0, "b": "", "c": False}

    def test_custom_predicate(self) -> None:
        out = utils.object_filter({"a": 1, "b": 2, "c": 3}, lambda v, k: v % 2 == 1)
        assert out == {"b": 2}

    def test_predicate_receives_key(self) -> None:
        out = utils.object_filter({"keep": 1, "drop": 1}, lambda v, k: k == "drop")
        assert out == {"keep": 1}

    def test_none_mapping(self) -> None:
        assert utils.object_filter(None) == {}


# =========================================================================
# normalize_id
# =========================================================================


class TestNormalizeId:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (0, 1000000),
            (1, 1000001),
            (999999, 1999999),
            ("42", 1000042),
            (1000000, 1000000),
            (1234567, 1234567),
            ("2000001", 2000001),
        ],
    )
    def test_offset_rule(self, raw: object, expected: int) -> None:
        assert utils.normalize_id(raw) == expected

    def test_project_prefix_is_kept(self) -> None:
        assert utils.normalize_id("p12") == "p1000012"
        assert utils.normalize_id("p1000012") == "p1000012"

    def test_none_passes_through(self) -> None:
        assert utils.normalize_id(None) is None

    def test_idempotent(self) -> None:
        once = utils.normalize_id(7)
        assert utils.normalize_id(once) == once

    def test_garbage_raises(self) -> None:
        with pytest.raises(UsageError, match="Invalid Megaplan id"):
            utils.normalize_id("abc")


# =========================================================================
# subst_uri
# =========================================================================


class TestSubstUri:
    def test_double_colon_then_single_colon(self) -> None:
        assert utils.subst_uri("::task/list.api") == "BumsTaskApiV01/Task/list.api"

    def test_auth_shortcut(self) -> None:
        assert utils.subst_uri("::auth") == "BumsCommonApiV01/User/authorize.api"

    def test_single_colon_only(self) -> None:
        assert (
            utils.subst_uri(":trade/Deal/createFromOnlineStore.api")
            == "BumsTradeApiV01/Deal/createFromOnlineStore.api"
        )

    def test_plain_path_untouched(self) -> None:
        assert utils.subst_uri("BumsTaskApiV01/Task/card.api") == "BumsTaskApiV01/Task/card.api"

    def test_prefix_only_matched_at_start(self) -> None:
        assert utils.subst_uri("x/::task") == "x/::task"

    def test_unknown_shortcut_raises(self) -> None:
        with pytest.raises(UsageError, match="Unknown URI shortcut '::tsak'"):
            utils.subst_uri("::tsak/list.api")

    def test_unknown_namespace_raises(self) -> None:
        with pytest.raises(UsageError, match="':nope'"):
            utils.subst_uri(":nope/Thing.api")


# =========================================================================
# Signing
# =========================================================================


class TestSignature:
    TEXT = "\n".join(
        [
            "POST",
            "",
            "application/x-www-form-urlencoded",
            "Mon, 19 Oct 2026 10:00:00 GMT",
            "megaplan.example.com/BumsTaskApiV01/Task/list.api",
        ]
    )

    def test_deterministic(self) -> None:
        assert utils.make_signature("key", self.TEXT) == utils.make_signature("key", self.TEXT)

    def test_is_base64_of_hex_sha1(self) -> None:
        decoded = base64.b64decode(utils.make_signature("key", self.TEXT)).decode("ascii")
        assert len(decoded) == 40
        assert set(decoded) <= set("0123456789abcdef")

    @pytest.mark.parametrize(
        "changed",
        [
            TEXT.replace("POST", "GET"),
            TEXT.replace("application/x-www-form-urlencoded", "application/json"),
            TEXT.replace("10:00:00", "10:00:01"),
            TEXT.replace("list.api", "card.api"),
        ],
    )
    def test_any_field_changes_signature(self, changed: str) -> None:
        assert utils.make_signature("key", changed) != utils.make_signature("key", self.TEXT)

    def test_key_changes_signature(self) -> None:
        assert utils.make_signature("k1", self.TEXT) != utils.make_signature("k2", self.TEXT)

    def test_md5_hex(self) -> None:
        assert utils.md5("") == "d41d8cd98f00b204e9800998ecf8427e"


# =========================================================================
# Form encoding
# =========================================================================


class TestEncodeForm:
    def test_flat(self) -> None:
        assert parse_qsl(utils.encode_form({"Folder": "owner", "Limit": 10})) == [
            ("Folder", "owner"),
            ("Limit", "10"),
        ]

    def test_nested_and_lists_use_brackets(self) -> None:
        body = utils.encode_form({"Model": {"Name": "x", "Auditors": [1000001, 1000002]}})
        assert parse_qsl(body) == [
            ("Model[Name]", "x"),
            ("Model[Auditors][0]", "1000001"),
            ("Model[Auditors][1]", "1000002"),
        ]

    def test_scalars(self) -> None:
        body = utils.encode_form(
            {"Detailed": True, "Count": False, "Empty": None, "At": datetime(2026, 1, 2, 3, 4, 5)}
        )
        assert parse_qsl(body, keep_blank_values=True) == [
            ("Detailed", "true"),
            ("Count", "false"),
            ("Empty", ""),
            ("At", "2026-01-02T03:04:05"),
        ]

    def test_spaces_are_percent_encoded(self) -> None:
        assert utils.encode_form({"Qs": "buy an elephant"}) == "Qs=buy%20an%20elephant"

    def test_empty(self) -> None:
        assert utils.encode_form({}) == ""
