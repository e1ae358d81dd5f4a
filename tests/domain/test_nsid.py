"""Tests for the Nsid value type, length policy, and engine API."""

from __future__ import annotations

import dataclasses

import pytest

from nsidctl.domain.errors import (
    AuthorityTooLongError,
    NameTooLongError,
    NsidError,
    NsidSyntaxError,
    NsidTooLongError,
    NsidValidationError,
)
from nsidctl.domain.nsid import (
    MAX_AUTHORITY_LENGTH,
    MAX_NAME_LENGTH,
    MAX_NSID_LENGTH,
    Nsid,
    construct_nsid,
    is_valid_nsid,
    parse_nsid,
    to_canonical_string,
    validate_nsid,
)

VALID = [
    "com.example.bar",
    "com.example.*",
    "com.long-thing1.cool.fooBarBaz",
    "app.bsky.feed.post",
    "io.github.user-name.a1",
    "A.B.C",
    "com." + "a" * 59 + ".bar",
    "com.example." + "a" * 128,
]

INVALID = [
    "cn.8.lex.stuff",
    "example.com",
    "com.example.*.extra",
    "com.example.",
    "",
    "com." + "a" * 60 + ".bar",
    "com.example." + "a" * 129,
    "com.example." + "a" * 371,
    "!" * 383,
    "com.exämple.bar",
]


class TestParseNsid:
    def test_simple(self) -> None:
        nsid = parse_nsid("com.example.bar")
        assert nsid.authority == ("example", "com")
        assert nsid.name == "bar"

    def test_multi_segment_name(self) -> None:
        nsid = parse_nsid("com.long-thing1.cool.fooBarBaz")
        assert nsid.authority == ("long-thing1", "com")
        assert nsid.name == "cool.fooBarBaz"

    def test_wildcard(self) -> None:
        nsid = parse_nsid("com.example.*")
        assert nsid.authority == ("example", "com")
        assert nsid.name == "*"
        assert nsid.is_wildcard

    def test_wildcard_must_be_whole_name(self) -> None:
        with pytest.raises(NsidSyntaxError):
            parse_nsid("com.example.*.extra")

    def test_digit_leading_segment(self) -> None:
        with pytest.raises(NsidSyntaxError) as exc_info:
            parse_nsid("cn.8.lex.stuff")
        assert exc_info.value.remainder == "8.lex.stuff"

    def test_missing_name(self) -> None:
        with pytest.raises(NsidSyntaxError) as exc_info:
            parse_nsid("example.com")
        assert exc_info.value.at_end

    def test_non_ascii_letter_rejected(self) -> None:
        with pytest.raises(NsidSyntaxError) as exc_info:
            parse_nsid("com.exämple.bar")
        assert exc_info.value.remainder == "ämple.bar"

    @pytest.mark.parametrize("text", VALID)
    def test_round_trip(self, text: str) -> None:
        assert to_canonical_string(parse_nsid(text)) == text

    def test_classmethod_alias(self) -> None:
        assert Nsid.parse("com.example.bar") == parse_nsid("com.example.bar")


class TestLengthLimits:
    def test_limits(self) -> None:
        assert (MAX_NSID_LENGTH, MAX_AUTHORITY_LENGTH, MAX_NAME_LENGTH) == (382, 63, 128)

    def test_authority_at_limit(self) -> None:
        nsid = parse_nsid("com." + "a" * 59 + ".bar")
        assert len(nsid.authority_domain) == 63

    def test_authority_over_limit(self) -> None:
        with pytest.raises(AuthorityTooLongError) as exc_info:
            parse_nsid("com." + "a" * 60 + ".bar")
        assert exc_info.value.length == 64
        assert exc_info.value.limit == 63
        assert exc_info.value.value == "a" * 60 + ".com"

    def test_name_at_limit(self) -> None:
        assert parse_nsid("com.example." + "a" * 128).name == "a" * 128

    def test_multi_segment_name_at_limit(self) -> None:
        name = "a" * 63 + "." + "b" * 64
        assert len(name) == 128
        assert parse_nsid("com.example." + name).name == name

    def test_name_over_limit(self) -> None:
        with pytest.raises(NameTooLongError) as exc_info:
            parse_nsid("com.example." + "a" * 129)
        assert exc_info.value.length == 129
        assert exc_info.value.limit == 128

    def test_input_at_overall_limit_is_parsed(self) -> None:
        text = "com.example." + "a" * 370
        assert len(text) == 382
        # Gets past the overall pre-check; the name ceiling is what rejects it.
        with pytest.raises(NameTooLongError):
            parse_nsid(text)

    def test_input_over_overall_limit(self) -> None:
        text = "com.example." + "a" * 371
        with pytest.raises(NsidTooLongError) as exc_info:
            parse_nsid(text)
        assert exc_info.value.length == 383
        assert exc_info.value.limit == 382

    def test_overall_limit_ignores_structure(self) -> None:
        with pytest.raises(NsidTooLongError):
            parse_nsid("!" * 383)
        with pytest.raises(NsidSyntaxError):
            parse_nsid("!" * 382)

    def test_overall_limit_counts_bytes(self) -> None:
        text = "com.example." + "é" * 186
        assert len(text) < MAX_NSID_LENGTH
        with pytest.raises(NsidTooLongError) as exc_info:
            parse_nsid(text)
        assert exc_info.value.length == 12 + 186 * 2

    def test_authority_checked_before_name(self) -> None:
        with pytest.raises(AuthorityTooLongError):
            parse_nsid("com." + "a" * 60 + "." + "b" * 200)


class TestValidateNsid:
    @pytest.mark.parametrize("text", VALID)
    def test_accepts_valid(self, text: str) -> None:
        assert validate_nsid(text) is None
        assert is_valid_nsid(text)

    @pytest.mark.parametrize("text", INVALID)
    def test_agrees_with_parse(self, text: str) -> None:
        with pytest.raises(NsidError) as parse_exc:
            parse_nsid(text)
        with pytest.raises(NsidError) as validate_exc:
            validate_nsid(text)
        assert type(parse_exc.value) is type(validate_exc.value)
        assert parse_exc.value.detail() == validate_exc.value.detail()
        assert not is_valid_nsid(text)


class TestToCanonicalString:
    def test_reverses_authority(self) -> None:
        nsid = Nsid(authority=("example", "com"), name="bar")
        assert to_canonical_string(nsid) == "com.example.bar"
        assert nsid.to_canonical_string() == "com.example.bar"
        assert str(nsid) == "com.example.bar"

    def test_name_is_verbatim(self) -> None:
        nsid = Nsid(authority=("long-thing1", "com"), name="cool.fooBarBaz")
        assert str(nsid) == "com.long-thing1.cool.fooBarBaz"


class TestConstructNsid:
    def test_from_dotted_authority(self) -> None:
        nsid = construct_nsid("example.com", "bar")
        assert nsid.authority == ("example", "com")
        assert str(nsid) == "com.example.bar"

    def test_from_segments(self) -> None:
        nsid = construct_nsid(["example", "com"], "*")
        assert nsid.is_wildcard
        assert str(nsid) == "com.example.*"

    def test_equals_parsed_value(self) -> None:
        assert construct_nsid("example.com", "bar") == parse_nsid("com.example.bar")
        assert Nsid.create("example.com", "bar") == parse_nsid("com.example.bar")

    def test_single_label_authority(self) -> None:
        with pytest.raises(NsidValidationError) as exc_info:
            construct_nsid("com", "bar")
        err = exc_info.value
        assert err.field == "authority"
        assert err.cause.at_end

    def test_three_label_authority(self) -> None:
        with pytest.raises(NsidValidationError) as exc_info:
            construct_nsid("api.example.com", "bar")
        assert exc_info.value.field == "authority"
        assert exc_info.value.detail()["remainder"] == ".com"

    def test_empty_authority(self) -> None:
        with pytest.raises(NsidValidationError) as exc_info:
            construct_nsid("", "bar")
        assert exc_info.value.field == "authority"

    @pytest.mark.parametrize(
        "authority", [["example.com"], ["a.b", "c"], ["", "com"], ["example", "com", "org"]]
    )
    def test_segments_must_be_two_single_labels(self, authority: list[str]) -> None:
        with pytest.raises(NsidValidationError) as exc_info:
            construct_nsid(authority, "bar")
        assert exc_info.value.field == "authority"

    def test_dotted_segment_reports_remainder(self) -> None:
        with pytest.raises(NsidValidationError) as exc_info:
            Nsid(authority=("example.com",), name="bar")
        err = exc_info.value
        assert err.value == "example.com"
        assert err.detail()["remainder"] == ".com"
        assert err.detail()["position"] == 7

    def test_constructed_value_round_trips(self) -> None:
        nsid = construct_nsid(["example", "com"], "bar")
        assert parse_nsid(str(nsid)) == nsid
        assert len(nsid.authority) == 2

    @pytest.mark.parametrize("name", ["", "foo.*", "8ball", "foo..bar", "foo_bar"])
    def test_bad_name(self, name: str) -> None:
        with pytest.raises(NsidValidationError) as exc_info:
            construct_nsid("example.com", name)
        assert exc_info.value.field == "name"
        assert exc_info.value.value == name

    def test_name_too_long(self) -> None:
        with pytest.raises(NameTooLongError):
            construct_nsid("example.com", "a" * 129)

    def test_authority_too_long(self) -> None:
        with pytest.raises(AuthorityTooLongError):
            construct_nsid("a" * 60 + ".com", "bar")

    def test_oversized_fields(self) -> None:
        with pytest.raises(NsidTooLongError):
            construct_nsid("example.com", "a" * 400)

    def test_error_codes_match_parser(self) -> None:
        with pytest.raises(NsidError) as constructed:
            construct_nsid("example.com", "a" * 129)
        with pytest.raises(NsidError) as parsed:
            parse_nsid("com.example." + "a" * 129)
        assert constructed.value.code == parsed.value.code == "NAME_TOO_LONG"


class TestNsidValue:
    def test_initializer_validates(self) -> None:
        with pytest.raises(NsidValidationError):
            Nsid(authority=("example", "com"), name="8bad")

    def test_initializer_normalizes_authority_to_tuple(self) -> None:
        nsid = Nsid(authority=["example", "com"], name="bar")  # type: ignore[arg-type]
        assert nsid.authority == ("example", "com")

    def test_frozen(self) -> None:
        nsid = parse_nsid("com.example.bar")
        with pytest.raises(dataclasses.FrozenInstanceError):
            nsid.name = "baz"  # type: ignore[misc]

    def test_hashable(self) -> None:
        ids = {parse_nsid("com.example.bar"), construct_nsid("example.com", "bar")}
        assert len(ids) == 1

    def test_views(self) -> None:
        nsid = parse_nsid("com.example.feed.getTimeline")
        assert nsid.authority_domain == "example.com"
        assert nsid.name_segments == ("feed", "getTimeline")
        assert not nsid.is_wildcard

    def test_to_dict(self) -> None:
        assert parse_nsid("com.example.*").to_dict() == {
            "nsid": "com.example.*",
            "authority": ["example", "com"],
            "authority_domain": "example.com",
            "name": "*",
            "wildcard": True,
        }
