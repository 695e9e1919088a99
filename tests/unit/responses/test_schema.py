"""Unit tests for the declarative schema engine."""

from dataclasses import dataclass

import pytest

from anidb_udp.exceptions import DecodeError
from anidb_udp.responses.schema import Field, FieldType, Literal, Schema


@dataclass(frozen=True)
class Number:
    value: int


@dataclass(frozen=True)
class Flag:
    value: bool


@dataclass(frozen=True)
class Pair:
    name: str
    count: int


def number_schema(field_type: FieldType) -> Schema[Number]:
    return Schema(Number, "100 N\n", Field("value", field_type), "\n")


class TestSchemaDefinition:
    """Schemas are validated against their record type when defined."""

    def test_plain_strings_become_literals(self):
        schema = Schema(Pair, "1 ", Field("name", FieldType.STR), "|", Field("count", FieldType.I32))
        assert schema.steps[0] == Literal("1 ")
        assert schema.steps[2] == Literal("|")

    def test_prefix(self):
        assert number_schema(FieldType.I32).prefix == "100 N\n"

    def test_field_names_must_match_record(self):
        with pytest.raises(ValueError, match="do not match"):
            Schema(Pair, Field("count", FieldType.I32), "|", Field("name", FieldType.STR), "\n")

    def test_missing_field_rejected(self):
        with pytest.raises(ValueError):
            Schema(Pair, Field("name", FieldType.STR), "\n")

    def test_string_field_needs_terminator(self):
        with pytest.raises(ValueError, match="followed by a literal"):
            Schema(Pair, Field("name", FieldType.STR), Field("count", FieldType.I32))

    def test_string_field_cannot_be_last(self):
        @dataclass
        class Text:
            body: str

        with pytest.raises(ValueError):
            Schema(Text, "1 ", Field("body", FieldType.STR))

    def test_record_must_be_dataclass(self):
        class NotADataclass:
            pass

        with pytest.raises(ValueError):
            Schema(NotADataclass, "x")

    def test_empty_schema_rejected(self):
        with pytest.raises(ValueError):
            Schema(Number)

    def test_empty_literal_rejected(self):
        with pytest.raises(ValueError):
            Literal("")


class TestLiteralAndEnd:
    """Literal matching and whole-input consumption."""

    def test_wrong_prefix(self):
        with pytest.raises(DecodeError) as exc_info:
            number_schema(FieldType.I32).parse("200 N\n5\n")
        assert exc_info.value.position == 0

    def test_trailing_characters_rejected(self):
        """Every step matched, but input remains: the parse fails."""
        with pytest.raises(DecodeError, match="trailing"):
            number_schema(FieldType.I32).parse("100 N\n5\nextra")

    def test_single_trailing_newline_rejected(self):
        with pytest.raises(DecodeError):
            number_schema(FieldType.I32).parse("100 N\n5\n\n")

    def test_truncated_input_rejected(self):
        with pytest.raises(DecodeError):
            number_schema(FieldType.I32).parse("100 N\n5")

    def test_matches(self):
        schema = number_schema(FieldType.I32)
        assert schema.matches("100 N\n5\n")
        assert not schema.matches("100 N\n5\n!")


class TestStringField:
    """STR fields run up to the next literal."""

    schema = Schema(Pair, "1 ", Field("name", FieldType.STR), "|", Field("count", FieldType.I32), "\n")

    def test_basic(self):
        assert self.schema.parse("1 abc|3\n") == Pair("abc", 3)

    def test_empty_string(self):
        assert self.schema.parse("1 |3\n") == Pair("", 3)

    def test_stops_at_first_terminator(self):
        """A terminator inside the value cannot be represented; the first one wins."""
        with pytest.raises(DecodeError):
            self.schema.parse("1 a|b|3\n")

    def test_no_unescaping(self):
        assert self.schema.parse("1 a&amp;b<br />c|3\n").name == "a&amp;b<br />c"

    def test_missing_terminator(self):
        with pytest.raises(DecodeError, match="Unterminated"):
            self.schema.parse("1 abc")

    def test_multi_character_terminator(self):
        @dataclass
        class Key:
            session_key: str

        schema = Schema(Key, "200 ", Field("session_key", FieldType.STR), " LOGIN ACCEPTED\n")
        assert schema.parse("200 abc12 LOGIN ACCEPTED\n") == Key("abc12")


class TestI32Field:
    """I32 fields, including the ``none`` sentinel."""

    schema = number_schema(FieldType.I32)

    def test_positive(self):
        assert self.schema.parse("100 N\n123\n").value == 123

    def test_negative(self):
        assert self.schema.parse("100 N\n-45\n").value == -45

    def test_none_sentinel_is_zero(self):
        assert self.schema.parse("100 N\nnone\n").value == 0

    def test_none_consumes_exactly_the_literal(self):
        """After ``none`` the next step must match immediately."""
        with pytest.raises(DecodeError):
            self.schema.parse("100 N\nnone5\n")

    def test_zero_consumes_one_digit(self):
        assert self.schema.parse("100 N\n0\n").value == 0

    def test_none_is_not_accepted_mid_token(self):
        with pytest.raises(DecodeError):
            self.schema.parse("100 N\nnon\n")

    def test_bounds(self):
        assert self.schema.parse("100 N\n2147483647\n").value == 2**31 - 1
        assert self.schema.parse("100 N\n-2147483648\n").value == -(2**31)

    def test_overflow_is_decode_error(self):
        with pytest.raises(DecodeError, match="out of range"):
            self.schema.parse("100 N\n2147483648\n")

    def test_malformed_digits_are_decode_error(self):
        """Characters from the digit class that do not form an integer."""
        with pytest.raises(DecodeError, match="malformed"):
            self.schema.parse("100 N\n1-2\n")

    def test_lone_minus_is_decode_error(self):
        with pytest.raises(DecodeError):
            self.schema.parse("100 N\n-\n")

    def test_empty_is_decode_error(self):
        with pytest.raises(DecodeError, match="expects digits"):
            self.schema.parse("100 N\n\n")


class TestOtherIntegerFields:
    """I16, I64 and U32 share the digit rule but not the sentinel."""

    @pytest.mark.parametrize("field_type", [FieldType.I16, FieldType.I64, FieldType.U32])
    def test_no_none_sentinel(self, field_type):
        with pytest.raises(DecodeError):
            number_schema(field_type).parse("100 N\nnone\n")

    def test_i16_range(self):
        schema = number_schema(FieldType.I16)
        assert schema.parse("100 N\n-32768\n").value == -32768
        with pytest.raises(DecodeError):
            schema.parse("100 N\n32768\n")

    def test_i64_large_value(self):
        schema = number_schema(FieldType.I64)
        assert schema.parse("100 N\n9223372036854775807\n").value == 2**63 - 1

    def test_u32_rejects_negative(self):
        with pytest.raises(DecodeError):
            number_schema(FieldType.U32).parse("100 N\n-1\n")

    def test_u32_max(self):
        assert number_schema(FieldType.U32).parse("100 N\n4294967295\n").value == 2**32 - 1


class TestBoolField:
    """BOOL fields are exactly one 0/1 character."""

    schema = Schema(Flag, "F ", Field("value", FieldType.BOOL), "\n")

    def test_true(self):
        assert self.schema.parse("F 1\n").value is True

    def test_false(self):
        assert self.schema.parse("F 0\n").value is False

    def test_other_character(self):
        with pytest.raises(DecodeError):
            self.schema.parse("F 2\n")

    def test_two_digits(self):
        with pytest.raises(DecodeError):
            self.schema.parse("F 10\n")

    def test_missing(self):
        with pytest.raises(DecodeError):
            self.schema.parse("F ")
