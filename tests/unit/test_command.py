"""Unit tests for command encoding."""

import pytest

from anidb_udp.command import (
    REDACTED,
    ArgType,
    Command,
    CommandBuilder,
    build_command,
    encode_value,
    infer_arg_type,
)


class TestEncodeValue:
    """Tests for per-type value escaping."""

    def test_string_ampersand_is_escaped(self):
        assert encode_value("w&rd") == "w&amp;rd"

    def test_string_newline_becomes_br(self):
        assert encode_value("line one\nline two") == "line one<br />line two"

    def test_string_ampersand_and_newline(self):
        """Ampersands are escaped before newlines, so <br /> is left intact."""
        assert encode_value("a&b\nc") == "a&amp;b<br />c"

    def test_string_without_special_chars_unchanged(self):
        assert encode_value("name") == "name"

    def test_bool_true(self):
        assert encode_value(True) == "1"

    def test_bool_false(self):
        assert encode_value(False) == "0"

    def test_bool_is_single_character(self):
        assert len(encode_value(True)) == 1
        assert len(encode_value(False)) == 1

    def test_int_decimal(self):
        assert encode_value(9000) == "9000"

    def test_negative_int(self):
        assert encode_value(-12) == "-12"

    def test_large_unsigned_int(self):
        assert encode_value(2**64 - 1) == "18446744073709551615"

    def test_bytes_lowercase_hex(self):
        assert encode_value(b"\xd0\x0d") == "d00d"

    def test_bytes_keep_leading_zeros(self):
        assert encode_value(b"\x00\x01\x0a") == "00010a"

    def test_bytearray_and_list_of_ints(self):
        assert encode_value(bytearray([0xD0, 0x0D])) == "d00d"
        assert encode_value([0xD0, 0x0D], ArgType.BYTES) == "d00d"

    def test_explicit_bool_type(self):
        assert encode_value(True, ArgType.BOOL) == "1"
        assert encode_value(False, ArgType.BOOL) == "0"

    @pytest.mark.parametrize("value", ["0", 1, 0, None])
    def test_bool_type_rejects_non_bool(self, value):
        with pytest.raises(TypeError):
            encode_value(value, ArgType.BOOL)

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            encode_value(1.5)

    def test_int_type_rejects_string(self):
        with pytest.raises(TypeError):
            encode_value("12", ArgType.INT)

    def test_str_type_rejects_int(self):
        with pytest.raises(TypeError):
            encode_value(12, ArgType.STR)

    def test_bytes_type_rejects_int(self):
        with pytest.raises(TypeError):
            encode_value(3, ArgType.BYTES)


class TestInferArgType:
    """Tests for argument type inference."""

    def test_bool_before_int(self):
        assert infer_arg_type(True) is ArgType.BOOL

    def test_int(self):
        assert infer_arg_type(3) is ArgType.INT

    def test_bytes(self):
        assert infer_arg_type(b"") is ArgType.BYTES

    def test_str(self):
        assert infer_arg_type("") is ArgType.STR


class TestCommandBuilder:
    """Tests for CommandBuilder and Command serialization."""

    def test_full_command_line(self):
        """All argument kinds serialize in order with one trailing newline."""
        line = (
            CommandBuilder("FOO")
            .arg("user", "name")
            .arg("pass", "w&rd")
            .arg("weeb", True)
            .arg("iq", 9000)
            .arg("bytes", b"\xd0\x0d")
            .build()
            .line
        )
        assert line == "FOO user=name&pass=w&amp;rd&weeb=1&iq=9000&bytes=d00d\n"

    def test_single_argument_has_no_separator(self):
        line = CommandBuilder("EPISODE").arg("eid", 1).build().line
        assert line == "EPISODE eid=1\n"

    def test_no_arguments(self):
        assert CommandBuilder("PING").build().line == "PING \n"

    def test_exactly_one_trailing_newline(self):
        line = CommandBuilder("X").arg("a", "1\n").build().line
        assert line.endswith("\n")
        assert line.count("\n") == 1

    def test_no_unescaped_ampersand_in_values(self):
        cmd = CommandBuilder("X").arg("a", "&&").arg("b", "c").build()
        assert cmd.args == (("a", "&amp;&amp;"), ("b", "c"))
        assert cmd.line.count("&") == 3  # two escapes plus one separator

    def test_order_preserved(self):
        cmd = CommandBuilder("X").arg("z", 1).arg("a", 2).arg("m", 3).build()
        assert [key for key, _ in cmd.args] == ["z", "a", "m"]

    def test_builder_is_not_mutated(self):
        base = CommandBuilder("X").arg("a", 1)
        first = base.arg("b", 2).build()
        second = base.arg("c", 3).build()
        assert first.line == "X a=1&b=2\n"
        assert second.line == "X a=1&c=3\n"

    def test_invalid_name_rejected(self):
        with pytest.raises(ValueError):
            CommandBuilder("")
        with pytest.raises(ValueError):
            CommandBuilder("TWO WORDS")

    def test_encode_utf8(self):
        cmd = CommandBuilder("X").arg("name", "進撃").build()
        assert cmd.encode() == "X name=進撃\n".encode()

    def test_str_is_line(self):
        cmd = CommandBuilder("X").arg("a", 1).build()
        assert str(cmd) == cmd.line

    def test_command_is_frozen(self):
        cmd = Command("X")
        with pytest.raises(AttributeError):
            cmd.name = "Y"  # type: ignore[misc]


class TestRedaction:
    """Tests for log-safe command rendering."""

    def test_password_masked(self):
        cmd = CommandBuilder("AUTH").arg("user", "bob").arg("pass", "hunter2").build()
        assert cmd.redacted() == f"AUTH user=bob&pass={REDACTED}\n"

    def test_wire_line_unchanged_by_redaction(self):
        cmd = CommandBuilder("AUTH").arg("pass", "hunter2").build()
        cmd.redacted()
        assert cmd.line == "AUTH pass=hunter2\n"


class TestBuildCommand:
    """Tests for the tuple-based build_command helper."""

    def test_typed_tuples(self):
        line = build_command(
            "FOO",
            [
                ("user", "name", ArgType.STR),
                ("pass", "w&rd", ArgType.STR),
                ("weeb", True, ArgType.BOOL),
                ("iq", 9000, ArgType.INT),
                ("bytes", [0xD0, 0x0D], ArgType.BYTES),
            ],
        )
        assert line == "FOO user=name&pass=w&amp;rd&weeb=1&iq=9000&bytes=d00d\n"

    def test_untyped_tuples_infer(self):
        assert build_command("X", [("a", True), ("b", 2)]) == "X a=1&b=2\n"

    def test_malformed_tuple_rejected(self):
        with pytest.raises(ValueError):
            build_command("X", [("a",)])
