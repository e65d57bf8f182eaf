"""
Tests for the recursive descent parser.
"""

import pytest

from pylibconfig.errors import ArrayTypeError, ErrorKind, LibconfigError, ParseError
from pylibconfig.lexer import TokenType
from pylibconfig.parser import parse_config
from pylibconfig.value import (
    ArrayValue,
    BoolValue,
    FloatValue,
    GroupValue,
    Int64Value,
    IntValue,
    ListValue,
    StringValue,
    ValueType,
)


def test_end_to_end_scenario() -> None:
    config = parse_config('name = "MyApp"; port = 8080; database = { host = "localhost"; };')

    assert config.lookup_string("name") == "MyApp"
    assert config.lookup_int("port") == 8080
    assert config.lookup_string("database.host") == "localhost"


@pytest.mark.parametrize(
    "source",
    ["", "   \n\t  \r\n", "// only a comment", "/* only\na comment */", "# only a comment"],
)
def test_empty_input_gives_empty_root(source: str) -> None:
    config = parse_config(source)

    assert isinstance(config.root, GroupValue)
    assert len(config.root) == 0


def test_both_assignment_operators() -> None:
    config = parse_config('a = 1; b : 2; c:"x"')

    assert config.lookup_int("a") == 1
    assert config.lookup_int("b") == 2
    assert config.lookup_string("c") == "x"


def test_semicolons_are_optional() -> None:
    config = parse_config('a = 1 b = "two" g = { x = 1 y = 2 } h = [1, 2] l = (1) last = true')

    assert config.to_dict() == {
        "a": 1,
        "b": "two",
        "g": {"x": 1, "y": 2},
        "h": [1, 2],
        "l": [1],
        "last": True,
    }


def test_redefinition_overwrites() -> None:
    config = parse_config("a = 1; a = 2;")

    assert config.lookup_int("a") == 2
    assert len(config.root) == 1


def test_insertion_order_is_preserved() -> None:
    config = parse_config("zeta = 1; alpha = 2; mid = { b = 1; a = 2; };")

    assert list(config.root) == ["zeta", "alpha", "mid"]
    assert list(config.lookup("mid")) == ["b", "a"]


class TestScalars:
    def test_integer(self) -> None:
        assert parse_config("v = 42;").lookup("v") == IntValue(42)

    def test_negative_integer(self) -> None:
        assert parse_config("v = -123;").lookup("v") == IntValue(-123)

    @pytest.mark.parametrize(
        ("literal", "expected"),
        [("0xFF", 255), ("0XFF", 255), ("0xff", 255), ("0b1010", 10), ("0B1010", 10),
         ("0o755", 493), ("0O755", 493), ("0q755", 493), ("0Q755", 493)],
    )
    def test_integer_bases(self, literal: str, expected: int) -> None:
        assert parse_config(f"v = {literal};").lookup("v") == IntValue(expected)

    @pytest.mark.parametrize("literal", ["42L", "42l", "0x2AL"])
    def test_long_suffix_forces_int64(self, literal: str) -> None:
        assert parse_config(f"v = {literal};").lookup("v") == Int64Value(42)

    def test_large_integer_widens_to_int64(self) -> None:
        config = parse_config("big = 2147483648; small = -2147483649; max = 2147483647;")

        assert config.lookup("big") == Int64Value(2147483648)
        assert config.lookup("small") == Int64Value(-2147483649)
        assert config.lookup("max") == IntValue(2147483647)

    def test_int64_limits(self) -> None:
        config = parse_config("max = 9223372036854775807L; min = -9223372036854775808L;")

        assert config.lookup_int64("max") == 2**63 - 1
        assert config.lookup_int64("min") == -(2**63)

    @pytest.mark.parametrize(
        ("literal", "expected"),
        [("3.14", 3.14), ("0.0", 0.0), ("1e-100", 1e-100), ("1e100", 1e100),
         ("1.23e-4", 1.23e-4), ("-2.5E+3", -2500.0), ("5e2", 500.0)],
    )
    def test_floats(self, literal: str, expected: float) -> None:
        assert parse_config(f"v = {literal};").lookup("v") == FloatValue(expected)

    @pytest.mark.parametrize(
        ("literal", "expected"),
        [("true", True), ("false", False), ("TRUE", True), ("False", False), ("tRuE", True)],
    )
    def test_booleans(self, literal: str, expected: bool) -> None:
        assert parse_config(f"v = {literal};").lookup("v") == BoolValue(expected)


class TestStrings:
    def test_adjacent_strings_concatenate(self) -> None:
        assert parse_config('v = "a" "b" "c";').lookup("v") == StringValue("abc")

    def test_concatenation_across_lines_and_comments(self) -> None:
        source = 'v = "This is a long string "\n    "spanning lines " // note\n    "joined.";'

        assert parse_config(source).lookup_string("v") == "This is a long string spanning lines joined."

    def test_escapes_decoded_before_concatenation(self) -> None:
        assert parse_config(r'v = "a\n" "b";').lookup_string("v") == "a\nb"

    def test_quotes_and_hex_escapes(self) -> None:
        config = parse_config(r'q = "He said, \"Hi\""; h = "\x41\x42\x43";')

        assert config.lookup_string("q") == 'He said, "Hi"'
        assert config.lookup_string("h") == "ABC"

    def test_empty_and_space_strings(self) -> None:
        config = parse_config('e = ""; s = " ";')

        assert config.lookup_string("e") == ""
        assert config.lookup_string("s") == " "


class TestArrays:
    def test_integer_array(self) -> None:
        value = parse_config("v = [1, 2, 3];").lookup("v")

        assert value == ArrayValue([IntValue(1), IntValue(2), IntValue(3)])
        assert value.element_type is ValueType.INT

    def test_empty_array(self) -> None:
        value = parse_config("v = [];").lookup("v")

        assert value == ArrayValue([])
        assert value.element_type is None

    def test_trailing_comma(self) -> None:
        value = parse_config('v = ["a", "b",];').lookup("v")

        assert value == ArrayValue([StringValue("a"), StringValue("b")])
        assert len(value) == 2

    def test_single_element(self) -> None:
        assert len(parse_config("v = [ 1.5 ];").lookup("v")) == 1

    def test_array_of_groups(self) -> None:
        value = parse_config('v = [ { name = "a"; }, { name = "b"; port = 1; } ];').lookup("v")

        assert value.element_type is ValueType.GROUP
        assert value.to_python() == [{"name": "a"}, {"name": "b", "port": 1}]

    @pytest.mark.parametrize(
        ("source", "first", "other"),
        [
            ("[1, 2.5]", ValueType.INT, ValueType.FLOAT),
            ('[true, "x"]', ValueType.BOOL, ValueType.STRING),
            ("[1, true]", ValueType.INT, ValueType.BOOL),
            ('["string", 42]', ValueType.STRING, ValueType.INT),
            ("[1.5, true]", ValueType.FLOAT, ValueType.BOOL),
            ('["test", { key = "val"; }]', ValueType.STRING, ValueType.GROUP),
            ("[1, 2, 42L]", ValueType.INT, ValueType.INT64),
        ],
    )
    def test_mixed_kinds_are_rejected(self, source: str, first: ValueType, other: ValueType) -> None:
        with pytest.raises(ArrayTypeError) as exc_info:
            parse_config(f"values = {source};")

        error = exc_info.value
        assert error.kind is ErrorKind.ARRAY_TYPE_MISMATCH
        assert error.first is first
        assert error.other is other
        assert f"got {first} and {other}" in str(error)

    def test_mismatch_reports_offending_element_line(self) -> None:
        with pytest.raises(ArrayTypeError) as exc_info:
            parse_config("values = [\n  1,\n  2,\n  \"three\"\n];")

        assert exc_info.value.line == 4
        assert "Line 4" in str(exc_info.value)


class TestLists:
    def test_mixed_list(self) -> None:
        value = parse_config('v = ( "s", 42, true, 3.14 );').lookup("v")

        assert isinstance(value, ListValue)
        assert [item.type for item in value] == [
            ValueType.STRING,
            ValueType.INT,
            ValueType.BOOL,
            ValueType.FLOAT,
        ]

    def test_empty_list(self) -> None:
        assert parse_config("v = ();").lookup("v") == ListValue([])

    def test_trailing_comma(self) -> None:
        assert len(parse_config("v = (1, \"a\",);").lookup("v")) == 2

    def test_nested_lists_and_groups(self) -> None:
        config = parse_config('v = ( ( "inner", 1 ), [ 1, 2 ], { k = "v"; }, () );')

        assert config.get_value("v") == [["inner", 1], [1, 2], {"k": "v"}, []]


class TestGroups:
    def test_nested_groups(self) -> None:
        config = parse_config("a = { b = { c = 5; }; };")

        assert config.lookup("a.b") == GroupValue({"c": IntValue(5)})

    def test_empty_group(self) -> None:
        assert parse_config("g = {};").lookup("g") == GroupValue({})

    def test_example_config(self, example_config_text: str) -> None:
        config = parse_config(example_config_text)

        assert config.lookup_string("version") == "1.0.0"
        assert config.lookup_int("application.window.size.width") == 1024
        assert config.lookup_int("application.numbers.hexadecimal") == 255
        assert config.lookup_int("application.numbers.binary") == 10
        assert config.lookup_int("application.numbers.octal") == 493
        assert config.lookup("application.numbers.big_integer").type is ValueType.INT64
        assert config.lookup_float("application.floats.negative_exp") == -2500.0
        assert config.lookup_bool("application.flags.testing") is True
        assert config.lookup_bool("application.flags.logging") is False
        assert config.lookup_string("application.strings.with_quotes") == 'He said, "Hello there!"'
        assert config.lookup_string("application.strings.hex_escape") == "Unicode: ABC"
        assert config.lookup_string("application.strings.multiline") == (
            "This is a very long string that spans multiple lines."
        )
        assert len(config.lookup("application.arrays.empty")) == 0
        assert len(config.lookup("application.arrays.with_trailing_comma")) == 3
        assert len(config.lookup("application.lists.mixed_types")) == 5
        assert config.get_value("database.databases")[1] == {"name": "analytics", "schema": "analytics"}
        assert config.lookup("build_number") == Int64Value(12345)
        assert config.lookup_string("final_note") == "Colon assignment works too"


class TestErrors:
    @pytest.mark.parametrize(
        "source",
        [
            'name "missing equals";',
            '= "value";',
            'values = [ "one", "two"',
            'group = { key = "value"',
            'list = ( "one", "two"',
            "value = 12.34.56;",
            "value = 0xGGG;",
            "value = 0b123;",
            "value = @invalid;",
            "value = 12..34;",
            "value = 0x;",
            "value = 0b;",
            "value = 0o;",
            "value = 1.5L;",
            "value = 1e;",
            "value = 99999999999999999999;",
            "value = ;",
            'value = "unterminated',
            "a = 1; /* unterminated comment",
            "a = { b = 1; ];",
            "a = [ 1 2 ];",
            "$ = 1;",
        ],
    )
    def test_invalid_input_fails(self, source: str) -> None:
        with pytest.raises(ParseError):
            parse_config(source)

    def test_missing_assignment_reports_kinds(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_config('name "x";')

        error = exc_info.value
        assert error.kind is ErrorKind.EXPECTED_ASSIGNMENT
        assert error.expected is TokenType.ASSIGN
        assert error.actual is TokenType.STRING
        assert (error.line, error.column) == (1, 6)

    def test_missing_identifier(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_config('= "value";')

        assert exc_info.value.kind is ErrorKind.EXPECTED_IDENTIFIER
        assert exc_info.value.expected is TokenType.IDENTIFIER

    def test_unexpected_value_token_location(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_config('name = "test";\nport = invalid_value;\ndebug = true;')

        error = exc_info.value
        assert error.kind is ErrorKind.UNEXPECTED_TOKEN
        assert (error.line, error.column) == (2, 8)
        assert str(error).startswith("Line 2, column 8:")

    def test_unclosed_group_expects_brace(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_config('group = { key = "value"')

        error = exc_info.value
        assert error.kind is ErrorKind.EXPECTED_TOKEN
        assert error.expected is TokenType.RIGHT_BRACE
        assert error.actual is TokenType.EOF

    @pytest.mark.parametrize("source", ["value = @invalid;", 'value = "unterminated', "a = $;"])
    def test_error_tokens_are_reported_as_invalid(self, source: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_config(source)

        assert exc_info.value.kind is ErrorKind.INVALID_TOKEN
        assert exc_info.value.actual is TokenType.ERROR

    @pytest.mark.parametrize(
        "source",
        [
            "a = ١٢;",        # Arabic-Indic digits
            "a = １.５;",       # fullwidth digits
            "a = 1２;",
            "a = 1.٥;",
        ],
    )
    def test_non_ascii_digits_are_rejected(self, source: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_config(source)

        assert exc_info.value.kind is ErrorKind.INVALID_TOKEN

    def test_invalid_integer_kind(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_config("value = 0x;")

        assert exc_info.value.kind is ErrorKind.INVALID_INTEGER

    def test_invalid_float_kind(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_config("value = 1.5L;")

        assert exc_info.value.kind is ErrorKind.INVALID_FLOAT

    def test_filename_in_message(self) -> None:
        with pytest.raises(LibconfigError) as exc_info:
            parse_config("a = ;", filename="app.cfg")

        assert exc_info.value.filename == "app.cfg"
        assert str(exc_info.value).startswith("app.cfg, line 1, column 5:")


@pytest.mark.parametrize(
    "source",
    [
        '\tname\t=\t"test";\n  port  =  8080  ;',
        'name = "test";\n\n\nport = 8080;',
        'name = "test";\r\nport = 8080;\r\n',
        ' \t name \t = \t "test" \t ; \r\n \t port \t = \t 8080 \t ; \r\n',
    ],
)
def test_whitespace_handling(source: str) -> None:
    config = parse_config(source)

    assert config.lookup_string("name") == "test"
    assert config.lookup_int("port") == 8080
