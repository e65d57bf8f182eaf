"""
Recursive descent parser for libconfig syntax.

Parses tokens from the lexer into a Config whose root is a group.
Supports nested groups, arrays, lists, string concatenation and @include.
"""

from pathlib import Path
from typing import IO

from .config import Config
from .const import INCLUDE_SUFFIXES, INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, MAX_INCLUDE_DEPTH
from .errors import ArrayTypeError, ErrorKind, IncludeError, ParseError
from .lexer import Lexer, Token, TokenType
from .logging import get_logger
from .value import (
    ArrayValue,
    BoolValue,
    FloatValue,
    GroupValue,
    Int64Value,
    IntValue,
    ListValue,
    StringValue,
    Value,
)


logger = get_logger("parser")


# Base prefixes recognized in integer literals
INTEGER_BASES = {
    "0x": 16,
    "0b": 2,
    "0o": 8,
    "0q": 8,
}

# Digits accepted for each base (ASCII only)
BASE_DIGITS = {
    16: "0123456789abcdefABCDEF",
    10: "0123456789",
    8: "01234567",
    2: "01",
}


def parse_integer_literal(text: str) -> Value:
    """
    Convert integer literal text to an IntValue or Int64Value.

    Handles an optional sign, a 0x/0b/0o/0q base prefix (any case) and an
    L/l suffix. The result is an Int64Value when the suffix is present or
    the value does not fit in 32 bits, otherwise an IntValue.

    Raises:
        ValueError: If the digits are invalid for the base or the value
            does not fit in 64 bits
    """
    literal = text.strip()

    is_long = literal.endswith(("L", "l"))
    if is_long:
        literal = literal[:-1]

    digits = literal
    sign = 1
    if digits.startswith("-"):
        sign = -1
        digits = digits[1:]

    base = INTEGER_BASES.get(digits[:2].lower(), 10)
    if base != 10:
        digits = digits[2:]

    # int() also takes signs, spaces, underscores and non-ASCII digits
    if not digits or any(char not in BASE_DIGITS[base] for char in digits):
        raise ValueError(f"invalid integer literal '{text}'")

    try:
        value = sign * int(digits, base)
    except ValueError:
        raise ValueError(f"invalid integer literal '{text}'") from None

    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer literal '{text}' does not fit in 64 bits")

    if is_long or not INT32_MIN <= value <= INT32_MAX:
        return Int64Value(value)
    return IntValue(value)


class IncludeLoader:
    """
    File access used to resolve @include directives.

    Subclass to serve includes from somewhere other than the local
    file system (tests use an in-memory variant).
    """

    def resolve(self, base_path: Path | None, name: str) -> Path:
        """Resolve an include name relative to the including file's directory."""
        path = Path(name)
        if path.is_absolute() or base_path is None:
            return path
        return base_path / path

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def dirname(self, path: Path) -> Path:
        return path.parent


class ConfigParser:
    """
    Recursive descent parser for libconfig.

    Grammar:
        config      := (setting | include)*
        setting     := IDENTIFIER ASSIGN value [';']
        include     := '@include' STRING [';']
        value       := STRING+ | INTEGER | FLOAT | BOOLEAN | group | array | list
        group       := '{' (setting | include)* '}'
        array       := '[' [value (',' value)* [',']] ']'
        list        := '(' [value (',' value)* [',']] ')'

    Each included file is parsed by its own parser one level deeper;
    parsing stops at the first error.
    """

    def __init__(
        self,
        lexer: Lexer,
        base_path: Path | None = None,
        depth: int = 0,
        loader: IncludeLoader | None = None,
    ):
        self.lexer = lexer
        self.filename = lexer.filename
        self.base_path = base_path
        self.depth = depth
        self.loader = loader or IncludeLoader()

        self.current_token = self.lexer.next_token()

    def _advance(self) -> Token:
        """Advance to next token and return previous."""
        previous = self.current_token
        self.current_token = self.lexer.next_token()
        return previous

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self.current_token.type == token_type

    def _error(
        self,
        message: str,
        kind: ErrorKind,
        token: Token | None = None,
        expected: TokenType | None = None,
    ) -> ParseError:
        token = token or self.current_token
        if token.type == TokenType.ERROR:
            kind = ErrorKind.INVALID_TOKEN
            message = f"invalid token {token.value!r} ({message})"
        return ParseError(message, kind, token=token, expected=expected, filename=self.filename)

    def _expect(self, token_type: TokenType, kind: ErrorKind = ErrorKind.EXPECTED_TOKEN) -> Token:
        """Expect current token to be of given type, advance and return it."""
        if not self._check(token_type):
            raise self._error(
                f"expected {token_type.name}, got {self.current_token.type.name}",
                kind,
                expected=token_type,
            )
        return self._advance()

    def _skip_semicolon(self) -> None:
        if self._check(TokenType.SEMICOLON):
            self._advance()

    def parse(self) -> Config:
        """Parse the entire configuration."""
        entries: dict[str, Value] = {}
        self._parse_settings(entries, TokenType.EOF)
        return Config(root=GroupValue(entries), filename=self.filename)

    def _parse_settings(self, entries: dict[str, Value], closing: TokenType) -> None:
        """Parse settings and includes into entries until the closing token or EOF."""
        while not self._check(closing) and not self._check(TokenType.EOF):
            if self._check(TokenType.INCLUDE):
                self._parse_include(entries)
                continue

            name, value = self._parse_setting()
            # Redefinition overwrites
            entries[name] = value
            self._skip_semicolon()

    def _parse_setting(self) -> tuple[str, Value]:
        """Parse a 'name = value' or 'name : value' setting."""
        name_token = self._expect(TokenType.IDENTIFIER, ErrorKind.EXPECTED_IDENTIFIER)
        self._expect(TokenType.ASSIGN, ErrorKind.EXPECTED_ASSIGNMENT)
        return name_token.value, self._parse_value()

    def _parse_include(self, target: dict[str, Value]) -> None:
        """Parse an @include directive and merge the included settings into target."""
        include_token = self.current_token

        if self.depth >= MAX_INCLUDE_DEPTH:
            raise IncludeError(
                f"include depth limit exceeded ({MAX_INCLUDE_DEPTH})",
                ErrorKind.INCLUDE_DEPTH_EXCEEDED,
                token=include_token,
                depth=self.depth,
                filename=self.filename,
            )

        self._advance()  # consume @include

        if not self._check(TokenType.STRING):
            raise self._error(
                f"expected STRING after @include, got {self.current_token.type.name}",
                ErrorKind.EXPECTED_STRING_AFTER_INCLUDE,
                expected=TokenType.STRING,
            )

        path_token = self._advance()
        self._skip_semicolon()

        include_path = path_token.value
        full_path = self.loader.resolve(self.base_path, include_path)
        candidates = [full_path] + [Path(f"{full_path}{suffix}") for suffix in INCLUDE_SUFFIXES]

        found = None
        for candidate in candidates:
            if self.loader.exists(candidate):
                found = candidate
                break

        if found is None:
            attempted = [str(candidate) for candidate in candidates]
            raise IncludeError(
                f"include file '{include_path}' not found (tried: {', '.join(attempted)})",
                ErrorKind.INCLUDE_NOT_FOUND,
                token=path_token,
                include_path=include_path,
                attempted=attempted,
                filename=self.filename,
            )

        logger.debug(f"Including {found} at depth {self.depth + 1}")

        try:
            source = self.loader.read(found)
        except (OSError, UnicodeDecodeError) as e:
            raise IncludeError(
                f"include file '{found}' could not be read: {e}",
                ErrorKind.INCLUDE_READ_FAILED,
                token=path_token,
                include_path=include_path,
                attempted=[str(found)],
                filename=self.filename,
            ) from e

        parser = ConfigParser(
            Lexer(source, str(found)),
            base_path=self.loader.dirname(found),
            depth=self.depth + 1,
            loader=self.loader,
        )
        included = parser.parse()

        # Included keys overwrite same-named settings already in target
        target.update(included.root.entries)

    def _parse_value(self) -> Value:
        """Parse a scalar, group, array or list value."""
        token = self.current_token

        if token.type == TokenType.STRING:
            parts = [self._advance().value]
            # Adjacent strings concatenate
            while self._check(TokenType.STRING):
                parts.append(self._advance().value)
            return StringValue("".join(parts))

        if token.type == TokenType.INTEGER:
            try:
                value = parse_integer_literal(token.value)
            except ValueError as e:
                raise self._error(str(e), ErrorKind.INVALID_INTEGER) from None
            self._advance()
            return value

        if token.type == TokenType.FLOAT:
            try:
                number = float(token.value)
            except ValueError:
                raise self._error(
                    f"invalid float literal '{token.value}'", ErrorKind.INVALID_FLOAT
                ) from None
            self._advance()
            return FloatValue(number)

        if token.type == TokenType.BOOLEAN:
            self._advance()
            return BoolValue(token.value.lower() == "true")

        if token.type == TokenType.LEFT_BRACE:
            return self._parse_group()

        if token.type == TokenType.LEFT_BRACKET:
            return ArrayValue(self._parse_sequence(TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET, True))

        if token.type == TokenType.LEFT_PAREN:
            return ListValue(self._parse_sequence(TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, False))

        raise self._error(f"unexpected token {token.type.name}", ErrorKind.UNEXPECTED_TOKEN)

    def _parse_group(self) -> GroupValue:
        """Parse a group { ... }."""
        self._expect(TokenType.LEFT_BRACE)

        entries: dict[str, Value] = {}
        self._parse_settings(entries, TokenType.RIGHT_BRACE)

        self._expect(TokenType.RIGHT_BRACE)
        return GroupValue(entries)

    def _parse_sequence(self, opening: TokenType, closing: TokenType, homogeneous: bool) -> list[Value]:
        """
        Parse the comma-separated elements of an array or list.

        A trailing comma before the closing token is allowed. For arrays
        every element must have the kind of the first one.
        """
        self._expect(opening)

        elements: list[Value] = []

        if self._check(closing):
            self._advance()
            return elements

        first = self._parse_value()
        elements.append(first)

        while self._check(TokenType.COMMA):
            self._advance()  # consume ,

            if self._check(closing):
                break

            element_token = self.current_token
            element = self._parse_value()

            if homogeneous and element.type != first.type:
                raise ArrayTypeError(first.type, element.type, token=element_token, filename=self.filename)

            elements.append(element)

        self._expect(closing)
        return elements


def parse_config(
    source: str,
    filename: str = "<string>",
    base_path: Path | None = None,
    loader: IncludeLoader | None = None,
) -> Config:
    """
    Convenience function to parse a configuration string.

    Args:
        source: Configuration source text
        filename: Filename for error messages
        base_path: Base path for resolving include statements
            (the working directory when None)
        loader: File access for includes

    Returns:
        Parsed Config
    """
    parser = ConfigParser(Lexer(source, filename), base_path=base_path, loader=loader)
    return parser.parse()


def parse_stream(
    stream: IO,
    filename: str = "<stream>",
    base_path: Path | None = None,
    loader: IncludeLoader | None = None,
) -> Config:
    """
    Parse a configuration from a readable text or binary stream.

    The stream is read to the end before parsing starts.
    """
    parser = ConfigParser(Lexer.from_stream(stream, filename), base_path=base_path, loader=loader)
    return parser.parse()


def parse_config_file(path: str | Path, loader: IncludeLoader | None = None) -> Config:
    """
    Parse a configuration file.

    Includes are resolved relative to the file's directory.

    Args:
        path: Path to the configuration file
        loader: File access for the file and its includes

    Returns:
        Parsed Config

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    path = Path(path)
    loader = loader or IncludeLoader()
    source = loader.read(path)
    parser = ConfigParser(Lexer(source, str(path)), base_path=loader.dirname(path), loader=loader)
    return parser.parse()
