"""
Exception hierarchy for parsing and lookup failures.

Every exception carries an ``ErrorKind`` so callers can branch on the
failure programmatically:

    try:
        port = config.lookup_int("server.port")
    except SettingLookupError as e:
        if e.kind is ErrorKind.SETTING_NOT_FOUND:
            port = 8080
        else:
            raise

Classes:
- ``LibconfigError``: base of everything raised by this package
- ``ParseError``: the input violates the grammar (carries line/column)
- ``ArrayTypeError``: an array mixes element kinds
- ``IncludeError``: an ``@include`` could not be resolved or nests too deep
- ``SettingLookupError``: a path lookup or typed extraction failed
- ``ConfigError``: the top-level input could not be opened
"""

from enum import Enum

from .lexer import Token, TokenType
from .value import ValueType


class ErrorKind(Enum):
    """Discriminates the failure carried by a ``LibconfigError``."""

    # Syntax
    UNEXPECTED_TOKEN = "unexpected token"
    EXPECTED_TOKEN = "expected token"
    EXPECTED_IDENTIFIER = "expected identifier"
    EXPECTED_ASSIGNMENT = "expected assignment operator"
    EXPECTED_STRING_AFTER_INCLUDE = "expected string after @include"
    INVALID_TOKEN = "invalid token"
    INVALID_INTEGER = "invalid integer literal"
    INVALID_FLOAT = "invalid float literal"

    # Semantic
    ARRAY_TYPE_MISMATCH = "array elements must have the same type"

    # Include
    INCLUDE_NOT_FOUND = "include file not found"
    INCLUDE_DEPTH_EXCEEDED = "include depth limit exceeded"
    INCLUDE_READ_FAILED = "include file could not be read"

    # Lookup
    NOT_A_GROUP = "cannot look up in non-group value"
    SETTING_NOT_FOUND = "setting not found"
    TYPE_MISMATCH = "value type mismatch"
    INTEGER_OUT_OF_RANGE = "integer value out of range"

    # Loading
    FILE_NOT_FOUND = "configuration file not found"
    FILE_UNREADABLE = "configuration file could not be read"


class LibconfigError(Exception):
    """Base exception for all pylibconfig errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        line: int | None = None,
        column: int | None = None,
        filename: str | None = None,
    ):
        self.kind = kind
        self.line = line
        self.column = column
        self.filename = filename
        self.message = message
        super().__init__(self._format(message))

    def _format(self, message: str) -> str:
        location = []
        if self.line is not None:
            location.append(f"line {self.line}")
        if self.column is not None:
            location.append(f"column {self.column}")

        if self.filename and self.filename != "<string>":
            location.insert(0, self.filename)
        elif location:
            location[0] = location[0].capitalize()

        if not location:
            return message
        return f"{', '.join(location)}: {message}"


class ParseError(LibconfigError):
    """Exception raised for syntax errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN,
        token: Token | None = None,
        expected: TokenType | None = None,
        filename: str | None = None,
    ):
        self.token = token
        self.expected = expected
        self.actual = token.type if token else None
        super().__init__(
            message,
            kind,
            line=token.line if token else None,
            column=token.column if token else None,
            filename=filename,
        )


class ArrayTypeError(ParseError):
    """Exception raised when an array holds elements of different kinds."""

    def __init__(
        self,
        first: ValueType,
        other: ValueType,
        token: Token | None = None,
        filename: str | None = None,
    ):
        self.first = first
        self.other = other
        super().__init__(
            f"array elements must have the same type, got {first} and {other}",
            ErrorKind.ARRAY_TYPE_MISMATCH,
            token=token,
            filename=filename,
        )


class IncludeError(LibconfigError):
    """Exception raised when an include directive cannot be honoured."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        token: Token | None = None,
        include_path: str | None = None,
        attempted: list[str] | None = None,
        depth: int | None = None,
        filename: str | None = None,
    ):
        self.include_path = include_path
        self.attempted = attempted or []
        self.depth = depth
        super().__init__(
            message,
            kind,
            line=token.line if token else None,
            column=token.column if token else None,
            filename=filename,
        )


class SettingLookupError(LibconfigError):
    """
    Exception raised when a path lookup or typed extraction fails.

    Attributes:
        path: The full dot-separated path that was requested
        segment: The path segment at which traversal stopped
        expected: Requested value type (type mismatches only)
        actual: Stored value type (type mismatches only)
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        path: str,
        segment: str | None = None,
        expected: ValueType | None = None,
        actual: ValueType | None = None,
    ):
        self.path = path
        self.segment = segment
        self.expected = expected
        self.actual = actual
        super().__init__(message, kind)


class ConfigError(LibconfigError):
    """Exception raised when a configuration source cannot be opened."""

    pass
