"""
Lexer (tokenizer) for libconfig syntax.

Supports:
- Identifiers (setting names: letters, digits, '_', '-', '*')
- Double-quoted strings with C-style escapes and \\xHH
- Integers in decimal, hex (0x), binary (0b) and octal (0o/0q), with optional L suffix
- Floats with decimal point and/or exponent
- Case-insensitive true/false booleans
- Punctuation: = : ; , { } [ ] ( )
- Comments: '//' and '#' to end of line, '/* ... */' multi-line
- The @include directive

The whole input is tokenized up front; the parser then walks the token list
with next_token() / peek_token(). Lexing never raises: anything it cannot make
sense of becomes an ERROR token and the parser reports it with its position.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import IO, Iterator

from .logging import get_logger


logger = get_logger("lexer")


class TokenType(Enum):
    """Token types for libconfig syntax."""

    EOF = auto()           # end of input

    # Literals
    IDENTIFIER = auto()    # setting name
    STRING = auto()        # "quoted string"
    INTEGER = auto()       # 42, 0xFF, 0b1010, 0o755, 42L
    FLOAT = auto()         # 3.14, 1e-4
    BOOLEAN = auto()       # true, FALSE

    # Delimiters
    ASSIGN = auto()        # = or :
    SEMICOLON = auto()     # ;
    COMMA = auto()         # ,
    LEFT_BRACE = auto()    # {
    RIGHT_BRACE = auto()   # }
    LEFT_BRACKET = auto()  # [
    RIGHT_BRACKET = auto() # ]
    LEFT_PAREN = auto()    # (
    RIGHT_PAREN = auto()   # )

    # Special
    INCLUDE = auto()       # @include

    # Error
    ERROR = auto()         # unrecognized input


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


PUNCTUATION = {
    "=": TokenType.ASSIGN,
    ":": TokenType.ASSIGN,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"


def _is_digit(char: str) -> bool:
    return char != "" and char in DIGITS


def _is_hex_digit(char: str) -> bool:
    return char != "" and char in HEX_DIGITS


def _is_identifier_start(char: str) -> bool:
    return char != "" and (char.isalpha() or char in "_*")


def _is_identifier_char(char: str) -> bool:
    return char != "" and (char.isalpha() or char in DIGITS or char in "_-*")


class Lexer:
    """
    Tokenizer for libconfig syntax.

    Example config:
        name = "MyApp";
        port = 8080;
        database = {
            host = "localhost";
            pool = [ 5, 10, 20 ];
        };
        @include "local.cfg"
    """

    # Single-character string escapes
    ESCAPES = {
        "n": "\n",
        "r": "\r",
        "t": "\t",
        "b": "\b",
        "f": "\f",
        "a": "\a",
        "v": "\v",
        "\\": "\\",
        '"': '"',
    }

    def __init__(self, source: str, filename: str = "<string>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

        self.tokens: list[Token] = []
        self.token_pos = 0

        self._tokenize()

    @classmethod
    def from_stream(cls, stream: IO, filename: str = "<stream>") -> "Lexer":
        """
        Create a lexer from a readable stream, reading it to the end.

        A failure while reading is not fatal here: the lexer is built over
        empty input and the parser reports whatever follows from that.
        """
        try:
            data = stream.read()
            if isinstance(data, bytes):
                data = data.decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read {filename}, treating it as empty: {e}")
            data = ""
        return cls(data, filename)

    def _current(self) -> str:
        """Get current character or empty string if at end."""
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> str:
        """Peek at character at offset from current position."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Advance position and return current character."""
        if self.pos >= len(self.source):
            return ""

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def _emit(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        self.tokens.append(Token(token_type, value, line, column))

    def _skip_whitespace(self) -> None:
        """Skip whitespace characters."""
        while self._current() and self._current().isspace():
            self._advance()

    def _skip_comment(self) -> bool:
        """Skip a comment of any style. Returns True if one was consumed."""
        char = self._current()

        if char == "#" or (char == "/" and self._peek() == "/"):
            # Single-line comment
            while self._current() and self._current() != "\n":
                self._advance()
            return True

        if char == "/" and self._peek() == "*":
            # Multi-line comment
            start_line = self.line
            start_col = self.column
            self._advance()  # skip /
            self._advance()  # skip *

            while self.pos < len(self.source):
                if self._current() == "*" and self._peek() == "/":
                    self._advance()  # skip *
                    self._advance()  # skip /
                    return True
                self._advance()

            self._emit(TokenType.ERROR, "/*", start_line, start_col)
            return True

        return False

    def _read_string(self) -> None:
        """Read a quoted string literal."""
        start_line = self.line
        start_col = self.column
        start_pos = self.pos
        self._advance()  # skip opening quote

        result = []

        while self._current() and self._current() != '"':
            char = self._advance()

            if char != "\\":
                result.append(char)
                continue

            escape_char = self._current()
            if escape_char == "":
                break

            if escape_char == "x" and _is_hex_digit(self._peek(1)) and _is_hex_digit(self._peek(2)):
                self._advance()  # skip x
                digits = self._advance() + self._advance()
                result.append(chr(int(digits, 16)))
                continue

            # Unknown escapes keep the escaped character
            result.append(self.ESCAPES.get(escape_char, escape_char))
            self._advance()

        if not self._current():
            self._emit(TokenType.ERROR, self.source[start_pos:self.pos], start_line, start_col)
            return

        self._advance()  # skip closing quote
        self._emit(TokenType.STRING, "".join(result), start_line, start_col)

    def _read_digits(self, valid: str | None = None) -> None:
        char = self._current()
        while char and (char in valid if valid is not None else _is_digit(char)):
            self._advance()
            char = self._current()

    def _read_number(self) -> None:
        """Read an integer or float literal, including a leading '-'."""
        start_line = self.line
        start_col = self.column
        start_pos = self.pos
        token_type = TokenType.INTEGER

        if self._current() == "-":
            self._advance()

        if self._current() == "0" and self._peek() in ("x", "X", "b", "B", "o", "O", "q", "Q"):
            self._advance()  # skip 0
            prefix = self._advance().lower()
            if prefix == "x":
                self._read_digits(HEX_DIGITS)
            elif prefix == "b":
                self._read_digits("01")
            else:
                self._read_digits("01234567")
        else:
            self._read_digits()

        # Fraction
        if self._current() == "." and _is_digit(self._peek()):
            token_type = TokenType.FLOAT
            self._advance()
            self._read_digits()

        # Exponent
        if self._current() in ("e", "E"):
            token_type = TokenType.FLOAT
            self._advance()
            if self._current() in ("+", "-"):
                self._advance()
            self._read_digits()

        # Long suffix
        if self._current() in ("L", "l"):
            self._advance()

        self._emit(token_type, self.source[start_pos:self.pos], start_line, start_col)

    def _read_identifier(self) -> str:
        """Read an identifier and return its text."""
        start_pos = self.pos
        while _is_identifier_char(self._current()):
            self._advance()
        return self.source[start_pos:self.pos]

    def _read_word(self) -> None:
        """Read an identifier or boolean keyword."""
        start_line = self.line
        start_col = self.column
        word = self._read_identifier()

        if word.lower() in ("true", "false"):
            self._emit(TokenType.BOOLEAN, word, start_line, start_col)
        else:
            self._emit(TokenType.IDENTIFIER, word, start_line, start_col)

    def _read_directive(self) -> None:
        """Read an '@' directive; only @include is recognized."""
        start_line = self.line
        start_col = self.column
        self._advance()  # skip @

        name = self._read_identifier() if _is_identifier_start(self._current()) else ""
        if name == "include":
            self._emit(TokenType.INCLUDE, "@include", start_line, start_col)
        else:
            self._emit(TokenType.ERROR, f"@{name}", start_line, start_col)

    def _tokenize(self) -> None:
        """Tokenize the entire source into self.tokens."""
        while True:
            self._skip_whitespace()

            if self.pos >= len(self.source):
                break

            if self._skip_comment():
                continue

            char = self._current()

            if char in PUNCTUATION:
                self._emit(PUNCTUATION[char], char, self.line, self.column)
                self._advance()
            elif char == '"':
                self._read_string()
            elif char == "@":
                self._read_directive()
            elif _is_digit(char) or (char == "-" and _is_digit(self._peek())):
                self._read_number()
            elif _is_identifier_start(char):
                self._read_word()
            else:
                self._emit(TokenType.ERROR, char, self.line, self.column)
                self._advance()

        self._emit(TokenType.EOF, "", self.line, self.column)

    def next_token(self) -> Token:
        """Return the next token and advance; EOF repeats once the input is exhausted."""
        token = self.peek_token()
        if self.token_pos < len(self.tokens):
            self.token_pos += 1
        return token

    def peek_token(self) -> Token:
        """Return the next token without consuming it."""
        if self.token_pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[self.token_pos]

    def __iter__(self) -> Iterator[Token]:
        """Iterate over all tokens, EOF included."""
        return iter(self.tokens)


def tokenize(source: str, filename: str = "<string>") -> list[Token]:
    """Convenience function to tokenize a source string."""
    return list(Lexer(source, filename))
