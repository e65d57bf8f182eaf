"""
Parser and value model for the libconfig configuration format.
"""

from .config import Config
from .const import APP_VERSION
from .errors import (
    ArrayTypeError,
    ConfigError,
    ErrorKind,
    IncludeError,
    LibconfigError,
    ParseError,
    SettingLookupError,
)
from .lexer import Lexer, Token, TokenType, tokenize
from .loader import ConfigLoader, load_config
from .parser import (
    ConfigParser,
    IncludeLoader,
    parse_config,
    parse_config_file,
    parse_integer_literal,
    parse_stream,
)
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
    ValueType,
    from_python,
)

__version__ = APP_VERSION

__all__ = [
    "Config",
    "ConfigLoader",
    "ConfigParser",
    "IncludeLoader",
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "load_config",
    "parse_config",
    "parse_config_file",
    "parse_integer_literal",
    "parse_stream",
    "Value",
    "ValueType",
    "IntValue",
    "Int64Value",
    "FloatValue",
    "BoolValue",
    "StringValue",
    "ArrayValue",
    "GroupValue",
    "ListValue",
    "from_python",
    "ErrorKind",
    "LibconfigError",
    "ParseError",
    "ArrayTypeError",
    "IncludeError",
    "SettingLookupError",
    "ConfigError",
]
