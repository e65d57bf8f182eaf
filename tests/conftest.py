"""
Pytest configuration and fixtures.
"""

import logging
from pathlib import Path
from typing import Callable

import pytest

from pylibconfig.parser import IncludeLoader


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The checker installs handlers on the package logger; drop them after each test."""
    yield
    package_logger = logging.getLogger("pylibconfig")
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


EXAMPLE_CONFIG = """
# Example libconfig configuration file

version = "1.0.0";

application = {
    name = "Example Application";

    window = {
        title = "My App Window";
        size = { width = 1024; height = 768; };
        resizable = true;
    };

    numbers = {
        decimal = 42;
        hexadecimal = 0xFF;        // 255
        binary = 0b1010;           // 10
        octal = 0o755;             // 493
        big_integer = 9223372036854775807L;
        negative = -123;
    };

    floats = {
        pi = 3.141592653589793;
        scientific = 1.23e-4;
        negative_exp = -2.5E+3;
    };

    flags = {
        debug_enabled = true;
        testing = TRUE;            // Case insensitive
        logging = False;
    };

    strings = {
        with_quotes = "He said, \\"Hello there!\\"";
        hex_escape = "Unicode: \\x41\\x42\\x43";
        multiline = "This is a very long string that "
                    "spans multiple lines.";
    };

    arrays = {
        string_array = [ "red", "green", "blue" ];
        empty = [ ];
        with_trailing_comma = [ "item1", "item2", "item3", ];
    };

    lists = {
        mixed_types = ( "string", 42, true, 3.14159, { nested_object = "value"; } );
        nested_lists = ( ( "inner", "list" ), ( 1, 2, 3 ), ( ) );
    };
};

/* Database configuration */
database = {
    host = "localhost";
    port = 5432;
    databases = (
        { name = "primary"; schema = "public"; },
        { name = "analytics"; schema = "analytics"; }
    );
};

build_number = 12345L;
final_note: "Colon assignment works too";
"""


@pytest.fixture
def example_config_text() -> str:
    """Text of a configuration using every value kind."""
    return EXAMPLE_CONFIG


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing a config file below tmp_path and returning its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def include_chain(write_config: Callable[[str, str], Path]) -> Callable[[int], Path]:
    """
    Factory for a chain of files where each file includes the next.

    The last file defines `leaf`; returns the path of the first file.
    """

    def _chain(length: int) -> Path:
        paths = [
            write_config(f"chain{index}.cfg", f'level{index} = {index};\n@include "chain{index + 1}.cfg"\n')
            for index in range(length - 1)
        ]
        paths.append(write_config(f"chain{length - 1}.cfg", f"leaf = {length - 1};\n"))
        return paths[0]

    return _chain


class MemoryIncludeLoader(IncludeLoader):
    """Serves include files from a dict of path -> content."""

    def __init__(self, files: dict[str, str]):
        self.files = files
        self.reads: list[str] = []

    def exists(self, path: Path) -> bool:
        return str(path) in self.files

    def read(self, path: Path) -> str:
        self.reads.append(str(path))
        return self.files[str(path)]


@pytest.fixture
def memory_loader() -> Callable[[dict[str, str]], MemoryIncludeLoader]:
    """Factory for an in-memory include loader."""
    return MemoryIncludeLoader
