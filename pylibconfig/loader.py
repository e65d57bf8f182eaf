"""
Configuration loader for files, strings and streams.
"""

from pathlib import Path
from typing import IO

from .config import Config
from .errors import ConfigError, ErrorKind
from .logging import get_logger
from .parser import IncludeLoader, parse_config, parse_config_file, parse_stream


logger = get_logger("loader")


class ConfigLoader:
    """
    Loads configuration from files, strings or streams.

    Usage:
        loader = ConfigLoader()
        config = loader.load_file("/etc/myapp/app.cfg")
        # or
        config = loader.load_string(config_text)

    Parse errors propagate unchanged (ParseError, IncludeError, ...);
    only failures to open the top-level file become ConfigError.
    """

    def __init__(self, include_loader: IncludeLoader | None = None):
        self.include_loader = include_loader or IncludeLoader()
        self.last_config: Config | None = None

    def load_file(self, path: str | Path) -> Config:
        """
        Load configuration from a file.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed Config

        Raises:
            ConfigError: If the file does not exist or cannot be read
            LibconfigError: If the file or one of its includes fails to parse
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError("Configuration file not found", ErrorKind.FILE_NOT_FOUND, filename=str(path))

        if not path.is_file():
            raise ConfigError("Not a file", ErrorKind.FILE_NOT_FOUND, filename=str(path))

        try:
            config = parse_config_file(path, loader=self.include_loader)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(
                f"Failed to read configuration: {e}", ErrorKind.FILE_UNREADABLE, filename=str(path)
            ) from e

        logger.info(f"Loaded configuration from {path} ({len(config.root)} top-level settings)")
        self.last_config = config
        return config

    def load_string(
        self,
        source: str,
        filename: str = "<string>",
        base_path: str | Path | None = None,
    ) -> Config:
        """
        Load configuration from a string.

        Args:
            source: Configuration source text
            filename: Filename for error messages
            base_path: Base path for resolving includes

        Returns:
            Parsed Config
        """
        if base_path is not None:
            base_path = Path(base_path)

        config = parse_config(source, filename, base_path, loader=self.include_loader)
        logger.debug(f"Loaded configuration from {filename} ({len(config.root)} top-level settings)")
        self.last_config = config
        return config

    def load_stream(
        self,
        stream: IO,
        filename: str = "<stream>",
        base_path: str | Path | None = None,
    ) -> Config:
        """Load configuration from a readable stream."""
        if base_path is not None:
            base_path = Path(base_path)

        config = parse_stream(stream, filename, base_path, loader=self.include_loader)
        logger.debug(f"Loaded configuration from {filename} ({len(config.root)} top-level settings)")
        self.last_config = config
        return config


def load_config(path: str | Path) -> Config:
    """
    Convenience function to load configuration from a file.

    Args:
        path: Path to the configuration file

    Returns:
        Parsed Config
    """
    loader = ConfigLoader()
    return loader.load_file(path)
