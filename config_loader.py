"""
Configuration File Loader
==========================

Locate aform.toml, parse it and resolve the UI theme.

Search order (first existing file wins):
1. ./aform.toml
2. <user config dir>/aform/aform.toml

No file at all is fine: the built-in theme is used. A file that exists but
cannot be read, parsed or decoded is an error; no partial theme is returned.
"""

# ============================================================================
# IMPORTS
# ============================================================================

import json
import logging
import tomllib
from pathlib import Path
from typing import Optional, Dict, Any, Iterable

import yaml

from error_handling import (
    AformError,
    ConfigurationError,
    MalformedDocument,
    SourceUnreadable,
)
from theme import DEFAULT_THEME, THEME_KEY, Theme, theme_to_dict
from theme_merger import merge_theme
from utils import user_config_dir

logger = logging.getLogger("aform.config_loader")


APP_NAME = "aform"
CONFIG_FILENAME = "aform.toml"


# ============================================================================
# SEARCH PATHS
# ============================================================================

def default_search_paths() -> list[Path]:
    """Candidate config files in priority order"""
    return [
        Path.cwd() / CONFIG_FILENAME,
        user_config_dir() / APP_NAME / CONFIG_FILENAME,
    ]


# ============================================================================
# CLASSES
# ============================================================================

class ConfigLoader:
    """Load theme configuration from files"""

    SUPPORTED_FORMATS = {'.toml', '.yaml', '.yml', '.json'}
    SAVE_FORMATS = {'.yaml', '.yml', '.json'}

    @classmethod
    def find_config_file(cls, search_paths: Iterable[Path]) -> Optional[Path]:
        """
        Find the first existing config file

        Args:
            search_paths: Candidate files in priority order

        Returns:
            Path to first config file found, or None

        Raises:
            SourceUnreadable: A candidate exists but is not a readable file
        """
        for candidate in search_paths:
            candidate = Path(candidate)
            try:
                st = candidate.stat()
            except (FileNotFoundError, NotADirectoryError):
                logger.debug("No config file at %s", candidate)
                continue
            except OSError as e:
                raise SourceUnreadable(
                    f"Cannot access config file {candidate}: {e}",
                    context={"filepath": str(candidate), "error": str(e)}
                ) from e

            if not candidate.is_file():
                raise SourceUnreadable(
                    f"Config path is not a regular file: {candidate}",
                    context={"filepath": str(candidate), "mode": oct(st.st_mode)}
                )

            return candidate

        return None

    @classmethod
    def load_document(cls, filepath: Path) -> Dict[str, Any]:
        """
        Read and parse a config document

        Args:
            filepath: Path to config file (.toml, .yaml, .yml or .json)

        Returns:
            Parsed document as a dict

        Raises:
            ConfigurationError: Unsupported file extension
            SourceUnreadable: File cannot be opened or read
            MalformedDocument: File is not a valid document
        """
        filepath = Path(filepath)
        suffix = filepath.suffix.lower()

        # Check file extension
        if suffix not in cls.SUPPORTED_FORMATS:
            raise ConfigurationError(
                f"Unsupported config format: {filepath.suffix}. "
                f"Supported: {', '.join(sorted(cls.SUPPORTED_FORMATS))}",
                context={"filepath": str(filepath), "suffix": filepath.suffix}
            )

        # Read file
        try:
            raw = filepath.read_bytes()
        except OSError as e:
            raise SourceUnreadable(
                f"Failed to read config file: {e}",
                context={"filepath": str(filepath), "error": str(e)}
            ) from e

        # Parse file
        try:
            text = raw.decode('utf-8')
            if suffix == '.toml':
                data = tomllib.loads(text)
            elif suffix == '.json':
                data = json.loads(text)
            else:  # YAML
                data = yaml.safe_load(text)
        except (UnicodeDecodeError, tomllib.TOMLDecodeError,
                json.JSONDecodeError, yaml.YAMLError) as e:
            raise MalformedDocument(
                f"Failed to parse config file: {e}",
                context={"filepath": str(filepath), "error": str(e)}
            ) from e

        # Empty YAML document
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise MalformedDocument(
                f"Config file must contain a table at the top level, "
                f"got {type(data).__name__}",
                context={"filepath": str(filepath)}
            )

        return data

    @classmethod
    def load_from_file(cls, filepath: Path, base: Theme = DEFAULT_THEME) -> Theme:
        """
        Resolve a theme from one explicit config file

        Args:
            filepath: Path to config file
            base: Theme supplying every color the file leaves out

        Returns:
            Theme instance

        Raises:
            AformError subclass; context includes the file path
        """
        filepath = Path(filepath)
        try:
            data = cls.load_document(filepath)
            theme = merge_theme(base, data.get(THEME_KEY))
        except AformError as e:
            e.add_context(filepath=str(filepath))
            raise

        logger.info("Loaded theme from %s", filepath)
        return theme

    @classmethod
    def save_to_file(cls, theme: Theme, filepath: Path, fmt: str = "hex"):
        """
        Save a complete theme to file

        Args:
            theme: Theme to save
            filepath: Path to save to (.yaml, .yml or .json)
            fmt: Color encoding, 'hex', 'comma' or 'record'
        """
        filepath = Path(filepath)
        suffix = filepath.suffix.lower()

        if suffix not in cls.SAVE_FORMATS:
            raise ConfigurationError(
                f"Cannot save theme as {filepath.suffix}. "
                f"Supported: {', '.join(sorted(cls.SAVE_FORMATS))}",
                context={"filepath": str(filepath), "suffix": filepath.suffix}
            )

        # Convert theme to dict
        try:
            data = theme_to_dict(theme, fmt)
        except ValueError as e:
            raise ConfigurationError(
                f"Failed to encode theme: {e}",
                context={"filepath": str(filepath), "fmt": fmt}
            ) from e

        # Save file
        try:
            # Ensure directory exists
            filepath.parent.mkdir(parents=True, exist_ok=True)

            with filepath.open('w', encoding='utf-8') as f:
                if suffix == '.json':
                    json.dump(data, f, indent=2)
                else:  # YAML
                    yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to save theme file: {e}",
                context={"filepath": str(filepath), "error": str(e)}
            ) from e

        logger.info("Saved theme to %s", filepath)


# ============================================================================
# RESOLVER
# ============================================================================

def resolve_theme(
    search_paths: Optional[Iterable[Path]] = None,
    base: Theme = DEFAULT_THEME
) -> Theme:
    """
    Resolve the UI theme for this run

    Args:
        search_paths: Candidate files in priority order (default: ./aform.toml,
            then the user config directory)
        base: Theme supplying every color the config leaves out

    Returns:
        Fully populated Theme

    Raises:
        ConfigurationError: The config file exists but cannot be used
    """
    if search_paths is None:
        search_paths = default_search_paths()

    filepath = ConfigLoader.find_config_file(search_paths)
    if filepath is None:
        logger.info("No %s found; using built-in theme", CONFIG_FILENAME)
        return base

    return ConfigLoader.load_from_file(filepath, base)
