"""
Error Handling System
=====================

Exception hierarchy for theme resolution:
- Severity levels
- Context tracking (file, section, field, raw value)
- User-friendly error messages
- Formatting for logs and for the UI
"""

# ============================================================================
# IMPORTS
# ============================================================================

import time
import traceback
from typing import Optional
from enum import Enum


# ============================================================================
# ERROR SEVERITY LEVELS
# ============================================================================

class ErrorSeverity(Enum):
    """Error severity levels"""
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Context keys rendered as a location suffix, in this order
LOCATION_KEYS = ("filepath", "section", "field")


# ============================================================================
# CUSTOM EXCEPTION HIERARCHY
# ============================================================================

class AformError(Exception):
    """Base exception for all aform errors"""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        user_message: Optional[str] = None,
        context: Optional[dict] = None
    ):
        """
        Initialize aform error

        Args:
            message: Technical error message (for logs)
            severity: Error severity level
            user_message: User-friendly message (for UI)
            context: Additional context (dict)
        """
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.user_message = user_message or message
        self.context = context or {}
        self.timestamp = time.time()

    def __str__(self) -> str:
        location = self.location
        if location:
            return f"{self.message} ({location})"
        return self.message

    @property
    def location(self) -> str:
        """Where the error happened, e.g. "file: aform.toml, section: border" """
        return ", ".join(
            f"{key.replace('filepath', 'file')}: {self.context[key]}"
            for key in LOCATION_KEYS
            if key in self.context
        )

    def add_context(self, **details) -> 'AformError':
        """Attach details without overwriting what is already known"""
        for key, value in details.items():
            self.context.setdefault(key, value)
        return self

    def to_dict(self) -> dict:
        """Convert error to dictionary"""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "context": self.context,
            "timestamp": self.timestamp
        }


class ConfigurationError(AformError):
    """Configuration-related errors"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "user_message", "Configuration error. Please check your settings."
        )
        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            **kwargs
        )


class ThemeConfigError(ConfigurationError):
    """Theme could not be resolved from the configuration file"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "user_message", "Theme configuration error. Check aform.toml."
        )
        super().__init__(message, **kwargs)


class SourceUnreadable(ThemeConfigError):
    """Config file exists but cannot be opened or read"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "user_message", "Theme file could not be read. Check file permissions."
        )
        super().__init__(message, **kwargs)


class MalformedDocument(ThemeConfigError):
    """The document parser rejected the config file"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "user_message", "Theme file is not a valid document."
        )
        super().__init__(message, **kwargs)


class UnknownField(ThemeConfigError):
    """Override names a section or field the theme does not define"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "user_message", "Theme file names an unknown section or color."
        )
        super().__init__(message, **kwargs)


class InvalidSection(ThemeConfigError):
    """A theme section is not a table"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "user_message", "Theme sections must be tables of colors."
        )
        super().__init__(message, **kwargs)


# ----------------------------------------------------------------------------
# Color decode errors
# ----------------------------------------------------------------------------

class ColorError(ThemeConfigError, ValueError):
    """A single color value could not be decoded"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "user_message",
            "Invalid color. Use \"R,G,B\", \"#RRGGBB\" or { r = R, g = G, b = B }."
        )
        super().__init__(message, **kwargs)


class InvalidColorFormat(ColorError):
    """Value matches none of the accepted color encodings"""


class ChannelOutOfRange(ColorError):
    """A channel is outside 0-255"""


class NotANumber(ColorError):
    """A channel is not an integer"""


class InvalidHexLength(ColorError):
    """Hex color is not exactly '#' plus six digits"""


class InvalidHexDigit(ColorError):
    """Hex color contains a non-hex character"""


class MissingField(ColorError):
    """Color record lacks one of r, g, b"""


# ============================================================================
# EXCEPTION FORMATTER
# ============================================================================

class ExceptionFormatter:
    """Format exceptions for display"""

    @staticmethod
    def format_for_log(exception: Exception, include_traceback: bool = True) -> str:
        """
        Format exception for log file

        Args:
            exception: Exception to format
            include_traceback: Include full traceback

        Returns:
            Formatted string
        """
        if isinstance(exception, AformError):
            parts = [
                f"Error Type: {exception.__class__.__name__}",
                f"Severity: {exception.severity.value}",
                f"Message: {exception.message}",
            ]

            if exception.location:
                parts.append(f"Location: {exception.location}")

            if exception.context:
                parts.append(f"Context: {exception.context}")

            if include_traceback:
                parts.append(f"Traceback:\n{traceback.format_exc()}")

            return "\n".join(parts)
        else:
            if include_traceback:
                return f"{exception}\n{traceback.format_exc()}"
            else:
                return str(exception)

    @staticmethod
    def format_for_user(exception: Exception) -> str:
        """
        Format exception for user display

        Args:
            exception: Exception to format

        Returns:
            User-friendly message
        """
        if isinstance(exception, AformError):
            if exception.location:
                return f"{exception.user_message} [{exception.location}]"
            return exception.user_message
        else:
            return f"An error occurred: {exception}"
