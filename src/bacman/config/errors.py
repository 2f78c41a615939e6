"""Configuration error hierarchy.

Location, read and parse errors stop the load pipeline immediately.
Validation errors carry every violation found in the document.
"""

from typing import Sequence


class ConfigError(Exception):
    """Configuration loading or validation error."""

    pass


class LocationError(ConfigError):
    """The configuration directory could not be determined."""

    pass


class ReadError(ConfigError):
    """The configuration file is missing or unreadable."""

    pass


class ParseError(ConfigError):
    """The configuration file is not a well-formed document."""

    pass


class ValidationError(ConfigError):
    """One or more semantic rule violations.

    Attributes:
        violations: Structured violation records, in the order found
    """

    def __init__(self, violations: Sequence) -> None:
        self.violations = list(violations)
        super().__init__("\n".join(str(v) for v in self.violations))
