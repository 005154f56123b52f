"""
Error types for enumbind declarations and lookups.
"""

from dataclasses import dataclass


class EnumBindError(Exception):
    """Base exception for all enumbind errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message

    def __str__(self) -> str:
        return self._format_message()


class ConfigurationError(EnumBindError):
    """
    Raised when an enumeration or binding is declared incorrectly.

    Examples:
    - Duplicate key within one enumeration
    - Same code used by two different keys
    - Key that is not a valid identifier
    - Values associated twice with the same enumeration class
    - Same attribute bound twice on one host class
    - Unreadable locale file
    """

    pass


class EnumerationNotFoundError(EnumBindError):
    """
    Raised when no enumeration is given for a binding and none can be
    resolved from the attribute name.
    """

    pass


class UnsupportedOperationError(EnumBindError):
    """
    Raised when a binding asks for behaviour the host class has not opted into.

    Examples:
    - create_scopes on a host without SupportsScopes
    - required on a host without SupportsPresenceValidation
    """

    pass


class UnknownKeyError(EnumBindError, KeyError):
    """Raised when a lookup by key names a key the enumeration does not declare."""

    def __init__(self, key: str, context: "ErrorContext | None" = None):
        self.key = key
        super().__init__(f"Unknown key '{key}'", context)


@dataclass
class ErrorContext:
    """
    Where a declaration error happened.

    Attributes:
        owner: Name of the enumeration or host class
        attribute: Optional attribute name on the host class
    """

    owner: str
    attribute: str | None = None

    def format(self) -> str:
        """
        Format context as a human-readable string.

        Returns:
            Formatted string like: "Person.status"
        """
        if self.attribute:
            return f"{self.owner}.{self.attribute}"
        return self.owner
