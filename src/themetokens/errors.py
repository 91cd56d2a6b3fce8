"""
Error types for the themetokens export pipeline.
"""


class ThemeTokensError(Exception):
    """Base exception for all themetokens errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidColorFormat(ThemeTokensError):
    """
    Raised when a CSS color string cannot be parsed.

    Examples:
    - Named colors such as ``rebeccapurple``
    - Hex strings with the wrong number of digits
    - ``rgb()`` with percentage channels
    """

    pass


class SnapshotError(ThemeTokensError):
    """
    Raised when a variable snapshot cannot be read, written or queried.

    Examples:
    - Snapshot file missing or not valid JSON
    - Records that fail model validation
    - Writing code syntax to an unknown variable id
    """

    pass


class ConfigError(ThemeTokensError):
    """
    Raised when export options cannot be loaded.

    Examples:
    - Malformed YAML
    - Unknown option types
    - Base theme file that is not a JSON object
    """

    pass


class TokenImportError(ThemeTokensError):
    """Raised when a design-token document cannot be imported."""

    pass


class MessageError(ThemeTokensError):
    """Raised when an inbound command message has no recognizable type."""

    pass
