from __future__ import annotations

JSON_SYNTAX_MESSAGE = "Invalid JSON syntax"
FORMAT_FAILED_PREFIX = "Formatting failed: "


class FormatError(Exception):
    """Raised by the dispatcher; ``message`` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
