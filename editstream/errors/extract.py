from __future__ import annotations


class ExtractError(Exception):
    """Raised when an extraction strategy fails on a buffer.

    Never escapes `parse_edit_descriptions`; it is reported as a diagnostic.
    """

    def __init__(self, message: str, strategy: str | None = None):
        super().__init__(message)
        self.strategy = strategy
