"""
Custom exception types for the toolpath import pipeline.
Malformed toolpath text is absorbed by the parser; only unreadable input raises.
"""


class ToolpathImportError(RuntimeError):
    """Base class for import failures."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Import Error: {message}")

    def __str__(self):
        return f"Import Error: {self.original_message}"


class InputUnavailableError(ToolpathImportError):
    """The named input could not be opened or read."""

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        self.reason = reason
        message = f"Failed to open G-code file {path}."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
