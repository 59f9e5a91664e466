from .errors import InputUnavailableError, ToolpathImportError

__all__ = ["ToolpathImportError", "InputUnavailableError"]
