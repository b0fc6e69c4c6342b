"""Compiler exceptions."""


class WebCompError(Exception):
    """Base class for errors raised by the webcomp compiler."""

    def __init__(self, message: str, file_path: str = "", line: int = 0):
        self.message = message
        self.file_path = file_path
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        if self.file_path and self.line:
            return f"{self.file_path}:{self.line}: {self.message}"
        if self.file_path:
            return f"{self.file_path}: {self.message}"
        return self.message


class TemplateStructureError(WebCompError):
    """Raised when annotated metadata breaks a structural contract.

    For example a conditional or repeated region whose node does not have
    exactly one child element. This indicates a bug in the analysis stage
    that produced the metadata, so it is never recovered from.
    """


class MetadataError(WebCompError):
    """Raised when a metadata interchange document is malformed."""


class ConfigError(WebCompError):
    """Raised when a config file cannot be loaded."""
