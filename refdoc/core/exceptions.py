"""Refdoc custom exceptions."""


class RefdocError(Exception):
    """Base exception for Refdoc errors."""


class SymbolNotFoundError(RefdocError):
    """Symbol not found in the project."""


class SourceError(RefdocError):
    """Error reading a source file or manifest."""


class ConfigError(RefdocError):
    """Invalid project configuration."""
