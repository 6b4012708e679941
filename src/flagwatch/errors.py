"""
errors.py - error taxonomy shared by the scanner, detector and CLI
"""


class FlagwatchError(Exception):
    """Base class for every error flagwatch raises on purpose."""


class ConfigurationError(FlagwatchError):
    def __init__(self, message, config_path=None):
        super().__init__(message)
        self.config_path = config_path


class FileScanError(FlagwatchError):
    def __init__(self, message, file_path):
        super().__init__(message)
        self.file_path = file_path


class ParseError(FlagwatchError):
    def __init__(self, message, file_path, pattern=None, line=None, column=None):
        super().__init__(message)
        self.file_path = file_path
        self.pattern = pattern
        self.line = line
        self.column = column


class InternalError(FlagwatchError):
    """Wraps an unexpected failure; the original exception is kept as __cause__."""
