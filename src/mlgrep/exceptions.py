#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mlgrep library.

This module defines specialized exception classes for the error conditions
that can occur while configuring a record search and reading its inputs.
These exceptions provide more specific error information than generic
built-ins, and the CLI maps them onto exit codes.

Exception Hierarchy
-------------------
- MlgrepError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidPatternError (uncompilable search or separator regex)

  - ConfigError (unreadable or malformed configuration file)

  - FileError (input access and I/O)
    - FileNotFoundError (input doesn't exist)
    - FileAccessError (permissions, directories)
    - DecompressionError (corrupted compressed input)

"""

from typing import Any


class MlgrepError(Exception):
    """Base exception class for all mlgrep-specific errors.

    Catching this will catch all library-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MlgrepError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidPatternError(ValidationError):
    """Exception raised when a regular expression cannot be compiled.

    Raised while building a ``PatternSet`` or a ``Separator``, before any
    input is read.

    Parameters
    ----------
    pattern : str
        The pattern text as supplied by the caller
    role : str, default "pattern"
        Either ``"pattern"`` for a search pattern or ``"separator"`` for the
        record separator
    position : int, optional
        1-based position of the pattern in the pattern list
    message : str, optional
        Custom error message. If not provided, one is built from the regex
        compiler's complaint
    original_error : Exception, optional
        The ``re.error`` raised by the compiler

    Attributes
    ----------
    pattern : str
        The offending pattern
    role : str
        What the pattern was used for
    position : int or None
        Position of the offending pattern, when known

    """

    def __init__(
        self,
        pattern: str,
        role: str = "pattern",
        position: int | None = None,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid pattern error."""
        if message is None:
            where = f" #{position}" if position is not None else ""
            message = f"Invalid {role}{where} {pattern!r}"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, parameter_name=role, parameter_value=pattern, original_error=original_error)
        self.pattern = pattern
        self.role = role
        self.position = position


class ConfigError(MlgrepError):
    """Exception raised when a configuration file cannot be used.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path to the configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class FileError(MlgrepError):
    """Base exception for input access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    file_path : str or None
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when an input file cannot be opened.

    This includes permission errors and paths that name a directory.
    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class DecompressionError(FileError):
    """Exception raised when compressed input turns out to be corrupt."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the decompression error."""
        if message is None:
            message = f"Cannot decompress {file_path}"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, file_path=file_path, original_error=original_error)
