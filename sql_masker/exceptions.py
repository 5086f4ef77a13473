"""
Custom exception classes for masking and scanning.

This module defines all custom exceptions used throughout the sql_masker
package. These exceptions provide specific error types for the different
failure scenarios of alias resolution, rule handling and data scanning.
"""

from typing import Optional


class MaskingError(Exception):
    """Base exception class for all masking errors.

    This exception serves as the base class for all custom exceptions in the
    sql_masker package. It can be used to catch any masking-related error.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a MaskingError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class ParseError(MaskingError):
    """Exception raised when SQL cannot be decomposed into projection items.

    Raised by the alias graph builder when the statement is empty, cannot be
    parsed by sqlglot, or is not SELECT-shaped.

    Attributes:
        message: Error message describing the failure.
        sql: The offending SQL text, if available.
    """

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        self.sql = sql
        super().__init__(message)


class PatternError(MaskingError):
    """Exception raised when a regular expression fails to compile.

    Attributes:
        message: Error message describing the failure.
        pattern: The pattern that could not be compiled.
    """

    def __init__(self, message: str, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(message)


class InvalidRuleError(MaskingError):
    """Exception raised when an obfuscation rule definition cannot be loaded.

    Rules that are well-typed but carry degenerate parameters never raise;
    they degrade to the identity transform. This error is only raised when a
    rule definition names an unknown method or has unusable parameters.

    Attributes:
        message: Error message describing the failure.
        method: The method name or code found in the definition.
    """

    def __init__(self, message: str, method: object = None) -> None:
        self.method = method
        super().__init__(message)


class FetchError(MaskingError):
    """Exception raised when a driver cannot read a table, view or query.

    Attributes:
        message: Error message describing the failure.
        table: Name of the table or view being read, if any.
        schema: Schema of the table or view, if any.
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        schema: Optional[str] = None,
    ) -> None:
        self.table = table
        self.schema = schema
        super().__init__(message)
