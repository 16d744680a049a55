# proplint/errors.py
"""
Error types raised by proplint outside the analysis core.

The analysis core itself never raises for odd input: indeterminate
inference and unanalyzable declaration sites degrade to "skip this prop".
The exceptions below cover the surrounding host: loading a syntax tree,
reading configuration and driving the checker suite.

Error Hierarchy:
────────────────
┌────────────────────────────────────────────────────────────────┐
│  ProplintError (base)                                          │
│  ├── MalformedTreeError   - input is not an ESTree node        │
│  └── ConfigurationError   - unknown rule, bad output format    │
└────────────────────────────────────────────────────────────────┘

Error Codes:
────────────
Codes follow the pattern PLNT-XXXX:
  - 0001-0999: Input (tree loading) errors
  - 1000-1999: Configuration errors
  - 9000-9999: Internal errors
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Optional


@unique
class ErrorPhase(Enum):
    """Stage of the host pipeline that produced an error."""
    INPUT = "input"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class ErrorCode:
    """
    Structured error code: ``PLNT-NNNN`` plus the phase it belongs to.
    """

    __slots__ = ("prefix", "number", "phase")

    def __init__(self, prefix: str, number: int, phase: ErrorPhase) -> None:
        self.prefix = prefix
        self.number = number
        self.phase = phase

    @property
    def code(self) -> str:
        """Get the full error code string."""
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.phase.name})"

    def __hash__(self) -> int:
        return hash((self.prefix, self.number))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.prefix == other.prefix and self.number == other.number
        if isinstance(other, str):
            return self.code == other
        return False


class ErrorCodes:
    """Predefined error codes."""

    INVALID_JSON = ErrorCode("PLNT", 1, ErrorPhase.INPUT)
    NOT_A_NODE = ErrorCode("PLNT", 2, ErrorPhase.INPUT)
    MISSING_NODE_TYPE = ErrorCode("PLNT", 3, ErrorPhase.INPUT)
    INVALID_ENCODING = ErrorCode("PLNT", 4, ErrorPhase.INPUT)

    UNKNOWN_RULE = ErrorCode("PLNT", 1000, ErrorPhase.CONFIGURATION)
    INVALID_FORMAT = ErrorCode("PLNT", 1001, ErrorPhase.CONFIGURATION)
    INVALID_MACRO_NAME = ErrorCode("PLNT", 1002, ErrorPhase.CONFIGURATION)

    INTERNAL_ERROR = ErrorCode("PLNT", 9000, ErrorPhase.INTERNAL)


class ProplintError(Exception):
    """
    Base exception for all proplint errors.

    Carries an :class:`ErrorCode` and an optional hint that the CLI prints
    next to the message.
    """

    default_code: ErrorCode = ErrorCodes.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        hint: str = "",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint
        self.cause = cause

    def with_hint(self, hint: str) -> "ProplintError":
        """Add a hint to this error."""
        self.hint = hint
        return self

    def __str__(self) -> str:
        text = f"{self.code}: {self.message}"
        if self.hint:
            text += f" (hint: {self.hint})"
        return text


class MalformedTreeError(ProplintError):
    """The input could not be decoded into an ESTree node tree."""

    default_code = ErrorCodes.NOT_A_NODE

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        path: str = "",
        hint: str = "",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code=code, hint=hint, cause=cause)
        self.path = path

    def __str__(self) -> str:
        text = super().__str__()
        if self.path:
            return f"{self.path}: {text}"
        return text


class ConfigurationError(ProplintError):
    """Invalid analysis configuration (unknown rule, bad format, ...)."""

    default_code = ErrorCodes.UNKNOWN_RULE


__all__ = [
    "ErrorPhase",
    "ErrorCode",
    "ErrorCodes",
    "ProplintError",
    "MalformedTreeError",
    "ConfigurationError",
]
