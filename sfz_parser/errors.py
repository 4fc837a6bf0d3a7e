"""
Exception hierarchy for the SFZ parser.

Fatal problems abort the parse of the current input and are raised as one of
the :class:`SfzError` subclasses below.  Recoverable problems never raise;
they are collected as :class:`~sfz_parser.models.ParseWarning` records next
to a still-valid document.
"""
from __future__ import annotations

from typing import List, Optional


class SfzError(Exception):
    """Base class for every error raised by :mod:`sfz_parser`."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message


class TokenizeError(SfzError):
    """Unterminated quote / header / block comment, or an unlexable token."""


class StructuralError(SfzError):
    """The scope structure cannot be built (e.g. an unknown ``<header>``)."""


class DirectiveError(SfzError):
    """A malformed ``#define`` / ``#include`` directive."""


class IncludeError(SfzError):
    """Raised by the include loader: missing file, cycle or depth limit."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        chain: Optional[List[str]] = None,
    ) -> None:
        self.chain: List[str] = list(chain or [])
        super().__init__(message, line)


class StrictModeError(SfzError):
    """Raised in strict mode when a parse produced any warning."""

    def __init__(self, warnings: list) -> None:
        self.warnings = list(warnings)
        noun = "warning" if len(self.warnings) == 1 else "warnings"
        super().__init__(f"strict mode: {len(self.warnings)} {noun}")
