"""
Errors raised while reading PO catalogs.
"""
from __future__ import annotations


class PoError(Exception):
    """Base class for PO catalog errors."""

    def __init__(self, msg: str, lineno: int | None = None, filename: str | None = None):
        super().__init__(msg)
        self.msg = msg
        self.lineno = lineno
        self.filename = filename

    def __str__(self) -> str:
        where = ''
        if self.filename:
            where = f'{self.filename}:'
        if self.lineno is not None:
            where += f'line {self.lineno}: '
        elif where:
            where += ' '
        return f'{where}{self.msg}'


class PoSyntaxError(PoError):
    """A line that is not valid PO syntax, or a broken string literal."""


class PoStructureError(PoError):
    """Valid lines in an order that does not form an entry."""


class PoInputError(PoError):
    """Input that cannot be decoded as text."""
