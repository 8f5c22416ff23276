"""
C-style string literals as used by PO files.
"""
from __future__ import annotations

import re

from po_errors import PoSyntaxError


ESCAPES = {
    '"': '"',
    '\\': '\\',
    'n': '\n',
    't': '\t',
}

_ESCAPE_RE = re.compile(r'\\(.)', re.DOTALL)


def _unescape_repl(match: re.Match) -> str:
    char = match.group(1)
    # Unknown escapes are kept as written
    return ESCAPES.get(char, '\\' + char)


def decode(inner: str) -> str:
    """Decode the content between the quotes of one literal."""
    if '\\' not in inner:
        return inner
    return _ESCAPE_RE.sub(_unescape_repl, inner)


def _closing_quote(text: str) -> int:
    i = 1
    while i < len(text):
        char = text[i]
        if char == '\\':
            i += 2
            continue
        if char == '"':
            return i
        i += 1
    return -1


def unquote(text: str, lineno: int | None = None) -> str:
    """Return the decoded value of a single quoted literal such as ``"a\\tb"``."""
    s = text.strip()
    if not s.startswith('"'):
        raise PoSyntaxError(f'expected a quoted string, got {s!r}', lineno)
    end = _closing_quote(s)
    if end < 0:
        raise PoSyntaxError('unterminated string', lineno)
    if end != len(s) - 1:
        raise PoSyntaxError(f'unexpected text after string: {s[end + 1:]!r}', lineno)
    return decode(s[1:end])
