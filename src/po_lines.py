"""
Classification of single PO lines.

Every physical line of a PO file is exactly one of the line kinds below.
``classify`` never looks at neighbouring lines; putting lines together into
entries is the job of ``po_builder``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Union

from po_errors import PoSyntaxError
from po_strings import unquote


OBSOLETE_MARKER = '#~'

KEYWORD_RE = re.compile(r'^(msgctxt|msgid_plural|msgid|msgstr)(?:\[(\d+)\])?\s*(".*)$')


@dataclass(frozen=True)
class Blank:
    lineno: int = 0
    obsolete: bool = False


@dataclass(frozen=True)
class TranslatorComment:
    text: str = ''
    lineno: int = 0
    obsolete: bool = False


@dataclass(frozen=True)
class ExtractedComment:
    text: str = ''
    lineno: int = 0
    obsolete: bool = False


@dataclass(frozen=True)
class Reference:
    text: str = ''
    lineno: int = 0
    obsolete: bool = False


@dataclass(frozen=True)
class Flags:
    names: tuple[str, ...] = ()
    lineno: int = 0
    obsolete: bool = False


@dataclass(frozen=True)
class PreviousContext:
    text: str = ''
    lineno: int = 0
    obsolete: bool = False


@dataclass(frozen=True)
class Keyword:
    # One of msgctxt, msgid, msgid_plural, msgstr
    field: str = 'msgid'
    # Plural index for msgstr[N], None otherwise
    index: int | None = None
    value: str = ''
    lineno: int = 0
    obsolete: bool = False


@dataclass(frozen=True)
class Continuation:
    value: str = ''
    lineno: int = 0
    obsolete: bool = False


Line = Union[
    Blank,
    TranslatorComment,
    ExtractedComment,
    Reference,
    Flags,
    PreviousContext,
    Keyword,
    Continuation,
]

COMMENT_KINDS = (TranslatorComment, ExtractedComment, Reference, Flags, PreviousContext)


def split_flags(text: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in text.split(',') if name.strip())


def _classify_comment(s: str, lineno: int) -> Line:
    if s.startswith('#.'):
        return ExtractedComment(s[2:].strip(), lineno)
    if s.startswith('#:'):
        return Reference(s[2:].strip(), lineno)
    if s.startswith('#,'):
        return Flags(split_flags(s[2:]), lineno)
    if s.startswith('#|'):
        return PreviousContext(s[2:].strip(), lineno)
    if len(s) == 1 or s[1].isspace():
        return TranslatorComment(s[1:].lstrip(), lineno)
    # Unknown markers such as msgcat's "#-#-#-#-#" are kept as written
    return TranslatorComment(s, lineno)


def _classify_keyword(s: str, lineno: int) -> Keyword:
    m = KEYWORD_RE.match(s)
    if not m:
        raise PoSyntaxError(f'unrecognised line: {s!r}', lineno)
    name, index, literal = m.groups()
    if index is not None and name != 'msgstr':
        raise PoSyntaxError(f'{name} cannot take a plural index', lineno)
    return Keyword(
        field=name,
        index=int(index) if index is not None else None,
        value=unquote(literal, lineno),
        lineno=lineno,
    )


def classify(raw: str, lineno: int = 0) -> Line:
    """Classify one physical line. Raises PoSyntaxError for malformed lines."""
    s = raw.strip()
    if not s:
        return Blank(lineno)

    if s.startswith(OBSOLETE_MARKER):
        rest = s[len(OBSOLETE_MARKER):]
        if rest.startswith('|'):
            return PreviousContext(rest[1:].strip(), lineno, obsolete=True)
        line = classify(rest, lineno)
        if isinstance(line, Blank):
            # A bare "#~" carries no content
            return TranslatorComment('', lineno, obsolete=True)
        return replace(line, obsolete=True)

    if s.startswith('#'):
        return _classify_comment(s, lineno)
    if s.startswith('"'):
        return Continuation(unquote(s, lineno), lineno)
    return _classify_keyword(s, lineno)
