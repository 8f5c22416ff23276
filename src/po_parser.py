"""
Parsing of whole PO catalogs.

Usage:
    from po_parser import parse, load

    catalog = parse(text)
    catalog = load('translations/de/LC_MESSAGES/messages.po')
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

from po_builder import BuilderState, finish, step
from po_errors import PoError, PoInputError
from po_lines import classify
from po_models import Catalog, Entry


logger = logging.getLogger(__name__)

_NEWLINE_RE = re.compile(r'\r\n|\r|\n')


def _to_text(data: str | bytes) -> str:
    if isinstance(data, bytes):
        try:
            data = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise PoInputError(f'input is not valid UTF-8 ({e.reason} at byte {e.start})') from e
    return data.lstrip('\ufeff')


def parse_headers(msgstr: str) -> dict[str, str]:
    """Split a header msgstr into ``Key: Value`` pairs."""
    headers: dict[str, str] = {}
    for line in msgstr.split('\n'):
        if ':' not in line:
            continue
        key, value = line.split(':', 1)
        key = key.strip()
        if key:
            headers[key] = value.strip()
    return headers


def _is_header(entry: Entry) -> bool:
    return entry.msgid == '' and entry.msgctxt is None


def iter_entries(text: str):
    """Yield sealed entries in source order, header entry included."""
    state = BuilderState()
    for lineno, raw in enumerate(_NEWLINE_RE.split(text), start=1):
        state, sealed = step(state, classify(raw, lineno))
        if sealed is not None:
            yield sealed
    last = finish(state)
    if last is not None:
        yield last


def parse(text: str | bytes) -> Catalog:
    """Parse PO text into a Catalog.

    Raises a PoError subclass on malformed input; nothing is returned in that
    case.
    """
    text = _to_text(text)

    catalog = Catalog()
    header: Entry | None = None
    for entry in iter_entries(text):
        if header is None and _is_header(entry):
            header = entry
            continue
        catalog.items.append(entry)

    if header is not None:
        catalog.headers = parse_headers(header.msgstr)
        catalog.extracted_comments = list(header.extracted_comments)
        catalog.comments = list(header.comments)
    return catalog


def load(path: str | Path, encoding: str = 'utf-8') -> Catalog:
    """Read a PO file and parse it.

    OSError from reading propagates. Undecodable files raise PoInputError;
    parse errors are re-raised with the file name set.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise PoInputError(f'cannot decode as {encoding}: {e.reason}', filename=str(path)) from e

    try:
        catalog = parse(text)
    except PoError as e:
        e.filename = str(path)
        raise
    logger.debug('Parsed %s: %d entries, %d headers', path, len(catalog.items), len(catalog.headers))
    return catalog
