#!/usr/bin/env python3
"""Inspect and check PO translation catalogs.

Usage:
  pocatalog check
  pocatalog check --locales es --mode strict
  pocatalog check --mode parity --reference-locale de --exclude-locales en
  pocatalog empty translations/es/LC_MESSAGES/messages.po --output empty.txt
  pocatalog compare translations/de/LC_MESSAGES/messages.po translations/es/LC_MESSAGES/messages.po
  pocatalog show translations/fr/LC_MESSAGES/messages.po

Settings default from POCATALOG_* environment variables (or a .env file).

Exit codes:
  0 = OK
  1 = Missing translations found
  2 = A catalog could not be read or parsed
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import argparse
import logging
import sys

from po_config import Settings, load_settings
from po_errors import PoError
from po_models import Catalog, Entry
from po_parser import load


logger = logging.getLogger('pocatalog')

REPORT_LIMIT = 200

LOG_LEVELS = ['CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG']


@dataclass
class Missing:
    locale: str
    entry: Entry

    @property
    def label(self) -> str:
        if self.entry.msgctxt is not None:
            return f'{self.entry.msgctxt} | {self.entry.msgid}'
        return self.entry.msgid


def _safe_print(line: str, stream=None) -> None:
    """Print without crashing on Windows code pages."""
    stream = stream or sys.stdout
    try:
        print(line, file=stream)
    except UnicodeEncodeError:
        stream.buffer.write((line + "\n").encode('utf-8', errors='replace'))


def _write_report(path: Path, missing: list[Missing]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open('w', encoding='utf-8', newline='\n') as f:
        f.write(f"Missing translations: {len(missing)}\n")
        for m in missing:
            f.write(f"[{m.locale}] {m.label}\n")


def active_entries(catalog: Catalog) -> list[Entry]:
    return [e for e in catalog.items if not e.obsolete]


def is_missing(entry: Entry, fuzzy_as_missing: bool = False) -> bool:
    if fuzzy_as_missing and entry.fuzzy:
        return True
    return not entry.is_translated()


def find_locales(settings: Settings, locales: list[str] | None) -> list[str]:
    if locales:
        return locales
    return sorted(p.name for p in settings.translations_dir.iterdir() if p.is_dir())


def check_strict(settings: Settings, locales: list[str], exclude: set[str], fuzzy_as_missing: bool) -> list[Missing]:
    missing: list[Missing] = []
    for locale in locales:
        if locale in exclude:
            continue
        po_path = settings.catalog_path(locale)
        if not po_path.exists():
            logger.info('No catalog for %s at %s', locale, po_path)
            continue
        catalog = load(po_path, encoding=settings.encoding)
        for entry in active_entries(catalog):
            if is_missing(entry, fuzzy_as_missing):
                missing.append(Missing(locale=locale, entry=entry))
    return missing


def check_parity(settings: Settings, locales: list[str], exclude: set[str], fuzzy_as_missing: bool) -> list[Missing]:
    ref_locale = settings.reference_locale
    ref_path = settings.catalog_path(ref_locale)
    if not ref_path.exists():
        raise FileNotFoundError(f"Reference locale catalog not found: {ref_path}")

    ref_catalog = load(ref_path, encoding=settings.encoding)
    ref_required = [e for e in active_entries(ref_catalog) if e.is_translated()]

    missing: list[Missing] = []
    for locale in locales:
        if locale == ref_locale or locale in exclude:
            continue
        po_path = settings.catalog_path(locale)
        if not po_path.exists():
            logger.info('No catalog for %s at %s', locale, po_path)
            continue
        entries = {e.key: e for e in active_entries(load(po_path, encoding=settings.encoding))}
        for ref_entry in ref_required:
            entry = entries.get(ref_entry.key)
            if entry is None or is_missing(entry, fuzzy_as_missing):
                missing.append(Missing(locale=locale, entry=ref_entry))
    return missing


def cmd_check(args, settings: Settings) -> int:
    if args.translations_dir:
        settings = replace(settings, translations_dir=Path(args.translations_dir))
    if args.reference_locale:
        settings = replace(settings, reference_locale=args.reference_locale)

    if not settings.translations_dir.exists():
        _safe_print(f"Translations directory not found: {settings.translations_dir}", sys.stderr)
        return 2

    locales = find_locales(settings, args.locales)
    exclude = set(args.exclude_locales if args.exclude_locales is not None else settings.exclude_locales)

    if args.mode == 'strict':
        missing = check_strict(settings, locales, exclude, args.fuzzy_as_missing)
    else:
        missing = check_parity(settings, locales, exclude, args.fuzzy_as_missing)

    if missing:
        if args.output:
            _write_report(Path(args.output), missing)
        _safe_print(f"Missing translations: {len(missing)}")
        for m in missing[:REPORT_LIMIT]:
            _safe_print(f"[{m.locale}] {m.label}")
        if len(missing) > REPORT_LIMIT:
            _safe_print(f"... and {len(missing) - REPORT_LIMIT} more")
        return 1

    _safe_print("OK: no missing translations")
    return 0


def cmd_empty(args, settings: Settings) -> int:
    catalog = load(args.path, encoding=settings.encoding)
    entries = active_entries(catalog)
    empty = [e for e in entries if not e.is_translated()]

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open('w', encoding='utf-8', newline='\n') as f:
            f.write(f'total entries: {len(entries)}\n')
            f.write(f'empty msgstr: {len(empty)}\n')
            f.write('---\n')
            for e in empty:
                ref = e.references[0] if e.references else ''
                f.write(f'{ref}\n')
                f.write(f'{e.msgid}\n')
                f.write('---\n')
        return 0

    _safe_print(f'total entries: {len(entries)}')
    _safe_print(f'empty msgstr: {len(empty)}')
    return 0


def cmd_compare(args, settings: Settings) -> int:
    ref = load(args.reference, encoding=settings.encoding)
    other = load(args.other, encoding=settings.encoding)

    ref_filled = {e.key for e in active_entries(ref) if e.is_translated()}
    other_filled = {e.key for e in active_entries(other) if e.is_translated()}
    missing = sorted(ref_filled - other_filled, key=lambda k: (k[0] or '', k[1]))

    _safe_print(f'{args.reference} entries: {len(active_entries(ref))}')
    _safe_print(f'{args.other} entries: {len(active_entries(other))}')
    _safe_print(f'{args.reference} filled: {len(ref_filled)}')
    _safe_print(f'{args.other} filled: {len(other_filled)}')
    _safe_print(f'missing in {args.other}: {len(missing)}')

    for msgctxt, msgid in missing[:REPORT_LIMIT]:
        _safe_print(f'{msgctxt} | {msgid}' if msgctxt is not None else msgid)
    return 0


def cmd_show(args, settings: Settings) -> int:
    catalog = load(args.path, encoding=settings.encoding)

    for key, value in catalog.headers.items():
        _safe_print(f'{key}: {value}')
    if catalog.headers:
        _safe_print('---')

    items = catalog.items
    obsolete = [e for e in items if e.obsolete]
    active = active_entries(catalog)
    translated = [e for e in active if e.is_translated() and not e.fuzzy]
    fuzzy = [e for e in active if e.fuzzy]
    _safe_print(f'total: {len(items)}')
    _safe_print(f'translated: {len(translated)}')
    _safe_print(f'fuzzy: {len(fuzzy)}')
    _safe_print(f'untranslated: {len(active) - len(translated) - len(fuzzy)}')
    _safe_print(f'obsolete: {len(obsolete)}')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='pocatalog', description='Inspect and check PO translation catalogs.')
    parser.add_argument(
        '--log-level', type=str.upper, choices=LOG_LEVELS, default=None,
        help='Logging level (default: POCATALOG_LOG_LEVEL or WARNING)')
    parser.add_argument('--env-file', default=None, help='Read settings from this .env file')
    sub = parser.add_subparsers(dest='command', required=True)

    check = sub.add_parser('check', help='Report missing translations across locales')
    check.add_argument('--translations-dir', default=None)
    check.add_argument('--locales', nargs='*', default=None)
    check.add_argument('--exclude-locales', nargs='*', default=None)
    check.add_argument('--mode', choices=['strict', 'parity'], default='strict')
    check.add_argument('--reference-locale', default=None)
    check.add_argument('--fuzzy-as-missing', action='store_true', help='Count fuzzy entries as missing')
    check.add_argument('--output', default=None, help='Write report to a UTF-8 file')
    check.set_defaults(func=cmd_check)

    empty = sub.add_parser('empty', help='List untranslated entries of one catalog')
    empty.add_argument('path')
    empty.add_argument('--output', default=None, help='Write the list to a UTF-8 file')
    empty.set_defaults(func=cmd_empty)

    compare = sub.add_parser('compare', help='Entries translated in REFERENCE but not in OTHER')
    compare.add_argument('reference')
    compare.add_argument('other')
    compare.set_defaults(func=cmd_compare)

    show = sub.add_parser('show', help='Print headers and entry counts')
    show.add_argument('path')
    show.set_defaults(func=cmd_show)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.env_file)
    level = args.log_level or settings.log_level
    if level not in LOG_LEVELS:
        _safe_print(f"Invalid log level {level!r}; expected one of {', '.join(LOG_LEVELS)}", sys.stderr)
        return 2
    logging.basicConfig(
        level=level,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        return args.func(args, settings)
    except (PoError, OSError) as e:
        logger.debug('Command %s failed', args.command, exc_info=True)
        _safe_print(f"Error: {e}", sys.stderr)
        return 2


if __name__ == '__main__':
    raise SystemExit(main())
