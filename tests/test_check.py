"""Tests for the pocatalog command line tool."""

from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock
import io
import os
import tempfile
import unittest

import po_check


DE_PO = r'''msgid ""
msgstr ""
"Language: de\n"
"Plural-Forms: nplurals=2; plural=(n != 1);\n"

msgid "Save"
msgstr "Speichern"

msgctxt "verb"
msgid "Delete"
msgstr "Löschen"

msgid "Search"
msgstr ""

msgid "%d file"
msgid_plural "%d files"
msgstr[0] "%d Datei"
msgstr[1] "%d Dateien"

#~ msgid "Rename"
#~ msgstr "Umbenennen"
'''

ES_PO = r'''msgid ""
msgstr ""
"Language: es\n"

#, fuzzy
msgid "Save"
msgstr "Guardar"

msgctxt "verb"
msgid "Delete"
msgstr ""

msgid "Search"
msgstr ""

msgid "%d file"
msgid_plural "%d files"
msgstr[0] "%d archivo"
msgstr[1] ""
'''


class CommandTestCase(unittest.TestCase):

    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)
        self.translations = self.root / 'translations'
        self.write_catalog('de', DE_PO)
        self.write_catalog('es', ES_PO)

        patcher = mock.patch.dict(os.environ, {'POCATALOG_TRANSLATIONS_DIR': str(self.translations)}, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)

    def write_catalog(self, locale, text):
        path = self.translations / locale / 'LC_MESSAGES' / 'messages.po'
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
        return path

    def run_main(self, *args):
        out, err = io.StringIO(), io.StringIO()
        argv = ['--env-file', str(self.root / 'missing.env'), *args]
        with redirect_stdout(out), redirect_stderr(err):
            code = po_check.main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_check_strict_single_locale(self):
        code, out, _ = self.run_main('check', '--locales', 'es')
        self.assertEqual(code, 1)
        self.assertIn('Missing translations: 3', out)
        self.assertIn('[es] verb | Delete', out)
        self.assertIn('[es] Search', out)
        self.assertIn('[es] %d file', out)
        self.assertNotIn('Save', out)

    def test_check_strict_all_locales(self):
        code, out, _ = self.run_main('check')
        self.assertEqual(code, 1)
        self.assertIn('Missing translations: 4', out)
        self.assertIn('[de] Search', out)
        self.assertNotIn('Rename', out)

    def test_check_parity(self):
        code, out, _ = self.run_main('check', '--mode', 'parity', '--reference-locale', 'de')
        self.assertEqual(code, 1)
        self.assertIn('Missing translations: 2', out)
        self.assertNotIn('[es] Search', out)

    def test_check_parity_fuzzy_as_missing(self):
        code, out, _ = self.run_main(
            'check', '--mode', 'parity', '--reference-locale', 'de', '--fuzzy-as-missing')
        self.assertEqual(code, 1)
        self.assertIn('Missing translations: 3', out)
        self.assertIn('[es] Save', out)

    def test_check_excluded_locales(self):
        code, out, _ = self.run_main('check', '--exclude-locales', 'es')
        self.assertEqual(code, 1)
        self.assertIn('Missing translations: 1', out)

    def test_check_ok(self):
        self.write_catalog('fr', 'msgid "Save"\nmsgstr "Enregistrer"\n')
        code, out, _ = self.run_main('check', '--locales', 'fr')
        self.assertEqual(code, 0)
        self.assertIn('OK: no missing translations', out)

    def test_check_report_file(self):
        report = self.root / 'reports' / 'missing.txt'
        self.run_main('check', '--locales', 'es', '--output', str(report))
        lines = report.read_text(encoding='utf-8').splitlines()
        self.assertEqual(lines[0], 'Missing translations: 3')
        self.assertEqual(len(lines), 4)

    def test_check_missing_reference(self):
        code, _, err = self.run_main('check', '--mode', 'parity', '--reference-locale', 'it')
        self.assertEqual(code, 2)
        self.assertIn('Reference locale catalog not found', err)

    def test_check_missing_directory(self):
        code, _, err = self.run_main('check', '--translations-dir', str(self.root / 'nowhere'))
        self.assertEqual(code, 2)
        self.assertIn('Translations directory not found', err)

    def test_parse_error(self):
        path = self.write_catalog('it', 'msgid "a"\nmsgstr "b"\n\noops\n')
        code, _, err = self.run_main('show', str(path))
        self.assertEqual(code, 2)
        self.assertIn('line 4', err)

    def test_empty(self):
        code, out, _ = self.run_main('empty', str(self.translations / 'es' / 'LC_MESSAGES' / 'messages.po'))
        self.assertEqual(code, 0)
        self.assertIn('total entries: 4', out)
        self.assertIn('empty msgstr: 3', out)

    def test_empty_output_file(self):
        self.write_catalog('pt', '#: app.py:3\nmsgid "Search"\nmsgstr ""\n')
        report = self.root / 'empty.txt'
        self.run_main('empty', str(self.translations / 'pt' / 'LC_MESSAGES' / 'messages.po'), '--output', str(report))
        self.assertEqual(
            report.read_text(encoding='utf-8'),
            'total entries: 1\nempty msgstr: 1\n---\napp.py:3\nSearch\n---\n')

    def test_compare(self):
        de = self.translations / 'de' / 'LC_MESSAGES' / 'messages.po'
        es = self.translations / 'es' / 'LC_MESSAGES' / 'messages.po'
        code, out, _ = self.run_main('compare', str(de), str(es))
        self.assertEqual(code, 0)
        self.assertIn(f'missing in {es}: 2', out)
        self.assertIn('verb | Delete', out)

    def test_show(self):
        code, out, _ = self.run_main('show', str(self.translations / 'de' / 'LC_MESSAGES' / 'messages.po'))
        self.assertEqual(code, 0)
        self.assertIn('Language: de', out)
        self.assertIn('total: 5', out)
        self.assertIn('translated: 3', out)
        self.assertIn('untranslated: 1', out)
        self.assertIn('obsolete: 1', out)

    def test_log_level_is_case_insensitive(self):
        de = self.translations / 'de' / 'LC_MESSAGES' / 'messages.po'
        code, _, _ = self.run_main('--log-level', 'debug', 'show', str(de))
        self.assertEqual(code, 0)

    def test_unknown_log_level_option(self):
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            po_check.main(['--log-level', 'loud', 'check'])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn('invalid choice', err.getvalue())

    def test_unknown_log_level_setting(self):
        with mock.patch.dict(os.environ, {'POCATALOG_LOG_LEVEL': 'loud'}):
            code, _, err = self.run_main('check')
        self.assertEqual(code, 2)
        self.assertIn("Invalid log level 'LOUD'", err)
