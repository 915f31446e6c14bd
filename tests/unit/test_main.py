"""Tests for the command-line entry point."""
import io
import json
import shutil
import tempfile
from contextlib import redirect_stdout
from pathlib import Path
from unittest import TestCase

from main import load_parameters, main
from tests.fixtures.resume_fixtures import SAMPLE_RESUME_TEXT


class TestMain(TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write(self, name, content):
        path = Path(self.temp_dir) / name
        path.write_text(content, encoding='utf-8')
        return str(path)

    def _run(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(argv)
        return code, json.loads(out.getvalue())

    def test_scores_text_resume(self):
        path = self._write('jane.txt', SAMPLE_RESUME_TEXT)

        code, data = self._run([path, '--type', 'education', '--params', '{"role": "backend"}'])

        self.assertEqual(code, 0)
        self.assertEqual(data['status'], 'completed')
        self.assertEqual(data['analysisType'], 'education')
        self.assertEqual(data['parameters'], {'role': 'backend'})
        self.assertEqual(data['results']['score'], 80)

    def test_failed_analysis_exit_code(self):
        path = self._write('resume.exe', 'MZ')

        code, data = self._run([path])

        self.assertEqual(code, 1)
        self.assertEqual(data['status'], 'failed')
        self.assertIn('Unsupported file format', data['error'])

    def test_format_override(self):
        path = self._write('resume.bin', SAMPLE_RESUME_TEXT)

        code, data = self._run([path, '--format', 'txt', '--type', 'skills'])

        self.assertEqual(code, 0)
        self.assertGreater(data['results']['score'], 0)


class TestLoadParameters(TestCase):

    def test_empty(self):
        self.assertEqual(load_parameters(None), {})
        self.assertEqual(load_parameters(''), {})

    def test_object(self):
        self.assertEqual(load_parameters('{"a": 1}'), {'a': 1})

    def test_invalid(self):
        with self.assertRaises(SystemExit):
            load_parameters('{not json')
        with self.assertRaises(SystemExit):
            load_parameters('[1, 2]')
