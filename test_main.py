import os
import tempfile
import unittest
from unittest import mock

import matplotlib
matplotlib.use("Agg")

import main
from preferences import PreferenceStore
from projection import ProjectionInput


@mock.patch("main.configure_logging")
class TestMain(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.prefs = os.path.join(self.tmp.name, "prefs.json")
        self.out = os.path.join(self.tmp.name, "charts")

    def tearDown(self):
        self.tmp.cleanup()

    def _run(self, *args):
        argv = ["--preferences", self.prefs, "--output-dir", self.out, *args]
        with mock.patch("builtins.print"):
            return main.main(argv)

    def test_explicit_inputs_are_saved(self, _):
        code = self._run("--age", "59", "--savings", "100", "--rate", "0", "--no-charts")
        self.assertEqual(code, 0)
        self.assertEqual(PreferenceStore(self.prefs).load(), ProjectionInput(59, 100.0, 0.0))

    def test_saved_preferences_are_reused(self, _):
        PreferenceStore(self.prefs).save(ProjectionInput(50, 2000.0, 2.5))
        with mock.patch("main.project", wraps=main.project) as spy:
            code = self._run("--no-charts", "--no-save")
        self.assertEqual(code, 0)
        self.assertEqual(spy.call_args.args, (50, 2000.0, 2.5))

    def test_no_save_leaves_no_file(self, _):
        self._run("--age", "40", "--savings", "100", "--no-charts", "--no-save")
        self.assertFalse(os.path.exists(self.prefs))

    def test_invalid_input_exit_code(self, _):
        self.assertEqual(self._run("--age", "12", "--savings", "100"), 2)
        self.assertEqual(self._run("--age", "30", "--savings", "-5"), 2)
        self.assertFalse(os.path.exists(self.prefs))

    def test_charts_written(self, _):
        code = self._run("--age", "55", "--savings", "300")
        self.assertEqual(code, 0)
        self.assertEqual(len(os.listdir(self.out)), 4)

    def test_reset_forgets_preferences(self, _):
        PreferenceStore(self.prefs).save(ProjectionInput(50, 2000.0, 2.5))
        self._run("--reset", "--no-charts", "--no-save")
        self.assertFalse(os.path.exists(self.prefs))

    def test_projection_failure_exit_code(self, _):
        with mock.patch("main.project", side_effect=RuntimeError("boom")):
            self.assertEqual(self._run("--age", "30", "--savings", "100", "--no-charts"), 1)


class TestProjectionAnalyzer(unittest.TestCase):
    def test_analyzer_stages(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = PreferenceStore(os.path.join(tmp, "p.json"))
            analyzer = main.ProjectionAnalyzer(store)
            with mock.patch("builtins.print"):
                self.assertTrue(analyzer.load_parameters(59, 100, 0))
                self.assertTrue(analyzer.run_projection())
                analyzer.display_analysis()
            self.assertEqual(analyzer.result.monthly_pension, 10)

    def test_empty_ledger_skips_charts(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = PreferenceStore(os.path.join(tmp, "p.json"))
            analyzer = main.ProjectionAnalyzer(store)
            analyzer.inputs = ProjectionInput(60, 100.0, 2.5)
            with mock.patch("builtins.print"):
                self.assertTrue(analyzer.run_projection())
                self.assertTrue(analyzer.generate_visualizations(tmp))
                analyzer.display_analysis()
            self.assertEqual(analyzer.chart_files, [])


if __name__ == '__main__':
    unittest.main()
