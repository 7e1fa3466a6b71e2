import io
import json
import logging
import tempfile
import unittest
from pathlib import Path

from rich.console import Console

from samples import METAMORPHOSED_2008, to_tsv
from srl_extent.cli import main
from srl_extent.config import load_config
from srl_extent.core.exceptions import InvalidHeadError
from srl_extent.pipeline import ExtentPipeline
from srl_extent.reporter import build_table, print_results, write_json

logging.basicConfig(level=logging.INFO)

BAD_HEAD = to_tsv("""
1 Dogs dog NNS NNS Dogs dog NNS 7 SBJ _ A0
2 bark bark VBP VBP bark bark VBP 0 ROOT bark.01 _
""")

DOCUMENT = METAMORPHOSED_2008 + BAD_HEAD

NO_SEPARATORS = METAMORPHOSED_2008 + "garbage\n\n" + METAMORPHOSED_2008


class TestExtentPipeline(unittest.TestCase):
    def setUp(self):
        self.pipeline = ExtentPipeline(load_config(profile=True))

    def test_bad_sentence_is_skipped_not_fatal(self):
        results = self.pipeline.process_file(io.StringIO(DOCUMENT))

        self.assertEqual(len(results), 2)
        self.assertTrue(results[0].ok)
        self.assertFalse(results[1].ok)
        self.assertIn("head 6", results[1].error)
        self.assertEqual(results[1].words, ["Dogs", "bark"])

    def test_extents_and_profile(self):
        result = self.pipeline.process_file(io.StringIO(METAMORPHOSED_2008))[0]

        self.assertEqual(result.predicates[13].roles, {"A1": "the Sixties working-class wonder boy"})
        self.assertEqual(result.profile["tree_depth"], 5)

    def test_summary(self):
        results = self.pipeline.process_file(io.StringIO(DOCUMENT))

        self.assertEqual(ExtentPipeline.summary(results), {
            "sentences": 2,
            "failed": 1,
            "predicates": 3,
            "roles": 3,
        })

    def test_fail_fast(self):
        pipeline = ExtentPipeline(load_config(fail_fast=True))
        with self.assertRaises(InvalidHeadError):
            pipeline.process_file(io.StringIO(DOCUMENT))

    def test_unsplittable_line_is_isolated(self):
        results = self.pipeline.process_file(io.StringIO(NO_SEPARATORS))

        self.assertEqual([r.ok for r in results], [True, False, True])
        self.assertEqual([r.sent_id for r in results], ["1", "2", "3"])
        self.assertIn("Row 1", results[1].error)
        self.assertEqual(results[2].predicates[13].roles, {"A1": "the Sixties working-class wonder boy"})

    def test_to_dict(self):
        result = self.pipeline.process_file(io.StringIO(METAMORPHOSED_2008))[0]
        data = result.to_dict()

        self.assertTrue(data["text"].startswith("With the passing"))
        self.assertEqual(data["extents"]["passing"], {"A1": "of the years"})
        self.assertEqual(data["predicates"][2]["frame"], "metamorphose.01")
        self.assertIsNone(data["error"])


class TestReporter(unittest.TestCase):
    def setUp(self):
        pipeline = ExtentPipeline(load_config(roles=["A0", "A1", "A2"]))
        self.results = pipeline.process_file(io.StringIO(DOCUMENT))
        self.summary = ExtentPipeline.summary(self.results)

    def test_table_rows(self):
        table = build_table(self.results[0])
        # passing A1, wonder A1, metamorphosed A1 + A2
        self.assertEqual(table.row_count, 4)

    def test_print_results(self):
        console = Console(file=io.StringIO(), width=200)
        print_results(self.results, self.summary, console)

        output = console.file.getvalue()
        self.assertIn("into a very cross pensioner", output)
        self.assertIn("1 failed", output)

    def test_write_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = write_json(self.results, self.summary, Path(tmp) / "extents.json")
            payload = json.loads(out.read_text(encoding="utf-8"))

        self.assertEqual(payload["summary"]["sentences"], 2)
        self.assertEqual(
            payload["sentences"][0]["extents"]["metamorphosed"]["A2"],
            "into a very cross pensioner"
        )
        self.assertIsNotNone(payload["sentences"][1]["error"])


class TestCli(unittest.TestCase):
    def test_main_writes_report(self):
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "test.output"
            source.write_text(METAMORPHOSED_2008, encoding="utf-8")
            report = Path(tmp) / "extents.json"

            code = main([str(source), "--quiet", "--roles", "A0", "A1", "A2", "--json", str(report)])
            payload = json.loads(report.read_text(encoding="utf-8"))

        self.assertEqual(code, 0)
        self.assertEqual(payload["sentences"][0]["extents"]["wonder"], {"A1": "Sixties working-class"})

    def test_main_reports_failures(self):
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "test.output"
            source.write_text(DOCUMENT, encoding="utf-8")

            code = main([str(source), "--quiet"])

        self.assertEqual(code, 2)

    def test_unsplittable_line_still_gives_report(self):
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "test.output"
            source.write_text(NO_SEPARATORS, encoding="utf-8")
            report = Path(tmp) / "extents.json"

            code = main([str(source), "--quiet", "--json", str(report)])
            payload = json.loads(report.read_text(encoding="utf-8"))

        self.assertEqual(code, 2)
        self.assertEqual(payload["summary"]["sentences"], 3)
        self.assertEqual(payload["summary"]["failed"], 1)

    def test_missing_input(self):
        self.assertEqual(main(["/nonexistent/test.output", "--quiet"]), 1)


if __name__ == '__main__':
    unittest.main()
