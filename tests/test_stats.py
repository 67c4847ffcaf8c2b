import io
import unittest
from contextlib import redirect_stdout


class SyncStatsTests(unittest.TestCase):
    def test_processed_issues_counts_distinct_numbers(self):
        from ghmirror.services.stats import SyncStats

        stats = SyncStats()
        for number in (1, 2, 2, 1, 3):
            stats.mark_processed(number)

        self.assertEqual(stats.processed_issues, 3)

    def test_summary_lines(self):
        from ghmirror.services.stats import SyncStats

        stats = SyncStats(new_issues=2, new_comments=5, updated_comments=1)
        stats.mark_processed(1)
        stats.mark_processed(2)

        self.assertEqual(
            stats.summary_lines(),
            [
                "Done! Processed 2 issues.",
                "Added 2 new issues.",
                "Added 5 new comments.",
                "Updated 1 existing comments.",
            ],
        )

    def test_report_writes_each_summary_line(self):
        from ghmirror.services.stats import SyncStats

        stats = SyncStats(new_issues=1)
        out = io.StringIO()
        stats.report(out)

        self.assertEqual(out.getvalue().splitlines(), stats.summary_lines())

    def test_report_defaults_to_stdout(self):
        from ghmirror.services.stats import SyncStats

        with redirect_stdout(io.StringIO()) as out:
            SyncStats().report()

        self.assertIn("Done! Processed 0 issues.", out.getvalue())


if __name__ == "__main__":
    unittest.main()
