"""Run counters and the end-of-run summary"""

import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, TextIO


@dataclass
class SyncStats:
    """Counters for one sync run.

    `processed_issues` counts distinct issue numbers, so an issue seen in a
    page and then reconciled in the same run is counted once.
    """

    new_issues: int = 0
    new_comments: int = 0
    updated_comments: int = 0
    touched: Set[int] = field(default_factory=set, repr=False)

    @property
    def processed_issues(self) -> int:
        return len(self.touched)

    def mark_processed(self, issue_number: int):
        self.touched.add(issue_number)

    def as_dict(self) -> Dict[str, int]:
        return {
            "processed_issues": self.processed_issues,
            "new_issues": self.new_issues,
            "new_comments": self.new_comments,
            "updated_comments": self.updated_comments,
        }

    def summary_lines(self) -> List[str]:
        return [
            f"Done! Processed {self.processed_issues} issues.",
            f"Added {self.new_issues} new issues.",
            f"Added {self.new_comments} new comments.",
            f"Updated {self.updated_comments} existing comments.",
        ]

    def report(self, out: Optional[TextIO] = None):
        """Print the summary; called once per run whether or not it succeeded.

        Always written to stdout, whatever the logging level.
        """
        out = out or sys.stdout
        for line in self.summary_lines():
            out.write(line + "\n")
        out.flush()
