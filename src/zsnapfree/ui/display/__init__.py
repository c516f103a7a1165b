"""Rich presentation shared by the summary report and the interactive view."""

from zsnapfree.ui.display.formatting import format_bytes
from zsnapfree.ui.display.report import ReportDisplay
from zsnapfree.ui.display.table import build_snapshot_table, reclaim_headline, table_title

__all__ = [
    "ReportDisplay",
    "build_snapshot_table",
    "format_bytes",
    "reclaim_headline",
    "table_title",
]
