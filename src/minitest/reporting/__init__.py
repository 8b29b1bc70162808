"""Console and JUnit XML reporting for test runs."""

from minitest.reporting.console import format_problem, format_summary
from minitest.reporting.junit import write_junit

__all__ = ["format_problem", "format_summary", "write_junit"]
