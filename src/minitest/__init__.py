"""A minimal unit-testing framework: assertions plus a small test-case runner."""

from minitest.assertions import AssertionContext, AssertionFailure, FailureKind, install
from minitest.output import BufferedSink, OutputSink, StreamSink, default_sink
from minitest.results import Failure, RunReport, Status, TestResult
from minitest.runner import Runner, RunState

__all__ = [
    "AssertionContext",
    "AssertionFailure",
    "BufferedSink",
    "Failure",
    "FailureKind",
    "OutputSink",
    "RunReport",
    "RunState",
    "Runner",
    "Status",
    "StreamSink",
    "TestResult",
    "default_sink",
    "install",
]
