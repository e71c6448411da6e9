# webunit/core/runner/__init__.py
from .discovery import SuiteLocator
from .service import TestRunnerService, parse_junit_xml, summarize

__all__ = [
    "SuiteLocator",
    "TestRunnerService",
    "parse_junit_xml",
    "summarize",
]
