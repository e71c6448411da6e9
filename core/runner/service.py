# webunit/core/runner/service.py
import asyncio
import logging
import os
import shutil
import sys
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Union

from schemas.runner import (
    CaseOutcome,
    RunStatus,
    RunTotals,
    SuiteName,
    TestCaseResult,
    TestRunResult,
    TestSuiteInfo,
)
from schemas.settings import WebunitSettings
from utils.errors import ErrorCode
from utils.exceptions import APIError
from .discovery import SuiteLocator

logger = logging.getLogger(f"webunit.{__name__}")

# pytest exit codes that still mean "the run itself worked"
_EXIT_STATUS = {
    0: RunStatus.PASSED,
    1: RunStatus.FAILED,
    5: RunStatus.NO_TESTS,
}

MAX_OUTPUT_CHARS = 200_000


def parse_junit_xml(xml_text: str) -> List[TestCaseResult]:
    """Reads the per-test outcomes from a pytest --junitxml report."""
    root = ET.fromstring(xml_text)
    cases: List[TestCaseResult] = []
    for node in root.iter("testcase"):
        outcome = CaseOutcome.PASSED
        problem = None
        for tag, tag_outcome in (("failure", CaseOutcome.FAILED),
                                 ("error", CaseOutcome.ERROR),
                                 ("skipped", CaseOutcome.SKIPPED)):
            problem = node.find(tag)
            if problem is not None:
                outcome = tag_outcome
                break

        cases.append(TestCaseResult(
            classname=node.get("classname", ""),
            name=node.get("name", ""),
            outcome=outcome,
            time=float(node.get("time") or 0.0),
            message=problem.get("message") if problem is not None else None,
            details=(problem.text or None) if problem is not None else None,
        ))
    return cases


def summarize(cases: List[TestCaseResult]) -> RunTotals:
    totals = RunTotals(tests=len(cases))
    for case in cases:
        totals.time += case.time
        if case.outcome is CaseOutcome.PASSED:
            totals.passed += 1
        elif case.outcome is CaseOutcome.FAILED:
            totals.failures += 1
        elif case.outcome is CaseOutcome.ERROR:
            totals.errors += 1
        else:
            totals.skipped += 1
    totals.time = round(totals.time, 3)
    return totals


class TestRunnerService:
    """
    Runs the configured suites with pytest in a subprocess and collects the
    results from its JUnit XML report.
    """
    __test__ = False

    def __init__(self, settings: WebunitSettings, locator: Optional[SuiteLocator] = None):
        self.settings = settings
        self.locator = locator or SuiteLocator(settings)

    def list_suites(self) -> List[TestSuiteInfo]:
        return self.locator.list_suites()

    def _pytest_command(self) -> List[str]:
        if self.settings.runner.use_built_in_runner:
            return [sys.executable, "-m", "pytest"]
        executable = shutil.which("pytest")
        if executable is None:
            raise APIError(error=ErrorCode.RUNNER_LAUNCH_FAILED, override_message="No 'pytest' executable found on PATH.")
        return [executable]

    def _environment(self) -> Dict[str, str]:
        env = dict(os.environ)
        env.update(self.settings.runner.environment)
        return env

    @staticmethod
    def _suite_name(suite: Union[SuiteName, str]) -> SuiteName:
        try:
            return SuiteName(suite)
        except ValueError:
            raise APIError(error=ErrorCode.RUNNER_SUITE_NOT_FOUND, details={"suite": str(suite)})

    async def run(self, suite: Union[SuiteName, str], target: Optional[str] = None) -> TestRunResult:
        suite = self._suite_name(suite)
        pytest_target = self.locator.resolve_target(suite, target)
        if pytest_target is None:
            raise APIError(error=ErrorCode.RUNNER_INVALID_TARGET, details={"target": target})

        timeout = self.settings.runner.timeout_seconds
        with tempfile.TemporaryDirectory(prefix="webunit-") as tmp_dir:
            report_path = Path(tmp_dir) / "report.xml"
            cmd = self._pytest_command() + [
                pytest_target,
                "-q",
                "--junitxml", str(report_path),
                "-p", "no:cacheprovider",
            ]
            logger.info(f"Running suite '{suite.value}' target={target or '<all>'}")
            logger.debug(f"Runner command: {cmd}")

            try:
                proc = await asyncio.create_subprocess_exec(
                    *cmd,
                    cwd=str(self.locator.base_path),
                    env=self._environment(),
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.STDOUT,
                )
            except OSError as e:
                logger.error(f"Could not start test runner: {e}")
                raise APIError(error=ErrorCode.RUNNER_LAUNCH_FAILED, details={"reason": str(e)}) from e

            try:
                stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
            except asyncio.TimeoutError:
                proc.kill()
                await proc.wait()
                logger.warning(f"Suite '{suite.value}' timed out after {timeout}s, runner killed.")
                raise APIError(error=ErrorCode.RUNNER_TIMEOUT, details={"timeout_seconds": timeout})

            exit_code = proc.returncode if proc.returncode is not None else -1
            output = stdout.decode("utf-8", errors="replace")[-MAX_OUTPUT_CHARS:]

            cases: List[TestCaseResult] = []
            if report_path.exists():
                try:
                    cases = parse_junit_xml(report_path.read_text(encoding="utf-8"))
                except ET.ParseError as e:
                    logger.error(f"Unreadable JUnit report for suite '{suite.value}': {e}")

        status = _EXIT_STATUS.get(exit_code, RunStatus.ERROR)
        totals = summarize(cases)
        logger.info(
            f"Suite '{suite.value}' finished: status={status.value} exit={exit_code} "
            f"tests={totals.tests} failures={totals.failures} errors={totals.errors}"
        )
        return TestRunResult(
            suite=suite,
            target=target,
            status=status,
            exit_code=exit_code,
            totals=totals,
            cases=cases,
            output=output,
        )
