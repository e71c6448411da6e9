# webunit/core/runner/discovery.py
import logging
from pathlib import Path
from typing import Dict, List, Optional

from schemas.runner import SuiteName, TestSuiteInfo
from schemas.settings import WebunitSettings

logger = logging.getLogger(f"webunit.{__name__}")

TEST_FILE_PATTERNS = ("test_*.py", "*_test.py")


class SuiteLocator:
    """
    Maps suite names to directories and lists the test files inside them.
    """
    def __init__(self, settings: WebunitSettings):
        self.base_path = Path(settings.runner.base_path).resolve()
        self._suite_paths: Dict[SuiteName, str] = {
            SuiteName.UNIT: settings.path_unit_tests,
            SuiteName.FUNCTIONAL: settings.path_web_tests,
        }

    def suite_dir(self, suite: SuiteName) -> Path:
        return (self.base_path / self._suite_paths[suite]).resolve()

    def list_files(self, suite: SuiteName) -> List[str]:
        root = self.suite_dir(suite)
        if not root.is_dir():
            logger.debug(f"Suite '{suite.value}' directory does not exist: {root}")
            return []
        found = set()
        for pattern in TEST_FILE_PATTERNS:
            for path in root.rglob(pattern):
                if path.is_file():
                    found.add(path.relative_to(root).as_posix())
        return sorted(found)

    def describe(self, suite: SuiteName) -> TestSuiteInfo:
        root = self.suite_dir(suite)
        return TestSuiteInfo(
            name=suite,
            path=self._suite_paths[suite],
            exists=root.is_dir(),
            files=self.list_files(suite),
        )

    def list_suites(self) -> List[TestSuiteInfo]:
        return [self.describe(suite) for suite in SuiteName]

    def resolve_target(self, suite: SuiteName, target: Optional[str]) -> Optional[str]:
        """
        Turns a suite-relative file or node id into an absolute pytest argument.
        Returns None when the target would leave the suite directory.
        """
        root = self.suite_dir(suite)
        if not target:
            return str(root)

        file_part, sep, node_part = target.partition("::")
        candidate = (root / file_part).resolve()
        if candidate != root and root not in candidate.parents:
            return None
        return f"{candidate}{sep}{node_part}"
