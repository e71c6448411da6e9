# webunit/schemas/runner.py
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional


class SuiteName(str, Enum):
    UNIT = "unit"
    FUNCTIONAL = "functional"


class CaseOutcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"


class RunStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    NO_TESTS = "no_tests"
    ERROR = "error"


class TestSuiteInfo(BaseModel):
    __test__ = False  # keep pytest from collecting this model

    name: SuiteName
    path: str = Field(..., description="Suite directory as configured.")
    exists: bool = Field(..., description="False when the directory is missing.")
    files: List[str] = Field(default_factory=list, description="Test files relative to the suite directory.")


class RunRequest(BaseModel):
    suite: str = Field(SuiteName.UNIT.value, description="Suite name, `unit` or `functional`.")
    target: Optional[str] = Field(None, description="File or pytest node id inside the suite. Runs the whole suite when omitted.")


class TestCaseResult(BaseModel):
    __test__ = False

    classname: str
    name: str
    outcome: CaseOutcome
    time: float = 0.0
    message: Optional[str] = None
    details: Optional[str] = None


class RunTotals(BaseModel):
    tests: int = 0
    passed: int = 0
    failures: int = 0
    errors: int = 0
    skipped: int = 0
    time: float = 0.0


class TestRunResult(BaseModel):
    __test__ = False

    suite: SuiteName
    target: Optional[str] = None
    status: RunStatus
    exit_code: int
    totals: RunTotals = Field(default_factory=RunTotals)
    cases: List[TestCaseResult] = Field(default_factory=list)
    output: str = Field("", description="Combined stdout/stderr of the pytest process.")
