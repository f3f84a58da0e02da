from typing import List, Optional

from pydantic import BaseModel, Field


class CheckResult(BaseModel):
    """Outcome of a single named check."""

    name: str = Field(..., description="Name of the check")
    passed: bool = Field(..., description="Whether the check passed")
    error_message: Optional[str] = Field(default=None, description="Diagnostic message when the check failed")


class RunSummary(BaseModel):
    """
    Ordered outcomes of one harness run.
    """

    results: List[CheckResult] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def extend(self, other: "RunSummary") -> "RunSummary":
        return RunSummary(results=self.results + other.results)
