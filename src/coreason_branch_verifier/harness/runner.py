from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Sequence

from coreason_branch_verifier.domain.results import CheckResult, RunSummary
from coreason_branch_verifier.events import EventEmitter, EventType, LoguruEmitter, VerificationEvent
from coreason_branch_verifier.exceptions import NetworkError
from coreason_branch_verifier.harness.context import CheckContext
from coreason_branch_verifier.utils.logger import logger

CheckAction = Callable[[CheckContext], Awaitable[None]]


@dataclass(frozen=True)
class Check:
    """One independent, named assertion."""

    name: str
    action: CheckAction


@dataclass(frozen=True)
class Scenario:
    """A named, ordered list of checks against one repository."""

    name: str
    title: str
    owner: str
    repo: str
    checks: List[Check] = field(default_factory=list)


def describe_failure(error: BaseException) -> str:
    message = str(error)
    return message if message else type(error).__name__


class CheckRunner:
    """
    Runs checks strictly in order, isolating each check's failure.
    """

    def __init__(self, event_emitter: Optional[EventEmitter] = None) -> None:
        self.event_emitter = event_emitter or LoguruEmitter()

    async def run_check(self, check: Check, context: CheckContext) -> CheckResult:
        self.event_emitter.emit(
            VerificationEvent(type=EventType.CHECK_RUNNING, message=check.name, payload={"check": check.name})
        )
        try:
            await check.action(context)
        except NetworkError:
            raise
        except Exception as e:
            error_message = describe_failure(e)
            logger.debug(f"Check '{check.name}' failed with {type(e).__name__}")
            self.event_emitter.emit(
                VerificationEvent(
                    type=EventType.CHECK_RESULT,
                    message=check.name,
                    payload={"check": check.name, "status": "fail", "error": error_message},
                )
            )
            return CheckResult(name=check.name, passed=False, error_message=error_message)

        self.event_emitter.emit(
            VerificationEvent(
                type=EventType.CHECK_RESULT,
                message=check.name,
                payload={"check": check.name, "status": "pass"},
            )
        )
        return CheckResult(name=check.name, passed=True)

    async def run(self, checks: Sequence[Check], context: CheckContext, title: str = "") -> RunSummary:
        """
        Executes every check and returns the ordered results.

        Raises:
            NetworkError: If the transport fails; the run cannot continue meaningfully.
        """
        self.event_emitter.emit(
            VerificationEvent(
                type=EventType.RUN_START,
                message=title or f"{context.owner}/{context.repo}",
                payload={"owner": context.owner, "repo": context.repo, "checks": len(checks)},
            )
        )

        results: List[CheckResult] = []
        for check in checks:
            results.append(await self.run_check(check, context))

        summary = RunSummary(results=results)
        self.event_emitter.emit(
            VerificationEvent(
                type=EventType.RUN_SUMMARY,
                message=f"Results: {summary.passed} passed, {summary.failed} failed",
                payload={"passed": summary.passed, "failed": summary.failed, "total": summary.total},
            )
        )
        return summary

    async def run_scenario(self, scenario: Scenario, context: CheckContext) -> RunSummary:
        return await self.run(scenario.checks, context, title=scenario.title)
