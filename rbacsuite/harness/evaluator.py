"""Compares classified outcomes with declared expectations"""

from dataclasses import dataclass
from typing import Optional

from rbacsuite.harness.errors import AmbiguousOutcomeError, AuthorizationOutcomeMismatch, HarnessError
from rbacsuite.harness.model import Principal, Scenario
from rbacsuite.harness.outcome import Decision, Outcome
from rbacsuite.utils import asdict


@dataclass
class Verdict:
    """Pass/fail result of one scenario with enough detail to debug it without rerunning"""

    scenario: Scenario
    outcome: Outcome
    principal: Principal
    passed: bool
    detail: str
    error: Optional[HarnessError] = None

    def assert_passed(self):
        """Fails with the diagnostic detail unless the verdict passed"""
        assert self.passed, self.detail

    def asdict(self):
        """Serializable form of the verdict, error is reduced to its message"""
        return {
            "scenario": asdict(self.scenario),
            "outcome": asdict(self.outcome),
            "principal": asdict(self.principal),
            "passed": self.passed,
            "detail": self.detail,
            "error": str(self.error) if self.error else None,
        }


class ExpectationEvaluator:
    """Produces verdicts, Ambiguous outcome never satisfies any expectation"""

    def evaluate(self, scenario: Scenario, outcome: Outcome, principal: Principal = None) -> Verdict:
        """Returns verdict for outcome of scenario executed as principal"""
        principal = principal or scenario.principal
        passed = outcome.decision == scenario.expected

        error: Optional[HarnessError] = None
        if outcome.decision == Decision.AMBIGUOUS:
            error = AmbiguousOutcomeError(scenario, outcome)
        elif not passed:
            error = AuthorizationOutcomeMismatch(scenario, outcome)

        detail = self.describe(scenario, outcome, principal, passed)
        return Verdict(scenario, outcome, principal, passed, detail, error)

    @staticmethod
    def describe(scenario: Scenario, outcome: Outcome, principal: Principal, passed: bool) -> str:
        """Diagnostic text of a verdict"""
        groups = ", ".join(principal.groups) or "-"
        lines = [
            f"{'PASS' if passed else 'FAIL'}: {scenario.title}",
            f"  principal: {principal} (groups: {groups})",
            f"  operation: {scenario.operation} {scenario.resource}",
            f"  expected: {scenario.expected}, actual: {outcome}",
        ]
        if outcome.detail and not passed:
            lines.append(f"  raw output: {outcome.detail}")
        return "\n".join(lines)
