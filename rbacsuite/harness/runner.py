"""Runs scenarios end to end with guaranteed de-impersonation and cleanup"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterable

from rbacsuite.harness.errors import EnvironmentPreconditionError, ProvisioningError
from rbacsuite.harness.evaluator import ExpectationEvaluator, Verdict
from rbacsuite.harness.executor import ResourceOperationExecutor
from rbacsuite.harness.impersonation import ImpersonationContext
from rbacsuite.harness.model import Scenario
from rbacsuite.harness.provisioner import IdentityProvisioner
from rbacsuite.utils import asdict

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Aggregated result of a run, consumed by reporting"""

    verdicts: list[Verdict] = field(default_factory=list)
    skipped: list[tuple[Scenario, ProvisioningError]] = field(default_factory=list)

    @property
    def failures(self) -> list[Verdict]:
        """Verdicts which did not pass"""
        return [verdict for verdict in self.verdicts if not verdict.passed]

    @property
    def passed(self) -> bool:
        """True only if every scenario was executed and passed"""
        return not self.failures and not self.skipped

    def summary(self) -> str:
        """Human readable report of the run"""
        lines = [
            f"{len(self.verdicts) - len(self.failures)} passed, {len(self.failures)} failed, "
            f"{len(self.skipped)} skipped"
        ]
        lines.extend(verdict.detail for verdict in self.failures)
        lines.extend(f"SKIP: {scenario.title}\n  {error}" for scenario, error in self.skipped)
        return "\n".join(lines)

    def asdict(self):
        """Serializable form of the run for reporting"""
        return {
            "passed": self.passed,
            "verdicts": [asdict(verdict) for verdict in self.verdicts],
            "skipped": [{"scenario": asdict(scenario), "error": str(error)} for scenario, error in self.skipped],
        }


class ScenarioRunner:
    """
    Orchestrates scenarios sequentially: provision -> impersonate -> execute -> evaluate -> clear -> cleanup.
    One runner owns one ImpersonationContext, scenarios of one runner must never run concurrently.
    """

    def __init__(
        self,
        cluster,
        provisioner: IdentityProvisioner,
        executor: ResourceOperationExecutor,
        context: ImpersonationContext = None,
        evaluator: ExpectationEvaluator = None,
    ):
        self.cluster = cluster
        self.provisioner = provisioner
        self.executor = executor
        self.context = context or ImpersonationContext()
        self.evaluator = evaluator or ExpectationEvaluator()

    def ensure_environment(self):
        """Fails the whole run if the administrative client is not usable"""
        if not self.cluster.connected:
            raise EnvironmentPreconditionError("Administrative client is not logged in or its namespace is missing")

    @contextmanager
    def _acting_principal(self, scenario: Scenario):
        """Yields principal of the scenario, provisions a fresh identity for ephemeral ones"""
        principal = scenario.principal
        if not principal.ephemeral:
            yield principal
            return
        with self.provisioner.provision(principal.username, principal.groups) as identity:
            yield identity.as_principal()

    def run_one(self, scenario: Scenario) -> Verdict:
        """Runs single scenario, raises ProvisioningError if its identity can't be created"""
        logger.info("Running scenario: %s", scenario.title)
        with self._acting_principal(scenario) as principal, self.context.impersonate(principal) as active:
            outcome = self.executor.execute(scenario.resource, scenario.operation, active, scenario.payload)
            verdict = self.evaluator.evaluate(scenario, outcome, active)

        log = logger.info if verdict.passed else logger.error
        log("%s", verdict.detail)
        return verdict

    def run(self, scenarios: Iterable[Scenario]) -> RunResult:
        """Runs all scenarios, failing verdicts or skipped scenarios never stop the run"""
        self.ensure_environment()
        result = RunResult()
        for scenario in scenarios:
            try:
                result.verdicts.append(self.run_one(scenario))
            except ProvisioningError as exc:
                logger.error("Skipping scenario %s: %s", scenario.title, exc)
                result.skipped.append((scenario, exc))
        logger.info("Run finished: %s", result.summary().splitlines()[0])
        return result
