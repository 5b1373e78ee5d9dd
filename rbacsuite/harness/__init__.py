"""Black-box verification of RBAC and admission webhooks through impersonated principals"""

from rbacsuite.harness.errors import (
    AmbiguousOutcomeError,
    AuthorizationOutcomeMismatch,
    CleanupError,
    EnvironmentPreconditionError,
    HarnessError,
    ImpersonationError,
    ProvisioningError,
)
from rbacsuite.harness.evaluator import ExpectationEvaluator, Verdict
from rbacsuite.harness.executor import ResourceOperationExecutor
from rbacsuite.harness.impersonation import ImpersonationContext
from rbacsuite.harness.model import ADMIN, Identity, Operation, Principal, ResourceDescriptor, Scenario
from rbacsuite.harness.outcome import Decision, Outcome, classify_error
from rbacsuite.harness.provisioner import IdentityProvisioner
from rbacsuite.harness.runner import RunResult, ScenarioRunner

__all__ = [
    "ADMIN",
    "AmbiguousOutcomeError",
    "AuthorizationOutcomeMismatch",
    "CleanupError",
    "Decision",
    "EnvironmentPreconditionError",
    "ExpectationEvaluator",
    "HarnessError",
    "Identity",
    "IdentityProvisioner",
    "ImpersonationContext",
    "ImpersonationError",
    "Operation",
    "Outcome",
    "Principal",
    "ProvisioningError",
    "ResourceDescriptor",
    "ResourceOperationExecutor",
    "RunResult",
    "Scenario",
    "ScenarioRunner",
    "Verdict",
    "classify_error",
]
