"""Exceptions raised or reported by the verification harness"""


class HarnessError(Exception):
    """Base class for all harness errors"""


class ProvisioningError(HarnessError):
    """Ephemeral identity could not be created, affected scenario is skipped"""


class CleanupError(HarnessError):
    """Best-effort teardown failed, only ever logged"""


class ImpersonationError(HarnessError):
    """Impersonation was set while another principal was still active"""


class EnvironmentPreconditionError(HarnessError):
    """Administrative client is unusable, whole run is halted"""


class AuthorizationOutcomeMismatch(HarnessError):
    """Actual outcome differs from the declared expectation"""

    def __init__(self, scenario, outcome):
        super().__init__(f"Expected {scenario.expected}, got {outcome}")
        self.scenario = scenario
        self.outcome = outcome


class AmbiguousOutcomeError(HarnessError):
    """Failure could not be attributed to authorization, carries the raw error"""

    def __init__(self, scenario, outcome):
        super().__init__(f"Outcome can't be attributed to authorization ({outcome.reason}): {outcome.detail}")
        self.scenario = scenario
        self.outcome = outcome
