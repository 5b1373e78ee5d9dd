"""Holds the principal subsequent operations act as"""

import logging
from contextlib import contextmanager

from rbacsuite.harness.errors import ImpersonationError
from rbacsuite.harness.model import ADMIN, Principal

logger = logging.getLogger(__name__)


class ImpersonationContext:
    """
    Single active principal of one lane of scenarios.
    It never touches any client, the active principal is handed out by value and passed explicitly
    to every operation, so independent contexts can be used from parallel lanes.
    Every `set()` has to be paired with `clear()`, use `impersonate()` which does that on every exit path.
    """

    def __init__(self):
        self._active = ADMIN

    @property
    def active(self) -> Principal:
        """Currently active principal, ADMIN if nothing is impersonated"""
        return self._active

    def set(self, principal: Principal) -> Principal:
        """Makes principal the active one and returns it"""
        if principal.ephemeral:
            raise ImpersonationError(f"Ephemeral principal {principal} has to be provisioned before impersonation")
        if not self._active.is_admin:
            raise ImpersonationError(f"Unable to impersonate {principal}, {self._active} was not cleared")
        logger.debug("Impersonating %s with groups %s", principal, list(principal.groups))
        self._active = principal
        return principal

    def clear(self):
        """Restores the administrative default"""
        if not self._active.is_admin:
            logger.debug("Clearing impersonation of %s", self._active)
        self._active = ADMIN

    @contextmanager
    def impersonate(self, principal: Principal):
        """Impersonates principal for the duration of the block, always clears afterwards"""
        active = self.set(principal)
        try:
            yield active
        finally:
            self.clear()
