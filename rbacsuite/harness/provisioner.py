"""Creates and deletes ephemeral identities"""

import logging
from contextlib import contextmanager
from typing import Iterable

import backoff
from openshift_client import OpenShiftPythonException

from rbacsuite.harness.errors import CleanupError, ProvisioningError
from rbacsuite.harness.model import Identity
from rbacsuite.kubernetes.user import User
from rbacsuite.utils import randomize

logger = logging.getLogger(__name__)


class IdentityProvisioner:
    """Manages ephemeral OpenShift users through the administrative client"""

    def __init__(self, cluster, domain: str = None, labels: dict[str, str] = None):
        self.cluster = cluster
        self.domain = domain
        self.labels = labels

    def generate_name(self, base_name: str) -> str:
        """Returns collision resistant name derived from base_name"""
        name = randomize(base_name)
        if self.domain:
            return f"{name}@{self.domain}"
        return name

    def create(self, base_name: str, groups: Iterable[str] = ()) -> Identity:
        """Creates new identity, raises ProvisioningError if the server rejects it"""
        groups = tuple(groups)
        name = self.generate_name(base_name)
        user = User.create_instance(self.cluster, name, list(groups), labels=self.labels)
        try:
            user.commit()
        except OpenShiftPythonException as exc:
            raise ProvisioningError(f"Unable to create identity {name}: {exc.msg}") from exc
        logger.info("Created identity %s with groups %s", name, list(groups))
        return Identity(name, groups)

    def delete(self, name: str):
        """Deletes identity, missing identity is not an error and no failure is ever propagated"""
        try:
            User.create_instance(self.cluster, name).delete(ignore_not_found=True)
            logger.info("Deleted identity %s", name)
        # cleanup must never mask the result of the scenario
        # pylint: disable=broad-except
        except Exception as exc:
            error = CleanupError(f"Unable to delete identity {name}: {exc}")
            logger.warning("%s", error)

    def exists(self, name: str) -> bool:
        """Returns True if identity with the name is present on the server"""
        return self.cluster.object_exists(f"user/{name}")

    def wait_until_absent(self, name: str, timeout: float = 30) -> bool:
        """Polls the server until the identity disappears, returns False if it is still present after timeout"""

        @backoff.on_predicate(backoff.fibo, lambda exists: exists, max_time=timeout, jitter=None)
        def _exists():
            return self.exists(name)

        return not _exists()

    @contextmanager
    def provision(self, base_name: str, groups: Iterable[str] = ()):
        """Creates identity for the duration of the block, deletes it on every exit path"""
        identity = self.create(base_name, groups)
        try:
            yield identity
        finally:
            self.delete(identity.name)
