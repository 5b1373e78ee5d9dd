"""Issues operations against resources under an explicit principal"""

import json
import logging

from openshift_client import OpenShiftPythonException, timeout

from rbacsuite.harness.model import ADMIN, Operation, Principal, ResourceDescriptor
from rbacsuite.harness.outcome import Outcome, classify_error

logger = logging.getLogger(__name__)

DEFAULT_PATCH = {"metadata": {"labels": {"rbacsuite/verified": "true"}}}


class ResourceOperationExecutor:
    """
    Runs a single kubectl command as the given principal and classifies the result.
    Nothing is ever retried, denial is a valid terminal result and ambiguous failures are reported as they are.
    """

    def __init__(self, cluster, timeout_budget: float = 30, dry_run: bool = True):
        self.cluster = cluster
        self.timeout_budget = timeout_budget
        self.dry_run = dry_run

    def command(self, resource: ResourceDescriptor, operation: Operation, payload: dict = None):
        """Returns verb, arguments and stdin of the command for the operation"""
        dry_run = ["--dry-run=server"] if self.dry_run else []
        if operation == Operation.CREATE:
            return "create", ["-f", "-", "-o", "name"] + dry_run, json.dumps(resource.manifest(payload))
        if not resource.name:
            raise ValueError(f"{operation} needs a concrete instance, {resource} has no name")
        if operation == Operation.UPDATE:
            patch = json.dumps(payload or DEFAULT_PATCH)
            return "patch", [resource.ref, "--type=merge", "-p", patch] + dry_run, None
        if operation == Operation.DELETE:
            return "delete", [resource.ref, "--wait=false"] + dry_run, None
        return "get", [resource.ref, "-o", "json"], None

    def execute(
        self, resource: ResourceDescriptor, operation: Operation, principal: Principal = ADMIN, payload: dict = None
    ) -> Outcome:
        """Issues the operation as principal and returns its classified outcome"""
        client = self.cluster.impersonate(principal.username, principal.groups)
        if resource.namespace:
            client = client.change_project(resource.namespace)
        verb, args, stdin = self.command(resource, operation, payload)

        logger.info("%s %s as %s", operation, resource, principal)
        try:
            with timeout(self.timeout_budget):
                result = client.do_action(verb, *args, stdin_str=stdin, auto_raise=False)
        except OpenShiftPythonException as exc:
            return self.classify_exception(exc)

        if result.status() == 0:
            logger.debug("%s succeeded: %s", verb, result.out())
            return Outcome.allowed(result.out().strip())
        if result.get_timeout():
            return self.timed_out(result)
        outcome = classify_error(result.err())
        logger.debug("%s failed with %s: %s", verb, outcome, outcome.detail)
        return outcome

    def timed_out(self, result) -> Outcome:
        """Killed command is reported with the budget it exceeded, never as denial"""
        action = result.get_timeout()
        detail = f"{action.verb} did not finish within {self.timeout_budget}s budget"
        if result.err().strip():
            detail = f"{detail}\n{result.err().strip()}"
        logger.debug("%s", detail)
        return Outcome.ambiguous("Timeout", detail)

    def classify_exception(self, exc: OpenShiftPythonException) -> Outcome:
        """Classifies exception raised by the client"""
        result = exc.result
        if result is None:
            return classify_error(exc.msg)
        if result.get_timeout():
            return self.timed_out(result)
        return classify_error(f"{exc.msg}\n{result.err()}")
