"""Node object for Kubernetes"""

from openshift_client import APIObject

WORKER_ROLE_LABEL = "node-role.kubernetes.io/worker"


class Node(APIObject):
    """Kubernetes Node, read-only view used for picking targets of node scenarios"""

    @property
    def labels(self) -> dict[str, str]:
        """Returns node labels"""
        return self.model.metadata.labels or {}

    @property
    def is_worker(self) -> bool:
        """Returns True if the node carries worker role label"""
        return WORKER_ROLE_LABEL in self.labels

    @property
    def schedulable(self) -> bool:
        """Returns True unless the node was cordoned"""
        return not self.model.spec.unschedulable
