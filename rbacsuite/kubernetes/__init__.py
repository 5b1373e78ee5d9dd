"""Kubernetes common objects"""

from openshift_client import APIObject, timeout


class KubernetesObject(APIObject):
    """Custom APIObjects with commit semantics and bounded deletion"""

    def commit(self):
        """
        Creates object on the server and returns created entity.
        It will be the same class but attributes might differ, due to server adding/rejecting some of them.
        """
        self.create(["--save-config=true"])
        return self.refresh()

    def delete(self, ignore_not_found=True, cmd_args=None):
        """Deletes the resource, by default ignored not found"""
        with timeout(30):
            return super().delete(ignore_not_found, cmd_args)
