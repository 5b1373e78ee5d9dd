"""OpenShift User object, backs ephemeral identities"""

from rbacsuite.kubernetes import KubernetesObject


class User(KubernetesObject):
    """OpenShift User (user.openshift.io/v1)"""

    @classmethod
    def create_instance(cls, cluster, name: str, groups: list[str] = None, labels: dict[str, str] = None):
        """Creates new instance of User"""
        model: dict = {
            "kind": "User",
            "apiVersion": "user.openshift.io/v1",
            "metadata": {
                "name": name,
                "labels": labels,
            },
            "groups": groups or [],
        }

        return cls(model, context=cluster.context)

    @property
    def groups(self) -> list[str]:
        """Returns groups the user was created with"""
        return list(self.model.groups or [])
