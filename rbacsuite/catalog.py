"""Well known principals and resources protected by the managed cluster policy"""

from rbacsuite.harness.model import Principal, ResourceDescriptor

AUTHENTICATED_GROUPS = ("system:authenticated", "system:authenticated:oauth")
UNAUTHENTICATED_GROUPS = ("system:unauthenticated",)

KUBE_SYSTEM = Principal("kube:system", AUTHENTICATED_GROUPS)
ANONYMOUS = Principal("system:anonymous", UNAUTHENTICATED_GROUPS)

CLUSTER_AUTOSCALER = ResourceDescriptor("autoscaling.openshift.io", "v1", "ClusterAutoscaler", "clusterautoscalers")
NODE = ResourceDescriptor("", "v1", "Node", "nodes")


def regular_user(base_name: str = "unpriv", groups=AUTHENTICATED_GROUPS) -> Principal:
    """Request for a freshly created user without any elevated group"""
    return Principal(base_name, groups, ephemeral=True)


def elevated_user(elevated_group: str, base_name: str = "sre") -> Principal:
    """Request for a freshly created user which is member of the elevated group"""
    return Principal(base_name, (elevated_group,) + AUTHENTICATED_GROUPS, ephemeral=True)
