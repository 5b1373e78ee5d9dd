"""Custom dynaconf loader for loading cluster settings and converting them to KubernetesClients"""

from rbacsuite.kubernetes.client import KubernetesClient


# pylint: disable=unused-argument
def load(obj, env=None, silent=True, key=None, filename=None):
    """Creates administrative KubernetesClient"""
    control_plane = obj.setdefault("control_plane", {})

    cluster = control_plane.setdefault("cluster", {})
    if isinstance(cluster, KubernetesClient):
        return
    obj["control_plane"]["cluster"] = KubernetesClient(
        cluster.get("project"), cluster.get("api_url"), cluster.get("token"), cluster.get("kubeconfig_path")
    )
