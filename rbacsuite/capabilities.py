"""Contains capability related functions"""

import functools

from rbacsuite.config import settings


@functools.cache
def has_cluster():
    """Returns True, if administrative client is logged into a cluster"""
    cluster = settings["control_plane"]["cluster"]
    try:
        if not cluster.connected:
            return False, "You are not logged into Kubernetes or the configured namespace doesn't exist"
    # missing binary or broken kubeconfig should only skip the cluster tests
    # pylint: disable=broad-except
    except Exception as exc:
        return False, f"Unable to reach the cluster: {exc}"
    return True, None


@functools.cache
def is_openshift():
    """Returns True, if the cluster serves OpenShift user API needed for ephemeral identities"""
    cluster = settings["control_plane"]["cluster"]
    result = cluster.do_action("api-resources", "--api-group=user.openshift.io", "-o", "name", auto_raise=False)
    return result.status() == 0 and "users" in result.out()
