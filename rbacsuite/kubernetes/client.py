"""This module implements an KubernetesCLI interface using oc/kubectl binary commands."""

from functools import cached_property
from typing import Iterable, Optional

import openshift_client as oc
from openshift_client import Context, OpenShiftPythonException

from .node import Node


class KubernetesClient:
    """KubernetesClient is a helper class for invoking kubectl commands"""

    def __init__(
        self,
        project: str = None,
        api_url: str = None,
        token: str = None,
        kubeconfig_path: str = None,
        impersonate: Optional[tuple[str, tuple[str, ...]]] = None,
    ):
        self._project = project
        self._api_url = api_url
        self._token = token
        self._kubeconfig_path = kubeconfig_path
        self._impersonate = impersonate

    def change_project(self, project) -> "KubernetesClient":
        """Return new self with a different project"""
        return KubernetesClient(project, self._api_url, self._token, self._kubeconfig_path, self._impersonate)

    def impersonate(self, username: str = None, groups: Iterable[str] = ()) -> "KubernetesClient":
        """
        Return new self which issues every command as the given user and groups.
        Calling it without username returns client acting with its own credentials.
        The original client is never modified.
        """
        if username is None:
            if groups:
                raise ValueError("Impersonating groups requires a username")
            return KubernetesClient(self._project, self._api_url, self._token, self._kubeconfig_path)
        return KubernetesClient(
            self._project, self._api_url, self._token, self._kubeconfig_path, (username, tuple(groups))
        )

    @property
    def impersonated(self) -> Optional[tuple[str, tuple[str, ...]]]:
        """Returns (username, groups) this client acts as, None for the client's own credentials"""
        return self._impersonate

    @property
    def impersonation_args(self) -> list[str]:
        """Command line flags which make kubectl act as the impersonated principal"""
        if self._impersonate is None:
            return []
        username, groups = self._impersonate
        return [f"--as={username}"] + [f"--as-group={group}" for group in groups]

    @cached_property
    def context(self):
        """Prepare context for command execution"""
        context = Context()

        context.project_name = self._project
        context.api_server = self._api_url
        context.token = self._token
        context.kubeconfig_path = self._kubeconfig_path

        return context

    @property
    def connected(self):
        """Returns True, if user is logged in and the project exists"""
        try:
            self.do_action("get", "ns", self._project or "default")
        except OpenShiftPythonException:
            return False
        return True

    def object_exists(self, ref: str) -> bool:
        """Returns True if object with the given reference (e.g. `user/name`) exists"""
        with self.context:
            return oc.selector(ref).count_existing() == 1

    def get_nodes(self, labels: dict[str, str] = None) -> list[Node]:
        """Returns all nodes of the cluster, optionally filtered by labels"""
        with self.context:
            return oc.selector("nodes", labels=labels).objects(cls=Node)

    def do_action(self, verb: str, *args, stdin_str=None, auto_raise: bool = True):
        """Run an oc command, as impersonated principal if there is one."""
        with self.context:
            return oc.invoke(verb, list(args) + self.impersonation_args, stdin_str=stdin_str, auto_raise=auto_raise)
