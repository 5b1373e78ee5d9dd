"""Fakes standing in for the cluster, harness components are exercised without any kubectl calls"""

from dataclasses import dataclass
from typing import Optional

import pytest
from openshift_client import Context, OpenShiftPythonException
from openshift_client.action import Action
from openshift_client.result import Result

from rbacsuite.harness import (
    ExpectationEvaluator,
    IdentityProvisioner,
    ImpersonationContext,
    ResourceOperationExecutor,
    ScenarioRunner,
)
from rbacsuite.kubernetes.user import User


def scripted_result(verb, cmd, status=0, out="", err="", timed_out=False) -> Result:
    """Result as openshift_client returns it, with a single recorded action"""
    result = Result(verb)
    result.add_action(Action(verb, ["kubectl", verb] + list(cmd), out, err, None, status, timeout=timed_out))
    return result


@dataclass
class Call:
    """Single recorded kubectl invocation"""

    verb: str
    args: tuple
    impersonated: Optional[tuple]
    project: Optional[str]
    stdin: Optional[str]


class FakeCluster:
    """
    Stands in for KubernetesClient.
    Responses are consumed in order, impersonated and namespaced views share responses, calls and users.
    """

    # pylint: disable=too-many-arguments
    def __init__(self, responses=None, calls=None, users=None, impersonated=None, project=None):
        self.responses = responses if responses is not None else []
        self.calls = calls if calls is not None else []
        self.users = users if users is not None else {}
        self.impersonated = impersonated
        self.project_name = project
        self.connected = True
        self.context = Context()
        self.fail_create = None
        self.fail_delete = None

    def _view(self, impersonated, project):
        view = FakeCluster(self.responses, self.calls, self.users, impersonated, project)
        view.connected = self.connected
        return view

    def impersonate(self, username=None, groups=()):
        """Returns view acting as the principal"""
        return self._view((username, tuple(groups)) if username else None, self.project_name)

    def change_project(self, project):
        """Returns view in another namespace"""
        return self._view(self.impersonated, project)

    def do_action(self, verb, *args, stdin_str=None, auto_raise=True):  # pylint: disable=unused-argument
        """Records the call and returns next scripted response"""
        self.calls.append(Call(verb, args, self.impersonated, self.project_name, stdin_str))
        response = self.responses.pop(0) if self.responses else {"out": "done"}
        if isinstance(response, Exception):
            raise response
        return scripted_result(verb, args, **response)

    def object_exists(self, ref):
        """Only users are tracked"""
        kind, name = ref.split("/", 1)
        return kind == "user" and name in self.users


@pytest.fixture
def cluster():
    """Fake administrative client"""
    return FakeCluster()


@pytest.fixture
def fake_users(monkeypatch, cluster):
    """Routes User commit and delete into the fake cluster"""

    def _commit(user):
        if cluster.fail_create:
            raise OpenShiftPythonException(cluster.fail_create)
        cluster.users[user.name()] = user.groups
        return user

    def _delete(user, ignore_not_found=True, cmd_args=None):  # pylint: disable=unused-argument
        if cluster.fail_delete:
            raise OpenShiftPythonException(cluster.fail_delete)
        if user.name() not in cluster.users and not ignore_not_found:
            raise OpenShiftPythonException(f"user {user.name()} not found")
        cluster.users.pop(user.name(), None)
        return True

    monkeypatch.setattr(User, "commit", _commit)
    monkeypatch.setattr(User, "delete", _delete)
    return cluster.users


@pytest.fixture
def provisioner(cluster, fake_users):  # pylint: disable=unused-argument
    """Provisioner working against the fake cluster"""
    return IdentityProvisioner(cluster, "customdomain", labels={"app": "unit"})


@pytest.fixture
def executor(cluster):
    """Executor with server-side dry-run"""
    return ResourceOperationExecutor(cluster, timeout_budget=5, dry_run=True)


@pytest.fixture
def impersonation():
    """Impersonation context"""
    return ImpersonationContext()


@pytest.fixture
def runner(cluster, provisioner, executor, impersonation):
    """Runner wired to the fake cluster"""
    return ScenarioRunner(cluster, provisioner, executor, impersonation, ExpectationEvaluator())


@pytest.fixture
def respond(cluster):
    """Scripts next response of the fake cluster, non-empty err means the command failed"""

    def _respond(err: str = None, out: str = "", exc: Exception = None, timed_out: bool = False):
        if exc is not None:
            cluster.responses.append(exc)
        elif timed_out:
            cluster.responses.append({"status": -1, "err": err or "", "timed_out": True})
        else:
            cluster.responses.append({"status": 1 if err else 0, "out": out, "err": err or ""})

    return _respond
