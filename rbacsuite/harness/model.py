"""Declarations the harness works with: principals, identities, resources and scenarios"""

import enum
from dataclasses import dataclass, field, replace
from typing import Optional

from rbacsuite.harness.outcome import Decision
from rbacsuite.utils import merge_dicts


@dataclass(frozen=True)
class Principal:
    """
    Subject under which an operation is executed.
    Principal without username is the administrative default, operations run with the client's own credentials.
    Ephemeral principal is a request for a fresh identity, username is then only the base of its name.
    """

    username: Optional[str] = None
    groups: tuple[str, ...] = ()
    ephemeral: bool = field(default=False, kw_only=True)

    def __post_init__(self):
        object.__setattr__(self, "groups", tuple(self.groups))
        if self.username is None and (self.groups or self.ephemeral):
            raise ValueError("Principal with groups or ephemeral principal needs a username")

    @property
    def is_admin(self) -> bool:
        """Returns True for the administrative default"""
        return self.username is None

    def __str__(self):
        if self.is_admin:
            return "<admin>"
        prefix = "ephemeral:" if self.ephemeral else ""
        return f"{prefix}{self.username}"


ADMIN = Principal()


@dataclass(frozen=True)
class Identity:
    """Ephemeral test principal backed by an object on the cluster"""

    name: str
    groups: tuple[str, ...] = ()

    def as_principal(self) -> Principal:
        """Returns principal acting as this identity"""
        return Principal(self.name, self.groups)


class Operation(enum.Enum):
    """Operation issued against a resource"""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    GET = "get"

    def __str__(self):
        return self.name.capitalize()


@dataclass(frozen=True)
class ResourceDescriptor:
    """Identifies target object type and optionally its instance"""

    api_group: str
    version: str
    kind: str
    plural: str
    namespace: Optional[str] = None
    name: Optional[str] = None

    @property
    def api_version(self) -> str:
        """apiVersion as used in manifests"""
        if self.api_group:
            return f"{self.api_group}/{self.version}"
        return self.version

    @property
    def resource(self) -> str:
        """Fully qualified resource name understood by kubectl"""
        if self.api_group:
            return f"{self.plural}.{self.version}.{self.api_group}"
        return self.plural

    @property
    def ref(self) -> str:
        """kubectl reference to the instance, or to the whole type if there is no name"""
        if self.name:
            return f"{self.resource}/{self.name}"
        return self.resource

    def with_name(self, name: str, namespace: str = None) -> "ResourceDescriptor":
        """Returns descriptor of a concrete instance"""
        return replace(self, name=name, namespace=namespace or self.namespace)

    def manifest(self, payload: dict = None) -> dict:
        """Renders object body for a create request, payload is merged on top of the minimal object"""
        if not self.name:
            raise ValueError(f"Unable to render manifest of {self}, name is missing")
        metadata: dict = {"name": self.name}
        if self.namespace:
            metadata["namespace"] = self.namespace
        base = {"apiVersion": self.api_version, "kind": self.kind, "metadata": metadata}
        return merge_dicts(base, payload or {})

    def __str__(self):
        location = f" in {self.namespace}" if self.namespace else ""
        return f"{self.kind} {self.name or '*'} ({self.api_version}){location}"


@dataclass(frozen=True)
class Scenario:
    """Single declaration of expected behaviour: `principal` doing `operation` on `resource` is `expected`"""

    principal: Principal
    resource: ResourceDescriptor
    operation: Operation
    expected: Decision
    payload: Optional[dict] = field(default=None, compare=False)
    name: Optional[str] = None

    def __post_init__(self):
        if self.expected not in (Decision.ALLOWED, Decision.DENIED):
            raise ValueError(f"Scenario can only expect Allowed or Denied, not {self.expected}")
        if not self.resource.name:
            raise ValueError(f"Scenario needs a concrete instance, {self.resource} has no name")

    @property
    def title(self) -> str:
        """Human readable name of the scenario"""
        return self.name or f"{self.principal} {self.operation} {self.resource} -> {self.expected}"
