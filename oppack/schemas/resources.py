"""
Installable resource schemas - Operator, OperatorVersion and Instance.

These are the three objects a package compiles into. Each carries a kind,
the API version of the platform, object metadata, a spec and a status, and
serializes to the manifest shape accepted by the cluster API server.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .operator import Maintainer, Plan, Task
from .parameter import Parameter
from .plan_status import InstanceStatus, PlanStatus

API_VERSION = "kudo.dev/v1alpha1"

# Label tooling uses to recognise objects it created
PROVENANCE_LABEL = "controller-tools.k8s.io"
PROVENANCE_LABEL_VALUE = "1.0"

# Label used to look up instances by operator name
OPERATOR_LABEL = "kudo.dev/operator"


@dataclass(frozen=True)
class ObjectMeta:
    name: str
    namespace: Optional[str] = None
    labels: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.namespace:
            result["namespace"] = self.namespace
        if self.labels:
            result["labels"] = dict(self.labels)
        return result


@dataclass(frozen=True)
class ObjectReference:
    name: str
    kind: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.kind:
            result["kind"] = self.kind
        return result


@dataclass(frozen=True)
class OperatorSpec:
    description: str = ""
    kudo_version: str = ""
    kubernetes_version: str = ""
    maintainers: tuple[Maintainer, ...] = field(default_factory=tuple)
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.description:
            result["description"] = self.description
        if self.kudo_version:
            result["kudoVersion"] = self.kudo_version
        if self.kubernetes_version:
            result["kubernetesVersion"] = self.kubernetes_version
        if self.maintainers:
            result["maintainers"] = [m.to_dict() for m in self.maintainers]
        if self.url:
            result["url"] = self.url
        return result


@dataclass(frozen=True)
class OperatorVersionSpec:
    operator: ObjectReference
    version: str = ""
    templates: dict[str, str] = field(default_factory=dict)
    tasks: tuple[Task, ...] = field(default_factory=tuple)
    parameters: tuple[Parameter, ...] = field(default_factory=tuple)
    plans: dict[str, Plan] = field(default_factory=dict)
    upgradable_from: Optional[tuple[ObjectReference, ...]] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "operator": self.operator.to_dict(),
            "version": self.version,
            "templates": dict(self.templates),
            "tasks": [t.to_dict() for t in self.tasks],
            "parameters": [p.to_dict() for p in self.parameters],
            "plans": {name: p.to_dict() for name, p in self.plans.items()},
        }
        if self.upgradable_from is not None:
            result["upgradableFrom"] = [r.to_dict() for r in self.upgradable_from]
        return result


@dataclass(frozen=True)
class InstanceSpec:
    operator_version: ObjectReference
    parameters: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"operatorVersion": self.operator_version.to_dict()}
        if self.parameters:
            result["parameters"] = dict(self.parameters)
        return result


@dataclass(frozen=True)
class Operator:
    """The reusable operator definition, without any version content."""
    metadata: ObjectMeta
    spec: OperatorSpec
    kind: str = "Operator"
    api_version: str = API_VERSION

    @property
    def name(self) -> str:
        return self.metadata.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": {},
        }


@dataclass(frozen=True)
class OperatorVersion:
    """A specific version of an operator: templates, tasks, parameters and plans."""
    metadata: ObjectMeta
    spec: OperatorVersionSpec
    kind: str = "OperatorVersion"
    api_version: str = API_VERSION

    @property
    def name(self) -> str:
        return self.metadata.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": {},
        }


@dataclass(frozen=True)
class Instance:
    """A running instantiation of an OperatorVersion."""
    metadata: ObjectMeta
    spec: InstanceSpec
    status: InstanceStatus = field(default_factory=InstanceStatus)
    kind: str = "Instance"
    api_version: str = API_VERSION

    @property
    def name(self) -> str:
        return self.metadata.name

    def get_last_executed_plan_status(self) -> Optional[PlanStatus]:
        """The plan currently relevant for this instance, see InstanceStatus."""
        return self.status.last_executed_plan()

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }
