"""
Operator metadata schema - the contents of a package's operator.yaml.

OperatorMetadata carries the package identity (name, version), the platform
and cluster versions it requires, and the task and plan declarations that are
copied verbatim into the compiled OperatorVersion.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskKind(str, Enum):
    """Task kinds the default validation policy knows."""
    APPLY = "Apply"
    DELETE = "Delete"
    DUMMY = "Dummy"


def _require_mapping(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _require_list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list, got {type(value).__name__}")
    return value


def _optional_str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{what} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Maintainer:
    """A package maintainer."""
    name: str = ""
    email: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.email:
            result["email"] = self.email
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "Maintainer":
        data = _require_mapping(data, "maintainer")
        return cls(
            name=_optional_str(data.get("name"), "maintainer name"),
            email=_optional_str(data.get("email"), "maintainer email"),
        )


@dataclass(frozen=True)
class Task:
    """
    A named unit of work declared by an operator.

    Attributes:
        name: Task name, referenced by plan steps
        kind: Task kind string. Known kinds are listed in TaskKind; any other
            kind is kept as-is and left unvalidated.
        spec: Raw task spec as declared in operator.yaml
    """
    name: str
    kind: str
    spec: dict[str, Any] = field(default_factory=dict)

    @property
    def resources(self) -> tuple[str, ...]:
        """Template names listed in spec.resources, in declaration order."""
        return tuple(str(r) for r in self.spec.get("resources") or ())

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "kind": self.kind, "spec": self.spec}

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        data = _require_mapping(data, "task")
        spec = _require_mapping(data.get("spec"), f"spec of task {data.get('name')}")
        _require_list(spec.get("resources"), f"resources of task {data.get('name')}")
        return cls(
            name=_optional_str(data.get("name"), "task name"),
            kind=_optional_str(data.get("kind"), "task kind"),
            spec=spec,
        )


@dataclass(frozen=True)
class Step:
    """A step of a phase: an ordered list of task names."""
    name: str
    tasks: tuple[str, ...] = field(default_factory=tuple)
    delete: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "tasks": list(self.tasks)}
        if self.delete:
            result["delete"] = True
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "Step":
        data = _require_mapping(data, "step")
        name = _optional_str(data.get("name"), "step name")
        delete = data.get("delete", False)
        if delete is None:
            delete = False
        if not isinstance(delete, bool):
            raise ValueError(f"delete of step {name} must be a boolean, got {delete!r}")
        return cls(
            name=name,
            tasks=tuple(str(t) for t in _require_list(data.get("tasks"), "step tasks")),
            delete=delete,
        )


@dataclass(frozen=True)
class Phase:
    """A phase of a plan: an ordered list of steps run with a strategy."""
    name: str
    strategy: str = "serial"
    steps: tuple[Step, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "strategy": self.strategy,
            "steps": [s.to_dict() for s in self.steps],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Phase":
        data = _require_mapping(data, "phase")
        return cls(
            name=_optional_str(data.get("name"), "phase name"),
            strategy=_optional_str(data.get("strategy"), "phase strategy") or "serial",
            steps=tuple(Step.from_dict(s) for s in _require_list(data.get("steps"), "phase steps")),
        )


@dataclass(frozen=True)
class Plan:
    """A named rollout plan: ordered phases run with a strategy."""
    strategy: str = "serial"
    phases: tuple[Phase, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy,
            "phases": [p.to_dict() for p in self.phases],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Plan":
        data = _require_mapping(data, "plan")
        return cls(
            strategy=_optional_str(data.get("strategy"), "plan strategy") or "serial",
            phases=tuple(Phase.from_dict(p) for p in _require_list(data.get("phases"), "plan phases")),
        )


@dataclass(frozen=True)
class OperatorMetadata:
    """
    The operator.yaml document of a package.

    Attributes:
        name: Operator name, unique within a package
        version: Package (operator) version
        app_version: Version of the packaged application
        kudo_version: Minimum platform version required
        kubernetes_version: Minimum cluster version required
        maintainers: Package maintainers
        url: Documentation URL
        tasks: Ordered task declarations
        plans: Plan name -> plan declaration
    """
    name: str
    version: str = ""
    description: str = ""
    app_version: str = ""
    kudo_version: str = ""
    kubernetes_version: str = ""
    maintainers: tuple[Maintainer, ...] = field(default_factory=tuple)
    url: str = ""
    tasks: tuple[Task, ...] = field(default_factory=tuple)
    plans: dict[str, Plan] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the operator.yaml shape."""
        result: dict[str, Any] = {"name": self.name, "version": self.version}
        optional = {
            "description": self.description,
            "appVersion": self.app_version,
            "kudoVersion": self.kudo_version,
            "kubernetesVersion": self.kubernetes_version,
            "url": self.url,
        }
        result.update({k: v for k, v in optional.items() if v})
        if self.maintainers:
            result["maintainers"] = [m.to_dict() for m in self.maintainers]
        result["tasks"] = [t.to_dict() for t in self.tasks]
        result["plans"] = {name: p.to_dict() for name, p in self.plans.items()}
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "OperatorMetadata":
        """
        Build from a parsed operator.yaml document.

        Raises:
            ValueError: If the document does not have the operator.yaml shape
        """
        if not isinstance(data, dict):
            raise ValueError("operator file must be a mapping")
        name = _optional_str(data.get("name"), "name")
        if not name:
            raise ValueError("operator name is required")

        plans = _require_mapping(data.get("plans"), "plans")
        return cls(
            name=name,
            version=_optional_str(data.get("version"), "version"),
            description=_optional_str(data.get("description"), "description"),
            app_version=_optional_str(data.get("appVersion"), "appVersion"),
            kudo_version=_optional_str(data.get("kudoVersion"), "kudoVersion"),
            kubernetes_version=_optional_str(data.get("kubernetesVersion"), "kubernetesVersion"),
            maintainers=tuple(
                Maintainer.from_dict(m) for m in _require_list(data.get("maintainers"), "maintainers")
            ),
            url=_optional_str(data.get("url"), "url"),
            tasks=tuple(Task.from_dict(t) for t in _require_list(data.get("tasks"), "tasks")),
            plans={str(k): Plan.from_dict(v) for k, v in plans.items()},
        )
