"""Parameter schema - one entry of a package's params.yaml."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Parameter:
    """
    A parameter an operator version accepts.

    Attributes:
        name: Parameter name, unique within a package
        description: Human-readable description
        default: Default value, None when params.yaml declares no default
        trigger: Name of the plan to run when the parameter changes
        required: Whether a value must be supplied (defaults to True)
        display_name: Name shown in tooling
    """
    name: str
    description: str = ""
    default: Optional[str] = None
    trigger: str = ""
    required: bool = True
    display_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the OperatorVersion parameter shape."""
        result: dict[str, Any] = {"name": self.name, "required": self.required}
        if self.description:
            result["description"] = self.description
        if self.default is not None:
            result["default"] = self.default
        if self.trigger:
            result["trigger"] = self.trigger
        if self.display_name:
            result["displayName"] = self.display_name
        return result
