"""
Task validation - check declared tasks against the package's templates.

Which task kinds are validated, and how, is an explicit policy table:

    Apply  -> every spec.resources entry must name a template
    Delete -> every spec.resources entry must name a template
    Dummy  -> nothing to check

Kinds missing from the table are accepted without validation and logged,
unless the policy is strict. Violations are collected across all tasks so a
package author sees every missing template at once.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Mapping, Optional

from oppack.schemas import Task, TaskKind

logger = logging.getLogger(__name__)

TaskValidator = Callable[[Task, Mapping[str, str]], list[str]]


def validate_template_references(task: Task, templates: Mapping[str, str]) -> list[str]:
    """One violation per spec.resources entry that is not a template name."""
    return [
        f"task {task.name} missing template: {resource}"
        for resource in task.resources
        if resource not in templates
    ]


@dataclass(frozen=True)
class ValidationPolicy:
    """
    Task kind -> validator table.

    Attributes:
        validators: Kind string -> validator, or None for kinds that are known
            but need no checks
        strict: Reject kinds missing from the table instead of accepting them
    """
    validators: Mapping[str, Optional[TaskValidator]] = field(default_factory=dict)
    strict: bool = False

    def with_validator(self, kind: str, validator: Optional[TaskValidator]) -> "ValidationPolicy":
        """Copy of this policy with kind mapped to validator."""
        validators = dict(self.validators)
        validators[kind] = validator
        return replace(self, validators=validators)

    def validate(self, task: Task, templates: Mapping[str, str]) -> list[str]:
        if task.kind not in self.validators:
            if self.strict:
                return [f"task {task.name} has unsupported kind: {task.kind}"]
            logger.warning(f"no validation for task kind {task.kind} implemented")
            return []

        validator = self.validators[task.kind]
        if validator is None:
            return []
        return validator(task, templates)


DEFAULT_POLICY = ValidationPolicy(validators={
    TaskKind.APPLY.value: validate_template_references,
    TaskKind.DELETE.value: validate_template_references,
    TaskKind.DUMMY.value: None,
})

STRICT_POLICY = replace(DEFAULT_POLICY, strict=True)


def validate_task(
    task: Task,
    templates: Mapping[str, str],
    policy: ValidationPolicy = DEFAULT_POLICY,
) -> list[str]:
    """Violations of a single task."""
    return policy.validate(task, templates)


def validate_tasks(
    tasks: Iterable[Task],
    templates: Mapping[str, str],
    policy: ValidationPolicy = DEFAULT_POLICY,
) -> list[str]:
    """Violations of all tasks, in task order."""
    violations: list[str] = []
    for task in tasks:
        violations.extend(policy.validate(task, templates))
    return violations
