"""
Error classes for oppack.

Package errors follow the failure taxonomy of package loading:
- PackageSchemaError: a file does not match the schema for its kind
- UnexpectedFileError: a file in the package is not operator/params/template
- TaskValidationError: tasks reference templates that do not exist
- MissingPackageFileError: operator.yaml or params.yaml was never parsed

All of these are fatal to the single package being loaded. Only the batch
loader downgrades them to warnings.

Error handling contract:
- Errors are exceptions, not values
- Validation collects violations, but raises once with all of them
"""


class OppackError(Exception):
    """Base exception for oppack."""
    pass


class ConfigError(OppackError):
    """Configuration validation error."""
    pass


class PackageError(OppackError):
    """Base class for errors raised while reading or compiling a package."""
    pass


class PackageSchemaError(PackageError):
    """
    A package file does not match the expected schema.

    Examples:
    - operator.yaml is not valid YAML or not a mapping
    - params.yaml is not a two-level mapping
    - a parameter's required field is not a boolean
    """
    pass


class UnexpectedFileError(PackageError):
    """
    A package contains a file that is not part of the package format.

    A single unexpected entry invalidates the whole package.
    """

    def __init__(self, path: str):
        super().__init__(f"unexpected file when reading package from filesystem: {path}")
        self.path = path


class MissingPackageFileError(PackageError):
    """operator.yaml or params.yaml is missing from the package."""
    pass


class TaskValidationError(PackageError):
    """
    One or more tasks reference templates missing from the package.

    The message lists every violation, one per line.
    """

    def __init__(self, violations: list[str]):
        super().__init__("\n".join(violations))
        self.violations = list(violations)


class VersionError(OppackError):
    """A version string cannot be parsed or the cluster version is not supported."""
    pass
