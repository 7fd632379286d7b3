"""
Package parser - accumulate package files into a PackageFiles bundle.

Files are independent of each other and may arrive in any order. The only
interaction between files is that two templates mapping to the same name
overwrite each other, last write wins.

Failure policy: the first file that cannot be parsed, or that is not part of
the package format at all, aborts the whole package.
"""

import logging
from typing import Any, Iterable, Optional

import yaml

from oppack.errors import PackageSchemaError, UnexpectedFileError
from oppack.schemas import OperatorMetadata, PackageFiles, Parameter

from .classifier import FileKind, classify

logger = logging.getLogger(__name__)

# Numbers and dates keep their source text, so "1.10" and "0755" survive
# loading. Booleans and null still resolve.
_SOURCE_TEXT_TAGS = {
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}


class _PackageLoader(yaml.SafeLoader):
    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag not in _SOURCE_TEXT_TAGS]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


_TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_STRINGS = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(value: Any) -> bool:
    """
    Parse a boolean the way params.yaml spells it.

    Accepts YAML booleans and the strings 1, t, T, TRUE, true, True and
    0, f, F, FALSE, false, False.

    Raises:
        ValueError: If value is not one of those
    """
    if isinstance(value, bool):
        return value
    text = str(value)
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean: {text!r}")


def _scalar_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    return value


def _decode(path: str, data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise PackageSchemaError(f"{path} is not valid UTF-8: {e}")


def _load_yaml(path: str, data: bytes, what: str) -> Any:
    try:
        return yaml.load(_decode(path, data), Loader=_PackageLoader)
    except yaml.YAMLError as e:
        raise PackageSchemaError(f"failed to unmarshal {what}: {path}: {e}")


def parse_operator_file(path: str, data: bytes) -> OperatorMetadata:
    """Parse operator.yaml."""
    document = _load_yaml(path, data, "operator file")
    try:
        return OperatorMetadata.from_dict(document)
    except (ValueError, TypeError) as e:
        raise PackageSchemaError(f"failed to unmarshal operator file: {path}: {e}")


def parse_params_file(path: str, data: bytes) -> list[Parameter]:
    """
    Parse params.yaml into parameters, in declaration order.

    The file is a mapping of parameter name to a mapping of string fields:
    description, default, trigger, displayName and required. A parameter
    without required is required.
    """
    document = _load_yaml(path, data, "parameters file")
    if document is None:
        return []
    if not isinstance(document, dict):
        raise PackageSchemaError(f"failed to unmarshal parameters file: {path}: expected a mapping")

    params: list[Parameter] = []
    for name, fields in document.items():
        fields = fields or {}
        if not isinstance(fields, dict):
            raise PackageSchemaError(
                f"failed to unmarshal parameters file: {path}: parameter {name} must be a mapping"
            )
        try:
            values = {k: _scalar_to_str(v) for k, v in fields.items() if v is not None}
        except ValueError as e:
            raise PackageSchemaError(
                f"failed to unmarshal parameters file: {path}: parameter {name}: {e}"
            )

        required = True
        if "required" in fields:
            try:
                required = parse_bool(fields["required"])
            except ValueError as e:
                raise PackageSchemaError(
                    f"failed parsing required field from parameter {name}. "
                    f"cannot convert {fields['required']} to bool: {e}"
                )

        params.append(Parameter(
            name=str(name),
            description=values.get("description", ""),
            default=values.get("default"),
            trigger=values.get("trigger", ""),
            required=required,
            display_name=values.get("displayName", ""),
        ))
    return params


def parse_package_file(path: str, data: bytes, package: PackageFiles) -> PackageFiles:
    """
    Parse one file into the package being built.

    Args:
        path: Path of the file inside the package source
        data: File content
        package: Bundle to accumulate into (mutated and returned)

    Raises:
        PackageSchemaError: If the content does not match the file's schema
        UnexpectedFileError: If the path is not part of the package format
    """
    package_file = classify(path)

    if package_file.kind == FileKind.OPERATOR:
        package.operator = parse_operator_file(path, data)
    elif package_file.kind == FileKind.TEMPLATE:
        if package_file.template_name in package.templates:
            logger.debug(f"template {package_file.template_name} from {path} replaces an earlier file")
        package.templates[package_file.template_name] = _decode(path, data)
    elif package_file.kind == FileKind.PARAMS:
        package.params = parse_params_file(path, data)
    else:
        raise UnexpectedFileError(path)

    return package


def parse_package(files: Iterable[tuple[str, bytes]], package: Optional[PackageFiles] = None) -> PackageFiles:
    """Parse every (path, content) pair of a package source into one bundle."""
    package = package if package is not None else PackageFiles()
    for path, data in files:
        parse_package_file(path, data, package)
    return package
