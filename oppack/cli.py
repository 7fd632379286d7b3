"""
CLI interface for oppack.

Provides commands to verify a package, load a batch of packages, and show
the relevant plan of an instance.
"""

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.table import Table

from oppack import __version__
from oppack.errors import ConfigError, OppackError
from oppack.packages import (
    DEFAULT_POLICY,
    STRICT_POLICY,
    PackageCompiler,
    PackageLoader,
    package_files_from_path,
)
from oppack.schemas import InstanceStatus
from oppack.utils import console, print_error, print_info, print_success, print_warning, setup_logging


def _compiler(ctx: click.Context) -> PackageCompiler:
    config = ctx.obj["config"]
    policy = STRICT_POLICY if config.strict_task_kinds else DEFAULT_POLICY
    return PackageCompiler(policy=policy, namespace=config.namespace)


@click.group()
@click.version_option(version=__version__, prog_name="oppack")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: $OPPACK_HOME/config.yaml)",
)
@click.pass_context
def main(ctx, config_path: Optional[Path]):
    """
    oppack - Operator package compiler.

    Verify operator packages and inspect instance plan status.
    """
    from oppack.config import load_config

    ctx.ensure_object(dict)
    try:
        config = load_config(config_path, required=config_path is not None)
    except (ConfigError, FileNotFoundError) as e:
        print_error(f"Invalid config: {e}")
        raise SystemExit(1)

    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=Path(config.log_file).expanduser() if config.log_file else None,
    )
    ctx.obj["config"] = config


@main.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option("--output", "-o", type=click.Choice(["names", "yaml"]), default="names",
              help="Print resource names or the full manifests")
@click.pass_context
def verify(ctx, path: Path, output: str):
    """Parse and compile the package at PATH (directory or tarball)."""
    try:
        package = package_files_from_path(path)
        resources = _compiler(ctx).compile(package)
    except OppackError as e:
        print_error(f"{path} is invalid:\n{e}")
        raise SystemExit(1)

    if output == "yaml":
        click.echo(yaml.safe_dump_all(resources.to_list(), sort_keys=False), nl=False)
        return

    print_success(f"operator.kudo.dev/{resources.operator.name}")
    print_success(f"operatorversion.kudo.dev/{resources.operator_version.name}")
    print_success(f"instance.kudo.dev/{resources.instance.name}")


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.pass_context
def load(ctx, paths: tuple[Path, ...]):
    """Load package tarballs, skipping invalid ones."""
    digests = PackageLoader(compiler=_compiler(ctx)).load_all(paths)

    table = Table(title="Packages")
    table.add_column("Operator", style="cyan")
    table.add_column("Version")
    table.add_column("Digest", style="dim")
    for d in digests:
        ov = d.resources.operator_version
        table.add_row(d.resources.operator.name, ov.spec.version, d.digest[:12])
    console.print(table)

    if len(digests) < len(paths):
        print_warning(f"{len(digests)} of {len(paths)} packages valid")
    else:
        print_success(f"{len(digests)} of {len(paths)} packages valid")


@main.command("plan-status")
@click.argument("status_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def plan_status(status_file: Path):
    """
    Show the relevant plan of an instance.

    STATUS_FILE is an Instance manifest or its status, as YAML or JSON.
    """
    try:
        document = yaml.safe_load(status_file.read_text()) or {}
        if "status" in document:
            document = document["status"] or {}
        status = InstanceStatus.from_dict(document)
    except (yaml.YAMLError, KeyError, ValueError, TypeError, AttributeError) as e:
        print_error(f"Invalid instance status in {status_file}: {e}")
        raise SystemExit(1)

    plan = status.last_executed_plan()
    if plan is None:
        print_info("no plan has run")
        return

    click.echo(f"plan: {plan.name} ({plan.status.value})")
    if plan.last_finished_run is not None:
        click.echo(f"last finished: {plan.last_finished_run.isoformat()}")
    for phase in plan.phases:
        click.echo(f"  phase {phase.name} ({phase.status.value})")
        for step in phase.steps:
            click.echo(f"    step {step.name} ({step.status.value})")


if __name__ == "__main__":
    sys.exit(main())
