"""
CLI commands for inspecting registries.

Commands:
- depreg inspect: List registered names and entry kinds
- depreg check: Validate that required dependencies are registered
"""

import importlib
import json
import logging
import sys
from typing import Any

import click

from . import __version__
from .core import DependencyRegistry
from .errors import MissingDependenciesError, RegistryError
from .validator import DependencyValidator

logger = logging.getLogger("depreg.cli")


def load_registry(target: str) -> DependencyRegistry:
    """
    Load a registry from ``module.path:attribute``.

    The attribute may be a DependencyRegistry or a zero-argument callable
    returning one.
    """
    if ":" not in target:
        raise click.BadParameter(f"Expected 'module:attribute', got '{target}'")

    module_path, attr = target.rsplit(":", 1)
    if "" not in sys.path:
        sys.path.insert(0, "")

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module '{module_path}': {e}")

    try:
        obj = getattr(module, attr)
    except AttributeError:
        raise click.BadParameter(f"Module '{module_path}' has no attribute '{attr}'")

    if not isinstance(obj, DependencyRegistry) and callable(obj):
        obj = obj()

    if not isinstance(obj, DependencyRegistry):
        raise click.BadParameter(
            f"'{target}' is not a DependencyRegistry (got {type(obj).__name__})"
        )

    logger.debug(f"Loaded registry from {target}: {obj!r}")
    return obj


def _safe_repr(value: Any, limit: int = 60) -> str:
    text = repr(value)
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


@click.group()
@click.version_option(__version__, prog_name="depreg")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Inspect and validate dependency registries."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("inspect")
@click.argument("target")
@click.option("--resolve", is_flag=True, help="Resolve lazy values and show values.")
@click.option("--json-output", is_flag=True, help="Emit JSON.")
def inspect_cmd(target: str, resolve: bool, json_output: bool) -> None:
    """List the entries of the registry at TARGET (module:attribute)."""
    registry = load_registry(target)

    rows = []
    try:
        for name, kind in registry.describe():
            row = {"name": name, "kind": kind}
            if resolve:
                row["value"] = _safe_repr(registry.export()[name])
            rows.append(row)
    except RegistryError as e:
        click.echo(click.style(str(e), fg="red"), err=True)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps({"total": len(rows), "entries": rows}, indent=2))
        return

    if not rows:
        click.echo("No dependencies registered.")
        return

    width = max(len(row["name"]) for row in rows)
    for row in rows:
        line = f"  {row['name'].ljust(width)}  {click.style(row['kind'], fg='cyan')}"
        if "value" in row:
            line += f"  {row['value']}"
        click.echo(line)
    click.echo(f"\n{len(rows)} dependencies")


@main.command("check")
@click.argument("target")
@click.argument("names", nargs=-1, required=True)
def check_cmd(target: str, names: tuple) -> None:
    """Verify that NAMES are registered in the registry at TARGET."""
    registry = load_registry(target)

    try:
        DependencyValidator().require(registry.export(), *names)
    except MissingDependenciesError as e:
        click.echo(click.style(f"✗ {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(click.style(f"✓ All {len(names)} dependencies registered", fg="green"))


if __name__ == "__main__":
    main()
