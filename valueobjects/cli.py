"""CLI entry point for value-objects."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from valueobjects.config import CHECK_NAMES, CONFIG_DIR, CONFIG_FILE


# Default config template
CONFIG_TEMPLATE = """\
# Checks run by `value-objects verify`, in this order.
checks:
  - reflexive
  - symmetric
  - transitive
  - none
  - hashcode
  - consistent

# How many times each comparison is repeated by the consistency check.
consistency_rounds: 3

# Skip hash checks for types that define __eq__ without __hash__.
allow_unhashable: false
"""


@click.group()
def cli() -> None:
    """value-objects: verify __eq__/__hash__ contracts."""


@cli.command()
@click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    default=".",
    help="Project root directory (default: cwd).",
)
def init(project_root: str) -> None:
    """Initialize .valueobjects/ with a default config."""
    root = Path(project_root)
    config_dir = root / CONFIG_DIR

    if config_dir.exists():
        click.echo(f"{CONFIG_DIR}/ already exists at {config_dir}")
        raise SystemExit(1)

    config_dir.mkdir(parents=True)
    config_path = config_dir / CONFIG_FILE
    config_path.write_text(CONFIG_TEMPLATE)
    click.echo(f"Created {config_path}")

    # Load config through the standard path to validate it
    from valueobjects.config import load_config
    load_config(root)


@cli.command()
@click.argument("target")
@click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    default=".",
    help="Project root directory (default: cwd).",
)
@click.option(
    "--check",
    "checks",
    type=click.Choice(CHECK_NAMES),
    multiple=True,
    help="Run only this check (repeatable). Default: checks from config.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every passing check.")
def verify(target: str, project_root: str, checks: tuple[str, ...], verbose: bool) -> None:
    """Verify the factory TARGET, given as package.module:attr."""
    from valueobjects.config import ConfigError, load_config_or_defaults
    from valueobjects.instances import InstancesLoadError, load_instances
    from valueobjects.report import verifier_from_config, verify as run_verify

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    root = Path(project_root)
    # Targets are importable relative to the project root
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))

    try:
        config = load_config_or_defaults(root)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    try:
        instances = load_instances(target)
    except InstancesLoadError as exc:
        raise click.ClickException(str(exc)) from exc

    selected = list(checks) if checks else config["checks"]
    report = run_verify(instances, selected, verifier_from_config(config))

    if report.passed:
        click.echo(f"{target}: PASS ({len(report.checks_run)} checks)")
        return

    click.echo(
        f"{target}: FAIL ({len(report.failures)} of {len(report.checks_run)} checks)"
    )
    for failure in report.failures:
        click.echo(f"  [{failure.check}] {failure.message}")
    raise SystemExit(1)
