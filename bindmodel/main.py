"""Command line interface for bindmodel.

This module provides a command-line interface for analyzing module
description files and inspecting the resulting binding model.
"""

import json
import sys
from collections.abc import Callable
from typing import Any, TypeVar, cast

import typer
from loguru import logger

from bindmodel.analyzer import AnalysisConfig, analyze_package
from bindmodel.analyzer.errors import BindError, UnsupportedDeclarationError
from bindmodel.analyzer.export import package_summary, package_to_dict
from bindmodel.analyzer.loader import load_module
from bindmodel.analyzer.models import Package

F = TypeVar("F", bound=Callable[..., Any])


def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="bindmodel",
    help=(
        "Analyze the public interface of a compiled module for binding generation. "
        "Commands: inspect, symbols."
    ),
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _analyze(
    module_file: str, config: AnalysisConfig, trace: Callable[[str], None]
) -> Package:
    """Load and analyze a module description, exiting on failure."""
    try:
        pkg, doc = load_module(module_file)
        return analyze_package(pkg, doc, config=config, trace=trace)
    except BindError as e:
        logger.error(f"Analysis failed: {e}")
        raise typer.Exit(1) from e
    except UnsupportedDeclarationError as e:
        logger.error(f"Unsupported declarations: {e}")
        raise typer.Exit(2) from e


@typed_command(app.command("inspect"))
def inspect_module(
    module_file: str = typer.Argument(..., help="Module description (YAML or JSON)"),
    as_json: bool = typer.Option(False, "--json", help="Print the model as JSON"),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on declarations without a binding model"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Analyze a module and print its binding model."""
    _configure_logging(verbose)
    config = AnalysisConfig.from_env()
    config.strict = config.strict or strict
    pkg = _analyze(module_file, config, logger.bind(module=module_file).debug)

    if as_json:
        typer.echo(json.dumps(package_to_dict(pkg), indent=2))
    else:
        for line in package_summary(pkg):
            typer.echo(line)


@typed_command(app.command("symbols"))
def list_symbols(
    module_file: str = typer.Argument(..., help="Module description (YAML or JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Print every exported symbol registered during analysis."""
    _configure_logging(verbose)
    config = AnalysisConfig.from_env()
    config.trace_symbols = True
    _analyze(module_file, config, typer.echo)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
