"""
Analysis of a type-checked module's public interface.

This module provides the top-level entry point turning a module scope and
its documentation tree into the resolved model a binding generator emits
code from.
"""

from collections.abc import Callable

from loguru import logger

from bindmodel.analyzer import models, types
from bindmodel.analyzer.classifier import process
from bindmodel.analyzer.config import AnalysisConfig
from bindmodel.analyzer.context import AnalysisContext
from bindmodel.analyzer.docs import PackageDoc
from bindmodel.analyzer.errors import (
    BindError,
    DuplicateIdentityError,
    InternalAnalysisError,
    InvalidDualReturnError,
    ModuleLoadError,
    TooManyResultsError,
    UnsupportedDeclarationError,
)


def analyze_package(
    pkg: types.Package,
    doc: PackageDoc | None = None,
    config: AnalysisConfig | None = None,
    trace: Callable[[str], None] | None = None,
) -> models.Package:
    """Build the interface model of a type-checked module.

    Args:
        pkg: Module scope produced by the type checker
        doc: Documentation tree of the module; an empty one if omitted
        config: Analysis options; read from the environment if omitted
        trace: Sink for the symbol listing; a logger bound to the module
            name at DEBUG level if omitted

    Returns:
        The resolved package model

    Raises:
        BindError: If a declaration cannot be modeled
        UnsupportedDeclarationError: In strict mode, for declarations
            without a model
    """
    if doc is None:
        doc = PackageDoc(name=pkg.name)
    if config is None:
        config = AnalysisConfig.from_env()
    if trace is None:
        trace = logger.bind(module=pkg.name).debug

    ctx = AnalysisContext(pkg=pkg, doc=doc, config=config, trace=trace)
    return process(ctx)


__all__ = [
    "AnalysisConfig",
    "BindError",
    "DuplicateIdentityError",
    "InternalAnalysisError",
    "InvalidDualReturnError",
    "ModuleLoadError",
    "PackageDoc",
    "TooManyResultsError",
    "UnsupportedDeclarationError",
    "analyze_package",
    "models",
    "types",
]
