from bindmodel.analyzer import (
    AnalysisConfig,
    BindError,
    PackageDoc,
    analyze_package,
    models,
    types,
)
from bindmodel.analyzer.loader import load_module

__version__ = "0.1.0"


__all__ = [
    "AnalysisConfig",
    "BindError",
    "PackageDoc",
    "analyze_package",
    "load_module",
    "models",
    "types",
]
