"""State shared by the components of one analysis run."""

from collections.abc import Callable
from dataclasses import dataclass, field

from bindmodel.analyzer import types
from bindmodel.analyzer.config import AnalysisConfig
from bindmodel.analyzer.docs import DocResolver, PackageDoc
from bindmodel.analyzer.symtab import SymbolTable


@dataclass
class AnalysisContext:
    """Inputs and registries of a single analysis run.

    Attributes:
        pkg: Type-checked module being analyzed
        doc: Documentation tree of the module
        config: Analysis options
        trace: Sink receiving the symbol table listing
        resolver: Doc comment lookup over ``doc``
        syms: Registered exported declarations
    """

    pkg: types.Package
    doc: PackageDoc
    config: AnalysisConfig
    trace: Callable[[str], None]
    resolver: DocResolver = field(init=False)
    syms: SymbolTable = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = DocResolver(self.doc)
        self.syms = SymbolTable(self.config.id_separator)

    @property
    def name(self) -> str:
        return self.pkg.name

    def make_id(self, *parts: str) -> str:
        """Identity string of a member of this module."""
        return self.config.make_id(self.pkg.name, *parts)
