"""
Symbol table of exported declarations.

Every exported declaration is registered once per name; registering the
same name again replaces the previous entry.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum, auto

from bindmodel.analyzer.types import (
    Const,
    Func,
    NamedType,
    Object,
    StructType,
    TypeName,
    VarObject,
)


class SymbolKind(Enum):
    """Kinds of registered declarations."""

    CONST = auto()
    VAR = auto()
    FUNC = auto()
    STRUCT = auto()
    TYPE = auto()


@dataclass(frozen=True)
class Symbol:
    """Registered declaration.

    Attributes:
        name: Declared name
        kind: Declaration kind
        id: Identity string (module name + declared name)
        type_name: Semantic type rendered as text
        obj: The declaration itself
    """

    name: str
    kind: SymbolKind
    id: str
    type_name: str
    obj: Object


def _symbol_kind(obj: Object) -> SymbolKind:
    if isinstance(obj, Const):
        return SymbolKind.CONST
    if isinstance(obj, VarObject):
        return SymbolKind.VAR
    if isinstance(obj, Func):
        return SymbolKind.FUNC
    if isinstance(obj, TypeName):
        named = obj.type
        if isinstance(named, NamedType) and isinstance(named.base, StructType):
            return SymbolKind.STRUCT
    return SymbolKind.TYPE


class SymbolTable:
    """Registry of exported declarations keyed by name."""

    def __init__(self, separator: str = "_"):
        self.separator = separator
        self.syms: dict[str, Symbol] = {}

    def add_symbol(self, obj: Object) -> Symbol:
        """Register a declaration, replacing any previous entry of that name.

        Args:
            obj: Exported declaration

        Returns:
            The registered symbol
        """
        ident = self.separator.join(p for p in (obj.package, obj.name) if p)
        sym = Symbol(
            name=obj.name,
            kind=_symbol_kind(obj),
            id=ident,
            type_name=str(obj.type),
            obj=obj,
        )
        self.syms[obj.name] = sym
        return sym

    def lookup(self, name: str) -> Symbol | None:
        return self.syms.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.syms

    def __len__(self) -> int:
        return len(self.syms)

    def __iter__(self) -> Iterator[Symbol]:
        for name in sorted(self.syms):
            yield self.syms[name]

    def dump(self, sink: Callable[[str], None]) -> None:
        """Emit one line per registered symbol, sorted by name.

        Args:
            sink: Receives each formatted line
        """
        for sym in self:
            sink(f"--> [{sym.name}]: {sym.kind.name.lower()} {sym.id} {sym.type_name}")
