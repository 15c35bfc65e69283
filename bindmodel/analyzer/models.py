"""
Resolved model of a module's public interface.

These dataclasses are what the analysis produces and what a binding
generator consumes: constants, variables, free functions and struct types,
each addressable by a unique identity string.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from bindmodel.analyzer import types
from bindmodel.analyzer.errors import InternalAnalysisError


class Capability(Enum):
    """Structural traits a struct type can expose to the host."""

    STRINGER = auto()  # has a textual representation


@dataclass
class Var:
    """Variable, parameter or result.

    Attributes:
        type: Semantic type
        name: Declared name, "" when unnamed
        doc: Associated doc text
        id: Identity string for package-level variables, "" otherwise
    """

    type: types.Type
    name: str = ""
    doc: str = ""
    id: str = ""


@dataclass
class Signature:
    """Receiver, parameters and results of a callable."""

    params: list[Var] = field(default_factory=list)
    results: list[Var] = field(default_factory=list)
    recv: Var | None = None


@dataclass
class Func:
    """Function, method or constructor.

    Attributes:
        id: Identity string
        name: Declared name
        doc: Doc text, prefixed with the signature line
        sig: Callable signature
        ret: Non-error return type, None if nothing is returned
        err: Whether the declaration returns an error
        ctor: Whether this function was reclassified as a constructor
        obj: Originating declaration (None for synthesized getters)
    """

    id: str
    name: str
    doc: str
    sig: Signature
    ret: types.Type | None = None
    err: bool = False
    ctor: bool = False
    obj: types.Func | None = None


@dataclass
class Const:
    """Constant exposed through a zero-argument getter."""

    id: str
    name: str
    doc: str
    type: types.Type
    getter: Func


@dataclass
class Struct:
    """Struct type with its constructors, methods and capabilities."""

    id: str
    name: str
    doc: str
    obj: types.TypeName
    ctors: list[Func] = field(default_factory=list)
    methods: list[Func] = field(default_factory=list)
    capabilities: set[Capability] = field(default_factory=set)

    @property
    def type(self) -> types.NamedType:
        named = self.obj.type
        if not isinstance(named, types.NamedType):
            raise InternalAnalysisError(f"struct {self.name} is not a named type")
        return named

    @property
    def struct(self) -> types.StructType:
        under = self.type.underlying()
        if not isinstance(under, types.StructType):
            raise InternalAnalysisError(f"type {self.name} is not a struct: {under}")
        return under

    @property
    def fields(self) -> list[Var]:
        """Exported fields, in declaration order."""
        return [Var(type=f.type, name=f.name) for f in self.struct.fields if f.exported]

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities


@dataclass
class Unsupported:
    """Exported declaration that has no binding model yet."""

    name: str
    kind: str
    reason: str


@dataclass
class Package:
    """Analyzed module: the root of the resolved model."""

    name: str
    doc: str = ""
    consts: list[Const] = field(default_factory=list)
    vars: list[Var] = field(default_factory=list)
    structs: list[Struct] = field(default_factory=list)
    funcs: list[Func] = field(default_factory=list)
    objs: dict[str, Const | Var | Struct | Func] = field(default_factory=dict)
    unsupported: list[Unsupported] = field(default_factory=list)

    def add_const(self, const: Const) -> None:
        self.consts.append(const)
        self.objs[const.name] = const

    def add_var(self, var: Var) -> None:
        self.vars.append(var)
        self.objs[var.name] = var

    def add_struct(self, struct: Struct) -> None:
        self.structs.append(struct)
        self.objs[struct.name] = struct

    def add_func(self, func: Func) -> None:
        self.funcs.append(func)
        self.objs[func.name] = func

    def lookup(self, name: str) -> Const | Var | Struct | Func | None:
        """Return the top-level model registered under a declared name."""
        return self.objs.get(name)

    def identities(self) -> list[tuple[str, Const | Var | Struct | Func]]:
        """Pair every identity string in the model with its owner."""
        pairs: list[tuple[str, Const | Var | Struct | Func]] = []
        pairs += [(c.id, c) for c in self.consts]
        pairs += [(c.getter.id, c.getter) for c in self.consts]
        pairs += [(v.id, v) for v in self.vars]
        pairs += [(f.id, f) for f in self.funcs]
        for struct in self.structs:
            pairs.append((struct.id, struct))
            pairs += [(f.id, f) for f in struct.ctors]
            pairs += [(f.id, f) for f in struct.methods]
        return pairs

    def ids(self) -> list[str]:
        """List every identity string in the model, nested ones included."""
        return [ident for ident, _ in self.identities()]
