"""
Semantic type graph of a type-checked module.

This module mirrors the interface the analysis consumes from the
parser/type-checker: types, declared objects, the module scope and the
method-set query. Named types compare by identity, so every reference to a
named type must share the same ``NamedType`` instance.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from bindmodel.analyzer.errors import InternalAnalysisError


class Type:
    """Base class for every semantic type."""

    def underlying(self) -> "Type":
        """Return the underlying type (itself for non-named types)."""
        return self


@dataclass(frozen=True)
class BasicType(Type):
    """Predeclared scalar type such as ``int`` or ``string``.

    Attributes:
        name: Type name as written in the source module
        kind: Broad category ("int", "float", "complex", "string", "bool")
    """

    name: str
    kind: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PointerType(Type):
    """Pointer to an element type."""

    elem: Type

    def __str__(self) -> str:
        return f"*{self.elem}"


@dataclass(frozen=True)
class SliceType(Type):
    """Variable-length sequence of an element type."""

    elem: Type

    def __str__(self) -> str:
        return f"[]{self.elem}"


@dataclass(frozen=True)
class MapType(Type):
    """Hash map from a key type to a value type."""

    key: Type
    value: Type

    def __str__(self) -> str:
        return f"map[{self.key}]{self.value}"


@dataclass(frozen=True)
class Field:
    """Field of a struct type.

    Attributes:
        name: Field name (the type name for embedded fields)
        type: Field type
        embedded: Whether the field is embedded (its methods are promoted)
    """

    name: str
    type: Type
    embedded: bool = False

    @property
    def exported(self) -> bool:
        return is_exported(self.name)


@dataclass(frozen=True)
class StructType(Type):
    """Ordered set of named fields."""

    fields: tuple[Field, ...] = ()

    def __str__(self) -> str:
        inner = "; ".join(f"{f.name} {f.type}" for f in self.fields)
        return f"struct{{{inner}}}"


@dataclass(frozen=True)
class InterfaceType(Type):
    """Set of method signatures."""

    methods: tuple["Func", ...] = ()

    def __str__(self) -> str:
        inner = "; ".join(m.name for m in self.methods)
        return f"interface{{{inner}}}"


@dataclass(eq=False)
class NamedType(Type):
    """Declared type with a name, an underlying type and methods.

    Attributes:
        name: Declared type name
        package: Name of the declaring module (None for universe types)
        base: Underlying type
        methods: Methods declared with this type as receiver
    """

    name: str
    package: str | None
    base: Type | None = None
    methods: list["Func"] = field(default_factory=list)

    def underlying(self) -> Type:
        if self.base is None:
            raise ValueError(f"named type {self.name} has no underlying type")
        return self.base

    def add_method(self, method: "Func") -> None:
        self.methods.append(method)

    def __str__(self) -> str:
        if self.package:
            return f"{self.package}.{self.name}"
        return self.name

    def __repr__(self) -> str:
        return f"NamedType({self})"


@dataclass(frozen=True)
class Var:
    """Parameter, result, receiver or package-level variable.

    Attributes:
        name: Declared name, empty for unnamed parameters and results
        type: Variable type
        package: Declaring module name
    """

    name: str
    type: Type
    package: str | None = None

    @property
    def exported(self) -> bool:
        return is_exported(self.name)


@dataclass(frozen=True)
class Tuple:
    """Ordered list of variables (parameters or results)."""

    vars: tuple[Var, ...] = ()

    def __len__(self) -> int:
        return len(self.vars)

    def __iter__(self) -> Iterator[Var]:
        return iter(self.vars)

    def at(self, index: int) -> Var:
        return self.vars[index]


@dataclass(frozen=True)
class Signature(Type):
    """Function or method type.

    Attributes:
        params: Parameter list
        results: Result list
        recv: Receiver variable for methods, None for plain functions
    """

    params: Tuple = field(default_factory=Tuple)
    results: Tuple = field(default_factory=Tuple)
    recv: Var | None = None

    def __str__(self) -> str:
        params = ", ".join(str(v.type) for v in self.params)
        results = ", ".join(str(v.type) for v in self.results)
        if len(self.results) > 1:
            results = f"({results})"
        return f"func({params}) {results}".rstrip()


@dataclass(frozen=True)
class Object:
    """Declared object of a module scope."""

    name: str
    type: Type
    package: str | None

    @property
    def exported(self) -> bool:
        return is_exported(self.name)


@dataclass(frozen=True)
class Const(Object):
    """Constant declaration."""

    value: str | None = None


@dataclass(frozen=True)
class VarObject(Object):
    """Package-level variable declaration."""


@dataclass(frozen=True)
class Func(Object):
    """Function or method declaration.

    The ``type`` of a function is always a ``Signature``; methods carry a
    receiver in it.
    """

    @property
    def signature(self) -> Signature:
        if not isinstance(self.type, Signature):
            raise InternalAnalysisError(f"function {self.name} has type {self.type}")
        return self.type

    @property
    def is_method(self) -> bool:
        return self.signature.recv is not None


@dataclass(frozen=True)
class TypeName(Object):
    """Type declaration; ``type`` is the declared ``NamedType``."""


class Scope:
    """Top-level declarations of a module, keyed by name."""

    def __init__(self) -> None:
        self._objects: dict[str, Object] = {}

    def insert(self, obj: Object) -> None:
        self._objects[obj.name] = obj

    def lookup(self, name: str) -> Object | None:
        return self._objects.get(name)

    def names(self) -> list[str]:
        """Return declared names; callers must not rely on their order."""
        return list(self._objects)

    def __len__(self) -> int:
        return len(self._objects)


@dataclass
class Package:
    """Type-checked module: its name and top-level scope."""

    name: str
    scope: Scope = field(default_factory=Scope)


@dataclass(frozen=True)
class Selection:
    """Method reachable through a method set.

    Attributes:
        obj: The method declaration
        index: Field path to the embedded field declaring the method,
            empty for methods declared on the type itself
        indirect: Whether a pointer is traversed to reach the method
    """

    obj: Func
    index: tuple[int, ...] = ()
    indirect: bool = False

    @property
    def name(self) -> str:
        return self.obj.name

    @property
    def type(self) -> Signature:
        return self.obj.signature


def is_exported(name: str) -> bool:
    """Check whether a name is visible outside its declaring module."""
    return bool(name) and name[0].isupper()


BASIC_TYPES: dict[str, BasicType] = {
    name: BasicType(name, kind)
    for name, kind in [
        ("bool", "bool"),
        ("string", "string"),
        ("int", "int"),
        ("int8", "int"),
        ("int16", "int"),
        ("int32", "int"),
        ("int64", "int"),
        ("uint", "int"),
        ("uint8", "int"),
        ("uint16", "int"),
        ("uint32", "int"),
        ("uint64", "int"),
        ("uintptr", "int"),
        ("byte", "int"),
        ("rune", "int"),
        ("float32", "float"),
        ("float64", "float"),
        ("complex64", "complex"),
        ("complex128", "complex"),
    ]
}

STRING = BASIC_TYPES["string"]

ERROR_TYPE = NamedType("error", None)
ERROR_TYPE.base = InterfaceType(
    methods=(
        Func(
            name="Error",
            type=Signature(
                results=Tuple((Var("", STRING),)),
                recv=Var("", ERROR_TYPE),
            ),
            package=None,
        ),
    )
)


def is_error_type(typ: Type) -> bool:
    """Check whether a type is the universe ``error`` interface."""
    return typ is ERROR_TYPE


def _deref(typ: Type) -> tuple[Type, bool]:
    if isinstance(typ, PointerType):
        return typ.elem, True
    return typ, False


def _declared_methods(named: NamedType) -> list[Func]:
    """Methods declared on a named type, or listed by its interface."""
    if isinstance(named.base, InterfaceType):
        return list(named.base.methods)
    return named.methods


# (type, field path, pointer traversed, reached along several paths)
_Embedding = tuple[Type, tuple[int, ...], bool, bool]


def _consolidate(
    entries: list[_Embedding],
) -> list[tuple[NamedType, tuple[int, ...], bool, bool]]:
    """Merge repeated visits of a named type within one embedding depth."""
    merged: dict[int, tuple[NamedType, tuple[int, ...], bool, bool]] = {}
    for typ, path, indirect, multiple in entries:
        named, via_pointer = _deref(typ)
        if not isinstance(named, NamedType):
            continue
        key = id(named)
        if key in merged:
            first = merged[key]
            merged[key] = (first[0], first[1], first[2], True)
        else:
            merged[key] = (named, path, indirect or via_pointer, multiple)
    return list(merged.values())


def method_set(typ: Type) -> list[Selection]:
    """Compute the method set of a type.

    Methods declared on a named type are all visible through a pointer to
    it; through a value only value-receiver methods are. Embedded interfaces
    contribute every method they list. Methods of embedded fields are
    promoted level by level: a method found at a shallower embedding depth
    shadows deeper ones, and two methods with the same name at the same
    depth cancel each other out. A type reached along several paths at the
    same depth collides with itself.

    Args:
        typ: Type whose method set is requested, usually ``*T``

    Returns:
        Selections sorted by method name
    """
    base, addressable = _deref(typ)
    found: dict[str, Selection] = {}
    blocked: set[str] = set()
    seen: set[int] = set()

    level: list[_Embedding] = [(base, (), addressable, False)]
    while level:
        current: dict[str, list[Selection | None]] = {}
        next_level: list[_Embedding] = []
        visited: list[int] = []
        for named, path, indirect, multiple in _consolidate(level):
            # shallower occurrences already shadow everything this one adds
            if id(named) in seen:
                continue
            visited.append(id(named))

            for method in _declared_methods(named):
                recv = method.signature.recv
                pointer_recv = recv is not None and isinstance(recv.type, PointerType)
                if pointer_recv and not indirect:
                    continue
                sel = Selection(obj=method, index=path, indirect=indirect)
                current.setdefault(method.name, []).append(sel)
                if multiple:
                    current[method.name].append(sel)

            under = named.base
            if isinstance(under, StructType):
                for i, fld in enumerate(under.fields):
                    # a field name shadows deeper methods of the same name
                    current.setdefault(fld.name, []).append(None)
                    if fld.embedded:
                        next_level.append(
                            (fld.type, path + (i,), indirect, multiple)
                        )
        seen.update(visited)

        for name, selections in current.items():
            if name in found or name in blocked:
                continue
            first = selections[0]
            if len(selections) == 1 and first is not None:
                found[name] = first
            else:
                blocked.add(name)
        level = next_level

    return [found[name] for name in sorted(found)]
