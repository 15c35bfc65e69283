"""
Documentation lookup for exported declarations.

The documentation extractor groups doc comments by declaration kind and
name. ``DocResolver`` maps a declaration back onto its comment and, for
callables, prefixes a synthesized signature line.
"""

from dataclasses import dataclass, field

from bindmodel.analyzer.errors import InternalAnalysisError
from bindmodel.analyzer.formatting import host_type_name
from bindmodel.analyzer.types import (
    Const,
    Func,
    NamedType,
    Object,
    PointerType,
    Tuple,
    TypeName,
    VarObject,
)


@dataclass
class ValueDoc:
    """Doc comment of a constant or variable declaration group.

    Attributes:
        names: Every name declared in the group
        doc: Comment text shared by the group
    """

    names: list[str]
    doc: str = ""


@dataclass
class FuncDoc:
    """Doc comment of a function or method."""

    name: str
    doc: str = ""
    recv: str = ""


@dataclass
class TypeDoc:
    """Doc comment of a type with its associated declarations.

    Attributes:
        name: Type name
        doc: Comment text of the type itself
        consts: Constant groups of this type
        vars: Variable groups of this type
        funcs: Functions returning this type (constructors)
        methods: Methods of this type
    """

    name: str
    doc: str = ""
    consts: list[ValueDoc] = field(default_factory=list)
    vars: list[ValueDoc] = field(default_factory=list)
    funcs: list[FuncDoc] = field(default_factory=list)
    methods: list[FuncDoc] = field(default_factory=list)


@dataclass
class PackageDoc:
    """Documentation tree of a module."""

    name: str
    doc: str = ""
    consts: list[ValueDoc] = field(default_factory=list)
    vars: list[ValueDoc] = field(default_factory=list)
    types: list[TypeDoc] = field(default_factory=list)
    funcs: list[FuncDoc] = field(default_factory=list)


def _find_value(groups: list[ValueDoc], name: str) -> str | None:
    for group in groups:
        if name in group.names:
            return group.doc
    return None


def _find_func(entries: list[FuncDoc], name: str) -> str:
    for entry in entries:
        if entry.name == name:
            return entry.doc
    return ""


def _format_tuple(tup: Tuple) -> str:
    items = []
    for var in tup:
        item = host_type_name(var.type)
        if var.name:
            item = f"{item} {var.name}"
        items.append(item)
    return ", ".join(items)


def format_signature(func: Func) -> str:
    """Build the one-line signature prefixed to callable docs.

    Args:
        func: Function or method declaration

    Returns:
        A line such as ``Divide(int a, int b) int, error``
    """
    sig = func.signature
    line = f"{func.name}({_format_tuple(sig.params)})"
    results = _format_tuple(sig.results)
    if results:
        line = f"{line} {results}"
    return line


class DocResolver:
    """Pure lookup of doc comments in a ``PackageDoc``."""

    def __init__(self, doc: PackageDoc):
        self.doc = doc

    def _type_doc(self, name: str) -> TypeDoc | None:
        for typ in self.doc.types:
            if typ.name == name:
                return typ
        return None

    def _value_doc(self, name: str, const: bool) -> str:
        flat = self.doc.consts if const else self.doc.vars
        found = _find_value(flat, name)
        if found is not None:
            return found
        # typed groups are filed under their type
        for typ in self.doc.types:
            found = _find_value(typ.consts if const else typ.vars, name)
            if found is not None:
                return found
        return ""

    def _callable_doc(self, func: Func, parent: str) -> str:
        if not func.is_method and not parent:
            doc = _find_func(self.doc.funcs, func.name)
            if doc:
                return doc
            # functions returning *T are filed under T but never claimed by it
            for typ in self.doc.types:
                doc = _find_func(typ.funcs, func.name)
                if doc:
                    return doc
            return ""
        typ = self._type_doc(parent)
        if not func.is_method:
            return _find_func(typ.funcs, func.name) if typ is not None else ""
        doc = _find_func(typ.methods, func.name) if typ is not None else ""
        if doc:
            return doc
        # promoted methods are documented on the type declaring them
        recv = func.signature.recv
        if recv is None:
            return ""
        declaring = recv.type.elem if isinstance(recv.type, PointerType) else recv.type
        if isinstance(declaring, NamedType) and declaring.name != parent:
            owner = self._type_doc(declaring.name)
            if owner is not None:
                return _find_func(owner.methods, func.name)
        return ""

    def get_doc(self, obj: Object, parent: str = "") -> str:
        """Return the doc string associated with a declaration.

        Args:
            obj: Declaration to document
            parent: Name of the enclosing type, "" for module scope

        Returns:
            The doc text, "" when none is found; callables always get at
            least their signature line

        Raises:
            InternalAnalysisError: If the declaration kind is unknown
        """
        if isinstance(obj, Const):
            return self._value_doc(obj.name, const=True)

        if isinstance(obj, VarObject):
            return self._value_doc(obj.name, const=False)

        if isinstance(obj, Func):
            doc = self._callable_doc(obj, parent)
            sig = format_signature(obj)
            if doc:
                return f"{sig}\n\n{doc}"
            return sig

        if isinstance(obj, TypeName):
            typ = self._type_doc(obj.name)
            return typ.doc if typ is not None else ""

        raise InternalAnalysisError(
            f"not yet supported: {obj!r} ({type(obj).__name__})"
        )
