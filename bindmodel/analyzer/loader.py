"""
Loader for module description files.

A module description is a YAML (or JSON) document listing the declarations
of a type-checked module together with their doc comments:

    name: geo
    doc: Package geo provides planar geometry.
    consts:
      - names: [Zero, One]
        type: int
        doc: Small integers.
    types:
      - name: Point
        doc: Point is a location.
        struct:
          - {name: X, type: int}
          - {name: Y, type: int}
        methods:
          - name: String
            recv: p
            results: [string]
    funcs:
      - name: NewPoint
        params: [x int, y int]
        results: [Point]

Parameters and results are written ``"name type"`` or ``"type"``. Type
expressions accept basic types, ``error``, the module's own types,
``*T``, ``[]T`` and ``map[K]V``. Doc comments are filed the way the
documentation extractor files them: functions returning one of the
module's types and constants of such a type go under that type.
"""

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from bindmodel.analyzer import types
from bindmodel.analyzer.docs import FuncDoc, PackageDoc, TypeDoc, ValueDoc
from bindmodel.analyzer.errors import ModuleLoadError


class TypeParser:
    """Parses type expressions against a module's named types."""

    def __init__(self, package: str, named: dict[str, types.NamedType]):
        self.package = package
        self.named = named

    def parse(self, expr: str) -> types.Type:
        expr = expr.strip()
        if not expr:
            raise ModuleLoadError("empty type expression")
        if expr.startswith("*"):
            return types.PointerType(self.parse(expr[1:]))
        if expr.startswith("[]"):
            return types.SliceType(self.parse(expr[2:]))
        if expr.startswith("map["):
            depth = 0
            for i, char in enumerate(expr[3:], start=3):
                if char == "[":
                    depth += 1
                elif char == "]":
                    depth -= 1
                    if depth == 0:
                        return types.MapType(
                            self.parse(expr[4:i]), self.parse(expr[i + 1 :])
                        )
            raise ModuleLoadError(f"unbalanced map type: {expr}")
        if expr == "error":
            return types.ERROR_TYPE
        if expr in types.BASIC_TYPES:
            return types.BASIC_TYPES[expr]
        if expr in self.named:
            return self.named[expr]
        raise ModuleLoadError(f"unknown type: {expr}")

    def parse_var(self, item: Any) -> types.Var:
        """Parse ``"name type"``, ``"type"`` or ``{name, type}``."""
        if isinstance(item, dict):
            if "type" not in item:
                raise ModuleLoadError(f"missing type in {item!r}")
            return types.Var(
                str(item.get("name", "")), self.parse(str(item["type"])), self.package
            )
        text = str(item).strip()
        name, sep, rest = text.partition(" ")
        if sep and rest.strip():
            return types.Var(name, self.parse(rest), self.package)
        return types.Var("", self.parse(text), self.package)

    def parse_tuple(self, items: list[Any] | None) -> types.Tuple:
        return types.Tuple(tuple(self.parse_var(s) for s in items or []))


def _require(entry: dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(entry, dict) or key not in entry:
        raise ModuleLoadError(f"missing '{key}' in {where} entry: {entry!r}")
    return entry[key]


def _embedded_name(typ: types.Type) -> str:
    if isinstance(typ, types.PointerType):
        typ = typ.elem
    if isinstance(typ, types.NamedType):
        return typ.name
    raise ModuleLoadError(f"embedded field must be a named type: {typ}")


def _result_type_name(results: list[Any] | None, parser: TypeParser) -> str | None:
    """Name of the module type a function returns, for doc filing."""
    tup = parser.parse_tuple(results)
    values = [v.type for v in tup if not types.is_error_type(v.type)]
    if len(values) != 1:
        return None
    typ = values[0]
    if isinstance(typ, types.PointerType):
        typ = typ.elem
    if isinstance(typ, types.NamedType) and typ.package == parser.package:
        return typ.name
    return None


def _load_values(
    bucket: str,
    entry: dict[str, Any],
    pkg: types.Package,
    doc: PackageDoc,
    parser: TypeParser,
    type_docs: dict[str, TypeDoc],
) -> None:
    """Declare a constant or variable group and file its doc comment."""
    names = entry.get("names") if isinstance(entry, dict) else None
    if names is None:
        names = [_require(entry, "name", bucket)]
    vtype = parser.parse(str(_require(entry, "type", bucket)))
    for vname in names:
        if bucket == "consts":
            value = entry.get("value")
            obj: types.Object = types.Const(
                str(vname), vtype, pkg.name, None if value is None else str(value)
            )
        else:
            obj = types.VarObject(str(vname), vtype, pkg.name)
        pkg.scope.insert(obj)

    group = ValueDoc(names=[str(n) for n in names], doc=str(entry.get("doc", "")))
    owner = type_docs.get(vtype.name) if isinstance(vtype, types.NamedType) else None
    if owner is not None:
        (owner.consts if bucket == "consts" else owner.vars).append(group)
    else:
        (doc.consts if bucket == "consts" else doc.vars).append(group)


def build_module(data: dict[str, Any]) -> tuple[types.Package, PackageDoc]:
    """Build a module scope and its doc tree from a parsed description.

    Args:
        data: Parsed module description

    Returns:
        Tuple of (module scope, documentation tree)

    Raises:
        ModuleLoadError: If the description is malformed
    """
    if not isinstance(data, dict):
        raise ModuleLoadError("module description must be a mapping")
    name = str(_require(data, "name", "module"))
    pkg = types.Package(name=name)
    doc = PackageDoc(name=name, doc=str(data.get("doc", "")))

    type_entries = data.get("types") or []
    named: dict[str, types.NamedType] = {}
    for entry in type_entries:
        tname = str(_require(entry, "name", "type"))
        named[tname] = types.NamedType(tname, name)
    parser = TypeParser(name, named)

    type_docs: dict[str, TypeDoc] = {}
    for entry in type_entries:
        tname = entry["name"]
        typ = named[tname]
        if "struct" in entry:
            fields = []
            for fld in entry["struct"] or []:
                ftype = parser.parse(str(_require(fld, "type", "field")))
                embedded = bool(fld.get("embedded", False))
                fname = fld.get("name") or _embedded_name(ftype)
                fields.append(types.Field(str(fname), ftype, embedded))
            typ.base = types.StructType(tuple(fields))
        elif "interface" in entry:
            typ.base = types.InterfaceType(
                tuple(
                    types.Func(
                        str(_require(meth, "name", "interface method")),
                        types.Signature(
                            params=parser.parse_tuple(meth.get("params")),
                            results=parser.parse_tuple(meth.get("results")),
                            recv=types.Var("", typ, name),
                        ),
                        name,
                    )
                    for meth in entry["interface"] or []
                )
            )
        elif "underlying" in entry:
            typ.base = parser.parse(str(entry["underlying"]))
        else:
            raise ModuleLoadError(
                f"type {tname} has no struct, interface or underlying type"
            )

        tdoc = TypeDoc(name=tname, doc=str(entry.get("doc", "")))
        if "interface" in entry:
            tdoc.methods.extend(
                FuncDoc(name=str(m["name"]), doc=str(m.get("doc", "")), recv=tname)
                for m in entry["interface"] or []
            )
        for meth in entry.get("methods") or []:
            mname = str(_require(meth, "name", "method"))
            recv_type: types.Type = typ
            if meth.get("pointer", False):
                recv_type = types.PointerType(typ)
            sig = types.Signature(
                params=parser.parse_tuple(meth.get("params")),
                results=parser.parse_tuple(meth.get("results")),
                recv=types.Var(str(meth.get("recv", "")), recv_type, name),
            )
            typ.add_method(types.Func(mname, sig, name))
            tdoc.methods.append(
                FuncDoc(name=mname, doc=str(meth.get("doc", "")), recv=tname)
            )
        type_docs[tname] = tdoc
        pkg.scope.insert(types.TypeName(tname, typ, name))
    doc.types.extend(type_docs.values())

    for bucket in ("consts", "vars"):
        for entry in data.get(bucket) or []:
            _load_values(bucket, entry, pkg, doc, parser, type_docs)

    for entry in data.get("funcs") or []:
        fname = str(_require(entry, "name", "function"))
        sig = types.Signature(
            params=parser.parse_tuple(entry.get("params")),
            results=parser.parse_tuple(entry.get("results")),
        )
        pkg.scope.insert(types.Func(fname, sig, name))
        fdoc = FuncDoc(name=fname, doc=str(entry.get("doc", "")))
        owner = _result_type_name(entry.get("results"), parser)
        if owner in type_docs:
            type_docs[owner].funcs.append(fdoc)
        else:
            doc.funcs.append(fdoc)

    logger.debug(f"Loaded module {name}: {len(pkg.scope)} declaration(s)")
    return pkg, doc


def load_module(path: str | Path) -> tuple[types.Package, PackageDoc]:
    """Load a module description file.

    Args:
        path: YAML or JSON file

    Returns:
        Tuple of (module scope, documentation tree)

    Raises:
        ModuleLoadError: If the file cannot be read or is malformed
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ModuleLoadError(f"cannot load module description {path}: {e}") from e
    return build_module(data)
