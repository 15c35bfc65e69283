"""Plain-data rendering of a resolved package model."""

from typing import Any

from bindmodel.analyzer import models


def _type(typ: Any) -> str | None:
    return None if typ is None else str(typ)


def var_to_dict(var: models.Var) -> dict[str, Any]:
    return {"name": var.name, "type": _type(var.type)}


def func_to_dict(func: models.Func) -> dict[str, Any]:
    return {
        "id": func.id,
        "name": func.name,
        "doc": func.doc,
        "params": [var_to_dict(v) for v in func.sig.params],
        "results": [var_to_dict(v) for v in func.sig.results],
        "recv": var_to_dict(func.sig.recv) if func.sig.recv else None,
        "return": _type(func.ret),
        "error": func.err,
        "ctor": func.ctor,
    }


def package_to_dict(pkg: models.Package) -> dict[str, Any]:
    """Convert a package model into JSON-serializable data.

    Args:
        pkg: Resolved package model

    Returns:
        Nested dictionaries and lists mirroring the model
    """
    return {
        "name": pkg.name,
        "doc": pkg.doc,
        "consts": [
            {
                "id": c.id,
                "name": c.name,
                "doc": c.doc,
                "type": _type(c.type),
                "getter": c.getter.id,
            }
            for c in pkg.consts
        ],
        "vars": [
            {"id": v.id, "name": v.name, "doc": v.doc, "type": _type(v.type)}
            for v in pkg.vars
        ],
        "structs": [
            {
                "id": s.id,
                "name": s.name,
                "doc": s.doc,
                "fields": [var_to_dict(f) for f in s.fields],
                "ctors": [func_to_dict(f) for f in s.ctors],
                "methods": [func_to_dict(f) for f in s.methods],
                "capabilities": sorted(c.name.lower() for c in s.capabilities),
            }
            for s in pkg.structs
        ],
        "funcs": [func_to_dict(f) for f in pkg.funcs],
        "unsupported": [
            {"name": u.name, "kind": u.kind, "reason": u.reason}
            for u in pkg.unsupported
        ],
    }


def package_summary(pkg: models.Package) -> list[str]:
    """Render a short, line-oriented overview of a package model."""
    lines = [f"package {pkg.name}"]
    for const in pkg.consts:
        lines.append(f"  const {const.id} {const.type}")
    for var in pkg.vars:
        lines.append(f"  var {var.id} {var.type}")
    for struct in pkg.structs:
        caps = ", ".join(sorted(c.name.lower() for c in struct.capabilities))
        lines.append(f"  struct {struct.id}" + (f" [{caps}]" if caps else ""))
        for ctor in struct.ctors:
            lines.append(f"    ctor {ctor.id}")
        for meth in struct.methods:
            lines.append(f"    method {meth.id}")
    for func in pkg.funcs:
        lines.append(f"  func {func.id}")
    for item in pkg.unsupported:
        lines.append(f"  unsupported {item.name}: {item.reason}")
    return lines
