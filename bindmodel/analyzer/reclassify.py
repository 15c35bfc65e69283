"""
Struct reclassification pass.

Runs once every top-level declaration has been classified. Free functions
returning exactly a struct type become constructors of that struct, and
each struct receives its exported method set along with the capabilities
those methods reveal.
"""

from collections.abc import Callable

from loguru import logger

from bindmodel.analyzer import models, types
from bindmodel.analyzer.callables import new_func
from bindmodel.analyzer.context import AnalysisContext
from bindmodel.analyzer.errors import DuplicateIdentityError, InternalAnalysisError


def is_stringer(method: types.Func) -> bool:
    """Check whether a method gives its receiver a textual representation.

    Args:
        method: Method declaration

    Returns:
        True for a no-argument ``String`` method returning a string
    """
    sig = method.signature
    if method.name != "String" or len(sig.params) != 0 or len(sig.results) != 1:
        return False
    ret = sig.results.at(0).type
    return isinstance(ret, types.BasicType) and ret.kind == "string"


# Capability -> predicate over a method declaration
CAPABILITY_DETECTORS: dict[models.Capability, Callable[[types.Func], bool]] = {
    models.Capability.STRINGER: is_stringer,
}


def extract_ctors(
    ctx: AnalysisContext,
    struct: models.Struct,
    funcs: dict[str, models.Func],
) -> None:
    """Move functions returning the struct type into its constructor list.

    Args:
        ctx: Current analysis
        struct: Struct receiving constructors
        funcs: Free functions not yet claimed, keyed by name; claimed
            entries are removed
    """
    for name in sorted(funcs):
        fct = funcs[name]
        if fct.ret is None or fct.ret is not struct.type:
            continue
        del funcs[name]
        if fct.obj is None:
            raise InternalAnalysisError(f"function {name} has no declaration")
        fct.id = ctx.make_id(struct.name, name)
        fct.doc = ctx.resolver.get_doc(fct.obj, struct.name)
        fct.ctor = True
        struct.ctors.append(fct)
        logger.debug(f"Reclassified {name} as constructor of {struct.name}")


def attach_methods(ctx: AnalysisContext, struct: models.Struct) -> None:
    """Attach the exported methods reachable through ``*T`` to the struct."""
    for sel in types.method_set(types.PointerType(struct.type)):
        meth = sel.obj
        if not meth.exported:
            continue
        struct.methods.append(new_func(ctx, struct.name, meth, sel.type))
        for capability, detect in CAPABILITY_DETECTORS.items():
            if detect(meth):
                struct.capabilities.add(capability)


def reclassify(
    ctx: AnalysisContext,
    pkg: models.Package,
    structs: dict[str, models.Struct],
    funcs: dict[str, models.Func],
) -> None:
    """Populate constructors and methods, then publish structs and functions.

    Args:
        ctx: Current analysis
        pkg: Model receiving the final structs and free functions
        structs: Classified structs keyed by name
        funcs: Classified free functions keyed by name, consumed in place
    """
    for name in sorted(structs):
        struct = structs[name]
        extract_ctors(ctx, struct, funcs)
        attach_methods(ctx, struct)
        logger.debug(
            f"Struct {struct.id}: {len(struct.ctors)} constructor(s), "
            f"{len(struct.methods)} method(s), "
            f"capabilities: {sorted(c.name for c in struct.capabilities)}"
        )
        pkg.add_struct(struct)

    for name in sorted(funcs):
        pkg.add_func(funcs[name])

    check_identities(pkg)


def _label(owner: models.Const | models.Var | models.Struct | models.Func) -> str:
    if isinstance(owner, models.Func) and owner.sig.recv is not None:
        return f"method ({owner.sig.recv.type}).{owner.name}"
    return f"{type(owner).__name__.lower()} {owner.name}"


def check_identities(pkg: models.Package) -> None:
    """Ensure no two entries of the model share an identity string.

    Raises:
        DuplicateIdentityError: Naming both entries of the first collision
    """
    owners: dict[str, models.Const | models.Var | models.Struct | models.Func] = {}
    for ident, owner in pkg.identities():
        first = owners.setdefault(ident, owner)
        if first is not owner:
            raise DuplicateIdentityError(
                f"identity {ident} is used by both {_label(first)} "
                f"and {_label(owner)}",
                owner.obj if isinstance(owner, models.Func) else None,
            )
