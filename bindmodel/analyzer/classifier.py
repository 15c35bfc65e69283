"""
Top-level walk over a module scope.

Each exported declaration is registered in the symbol table and dispatched
by kind: constants and variables go straight into the model, functions and
struct types are held back for the reclassification pass.
"""

from loguru import logger

from bindmodel.analyzer import models, types
from bindmodel.analyzer.callables import new_const, new_func, new_package_var
from bindmodel.analyzer.context import AnalysisContext
from bindmodel.analyzer.errors import UnsupportedDeclarationError
from bindmodel.analyzer.reclassify import reclassify


def new_struct(ctx: AnalysisContext, obj: types.TypeName) -> models.Struct:
    """Build the model of a struct type, without constructors or methods."""
    return models.Struct(
        id=ctx.make_id(obj.name),
        name=obj.name,
        doc=ctx.resolver.get_doc(obj),
        obj=obj,
    )


def _is_struct(obj: types.TypeName) -> bool:
    named = obj.type
    return (
        isinstance(named, types.NamedType)
        and named.name == obj.name
        and isinstance(named.base, types.StructType)
    )


def _unsupported(obj: types.Object) -> models.Unsupported:
    if isinstance(obj, types.TypeName):
        under = obj.type.underlying()
        if isinstance(obj.type, types.NamedType) and obj.type.name != obj.name:
            return models.Unsupported(
                name=obj.name, kind="type", reason=f"alias of {obj.type}"
            )
        return models.Unsupported(
            name=obj.name,
            kind="type",
            reason=f"underlying type {type(under).__name__} {under}",
        )
    return models.Unsupported(
        name=obj.name,
        kind=type(obj).__name__,
        reason=f"object kind {type(obj).__name__}",
    )


def process(ctx: AnalysisContext) -> models.Package:
    """Collect the public interface of the module under analysis.

    Args:
        ctx: Current analysis

    Returns:
        The resolved package model

    Raises:
        InvalidDualReturnError: If a callable returns two values and the
            second is not an error
        TooManyResultsError: If a callable returns more than two values
        DuplicateIdentityError: If two model entries share an identity string
        UnsupportedDeclarationError: In strict mode, if any exported
            declaration has no model
    """
    pkg = models.Package(name=ctx.name, doc=ctx.doc.doc)
    funcs: dict[str, models.Func] = {}
    structs: dict[str, models.Struct] = {}

    scope = ctx.pkg.scope
    for name in sorted(scope.names()):
        obj = scope.lookup(name)
        if obj is None or not obj.exported:
            continue

        ctx.syms.add_symbol(obj)

        if isinstance(obj, types.Const):
            pkg.add_const(new_const(ctx, obj))
            logger.debug(f"Collected constant: {name}, type: {obj.type}")

        elif isinstance(obj, types.VarObject):
            pkg.add_var(new_package_var(ctx, obj))
            logger.debug(f"Collected variable: {name}, type: {obj.type}")

        elif isinstance(obj, types.Func):
            funcs[name] = new_func(ctx, "", obj)

        elif isinstance(obj, types.TypeName) and _is_struct(obj):
            structs[name] = new_struct(ctx, obj)
            logger.debug(f"Collected struct: {name}")

        else:
            pkg.unsupported.append(_unsupported(obj))

    reclassify(ctx, pkg, structs, funcs)

    if ctx.config.trace_symbols:
        ctx.syms.dump(ctx.trace)

    if pkg.unsupported:
        for item in pkg.unsupported:
            logger.warning(f"Not yet supported: {item.name} ({item.reason})")
        if ctx.config.strict:
            raise UnsupportedDeclarationError(pkg.unsupported)

    logger.info(
        f"Analyzed {pkg.name}: {len(pkg.consts)} constant(s), "
        f"{len(pkg.vars)} variable(s), {len(pkg.structs)} struct(s), "
        f"{len(pkg.funcs)} function(s)"
    )
    return pkg
