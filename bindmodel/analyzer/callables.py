"""
Callable model builder.

Turns a function or method declaration into a ``models.Func``: it resolves
the signature, classifies results under the value-plus-error convention and
attaches documentation.
"""

from loguru import logger

from bindmodel.analyzer import models, types
from bindmodel.analyzer.context import AnalysisContext
from bindmodel.analyzer.errors import InvalidDualReturnError, TooManyResultsError


def new_var(var: types.Var) -> models.Var:
    return models.Var(type=var.type, name=var.name)


def new_signature(sig: types.Signature) -> models.Signature:
    """Convert a semantic signature into its model counterpart."""
    return models.Signature(
        params=[new_var(v) for v in sig.params],
        results=[new_var(v) for v in sig.results],
        recv=new_var(sig.recv) if sig.recv is not None else None,
    )


def classify_results(
    obj: types.Object, sig: types.Signature
) -> tuple[types.Type | None, bool]:
    """Split declared results into a return type and an error flag.

    Args:
        obj: Declaration, used to name it in errors
        sig: Its signature

    Returns:
        Tuple of (return type or None, whether an error is returned)

    Raises:
        InvalidDualReturnError: If two results are declared and the second
            is not ``error``
        TooManyResultsError: If more than two results are declared
    """
    res = sig.results
    if len(res) == 0:
        return None, False
    if len(res) == 1:
        if types.is_error_type(res.at(0).type):
            return None, True
        return res.at(0).type, False
    if len(res) == 2:
        if not types.is_error_type(res.at(1).type):
            raise InvalidDualReturnError(
                "second result value must be of type error", obj
            )
        return res.at(0).type, True
    raise TooManyResultsError("too many results to return", obj)


def new_func(
    ctx: AnalysisContext,
    parent: str,
    obj: types.Func,
    sig: types.Signature | None = None,
) -> models.Func:
    """Build the model of a function or method.

    Args:
        ctx: Current analysis
        parent: Enclosing type name, "" for module scope
        obj: Function or method declaration
        sig: Signature to use, defaults to the declaration's own

    Returns:
        The callable model

    Raises:
        InvalidDualReturnError: See ``classify_results``
        TooManyResultsError: See ``classify_results``
    """
    sig = sig if sig is not None else obj.signature
    ret, has_err = classify_results(obj, sig)
    func = models.Func(
        id=ctx.make_id(parent, obj.name),
        name=obj.name,
        doc=ctx.resolver.get_doc(obj, parent),
        sig=new_signature(sig),
        ret=ret,
        err=has_err,
        obj=obj,
    )
    logger.debug(f"Collected callable: {func.id}, return: {ret}, error: {has_err}")
    return func


def new_const(ctx: AnalysisContext, obj: types.Const) -> models.Const:
    """Build the model of a constant and its zero-argument getter."""
    ident = ctx.make_id(obj.name)
    doc = ctx.resolver.get_doc(obj)
    ret = models.Var(type=obj.type, name="ret", doc=doc)
    getter = models.Func(
        id=f"{ctx.config.const_getter_prefix}{ident}",
        name=obj.name,
        doc=doc,
        sig=models.Signature(results=[ret]),
        ret=obj.type,
        err=False,
    )
    return models.Const(id=ident, name=obj.name, doc=doc, type=obj.type, getter=getter)


def new_package_var(ctx: AnalysisContext, obj: types.VarObject) -> models.Var:
    """Build the model of a package-level variable."""
    return models.Var(
        type=obj.type,
        name=obj.name,
        doc=ctx.resolver.get_doc(obj),
        id=ctx.make_id(obj.name),
    )
