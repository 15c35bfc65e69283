"""
Exceptions raised while analyzing a module interface.

Two tiers are distinguished. ``BindError`` and its subclasses are
recoverable: they abort the analysis of the current module and are reported
to the caller. ``InternalAnalysisError`` and ``UnsupportedDeclarationError``
signal missing feature coverage and are not meant to be caught and retried.
"""

from typing import Any


def _describe(obj: Any) -> str:
    """Render a declaration the way error messages name it."""
    name = getattr(obj, "name", None)
    if name is None:
        return repr(obj)
    typ = getattr(obj, "type", None)
    package = getattr(obj, "package", None)
    qualified = f"{package}.{name}" if package else name
    if typ is None:
        return qualified
    kind = type(obj).__name__.lower()
    return f"{kind} {qualified} {typ}"


class BindError(Exception):
    """Exception raised when a declaration cannot be modeled.

    Examples:
        >>> raise BindError("second result value must be of type error", obj)
        BindError: second result value must be of type error: func geo.Div ...
    """

    def __init__(self, message: str, obj: Any | None = None):
        """Initialize the exception with a message and optional declaration.

        Args:
            message: The error message
            obj: Optional declaration the error is about
        """
        self.message = message
        self.obj = obj
        if obj is not None:
            super().__init__(f"{message}: {_describe(obj)}")
        else:
            super().__init__(message)


class InvalidDualReturnError(BindError):
    """Two results were declared but the second one is not ``error``."""


class TooManyResultsError(BindError):
    """More than two results were declared."""


class DuplicateIdentityError(BindError):
    """Two entries of the model were given the same identity string."""


class ModuleLoadError(BindError):
    """A module description file is malformed."""


class InternalAnalysisError(Exception):
    """Invariant violation inside the analyzer itself.

    Raised when a declaration kind reaches a component that does not know
    how to handle it.
    """


class UnsupportedDeclarationError(Exception):
    """One or more exported declarations have no binding model yet.

    Attributes:
        unsupported: The ``Unsupported`` records collected during analysis
    """

    def __init__(self, unsupported: list[Any]):
        self.unsupported = list(unsupported)
        listing = ", ".join(f"{u.name} ({u.reason})" for u in self.unsupported)
        super().__init__(f"not yet supported: {listing}")
