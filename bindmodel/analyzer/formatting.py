"""
Host-side type names.

Types are rendered with the vocabulary of the dynamically-typed host so that
synthesized signature lines in docstrings read naturally there.
"""

from bindmodel.analyzer.types import (
    BasicType,
    MapType,
    NamedType,
    PointerType,
    SliceType,
    Type,
)

# Basic type kind -> host type name
HOST_BASIC_NAMES: dict[str, str] = {
    "bool": "bool",
    "string": "str",
    "int": "int",
    "float": "float",
    "complex": "complex",
}


def host_type_name(typ: Type) -> str:
    """Render a semantic type as a host type name.

    Args:
        typ: Type to render

    Returns:
        Host type name, e.g. ``int``, ``str``, ``list[Point]``
    """
    if isinstance(typ, BasicType):
        return HOST_BASIC_NAMES.get(typ.kind, typ.name)
    if isinstance(typ, NamedType):
        return typ.name
    if isinstance(typ, PointerType):
        return host_type_name(typ.elem)
    if isinstance(typ, SliceType):
        return f"list[{host_type_name(typ.elem)}]"
    if isinstance(typ, MapType):
        return f"dict[{host_type_name(typ.key)}, {host_type_name(typ.value)}]"
    return str(typ)
