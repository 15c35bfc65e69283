"""Tests for the struct reclassification pass."""

import pytest

from bindmodel.analyzer import models, types
from bindmodel.analyzer.callables import new_func
from bindmodel.analyzer.classifier import new_struct
from bindmodel.analyzer.config import AnalysisConfig
from bindmodel.analyzer.context import AnalysisContext
from bindmodel.analyzer.docs import PackageDoc
from bindmodel.analyzer.reclassify import (
    CAPABILITY_DETECTORS,
    extract_ctors,
    is_stringer,
    reclassify,
)

INT = types.BASIC_TYPES["int"]


def func(name, results=(), params=(), recv=None):
    return types.Func(
        name,
        types.Signature(
            params=types.Tuple(tuple(types.Var("", t, "shop") for t in params)),
            results=types.Tuple(tuple(types.Var("", t, "shop") for t in results)),
            recv=recv,
        ),
        "shop",
    )


@pytest.fixture
def ctx():
    return AnalysisContext(
        pkg=types.Package(name="shop"),
        doc=PackageDoc(name="shop"),
        config=AnalysisConfig(),
        trace=lambda line: None,
    )


@pytest.fixture
def item():
    return types.NamedType("Item", "shop", types.StructType())


class TestIsStringer:
    """Test cases for textual representation detection."""

    def test_string_method(self, item):
        recv = types.Var("i", item)
        assert is_stringer(func("String", results=[types.STRING], recv=recv))

    def test_wrong_shapes(self, item):
        recv = types.Var("i", item)
        assert not is_stringer(func("String", results=[INT], recv=recv))
        assert not is_stringer(
            func("String", results=[types.STRING], params=[INT], recv=recv)
        )
        assert not is_stringer(
            func("String", results=[types.STRING, types.ERROR_TYPE], recv=recv)
        )
        assert not is_stringer(func("Name", results=[types.STRING], recv=recv))

    def test_registry(self):
        assert CAPABILITY_DETECTORS[models.Capability.STRINGER] is is_stringer


class TestExtractCtors:
    """Test cases for constructor extraction."""

    def test_every_matching_function_becomes_a_constructor(self, ctx, item):
        # Arrange
        struct = new_struct(ctx, types.TypeName("Item", item, "shop"))
        funcs = {
            "NewItem": new_func(ctx, "", func("NewItem", results=[item])),
            "LoadItem": new_func(
                ctx, "", func("LoadItem", results=[item, types.ERROR_TYPE])
            ),
            "NewItemPtr": new_func(
                ctx, "", func("NewItemPtr", results=[types.PointerType(item)])
            ),
            "Count": new_func(ctx, "", func("Count", results=[INT])),
        }

        # Act
        extract_ctors(ctx, struct, funcs)

        # Assert
        assert [c.name for c in struct.ctors] == ["LoadItem", "NewItem"]
        assert [c.id for c in struct.ctors] == [
            "shop_Item_LoadItem",
            "shop_Item_NewItem",
        ]
        assert struct.ctors[0].err is True
        assert sorted(funcs) == ["Count", "NewItemPtr"]

    def test_constructor_claimed_once(self, ctx, item):
        # Arrange
        first = new_struct(ctx, types.TypeName("Item", item, "shop"))
        second = new_struct(ctx, types.TypeName("Item", item, "shop"))
        funcs = {"NewItem": new_func(ctx, "", func("NewItem", results=[item]))}

        # Act
        extract_ctors(ctx, first, funcs)
        extract_ctors(ctx, second, funcs)

        # Assert
        assert len(first.ctors) == 1
        assert second.ctors == []
        assert funcs == {}


class TestReclassify:
    """Test cases for the whole pass."""

    def test_structs_and_functions_are_published(self, ctx, item):
        # Arrange
        recv = types.Var("i", item)
        item.add_method(func("String", results=[types.STRING], recv=recv))
        item.add_method(func("price", results=[INT], recv=recv))
        structs = {"Item": new_struct(ctx, types.TypeName("Item", item, "shop"))}
        funcs = {
            "Total": new_func(ctx, "", func("Total", results=[INT])),
            "Clear": new_func(ctx, "", func("Clear")),
        }
        pkg = models.Package(name="shop")

        # Act
        reclassify(ctx, pkg, structs, funcs)

        # Assert
        assert [s.name for s in pkg.structs] == ["Item"]
        assert [m.id for m in pkg.structs[0].methods] == ["shop_Item_String"]
        assert pkg.structs[0].has(models.Capability.STRINGER)
        assert [f.name for f in pkg.funcs] == ["Clear", "Total"]
        assert pkg.lookup("Item") is pkg.structs[0]
        assert pkg.lookup("Total") is pkg.funcs[1]
